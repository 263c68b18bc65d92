from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_name: str = "RehabWeek"
    env: str = "dev"
    api_prefix: str = "/api"

    database_url: str = "sqlite+aiosqlite:///./rehabweek.db"
    seed_demo_data: bool = True

    frontend_origin: str = "http://localhost:8080"

    log_level: str = "INFO"
    log_file: str | None = None

    # Program generation knobs (placeholder content, see services/program_generator.py)
    exercises_per_day_min: int = 2
    exercises_per_day_max: int = 3
    rest_day_factor: float = 0.8
    pain_factor_floor: float = 0.4
    generator_seed: int | None = None
    exercise_catalog_path: str | None = None


settings = Settings()
