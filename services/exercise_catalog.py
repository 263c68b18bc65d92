from __future__ import annotations

import json
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

# Candidate exercises per affected body area (placeholder content until an external
# content generator replaces it).
DEFAULT_REGIONS: dict[str, list[str]] = {
    "back": [
        "Ασκήσεις σταθεροποίησης κορμού",
        "Διατάσεις οσφυϊκής μοίρας",
        "Ενδυνάμωση ραχιαίων μυών",
    ],
    "knee": [
        "Ισομετρικές ασκήσεις τετρακεφάλου",
        "Ασκήσεις εύρους κίνησης γόνατος",
        "Ενδυνάμωση τετρακεφάλου",
    ],
    "shoulder": [
        "Ασκήσεις κινητικότητας ώμου",
        "Ασκήσεις σταθεροποίησης ωμοπλάτης",
        "Ενδυνάμωση στροφικού πετάλου",
    ],
    "neck": [
        "Ισομετρικές ασκήσεις αυχένα",
        "Διατάσεις αυχενικών μυών",
        "Ασκήσεις κινητικότητας αυχένα",
    ],
    "ankle": [
        "Ασκήσεις κινητικότητας ποδοκνημικής",
        "Ασκήσεις ιδιοδεκτικότητας",
        "Ενδυνάμωση περονιαίων",
    ],
    "hip": [
        "Ασκήσεις κινητικότητας ισχίου",
        "Ενδυνάμωση απαγωγών",
        "Διατάσεις καμπτήρων ισχίου",
    ],
}

# Low-intensity fallback for "general" or unknown areas.
DEFAULT_EXERCISES: list[str] = [
    "Ήπιες διατάσεις",
    "Ασκήσεις αναπνοής και χαλάρωσης",
    "Ασκήσεις κινητικότητας χαμηλής έντασης",
]

DEFAULT_SOURCES: list[str] = ["Physiotutors", "Prehab Guys", "Adam Meakins"]


@dataclass(frozen=True)
class ExerciseCatalog:
    regions: dict[str, list[str]] = field(default_factory=lambda: dict(DEFAULT_REGIONS))
    default: list[str] = field(default_factory=lambda: list(DEFAULT_EXERCISES))
    sources: list[str] = field(default_factory=lambda: list(DEFAULT_SOURCES))

    def exercises_for(self, area: str | None) -> list[str]:
        key = (area or "").strip().lower()
        return self.regions.get(key) or self.default


def load_catalog(path: str | Path) -> ExerciseCatalog:
    """
    Load a catalog from JSON:
        {"regions": {"knee": ["..."]}, "default": ["..."], "sources": ["..."]}
    Missing keys fall back to the built-in table.
    """
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"exercise catalog {path} must be a JSON object")

    regions = data.get("regions", DEFAULT_REGIONS)
    default = data.get("default", DEFAULT_EXERCISES)
    sources = data.get("sources", DEFAULT_SOURCES)

    if not isinstance(regions, dict) or not all(
        isinstance(v, list) and v and all(isinstance(n, str) and n.strip() for n in v) for v in regions.values()
    ):
        raise ValueError("catalog 'regions' must map area names to non-empty lists of exercise names")
    if not isinstance(default, list) or not default:
        raise ValueError("catalog 'default' must be a non-empty list")
    if not isinstance(sources, list) or not sources:
        raise ValueError("catalog 'sources' must be a non-empty list")

    return ExerciseCatalog(
        regions={str(k).strip().lower(): list(v) for k, v in regions.items()},
        default=list(default),
        sources=list(sources),
    )


@lru_cache(maxsize=None)
def get_catalog(path: str | None = None) -> ExerciseCatalog:
    """Catalog for a path, read once per process. Call get_catalog.cache_clear() to reload."""
    return load_catalog(path) if path else ExerciseCatalog()
