class RehabError(Exception):
    """Base class for errors surfaced by the program pipeline."""


class ValidationError(RehabError):
    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class UpstreamFetchError(RehabError):
    pass


class NotFoundError(UpstreamFetchError):
    pass


class StorageError(RehabError):
    """
    A write against the store failed.

    phase: "program" (header insert, nothing to undo) or "exercises" (batch insert).
    compensation: None when no rollback was attempted, else "succeeded" | "failed".
    """

    def __init__(
        self,
        phase: str,
        message: str,
        compensation: str | None = None,
        conflict: bool = False,
    ):
        text = f"{phase} insert failed: {message}"
        if compensation == "succeeded":
            text += " (program header removed)"
        elif compensation == "failed":
            text += " (program header removal failed, orphaned header may remain)"
        super().__init__(text)
        self.phase = phase
        self.compensation = compensation
        self.conflict = conflict

    @property
    def orphan_possible(self) -> bool:
        return self.compensation == "failed"
