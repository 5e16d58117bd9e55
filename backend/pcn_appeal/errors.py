"""Error types raised by the appeal engine.

ValidationError and AmbiguousInputError are recovered inside a turn and turned
into a corrective prompt. ExternalCollaboratorFailure is shown to the user as a
retryable notice. DataIntegrityViolation means the stage table is wrong and is
never caught by the engine.
"""


class AppealError(Exception):
    """Base class for every error raised by this package."""


class ValidationError(AppealError):
    """User input for the current field could not be validated."""

    def __init__(self, prompt: str) -> None:
        super().__init__(prompt)
        self.prompt = prompt


class AmbiguousInputError(ValidationError):
    """Input matched none, or more than one, of an enumerated set of options."""

    def __init__(self, prompt: str, options: list[str] | None = None) -> None:
        super().__init__(prompt)
        self.options = options or []


class ExternalCollaboratorFailure(AppealError):
    """A submission, rendering or extraction call failed."""

    def __init__(self, collaborator: str, detail: str) -> None:
        super().__init__(f"{collaborator} failed: {detail}")
        self.collaborator = collaborator
        self.detail = detail


class DataIntegrityViolation(AppealError):
    """An internal invariant of the case record or stage table was broken."""


class SessionNotFound(AppealError):
    pass


class CalibrationError(AppealError):
    pass
