"""Domain layer errors."""

from dataclasses import dataclass

from pydantic import ValidationError as PydanticValidationError


@dataclass(frozen=True)
class FieldError:
    """A single invalid input field."""

    field: str
    message: str


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Malformed or out-of-range input.

    Carries a list of per-field problems so the interface layer can report
    every invalid field at once.
    """

    def __init__(self, message: str, details: list[FieldError] | None = None):
        self.message = message
        self.details = details or []
        super().__init__(message)

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        """Build a validation error for a single field."""
        return cls("Validation failed", [FieldError(field=field, message=message)])

    @classmethod
    def from_pydantic(
        cls, exc: PydanticValidationError, aliases: dict[str, str] | None = None
    ) -> "ValidationError":
        """Convert a pydantic validation error into a domain validation error.

        Args:
            exc: Pydantic error raised while building a model
            aliases: Optional mapping from model field names to public names

        Returns:
            Domain validation error with one detail per failed field
        """
        aliases = aliases or {}
        details = []
        for error in exc.errors():
            loc = [str(part) for part in error["loc"] if part not in ("body", "query")]
            field = ".".join(loc) if loc else "__root__"
            head = loc[0] if loc else field
            if head in aliases:
                field = ".".join([aliases[head], *loc[1:]])
            details.append(FieldError(field=field, message=error["msg"]))
        return cls("Validation failed", details)


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str | int):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ConflictError(DomainError):
    """Raised when a write collides with a uniqueness rule.

    Duplicate category names and slug races that survive the retry budget end
    up here.
    """

    pass


class NotAuthorizedError(DomainError):
    """Raised when a request carries no valid admin session."""

    def __init__(self, reason: str = "Authentication required"):
        self.reason = reason
        super().__init__(reason)
