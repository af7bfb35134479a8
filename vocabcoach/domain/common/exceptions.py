"""
Domain exceptions.

Raised when a question session is asked to do something its rules forbid.
Routers translate them into HTTP errors; the domain never catches them.
"""


class DomainError(Exception):
    """Base for every error raised by the domain layer."""

    def __init__(self, message: str, details: dict[str, object] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if not self.details:
            return self.message
        return f"{self.message} - {self.details}"


class ValidationError(DomainError):
    """A value is out of its allowed range, e.g. a score above 1."""

    def __init__(self, message: str, field: str | None = None, value: object = None) -> None:
        details: dict[str, object] = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = value
        super().__init__(message, details)
        self.field = field
        self.value = value


class BusinessRuleViolationError(DomainError):
    """The operation is not allowed in the session's current state."""

    def __init__(self, rule: str, message: str | None = None) -> None:
        super().__init__(message or f"Business rule violated: {rule}", {"rule": rule})
        self.rule = rule


class InvariantViolationError(DomainError):
    """The change would leave the aggregate inconsistent."""

    def __init__(self, aggregate: str, invariant: str) -> None:
        super().__init__(
            f"Invariant violation in {aggregate}: {invariant}",
            {"aggregate": aggregate, "invariant": invariant},
        )
        self.aggregate = aggregate
        self.invariant = invariant
