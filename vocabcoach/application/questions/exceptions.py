"""
Errors reported by the session tracker.

None of these are raised out of the tracker. They are returned inside a
Failure and handed to the tracker's error sink, so callers can inspect them
while the session carries on.
"""


class TrackingError(Exception):
    """Base class for tracker persistence errors."""

    def __init__(self, message: str, operation: str) -> None:
        self.message = message
        self.operation = operation
        super().__init__(message)


class MissingIdentityError(TrackingError):
    """No signed-in user or no active session; the operation did nothing."""

    def __init__(self, operation: str, missing: str) -> None:
        super().__init__(f"Cannot {operation}: no {missing}", operation)
        self.missing = missing


class ResponseSerializationError(TrackingError):
    """A response could not be encoded for storage and was skipped."""

    def __init__(self, operation: str, question_number: int, reason: str) -> None:
        super().__init__(
            f"Response for question {question_number} could not be serialized: {reason}",
            operation,
        )
        self.question_number = question_number
        self.reason = reason


class RemoteWriteError(TrackingError):
    """The document store rejected a write or a batch."""

    def __init__(
        self,
        operation: str,
        reason: str,
        skipped: list[ResponseSerializationError] | None = None,
    ) -> None:
        super().__init__(f"Remote write failed during {operation}: {reason}", operation)
        self.reason = reason
        self.skipped = skipped or []
