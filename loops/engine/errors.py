class InvariantViolation(AssertionError):
    """Raised when a caller breaks an engine invariant (programming error)."""


class SnapshotError(ValueError):
    """Raised when persisted level data does not validate."""


def check(condition: bool, message: str = "invariant violated"):
    """Fail fast when an engine invariant does not hold"""
    if not condition:
        raise InvariantViolation(message)
