# exceptions.py
class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when form input violates a shift or settings rule."""


class NotFound(DomainError):
    """Raised when a shift id does not exist in the ledger."""

    def __init__(self, record_id: str):
        super().__init__(f"Shift record not found: {record_id}")
        self.record_id = record_id
