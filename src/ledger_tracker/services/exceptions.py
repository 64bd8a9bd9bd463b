class LedgerError(Exception):
    """Base class for errors reported to the user by ledger operations."""
    pass

class ValidationError(LedgerError):
    """Raised when the add-transaction form is missing or has invalid fields."""

    def __init__(self, message: str, field: str = ""):
        super().__init__(message)
        self.field = field

class EmptyLedgerError(LedgerError):
    """Raised when an operation needs transactions but the ledger is empty."""
    pass

class WorkbookReadError(LedgerError):
    """Raised when an imported workbook can't be read or decoded."""
    pass

class WorkbookWriteError(LedgerError):
    """Raised when an exported workbook can't be written."""
    pass

class CorruptLedgerError(LedgerError):
    """Raised when stored ledger records can't be turned back into transactions."""
    pass

class ConfigurationError(LedgerError):
    """Raised when settings name an unsupported locale or currency."""
    pass
