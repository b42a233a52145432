"""Custom exception hierarchy for bank-ledger."""


class LedgerError(Exception):
    """Base exception for all bank-ledger errors."""


class AccountNotFoundError(LedgerError):
    """Raised when an account number is not in the account store."""


class ReferentialIntegrityError(AccountNotFoundError):
    """Raised when a transaction references an account that does not exist."""


class DuplicateAccountError(LedgerError):
    """Raised when an account number is already in use."""


class InvalidAmountError(LedgerError):
    """Raised when a monetary amount is not acceptable for the operation."""


class InsufficientFundsError(InvalidAmountError):
    """Raised when the balance does not cover the requested amount."""


class InvalidTransferError(LedgerError):
    """Raised when a transfer is structurally invalid."""


class PolicyViolationError(LedgerError):
    """Raised when an operation breaks an account policy."""


class MinimumDepositError(PolicyViolationError):
    """Raised when an initial deposit is below the minimum for the account type."""


class WithdrawalLimitError(PolicyViolationError):
    """Raised when a savings account has used up its withdrawals."""


class NonZeroBalanceError(PolicyViolationError):
    """Raised when closing an account that still holds funds."""


class PersistenceError(LedgerError):
    """Raised when reading or writing ledger files fails."""


class ConfigurationError(LedgerError):
    """Raised when configuration is invalid or missing."""
