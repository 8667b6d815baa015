# src/seasonchain/exceptions.py

class SeasonChainError(Exception):
    """Base exception class for season simulator errors"""
    pass

class ConfigurationError(SeasonChainError):
    """Raised when configuration values are invalid"""
    pass

class EmissionsError(SeasonChainError):
    """Base exception class for emission accounting errors"""
    pass

class OverEmissionError(EmissionsError):
    """Raised when an unclipped amount would push emission past the total"""
    pass

class ChainError(SeasonChainError):
    """Base exception class for chain state errors"""
    pass

class BlockNotFoundError(ChainError):
    """Raised when a block is not in the recent block buffer"""
    pass

class LedgerError(SeasonChainError):
    """Base exception class for ledger operations"""
    pass

class InsufficientBalanceError(LedgerError):
    """Raised when a participant cannot afford a purchase or repair"""

    def __init__(self, required: float, current: float):
        super().__init__(f"Insufficient balance: required {required}, current {current}")
        self.required = required
        self.current = current

class UnknownRigTierError(LedgerError):
    """Raised when a rig tier id is not known"""
    pass

class RigNotFoundError(LedgerError):
    """Raised when a participant does not own the requested rig"""
    pass

class DuplicateRequestError(LedgerError):
    """Raised when an idempotency key was already processed"""
    pass
