"""
Validation Core Exceptions

Field-level findings are data and never raised; these exceptions cover
request-level rejections and programming or configuration errors.
"""

from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .models import TradeValidationOutcome


class TradeValidatorError(Exception):
    """Base class for all trade validator errors."""


class ShutdownRejectedError(TradeValidatorError):
    """
    Raised when validation work is refused because shutdown was requested.

    For bulk requests, ``outcomes`` holds one entry per submitted trade:
    the outcome for trades that had already started, ``None`` for the
    trades that were rejected. A rejected single-trade request carries no
    outcomes.
    """

    def __init__(self, message: str = "Validation service is shutting down",
                 outcomes: Optional[List[Optional["TradeValidationOutcome"]]] = None):
        super().__init__(message)
        self.outcomes = outcomes

    @property
    def rejected_count(self) -> Optional[int]:
        """Number of rejected trades in a bulk request, None for single requests."""
        if self.outcomes is None:
            return None
        return sum(1 for outcome in self.outcomes if outcome is None)


class RuleRegistrationError(TradeValidatorError):
    """Raised when a rule cannot be added to the registry."""


class ConfigurationError(TradeValidatorError):
    """Raised when a configuration value cannot be applied."""
