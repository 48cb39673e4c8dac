"""
Trade Validator Contract

Every business rule implements ``TradeValidator``. Rules are read-only
consumers of the trade and must be safe to call from several worker
threads at once.
"""

import logging
import threading
from abc import ABC, abstractmethod

from .models import Trade, ValidationResult


class TradeValidator(ABC):
    """
    Abstract interface for trade validation rules.

    ``evaluate`` must always return a result (possibly empty) and must not
    raise for malformed trade data; missing or invalid fields are reported
    as errors. A check that cannot run because a collaborator is
    unavailable is skipped (no error) and logged.
    """

    def __init__(self):
        self.logger = logging.getLogger(f"{self.__module__}.{type(self).__name__}")
        # Guards runtime reconfiguration; evaluate only reads immutable values.
        self._config_lock = threading.Lock()

    @property
    def name(self) -> str:
        """Registry key of the rule."""
        return type(self).__name__

    @abstractmethod
    def evaluate(self, trade: Trade) -> ValidationResult:
        """Run the rule against a trade."""
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
