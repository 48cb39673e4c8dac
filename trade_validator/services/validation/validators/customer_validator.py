"""
Customer Validator
"""

from typing import Any, FrozenSet, Optional

from ....core.models import Trade, ValidationResult
from ....core.validator import TradeValidator
from .utils import parse_name_set


DEFAULT_CUSTOMERS = frozenset({"PLUTO1", "PLUTO2"})


class CustomerValidator(TradeValidator):
    """Accepts only supported customers."""

    def __init__(self, customers: Optional[Any] = None):
        super().__init__()
        self._customers = DEFAULT_CUSTOMERS if customers is None else parse_name_set(customers)

    @property
    def customers(self) -> FrozenSet[str]:
        return self._customers

    @customers.setter
    def customers(self, value: Any) -> None:
        with self._config_lock:
            self._customers = parse_name_set(value)

    def evaluate(self, trade: Trade) -> ValidationResult:
        result = ValidationResult()

        if trade.customer not in self._customers:
            self.logger.warning(f"Customer {trade.customer!r} is not supported for trade {trade}")
            result.with_error('customer', "Customer is not supported")

        return result

    def load_valid_customers(self, value: str) -> FrozenSet[str]:
        """Replace the supported customers from a comma separated list."""
        self.customers = value
        self.logger.info(f"Valid customers loaded: {sorted(self._customers)}")
        return self._customers
