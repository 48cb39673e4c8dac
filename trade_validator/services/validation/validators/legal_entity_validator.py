"""
Legal Entity Validator

Only trades booked against an allowed legal entity are accepted.
"""

from typing import Any, FrozenSet, Optional

from ....core.models import Trade, ValidationResult
from ....core.validator import TradeValidator
from .utils import parse_name_set


DEFAULT_LEGAL_ENTITIES = frozenset({"CS Zurich"})


class LegalEntityValidator(TradeValidator):
    """Checks the trade's legal entity against a configurable allowed set."""

    def __init__(self, legal_entities: Optional[Any] = None):
        super().__init__()
        if legal_entities is None:
            self._legal_entities = DEFAULT_LEGAL_ENTITIES
        else:
            self._legal_entities = parse_name_set(legal_entities)

    @property
    def legal_entities(self) -> FrozenSet[str]:
        return self._legal_entities

    @legal_entities.setter
    def legal_entities(self, value: Any) -> None:
        with self._config_lock:
            self._legal_entities = parse_name_set(value)

    def evaluate(self, trade: Trade) -> ValidationResult:
        result = ValidationResult()

        if trade.legal_entity not in self._legal_entities:
            self.logger.warning(f"Legal entity {trade.legal_entity!r} is invalid for trade {trade}")
            result.with_error('legalEntity', "Legal entity is invalid")

        return result

    def load_valid_legal_entities(self, value: str) -> FrozenSet[str]:
        """
        Replace the allowed legal entities.

        Args:
            value: Comma separated list

        Returns:
            The new allowed set
        """
        self.legal_entities = value
        self.logger.info(f"Valid legal entities loaded: {sorted(self._legal_entities)}")
        return self._legal_entities
