"""
Validation Admin

Administrative operations for a running validation service: rule
settings, rule set management and shutdown control. Transport (HTTP,
management console) is left to the caller.
"""

import logging
from datetime import date
from typing import Dict, Any, FrozenSet, Iterable, List, Optional, Type, TypeVar

from ...core.exceptions import ConfigurationError
from ...core.validator import TradeValidator
from .trade_validation_service import TradeValidationService
from .validators import CustomerValidator, LegalEntityValidator, SpotForwardValidator


R = TypeVar('R', bound=TradeValidator)


class ValidationAdmin:
    """Management surface over a ``TradeValidationService``."""

    def __init__(self, service: TradeValidationService):
        self.service = service
        self.registry = service.registry
        self.logger = logging.getLogger(f"{__name__}.ValidationAdmin")

    def _rule(self, rule_type: Type[R]) -> R:
        for rule in self.registry.list():
            if isinstance(rule, rule_type):
                return rule
        raise ConfigurationError(f"No {rule_type.__name__} registered")

    # Rule settings

    def get_legal_entities(self) -> FrozenSet[str]:
        return self._rule(LegalEntityValidator).legal_entities

    def set_legal_entities(self, value: str) -> FrozenSet[str]:
        """Replace allowed legal entities from a comma separated list."""
        return self._rule(LegalEntityValidator).load_valid_legal_entities(value)

    def get_customers(self) -> FrozenSet[str]:
        return self._rule(CustomerValidator).customers

    def set_customers(self, value: str) -> FrozenSet[str]:
        """Replace supported customers from a comma separated list."""
        return self._rule(CustomerValidator).load_valid_customers(value)

    def get_reference_date(self) -> date:
        return self._rule(SpotForwardValidator).reference_date

    def set_reference_date(self, value: Any) -> date:
        rule = self._rule(SpotForwardValidator)
        rule.reference_date = value
        return rule.reference_date

    # Rule set

    def list_rules(self) -> List[str]:
        return self.registry.names()

    def register_rule(self, rule: TradeValidator) -> None:
        self.registry.register(rule)

    def replace_rule(self, rule: TradeValidator) -> Optional[TradeValidator]:
        return self.registry.replace(rule)

    def replace_rules(self, rules: Iterable[TradeValidator]) -> List[str]:
        self.registry.replace_all(rules)
        return self.registry.names()

    # Shutdown control

    def request_shutdown(self) -> bool:
        self.service.request_shutdown()
        return self.service.is_shutdown_requested()

    def cancel_shutdown(self) -> bool:
        self.service.cancel_shutdown()
        return self.service.is_shutdown_requested()

    def is_shutdown_requested(self) -> bool:
        return self.service.is_shutdown_requested()

    def get_status(self) -> Dict[str, Any]:
        status = self.service.get_status()
        reference_date = self._optional(self.get_reference_date)
        status['settings'] = {
            'legal_entities': sorted(self._optional(self.get_legal_entities) or []),
            'customers': sorted(self._optional(self.get_customers) or []),
            'reference_date': reference_date.isoformat() if reference_date else None,
        }
        return status

    @staticmethod
    def _optional(getter):
        try:
            return getter()
        except ConfigurationError:
            return None
