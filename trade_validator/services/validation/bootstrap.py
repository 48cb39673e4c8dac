"""
Validation Bootstrap

Builds the rule registry and the validation service from configuration.
Rules are constructed explicitly, one per ``validators`` section.
"""

import logging
from typing import Dict, Any, Callable, List, Optional

from ...core.holiday_service import CurrencyHolidayService, create_holiday_service
from ...core.registry import RuleRegistry
from ...core.validator import TradeValidator
from ...configs import load_validators_config, get_validator_config
from .trade_validation_service import TradeValidationService
from .validators import (
    CurrencyValidator,
    CustomerValidator,
    DateOrderValidator,
    LegalEntityValidator,
    OptionValidator,
    SpotForwardValidator,
    WeekendValidator,
)


logger = logging.getLogger(__name__)


def _currency(settings: Dict[str, Any], holiday_service: CurrencyHolidayService) -> TradeValidator:
    return CurrencyValidator(holiday_service=holiday_service, currency_codes=settings.get('currency_codes'))


def _legal_entity(settings: Dict[str, Any], holiday_service: CurrencyHolidayService) -> TradeValidator:
    return LegalEntityValidator(settings.get('legal_entities'))


def _customer(settings: Dict[str, Any], holiday_service: CurrencyHolidayService) -> TradeValidator:
    return CustomerValidator(settings.get('customers'))


def _spot_forward(settings: Dict[str, Any], holiday_service: CurrencyHolidayService) -> TradeValidator:
    return SpotForwardValidator(
        reference_date=settings.get('reference_date') or None,
        spot_days=settings.get('spot_days', 2)
    )


def _option(settings: Dict[str, Any], holiday_service: CurrencyHolidayService) -> TradeValidator:
    return OptionValidator(
        european_styles=settings.get('european_styles'),
        american_styles=settings.get('american_styles'),
        option_types=settings.get('option_types'),
        excercise_start_inclusive_lower=settings.get('excercise_start_inclusive_lower', True),
        excercise_start_inclusive_upper=settings.get('excercise_start_inclusive_upper', True)
    )


def _weekend(settings: Dict[str, Any], holiday_service: CurrencyHolidayService) -> TradeValidator:
    return WeekendValidator(settings.get('weekend_days'))


def _date_order(settings: Dict[str, Any], holiday_service: CurrencyHolidayService) -> TradeValidator:
    return DateOrderValidator()


# Registration order; within a field, messages follow this order
RULE_FACTORIES: Dict[str, Callable[[Dict[str, Any], CurrencyHolidayService], TradeValidator]] = {
    'currency': _currency,
    'legal_entity': _legal_entity,
    'customer': _customer,
    'spot_forward': _spot_forward,
    'option': _option,
    'weekend': _weekend,
    'date_order': _date_order,
}


def build_rules(config: Dict[str, Any],
                holiday_service: Optional[CurrencyHolidayService] = None) -> List[TradeValidator]:
    """
    Construct every enabled rule.

    Args:
        config: Validators configuration
        holiday_service: Holiday lookup; built from config if omitted

    Returns:
        Rules in registration order
    """
    if holiday_service is None:
        holiday_service = create_holiday_service(config.get('holiday_service'))

    rules = []
    for key, factory in RULE_FACTORIES.items():
        settings = get_validator_config(key, config)
        if not settings.get('enabled', True):
            logger.info(f"Rule {key} disabled by configuration")
            continue
        rules.append(factory(settings, holiday_service))

    return rules


def build_default_registry(config: Optional[Dict[str, Any]] = None,
                           holiday_service: Optional[CurrencyHolidayService] = None) -> RuleRegistry:
    """Build a registry holding all configured rules."""
    if config is None:
        config = load_validators_config()

    registry = RuleRegistry(build_rules(config, holiday_service))
    logger.info(f"Rule registry built: {', '.join(registry.names())}")
    return registry


def create_validation_service(config: Optional[Dict[str, Any]] = None,
                              holiday_service: Optional[CurrencyHolidayService] = None) -> TradeValidationService:
    """
    Build a ready-to-use validation service.

    Args:
        config: Validators configuration; loaded from validators.yaml if omitted
        holiday_service: Holiday lookup override

    Returns:
        Configured validation service
    """
    if config is None:
        config = load_validators_config()

    service_config = config.get('service') or {}
    registry = build_default_registry(config, holiday_service)

    return TradeValidationService(
        registry,
        rule_workers=int(service_config.get('rule_workers', 8)),
        bulk_workers=int(service_config.get('bulk_workers', 4)),
        service_name=service_config.get('name', 'trade_validation_service')
    )
