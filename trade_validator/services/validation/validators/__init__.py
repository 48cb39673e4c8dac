"""
Business Rules

Each module implements one independent ``TradeValidator``.
"""

from .currency_validator import CurrencyValidator
from .customer_validator import CustomerValidator
from .date_order_validator import DateOrderValidator
from .legal_entity_validator import LegalEntityValidator
from .option_validator import OptionValidator
from .spot_forward_validator import SpotForwardValidator
from .weekend_validator import WeekendValidator

__all__ = [
    'CurrencyValidator',
    'CustomerValidator',
    'DateOrderValidator',
    'LegalEntityValidator',
    'OptionValidator',
    'SpotForwardValidator',
    'WeekendValidator',
]
