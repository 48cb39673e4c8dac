"""
Currency Holiday Service

Lookup collaborators that return the known holidays of a currency.
``None`` means "no holidays known" and is never an error; lookups that
cannot reach their source fail open and return ``None``.
"""

import logging
from abc import ABC, abstractmethod
from datetime import date
from typing import Dict, Any, Iterable, Optional, Set

import requests

from .exceptions import ConfigurationError


class CurrencyHolidayService(ABC):
    """Abstract interface for currency holiday lookups."""

    @abstractmethod
    def fetch_holidays(self, currency: str) -> Optional[Set[date]]:
        """Return the holidays of an ISO currency code, or None if unknown."""
        pass


class NoHolidayService(CurrencyHolidayService):
    """Holiday service that knows no holidays."""

    def fetch_holidays(self, currency: str) -> Optional[Set[date]]:
        return None


class StaticHolidayService(CurrencyHolidayService):
    """In-memory holiday calendar, typically loaded from configuration."""

    def __init__(self, holidays: Optional[Dict[str, Iterable[Any]]] = None):
        self.holidays: Dict[str, Set[date]] = {}
        for currency, dates in (holidays or {}).items():
            self.holidays[currency.upper()] = {_to_date(value) for value in dates}

    def fetch_holidays(self, currency: str) -> Optional[Set[date]]:
        dates = self.holidays.get(currency.upper())
        return set(dates) if dates is not None else None


class HttpCurrencyHolidayService(CurrencyHolidayService):
    """
    Holiday lookup against a REST calendar service.

    Expects ``GET {base_url}/{currency}`` to return a JSON list of ISO
    dates, or an object with a ``holidays`` list. Every request carries a
    bounded timeout; transport errors and malformed payloads are logged and
    reported as "no holidays known".
    """

    def __init__(self, base_url: str, timeout: float = 2.0,
                 headers: Optional[Dict[str, str]] = None,
                 session: Optional[requests.Session] = None):
        """
        Initialize the HTTP holiday service.

        Args:
            base_url: Calendar service root URL
            timeout: Per-request timeout in seconds
            headers: Extra request headers (e.g. API key)
            session: Optional shared requests session
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.headers = headers or {}
        self.session = session or requests.Session()
        self.logger = logging.getLogger(f"{__name__}.HttpCurrencyHolidayService")

    def fetch_holidays(self, currency: str) -> Optional[Set[date]]:
        url = f"{self.base_url}/{currency}"
        try:
            response = self.session.get(url, headers=self.headers, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as e:
            self.logger.warning(f"Holiday lookup failed for {currency}: {e}")
            return None
        except ValueError as e:
            self.logger.warning(f"Invalid holiday payload for {currency}: {e}")
            return None

        if isinstance(payload, dict):
            payload = payload.get('holidays')
        if not isinstance(payload, list):
            self.logger.warning(f"Unexpected holiday payload for {currency}: {type(payload).__name__}")
            return None

        try:
            return {_to_date(value) for value in payload}
        except (TypeError, ValueError) as e:
            self.logger.warning(f"Invalid holiday date for {currency}: {e}")
            return None

    def close(self) -> None:
        self.session.close()


def _to_date(value: Any) -> date:
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value))


def create_holiday_service(config: Optional[Dict[str, Any]]) -> CurrencyHolidayService:
    """
    Build a holiday service from the ``holiday_service`` config section.

    Supported providers: ``none`` (default), ``static`` and ``http``.
    """
    config = config or {}
    provider = str(config.get('provider', 'none')).lower()

    if provider == 'static':
        return StaticHolidayService(config.get('holidays') or {})
    if provider == 'http':
        if not config.get('base_url'):
            raise ConfigurationError("holiday_service.base_url is required for the http provider")
        return HttpCurrencyHolidayService(
            base_url=config['base_url'],
            timeout=float(config.get('timeout', 2.0)),
            headers=config.get('headers'),
        )
    if provider == 'none':
        return NoHolidayService()

    raise ConfigurationError(f"Unsupported holiday service provider: {provider}")
