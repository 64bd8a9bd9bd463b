"""
Locale-aware display formatting for amounts and dates.

Only a fixed set of locales and currencies is recognized; both are
picked through configuration.
"""
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Union

from ledger_tracker.services.exceptions import ConfigurationError

MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
          "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

@dataclass(frozen=True)
class LocaleProfile:
    """How a locale groups digits and writes a short date"""
    code: str
    grouping: str # "standard" (1,000,000) or "indian" (10,00,000)
    date_pattern: str

LOCALES: Dict[str, LocaleProfile] = {
    "en-IN": LocaleProfile("en-IN", "indian", "{day} {month} {year}"),
    "en-US": LocaleProfile("en-US", "standard", "{month} {day}, {year}"),
    "en-GB": LocaleProfile("en-GB", "standard", "{day} {month} {year}"),
}

CURRENCY_SYMBOLS: Dict[str, str] = {
    "INR": "₹",
    "USD": "$",
    "GBP": "£",
    "EUR": "€",
}

class CurrencyFormatter:
    """Formats money and dates for one locale/currency pair."""

    def __init__(self, locale: str = "en-IN", currency: str = "INR"):
        if locale not in LOCALES:
            raise ConfigurationError(
                f"Unsupported locale '{locale}'. "
                f"Available locales: {', '.join(LOCALES)}"
            )
        if currency not in CURRENCY_SYMBOLS:
            raise ConfigurationError(
                f"Unsupported currency '{currency}'. "
                f"Available currencies: {', '.join(CURRENCY_SYMBOLS)}"
            )
        self.profile = LOCALES[locale]
        self.currency = currency
        self.symbol = CURRENCY_SYMBOLS[currency]

    def format(self, amount: Union[Decimal, int, float]) -> str:
        """Format an amount with currency symbol, grouping and two decimals"""
        value = Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
        sign = "-" if value < 0 else ""
        whole, _, fraction = f"{abs(value):.2f}".partition(".")
        return f"{sign}{self.symbol}{self._group(whole)}.{fraction}"

    def format_signed(self, amount: Union[Decimal, int, float], income: bool) -> str:
        """Format a magnitude with an explicit +/- prefix"""
        return ("+" if income else "-") + self.format(abs(Decimal(str(amount))))

    def format_date(self, value: Union[date, datetime, str]) -> str:
        """
        Render a date the way the locale shows a short date.

        Args:
            value: A date/datetime, or an ISO 'YYYY-MM-DD' string

        Raises:
            ValueError: If a string isn't an ISO date
        """
        if isinstance(value, datetime):
            value = value.date()
        elif isinstance(value, str):
            value = date.fromisoformat(value.strip()[:10])

        return self.profile.date_pattern.format(
            day=value.day,
            month=MONTHS[value.month - 1],
            year=value.year,
        )

    def today(self) -> str:
        return self.format_date(date.today())

    def _group(self, digits: str) -> str:
        if self.profile.grouping == "indian" and len(digits) > 3:
            head, tail = digits[:-3], digits[-3:]
            pairs = []
            while len(head) > 2:
                pairs.insert(0, head[-2:])
                head = head[:-2]
            if head:
                pairs.insert(0, head)
            return ",".join(pairs + [tail])
        return f"{int(digits):,}"
