from enum import Enum
from typing import Optional

class TransactionType(Enum):
    """Represents whether money is coming in or out"""
    INCOME = "income" # in
    EXPENSE = "expense" # out

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["TransactionType"]:
        """Case-insensitive lookup, None when the value isn't recognized"""
        if value is None:
            return None
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None

class Category(Enum):
    """
    Fixed category table with the icon shown for each entry.

    Each member carries the web icon name and a terminal glyph used
    by the console dashboard.
    """
    SALARY = ("salary", "fa-money-bill", "💵")
    FREELANCE = ("freelance", "fa-laptop", "💻")
    INVESTMENT = ("investment", "fa-chart-line", "📈")
    FOOD = ("food", "fa-utensils", "🍴")
    SHOPPING = ("shopping", "fa-shopping-bag", "🛍")
    TRANSPORT = ("transport", "fa-car", "🚗")
    ENTERTAINMENT = ("entertainment", "fa-film", "🎬")
    UTILITIES = ("utilities", "fa-bolt", "⚡")
    HEALTH = ("health", "fa-heartbeat", "💓")
    OTHER = ("other", "fa-question-circle", "❓")

    def __init__(self, label: str, icon: str, glyph: str):
        self.label = label
        self.icon = icon
        self.glyph = glyph

    @classmethod
    def from_label(cls, label: Optional[str]) -> "Category":
        """Return the category for a label, OTHER for anything unrecognized"""
        for member in cls:
            if member.label == label:
                return member
        return cls.OTHER

    @classmethod
    def labels(cls) -> list[str]:
        return [member.label for member in cls]
