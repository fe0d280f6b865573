"""Enum definitions for users and estates."""

from enum import Enum


class UserRole(str, Enum):
    """Account role."""

    USER = "User"
    ADMIN = "Admin"


class EstateCategory(str, Enum):
    """Kind of listed estate."""

    HOUSE = "House"
    FLAT = "Flat"
    OFFICE = "Office"
    RETAIL = "Retail"

    @property
    def is_standalone(self) -> bool:
        """Standalone houses have no floor number."""
        return self is EstateCategory.HOUSE

    @classmethod
    def parse(cls, value: str) -> "EstateCategory | None":
        """Look up a category by name, case-insensitively."""
        for category in cls:
            if category.value.lower() == value.strip().lower():
                return category
        return None
