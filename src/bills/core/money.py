#!/usr/bin/env python3
"""
Money Primitive Type

Immutable currency value wrapper that uses integer pence internally.
Prevents floating-point errors when comparing bill amounts to bank amounts.
"""

from dataclasses import dataclass
from decimal import Decimal

from .currency import amount_to_pence, format_pence


@dataclass(frozen=True)
class Money:
    """
    Immutable money value in pence (GBP).

    Examples:
        >>> bill = Money.from_pounds("15.99")
        >>> str(bill)
        '£15.99'

        >>> paid = Money.from_pounds(-16.49)  # bank debit
        >>> (paid.abs() - bill).to_pence()
        50

        >>> Money.from_pence(100) <= Money.from_pounds(1)
        True
    """

    pence: int

    @classmethod
    def from_pence(cls, pence: int) -> "Money":
        """Create Money from pence."""
        return cls(pence=pence)

    @classmethod
    def from_pounds(cls, pounds: str | int | float | Decimal) -> "Money":
        """
        Parse from decimal pounds.

        Args:
            pounds: "£12.34", "12.34", 12.34, Decimal("12.34") or integer pounds

        Returns:
            Money object
        """
        return cls(pence=amount_to_pence(pounds))

    @classmethod
    def zero(cls) -> "Money":
        return cls(pence=0)

    def to_pence(self) -> int:
        """Get value in pence."""
        return self.pence

    def to_pounds(self) -> str:
        """Get formatted pound string."""
        return str(self)

    def abs(self) -> "Money":
        """Return the magnitude, used to compare debits against expected amounts."""
        return Money(pence=abs(self.pence))

    def difference(self, other: "Money") -> "Money":
        """Absolute difference between two amounts."""
        return Money(pence=abs(self.pence - other.pence))

    def __add__(self, other: "Money") -> "Money":
        return Money(pence=self.pence + other.pence)

    def __sub__(self, other: "Money") -> "Money":
        return Money(pence=self.pence - other.pence)

    def __lt__(self, other: "Money") -> bool:
        return self.pence < other.pence

    def __le__(self, other: "Money") -> bool:
        return self.pence <= other.pence

    def __gt__(self, other: "Money") -> bool:
        return self.pence > other.pence

    def __ge__(self, other: "Money") -> bool:
        return self.pence >= other.pence

    def __str__(self) -> str:
        """Format as pound string."""
        return format_pence(self.pence)

    def __repr__(self) -> str:
        return f"Money(pence={self.pence})"
