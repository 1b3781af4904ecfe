"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class Money:
    """Price representation with validation."""

    amount: Decimal

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError("Money amount cannot be negative")

    def __str__(self) -> str:
        return f"{self.amount:.2f}"

    def __mul__(self, factor: int) -> "Money":
        return Money(amount=self.amount * factor)


@dataclass(frozen=True)
class Capacity:
    """Non-negative integer representing how many attendees an event admits."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError("Capacity cannot be negative")

    def remaining(self, taken: int) -> int:
        """Seats left once ``taken`` seats are allocated."""
        return self.value - taken
