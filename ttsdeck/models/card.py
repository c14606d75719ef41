"""
Card contract.

Users describe their own cards by implementing the Card protocol. ttsdeck
never enumerates card variants; it only calls these methods.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Protocol, runtime_checkable


class CardShape(int, Enum):
    """
    Tabletop Simulator custom card types.

    Values are the integer codes TTS stores in ``CustomDeck.Type``.
    """

    ROUNDED_RECTANGLE = 0
    RECTANGLE = 1
    ROUNDED_HEXAGON = 2
    HEXAGON = 3
    CIRCLE = 4

    @classmethod
    def from_name(cls, value: str) -> "CardShape":
        """Look up a shape by name, ignoring case, spaces, dashes and underscores."""
        key = value.strip().upper().replace("-", "_").replace(" ", "_")
        try:
            return cls[key]
        except KeyError:
            compact = key.replace("_", "")
            for shape in cls:
                if shape.name.replace("_", "") == compact:
                    return shape
            raise ValueError(f"Unknown card shape: {value!r}") from None


@runtime_checkable
class Card(Protocol):
    """
    Anything that can be put in a deck.

    Image and shape lookups may fail; implementations signal that by
    raising CardError.
    """

    @property
    def name(self) -> str: ...

    def front_image(self) -> str: ...

    def back_image(self) -> str: ...

    def shape(self) -> CardShape: ...


class CardParser(Protocol):
    """
    Turns a card name from a deck list into a card.

    Card classes satisfy this with a ``parse`` classmethod; catalogs with
    a ``parse`` method. Failures raise ParseError.
    """

    def parse(self, text: str) -> Card: ...


@dataclass(frozen=True, slots=True)
class CardEntry:
    """
    A card with the number of copies requested.

    Attributes:
        card: The card value
        amount: Number of physical copies (at least 1)
    """

    card: Card
    amount: int = 1

    def __post_init__(self) -> None:
        if self.amount < 1:
            raise ValueError(f"CardEntry amount must be at least 1, got {self.amount}")
