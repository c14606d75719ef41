from dataclasses import dataclass

import pytest

from ttsdeck.models.card import CardShape
from ttsdeck.models.errors import CardError, ParseError, ParseErrorKind


@dataclass(frozen=True)
class StubCard:
    """Minimal Card implementation for tests.

    Faces are derived from the name; a name listed in ``broken`` raises
    CardError from the matching method.
    """

    name: str
    back: str = "back.png"
    card_shape: CardShape = CardShape.RECTANGLE
    broken: tuple[str, ...] = ()

    def front_image(self) -> str:
        if "front_image" in self.broken:
            raise CardError(f"no front for {self.name}")
        return f"{self.name.lower().replace(' ', '_')}.png"

    def back_image(self) -> str:
        if "back_image" in self.broken:
            raise CardError("back image missing")
        return self.back

    def shape(self) -> CardShape:
        if "shape" in self.broken:
            raise CardError("shape unsupported")
        return self.card_shape

    @classmethod
    def parse(cls, text: str) -> "StubCard":
        if text.startswith("?"):
            raise ParseError(ParseErrorKind.INVALID_CARD, f"Not a card: {text}")
        return cls(name=text)


@pytest.fixture
def stub_card_type() -> type[StubCard]:
    return StubCard


@pytest.fixture
def mixed_shape_cards() -> list[StubCard]:
    """Five cards sharing back 'B': Rect, Rect, Round, Rect, Round."""
    rect = CardShape.RECTANGLE
    rounded = CardShape.ROUNDED_RECTANGLE
    return [
        StubCard("Alpha", back="B", card_shape=rect),
        StubCard("Beta", back="B", card_shape=rect),
        StubCard("Gamma", back="B", card_shape=rounded),
        StubCard("Delta", back="B", card_shape=rect),
        StubCard("Epsilon", back="B", card_shape=rounded),
    ]


@pytest.fixture
def sample_deck_list() -> str:
    """Sample deck list for testing."""
    return """# Red burn
3x Lightning Bolt
2 Shock

Goblin Guide
4 x Mountain"""


@pytest.fixture
def sample_catalog() -> dict:
    return {
        "default_back": "https://example.com/back.png",
        "default_shape": "rectangle",
        "cards": {
            "Lightning Bolt": {"front": "https://example.com/bolt.png"},
            "Shock": {"front": "https://example.com/shock.png"},
            "Sol Ring": {
                "front": "https://example.com/sol.png",
                "back": "https://example.com/artifact-back.png",
                "shape": "circle",
            },
        },
    }
