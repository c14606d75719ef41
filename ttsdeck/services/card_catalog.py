"""
Card catalog service.

A ready-made card implementation backed by a JSON catalog, for users who
don't want to write their own Card type.

Catalog format:
    {
        "default_back": "https://example.com/back.png",
        "default_shape": "rounded_rectangle",
        "cards": {
            "Lightning Bolt": {"front": "https://example.com/bolt.png"},
            "Sol Ring": {"front": "...", "back": "...", "shape": "circle"}
        }
    }
"""

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import httpx

from ttsdeck.config import settings
from ttsdeck.models.card import CardShape
from ttsdeck.models.errors import (
    CardError,
    CardFacet,
    CatalogError,
    ParseError,
    ParseErrorKind,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CatalogCard:
    """
    A card looked up from a catalog.

    Attributes:
        name: Canonical card name
        front: Front image reference
        back: Back image reference, if the catalog provides one
        card_shape: Card shape
    """

    name: str
    front: str
    back: str | None = None
    card_shape: CardShape = CardShape.ROUNDED_RECTANGLE

    def front_image(self) -> str:
        return self.front

    def back_image(self) -> str:
        if not self.back:
            raise CardError(
                "no back image in the catalog and no default_back",
                card_name=self.name,
                facet=CardFacet.BACK_IMAGE,
            )
        return self.back

    def shape(self) -> CardShape:
        return self.card_shape


def _parse_shape(value: Any, where: str) -> CardShape:
    if isinstance(value, CardShape):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        try:
            return CardShape(value)
        except ValueError as e:
            raise CatalogError(f"Unknown shape {value!r} for {where}") from e
    if isinstance(value, str):
        try:
            return CardShape.from_name(value)
        except ValueError as e:
            raise CatalogError(f"Unknown shape {value!r} for {where}") from e
    raise CatalogError(f"Invalid shape {value!r} for {where}")


class CardCatalog:
    """
    Name -> card lookup table.

    Names are matched case-insensitively; ``parse`` returns the card under
    its canonical catalog name, so a catalog can be passed anywhere a card
    parser is expected. Names that differ only in case are rejected with CatalogError.
    """

    def __init__(self, cards: Mapping[str, CatalogCard]) -> None:
        self._cards: dict[str, CatalogCard] = {}
        for card in cards.values():
            key = card.name.casefold()
            existing = self._cards.get(key)
            if existing is not None:
                raise CatalogError(
                    f"Card names '{existing.name}' and '{card.name}' differ only in case"
                )
            self._cards[key] = card

    def __len__(self) -> int:
        return len(self._cards)

    def __contains__(self, name: str) -> bool:
        return name.strip().casefold() in self._cards

    def get(self, name: str) -> CatalogCard | None:
        return self._cards.get(name.strip().casefold())

    def parse(self, text: str) -> CatalogCard:
        """
        Resolve a deck-list name to a catalog card.

        Raises:
            ParseError: If the name isn't in the catalog
        """
        card = self.get(text)
        if card is None:
            raise ParseError(ParseErrorKind.UNKNOWN_CARD, f"Card doesn't exist: {text}")
        return card

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "CardCatalog":
        """
        Build a catalog from decoded catalog JSON.

        Raises:
            CatalogError: If the data doesn't follow the catalog format
        """
        if not isinstance(data, Mapping):
            raise CatalogError("Catalog must be a JSON object")

        raw_cards = data.get("cards")
        if not isinstance(raw_cards, Mapping):
            raise CatalogError("Catalog is missing a 'cards' object")

        default_back = data.get("default_back")
        default_shape = _parse_shape(
            data.get("default_shape", CardShape.ROUNDED_RECTANGLE.name), "default_shape"
        )

        cards: dict[str, CatalogCard] = {}
        for name, entry in raw_cards.items():
            if not isinstance(entry, Mapping) or not entry.get("front"):
                raise CatalogError(f"Card '{name}' has no front image")
            shape = entry.get("shape")
            cards[name] = CatalogCard(
                name=name,
                front=str(entry["front"]),
                back=entry.get("back") or default_back,
                card_shape=default_shape if shape is None else _parse_shape(shape, name),
            )

        logger.debug("Loaded catalog with %d cards", len(cards))
        return cls(cards)

    @classmethod
    def load(cls, path: Path | str) -> "CardCatalog":
        """
        Load a catalog from a JSON file.

        Raises:
            CatalogError: If the file can't be read or isn't a valid catalog
        """
        path = Path(path)
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except OSError as e:
            raise CatalogError(f"Failed to read catalog {path}: {e}") from e
        except json.JSONDecodeError as e:
            raise CatalogError(f"Catalog {path} is not valid JSON: {e}") from e

        return cls.from_mapping(data)

    @classmethod
    def fetch(cls, url: str, timeout: float | None = None) -> "CardCatalog":
        """
        Download a catalog over HTTP.

        Raises:
            CatalogError: If the request fails or the body isn't a valid catalog
        """
        logger.info("Fetching card catalog from %s", url)
        try:
            response = httpx.get(
                url,
                headers={"User-Agent": settings.user_agent},
                follow_redirects=True,
                timeout=timeout or settings.catalog_timeout,
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise CatalogError(
                f"Failed to fetch catalog {url}: HTTP {e.response.status_code}"
            ) from e
        except httpx.RequestError as e:
            raise CatalogError(f"Failed to fetch catalog {url}: {e}") from e
        except json.JSONDecodeError as e:
            raise CatalogError(f"Catalog at {url} is not valid JSON: {e}") from e

        return cls.from_mapping(data)

    @classmethod
    def open(cls, source: str | Path) -> "CardCatalog":
        """Load from a URL (http/https) or a local path."""
        if isinstance(source, str) and source.startswith(("http://", "https://")):
            return cls.fetch(source)
        return cls.load(source)
