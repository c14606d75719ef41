"""
Card normalization.

Resolves user cards into PlacedCards by asking each card for its faces
and shape. This is the only place card implementations are called, so
it is where their failures get the card name and facet attached.

INVARIANT: one PlacedCard per requested copy, in input order. Nothing is
deduplicated or skipped.
"""

import logging
from collections.abc import Callable, Iterable
from typing import TypeVar

from ttsdeck.models.card import Card, CardEntry, CardShape
from ttsdeck.models.errors import CardError, CardFacet
from ttsdeck.models.packing import PlacedCard

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _resolve(card_name: str, facet: CardFacet, getter: Callable[[], T]) -> T:
    try:
        return getter()
    except CardError as e:
        raise e.with_context(card_name, facet) from e


def _require_reference(card_name: str, facet: CardFacet, value: object) -> str:
    if not isinstance(value, str) or not value.strip():
        raise CardError(
            f"missing or malformed image reference {value!r}",
            card_name=card_name,
            facet=facet,
        )
    return value


def resolve_card(card: Card) -> PlacedCard:
    """
    Resolve a single card.

    Raises:
        CardError: Naming the card and the facet that failed
    """
    name = card.name
    if not isinstance(name, str) or not name.strip():
        raise CardError("card name is empty", card_name=str(name), facet=CardFacet.NAME)

    front = _require_reference(
        name, CardFacet.FRONT_IMAGE, _resolve(name, CardFacet.FRONT_IMAGE, card.front_image)
    )
    back = _require_reference(
        name, CardFacet.BACK_IMAGE, _resolve(name, CardFacet.BACK_IMAGE, card.back_image)
    )
    shape = _resolve(name, CardFacet.SHAPE, card.shape)
    if not isinstance(shape, CardShape):
        raise CardError(f"unsupported shape {shape!r}", card_name=name, facet=CardFacet.SHAPE)

    return PlacedCard(name=name, front_image=front, back_image=back, shape=shape)


def normalize(cards: Iterable[Card | CardEntry]) -> list[PlacedCard]:
    """
    Resolve cards (or entries with copy counts) into PlacedCards.

    A CardEntry is resolved once and repeated ``amount`` times.

    Args:
        cards: Cards or CardEntries in deck order

    Returns:
        PlacedCards in the same order, one per copy

    Raises:
        CardError: On the first card that fails to resolve
    """
    placed: list[PlacedCard] = []

    for item in cards:
        if isinstance(item, CardEntry):
            resolved = resolve_card(item.card)
            placed.extend([resolved] * item.amount)
        else:
            placed.append(resolve_card(item))

    logger.debug("Normalized %d cards", len(placed))
    return placed
