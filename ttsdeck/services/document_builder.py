"""
Save-document construction.

Turns packed cards into Tabletop Simulator objects: one Deck object whose
CustomDeck has an entry per sheet, and one CardCustom per card whose
CardID points at its sheet and slot.
"""

import logging
from collections.abc import Callable, Iterable, Sequence

from ttsdeck.config import FIRST_DECK_KEY, settings
from ttsdeck.models.card import CardShape
from ttsdeck.models.errors import BuilderInvariantError, TtsDeckError
from ttsdeck.models.packing import PackResult, PlacedCard, Sheet
from ttsdeck.models.save_state import (
    CustomDeckState,
    ObjectState,
    SaveDocument,
    TransformState,
)

logger = logging.getLogger(__name__)

SheetFaceUrl = Callable[[Sheet], str]


def format_sheet_template(template: str, sheet: Sheet) -> str:
    """
    Fill a face reference template for a sheet.

    Templates may use ``{sheet_id}``, ``{deck_key}`` and ``{sequence}``.

    Raises:
        TtsDeckError: If the template names other fields or is malformed
    """
    try:
        return template.format(
            sheet_id=sheet.sheet_id,
            deck_key=sheet.deck_key,
            sequence=sheet.sequence,
        )
    except (AttributeError, KeyError, IndexError, ValueError) as e:
        raise TtsDeckError(f"Invalid sheet face template {template!r}: {e!r}") from e


def default_sheet_face_url(sheet: Sheet, template: str | None = None) -> str:
    """
    Face image reference for a sheet.

    A sheet showing a single distinct front image uses that image directly.
    Otherwise the sheet has to be composited by the caller, and the
    template (settings.sheet_face_url_template by default) names where that
    composite lives.
    """
    distinct = set(sheet.front_images)
    if len(distinct) == 1:
        return sheet.front_images[0]
    return format_sheet_template(template or settings.sheet_face_url_template, sheet)


def template_sheet_face_url(template: str) -> SheetFaceUrl:
    """A face resolver like default_sheet_face_url with its own template."""

    def face_url(sheet: Sheet) -> str:
        return default_sheet_face_url(sheet, template)

    return face_url


def decode_card_id(card_id: int, grid_width: int) -> tuple[int, int, int]:
    """Split a TTS CardID back into (sheet_id, row, column)."""
    deck_key, slot = divmod(card_id, 100)
    return deck_key - FIRST_DECK_KEY, slot // grid_width, slot % grid_width


def shows_single_image(sheet: Sheet, face_url: str) -> bool:
    """True when the face reference is the one card image every cell shares."""
    return len(set(sheet.front_images)) == 1 and face_url == sheet.front_images[0]


def custom_deck_state(sheet: Sheet, face_url: str) -> CustomDeckState:
    """
    CustomDeck entry for a sheet.

    A face that is a single card image is declared as a 1x1 grid so TTS
    doesn't slice the card art into the sheet's cells.
    """
    single = shows_single_image(sheet, face_url)
    return CustomDeckState(
        face_url=face_url,
        back_url=sheet.back_image,
        num_width=1 if single else sheet.columns,
        num_height=1 if single else sheet.rows,
        back_is_hidden=True,
        unique_back=False,
        type=int(sheet.shape),
    )


def _check_consistency(cards: Sequence[PlacedCard], packed: PackResult) -> None:
    for position, sheet in enumerate(packed.sheets):
        if sheet.sheet_id != position:
            raise BuilderInvariantError(
                f"Sheet at position {position} has id {sheet.sheet_id}"
            )
        if sheet.occupied > sheet.capacity:
            raise BuilderInvariantError(
                f"Sheet {sheet.sheet_id} holds {sheet.occupied} cards "
                f"but its capacity is {sheet.capacity}"
            )

    for index in range(len(cards)):
        placement = packed.placements.get(index)
        if placement is None:
            raise BuilderInvariantError(f"Card {index} ({cards[index].name}) has no placement")
        if not 0 <= placement.sheet_id < len(packed.sheets):
            raise BuilderInvariantError(
                f"Card {index} references non-existent sheet {placement.sheet_id}"
            )
        sheet = packed.sheets[placement.sheet_id]
        if not 0 <= placement.slot < sheet.occupied:
            raise BuilderInvariantError(
                f"Card {index} uses slot {placement.slot} of sheet {sheet.sheet_id}, "
                f"which holds {sheet.occupied} cards"
            )
        if sheet.group_key != cards[index].group_key:
            raise BuilderInvariantError(
                f"Card {index} ({cards[index].name}) placed on a sheet with a different "
                "back image or shape"
            )

    if len(packed.placements) != len(cards):
        raise BuilderInvariantError(
            f"{len(packed.placements)} placements for {len(cards)} cards"
        )


def build_deck_object(
    cards: Sequence[PlacedCard],
    packed: PackResult,
    *,
    sheet_face_url: SheetFaceUrl | None = None,
    position: tuple[float, float, float] = (0.0, 0.0, 0.0),
    nickname: str = "",
) -> ObjectState:
    """
    Build a TTS Deck object for packed cards.

    Args:
        cards: The cards that were packed, in the same order
        packed: Result of packing those cards
        sheet_face_url: Face image reference for each sheet
            (defaults to default_sheet_face_url)
        position: Where the deck sits on the table
        nickname: Deck name shown in TTS

    Returns:
        Deck ObjectState with one contained card object per card

    Raises:
        BuilderInvariantError: If placements and sheets are inconsistent
    """
    _check_consistency(cards, packed)
    face_url_for = sheet_face_url or default_sheet_face_url
    face_urls = {sheet.deck_key: face_url_for(sheet) for sheet in packed.sheets}
    custom_deck = {
        sheet.deck_key: custom_deck_state(sheet, face_urls[sheet.deck_key])
        for sheet in packed.sheets
    }

    deck_ids: list[int] = []
    contained: list[ObjectState] = []
    for index, card in enumerate(cards):
        placement = packed.placements[index]
        sheet = packed.sheets[placement.sheet_id]
        if shows_single_image(sheet, face_urls[sheet.deck_key]):
            # 1x1 face: every copy shows cell 0
            card_id = sheet.card_id(0)
        else:
            card_id = sheet.card_id(placement.slot)
        deck_ids.append(card_id)
        contained.append(
            ObjectState(
                name="CardCustom",
                nickname=card.name,
                hands=True,
                card_id=card_id,
                custom_deck={sheet.deck_key: custom_deck[sheet.deck_key]},
            )
        )

    pos_x, pos_y, pos_z = position
    deck = ObjectState(
        name="Deck",
        transform=TransformState(pos_x=pos_x, pos_y=pos_y, pos_z=pos_z, rot_y=180.0),
        nickname=nickname,
        deck_ids=deck_ids,
        custom_deck=custom_deck,
        contained_objects=contained,
    )

    logger.debug(
        "Built deck %r with %d cards on %d sheets",
        nickname,
        len(contained),
        len(custom_deck),
    )
    return deck


def build_document(decks: Iterable[ObjectState]) -> SaveDocument:
    """Wrap objects in a save-document envelope."""
    return SaveDocument(object_states=list(decks))


def sheets_from_deck(deck: ObjectState) -> tuple[Sheet, ...]:
    """
    Recover sheet records from a Deck object read back from a save file.

    The file only stores each sheet's face reference, so ``front_images``
    is filled in for single-image sheets and left empty for composited
    ones. Capacity is the declared grid size, or the card count when more
    cards share one cell.

    Raises:
        BuilderInvariantError: If a CustomDeck entry has an unknown card type
    """
    cards = deck.contained_objects or ([deck] if deck.card_id is not None else [])
    sequences: dict[tuple[str, CardShape], int] = {}
    sheets: list[Sheet] = []

    for deck_key in sorted(deck.custom_deck):
        entry = deck.custom_deck[deck_key]
        try:
            shape = CardShape(entry.type)
        except ValueError:
            raise BuilderInvariantError(
                f"CustomDeck {deck_key} has unknown card type {entry.type}"
            ) from None

        on_sheet = sorted(
            (card.card_id % 100, index)
            for index, card in enumerate(cards)
            if card.card_id is not None and card.card_id // 100 == deck_key
        )
        grid_width = entry.num_width or 1
        declared = grid_width * (entry.num_height or 1)
        single = declared == 1

        group = (entry.back_url, shape)
        sequence = sequences.get(group, 0)
        sequences[group] = sequence + 1

        sheets.append(
            Sheet(
                sheet_id=deck_key - FIRST_DECK_KEY,
                sequence=sequence,
                back_image=entry.back_url,
                shape=shape,
                capacity=max(declared, len(on_sheet)),
                grid_width=grid_width,
                card_indices=tuple(index for _, index in on_sheet),
                front_images=(entry.face_url,) * len(on_sheet) if single else (),
            )
        )

    return tuple(sheets)
