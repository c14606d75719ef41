"""
Sheet packing.

Assigns every card a (sheet, row, column) on a sprite sheet. Cards that
share a back image and shape share sheets; each group fills its sheets
greedily in input order, row by row.

Sheets are numbered in emission order: groups in first-seen order, and
sheets within a group in fill order. That number is the sheet id used by
placements and by the document builder.
"""

import logging
from collections.abc import Sequence

from ttsdeck.config import MAX_SHEET_SLOTS
from ttsdeck.models.errors import PackingConfigError
from ttsdeck.models.packing import GroupKey, PackResult, PlacedCard, Placement, Sheet

logger = logging.getLogger(__name__)


def validate_packing_config(capacity: int, grid_width: int) -> None:
    """
    Check that capacity and grid width describe a usable sheet grid.

    Raises:
        PackingConfigError: If grid_width or capacity is not positive,
            capacity is not a multiple of grid_width, or capacity exceeds
            the slots a TTS card id can address
    """
    if grid_width <= 0:
        raise PackingConfigError(capacity, grid_width, "grid width must be positive")
    if capacity <= 0:
        raise PackingConfigError(capacity, grid_width, "capacity must be positive")
    if capacity % grid_width != 0:
        raise PackingConfigError(
            capacity, grid_width, "capacity must be a multiple of the grid width"
        )
    if capacity > MAX_SHEET_SLOTS:
        raise PackingConfigError(
            capacity, grid_width, f"capacity cannot exceed {MAX_SHEET_SLOTS} cards per sheet"
        )


def group_cards(cards: Sequence[PlacedCard]) -> dict[GroupKey, list[int]]:
    """
    Group card indices by (back image, shape).

    Keys keep first-seen order; indices keep input order.
    """
    groups: dict[GroupKey, list[int]] = {}
    for index, card in enumerate(cards):
        groups.setdefault(card.group_key, []).append(index)
    return groups


def pack(cards: Sequence[PlacedCard], capacity: int, grid_width: int) -> PackResult:
    """
    Pack cards onto sheets.

    Args:
        cards: Resolved cards in deck order
        capacity: Maximum cards per sheet
        grid_width: Cells per sheet row

    Returns:
        PackResult with one Placement per card and the emitted sheets

    Raises:
        PackingConfigError: Before anything is placed, if the grid is invalid
    """
    validate_packing_config(capacity, grid_width)

    placements: dict[int, Placement] = {}
    sheets: list[Sheet] = []

    for (back_image, shape), indices in group_cards(cards).items():
        for sequence, start in enumerate(range(0, len(indices), capacity)):
            sheet_id = len(sheets)
            members = tuple(indices[start : start + capacity])

            for slot, card_index in enumerate(members):
                placements[card_index] = Placement(
                    sheet_id=sheet_id,
                    row=slot // grid_width,
                    column=slot % grid_width,
                    slot=slot,
                )

            sheets.append(
                Sheet(
                    sheet_id=sheet_id,
                    sequence=sequence,
                    back_image=back_image,
                    shape=shape,
                    capacity=capacity,
                    grid_width=grid_width,
                    card_indices=members,
                    front_images=tuple(cards[i].front_image for i in members),
                )
            )

    logger.info(
        "cards_packed",
        extra={
            "card_count": len(cards),
            "sheet_count": len(sheets),
            "capacity": capacity,
            "grid_width": grid_width,
        },
    )

    return PackResult(
        placements={index: placements[index] for index in range(len(cards))},
        sheets=tuple(sheets),
    )
