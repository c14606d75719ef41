"""
Packing records.

These are the frozen values passed between the normalizer, the sheet
packer and the document builder.

INVARIANTS:
- A PlacedCard's group key is derived from its back image and shape only
- A Sheet never holds more than its capacity
- Placements are zero-indexed (sheet, row, column) everywhere
"""

from collections.abc import Mapping
from dataclasses import dataclass, field

from ttsdeck.config import FIRST_DECK_KEY
from ttsdeck.models.card import CardShape

GroupKey = tuple[str, CardShape]


@dataclass(frozen=True, slots=True)
class PlacedCard:
    """
    A card whose faces and shape have been resolved.

    Attributes:
        name: Display name
        front_image: Front face image reference
        back_image: Back face image reference
        shape: Card shape
    """

    name: str
    front_image: str
    back_image: str
    shape: CardShape

    @property
    def group_key(self) -> GroupKey:
        """Cards sharing this key can share a sheet."""
        return (self.back_image, self.shape)


@dataclass(frozen=True, slots=True)
class Placement:
    """
    Where one card sits.

    Attributes:
        sheet_id: Global sheet index
        row: Row within the sheet
        column: Column within the sheet
        slot: Position within the sheet in fill order (row * grid_width + column)
    """

    sheet_id: int
    row: int
    column: int
    slot: int


@dataclass(frozen=True, slots=True)
class Sheet:
    """
    One sprite sheet of card fronts sharing a back image and shape.

    Attributes:
        sheet_id: Global emission index (group order, then sequence)
        sequence: Index of this sheet within its group
        back_image: Back image shared by every card on the sheet
        shape: Shape shared by every card on the sheet
        capacity: Maximum number of cells
        grid_width: Cells per full row
        card_indices: Input indices of the cards on this sheet, in slot order
        front_images: Front image of each occupied cell, in slot order
    """

    sheet_id: int
    sequence: int
    back_image: str
    shape: CardShape
    capacity: int
    grid_width: int
    card_indices: tuple[int, ...] = field(default_factory=tuple)
    front_images: tuple[str, ...] = field(default_factory=tuple)

    @property
    def occupied(self) -> int:
        return len(self.card_indices)

    @property
    def columns(self) -> int:
        return min(self.grid_width, self.occupied)

    @property
    def rows(self) -> int:
        return -(-self.occupied // self.grid_width)

    @property
    def total_cells(self) -> int:
        """Cells in the declared grid, including unused ones on a partial last row."""
        return self.columns * self.rows

    @property
    def deck_key(self) -> int:
        """Key of this sheet in a TTS CustomDeck mapping."""
        return self.sheet_id + FIRST_DECK_KEY

    @property
    def group_key(self) -> GroupKey:
        return (self.back_image, self.shape)

    def card_id(self, slot: int) -> int:
        """TTS CardID of the card in ``slot``."""
        return self.deck_key * 100 + slot


@dataclass(frozen=True)
class PackResult:
    """
    Output of the sheet packer.

    Attributes:
        placements: Card index -> Placement, in input order
        sheets: Sheets in emission order; sheets[i].sheet_id == i
    """

    placements: Mapping[int, Placement]
    sheets: tuple[Sheet, ...]

    def __len__(self) -> int:
        """Number of placed cards."""
        return len(self.placements)

    def sheet_count(self) -> int:
        return len(self.sheets)
