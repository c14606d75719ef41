"""
Error types for deck building.

Every failure surfaced by ttsdeck derives from TtsDeckError and carries
enough context to point at the offending input:

- CardError: a card could not resolve one of its facets
- ParseError: a deck-list line could not be turned into a card
- PackingConfigError: sheet capacity / grid width are unusable
- BuilderInvariantError: placements and sheets disagree (a packer bug)
- SaveError: one of the two file writes failed
- CatalogError: a card catalog could not be loaded
"""

from enum import Enum
from pathlib import Path


class TtsDeckError(Exception):
    """Base exception for all ttsdeck failures."""


class CardFacet(str, Enum):
    """The part of a card that failed to resolve."""

    NAME = "name"
    FRONT_IMAGE = "front_image"
    BACK_IMAGE = "back_image"
    SHAPE = "shape"


class CardError(TtsDeckError):
    """
    Raised when a card cannot resolve its name, images or shape.

    Card implementations raise this from their own methods. The normalizer
    fills in the card name and facet when the implementation left them out.
    """

    def __init__(
        self,
        message: str,
        card_name: str | None = None,
        facet: CardFacet | None = None,
    ) -> None:
        self.message = message
        self.card_name = card_name
        self.facet = facet
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.card_name is None:
            return self.message
        facet = self.facet.value if self.facet else "card"
        return f"Card '{self.card_name}' failed to resolve {facet}: {self.message}"

    def with_context(self, card_name: str, facet: CardFacet) -> "CardError":
        """Return a copy with missing card name / facet filled in."""
        return CardError(
            self.message,
            card_name=self.card_name if self.card_name is not None else card_name,
            facet=self.facet if self.facet is not None else facet,
        )

    @classmethod
    def card_doesnt_exist(cls, card_name: str) -> "CardError":
        return cls("card doesn't exist", card_name=card_name, facet=CardFacet.NAME)

    @classmethod
    def front_image_not_found(cls, card_name: str, image_url: str) -> "CardError":
        return cls(
            f"couldn't find the front image {image_url!r}",
            card_name=card_name,
            facet=CardFacet.FRONT_IMAGE,
        )

    @classmethod
    def back_image_not_found(cls, card_name: str, image_url: str) -> "CardError":
        return cls(
            f"couldn't find the back image {image_url!r}",
            card_name=card_name,
            facet=CardFacet.BACK_IMAGE,
        )


class ParseErrorKind(str, Enum):
    """Classification of deck-list parse failures."""

    EMPTY_NAME = "empty_name"
    ZERO_AMOUNT = "zero_amount"
    DUPLICATE_NAME = "duplicate_name"
    UNKNOWN_CARD = "unknown_card"
    INVALID_CARD = "invalid_card"
    UNREADABLE_FILE = "unreadable_file"


class ParseError(TtsDeckError):
    """
    Raised when deck-list input cannot be converted into cards.

    Card types raise this from ``parse`` without a position; the deck-list
    parser annotates it with the line number, column and line content.
    """

    def __init__(
        self,
        kind: ParseErrorKind,
        message: str,
        line: int | None = None,
        column: int | None = None,
        content: str | None = None,
    ) -> None:
        self.kind = kind
        self.message = message
        self.line = line
        self.column = column
        self.content = content
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.line is None and self.column is None:
            position = "Error at unknown position"
        elif self.line is None:
            position = f"Error at unknown line, column {self.column}"
        elif self.column is None:
            position = f"Error at line {self.line}"
        else:
            position = f"Error at line {self.line}, column {self.column}"
        text = f"{position}: {self.message}"
        if self.content is not None:
            text += f" (in {self.content!r})"
        return text

    def at_line(self, line: int, content: str, column: int | None = None) -> "ParseError":
        """Return a copy positioned at a one-based line (and optional column)."""
        return ParseError(
            self.kind,
            self.message,
            line=line,
            column=self.column if self.column is not None else column,
            content=content,
        )


class PackingConfigError(TtsDeckError):
    """Raised when sheet capacity and grid width cannot describe a sheet grid."""

    def __init__(self, capacity: int, grid_width: int, reason: str) -> None:
        self.capacity = capacity
        self.grid_width = grid_width
        self.reason = reason
        super().__init__(
            f"Invalid sheet configuration (capacity={capacity}, grid_width={grid_width}): {reason}"
        )


class BuilderInvariantError(TtsDeckError):
    """
    Raised when placements reference sheets or slots that do not exist.

    This can only come from a packing bug, never from user input.
    """


class SaveError(TtsDeckError):
    """Base exception for failures while writing a saved object."""


class ObjectWriteError(SaveError):
    """Raised when the serialized object file cannot be written."""

    def __init__(self, path: Path, error: OSError) -> None:
        self.path = path
        self.error = error
        super().__init__(f"Failed to write the object at {path} with error: {error}")


class ImageWriteError(SaveError):
    """Raised when the object's icon image cannot be written."""

    def __init__(self, path: Path, error: OSError) -> None:
        self.path = path
        self.error = error
        super().__init__(f"Failed to write the image at {path} with error: {error}")


class SaveDirectoryNotFoundError(SaveError):
    """Raised when Tabletop Simulator's saved objects directory is unknown."""

    def __init__(self) -> None:
        super().__init__("Couldn't find Tabletop Simulator's saved object files")


class CatalogError(TtsDeckError):
    """Raised when a card catalog cannot be loaded or fetched."""
