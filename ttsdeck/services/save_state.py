"""
Save state facade.

SaveState owns a save document built from card lists and knows how to
write it, together with its icon, where Tabletop Simulator expects saved
objects.
"""

import logging
import sys
from collections.abc import Iterable
from pathlib import Path

from ttsdeck.config import SAVED_OBJECTS_SUBDIRS, Settings, settings
from ttsdeck.models.card import Card, CardEntry
from ttsdeck.models.errors import (
    ImageWriteError,
    ObjectWriteError,
    SaveDirectoryNotFoundError,
)
from ttsdeck.models.packing import Sheet
from ttsdeck.models.save_state import SaveDocument
from ttsdeck.services.card_normalizer import normalize
from ttsdeck.services.document_builder import (
    SheetFaceUrl,
    build_deck_object,
    build_document,
    sheets_from_deck,
)
from ttsdeck.services.sheet_packer import pack

logger = logging.getLogger(__name__)

OBJECT_SUFFIX = ".json"
ICON_SUFFIX = ".png"


class SaveState:
    """
    A TTS saved object holding one or more decks of custom cards.

    Use ``SaveState.new_with_deck`` to build one. The document is only
    changed through ``add_deck``: the constructor takes a copy of
    the document it is given, and ``document`` hands out copies.
    """

    def __init__(self, document: SaveDocument | None = None) -> None:
        if document is None:
            document = build_document([])
        self._document = document.model_copy(deep=True)
        self._sheets: list[tuple[Sheet, ...]] = [
            sheets_from_deck(obj) for obj in self._document.object_states
        ]

    @classmethod
    def new_with_deck(
        cls,
        cards: Iterable[Card | CardEntry],
        *,
        capacity: int | None = None,
        grid_width: int | None = None,
        sheet_face_url: SheetFaceUrl | None = None,
        nickname: str = "",
    ) -> "SaveState":
        """
        Build a save state containing a single deck.

        Args:
            cards: Cards, or CardEntries with copy counts, in deck order
            capacity: Cards per sheet (defaults to settings.sheet_capacity)
            grid_width: Cells per sheet row (defaults to settings.sheet_grid_width)
            sheet_face_url: Face image reference for each sheet
            nickname: Deck name shown in TTS

        Raises:
            CardError: If a card can't resolve its images or shape
            PackingConfigError: If capacity / grid_width are invalid
            BuilderInvariantError: If packing produced inconsistent output
        """
        state = cls()
        state.add_deck(
            cards,
            capacity=capacity,
            grid_width=grid_width,
            sheet_face_url=sheet_face_url,
            nickname=nickname,
        )
        return state

    @classmethod
    def from_json(cls, text: str | bytes) -> "SaveState":
        """Load a previously serialized save state."""
        return cls(SaveDocument.from_json(text))

    def add_deck(
        self,
        cards: Iterable[Card | CardEntry],
        *,
        capacity: int | None = None,
        grid_width: int | None = None,
        sheet_face_url: SheetFaceUrl | None = None,
        nickname: str = "",
    ) -> None:
        """
        Add another deck, placed beside the existing ones.

        The document is left untouched if any stage fails.
        """
        capacity = settings.sheet_capacity if capacity is None else capacity
        grid_width = settings.sheet_grid_width if grid_width is None else grid_width

        placed = normalize(cards)
        packed = pack(placed, capacity, grid_width)
        offset = len(self._document.object_states) * settings.deck_spacing
        deck = build_deck_object(
            placed,
            packed,
            sheet_face_url=sheet_face_url,
            position=(offset, 0.0, 0.0),
            nickname=nickname,
        )

        self._document.object_states.append(deck)
        self._sheets.append(packed.sheets)
        logger.info(
            "deck_added",
            extra={
                "nickname": nickname,
                "card_count": len(placed),
                "sheet_count": len(packed.sheets),
            },
        )

    @property
    def document(self) -> SaveDocument:
        """A copy of the save document."""
        return self._document.model_copy(deep=True)

    @property
    def sheets(self) -> tuple[Sheet, ...]:
        """
        Sheets of every deck, in deck order.

        Decks loaded from a document are recovered with sheets_from_deck.
        """
        return tuple(sheet for deck_sheets in self._sheets for sheet in deck_sheets)

    def card_count(self) -> int:
        return len(self._document.card_objects())

    def to_json(self, indent: int | None = 2) -> str:
        return self._document.to_json(indent=indent)

    def to_bytes(self) -> bytes:
        return self.to_json().encode("utf-8")

    def write(self, path: Path | str, icon: bytes) -> tuple[Path, Path]:
        """Write this save state and its icon. See write_save_files."""
        return write_save_files(path, self.to_bytes(), icon)

    def write_to_saved_objects(
        self, name: str, icon: bytes, config: Settings | None = None
    ) -> tuple[Path, Path]:
        """Write this save state into TTS's saved objects directory."""
        return write_to_saved_objects(name, self.to_bytes(), icon, config)


def write_save_files(path: Path | str, contents: bytes, icon: bytes) -> tuple[Path, Path]:
    """
    Write an object file and its icon side by side.

    The object goes to ``path`` with a .json suffix, the icon to the same
    stem with a .png suffix, which is how TTS pairs saved objects with their
    thumbnails. The icon is not written if the object write fails.

    Returns:
        (object_path, icon_path)

    Raises:
        ObjectWriteError: If the object file can't be written
        ImageWriteError: If the icon can't be written
    """
    object_path = Path(path).with_suffix(OBJECT_SUFFIX)
    icon_path = object_path.with_suffix(ICON_SUFFIX)

    try:
        object_path.write_bytes(contents)
    except OSError as e:
        raise ObjectWriteError(object_path, e) from e

    try:
        icon_path.write_bytes(icon)
    except OSError as e:
        raise ImageWriteError(icon_path, e) from e

    logger.info("Wrote saved object to %s", object_path)
    return object_path, icon_path


def get_saved_objects_dir(config: Settings | None = None) -> Path | None:
    """
    Tabletop Simulator's "Saved Objects" directory.

    Uses the configured override when set, otherwise the platform default
    under the home directory. Returns None on unsupported platforms or when
    the home directory can't be determined.
    """
    config = config or settings
    if config.saved_objects_dir is not None:
        return config.saved_objects_dir

    platform = "linux" if sys.platform.startswith("linux") else sys.platform
    subdir = SAVED_OBJECTS_SUBDIRS.get(platform)
    if subdir is None:
        return None
    try:
        return Path.home() / subdir
    except RuntimeError:
        return None


def write_to_saved_objects(
    name: str,
    contents: bytes,
    icon: bytes,
    config: Settings | None = None,
) -> tuple[Path, Path]:
    """
    Write an object and its icon into TTS's saved objects directory.

    Raises:
        SaveDirectoryNotFoundError: If the directory can't be determined
        ObjectWriteError: If the object file can't be written
        ImageWriteError: If the icon can't be written
    """
    directory = get_saved_objects_dir(config)
    if directory is None:
        raise SaveDirectoryNotFoundError()

    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ObjectWriteError(directory / f"{name}{OBJECT_SUFFIX}", e) from e

    return write_save_files(directory / name, contents, icon)
