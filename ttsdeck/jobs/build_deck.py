"""
Build a Tabletop Simulator saved object from a deck list.

Usage:
    python -m ttsdeck.jobs.build_deck deck.txt --catalog cards.json --icon icon.png

Cards are looked up in a JSON catalog (local path or URL). The result is
written to --output-dir, or to TTS's "Saved Objects" directory by default.
"""

import argparse
import logging
import sys
from pathlib import Path

from ttsdeck.config import settings
from ttsdeck.models.errors import ObjectWriteError, TtsDeckError
from ttsdeck.parsers.deck_list import parse_file
from ttsdeck.services.card_catalog import CardCatalog
from ttsdeck.services.document_builder import template_sheet_face_url
from ttsdeck.services.save_state import SaveState, write_save_files, write_to_saved_objects

logger = logging.getLogger(__name__)


def run_build(
    deck_file: Path,
    catalog_source: str,
    icon_file: Path,
    name: str | None = None,
    output_dir: Path | None = None,
    capacity: int | None = None,
    grid_width: int | None = None,
    face_url_template: str | None = None,
) -> tuple[Path, Path]:
    """
    Parse a deck list, build its save state and write it.

    Each sheet's slot-ordered front images are logged so that composited
    sheets can be assembled to match the face references.

    Returns:
        (object_path, icon_path)

    Raises:
        TtsDeckError: From any stage
    """
    name = name or deck_file.stem
    catalog = CardCatalog.open(catalog_source)
    entries = parse_file(deck_file, catalog)
    logger.info("Parsed %d entries from %s", len(entries), deck_file)

    state = SaveState.new_with_deck(
        entries,
        capacity=capacity,
        grid_width=grid_width,
        sheet_face_url=template_sheet_face_url(face_url_template) if face_url_template else None,
        nickname=name,
    )
    deck = state.document.object_states[0]
    for sheet in state.sheets:
        logger.info(
            "Sheet %d uses %s: %s",
            sheet.deck_key,
            deck.custom_deck[sheet.deck_key].face_url,
            ", ".join(sheet.front_images),
        )

    try:
        icon = icon_file.read_bytes()
    except OSError as e:
        raise TtsDeckError(f"Failed to read icon {icon_file}: {e}") from e

    if output_dir is not None:
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ObjectWriteError(output_dir / f"{name}.json", e) from e
        return write_save_files(output_dir / name, state.to_bytes(), icon)
    return write_to_saved_objects(name, state.to_bytes(), icon)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Build a Tabletop Simulator deck from a deck list"
    )
    parser.add_argument("deck_file", type=Path, help="Deck list, one card per line")
    parser.add_argument("--catalog", required=True, help="Card catalog JSON (path or URL)")
    parser.add_argument("--icon", required=True, type=Path, help="PNG thumbnail for the object")
    parser.add_argument("--name", help="Object name (defaults to the deck file name)")
    parser.add_argument("--output-dir", type=Path, help="Write here instead of Saved Objects")
    parser.add_argument(
        "--capacity", type=int, default=settings.sheet_capacity, help="Cards per sheet"
    )
    parser.add_argument(
        "--grid-width", type=int, default=settings.sheet_grid_width, help="Cards per sheet row"
    )
    parser.add_argument(
        "--face-url-template",
        help="Face image reference for composited sheets, e.g. https://example.com/sheet_{deck_key}.png",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    args = build_arg_parser().parse_args(argv)

    try:
        object_path, _ = run_build(
            args.deck_file,
            args.catalog,
            args.icon,
            name=args.name,
            output_dir=args.output_dir,
            capacity=args.capacity,
            grid_width=args.grid_width,
            face_url_template=args.face_url_template,
        )
    except TtsDeckError as e:
        logger.error("Failed to build deck: %s", e)
        return 1

    logger.info("Saved %s", object_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
