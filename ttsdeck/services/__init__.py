"""
ttsdeck services.

Card resolution, sheet packing and save-document construction.
"""

from ttsdeck.services.card_catalog import CardCatalog, CatalogCard
from ttsdeck.services.card_normalizer import normalize, resolve_card
from ttsdeck.services.document_builder import (
    build_deck_object,
    build_document,
    decode_card_id,
    default_sheet_face_url,
    sheets_from_deck,
    template_sheet_face_url,
)
from ttsdeck.services.save_state import (
    SaveState,
    get_saved_objects_dir,
    write_save_files,
    write_to_saved_objects,
)
from ttsdeck.services.sheet_packer import group_cards, pack, validate_packing_config

__all__ = [
    "CardCatalog",
    "CatalogCard",
    "SaveState",
    "build_deck_object",
    "build_document",
    "decode_card_id",
    "default_sheet_face_url",
    "get_saved_objects_dir",
    "group_cards",
    "normalize",
    "pack",
    "resolve_card",
    "sheets_from_deck",
    "template_sheet_face_url",
    "validate_packing_config",
    "write_save_files",
    "write_to_saved_objects",
]
