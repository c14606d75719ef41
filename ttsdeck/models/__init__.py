from ttsdeck.models.card import Card, CardEntry, CardParser, CardShape
from ttsdeck.models.errors import (
    BuilderInvariantError,
    CardError,
    CardFacet,
    CatalogError,
    ImageWriteError,
    ObjectWriteError,
    PackingConfigError,
    ParseError,
    ParseErrorKind,
    SaveDirectoryNotFoundError,
    SaveError,
    TtsDeckError,
)
from ttsdeck.models.packing import GroupKey, PackResult, PlacedCard, Placement, Sheet
from ttsdeck.models.save_state import (
    ColourState,
    CustomDeckState,
    ObjectState,
    SaveDocument,
    TransformState,
    Vector3,
)

__all__ = [
    "BuilderInvariantError",
    "Card",
    "CardEntry",
    "CardError",
    "CardFacet",
    "CardParser",
    "CardShape",
    "CatalogError",
    "ColourState",
    "CustomDeckState",
    "GroupKey",
    "ImageWriteError",
    "ObjectState",
    "ObjectWriteError",
    "PackResult",
    "PackingConfigError",
    "ParseError",
    "ParseErrorKind",
    "PlacedCard",
    "Placement",
    "SaveDirectoryNotFoundError",
    "SaveDocument",
    "SaveError",
    "Sheet",
    "TransformState",
    "TtsDeckError",
    "Vector3",
]
