from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment (``TTSDECK_*``)."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="TTSDECK_")

    app_name: str = "ttsdeck"

    # Largest sheet Tabletop Simulator accepts is 10 columns x 7 rows
    sheet_capacity: int = 70
    sheet_grid_width: int = 10

    # Distance along X between decks saved in the same object file
    deck_spacing: float = 3.0

    # Face reference used for sheets holding more than one distinct front image.
    # Formatted with sheet_id, deck_key and sequence.
    sheet_face_url_template: str = "sheet_{deck_key:02d}.png"

    # Overrides the platform default "Saved Objects" directory
    saved_objects_dir: Path | None = None

    catalog_timeout: float = 30.0
    user_agent: str = "ttsdeck/1.0"


settings = Settings()


# =============================================================================
# TABLETOP SIMULATOR LIMITS
# =============================================================================

# Card ids are <deck key> * 100 + <slot>, so a sheet can never address
# more than 100 slots
MAX_SHEET_SLOTS = 100

# CustomDeck keys are one-based
FIRST_DECK_KEY = 1

# Platform-relative locations of the "Saved Objects" directory under $HOME
SAVED_OBJECTS_SUBDIRS = {
    "win32": Path("Documents") / "My Games" / "Tabletop Simulator" / "Saves" / "Saved Objects",
    "darwin": Path("Library") / "Tabletop Simulator" / "Saves" / "Saved Objects",
    "linux": Path(".local") / "share" / "Tabletop Simulator" / "Saves" / "Saved Objects",
}
