"""
Tabletop Simulator save-file object model.

Partial implementation of TTS's save format: only the fields needed to
load a deck of custom cards. Field names serialize to TTS's own keys
(PascalCase, with a handful of irregular spellings set explicitly).
"""

import uuid

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_pascal

# Default tint TTS gives to freshly spawned cards
DEFAULT_TINT = 0.713235259


def generate_guid() -> str:
    """Object GUID for a new object."""
    return str(uuid.uuid4())


class TtsModel(BaseModel):
    """Base model serializing field names as TTS PascalCase keys."""

    model_config = ConfigDict(alias_generator=to_pascal, populate_by_name=True)


class TransformState(BaseModel):
    """Position, rotation and scale. Keys are camelCase (posX, rotY, ...)."""

    model_config = ConfigDict(populate_by_name=True)

    pos_x: float = Field(default=0.0, alias="posX")
    pos_y: float = Field(default=0.0, alias="posY")
    pos_z: float = Field(default=0.0, alias="posZ")
    rot_x: float = Field(default=0.0, alias="rotX")
    rot_y: float = Field(default=0.0, alias="rotY")
    rot_z: float = Field(default=0.0, alias="rotZ")
    scale_x: float = Field(default=1.0, alias="scaleX")
    scale_y: float = Field(default=1.0, alias="scaleY")
    scale_z: float = Field(default=1.0, alias="scaleZ")


class Vector3(BaseModel):
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


class ColourState(BaseModel):
    r: float = DEFAULT_TINT
    g: float = DEFAULT_TINT
    b: float = DEFAULT_TINT


class CustomDeckState(TtsModel):
    """One sprite sheet as TTS sees it."""

    face_url: str = Field(alias="FaceURL")
    back_url: str = Field(alias="BackURL")
    num_width: int | None = 1
    num_height: int | None = 1
    back_is_hidden: bool = True
    unique_back: bool = False
    type: int = 0


class ObjectState(TtsModel):
    """A saved object: a deck, or a card inside one."""

    guid: str = Field(default_factory=generate_guid, alias="GUID")
    name: str
    transform: TransformState = Field(default_factory=TransformState)
    nickname: str = ""
    description: str = ""
    gm_notes: str = Field(default="", alias="GMNotes")
    alt_look_angle: Vector3 = Field(default_factory=Vector3)
    color_diffuse: ColourState = Field(default_factory=ColourState)
    layout_group_sort_index: int = 0
    value: int = 0
    locked: bool = False
    grid: bool = True
    snap: bool = True
    ignore_fow: bool = Field(default=False, alias="IgnoreFoW")
    measure_movement: bool = False
    drag_selectable: bool = True
    autoraise: bool = True
    sticky: bool = True
    tooltip: bool = True
    grid_projection: bool = False
    hide_when_face_down: bool = True
    hands: bool = False
    card_id: int | None = Field(default=None, alias="CardID")
    sideways_card: bool = False
    deck_ids: list[int] | None = Field(default=None, alias="DeckIDs")
    custom_deck: dict[int, CustomDeckState] = Field(default_factory=dict)
    lua_script: str = ""
    lua_script_state: str = ""
    xml_ui: str = Field(default="", alias="XmlUI")
    contained_objects: list["ObjectState"] | None = None


class SaveDocument(TtsModel):
    """
    Root of a TTS save file.

    Envelope fields are constants; only ObjectStates carries content.
    """

    save_name: str = ""
    date: str = ""
    version_number: str = ""
    game_mode: str = ""
    game_type: str = ""
    game_complexity: str = ""
    tags: list[str] = Field(default_factory=list)
    gravity: float = 0.5
    play_area: float = 0.5
    table: str = ""
    sky: str = ""
    note: str = ""
    tab_states: dict[str, str] = Field(default_factory=dict)
    lua_script: str = ""
    lua_script_state: str = ""
    xml_ui: str = Field(default="", alias="XmlUI")
    object_states: list[ObjectState] = Field(default_factory=list)

    def to_json(self, indent: int | None = 2) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=indent)

    @classmethod
    def from_json(cls, text: str | bytes) -> "SaveDocument":
        return cls.model_validate_json(text)

    def card_objects(self) -> list[ObjectState]:
        """Every card object contained in the saved decks, in order."""
        cards: list[ObjectState] = []
        for obj in self.object_states:
            if obj.card_id is not None:
                cards.append(obj)
            cards.extend(obj.contained_objects or [])
        return cards
