import pytest
from conftest import StubCard

from ttsdeck.models.card import Card, CardEntry, CardShape
from ttsdeck.models.errors import (
    CardError,
    CardFacet,
    ImageWriteError,
    ParseError,
    ParseErrorKind,
    SaveError,
    TtsDeckError,
)
from ttsdeck.models.packing import PlacedCard, Sheet


class TestCardShape:
    def test_tts_type_codes(self) -> None:
        assert [int(shape) for shape in CardShape] == [0, 1, 2, 3, 4]
        assert CardShape.ROUNDED_RECTANGLE == 0
        assert CardShape.CIRCLE == 4

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("circle", CardShape.CIRCLE),
            ("Rounded Rectangle", CardShape.ROUNDED_RECTANGLE),
            ("rounded-hexagon", CardShape.ROUNDED_HEXAGON),
            ("RoundedHexagon", CardShape.ROUNDED_HEXAGON),
        ],
    )
    def test_from_name(self, value: str, expected: CardShape) -> None:
        assert CardShape.from_name(value) is expected

    def test_from_name_unknown(self) -> None:
        with pytest.raises(ValueError, match="Unknown card shape"):
            CardShape.from_name("triangle")


class TestCardEntry:
    def test_default_amount(self) -> None:
        assert CardEntry(StubCard("Bolt")).amount == 1

    def test_zero_amount_rejected(self) -> None:
        with pytest.raises(ValueError):
            CardEntry(StubCard("Bolt"), amount=0)

    def test_stub_satisfies_protocol(self) -> None:
        assert isinstance(StubCard("Bolt"), Card)


class TestPlacedCard:
    def test_group_key(self) -> None:
        card = PlacedCard(name="A", front_image="a.png", back_image="b.png", shape=CardShape.HEXAGON)
        assert card.group_key == ("b.png", CardShape.HEXAGON)

    def test_immutable(self) -> None:
        card = PlacedCard(name="A", front_image="a.png", back_image="b.png", shape=CardShape.HEXAGON)
        with pytest.raises(AttributeError):
            card.name = "B"  # type: ignore[misc]


class TestSheet:
    def make_sheet(self, occupied: int, sheet_id: int = 0) -> Sheet:
        return Sheet(
            sheet_id=sheet_id,
            sequence=0,
            back_image="back.png",
            shape=CardShape.RECTANGLE,
            capacity=70,
            grid_width=10,
            card_indices=tuple(range(occupied)),
            front_images=tuple(f"{i}.png" for i in range(occupied)),
        )

    def test_partial_sheet_grid(self) -> None:
        sheet = self.make_sheet(23)

        assert sheet.occupied == 23
        assert (sheet.columns, sheet.rows) == (10, 3)
        assert sheet.total_cells == 30

    def test_full_sheet_grid(self) -> None:
        sheet = self.make_sheet(70)

        assert (sheet.columns, sheet.rows) == (10, 7)

    def test_deck_key_and_card_id(self) -> None:
        sheet = self.make_sheet(5, sheet_id=2)

        assert sheet.deck_key == 3
        assert sheet.card_id(4) == 304


class TestErrors:
    def test_hierarchy(self) -> None:
        assert issubclass(CardError, TtsDeckError)
        assert issubclass(ParseError, TtsDeckError)
        assert issubclass(ImageWriteError, SaveError)

    def test_card_error_message(self) -> None:
        error = CardError("not found", card_name="Bolt", facet=CardFacet.FRONT_IMAGE)

        assert str(error) == "Card 'Bolt' failed to resolve front_image: not found"

    def test_card_error_with_context_fills_missing(self) -> None:
        error = CardError("boom").with_context("Bolt", CardFacet.SHAPE)

        assert error.card_name == "Bolt"
        assert error.facet is CardFacet.SHAPE

    def test_parse_error_positions(self) -> None:
        error = ParseError(ParseErrorKind.EMPTY_NAME, "empty")

        assert str(error) == "Error at unknown position: empty"
        assert str(error.at_line(3, "3x")) == "Error at line 3: empty (in '3x')"
        assert "line 3, column 2" in str(error.at_line(3, "3x", column=2))

    def test_card_error_constructors(self) -> None:
        missing = CardError.card_doesnt_exist("Bolt")
        back = CardError.back_image_not_found("Bolt", "back.png")

        assert missing.facet is CardFacet.NAME
        assert back.facet is CardFacet.BACK_IMAGE
        assert "back.png" in str(back)
