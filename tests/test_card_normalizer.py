"""Tests for card normalization."""

import pytest
from conftest import StubCard

from ttsdeck.models.card import CardEntry, CardShape
from ttsdeck.models.errors import CardError, CardFacet
from ttsdeck.services.card_normalizer import normalize, resolve_card


class TestResolveCard:
    def test_resolves_faces_and_shape(self) -> None:
        placed = resolve_card(StubCard("Lightning Bolt", back="red.png"))

        assert placed.name == "Lightning Bolt"
        assert placed.front_image == "lightning_bolt.png"
        assert placed.back_image == "red.png"
        assert placed.shape is CardShape.RECTANGLE
        assert placed.group_key == ("red.png", CardShape.RECTANGLE)

    @pytest.mark.parametrize(
        "facet",
        [CardFacet.FRONT_IMAGE, CardFacet.BACK_IMAGE, CardFacet.SHAPE],
    )
    def test_card_error_gets_name_and_facet(self, facet: CardFacet) -> None:
        card = StubCard("Shock", broken=(facet.value,))

        with pytest.raises(CardError) as exc_info:
            resolve_card(card)

        assert exc_info.value.card_name == "Shock"
        assert exc_info.value.facet is facet
        assert "Shock" in str(exc_info.value)

    def test_card_error_context_is_not_overwritten(self) -> None:
        class AlwaysMissing(StubCard):
            def front_image(self) -> str:
                raise CardError.front_image_not_found("Canonical", "x.png")

        with pytest.raises(CardError) as exc_info:
            resolve_card(AlwaysMissing("Renamed"))

        assert exc_info.value.card_name == "Canonical"
        assert "x.png" in str(exc_info.value)

    def test_empty_image_reference_rejected(self) -> None:
        class BlankBack(StubCard):
            def back_image(self) -> str:
                return "   "

        with pytest.raises(CardError) as exc_info:
            resolve_card(BlankBack("Blank"))

        assert exc_info.value.facet is CardFacet.BACK_IMAGE

    def test_non_shape_value_rejected(self) -> None:
        class Triangle(StubCard):
            def shape(self):  # type: ignore[override]
                return "triangle"

        with pytest.raises(CardError, match="unsupported shape"):
            resolve_card(Triangle("Tri"))

    def test_blank_name_rejected(self) -> None:
        with pytest.raises(CardError) as exc_info:
            resolve_card(StubCard(""))

        assert exc_info.value.facet is CardFacet.NAME

    def test_other_exceptions_propagate(self) -> None:
        class Exploding(StubCard):
            def front_image(self) -> str:
                raise RuntimeError("lookup service down")

        with pytest.raises(RuntimeError, match="lookup service down"):
            resolve_card(Exploding("Boom"))


class TestNormalize:
    def test_preserves_order(self) -> None:
        names = ["c", "a", "b"]

        placed = normalize(StubCard(n) for n in names)

        assert [p.name for p in placed] == names

    def test_duplicates_are_kept(self) -> None:
        card = StubCard("Mountain")

        placed = normalize([card, card])

        assert len(placed) == 2
        assert placed[0] == placed[1]

    def test_entries_expand_to_copies(self) -> None:
        placed = normalize(
            [CardEntry(StubCard("Bolt"), amount=3), StubCard("Shock"), CardEntry(StubCard("Guide"))]
        )

        assert [p.name for p in placed] == ["Bolt", "Bolt", "Bolt", "Shock", "Guide"]

    def test_entry_resolved_once(self) -> None:
        calls: list[str] = []

        class Counting(StubCard):
            def front_image(self) -> str:
                calls.append(self.name)
                return "front.png"

        normalize([CardEntry(Counting("Island"), amount=20)])

        assert calls == ["Island"]

    def test_fails_on_first_bad_card(self) -> None:
        cards = [StubCard("Good"), StubCard("Bad", broken=("shape",)), StubCard("Worse", broken=("shape",))]

        with pytest.raises(CardError) as exc_info:
            normalize(cards)

        assert exc_info.value.card_name == "Bad"

    def test_empty_input(self) -> None:
        assert normalize([]) == []
