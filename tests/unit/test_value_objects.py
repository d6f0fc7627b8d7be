"""Test bounded value objects: handicap, Tee, Hole, HoleScore, MatchPlayer."""

import math
from decimal import Decimal

import pytest

from tournament_core.core.enums import TeeCategory, TeeGender
from tournament_core.core.errors import InvalidValueError, OutOfRangeError
from tournament_core.domain.value_objects import (
    Hole,
    HoleScore,
    MatchPlayer,
    Tee,
    coerce_players,
    validate_custom_handicap,
)


def _tee(**overrides) -> Tee:
    fields = {
        "tee_category": "AMATEUR",
        "identifier": "Yellow",
        "course_rating": 71.2,
        "slope_rating": 128,
    }
    fields.update(overrides)
    return Tee(**fields)


class TestCustomHandicap:
    @pytest.mark.parametrize("value", [-10.0, 0, 18.4, 54.0, Decimal("12.5")])
    def test_in_range(self, value):
        assert validate_custom_handicap(value) == float(value)

    @pytest.mark.parametrize("value", [-10.1, 54.1, 100])
    def test_out_of_range(self, value):
        with pytest.raises(OutOfRangeError, match="Custom handicap must be between"):
            validate_custom_handicap(value)

    @pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
    def test_non_finite(self, value):
        with pytest.raises(InvalidValueError):
            validate_custom_handicap(value)

    @pytest.mark.parametrize("value", ["12", None, True, [1]])
    def test_non_number(self, value):
        with pytest.raises(InvalidValueError, match="valid number"):
            validate_custom_handicap(value)

    @pytest.mark.parametrize("value", [10**400, -(10**400), Decimal("sNaN")])
    def test_unconvertible_number(self, value):
        with pytest.raises(InvalidValueError, match="valid number"):
            validate_custom_handicap(value)

    def test_huge_decimal_is_not_finite(self):
        with pytest.raises(InvalidValueError, match="finite"):
            validate_custom_handicap(Decimal("1e400"))


class TestTee:
    def test_valid(self):
        tee = _tee(gender="FEMALE")
        assert tee.tee_category is TeeCategory.AMATEUR
        assert tee.gender is TeeGender.FEMALE
        assert tee.identifier == "Yellow"

    def test_unisex_by_default(self):
        assert _tee().gender is None

    def test_course_rating_lower_bound(self):
        assert _tee(course_rating=50.0).course_rating == 50.0
        with pytest.raises(OutOfRangeError, match="Course rating"):
            _tee(course_rating=49.9)

    def test_course_rating_upper_bound(self):
        assert _tee(course_rating=90.0).course_rating == 90.0
        with pytest.raises(OutOfRangeError):
            _tee(course_rating=90.1)

    def test_slope_rating_bounds(self):
        assert _tee(slope_rating=55).slope_rating == 55
        assert _tee(slope_rating=155).slope_rating == 155
        with pytest.raises(OutOfRangeError, match="Slope rating"):
            _tee(slope_rating=54)
        with pytest.raises(OutOfRangeError):
            _tee(slope_rating=156)

    def test_ratings_stored_as_float(self):
        tee = _tee(course_rating=Decimal("71.2"), slope_rating=128)
        dto = tee.to_dto()
        assert type(dto["course_rating"]) is float
        assert type(dto["slope_rating"]) is float
        assert dto["course_rating"] == 71.2
        assert dto["slope_rating"] == 128

    def test_unknown_category(self):
        with pytest.raises(InvalidValueError, match="tee category"):
            _tee(tee_category="BLUE")

    def test_unknown_gender(self):
        with pytest.raises(InvalidValueError, match="tee gender"):
            _tee(gender="X")

    @pytest.mark.parametrize("identifier", ["", "   ", None])
    def test_identifier_required(self, identifier):
        with pytest.raises(InvalidValueError, match="identifier"):
            _tee(identifier=identifier)

    def test_dto_round_trip(self):
        tee = _tee(gender="MALE")
        dto = tee.to_dto()
        assert dto["tee_category"] == "AMATEUR"
        assert dto["gender"] == "MALE"
        assert Tee.from_dto(dto) == tee

    def test_from_dto_revalidates(self):
        dto = _tee().to_dto()
        dto["slope_rating"] = 200
        with pytest.raises(OutOfRangeError):
            Tee.from_dto(dto)

    def test_frozen(self):
        tee = _tee()
        with pytest.raises(AttributeError):
            tee.course_rating = 60.0  # type: ignore[misc]


class TestHole:
    def test_valid(self):
        hole = Hole(hole_number=1, par=4, stroke_index=7)
        assert hole.to_dto() == {"hole_number": 1, "par": 4, "stroke_index": 7}

    @pytest.mark.parametrize("number", [0, 19])
    def test_hole_number_bounds(self, number):
        with pytest.raises(OutOfRangeError, match="Hole number"):
            Hole(hole_number=number, par=4, stroke_index=1)

    @pytest.mark.parametrize("par", [2, 6])
    def test_par_bounds(self, par):
        with pytest.raises(OutOfRangeError, match="Par"):
            Hole(hole_number=1, par=par, stroke_index=1)

    @pytest.mark.parametrize("index", [0, 19])
    def test_stroke_index_bounds(self, index):
        with pytest.raises(OutOfRangeError, match="Stroke index"):
            Hole(hole_number=1, par=4, stroke_index=index)

    def test_missing_field(self):
        with pytest.raises(InvalidValueError, match="Par is required"):
            Hole.from_dto({"hole_number": 1, "stroke_index": 1})

    def test_non_integer(self):
        with pytest.raises(InvalidValueError, match="integer"):
            Hole(hole_number=1.5, par=4, stroke_index=1)

    def test_from_dto(self):
        assert Hole.from_dto({"hole_number": 18, "par": 5, "stroke_index": 18}) == Hole(18, 5, 18)


class TestHoleScore:
    @pytest.mark.parametrize("value", [1, 5, 9])
    def test_valid(self, value):
        score = HoleScore.of(value)
        assert score.value == value
        assert not score.is_picked_up
        assert str(score) == str(value)

    @pytest.mark.parametrize("value", [0, 10])
    def test_out_of_range(self, value):
        with pytest.raises(OutOfRangeError, match="Hole score"):
            HoleScore.of(value)

    def test_picked_up(self):
        score = HoleScore.picked_up()
        assert score.is_picked_up
        assert score.value is None
        assert str(score) == "-"
        assert score == HoleScore(None)


class TestMatchPlayer:
    def test_normalizes_fields(self):
        player = MatchPlayer(user_id="p1", tee_category="SENIOR", tee_gender="MALE",
                             strokes_received=[3, 7])
        assert player.tee_category is TeeCategory.SENIOR
        assert player.tee_gender is TeeGender.MALE
        assert player.strokes_received == (3, 7)

    def test_user_id_required(self):
        with pytest.raises(InvalidValueError, match="user_id"):
            MatchPlayer(user_id="")

    def test_stroke_holes_bounded(self):
        with pytest.raises(OutOfRangeError, match="Stroke hole"):
            MatchPlayer(user_id="p1", strokes_received=(19,))

    def test_handicap_must_be_number(self):
        with pytest.raises(InvalidValueError):
            MatchPlayer(user_id="p1", playing_handicap="ten")

    def test_handicap_stored_as_float(self):
        player = MatchPlayer(user_id="p1", playing_handicap=Decimal("12.5"))
        assert type(player.to_dto()["playing_handicap"]) is float
        assert MatchPlayer(user_id="p2").playing_handicap is None

    def test_dto_round_trip(self):
        player = MatchPlayer(user_id="p1", playing_handicap=12.0, tee_category="AMATEUR",
                             strokes_received=(1, 2))
        dto = player.to_dto()
        assert dto["strokes_received"] == [1, 2]
        assert MatchPlayer.from_dto(dto) == player

    def test_coerce(self):
        player = MatchPlayer(user_id="p1")
        assert MatchPlayer.coerce(player) is player
        assert MatchPlayer.coerce({"user_id": "p1"}) == player
        with pytest.raises(InvalidValueError):
            MatchPlayer.coerce("p1")

    def test_coerce_players(self):
        assert coerce_players(None) == ()
        players = coerce_players([{"user_id": "a"}, MatchPlayer(user_id="b")])
        assert [p.user_id for p in players] == ["a", "b"]
