"""Unit tests for the compact lane string codec."""

import pytest

from src.lanes.codec import CHAR_TO_LANE, LANE_TO_CHAR, decode, encode, parse_layout
from src.lanes.types import LaneLayout, LaneType

D = LaneType.DRIVING
P = LaneType.PARKING
S = LaneType.SIDEWALK
B = LaneType.BIKING
U = LaneType.BUS


class TestEncode:
    """Test suite for encode."""

    def test_encode_two_way(self):
        """Test forward lanes, separator, then backward lanes."""
        layout = LaneLayout.of([D, B, P, S], [D, S])
        assert encode(layout) == "dbps/ds"

    def test_encode_empty_backward(self):
        """Test a trailing separator when there are no backward lanes."""
        assert encode(LaneLayout.of([S], [])) == "s/"

    def test_encode_empty_forward(self):
        """Test a leading separator when there are no forward lanes."""
        assert encode(LaneLayout.of([], [U])) == "/u"

    def test_str_matches_encode(self):
        """Test that str() of a layout gives the compact string."""
        layout = LaneLayout.of([D, S], [S])
        assert str(layout) == "ds/s"


class TestDecode:
    """Test suite for decode and parse_layout."""

    def test_decode_simple(self):
        """Test decoding of a well-formed string."""
        layout = decode("ds/s")
        assert layout == LaneLayout.of([D, S], [S])

    def test_decode_all_lane_types(self):
        """Test that every character maps to its lane type."""
        layout = decode("dpsbu/ubspd")
        assert layout.fwd == (D, P, S, B, U)
        assert layout.back == (U, B, S, P, D)

    def test_decode_one_side_only(self):
        """Test strings with lanes on only one side."""
        assert decode("dd/") == LaneLayout.of([D, D], [])
        assert decode("/s") == LaneLayout.of([], [S])

    @pytest.mark.parametrize("s", [
        "",
        "/",
        "dds",
        "d//s",
        "d/s/",
        "d//x",
        "dx/s",
        "d/s ",
        "D/S",
    ])
    def test_decode_rejects_malformed(self, s):
        """Test that malformed strings decode to None."""
        assert decode(s) is None

    def test_parse_layout_reports_reason(self):
        """Test that the strict parser names what is wrong."""
        with pytest.raises(ValueError, match="second '/'"):
            parse_layout("d//s")
        with pytest.raises(ValueError, match="unknown lane character 'x'"):
            parse_layout("dx/s")
        with pytest.raises(ValueError, match="missing '/'"):
            parse_layout("dd")
        with pytest.raises(ValueError, match="no lanes"):
            parse_layout("/")

    def test_round_trip(self):
        """Test that decoding an encoded layout gives it back."""
        layouts = [
            LaneLayout.of([D, S], [D, S]),
            LaneLayout.of([D, D, U, B, P, S], []),
            LaneLayout.of([], [B, P]),
            LaneLayout.of([U], [U, U, S]),
        ]
        for layout in layouts:
            assert decode(encode(layout)) == layout


class TestAlphabet:
    """Test suite for the lane character tables."""

    def test_every_lane_type_has_a_character(self):
        """Test that the alphabet covers the whole enumeration."""
        assert set(LANE_TO_CHAR) == set(LaneType)

    def test_characters_are_unique(self):
        """Test that the mapping is one-to-one."""
        assert len(CHAR_TO_LANE) == len(LANE_TO_CHAR)
        assert "/" not in CHAR_TO_LANE
