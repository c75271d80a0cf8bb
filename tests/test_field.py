"""Tests for field value parsing, rendering and escaping."""

import pytest

from hl7codec.common.errors import FieldNestingError
from hl7codec.model.delimiters import DelimiterSet
from hl7codec.model.field import (
    Repetitions,
    escape,
    normalize_field,
    parse_field,
    render_field,
    split_escaped,
    unescape,
)

DELIMS = DelimiterSet()
CUSTOM = DelimiterSet(field="*", component=".", repetition="%", escape="#", subcomponent="@")


class TestParseField:
    def test_plain_leaf(self) -> None:
        assert parse_field("xxx", DELIMS) == "xxx"

    def test_empty_leaf(self) -> None:
        assert parse_field("", DELIMS) == ""

    def test_components_and_subcomponents(self) -> None:
        value = parse_field("xx^x&y&z^yy^zz", DELIMS)
        assert value == ["xx", ["x", "y", "z"], "yy", "zz"]
        assert value[1][1] == "y"

    def test_empty_components_kept(self) -> None:
        assert parse_field("PAT001^^^HOSP^MR", DELIMS) == ["PAT001", "", "", "HOSP", "MR"]
        assert parse_field("a^", DELIMS) == ["a", ""]

    def test_lone_subcomponents_keep_component_level(self) -> None:
        assert parse_field("a&b", DELIMS) == [["a", "b"]]

    def test_repetitions(self) -> None:
        value = parse_field("A~B^C", DELIMS)
        assert isinstance(value, Repetitions)
        assert value == ["A", ["B", "C"]]

    def test_custom_delimiters(self) -> None:
        assert parse_field("x.x@y@z.z", CUSTOM) == ["x", ["x", "y", "z"], "z"]

    def test_escaped_separator_does_not_split(self) -> None:
        assert parse_field("a\\S\\b^c", DELIMS) == ["a^b", "c"]

    def test_formatting_sequence_with_custom_delimiter_inside(self) -> None:
        # ".br" contains the component separator "."
        assert parse_field("line1#.br#line2", CUSTOM) == "line1#.br#line2"


class TestRenderField:
    def test_leaf(self) -> None:
        assert render_field("xxx", DELIMS) == "xxx"

    def test_nested(self) -> None:
        assert render_field(["a", ["b1", "b2"], "c"], DELIMS) == "a^b1&b2^c"

    def test_trailing_empty_component(self) -> None:
        assert render_field(["a", "", ""], DELIMS) == "a^^"

    def test_repetitions(self) -> None:
        assert render_field(Repetitions(["A", ["B", "C"]]), DELIMS) == "A~B^C"

    def test_custom_delimiters(self) -> None:
        assert render_field(["x", ["x", "y", "z"], "z"], CUSTOM) == "x.x@y@z.z"

    def test_too_deep(self) -> None:
        with pytest.raises(FieldNestingError):
            render_field([["a", ["b", "c"]]], DELIMS)

    def test_nested_repetitions(self) -> None:
        with pytest.raises(FieldNestingError, match="field level"):
            render_field(["a", Repetitions(["b", "c"])], DELIMS)

    @pytest.mark.parametrize(
        "text",
        [
            "xx^x&y&z^yy^zz",
            "PAT001^^^HOSP^MR",
            "a&b",
            "^^",
            "A~B^C~~D&E",
            "a\\S\\b\\E\\c",
            "\\H\\bold\\N\\ text\\X0D0A\\",
            "C:\\E\\dir\\E\\file",
            "\\E\\H\\E\\",
            "\\E\\X0D\\E\\",
            "a\\E\\F\\E\\b",
        ],
    )
    def test_round_trip(self, text: str) -> None:
        assert render_field(parse_field(text, DELIMS), DELIMS) == text


class TestEscaping:
    def test_escape_delimiters(self) -> None:
        assert escape("a|b^c&d~e\\f", DELIMS) == "a\\F\\b\\S\\c\\T\\d\\R\\e\\E\\f"

    def test_unescape_delimiters(self) -> None:
        assert unescape("a\\F\\b\\S\\c\\T\\d\\R\\e\\E\\f", DELIMS) == "a|b^c&d~e\\E\\f"

    def test_escaped_escape_stays_encoded(self) -> None:
        assert unescape("\\E\\X0D\\E\\", DELIMS) == "\\E\\X0D\\E\\"
        assert escape("\\E\\X0D\\E\\", DELIMS) == "\\E\\X0D\\E\\"
        assert escape("\\X0D\\", DELIMS) == "\\X0D\\"

    def test_unknown_sequence_kept(self) -> None:
        assert unescape("\\H\\x\\N\\", DELIMS) == "\\H\\x\\N\\"
        assert escape("\\H\\x\\N\\", DELIMS) == "\\H\\x\\N\\"

    def test_unterminated_escape_is_literal(self) -> None:
        assert unescape("a\\b", DELIMS) == "a\\b"
        assert escape("a\\b", DELIMS) == "a\\E\\b"

    def test_custom_escape_character(self) -> None:
        assert unescape("a#S#b", CUSTOM) == "a.b"
        assert escape("a.b*c", CUSTOM) == "a#S#b#F#c"

    def test_split_skips_sequences(self) -> None:
        assert split_escaped("a\\F\\b|c", "|", "\\") == ["a\\F\\b", "c"]


class TestNormalizeField:
    def test_none_and_empty_list(self) -> None:
        assert normalize_field(None) == ""
        assert normalize_field([]) == ""

    def test_scalars(self) -> None:
        assert normalize_field(42) == "42"

    def test_nested_tuples(self) -> None:
        assert normalize_field(("a", ("b1", "b2"), None)) == ["a", ["b1", "b2"], ""]

    def test_repetitions_preserved(self) -> None:
        value = normalize_field(Repetitions(["a", ["b", "c"]]))
        assert isinstance(value, Repetitions)

    def test_too_deep_rejected(self) -> None:
        with pytest.raises(FieldNestingError, match="nested deeper"):
            normalize_field([["a", ["b", "c"]]])

    def test_repetitions_below_field_level_rejected(self) -> None:
        with pytest.raises(FieldNestingError, match="field level"):
            normalize_field(["a", Repetitions(["b", "c"])])
