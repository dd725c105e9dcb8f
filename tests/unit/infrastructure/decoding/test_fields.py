"""Tests for path lookup and raw-value readers."""

from datetime import datetime, timezone

from scrobblekit.domain.value_objects.field_result import Absent, Malformed, Present
from scrobblekit.infrastructure.decoding.fields import (
    MISSING,
    NOT_A_NUMBER,
    NOT_A_TIMESTAMP,
    NOT_A_URL,
    is_blank,
    lookup,
    lookup_first,
    read_flag,
    read_integer,
    read_link,
    read_number,
    read_text,
    read_timestamp,
)

TRUTHY = frozenset({"1"})


class TestLookup:
    """Test dotted path lookup."""

    def test_nested_path(self) -> None:
        """Test walking into nested objects."""
        raw = {"stats": {"playcount": "12"}}
        assert lookup(raw, "stats.playcount") == "12"

    def test_attr_path(self) -> None:
        """Test keys with @ and # work like any other segment."""
        raw = {"@attr": {"rank": "3"}, "#text": "Cher"}
        assert lookup(raw, "@attr.rank") == "3"
        assert lookup(raw, "#text") == "Cher"

    def test_missing_key(self) -> None:
        """Test a missing segment gives MISSING."""
        assert lookup({"name": "x"}, "stats.playcount") is MISSING

    def test_path_through_empty_string_container(self) -> None:
        """Test Last.fm's "" for an empty container ends the lookup."""
        assert lookup({"tags": ""}, "tags.tag") is MISSING

    def test_null_is_missing(self) -> None:
        """Test JSON null is treated as absent."""
        assert lookup({"mbid": None}, "mbid") is MISSING

    def test_lookup_first_prefers_non_blank(self) -> None:
        """Test aliases are tried in order, skipping blank values."""
        raw = {"name": "", "#text": "Cher"}
        assert lookup_first(raw, ("name", "#text")) == "Cher"

    def test_lookup_first_keeps_existing_blank(self) -> None:
        """Test an explicit "" survives when nothing better exists."""
        assert lookup_first({"mbid": ""}, ("mbid", "id")) == ""

    def test_lookup_first_all_missing(self) -> None:
        """Test MISSING when no path exists."""
        assert lookup_first({}, ("a", "b")) is MISSING


class TestIsBlank:
    """Test is_blank()."""

    def test_blank_values(self) -> None:
        """Test everything Last.fm uses to say 'nothing'."""
        for value in (MISSING, None, "", "  \n", {}):
            assert is_blank(value)

    def test_non_blank_values(self) -> None:
        """Test real values, including falsy ones."""
        for value in ("0", 0, [], {"#text": ""}, False):
            assert not is_blank(value)


class TestReadInteger:
    """Test integer reader."""

    def test_string_first(self) -> None:
        """Test the primary string encoding."""
        assert read_integer("1234") == Present(1234)
        assert read_integer(" 7 ") == Present(7)

    def test_native_numbers(self) -> None:
        """Test native ints and integral floats."""
        assert read_integer(1234) == Present(1234)
        assert read_integer(3.0) == Present(3)

    def test_absent(self) -> None:
        """Test missing, null and empty string."""
        assert isinstance(read_integer(MISSING), Absent)
        assert isinstance(read_integer(None), Absent)
        assert isinstance(read_integer(""), Absent)

    def test_garbage_is_malformed(self) -> None:
        """Test values that are present but not numbers."""
        for value in ("not-a-number", "1.5", 1.5, {"x": 1}, [1]):
            result = read_integer(value)
            assert isinstance(result, Malformed)
            assert result.reason == NOT_A_NUMBER

    def test_non_ascii_and_underscored_digits(self) -> None:
        """Test only plain ASCII digits count as a number."""
        for value in ("1_000", "١٢٣", "１２"):
            result = read_integer(value)
            assert isinstance(result, Malformed)
            assert result.reason == NOT_A_NUMBER

    def test_signed_strings(self) -> None:
        """Test a leading sign is fine."""
        assert read_integer("-3") == Present(-3)
        assert read_integer("+3") == Present(3)

    def test_bool_is_not_a_number(self) -> None:
        """Test True/False are rejected even though bool subclasses int."""
        assert isinstance(read_integer(True), Malformed)
        assert isinstance(read_integer(False), Malformed)


class TestReadNumber:
    """Test decimal reader."""

    def test_string_and_native(self) -> None:
        """Test both encodings."""
        assert read_number("0.75") == Present(0.75)
        assert read_number(1) == Present(1.0)
        assert read_number(0.5) == Present(0.5)

    def test_huge_integer_is_malformed(self) -> None:
        """Test a JSON integer beyond float range does not blow up."""
        result = read_number(10**400)
        assert isinstance(result, Malformed)
        assert result.reason == NOT_A_NUMBER

    def test_string_forms(self) -> None:
        """Test decimal, exponent and junk strings."""
        assert read_number("1e3") == Present(1000.0)
        assert read_number(".5") == Present(0.5)
        assert isinstance(read_number("1_000.5"), Malformed)
        assert isinstance(read_number("1" * 400), Malformed)

    def test_non_finite_is_malformed(self) -> None:
        """Test nan/inf are not accepted as counters."""
        for value in ("nan", "inf", float("inf")):
            assert isinstance(read_number(value), Malformed)

    def test_bool_is_not_a_number(self) -> None:
        """Test booleans are rejected."""
        assert isinstance(read_number(True), Malformed)


class TestReadText:
    """Test text reader."""

    def test_strict_treats_empty_as_absent(self) -> None:
        """Test an empty string cannot satisfy a strict field."""
        assert isinstance(read_text("", keep_empty=False), Absent)

    def test_strict_treats_whitespace_as_absent(self) -> None:
        """Test a blank-looking strict value cannot satisfy the field."""
        assert isinstance(read_text("  \t", keep_empty=False), Absent)
        assert read_text("  ", keep_empty=True) == Present("  ")

    def test_optional_keeps_empty(self) -> None:
        """Test optional fields keep the explicit empty string."""
        assert read_text("", keep_empty=True) == Present("")

    def test_integer_name(self) -> None:
        """Test names sent as JSON numbers become strings."""
        assert read_text(1975, keep_empty=False) == Present("1975")

    def test_objects_are_malformed(self) -> None:
        """Test non-string values fail."""
        assert isinstance(read_text({"a": 1}, keep_empty=False), Malformed)
        assert isinstance(read_text(True, keep_empty=False), Malformed)


class TestReadLink:
    """Test URL reader."""

    def test_http_url(self) -> None:
        """Test a regular Last.fm URL."""
        url = "https://www.last.fm/music/Cher"
        assert read_link(url) == Present(url)

    def test_empty_is_absent(self) -> None:
        """Test empty artwork URLs."""
        assert isinstance(read_link(""), Absent)

    def test_not_a_url(self) -> None:
        """Test values without scheme or host."""
        for value in ("not a url", "ftp://example.com/x", "https://", 42):
            result = read_link(value)
            assert isinstance(result, Malformed)
            assert result.reason == NOT_A_URL


class TestReadFlag:
    """Test boolean reader."""

    def test_string_flags(self) -> None:
        """Test "0"/"1" encoding."""
        assert read_flag("1", TRUTHY) == Present(True)
        assert read_flag("0", TRUTHY) == Present(False)

    def test_custom_truthy(self) -> None:
        """Test the nowplaying="true" style."""
        assert read_flag("true", frozenset({"true"})) == Present(True)

    def test_native_values(self) -> None:
        """Test JSON booleans and numbers."""
        assert read_flag(True, TRUTHY) == Present(True)
        assert read_flag(1, TRUTHY) == Present(True)
        assert read_flag(0, TRUTHY) == Present(False)

    def test_streamable_object(self) -> None:
        """Test {"#text": "1", "fulltrack": "0"} reads its #text."""
        assert read_flag({"#text": "1", "fulltrack": "0"}, TRUTHY) == Present(True)

    def test_never_malformed(self) -> None:
        """Test anything unexpected reads as False."""
        assert read_flag("yes please", TRUTHY) == Present(False)
        assert read_flag([1], TRUTHY) == Present(False)

    def test_missing_is_absent(self) -> None:
        """Test missing flags are left to the default."""
        assert isinstance(read_flag(MISSING, TRUTHY), Absent)


class TestReadTimestamp:
    """Test Unix timestamp reader."""

    def test_uts_object(self) -> None:
        """Test the {"uts": ..., "#text": ...} form."""
        result = read_timestamp({"uts": "1700000000", "#text": "14 Nov 2023, 22:13"})
        assert result == Present(datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc))

    def test_unixtime_object(self) -> None:
        """Test the {"unixtime": ...} form used by user profiles."""
        result = read_timestamp({"unixtime": "0", "#text": 0})
        assert result == Present(datetime(1970, 1, 1, tzinfo=timezone.utc))

    def test_raw_seconds(self) -> None:
        """Test bare seconds as used by chart ranges."""
        assert read_timestamp("1108296000") == Present(
            datetime(2005, 2, 13, 12, 0, tzinfo=timezone.utc)
        )

    def test_garbage(self) -> None:
        """Test unparsable values."""
        for value in ("soon", {"#text": "yesterday"}, {"uts": "soon"}):
            result = read_timestamp(value)
            assert isinstance(result, Malformed)
            assert result.reason == NOT_A_TIMESTAMP
