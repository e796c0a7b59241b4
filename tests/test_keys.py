"""Tests for blob key generation, key recovery and field coercion."""

from datetime import datetime, timezone

import pytest

from catalog_admin.utils.coerce import as_bool, as_datetime, as_float, as_int, as_str, as_str_list
from catalog_admin.utils.keys import generate_asset_key, key_from_url, sanitize_filename


class TestSanitizeFilename:
    """Tests for sanitize_filename."""

    def test_whitespace_becomes_underscores(self) -> None:
        """Runs of whitespace collapse to one underscore."""
        assert sanitize_filename("Red  Summer Tee.png") == "Red_Summer_Tee.png"

    def test_directories_are_dropped(self) -> None:
        """Only the base name survives."""
        assert sanitize_filename("../../etc/passwd") == "passwd"
        assert sanitize_filename("C:\\Users\\me\\shot 1.jpg") == "shot_1.jpg"

    def test_empty_name_gets_fallback(self) -> None:
        """Empty or missing names still produce a usable key segment."""
        assert sanitize_filename("") == "image"
        assert sanitize_filename(None) == "image"


class TestGenerateAssetKey:
    """Tests for generate_asset_key."""

    def test_format(self) -> None:
        """Keys are namespace/millis-token-filename."""
        key = generate_asset_key("products", "Red Tee.png", timestamp_ms=1718000000000, token="abc")
        assert key == "products/1718000000000-abc-Red_Tee.png"

    def test_keys_are_unique(self) -> None:
        """Two uploads of the same file in the same millisecond differ."""
        a = generate_asset_key("gallery", "hero.jpg", timestamp_ms=1)
        b = generate_asset_key("gallery", "hero.jpg", timestamp_ms=1)
        assert a != b
        assert a.startswith("gallery/1-")
        assert a.endswith("-hero.jpg")


class TestKeyFromUrl:
    """Tests for legacy key recovery from URLs."""

    def test_path_mirrors_key(self) -> None:
        """The path, minus one leading slash, is percent-decoded."""
        url = "https://cdn.example.com/products/1-abc-Red%20Tee.png"
        assert key_from_url(url) == "products/1-abc-Red Tee.png"

    def test_only_one_slash_stripped(self) -> None:
        """A doubled slash keeps the second one."""
        assert key_from_url("https://cdn.example.com//gallery/x.png") == "/gallery/x.png"

    @pytest.mark.parametrize("url", ["", None, "/placeholder.svg?height=400&width=300", "not a url"])
    def test_unparseable_urls_yield_empty(self, url) -> None:
        """Relative or empty URLs give no key."""
        assert key_from_url(url) == ""


class TestCoercion:
    """Tests for the total coercion helpers."""

    def test_as_str(self) -> None:
        assert as_str(12.0) == "12"
        assert as_str(12.5) == "12.5"
        assert as_str(None, "x") == "x"
        assert as_str({"a": 1}) == ""

    def test_as_float_accepts_currency_strings(self) -> None:
        assert as_float("$1,200.50") == 1200.5
        assert as_float("abc") == 0.0
        assert as_float(True) == 0.0

    def test_as_int(self) -> None:
        assert as_int("7") == 7
        assert as_int(float("inf")) == 0
        assert as_int([1]) == 0

    def test_as_bool(self) -> None:
        assert as_bool("yes") is True
        assert as_bool(0) is False
        assert as_bool(None, True) is True

    def test_as_str_list_drops_blanks(self) -> None:
        assert as_str_list(["a", "", None, 3]) == ["a", "3"]
        assert as_str_list("a,b") == []

    def test_as_datetime(self) -> None:
        """Firestore timestamp maps and epoch seconds are accepted."""
        expected = datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert as_datetime({"seconds": 1704067200}) == expected
        assert as_datetime(1704067200) == expected
        assert as_datetime(expected) is expected
        assert as_datetime("2024-01-01") is None
