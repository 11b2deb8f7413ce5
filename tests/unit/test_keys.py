"""Unit tests for the key mangler."""

import pytest

from scipiper.core.exceptions import KeyManglingError
from scipiper.services.keys import KeyMangler, get_mangled_key


class TestMangle:
    """Tests for KeyMangler.mangle."""

    def test_matches_url_safe_base64(self):
        """Tokens are url-safe base64 of the UTF-8 name, padding kept."""
        assert KeyMangler().mangle("out/B.rds.ind") == "b3V0L0IucmRzLmluZA=="
        assert KeyMangler().mangle("A.ind") == "QS5pbmQ="

    def test_unpadded(self):
        """pad=False drops trailing '='."""
        assert KeyMangler(pad=False).mangle("A.ind") == "QS5pbmQ"

    def test_tokens_are_flat_file_names(self):
        """Path separators and odd characters never reach the token."""
        token = KeyMangler().mangle("../data dir/ü?.rds.ind")
        assert "/" not in token
        assert "\\" not in token
        assert "." not in token

    def test_stable(self):
        """The same name always gives the same token."""
        assert KeyMangler().mangle("B.rds.ind") == KeyMangler().mangle("B.rds.ind")


class TestDemangle:
    """Tests for KeyMangler.demangle."""

    @pytest.mark.parametrize("pad", [True, False])
    def test_round_trip(self, pad):
        """demangle recovers exactly what mangle encoded."""
        mangler = KeyMangler(pad=pad)
        for name in ["A.txt.ind", "out/B.rds.ind", "summary", "a b/ü.ind", "x"]:
            assert mangler.demangle(mangler.mangle(name)) == name

    def test_rejects_foreign_characters(self):
        """Names that are not base64 tokens are a consistency error."""
        with pytest.raises(KeyManglingError) as exc_info:
            KeyMangler().demangle("not a token!")
        assert "not a token!" in str(exc_info.value)

    def test_rejects_undecodable(self):
        """A token of impossible length cannot be decoded."""
        with pytest.raises(KeyManglingError):
            KeyMangler().demangle("Q")

    def test_rejects_non_utf8(self):
        """Tokens must decode to UTF-8 text."""
        with pytest.raises(KeyManglingError):
            KeyMangler().demangle("__8=")

    def test_rejects_padding_mismatch(self):
        """A padded mangler does not accept unpadded tokens, and vice versa."""
        with pytest.raises(KeyManglingError):
            KeyMangler(pad=True).demangle("QS5pbmQ")
        with pytest.raises(KeyManglingError):
            KeyMangler(pad=False).demangle("QS5pbmQ=")


class TestMangleAll:
    """Tests for KeyMangler.mangle_all and get_mangled_key."""

    def test_maps_each_target(self):
        mapping = KeyMangler().mangle_all(["A.ind", "B.rds.ind"])
        assert mapping == {"A.ind": "QS5pbmQ=", "B.rds.ind": "Qi5yZHMuaW5k"}

    def test_duplicates_are_not_collisions(self):
        """The same target twice is fine."""
        mapping = KeyMangler().mangle_all(["A.ind", "A.ind"])
        assert mapping == {"A.ind": "QS5pbmQ="}

    def test_collision_is_fatal(self, monkeypatch):
        """Two distinct targets sharing a token raise and name both targets."""
        mangler = KeyMangler()
        monkeypatch.setattr(mangler, "mangle", lambda target: "same")
        with pytest.raises(KeyManglingError) as exc_info:
            mangler.mangle_all(["A.ind", "B.ind"])
        assert "A.ind" in str(exc_info.value)
        assert "B.ind" in str(exc_info.value)

    def test_get_mangled_key_scalar_and_list(self):
        assert get_mangled_key("A.ind") == "QS5pbmQ="
        assert get_mangled_key(["B.rds.ind", "A.ind"]) == ["Qi5yZHMuaW5k", "QS5pbmQ="]
        assert get_mangled_key("A.ind", pad=False) == "QS5pbmQ"
