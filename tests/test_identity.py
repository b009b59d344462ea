"""Tests for movie identifier utilities."""

from cinevault.core.identity import is_valid_movie_id, new_movie_id


class TestNewMovieId:
    """Test identifier generation."""

    def test_is_32_hex_chars(self):
        """Generated IDs are 32 lowercase hex characters."""
        movie_id = new_movie_id()
        assert len(movie_id) == 32
        assert all(c in "0123456789abcdef" for c in movie_id)

    def test_is_unique(self):
        """Generated IDs do not repeat."""
        ids = {new_movie_id() for _ in range(1000)}
        assert len(ids) == 1000

    def test_generated_ids_are_valid(self):
        """Generated IDs pass validation."""
        assert is_valid_movie_id(new_movie_id())


class TestIsValidMovieId:
    """Test identifier shape validation."""

    def test_rejects_short_id(self):
        assert not is_valid_movie_id("abc123")

    def test_rejects_uppercase(self):
        assert not is_valid_movie_id("A" * 32)

    def test_rejects_non_hex(self):
        assert not is_valid_movie_id("z" * 32)

    def test_rejects_dashed_uuid(self):
        """Dashed UUID strings are not store identifiers."""
        assert not is_valid_movie_id("12345678-1234-5678-1234-567812345678")

    def test_rejects_empty(self):
        assert not is_valid_movie_id("")
