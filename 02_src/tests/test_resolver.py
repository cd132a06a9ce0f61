"""Tests for DestinationResolver."""

import pytest

from log_reporter.destinations import DestinationResolver
from log_reporter.errors import UnknownSourceError
from log_reporter.models import Destination


class TestDestinationResolver:
    """Tests for DestinationResolver.resolve()."""

    def test_resolve_known_token(self, destination):
        """Test that a mapped token returns its destination."""
        resolver = DestinationResolver({destination.token: destination})

        assert resolver.resolve("real_token") is destination
        assert "real_token" in resolver
        assert len(resolver) == 1

    def test_unknown_token_raises(self, destination):
        """Test that an unmapped token raises with the token attached."""
        resolver = DestinationResolver({destination.token: destination})

        with pytest.raises(UnknownSourceError) as exc_info:
            resolver.resolve("other_token")

        assert exc_info.value.token == "other_token"
        assert "other_token" not in resolver

    def test_same_token_same_destination(self, destination):
        """Test that lookups are stable."""
        resolver = DestinationResolver({destination.token: destination})

        assert resolver.resolve("real_token") == resolver.resolve("real_token")

    def test_mapping_is_copied(self, destination):
        """Test that later changes to the source mapping are not visible."""
        mapping = {destination.token: destination}
        resolver = DestinationResolver(mapping)
        mapping["late"] = Destination("late", "staging", "https://k@example.com/2")

        assert "late" not in resolver

    def test_empty_mapping(self):
        """Test that every token is unknown without mappings."""
        resolver = DestinationResolver({})

        with pytest.raises(UnknownSourceError):
            resolver.resolve("")
