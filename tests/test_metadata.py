"""Tests for the GameMetadata record and provider interface."""

from datetime import date

import pytest
from pydantic import ValidationError

from pluginapi.plugins.metadata import GameMetadata, GameMetadataProvider, MetadataProviderError


class TestGameMetadata:
    """Tests for GameMetadata."""

    def test_required_fields_only(self):
        record = GameMetadata(title="Portal", original_id="portal")
        assert record.description is None
        assert record.genres is None
        assert record.to_dict() == {"title": "Portal", "original_id": "portal"}

    def test_title_must_not_be_empty(self):
        with pytest.raises(ValidationError):
            GameMetadata(title="", original_id="portal")

    def test_original_id_may_be_empty(self):
        """Ids belong to the data source; any string is accepted."""
        assert GameMetadata(title="Portal", original_id="").original_id == ""

    @pytest.mark.parametrize("rating", [-1, 101])
    def test_ratings_are_bounded(self, rating):
        with pytest.raises(ValidationError):
            GameMetadata(title="Portal", original_id="portal", user_rating=rating)
        with pytest.raises(ValidationError):
            GameMetadata(title="Portal", original_id="portal", critics_rating=rating)

    def test_rating_bounds_inclusive(self):
        record = GameMetadata(title="Portal", original_id="portal", user_rating=0, critics_rating=100)
        assert record.user_rating == 0
        assert record.critics_rating == 100

    def test_collections_are_immutable(self):
        """Lists become tuples and sets become frozensets."""
        record = GameMetadata(
            title="Portal",
            original_id="portal",
            screenshot_urls=["https://img/1.png", "https://img/2.png"],
            genres={"Puzzle", "Platform"},
        )
        assert record.screenshot_urls == ("https://img/1.png", "https://img/2.png")
        assert record.genres == frozenset({"Puzzle", "Platform"})

    def test_record_is_frozen(self):
        record = GameMetadata(title="Portal", original_id="portal")
        with pytest.raises(ValidationError):
            record.title = "Portal 2"

    def test_to_dict_is_json_safe(self):
        record = GameMetadata(
            title="Portal",
            original_id="portal",
            release_date=date(2007, 10, 10),
            developed_by={"Valve"},
            keywords={"portals", "cake"},
            video_urls=["https://video/1"],
        )
        data = record.to_dict()
        assert data["release_date"] == "2007-10-10"
        assert data["developed_by"] == ["Valve"]
        assert data["keywords"] == ["cake", "portals"]
        assert data["video_urls"] == ["https://video/1"]


class TestGameMetadataProvider:
    """Tests for the provider base class."""

    def test_cannot_instantiate_interface(self):
        with pytest.raises(TypeError):
            GameMetadataProvider()

    def test_config_is_copied(self):
        class Provider(GameMetadataProvider):
            def fetch_by_title(self, game_title, max_results):
                return []

            def fetch_by_id(self, game_id):
                return None

        config = {"apiKey": "secret"}
        provider = Provider(config)
        config["apiKey"] = "changed"
        assert provider.config == {"apiKey": "secret"}
        assert Provider().config == {}

    def test_provider_error_retryable_flag(self):
        assert MetadataProviderError("down").retryable is False
        assert MetadataProviderError("slow", retryable=True).retryable is True
