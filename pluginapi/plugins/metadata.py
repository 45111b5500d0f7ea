"""Game metadata record and the provider interface plugins implement."""

from abc import ABC, abstractmethod
from datetime import date
from typing import FrozenSet, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class GameMetadata(BaseModel):
    """Metadata about one game, as returned by a provider.

    Only ``title`` and ``original_id`` are required. ``original_id`` is the
    game's identifier in the provider's own data source (e.g. a slug or an
    app id) and must be stable so the host can call ``fetch_by_id`` with it.
    """

    model_config = ConfigDict(frozen=True)

    title: str = Field(..., min_length=1)
    original_id: str
    description: Optional[str] = None
    cover_url: Optional[str] = None
    screenshot_urls: Optional[Tuple[str, ...]] = None
    video_urls: Optional[Tuple[str, ...]] = None
    release_date: Optional[date] = None
    user_rating: Optional[int] = Field(default=None, ge=0, le=100)
    critics_rating: Optional[int] = Field(default=None, ge=0, le=100)
    developed_by: Optional[FrozenSet[str]] = None
    published_by: Optional[FrozenSet[str]] = None
    genres: Optional[FrozenSet[str]] = None
    themes: Optional[FrozenSet[str]] = None
    keywords: Optional[FrozenSet[str]] = None
    features: Optional[FrozenSet[str]] = None
    perspectives: Optional[FrozenSet[str]] = None

    def to_dict(self) -> dict:
        """Serialize to JSON-safe dict, leaving out fields that are not set."""
        data = self.model_dump(mode="json", exclude_none=True)
        for key, value in data.items():
            # Sets come out in arbitrary order
            if isinstance(getattr(self, key), frozenset):
                data[key] = sorted(value)
        return data


class MetadataProviderError(Exception):
    """A provider could not reach or understand its data source.

    Args:
        message: What went wrong
        retryable: True for transient conditions (timeouts, rate limits)
    """

    def __init__(self, message: str, retryable: bool = False):
        super().__init__(message)
        self.retryable = retryable


class GameMetadataProvider(ABC):
    """Capability for looking up game metadata in one data source.

    Providers are built by their plugin with the plugin's validated
    configuration; lookups never receive configuration as arguments. The host
    may call lookups concurrently, so any client state must be safe to share.
    """

    def __init__(self, config: Optional[Mapping[str, Optional[str]]] = None):
        self.config = dict(config or {})

    @abstractmethod
    def fetch_by_title(self, game_title: str, max_results: int) -> List[GameMetadata]:
        """Match a title to games in the data source.

        Args:
            game_title: Usually the name of a file or folder the host found in a library
            max_results: Maximum number of results to return (fewer is fine)

        Returns:
            Matches ordered best first, or an empty list if nothing matched
        """
        ...

    @abstractmethod
    def fetch_by_id(self, game_id: str) -> Optional[GameMetadata]:
        """Look up a game by its identifier in this data source.

        Args:
            game_id: The ``original_id`` of a previously returned record

        Returns:
            The game's metadata, or None if the id is unknown
        """
        ...

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}>"
