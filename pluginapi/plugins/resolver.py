"""Metadata resolution - the host side of the provider call boundary."""

import asyncio
import logging
from typing import Callable, List, Optional, TypeVar

from pluginapi.plugins.metadata import GameMetadata, GameMetadataProvider, MetadataProviderError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class MetadataResolver:
    """Calls providers with a time limit and contains their failures.

    Provider code is synchronous, so each call runs in a worker thread. A
    lookup that fails or times out is logged and reported as a miss, so one
    broken data source never breaks the library scan that triggered it.

    A thread cannot be cancelled, so a timed-out call keeps running in the
    default executor until the provider returns. Providers that talk to a
    data source must put their own timeouts on those calls, or hung lookups
    will pile up and exhaust the executor's worker threads.
    """

    def __init__(self, timeout: float):
        self.timeout = timeout

    async def fetch_by_title(
        self,
        provider: GameMetadataProvider,
        game_title: str,
        max_results: int,
    ) -> List[GameMetadata]:
        """Fetch candidates for a title, best match first.

        Returns:
            At most max_results records; empty on no match or provider failure
        """
        if max_results < 0:
            raise ValueError("max_results must not be negative")

        try:
            results = await self._call(provider, provider.fetch_by_title, game_title, max_results)
        except MetadataProviderError as e:
            logger.warning(
                f"{provider!r} failed to fetch '{game_title}' (retryable={e.retryable}): {e}"
            )
            return []

        results = list(results or [])
        if len(results) > max_results:
            logger.warning(
                f"{provider!r} returned {len(results)} results for '{game_title}', "
                f"truncating to {max_results}"
            )
            results = results[:max_results]
        return results

    async def fetch_by_id(self, provider: GameMetadataProvider, game_id: str) -> Optional[GameMetadata]:
        """Fetch a record by its provider-specific id.

        Returns:
            The record, or None on no match or provider failure
        """
        try:
            return await self._call(provider, provider.fetch_by_id, game_id)
        except MetadataProviderError as e:
            logger.warning(f"{provider!r} failed to fetch id '{game_id}' (retryable={e.retryable}): {e}")
            return None

    async def _call(self, provider: GameMetadataProvider, func: Callable[..., T], *args) -> T:
        try:
            return await asyncio.wait_for(asyncio.to_thread(func, *args), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            raise MetadataProviderError(
                f"Lookup timed out after {self.timeout}s", retryable=True
            ) from e
        except MetadataProviderError:
            raise
        except Exception as e:
            logger.exception(f"Unexpected error in {provider!r}")
            raise MetadataProviderError(f"Unexpected provider error: {e}") from e
