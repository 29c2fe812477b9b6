"""Async demo profile provider with optional simulated latency."""

from __future__ import annotations

import logging
import random
from typing import List, Optional, Sequence

import anyio

from skillflow.analytics.models import Profile
from skillflow.config import Settings, get_settings
from skillflow.store.exceptions import ProfileNotFoundError
from skillflow.store.generator import ProfileGenerator
from skillflow.store.loader import TopicRegistry, get_topic_registry, reload_topics
from skillflow.store.models import SearchResult

logger = logging.getLogger(__name__)


async def _simulate_latency(delay_ms: int) -> None:
    if delay_ms:
        await anyio.sleep(delay_ms / 1000)


class DemoProfileProvider:
    """Serves search results and synthesized profiles from the topic registry."""

    def __init__(
        self,
        registry: TopicRegistry,
        settings: Settings,
        rng: Optional[random.Random] = None,
        current_year: Optional[int] = None,
    ) -> None:
        self.registry = registry
        self.settings = settings
        self.rng = rng or random.Random(settings.demo_seed)
        self.generator = ProfileGenerator(self.rng, current_year=current_year)

    async def search_people(
        self, query: str, limit: Optional[int] = None
    ) -> List[SearchResult]:
        """
        Find demo search results for ``query``.

        An exact topic match returns that topic's results; otherwise every
        result whose title or summary contains the query is returned. Results
        are shuffled and truncated to ``min(limit, search_max_results)``.
        """
        logger.info(f"Demo search for: {query!r}")
        await _simulate_latency(self.settings.search_delay_ms)

        term = query.strip().lower()
        results = self.registry.get(term)
        if results is None:
            results = [
                result for result in self.registry.iter_results() if result.matches(term)
            ]

        self.rng.shuffle(results)
        if limit is None:
            limit = self.settings.search_default_limit
        return results[: min(limit, self.settings.search_max_results)]

    async def get_profile(self, username: str) -> Profile:
        await _simulate_latency(self.settings.profile_delay_ms)
        result = self.registry.find_username(username)
        if result is None:
            raise ProfileNotFoundError(username)
        return self.generator.generate(result)

    async def batch_get_profiles(self, usernames: Sequence[str]) -> List[Profile]:
        """Fetch profiles one at a time, skipping unknown usernames."""
        logger.info(f"Fetching {len(usernames)} profiles")
        profiles: List[Profile] = []
        for username in usernames:
            try:
                profiles.append(await self.get_profile(username))
            except ProfileNotFoundError:
                logger.warning(f"Could not fetch profile for {username}")
                continue
            await _simulate_latency(self.settings.batch_delay_ms)
        return profiles


# Global provider instance
_provider: Optional[DemoProfileProvider] = None


def get_profile_provider() -> DemoProfileProvider:
    """Get the global provider, loading the topic registry on first use."""
    global _provider
    if _provider is None:
        settings = get_settings()
        registry = get_topic_registry()
        if not registry.is_loaded():
            reload_topics(settings.profiles_dir)
        _provider = DemoProfileProvider(registry, settings)
    return _provider
