"""Topic file loading and registry management."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterator, List, Optional

import yaml
from pydantic import ValidationError

from skillflow.store.models import SearchResult, TopicFile

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = Path(__file__).resolve().parent / "data"


class TopicRegistry:
    """Registry of demo search results keyed by topic."""

    def __init__(self) -> None:
        self._topics: Dict[str, List[SearchResult]] = {}
        self._loaded = False

    def load_from_directory(self, data_dir: str | Path) -> None:
        """
        Load all YAML topic files from the specified directory.

        Args:
            data_dir: Path to directory containing topic YAML files

        Raises:
            yaml.YAMLError: If a file cannot be parsed
            ValidationError: If a topic file fails validation
        """
        data_path = Path(data_dir)
        if not data_path.exists():
            logger.warning(f"Topic directory not found: {data_dir}")
            return

        if not data_path.is_dir():
            logger.error(f"Topic path is not a directory: {data_dir}")
            return

        loaded_topics = []
        for yaml_file in sorted(data_path.glob("*.yaml")):
            try:
                with open(yaml_file, "r", encoding="utf-8") as f:
                    data = yaml.safe_load(f)

                if not data:
                    logger.warning(f"Empty topic file: {yaml_file}")
                    continue

                topic_file = TopicFile.model_validate(data)
                self._topics[topic_file.topic] = topic_file.results
                loaded_topics.append(
                    f"{topic_file.topic}({len(topic_file.results)})"
                )
                logger.debug(f"Loaded topic: {topic_file.topic} from {yaml_file}")

            except yaml.YAMLError as e:
                logger.error(f"YAML parse error in {yaml_file}: {e}")
                raise
            except ValidationError as e:
                logger.error(f"Validation error in {yaml_file}: {e}")
                raise

        self._loaded = True
        if loaded_topics:
            logger.info(f"Topics loaded: {', '.join(loaded_topics)}")
        else:
            logger.info("No topics loaded")

    def get(self, topic: str) -> Optional[List[SearchResult]]:
        """Return the results listed under ``topic``, or None."""
        results = self._topics.get(topic)
        return list(results) if results is not None else None

    def iter_results(self) -> Iterator[SearchResult]:
        for results in self._topics.values():
            yield from results

    def find_username(self, username: str) -> Optional[SearchResult]:
        """Return the last result registered under ``username``."""
        found = None
        for result in self.iter_results():
            if result.username == username:
                found = result
        return found

    def get_available_topics(self) -> List[str]:
        return list(self._topics.keys())

    def is_loaded(self) -> bool:
        return self._loaded

    def clear(self) -> None:
        self._topics.clear()
        self._loaded = False


# Global registry instance
_registry: Optional[TopicRegistry] = None


def get_topic_registry() -> TopicRegistry:
    """Get the global topic registry instance."""
    global _registry
    if _registry is None:
        _registry = TopicRegistry()
    return _registry


def reload_topics(data_dir: str | Path | None = None) -> TopicRegistry:
    """
    Reload the global registry from ``data_dir`` (bundled data when None).
    """
    registry = get_topic_registry()
    registry.clear()
    registry.load_from_directory(data_dir or DEFAULT_DATA_DIR)
    return registry
