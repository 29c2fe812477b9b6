"""Demo profile store for SkillFlow Analytics."""

from skillflow.store.exceptions import ProfileNotFoundError
from skillflow.store.loader import TopicRegistry, get_topic_registry, reload_topics
from skillflow.store.provider import DemoProfileProvider, get_profile_provider

__all__ = [
    "DemoProfileProvider",
    "ProfileNotFoundError",
    "TopicRegistry",
    "get_profile_provider",
    "get_topic_registry",
    "reload_topics",
]
