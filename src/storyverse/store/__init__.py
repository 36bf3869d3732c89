"""Persistence backends for samples, analyses and profiles."""

from storyverse.config import Settings, get_settings
from storyverse.store.base import StyleStore
from storyverse.store.memory import InMemoryStyleStore, JsonFileStyleStore


def build_store(settings: Settings | None = None) -> StyleStore:
    """Create the store selected by `store_backend`."""
    settings = settings or get_settings()

    if settings.store_backend == "neo4j":
        from storyverse.store.connection import get_driver
        from storyverse.store.graph import Neo4jStyleStore

        return Neo4jStyleStore(get_driver(settings))
    if settings.store_backend == "memory":
        return InMemoryStyleStore()
    return JsonFileStyleStore(settings.store_path)


__all__ = ["StyleStore", "InMemoryStyleStore", "JsonFileStyleStore", "build_store"]
