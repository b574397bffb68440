"""
Converter cache.

Repositories may map thousands of documents; the registry makes sure each
named field converter is built once and reused afterwards.
"""

import logging
import threading
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)


class MapperRegistry:
    """
    Caches field-conversion functions by name.

    There is no eviction: entries live as long as the registry, which is
    owned by a single DocumentMapper.

    Example:
        registry = MapperRegistry()
        noop = registry.get_or_create(lambda: field_converter(identity), "noop")
        assert registry.get_or_create(other_factory, "noop") is noop
    """

    def __init__(self):
        self._cache: dict[str, Callable[..., Any]] = {}
        self._lock = threading.Lock()

    def get_or_create(
        self, factory: Callable[[], Callable[..., Any]], name: str | None = None
    ) -> Callable[..., Any]:
        """
        Return the converter cached under ``name``, creating it if needed.

        Args:
            factory: Zero-argument callable producing the converter
            name: Cache key; defaults to ``factory.__name__``

        Returns:
            The cached converter
        """
        name = name or factory.__name__
        converter = self._cache.get(name)
        if converter is not None:
            return converter

        with self._lock:
            converter = self._cache.get(name)
            if converter is None:
                converter = factory()
                self._cache[name] = converter
                logger.debug(f"Cached converter '{name}'")
            return converter

    def clear(self) -> None:
        """Drop all cached converters."""
        with self._lock:
            self._cache.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._cache

    def __len__(self) -> int:
        return len(self._cache)
