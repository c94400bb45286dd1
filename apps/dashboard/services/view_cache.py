import logging
from pathlib import Path
from typing import Any, Callable, Iterable, Optional, TypeVar

import diskcache

from ..settings import settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ViewCache:
    """
    Rendered views keyed by route path.

    Backed by diskcache so every worker process sees the same entries and an
    invalidation from one worker is visible to the others.
    """

    def __init__(self, cache_dir: str | Path, expire: Optional[int] = None) -> None:
        self.cache_dir = Path(cache_dir)
        self.expire = expire
        self._cache = diskcache.Cache(str(self.cache_dir))

    @staticmethod
    def _version_key(path: str) -> str:
        return f"{path}#version"

    def get_or_load(self, path: str, loader: Callable[[], T]) -> T:
        """
        Return the cached view for `path`, loading and storing it on a miss.

        The loaded value is only stored if no `revalidate(path)` happened while
        `loader` ran; otherwise it may predate the mutation that revalidated
        and is returned uncached.
        """
        cached = self._cache.get(path, default=None)
        if cached is not None:
            return cached
        version = self._cache.get(self._version_key(path), default=0)
        value = loader()
        with self._cache.transact():
            if self._cache.get(self._version_key(path), default=0) == version:
                self._cache.set(path, value, expire=self.expire)
            else:
                logger.debug("skipped caching %s; revalidated during load", path)
        return value

    def revalidate(self, path: str) -> None:
        """Drop the cached rendering of `path` so the next request rebuilds it."""
        with self._cache.transact():
            self._cache.incr(self._version_key(path), default=0)
            removed = self._cache.delete(path)
        if removed:
            logger.debug("revalidated %s", path)

    def revalidate_all(self, paths: Iterable[str]) -> None:
        for path in paths:
            self.revalidate(path)

    def close(self) -> None:
        self._cache.close()


_view_cache: Optional[ViewCache] = None


def get_view_cache() -> ViewCache:
    global _view_cache
    if _view_cache is None:
        _view_cache = ViewCache(settings.VIEW_CACHE_DIR, expire=settings.VIEW_CACHE_TTL)
    return _view_cache
