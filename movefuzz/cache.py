"""Per-object LRU cache of historical object versions, deduplicated by digest."""

from __future__ import annotations

import logging
import random
from collections import OrderedDict
from typing import Any, Generic, Iterable, TypeVar

from movefuzz.types import ObjectChange

log = logging.getLogger(__name__)

IdT = TypeVar("IdT")
ObjT = TypeVar("ObjT")

DEFAULT_MAX_VERSIONS = 10_000


class ObjectCache(Generic[IdT, ObjT]):
    """Keeps up to ``max_versions_per_object`` distinct versions of each object."""

    def __init__(
        self,
        adapter: Any,
        max_versions_per_object: int = DEFAULT_MAX_VERSIONS,
        rng: random.Random | None = None,
    ) -> None:
        if max_versions_per_object < 1:
            raise ValueError("max_versions_per_object must be at least 1")
        self._adapter = adapter
        self._max_versions = max_versions_per_object
        self._caches: dict[IdT, OrderedDict[bytes, ObjT]] = {}
        self._rng = rng if rng is not None else random.Random()

    @property
    def max_versions_per_object(self) -> int:
        return self._max_versions

    def process_changes(self, changes: Iterable[ObjectChange[IdT, ObjT]]) -> None:
        cached = 0
        for change in changes:
            digest = bytes(self._adapter.compute_object_digest(change.obj))
            self._put(change.object_id, change.obj, digest)
            cached += 1
            log.debug("Cached modified object: %r", change.object_id)
        if cached:
            log.info("Cached %d modified objects", cached)

    def _put(self, object_id: IdT, obj: ObjT, digest: bytes) -> None:
        versions = self._caches.setdefault(object_id, OrderedDict())
        if digest in versions:
            versions.move_to_end(digest)
        versions[digest] = obj
        while len(versions) > self._max_versions:
            versions.popitem(last=False)

    def get_random_version(self, object_id: IdT) -> ObjT | None:
        versions = self._caches.get(object_id)
        if not versions:
            return None
        return self._rng.choice(list(versions.values()))

    def has_cached_versions(self, object_id: IdT) -> bool:
        return bool(self._caches.get(object_id))

    def cached_version_count(self, object_id: IdT) -> int:
        return len(self._caches.get(object_id, ()))

    def total_cached_objects(self) -> int:
        return sum(len(versions) for versions in self._caches.values())

    def cached_object_ids(self) -> list[IdT]:
        return list(self._caches)

    def clear(self) -> None:
        self._caches.clear()