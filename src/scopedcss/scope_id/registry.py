"""Build-wide memo of allocated scope ids."""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Iterator

from scopedcss.config import ScopeConfig
from scopedcss.scope_id.allocator import digest
from scopedcss.scope_id.model import ComponentIdentity, ScopeId

logger = logging.getLogger(__name__)


class ScopeRegistry:
    """Maps component identities to their scope ids for one build.

    Lookups of known identities take no lock. The first allocation for an
    identity runs under that identity's lock, so concurrent compiles of the
    same component agree on one id.
    """

    def __init__(self, config: ScopeConfig | None = None) -> None:
        self.config = config or ScopeConfig()
        self._ids: dict[str, ScopeId] = {}
        self._owners: dict[str, str] = {}  # scope id value -> identity key
        self._key_locks: dict[str, threading.Lock] = {}
        self._guard = threading.Lock()

    def __len__(self) -> int:
        return len(self._ids)

    def __contains__(self, identity: object) -> bool:
        if not isinstance(identity, ComponentIdentity):
            return False
        return self._key(identity) in self._ids

    def _key(self, identity: ComponentIdentity) -> str:
        return identity.key(include_content=self.config.hash_content)

    def _lock_for(self, key: str) -> threading.Lock:
        with self._guard:
            lock = self._key_locks.get(key)
            if lock is None:
                lock = self._key_locks[key] = threading.Lock()
            return lock

    def get_or_allocate(self, identity: ComponentIdentity) -> ScopeId:
        full = digest(identity, self.config)
        key = self._key(identity)
        existing = self._ids.get(key)
        if existing is not None:
            return existing

        with self._lock_for(key):
            existing = self._ids.get(key)
            if existing is not None:
                return existing
            with self._guard:
                length = self.config.id_length
                value = full[:length]
                while value in self._owners and self._owners[value] != key:
                    length += 1
                    value = full[:length]
                if length != self.config.id_length:
                    logger.warning(
                        "Scope id collision for %s, lengthened to %s", identity.path, value
                    )
                scope_id = ScopeId(value)
                self._owners[value] = key
                self._ids[key] = scope_id
            logger.debug("Allocated scope id %s for %s", scope_id, identity.path)
            return scope_id

    def clear(self) -> None:
        with self._guard:
            self._ids.clear()
            self._owners.clear()
            self._key_locks.clear()


@contextmanager
def build_session(config: ScopeConfig | None = None) -> Iterator[ScopeRegistry]:
    """Yield an empty registry for one build and discard it afterwards."""
    registry = ScopeRegistry(config)
    try:
        yield registry
    finally:
        logger.debug("Discarding %d scope id(s) at end of build", len(registry))
        registry.clear()
