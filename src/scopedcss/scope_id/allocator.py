"""Deterministic scope id derivation from a component identity."""

from __future__ import annotations

import hashlib

from scopedcss.config import ScopeConfig
from scopedcss.errors import InvalidIdentity
from scopedcss.scope_id.model import ComponentIdentity, ScopeId

__all__ = ["allocate", "digest"]


def digest(identity: ComponentIdentity, config: ScopeConfig | None = None) -> str:
    """Return the full hex digest for *identity*."""
    config = config or ScopeConfig()
    if not isinstance(identity, ComponentIdentity):
        raise InvalidIdentity(f"Expected a ComponentIdentity, got {type(identity).__name__}")
    if not identity.path or not identity.path.strip():
        raise InvalidIdentity("Component path must not be empty")
    key = identity.key(include_content=config.hash_content)
    return hashlib.sha256(key.encode("utf-8")).hexdigest()


def allocate(identity: ComponentIdentity, config: ScopeConfig | None = None) -> ScopeId:
    """Derive the ScopeId for *identity*.

    The same identity always yields the same id; no state is kept.
    """
    config = config or ScopeConfig()
    return ScopeId(digest(identity, config)[: config.id_length])
