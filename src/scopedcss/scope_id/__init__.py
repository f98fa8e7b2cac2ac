from scopedcss.scope_id.allocator import allocate, digest
from scopedcss.scope_id.model import ComponentIdentity, ScopeId, normalize_path
from scopedcss.scope_id.registry import ScopeRegistry, build_session

__all__ = [
    "allocate",
    "digest",
    "ComponentIdentity",
    "ScopeId",
    "normalize_path",
    "ScopeRegistry",
    "build_session",
]
