"""Scope id model: ComponentIdentity and ScopeId dataclasses."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path

from scopedcss.errors import InvalidIdentity

_TOKEN_RE = re.compile(r"^[A-Za-z0-9_-]+$")


def normalize_path(path: str | os.PathLike[str], root: str | os.PathLike[str] | None = None) -> str:
    """Normalize *path* to POSIX separators, relative to *root* when given."""
    raw = os.fspath(path)
    if not raw.strip():
        raise InvalidIdentity("Component path must not be empty")
    if root is not None:
        raw = os.path.relpath(os.path.abspath(raw), os.path.abspath(os.fspath(root)))
    return os.path.normpath(raw).replace("\\", "/")


@dataclass(frozen=True)
class ComponentIdentity:
    """Identifies one component definition within a build.

    ``path`` is the normalized source path; ``content`` is the component's
    source text, which only takes part in the digest when content hashing is
    enabled.
    """

    path: str
    content: str = ""

    @classmethod
    def from_file(
        cls, path: str | os.PathLike[str], root: str | os.PathLike[str] | None = None
    ) -> ComponentIdentity:
        content = Path(path).read_text(encoding="utf-8")
        return cls(path=normalize_path(path, root), content=content)

    def key(self, include_content: bool = False) -> str:
        if include_content:
            return f"{self.path}\n{self.content}"
        return self.path


@dataclass(frozen=True)
class ScopeId:
    """An opaque, attribute-name-safe token for one component."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not _TOKEN_RE.match(self.value):
            raise InvalidIdentity(f"Invalid scope id token: {self.value!r}")

    def attribute_name(self, prefix: str = "data-v-") -> str:
        return f"{prefix}{self.value}"

    def __str__(self) -> str:
        return self.value
