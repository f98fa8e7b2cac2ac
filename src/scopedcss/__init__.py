"""scopedcss: scoped CSS rewriting for single-file components."""

__version__ = "0.1.0"

from scopedcss.compiler import CompiledStyles, StyleBlock, StyleCompiler  # noqa: E402
from scopedcss.config import ScopeConfig  # noqa: E402
from scopedcss.errors import InvalidIdentity, ScopedCSSError, SelectorParseError  # noqa: E402
from scopedcss.scope_id import (  # noqa: E402
    ComponentIdentity,
    ScopeId,
    ScopeRegistry,
    allocate,
    build_session,
)
from scopedcss.stylesheet import Stylesheet, parse_stylesheet, serialize  # noqa: E402
from scopedcss.template import AttributeInstruction, markers  # noqa: E402
from scopedcss.transforms import ScopedRewriteTransform, rewrite  # noqa: E402

__all__ = [
    "__version__",
    "CompiledStyles",
    "StyleBlock",
    "StyleCompiler",
    "ScopeConfig",
    "InvalidIdentity",
    "ScopedCSSError",
    "SelectorParseError",
    "ComponentIdentity",
    "ScopeId",
    "ScopeRegistry",
    "allocate",
    "build_session",
    "Stylesheet",
    "parse_stylesheet",
    "serialize",
    "AttributeInstruction",
    "markers",
    "ScopedRewriteTransform",
    "rewrite",
]
