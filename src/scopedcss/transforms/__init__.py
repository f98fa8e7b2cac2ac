from scopedcss.transforms.base import Transform
from scopedcss.transforms.scoped import (
    ScopedRewriteTransform,
    rewrite,
    scope_selector,
    scope_selector_list,
)


def apply_transforms(stylesheet, transforms):
    """Apply *transforms* to *stylesheet* in order."""
    for t in transforms:
        stylesheet = t.apply(stylesheet)
    return stylesheet


__all__ = [
    "Transform",
    "ScopedRewriteTransform",
    "rewrite",
    "scope_selector",
    "scope_selector_list",
    "apply_transforms",
]
