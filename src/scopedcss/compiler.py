"""Per-component style compilation: scoped and global blocks in declaration order."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from scopedcss.config import ScopeConfig
from scopedcss.errors import SelectorParseError
from scopedcss.scope_id import ComponentIdentity, ScopeId, ScopeRegistry
from scopedcss.stylesheet import parse_stylesheet, serialize
from scopedcss.template.marker import AttributeInstruction, markers
from scopedcss.transforms import ScopedRewriteTransform

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StyleBlock:
    """CSS text from one ``<style>`` block of a component."""

    content: str
    scoped: bool = False


@dataclass(frozen=True)
class CompiledStyles:
    """Compiled CSS for a component plus the marker its template needs.

    ``scope_id`` and ``marker`` are None when no block was scoped.
    """

    css: str
    scope_id: ScopeId | None = None
    marker: AttributeInstruction | None = None


def concatenate(outputs: list[str]) -> str:
    """Join compiled blocks, starting each one on a new line."""
    css = ""
    for output in outputs:
        if css and not css.endswith("\n"):
            css += "\n"
        css += output
    return css


class StyleCompiler:
    """Compiles the style blocks of components within one build."""

    def __init__(
        self, config: ScopeConfig | None = None, registry: ScopeRegistry | None = None
    ) -> None:
        # An empty ScopeRegistry is falsy, so compare against None.
        if config is None:
            config = registry.config if registry is not None else ScopeConfig()
        self.config = config
        self.registry = registry if registry is not None else ScopeRegistry(self.config)

    def compile(self, identity: ComponentIdentity, blocks: list[StyleBlock]) -> CompiledStyles:
        """Rewrite scoped blocks and join all blocks in declaration order.

        Raises :class:`SelectorParseError` naming the component and block
        when any scoped block is malformed; nothing is returned in that case.
        """
        scope_id: ScopeId | None = None
        transform: ScopedRewriteTransform | None = None
        if any(block.scoped for block in blocks):
            scope_id = self.registry.get_or_allocate(identity)
            transform = ScopedRewriteTransform(scope_id, self.config)

        outputs: list[str] = []
        for index, block in enumerate(blocks):
            if not block.scoped:
                outputs.append(block.content)
                continue
            try:
                stylesheet = parse_stylesheet(block.content, self.config)
            except SelectorParseError as exc:
                logger.debug("Style block %d of %s failed to parse", index, identity.path)
                raise exc.with_context(component=f"{identity.path} <style #{index}>") from exc
            outputs.append(serialize(transform.apply(stylesheet)))  # type: ignore[union-attr]

        css = concatenate(outputs)

        logger.debug(
            "Compiled %d style block(s) for %s (scope id: %s)",
            len(blocks),
            identity.path,
            scope_id,
        )
        marker = markers(scope_id, self.config) if scope_id is not None else None
        return CompiledStyles(css=css, scope_id=scope_id, marker=marker)
