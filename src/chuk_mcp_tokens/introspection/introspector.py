"""
Structure introspector - derives the editable structure of a component.

The introspector walks one component of a token document depth-first and
produces a ComponentStructure: the variant axes the component declares and
every leaf property an editor can change.

Two schema shapes are understood at the same time:

    Legacy:   size.variants.small                 (generic "variants" wrapper)
              variants.text.variants.solid...     (nested generic wrappers)
    Current:  variants.sizes.small.properties...  (named categories in a wrapper)
              sizes.small...                      (named categories directly)
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping

from chuk_mcp_tokens.constants import (
    CATEGORY_AXES,
    COLORS_MARKER,
    COMPONENTS_PATH,
    METADATA_PREFIX,
    SIZE_MARKERS,
    STYLE_PRIMARY_COMPONENTS,
    TEXT_GROUP_NAMES,
    TEXT_GROUP_SUFFIX,
    TYPOGRAPHY_PROPERTIES,
    VARIANTS_KEY,
    PropertyCategory,
    TokenType,
    VariantAxis,
)
from chuk_mcp_tokens.diagnostics import Diagnostic, DiagnosticKind, DiagnosticSink, log_diagnostic
from chuk_mcp_tokens.document.model import TokenDocument, iter_leaves
from chuk_mcp_tokens.models.structure import (
    ComponentStructure,
    PropertyDescriptor,
    VariantDescriptor,
)
from chuk_mcp_tokens.models.token import TokenContainer, TokenNode, TokenValue
from chuk_mcp_tokens.naming import name_for, to_kebab_case

logger = logging.getLogger(__name__)

# (axis, option) pairs active on the current branch, outermost first
AxisPath = tuple[tuple[str, str], ...]


def is_typography_group(key: str, node: TokenNode) -> bool:
    """A text-group container holding at least one typography attribute."""
    if not isinstance(node, TokenContainer):
        return False
    if key not in TEXT_GROUP_NAMES and not key.endswith(TEXT_GROUP_SUFFIX):
        return False
    return any(
        k in TYPOGRAPHY_PROPERTIES and isinstance(child, TokenValue)
        for k, child in node.children.items()
    )


def category_for(path: tuple[str, ...]) -> str:
    """colors > size/sizes > first segment of the containing path > root."""
    if COLORS_MARKER in path:
        return PropertyCategory.COLORS.value
    if any(segment in SIZE_MARKERS for segment in path):
        return PropertyCategory.SIZE.value
    if len(path) > 1:
        return path[0]
    return PropertyCategory.ROOT.value


class _ParseRun:
    """Mutable state of one parse."""

    def __init__(self, component: str, mode: str, style_primary: bool):
        self.component = component
        self.mode = mode
        self.style_primary = style_primary
        self.variants: dict[str, list[str]] = {}
        self.props: list[PropertyDescriptor] = []

    def register_variant(self, prop_name: str, options: Iterable[str]) -> None:
        known = self.variants.setdefault(prop_name, [])
        for option in options:
            if option not in known:
                known.append(option)

    def variable_name(self, path: tuple[str, ...]) -> str:
        return name_for((*COMPONENTS_PATH, self.component, *path), self.mode)

    def result(self) -> ComponentStructure:
        return ComponentStructure(
            component=self.component,
            mode=self.mode,
            variants=[
                VariantDescriptor(prop_name=name, variants=options)
                for name, options in self.variants.items()
            ],
            props=self.props,
        )


class StructureIntrospector:
    """
    Parses component structures out of the current token document.

    Results are memoized per (document revision, component, mode); swapping
    in a new document makes old entries unreachable.
    """

    def __init__(
        self,
        document_source: Callable[[], TokenDocument | None],
        *,
        style_primary_components: Iterable[str] = STYLE_PRIMARY_COMPONENTS,
        on_diagnostic: DiagnosticSink = log_diagnostic,
    ):
        """
        Initialize the introspector.

        Args:
            document_source: Returns the current document snapshot
            style_primary_components: Components whose primary axis is 'style'
            on_diagnostic: Sink for lookup-miss diagnostics
        """
        self._document_source = document_source
        self.style_primary_components = frozenset(style_primary_components)
        self.on_diagnostic = on_diagnostic
        self._cache: dict[tuple[str, str, str], ComponentStructure] = {}

    @property
    def document(self) -> TokenDocument | None:
        return self._document_source()

    def parse(self, component_name: str) -> ComponentStructure:
        """
        Parse a component's variants and properties.

        Never raises; an unknown component gives an empty structure.

        Args:
            component_name: Display, PascalCase or kebab-case component name

        Returns:
            The component structure
        """
        component = to_kebab_case(component_name)
        document = self.document
        if document is None:
            return ComponentStructure(component=component)

        key = (document.revision, component, document.mode)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        node = document.component(component)
        if not isinstance(node, TokenContainer):
            self.on_diagnostic(
                Diagnostic(
                    kind=DiagnosticKind.LOOKUP_MISS,
                    message="Component not found",
                    subject=component,
                )
            )
            return ComponentStructure(component=component, mode=document.mode)

        run = _ParseRun(component, document.mode, component in self.style_primary_components)
        self._walk(run, node.children, (), ())
        structure = run.result()
        self._cache[key] = structure
        logger.debug(
            f"Parsed {component} ({document.mode}): "
            f"{len(structure.variants)} axes, {len(structure.props)} props"
        )
        return structure

    def invalidate(self) -> None:
        """Drop every memoized structure."""
        self._cache.clear()

    def default_values(self, component_name: str) -> dict[str, str]:
        """
        Document values of every property of a component, keyed by variable name.

        References are kept as written (``{tokens.size.4x}``) so a reset can
        restore them.
        """
        document = self.document
        if document is None:
            return {}
        node = document.component(component_name)
        if node is None:
            return {}
        run = _ParseRun(to_kebab_case(component_name), document.mode, False)
        defaults: dict[str, str] = {}
        for path, value in iter_leaves(node):
            rendered = value.render()
            if rendered is not None:
                defaults[run.variable_name(path)] = rendered
        return defaults

    # ------------------------------------------------------------------
    # Walk
    # ------------------------------------------------------------------

    def _walk(
        self,
        run: _ParseRun,
        children: Mapping[str, TokenNode],
        prefix: tuple[str, ...],
        axes: AxisPath,
        axis: str | None = None,
    ) -> None:
        """
        Visit the children of one node.

        When ``axis`` is set, ``children`` are the options of that axis.
        """
        for key, child in children.items():
            if key.startswith(METADATA_PREFIX):
                continue
            path = (*prefix, key)

            if axis is not None:
                # A variant option: its own value is not a property
                self._walk(run, child.children, path, (*axes, (axis, key)))
                continue

            if key == VARIANTS_KEY and isinstance(child, TokenContainer):
                self._enter_variants(run, child, path, axes, prefix[-1] if prefix else None)
            elif key in CATEGORY_AXES and isinstance(child, TokenContainer) and child.children:
                self._enter_axis(run, child, path, axes, category=key)
            elif isinstance(child, TokenValue):
                self._emit(run, key, child.token_type, path, axes)
                self._walk(run, child.children, path, axes)
            else:
                if is_typography_group(key, child):
                    self._emit(run, key, TokenType.TYPOGRAPHY_GROUP.value, path, axes)
                self._walk(run, child.children, path, axes)

    def _enter_variants(
        self,
        run: _ParseRun,
        wrapper: TokenContainer,
        path: tuple[str, ...],
        axes: AxisPath,
        parent_segment: str | None,
    ) -> None:
        categories = {
            key
            for key, child in wrapper.children.items()
            if key in CATEGORY_AXES and isinstance(child, TokenContainer) and child.children
        }
        if not categories:
            self._enter_axis(run, wrapper, path, axes, parent_segment=parent_segment)
            return

        for key, child in wrapper.children.items():
            if key.startswith(METADATA_PREFIX):
                continue
            if key in categories:
                self._enter_axis(run, child, (*path, key), axes, category=key)
            else:
                self._walk(run, {key: child}, path, axes)

    def _enter_axis(
        self,
        run: _ParseRun,
        container: TokenContainer,
        path: tuple[str, ...],
        axes: AxisPath,
        *,
        category: str | None = None,
        parent_segment: str | None = None,
    ) -> None:
        options = [k for k in container.children if not k.startswith(METADATA_PREFIX)]
        if not options:
            return
        prop_name = self._axis_name(run, axes, category, parent_segment)
        run.register_variant(prop_name, options)
        self._walk(run, container.children, path, axes, axis=prop_name)

    def _axis_name(
        self,
        run: _ParseRun,
        axes: AxisPath,
        category: str | None,
        parent_segment: str | None,
    ) -> str:
        active = {name for name, _ in axes}
        if category is not None:
            mapped = CATEGORY_AXES[category].value
            if mapped not in active:
                return mapped
        if axes:
            return VariantAxis.STYLE_SECONDARY.value
        if parent_segment == VariantAxis.SIZE.value:
            return VariantAxis.SIZE.value
        if run.style_primary:
            return VariantAxis.STYLE.value
        return VariantAxis.COLOR.value

    def _emit(
        self,
        run: _ParseRun,
        name: str,
        token_type: str,
        path: tuple[str, ...],
        axes: AxisPath,
    ) -> None:
        run.props.append(
            PropertyDescriptor(
                name=name,
                category=category_for(path),
                type=token_type,
                variable_name=run.variable_name(path),
                path=path,
                is_variant_specific=bool(axes),
                variant_prop=axes[-1][0] if axes else None,
                variant_path=axes,
            )
        )
