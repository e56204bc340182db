"""
Token editor session - one document, one store, one broadcaster.

The session holds the current document snapshot. Loading a document or
switching mode replaces the snapshot with a single assignment and queues
a global change, so listeners re-read everything once the swap is done.
Edits write to the store first and queue the changed names afterwards.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from pydantic import BaseModel, Field

from chuk_mcp_tokens.broadcast import ChangeBroadcaster, Matcher, Scheduler, Subscription
from chuk_mcp_tokens.broadcast.broadcaster import Listener
from chuk_mcp_tokens.constants import STYLE_PRIMARY_COMPONENTS, ErrorMessages, TokenType
from chuk_mcp_tokens.diagnostics import DiagnosticSink, log_diagnostic
from chuk_mcp_tokens.document.model import TokenDocument
from chuk_mcp_tokens.introspection import StructureIntrospector
from chuk_mcp_tokens.models.structure import ComponentStructure, PropertyDescriptor
from chuk_mcp_tokens.naming import get_default_mode, name_for, normalize_mode
from chuk_mcp_tokens.store import VariableStore

logger = logging.getLogger(__name__)


class ResolvedVariable(BaseModel):
    """A component property with its current values."""

    name: str = Field(..., description="Property key")
    variable_name: str = Field(..., description="Canonical variable name")
    category: str = Field(..., description="Property category")
    type: str = Field(..., description="Token $type")
    raw: str | None = Field(None, description="Effective raw value (override or default)")
    value: str | None = Field(None, description="Value after reference resolution")
    overridden: bool = Field(False, description="Whether an inline override is set")

    model_config = {"frozen": True}


class TokenEditor:
    """
    Live editing session over a token document.

    Example:
        editor = TokenEditor(document)
        structure = editor.parse("Button")
        editor.edit(structure.props[0].variable_name, "12px")
    """

    def __init__(
        self,
        document: TokenDocument | None = None,
        *,
        store: VariableStore | None = None,
        broadcaster: ChangeBroadcaster | None = None,
        scheduler: Scheduler | None = None,
        style_primary_components: Iterable[str] = STYLE_PRIMARY_COMPONENTS,
        on_diagnostic: DiagnosticSink = log_diagnostic,
    ):
        """
        Initialize the session.

        Args:
            document: Initial document snapshot
            store: Variable store (a fresh in-memory one when omitted)
            broadcaster: Change broadcaster (created from ``scheduler`` when omitted)
            scheduler: Scheduler for the default broadcaster
            style_primary_components: Components whose primary axis is 'style'
            on_diagnostic: Sink shared by the introspector and the default store
        """
        self._document: TokenDocument | None = None
        self.store = store or VariableStore(on_diagnostic=on_diagnostic)
        self.broadcaster = broadcaster or ChangeBroadcaster(scheduler)
        self.introspector = StructureIntrospector(
            lambda: self._document,
            style_primary_components=style_primary_components,
            on_diagnostic=on_diagnostic,
        )
        if document is not None:
            self.load_document(document)

    # ------------------------------------------------------------------
    # Document and mode
    # ------------------------------------------------------------------

    @property
    def document(self) -> TokenDocument | None:
        return self._document

    @property
    def mode(self) -> str:
        return self._document.mode if self._document else get_default_mode()

    def load_document(self, document: TokenDocument) -> None:
        """Swap in a new document snapshot and announce a global change."""
        previous = self._document
        if previous is None or previous.revision != document.revision:
            self.introspector.invalidate()
        self.store.load_document(document)
        self._document = document
        logger.info(f"Loaded token document {document.name or document.revision} ({document.mode})")
        self.broadcaster.schedule()

    def switch_mode(self, mode: str) -> TokenDocument:
        """
        Rebind the current document to another mode.

        Raises:
            ValueError: If no document is loaded or the mode is invalid
        """
        document = self._require_document()
        target = normalize_mode(mode)
        if target != document.mode:
            self.load_document(document.with_mode(target))
        return self._require_document()

    def _require_document(self) -> TokenDocument:
        if self._document is None:
            raise ValueError(ErrorMessages.NO_DOCUMENT)
        return self._document

    # ------------------------------------------------------------------
    # Structure and names
    # ------------------------------------------------------------------

    def parse(self, component: str) -> ComponentStructure:
        return self.introspector.parse(component)

    def list_components(self) -> list[str]:
        if self._document is None:
            return []
        return self._document.component_names()

    def variable_name(self, path: Iterable[object], mode: str | None = None) -> str:
        """Canonical name for a document path, in the session mode by default."""
        return name_for(path, mode or self.mode)

    def default_selection(self, component: str) -> dict[str, str]:
        """First option of every axis of a component."""
        structure = self.parse(component)
        return {v.prop_name: v.variants[0] for v in structure.variants if v.variants}

    def properties_for(
        self,
        component: str,
        selected: Mapping[str, str] | None = None,
    ) -> list[PropertyDescriptor]:
        """
        Properties that apply to a variant selection.

        Axes missing from ``selected`` use their first option.
        """
        selection = {**self.default_selection(component), **(selected or {})}
        return [p for p in self.parse(component).props if p.matches_selection(selection)]

    # ------------------------------------------------------------------
    # Edits
    # ------------------------------------------------------------------

    def edit(self, name: str, value: object) -> bool:
        """Write one override and queue its change."""
        written = self.store.set(name, value)
        if written:
            self.broadcaster.schedule([name])
        return written

    def edit_many(self, values: Mapping[str, object]) -> int:
        """Write several overrides as one coalesced change."""
        changed = [name for name, value in values.items() if self.store.set(name, value)]
        if changed:
            self.broadcaster.schedule(changed)
        return len(changed)

    def edit_property(
        self,
        component: str,
        name: str,
        value: object,
        selected: Mapping[str, str] | None = None,
    ) -> int:
        """
        Set a property by name for the selected variants.

        Every matching concrete variable is written (one logical property
        can live in several places of the tree).

        Returns:
            Number of variables written
        """
        targets = {
            p.variable_name: value
            for p in self.properties_for(component, selected)
            if p.name == name and p.type != TokenType.TYPOGRAPHY_GROUP.value
        }
        return self.edit_many(targets)

    def remove(self, name: str) -> None:
        self.store.remove(name)
        self.broadcaster.schedule([name])

    def reset(self) -> int:
        """Clear every override and announce a global change."""
        count = self.store.reset()
        self.broadcaster.schedule()
        return count

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def resolve(self, name: str) -> str | None:
        return self.store.resolve(name, self.mode)

    def resolve_property(
        self,
        component: str,
        name: str,
        selected: Mapping[str, str] | None = None,
    ) -> str | None:
        """Resolved value of the first property called ``name`` in the selection."""
        for prop in self.properties_for(component, selected):
            if prop.name == name and prop.type != TokenType.TYPOGRAPHY_GROUP.value:
                return self.resolve(prop.variable_name)
        return None

    def resolve_group(
        self,
        component: str,
        group: str,
        selected: Mapping[str, str] | None = None,
    ) -> dict[str, str | None]:
        """
        Resolved members of a typography group, e.g. ``{"font-size": "14px"}``.

        Returns an empty dict if the group does not exist in the selection.
        """
        structure = self.parse(component)
        for prop in self.properties_for(component, selected):
            if prop.name == group and prop.type == TokenType.TYPOGRAPHY_GROUP.value:
                return {
                    member.name: self.resolve(member.variable_name)
                    for member in structure.group_members(prop)
                }
        return {}

    def variables_for_variants(
        self,
        component: str,
        selected: Mapping[str, str] | None = None,
        layer: str | None = None,
    ) -> list[ResolvedVariable]:
        """
        Current values of every property in a variant selection.

        Args:
            component: Component name
            selected: Axis -> option; missing axes use their first option
            layer: Only keep layered color properties of this layer

        Returns:
            Resolved variables in document order
        """
        variables: list[ResolvedVariable] = []
        for prop in self.properties_for(component, selected):
            if prop.type == TokenType.TYPOGRAPHY_GROUP.value:
                continue
            if layer is not None and prop.layer is not None and prop.layer != layer:
                continue
            variables.append(
                ResolvedVariable(
                    name=prop.name,
                    variable_name=prop.variable_name,
                    category=prop.category,
                    type=prop.type,
                    raw=self.store.get(prop.variable_name),
                    value=self.resolve(prop.variable_name),
                    overridden=self.store.get_override(prop.variable_name) is not None,
                )
            )
        return variables

    # ------------------------------------------------------------------
    # Broadcast
    # ------------------------------------------------------------------

    def subscribe(self, callback: Listener, matcher: Matcher | None = None) -> Subscription:
        return self.broadcaster.subscribe(callback, matcher)

    def flush(self) -> int:
        """Deliver queued changes now."""
        return self.broadcaster.flush()
