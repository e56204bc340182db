"""
Tests for the editor session.
"""

import pytest

from chuk_mcp_tokens.broadcast import ExactMatcher, ManualScheduler, SubstringMatcher
from chuk_mcp_tokens.document import parse_document
from chuk_mcp_tokens.editor import TokenEditor

CHIP_SMALL_WIDTH = "--ds-themes-light-ui-kit-components-chip-variants-sizes-small-properties-width"
CHIP_DEFAULT_WIDTH = "--ds-themes-light-ui-kit-components-chip-variants-sizes-default-properties-width"
LABEL_TEXT = "--ds-themes-light-ui-kit-components-label-properties-colors-layer-0-text"


class TestDocumentSwap:
    """Tests for loading documents and switching modes."""

    def test_load_announces_global_change(self, document, scheduler: ManualScheduler):
        editor = TokenEditor(scheduler=scheduler)
        events = []
        editor.subscribe(events.append, ExactMatcher("--unrelated"))

        editor.load_document(document)
        assert editor.document is document
        assert events == []

        scheduler.run_pending()
        assert len(events) == 1
        assert events[0].is_global

    def test_new_revision_drops_cached_structures(self, editor: TokenEditor, raw_document):
        editor.parse("chip")
        editor.parse("label")
        assert len(editor.introspector._cache) == 2

        del raw_document["ui-kit"]["components"]["avatar"]
        editor.load_document(parse_document(raw_document, name="sample"))

        assert editor.introspector._cache == {}
        editor.parse("chip")
        assert len(editor.introspector._cache) == 1

    def test_same_revision_keeps_cached_structures(self, editor: TokenEditor):
        first = editor.parse("chip")
        editor.load_document(editor.document)
        assert editor.parse("chip") is first

    def test_switch_mode(self, editor: TokenEditor, scheduler: ManualScheduler):
        editor.edit(LABEL_TEXT, "#abc")
        scheduler.run_pending()

        dark = editor.switch_mode("dark")
        assert dark.mode == "dark"
        assert editor.mode == "dark"

        dark_name = editor.parse("label").props_named("text")[0].variable_name
        assert dark_name.startswith("--ds-themes-dark-")
        assert editor.resolve(dark_name) == "#111"

        editor.switch_mode("light")
        assert editor.resolve(LABEL_TEXT) == "#abc"

    def test_switch_mode_same_mode_no_swap(self, editor: TokenEditor):
        before = editor.document
        assert editor.switch_mode("light") is before

    def test_switch_mode_without_document(self):
        with pytest.raises(ValueError):
            TokenEditor().switch_mode("dark")

    def test_list_components(self, editor: TokenEditor):
        assert editor.list_components() == ["avatar", "chip", "label"]
        assert TokenEditor().list_components() == []


class TestEdits:
    """Tests for editing and notifications."""

    def test_edit_then_publish(self, editor: TokenEditor, scheduler: ManualScheduler):
        seen = []
        editor.subscribe(lambda event: seen.append(editor.resolve(CHIP_SMALL_WIDTH)), SubstringMatcher("chip"))

        assert editor.edit(CHIP_SMALL_WIDTH, "10px")
        assert editor.edit(CHIP_DEFAULT_WIDTH, "{tokens.size.1x}")
        assert seen == []

        scheduler.run_pending()
        assert seen == ["10px"]

    def test_rejected_edit_not_published(self, editor: TokenEditor, scheduler: ManualScheduler):
        brand = "--ds-themes-light-brand-palettes-neutral"
        assert not editor.edit(brand, "#000")
        assert not editor.broadcaster.pending

    def test_edit_property_uses_selection(self, editor: TokenEditor):
        assert editor.edit_property("chip", "width", "20px", {"size": "default"}) == 1
        assert editor.store.get_override(CHIP_DEFAULT_WIDTH) == "20px"
        assert editor.store.get_override(CHIP_SMALL_WIDTH) is None

    def test_edit_property_defaults_to_first_option(self, editor: TokenEditor):
        assert editor.edit_property("chip", "width", "6px") == 1
        assert editor.store.get_override(CHIP_SMALL_WIDTH) == "6px"

    def test_remove_restores_default(self, editor: TokenEditor, scheduler: ManualScheduler):
        editor.edit(CHIP_SMALL_WIDTH, "10px")
        editor.remove(CHIP_SMALL_WIDTH)
        assert editor.resolve(CHIP_SMALL_WIDTH) == "4px"

    def test_reset(self, editor: TokenEditor, scheduler: ManualScheduler):
        editor.edit_many({CHIP_SMALL_WIDTH: "1px", CHIP_DEFAULT_WIDTH: "2px"})
        scheduler.run_pending()

        events = []
        editor.subscribe(events.append, ExactMatcher("--unrelated"))
        assert editor.reset() == 2
        scheduler.run_pending()

        assert events[0].is_global
        assert editor.resolve(CHIP_DEFAULT_WIDTH) == "16px"


class TestReads:
    """Tests for resolved reads."""

    def test_resolve_property(self, editor: TokenEditor):
        assert editor.resolve_property("chip", "width", {"size": "default"}) == "16px"
        assert editor.resolve_property("chip", "missing") is None

    def test_resolve_group(self, editor: TokenEditor):
        assert editor.resolve_group("label", "label-text") == {
            "font-size": "16px",
            "font-weight": "400",
        }
        assert editor.resolve_group("label", "nope") == {}

    def test_variables_for_variants(self, editor: TokenEditor):
        editor.edit(CHIP_SMALL_WIDTH, "{tokens.size.4x}")
        variables = editor.variables_for_variants("chip", {"size": "small"})

        assert len(variables) == 1
        assert variables[0].variable_name == CHIP_SMALL_WIDTH
        assert variables[0].raw == "{tokens.size.4x}"
        assert variables[0].value == "16px"
        assert variables[0].overridden

    def test_variables_for_nested_selection(self, editor: TokenEditor):
        ghost = editor.variables_for_variants("avatar", {"style": "text", "style-secondary": "ghost"})
        assert [(v.name, v.value) for v in ghost] == [("background", "transparent")]

        image = editor.variables_for_variants("avatar", {"style": "image"})
        assert [v.name for v in image] == ["border"]

    def test_layer_filter(self):
        document = parse_document(
            {
                "ui-kit": {
                    "components": {
                        "panel": {
                            "colors": {
                                "layer-0": {"background": {"$type": "color", "$value": "#fff"}},
                                "layer-1": {"background": {"$type": "color", "$value": "#eee"}},
                            },
                            "padding": {"$type": "dimension", "$value": "8px"},
                        }
                    }
                }
            }
        )
        editor = TokenEditor(document, scheduler=ManualScheduler())
        variables = editor.variables_for_variants("panel", layer="layer-1")
        assert [(v.name, v.value) for v in variables] == [("background", "#eee"), ("padding", "8px")]

    def test_variable_name(self, editor: TokenEditor):
        assert editor.variable_name(["brand", "palettes", "neutral"]) == (
            "--ds-themes-light-brand-palettes-neutral"
        )
        assert editor.variable_name(["brand", "palettes", "neutral"], "dark") == (
            "--ds-themes-dark-brand-palettes-neutral"
        )
