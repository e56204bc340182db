"""
Tests for the variable store and reference resolution.
"""

from chuk_mcp_tokens.diagnostics import DiagnosticCollector, DiagnosticKind
from chuk_mcp_tokens.document import parse_document
from chuk_mcp_tokens.naming import name_for
from chuk_mcp_tokens.references import extract_brace_content, parse_reference, reference_target
from chuk_mcp_tokens.models.token import PathReference, VariableReference
from chuk_mcp_tokens.store import InMemoryStyleBackend, StyleBackend, VariableStore

BRAND_NEUTRAL_LIGHT = "--ds-themes-light-brand-palettes-neutral"
LABEL_TEXT_LIGHT = "--ds-themes-light-ui-kit-components-label-properties-colors-layer-0-text"
LABEL_TEXT_DARK = "--ds-themes-dark-ui-kit-components-label-properties-colors-layer-0-text"
THEMED_LABEL_TEXT = "--ds-themes-{mode}-ui-kit-components-label-properties-colors-text"


def themed_document(mode: str = "light"):
    """Document whose brand palette is split per mode under brand.themes."""
    return parse_document(
        {
            "brand": {
                "themes": {
                    "light": {"palettes": {"neutral": {"$type": "color", "$value": "#111"}}},
                    "dark": {"palettes": {"neutral": {"$type": "color", "$value": "#eee"}}},
                }
            },
            "ui-kit": {
                "components": {
                    "label": {
                        "properties": {
                            "colors": {
                                "text": {
                                    "$type": "color",
                                    "$value": "{brand.themes.light.palettes.neutral}",
                                }
                            }
                        }
                    }
                }
            },
        },
        mode,
    )


class TestReferences:
    """Tests for reference parsing."""

    def test_brace_content(self):
        assert extract_brace_content("{tokens.color.gray.100}") == "tokens.color.gray.100"
        assert extract_brace_content("{ui-kit .components . button}") == "ui-kit.components.button"
        assert extract_brace_content("{brand themes light palettes.neutral . 100}") == (
            "brand.themes.light.palettes.neutral.100"
        )
        assert extract_brace_content("tokens.size") is None
        assert extract_brace_content("{}") is None

    def test_root_aliases(self):
        assert parse_reference("{token.size.4x}") == PathReference(path=("tokens", "size", "4x"))
        assert parse_reference("{uikit.components.button}").root == "ui-kit"

    def test_brand_mode_stripped(self):
        assert parse_reference("{brand.themes.dark.palettes.neutral}") == PathReference(
            path=("brand", "palettes", "neutral")
        )
        assert parse_reference("{brand.light.palettes.neutral}") == PathReference(
            path=("brand", "palettes", "neutral")
        )

    def test_literals(self):
        assert parse_reference("4px") is None
        assert parse_reference(4) is None
        assert parse_reference("var(not-a-name)") is None

    def test_reference_target(self):
        assert reference_target(VariableReference(name="--x"), "dark") == "--x"
        target = reference_target(PathReference(path=("brand", "palettes", "neutral")), "dark")
        assert target == "--ds-themes-dark-brand-palettes-neutral"


class TestReadWrite:
    """Tests for overrides and defaults."""

    def test_precedence(self):
        store = VariableStore()
        assert store.get("--x") is None

        store.set_default("--x", "1px")
        assert store.get("--x") == "1px"

        store.set("--x", "2px")
        assert store.get("--x") == "2px"
        assert store.get_default("--x") == "1px"

        store.remove("--x")
        assert store.get("--x") == "1px"

    def test_set_many(self):
        store = VariableStore()
        assert store.set_many({"--a": "1", "--b": 2}) == 2
        assert store.get("--b") == "2"

    def test_brand_variables_need_references(self):
        store = VariableStore()
        assert store.set(BRAND_NEUTRAL_LIGHT, "{tokens.colors.gray.900}")
        assert not store.set(BRAND_NEUTRAL_LIGHT, "#123456")
        assert store.get(BRAND_NEUTRAL_LIGHT) == "{tokens.colors.gray.900}"

    def test_brand_slash_names_fixed(self):
        store = VariableStore()
        assert store.set(BRAND_NEUTRAL_LIGHT, "color/gray/100")
        assert store.get(BRAND_NEUTRAL_LIGHT) == "var(--ds-tokens-color-gray-100)"

    def test_reset_and_overrides(self):
        backend = InMemoryStyleBackend()
        backend.set("--foreign", "kept")
        store = VariableStore(backend)
        store.set("--a", "1")
        store.set("--b", "2")

        assert store.overrides() == {"--a": "1", "--b": "2"}
        assert store.reset() == 2
        assert store.overrides() == {}
        assert backend.get("--foreign") == "kept"

    def test_backend_contract(self):
        assert isinstance(InMemoryStyleBackend(), StyleBackend)

    def test_load_document(self, document):
        store = VariableStore()
        count = store.load_document(document)
        assert count == len(list(document.iter_values()))
        assert store.get("--ds-tokens-size-4x") == "16px"
        assert store.get(BRAND_NEUTRAL_LIGHT) == "{tokens.colors.gray.900}"

    def test_set_none_removes_override(self):
        store = VariableStore()
        store.set_default("--x", "1px")
        store.set("--x", "2px")

        assert store.set("--x", None)
        assert store.get_override("--x") is None
        assert store.get("--x") == "1px"
        assert store.overrides() == {}

    def test_load_document_replaces_defaults(self, document):
        store = VariableStore()
        store.load_document(document)
        store.load_document(document.with_mode("dark"))
        assert store.get(LABEL_TEXT_LIGHT) is None
        assert store.get(LABEL_TEXT_DARK) == "#111"


class TestResolve:
    """Tests for reference resolution."""

    def test_variable_chain(self):
        store = VariableStore()
        store.set("--x", "var(--y)")
        store.set("--y", "4px")
        assert store.resolve("--x") == "4px"

    def test_literal_unchanged(self):
        store = VariableStore()
        assert store.resolve_value("4px") == "4px"
        assert store.resolve_value(12) == 12

    def test_path_reference_chain(self, document):
        store = VariableStore()
        store.load_document(document)
        assert store.resolve(BRAND_NEUTRAL_LIGHT) == "#111"
        assert store.resolve_value("{tokens.size.4x}") == "16px"

    def test_component_property(self, document):
        store = VariableStore()
        store.load_document(document)
        name = name_for(
            ("ui-kit", "components", "label", "properties", "label-text", "font-size"), "light"
        )
        assert store.resolve(name, "light") == "16px"

    def test_cycle_returns_none(self):
        collector = DiagnosticCollector()
        store = VariableStore(on_diagnostic=collector)
        store.set("--a", "var(--b)")
        store.set("--b", "var(--a)")
        assert store.resolve("--a") is None
        assert collector.of_kind(DiagnosticKind.REFERENCE_CYCLE)

    def test_depth_bound(self):
        store = VariableStore(max_depth=3)
        for i in range(3):
            store.set(f"--v{i}", f"var(--v{i + 1})")
        store.set("--v3", "end")
        assert store.resolve("--v0") == "end"

        store.set("--v3", "var(--v4)")
        store.set("--v4", "end")
        assert store.resolve("--v0") is None

    def test_missing(self):
        collector = DiagnosticCollector()
        store = VariableStore(on_diagnostic=collector)
        assert store.resolve("--nope") is None
        assert collector.of_kind(DiagnosticKind.LOOKUP_MISS)[0].subject == "--nope"

    def test_fallback(self):
        store = VariableStore()
        store.set("--x", "var(--missing, 8px)")
        assert store.resolve("--x") == "8px"

        store.set("--y", "var(--missing, var(--z))")
        store.set("--z", "2px")
        assert store.resolve("--y") == "2px"

    def test_resolve_number(self):
        store = VariableStore()
        store.set("--w", "var(--v)")
        store.set("--v", "12.5px")
        assert store.resolve_number("--w") == 12.5
        assert store.resolve_number("--missing", 3.0) == 3.0
        store.set("--c", "red")
        assert store.resolve_number("--c") is None


class TestModeIsolation:
    """Overrides never leak across modes."""

    def test_dark_override_invisible_in_light(self, document):
        store = VariableStore()
        store.load_document(document)
        store.set(LABEL_TEXT_DARK, "#fff")

        assert store.resolve(LABEL_TEXT_LIGHT, "light") == "#111"
        assert store.get(LABEL_TEXT_LIGHT) == "#111"

    def test_cross_mode_name_is_mismatch(self):
        collector = DiagnosticCollector()
        store = VariableStore(on_diagnostic=collector)
        store.set(LABEL_TEXT_DARK, "#fff")

        assert store.resolve(LABEL_TEXT_DARK, "light") is None
        assert store.resolve(LABEL_TEXT_DARK, "dark") == "#fff"
        assert collector.of_kind(DiagnosticKind.MODE_MISMATCH)

    def test_cross_mode_hop_is_mismatch(self):
        store = VariableStore()
        store.set("--x", f"var({LABEL_TEXT_DARK})")
        store.set(LABEL_TEXT_DARK, "#fff")
        assert store.resolve("--x", "light") is None

    def test_brand_reference_follows_resolving_mode(self, document):
        store = VariableStore()
        store.load_document(document)
        store.load_document(document.with_mode("dark"))
        store.set("--ds-themes-dark-brand-palettes-neutral", "var(--ds-tokens-size-1x)")

        assert store.resolve_value("{brand.themes.light.palettes.neutral}", "dark") == "4px"

    def test_brand_themes_resolve_in_active_mode(self):
        store = VariableStore()
        store.load_document(themed_document("light"))

        assert store.resolve(THEMED_LABEL_TEXT.format(mode="light"), "light") == "#111"
        assert store.get("--ds-themes-light-brand-palettes-neutral") == "#111"

    def test_brand_themes_other_mode_not_loaded(self):
        store = VariableStore()
        store.load_document(themed_document("light"))

        assert store.get("--ds-themes-light-brand-themes-dark-palettes-neutral") is None
        assert store.get("--ds-themes-light-brand-themes-light-palettes-neutral") is None
        assert not any("-brand-themes-" in name for name in store._defaults)

    def test_brand_themes_dark_content_in_dark(self):
        store = VariableStore()
        store.load_document(themed_document("dark"))

        assert store.resolve(THEMED_LABEL_TEXT.format(mode="dark"), "dark") == "#eee"
        assert store.get("--ds-themes-dark-brand-palettes-neutral") == "#eee"
        assert store.resolve(THEMED_LABEL_TEXT.format(mode="light"), "light") is None

    def test_flat_brand_tree_still_loads(self, document):
        store = VariableStore()
        store.load_document(document.with_mode("dark"))
        assert store.resolve("--ds-themes-dark-brand-palettes-neutral", "dark") == "#111"
