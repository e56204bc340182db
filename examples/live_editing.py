#!/usr/bin/env python3
"""
Example: Live token editing.

This demonstrates how a token document becomes editable component
structures, how edits flow through the variable store, and how listeners
pick up the changes they care about.

Usage:
    python examples/live_editing.py
"""

from chuk_mcp_tokens.broadcast import ChangeEvent, ExactMatcher, ManualScheduler, SubstringMatcher
from chuk_mcp_tokens.document import DocumentLoader
from chuk_mcp_tokens.editor import TokenEditor


def main() -> None:
    """Demonstrate a live editing session."""
    print("CHUK Tokens Live Editing Demo")
    print("=" * 40)
    print()

    loader = DocumentLoader()
    document = loader.get_document("ui-kit")
    if not document:
        print("Failed to load document")
        return

    scheduler = ManualScheduler()
    editor = TokenEditor(document, scheduler=scheduler)
    scheduler.run_pending()

    # Component structure
    print("Components:")
    for name in editor.list_components():
        structure = editor.parse(name)
        axes = ", ".join(f"{v.prop_name}={v.variants}" for v in structure.variants) or "none"
        print(f"  {name}: {len(structure.props)} properties, axes: {axes}")
    print()

    # Two independent listeners
    button = editor.parse("button")
    height = button.props_named("height")[0]

    def on_height(event: ChangeEvent) -> None:
        print(f"  [height listener] {height.variable_name} -> {editor.resolve(height.variable_name)}")

    def on_button(event: ChangeEvent) -> None:
        print(f"  [button listener] {len(event.names)} button variables changed")

    editor.subscribe(on_height, ExactMatcher(height.variable_name))
    editor.subscribe(on_button, SubstringMatcher("components-button"))

    # Several edits, one coalesced publish
    print("Editing button (small):")
    editor.edit(height.variable_name, "{tokens.size.4x}")
    editor.edit_property("button", "border-radius", "var(--ds-tokens-size-2x)")
    scheduler.run_pending()
    print()

    print("Resolved button variables (outline, small):")
    for variable in editor.variables_for_variants("button", {"style": "outline"}, layer="layer-0"):
        marker = "*" if variable.overridden else " "
        print(f"  {marker} {variable.name:<14} {variable.value}")
    print()

    # Dark mode never sees light-mode overrides
    editor.switch_mode("dark")
    scheduler.run_pending()
    dark_height = editor.parse("button").props_named("height")[0]
    print(f"Dark mode height: {editor.resolve(dark_height.variable_name)}")

    editor.switch_mode("light")
    print(f"Cleared {editor.reset()} overrides")
    scheduler.run_pending()


if __name__ == "__main__":
    main()
