"""
Pytest configuration and shared fixtures.
"""

import tempfile
from pathlib import Path

import pytest

from chuk_mcp_tokens.broadcast import ManualScheduler
from chuk_mcp_tokens.constants import DEFAULT_MODE
from chuk_mcp_tokens.diagnostics import DiagnosticCollector
from chuk_mcp_tokens.document import TokenDocument, parse_document
from chuk_mcp_tokens.editor import TokenEditor
from chuk_mcp_tokens.naming import set_default_mode

LIBRARY_PATH = Path(__file__).parent.parent / "src" / "chuk_mcp_tokens" / "document" / "library"


def color(value: str) -> dict:
    return {"$type": "color", "$value": value}


def dimension(value) -> dict:
    return {"$type": "dimension", "$value": value}


@pytest.fixture(autouse=True)
def reset_default_mode():
    """Every test starts in the built-in default mode."""
    set_default_mode(DEFAULT_MODE)
    yield
    set_default_mode(DEFAULT_MODE)


@pytest.fixture
def temp_dir() -> Path:
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def library_path() -> Path:
    """Path to the built-in document library."""
    return LIBRARY_PATH


@pytest.fixture
def collector() -> DiagnosticCollector:
    return DiagnosticCollector()


@pytest.fixture
def raw_document() -> dict:
    """A small token document using both schema shapes."""
    return {
        "tokens": {
            "size": {
                "1x": dimension({"value": 4, "unit": "px"}),
                "4x": dimension({"value": 16, "unit": "px"}),
            },
            "colors": {"gray": {"900": color("#111")}},
        },
        "brand": {
            "palettes": {"neutral": color("{tokens.colors.gray.900}")},
        },
        "ui-kit": {
            "components": {
                "label": {
                    "properties": {
                        "colors": {"layer-0": {"text": color("#111")}},
                        "label-text": {
                            "font-size": dimension("{tokens.size.4x}"),
                            "font-weight": {"$type": "number", "$value": 400},
                        },
                    }
                },
                "chip": {
                    "variants": {
                        "sizes": {
                            "small": {"properties": {"width": dimension("{tokens.size.1x}")}},
                            "default": {"properties": {"width": dimension("{tokens.size.4x}")}},
                        }
                    }
                },
                "avatar": {
                    "variants": {
                        "text": {
                            "variants": {
                                "solid": {"colors": {"layer-0": {"background": color("#333")}}},
                                "ghost": {"colors": {"layer-0": {"background": color("transparent")}}},
                            }
                        },
                        "image": {"colors": {"layer-0": {"border": color("#eee")}}},
                    },
                    "size": {
                        "variants": {
                            "small": dimension("{tokens.size.4x}"),
                            "large": dimension({"value": 64, "unit": "px"}),
                        }
                    },
                },
            }
        },
    }


@pytest.fixture
def document(raw_document: dict) -> TokenDocument:
    return parse_document(raw_document, name="sample")


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def editor(document: TokenDocument, scheduler: ManualScheduler) -> TokenEditor:
    """Editor over the sample document with manually flushed broadcasts."""
    session = TokenEditor(document, scheduler=scheduler)
    scheduler.run_pending()
    return session
