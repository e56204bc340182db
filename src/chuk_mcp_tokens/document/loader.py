"""
Document loader - discovers and loads token documents.

Documents can come from:
1. Built-in library (shipped with package)
2. Project documents (user's project/tokens directory)

JSON and YAML files are both accepted.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from chuk_mcp_tokens.constants import DOCUMENT_EXTENSIONS
from chuk_mcp_tokens.diagnostics import DiagnosticSink, log_diagnostic
from chuk_mcp_tokens.document.model import TokenDocument, parse_document
from chuk_mcp_tokens.naming import get_default_mode, normalize_mode

logger = logging.getLogger(__name__)


class DocumentLoader:
    """
    Discovers and loads token documents.

    Documents are loaded from the library and project directories.
    Project documents override library documents with the same name.
    """

    def __init__(
        self,
        library_path: Path | None = None,
        project_path: Path | None = None,
        on_diagnostic: DiagnosticSink = log_diagnostic,
    ):
        """
        Initialize the document loader.

        Args:
            library_path: Path to built-in document library
            project_path: Path to project documents directory
            on_diagnostic: Sink for malformed-node diagnostics
        """
        self.library_path = library_path or (Path(__file__).parent / "library")
        self.project_path = project_path
        self.on_diagnostic = on_diagnostic
        self._cache: dict[tuple[str, str], TokenDocument] = {}

    def list_documents(self) -> list[str]:
        """
        List the names of all available documents.

        Returns names from both library and project, sorted.
        """
        names: set[str] = set()
        for directory in (self.library_path, self.project_path):
            if directory and directory.exists():
                for path in directory.iterdir():
                    if path.suffix in DOCUMENT_EXTENSIONS and path.is_file():
                        names.add(path.stem)
        return sorted(names)

    def get_document(self, name: str, mode: str | None = None) -> TokenDocument | None:
        """
        Get a document by name, bound to a mode.

        Project documents take precedence over library documents.

        Args:
            name: Document name (file stem)
            mode: Theme mode (process default when omitted)

        Returns:
            TokenDocument if found, None otherwise
        """
        resolved_mode = normalize_mode(mode) if mode else get_default_mode()
        key = (name, resolved_mode)
        if key in self._cache:
            return self._cache[key]

        # The same tree serves every mode
        for (cached_name, _), cached in self._cache.items():
            if cached_name == name:
                document = cached.with_mode(resolved_mode)
                self._cache[key] = document
                return document

        path = self.find_document_file(name)
        if path is None:
            return None

        document = self.load_file(path, resolved_mode)
        if document:
            self._cache[key] = document
        return document

    def find_document_file(self, name: str) -> Path | None:
        """Locate the file for a document name, project first."""
        for directory in (self.project_path, self.library_path):
            if not directory or not directory.exists():
                continue
            for extension in DOCUMENT_EXTENSIONS:
                candidate = directory / f"{name}{extension}"
                if candidate.exists():
                    return candidate
        return None

    def load_file(self, path: Path, mode: str | None = None) -> TokenDocument | None:
        """Load a document from a JSON or YAML file."""
        try:
            data = self._read(path)
        except (OSError, ValueError, yaml.YAMLError):
            logger.exception(f"Failed to read token document {path}")
            return None

        if not isinstance(data, dict):
            logger.warning(f"Token document {path} is not an object")
            return None

        return parse_document(data, mode, name=path.stem, on_diagnostic=self.on_diagnostic)

    def copy_to_project(self, name: str) -> Path | None:
        """
        Copy a library document to the project for customization.

        Args:
            name: Document name

        Returns:
            Path to copied file, or None if not found
        """
        if not self.project_path:
            raise ValueError("No project path configured")

        library_file = None
        for extension in DOCUMENT_EXTENSIONS:
            candidate = self.library_path / f"{name}{extension}"
            if candidate.exists():
                library_file = candidate
                break
        if library_file is None:
            return None

        self.project_path.mkdir(parents=True, exist_ok=True)

        dest_file = self.project_path / library_file.name
        if dest_file.exists():
            raise ValueError(f"Document already exists in project: {name}")

        dest_file.write_text(library_file.read_text())

        # Invalidate cache
        self._drop(name)

        return dest_file

    def _read(self, path: Path) -> Any:
        text = path.read_text(encoding="utf-8")
        if path.suffix == ".json":
            return json.loads(text)
        return yaml.safe_load(text)

    def _drop(self, name: str) -> None:
        for key in [k for k in self._cache if k[0] == name]:
            del self._cache[key]

    def clear_cache(self) -> None:
        """Clear the document cache."""
        self._cache.clear()
