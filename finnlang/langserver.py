"""
FinnLang Language Server entry point.

This server provides basic language features for FinnLang source files using
`pygls`. It reuses the FinnLang lexer and parser to build a simple symbol
index supporting definition lookup, hover information and document symbols,
and publishes the first lexical or syntax error of a document as a
diagnostic.

Run with ``python -m finnlang.langserver`` (speaks LSP over stdio).


File: langserver.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from lsprotocol.types import (
    TEXT_DOCUMENT_DEFINITION,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_DOCUMENT_SYMBOL,
    TEXT_DOCUMENT_HOVER,
    DefinitionParams,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    DocumentSymbol,
    DocumentSymbolParams,
    Hover,
    HoverParams,
    Location,
    MarkupContent,
    MarkupKind,
    Position,
    PublishDiagnosticsParams,
    Range,
    SymbolKind,
)
from pygls.lsp.server import LanguageServer

from finnlang.exceptions import FinnException
from finnlang.nodes import FunctionDef, Let
from finnlang.runner import parse_source

logger = logging.getLogger(__name__)

SOURCE_SUFFIX = ".finn"


@dataclass
class FinnSymbol:
    """Represents a top-level symbol in a FinnLang file."""

    name: str
    kind: SymbolKind
    uri: str
    line: int
    detail: str


def describe_definition(node) -> str:
    """Return the declaration line shown on hover."""
    if isinstance(node, FunctionDef):
        params = ", ".join(f"{p.name}: {p.type_name}" for p in node.params)
        signature = f"funct {node.name}({params})"
        if node.return_type:
            signature += f": {node.return_type}"
        return signature
    if node.type_name:
        return f"let {node.name}: {node.type_name}"
    return f"let {node.name}"


def collect_symbols(uri: str, text: str) -> List[FinnSymbol]:
    """
    Parse ``text`` and extract its top-level functions and variables.

    Lines are zero-based as LSP expects.

    Raises:
        FinnException: If the text does not tokenize or parse.
    """
    symbols: List[FinnSymbol] = []
    for node in parse_source(text, uri):
        if isinstance(node, FunctionDef):
            kind = SymbolKind.Function
        elif isinstance(node, Let):
            kind = SymbolKind.Variable
        else:
            continue
        symbols.append(
            FinnSymbol(node.name, kind, uri, node.line - 1, describe_definition(node))
        )
    return symbols


def error_diagnostic(error: FinnException) -> Diagnostic:
    """Convert a lexical or syntax error into an LSP diagnostic."""
    line = max((error.line or 1) - 1, 0)
    column = max((getattr(error, "column", None) or 1) - 1, 0)
    return Diagnostic(
        range=Range(Position(line, column), Position(line, column + 1)),
        message=error.detail,
        severity=DiagnosticSeverity.Error,
        source="finnlang",
    )


class FinnLanguageServer(LanguageServer):
    """Language server for FinnLang source files."""

    def __init__(self) -> None:
        super().__init__("finn-ls", "v0.1")
        self.symbols_by_uri: Dict[str, List[FinnSymbol]] = {}
        self.global_symbols: Dict[str, List[FinnSymbol]] = {}
        self.indexed_workspace = False

    def _index_workspace(self) -> None:
        """Parse all FinnLang files under the current workspace."""
        root = self.workspace.root_path
        if root:
            for path in Path(root).rglob(f"*{SOURCE_SUFFIX}"):
                try:
                    text = path.read_text(encoding="utf-8")
                except OSError as e:
                    logger.warning("cannot read %s: %s", path, e)
                    continue
                self.update_index(path.as_uri(), text)
        self.indexed_workspace = True

    def update_index(self, uri: str, text: str) -> List[Diagnostic]:
        """
        Parse ``text`` and update the symbol index for ``uri``.

        A document that fails to parse keeps its previous symbols.

        Returns:
            list: Diagnostics for the document, empty when it parses.
        """
        try:
            symbols = collect_symbols(uri, text)
        except FinnException as e:
            logger.debug("cannot index %s: %s", uri, e)
            return [error_diagnostic(e)]
        self.symbols_by_uri[uri] = symbols
        self._rebuild_global_index()
        return []

    def _rebuild_global_index(self) -> None:
        self.global_symbols.clear()
        for syms in self.symbols_by_uri.values():
            for sym in syms:
                self.global_symbols.setdefault(sym.name, []).append(sym)

    def lookup(self, word: str) -> Optional[FinnSymbol]:
        """Return the first indexed symbol called ``word``."""
        if not self.indexed_workspace:
            self._index_workspace()
        matches = self.global_symbols.get(word)
        return matches[0] if matches else None

    def refresh(self, uri: str, text: str) -> None:
        """Re-index a document and publish its diagnostics."""
        diagnostics = self.update_index(uri, text)
        self.text_document_publish_diagnostics(
            PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
        )


def _symbol_range(sym: FinnSymbol) -> Range:
    return Range(Position(sym.line, 0), Position(sym.line, len(sym.name)))


lang_server = FinnLanguageServer()


@lang_server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: FinnLanguageServer, params: DidOpenTextDocumentParams) -> None:
    """Index a document when it is opened."""
    ls.refresh(params.text_document.uri, params.text_document.text)


@lang_server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: FinnLanguageServer, params: DidChangeTextDocumentParams) -> None:
    """Re-index a document when it changes."""
    doc = ls.workspace.get_text_document(params.text_document.uri)
    ls.refresh(doc.uri, doc.source)


@lang_server.feature(TEXT_DOCUMENT_DEFINITION)
def definition(ls: FinnLanguageServer, params: DefinitionParams) -> Optional[Location]:
    """Return the definition location for the symbol under the cursor."""
    doc = ls.workspace.get_text_document(params.text_document.uri)
    word = doc.word_at_position(params.position)
    sym = ls.lookup(word) if word else None
    if sym is None:
        return None
    return Location(uri=sym.uri, range=_symbol_range(sym))


@lang_server.feature(TEXT_DOCUMENT_HOVER)
def hover(ls: FinnLanguageServer, params: HoverParams) -> Optional[Hover]:
    """Return hover information for the symbol under the cursor."""
    doc = ls.workspace.get_text_document(params.text_document.uri)
    word = doc.word_at_position(params.position)
    sym = ls.lookup(word) if word else None
    if sym is None:
        return None
    return Hover(contents=MarkupContent(kind=MarkupKind.PlainText, value=sym.detail))


@lang_server.feature(TEXT_DOCUMENT_DOCUMENT_SYMBOL)
def document_symbols(ls: FinnLanguageServer, params: DocumentSymbolParams) -> List[DocumentSymbol]:
    """Return top-level symbols for the given document."""
    return [
        DocumentSymbol(
            name=sym.name,
            kind=sym.kind,
            range=_symbol_range(sym),
            selection_range=_symbol_range(sym),
            detail=sym.detail,
        )
        for sym in ls.symbols_by_uri.get(params.text_document.uri, [])
    ]


def main() -> None:
    """Start the language server."""
    lang_server.start_io()


if __name__ == "__main__":
    main()
