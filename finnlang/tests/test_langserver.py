"""
Tests for the language server helpers.
"""
import pytest
from lsprotocol.types import DocumentSymbolParams, SymbolKind, TextDocumentIdentifier

from finnlang.exceptions import LexicalException, ParseException
from finnlang.langserver import (
    FinnLanguageServer,
    collect_symbols,
    document_symbols,
    error_diagnostic,
)

SOURCE = (
    "let total: int = 0;\n"
    "funct add(a: int, b: int): int {\n"
    "    let inner = a;\n"
    "    return a + b;\n"
    "}\n"
    "let label = \"x\";\n"
    "funct hello() { woof(\"hi\"); }\n"
    "woof(add(1, 2));\n"
)


def test_collect_symbols():
    symbols = collect_symbols("file:///demo.finn", SOURCE)
    assert [(s.name, s.kind, s.line) for s in symbols] == [
        ("total", SymbolKind.Variable, 0),
        ("add", SymbolKind.Function, 1),
        ("label", SymbolKind.Variable, 5),
        ("hello", SymbolKind.Function, 6),
    ]
    assert [s.detail for s in symbols] == [
        "let total: int",
        "funct add(a: int, b: int): int",
        "let label",
        "funct hello()",
    ]


def test_syntax_error_diagnostic():
    with pytest.raises(ParseException) as excinfo:
        collect_symbols("file:///bad.finn", "let x = 1;\nlet y = ;\n")
    diagnostic = error_diagnostic(excinfo.value)
    assert diagnostic.range.start.line == 1
    assert diagnostic.range.start.character == 8
    assert diagnostic.message == "Expected expression, but got ';' (SEMI)"


def test_lexical_error_diagnostic():
    with pytest.raises(LexicalException) as excinfo:
        collect_symbols("file:///bad.finn", "woof(1);\n  woof(#);\n")
    diagnostic = error_diagnostic(excinfo.value)
    assert diagnostic.range.start.line == 1
    assert diagnostic.range.start.character == 7
    assert "Unexpected character '#'" in diagnostic.message


def test_index_keeps_symbols_of_broken_document():
    ls = FinnLanguageServer()
    uri = "file:///demo.finn"
    assert ls.update_index(uri, SOURCE) == []
    assert [s.name for s in ls.global_symbols["add"]] == ["add"]

    diagnostics = ls.update_index(uri, "funct broken( {")
    assert len(diagnostics) == 1
    assert "add" in ls.global_symbols

    params = DocumentSymbolParams(text_document=TextDocumentIdentifier(uri=uri))
    names = [sym.name for sym in document_symbols(ls, params)]
    assert names == ["total", "add", "label", "hello"]
