"""Minimal LSP server for pattern list files — diagnostics only.

A pattern list holds one glob pattern per line; blank lines and lines
starting with '#' are ignored.
"""

from __future__ import annotations

from lsprotocol.types import (
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    Position,
    PublishDiagnosticsParams,
    Range,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer

from pathglob import __version__
from pathglob.errors import PatternSyntaxError
from pathglob.parser import parse

server = LanguageServer(
    "pathglob-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full
)


def check_patterns(source: str) -> list[Diagnostic]:
    """Parse every pattern line and return one diagnostic per syntax error."""
    diagnostics: list[Diagnostic] = []
    for line_no, line in enumerate(source.splitlines()):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        indent = len(line) - len(line.lstrip())
        try:
            parse(stripped)
        except PatternSyntaxError as exc:
            start_col = indent + exc.span.start
            end_col = indent + max(exc.span.end, exc.span.start + 1)
            diagnostics.append(
                Diagnostic(
                    range=Range(
                        start=Position(line=line_no, character=start_col),
                        end=Position(line=line_no, character=end_col),
                    ),
                    message=exc.message,
                    severity=DiagnosticSeverity.Error,
                    source="pathglob",
                )
            )
    return diagnostics


def _validate(ls: LanguageServer, uri: str) -> None:
    """Check the document's patterns and publish diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=check_patterns(doc.source))
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


def main() -> None:
    server.start_io()
