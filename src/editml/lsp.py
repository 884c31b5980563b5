"""Minimal LSP server for EditML, publishing diagnostics only."""

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

from editml import __version__, transform
from editml.errors import Issue, Severity

server = LanguageServer(
    "editml-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full
)


def to_diagnostic(issue: Issue) -> Diagnostic:
    """Convert an issue to an LSP diagnostic covering one character."""
    line = (issue.line or 1) - 1
    col = (issue.column or 1) - 1
    severity = (
        DiagnosticSeverity.Error if issue.severity is Severity.ERROR else DiagnosticSeverity.Warning
    )
    return Diagnostic(
        range=Range(
            start=Position(line=line, character=col),
            end=Position(line=line, character=col + 1),
        ),
        message=issue.message,
        severity=severity,
        source="editml",
    )


def _validate(ls: LanguageServer, uri: str) -> None:
    """Run the EditML pipeline and publish diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    filename = uri.rsplit("/", 1)[-1] if "/" in uri else uri
    _, issues = transform(doc.source, filename)
    diagnostics = [to_diagnostic(issue) for issue in issues]

    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


def main() -> None:
    server.start_io()
