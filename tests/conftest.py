"""Pytest configuration and fixtures for inkcheck tests."""

from __future__ import annotations

import os

import pytest

# Set a fixed terminal width to prevent line wrapping issues in CI
# This must be set before any Rich imports
os.environ.setdefault("COLUMNS", "200")
os.environ.setdefault("LINES", "50")
# Disable Rich's terminal detection to ensure consistent output
os.environ.setdefault("TERM", "dumb")

from inkcheck.model import (  # noqa: E402
    Document,
    DocumentCollection,
    ListBlock,
    ListElement,
    Paragraph,
    Section,
    Sentence,
)
from inkcheck.validators import registry as registry_module  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_global_registry(monkeypatch: pytest.MonkeyPatch) -> None:
    """Give every test its own empty global registry."""
    monkeypatch.setattr(registry_module, "_global_registry", None)
    monkeypatch.delenv("INKCHECK_LANGUAGE", raising=False)


def make_section(
    paragraphs: list[list[str]] | None = None,
    header: list[str] | None = None,
    list_items: list[list[str]] | None = None,
) -> Section:
    """Build a section from plain strings.

    Each inner list of ``paragraphs`` is one paragraph; each inner list of
    ``list_items`` is one list element, all in a single list block.
    """
    line = 1
    section = Section(level=1)
    for texts in paragraphs or []:
        sentences = []
        for text in texts:
            sentences.append(Sentence(text, line_number=line))
            line += 1
        section.paragraphs.append(Paragraph(sentences))
    section.header_contents = [Sentence(text, line_number=0) for text in header or []]
    if list_items:
        section.list_blocks.append(
            ListBlock([ListElement(sentences=[Sentence(t) for t in item]) for item in list_items])
        )
    return section


def make_collection(*documents: Document) -> DocumentCollection:
    return DocumentCollection(documents)
