"""Interfaces of the parser collaborators.

Parsers and tokenizers live outside this package; the engine only needs to
hand them a sentence boundary and a tokenizer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from inkcheck.model import Document
    from inkcheck.symbols import SentenceBoundary


class Tokenizer(Protocol):
    """Splits sentence text into tokens."""

    def tokenize(self, content: str) -> list[str]: ...


class DocumentParser(Protocol):
    """Builds a Document from one source (text, path or stream)."""

    def parse(
        self,
        source: object,
        sentence_boundary: SentenceBoundary,
        tokenizer: Tokenizer | None,
    ) -> Document: ...
