"""Document model consumed by the validation engine.

A parser builds the tree; the engine only walks it. Every level keeps its
children in declaration order.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field


@dataclass
class Sentence:
    """A sentence with its source position.

    Attributes:
        content: Text of the sentence.
        line_number: Line the sentence starts on (1-based).
        start_position_offset: Column offset of the first character.
        tokens: Tokens written by preprocessors before validation.
    """

    content: str
    line_number: int = 1
    start_position_offset: int = 0
    tokens: list[str] = field(default_factory=list)


@dataclass
class Paragraph:
    """An ordered run of sentences."""

    sentences: list[Sentence] = field(default_factory=list)


@dataclass
class ListElement:
    """A single list item."""

    level: int = 1
    sentences: list[Sentence] = field(default_factory=list)


@dataclass
class ListBlock:
    """A list made of list elements."""

    list_elements: list[ListElement] = field(default_factory=list)


@dataclass
class Section:
    """A section of a document.

    Attributes:
        level: Heading depth (0 for the implicit top-level section).
        header_contents: Sentences making up the section header.
        paragraphs: Paragraphs of the section body.
        list_blocks: Lists contained in the section.
    """

    level: int = 0
    header_contents: list[Sentence] = field(default_factory=list)
    paragraphs: list[Paragraph] = field(default_factory=list)
    list_blocks: list[ListBlock] = field(default_factory=list)

    def iter_sentence_containers(self) -> Iterator[list[Sentence]]:
        """Yield sentence lists in validation order.

        Paragraphs come first, then the header, then every list element of
        every list block.
        """
        for paragraph in self.paragraphs:
            yield paragraph.sentences
        yield self.header_contents
        for list_block in self.list_blocks:
            for list_element in list_block.list_elements:
                yield list_element.sentences


# eq=False keeps identity hashing so documents can key the result map.
@dataclass(eq=False)
class Document:
    """A parsed input document."""

    sections: list[Section] = field(default_factory=list)
    file_name: str | None = None

    def __iter__(self) -> Iterator[Section]:
        return iter(self.sections)

    def __len__(self) -> int:
        return len(self.sections)


class DocumentCollection:
    """Ordered, read-only batch of documents validated together."""

    def __init__(self, documents: Iterable[Document] = ()) -> None:
        self._documents: tuple[Document, ...] = tuple(documents)

    def __iter__(self) -> Iterator[Document]:
        return iter(self._documents)

    def __len__(self) -> int:
        return len(self._documents)

    def __getitem__(self, index: int) -> Document:
        return self._documents[index]

    def __repr__(self) -> str:
        return f"DocumentCollection({len(self._documents)} documents)"


class DocumentCollectionBuilder:
    """Collects documents in append order and freezes them into a collection.

    Example:
        >>> builder = DocumentCollectionBuilder()
        >>> builder.add_document(Document()).add_document(Document())
        >>> collection = builder.build()
    """

    def __init__(self) -> None:
        self._documents: list[Document] = []

    def add_document(self, document: Document) -> DocumentCollectionBuilder:
        self._documents.append(document)
        return self

    def build(self) -> DocumentCollection:
        return DocumentCollection(self._documents)
