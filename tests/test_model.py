"""Tests for inkcheck.model module."""

from __future__ import annotations

from conftest import make_section

from inkcheck.model import (
    Document,
    DocumentCollection,
    DocumentCollectionBuilder,
    Sentence,
)


class TestSection:
    """Tests for Section traversal."""

    def test_container_order(self) -> None:
        """Test paragraphs, then header, then list elements."""
        section = make_section(paragraphs=[["p."]], header=["h"], list_items=[["l1."], ["l2."]])
        containers = [[s.content for s in c] for c in section.iter_sentence_containers()]
        assert containers == [["p."], ["h"], ["l1."], ["l2."]]

    def test_empty_section_yields_header(self) -> None:
        """Test an empty section still yields its (empty) header."""
        assert list(make_section().iter_sentence_containers()) == [[]]


class TestDocument:
    """Tests for Document."""

    def test_identity_hash(self) -> None:
        """Test equal-looking documents are distinct keys."""
        first, second = Document(), Document()
        assert first != second
        assert len({first: 1, second: 2}) == 2

    def test_iterates_sections(self) -> None:
        """Test iterating a document yields its sections."""
        sections = [make_section(), make_section()]
        document = Document(sections)
        assert list(document) == sections
        assert len(document) == 2


class TestDocumentCollection:
    """Tests for DocumentCollection and its builder."""

    def test_builder_keeps_append_order(self) -> None:
        """Test the builder preserves insertion order."""
        documents = [Document(file_name=f"{i}.md") for i in range(3)]
        builder = DocumentCollectionBuilder()
        for document in documents:
            builder.add_document(document)

        collection = builder.build()

        assert list(collection) == documents
        assert len(collection) == 3
        assert collection[1] is documents[1]

    def test_builder_chaining(self) -> None:
        """Test add_document returns the builder."""
        collection = DocumentCollectionBuilder().add_document(Document()).add_document(Document()).build()
        assert len(collection) == 2

    def test_collection_is_a_snapshot(self) -> None:
        """Test later changes to the source list do not leak in."""
        documents = [Document()]
        collection = DocumentCollection(documents)
        documents.append(Document())
        assert len(collection) == 1


class TestSentence:
    """Tests for Sentence defaults."""

    def test_defaults(self) -> None:
        sentence = Sentence("Hello.")
        assert sentence.line_number == 1
        assert sentence.start_position_offset == 0
        assert sentence.tokens == []
