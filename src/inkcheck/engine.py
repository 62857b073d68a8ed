"""Validation engine running rules over a document collection.

The engine resolves its rules once, at construction, and sorts them into
document, section and sentence rules. ``validate`` then walks the
collection in four stages: document rules, section rules, sentence
preprocessing, sentence rules.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING, Any

from inkcheck.config import Configuration, load_config
from inkcheck.exceptions import ConfigurationError, SinkError
from inkcheck.model import (
    Document,
    DocumentCollection,
    DocumentCollectionBuilder,
    Section,
    Sentence,
)
from inkcheck.sinks import ConsoleSink, ResultSink
from inkcheck.symbols import SentenceBoundary
from inkcheck.validators.base import PreProcessor, Target, ValidationError, Validator
from inkcheck.validators.registry import ValidatorRegistry, get_global_registry

if TYPE_CHECKING:
    from inkcheck.parser import DocumentParser

logger = logging.getLogger(__name__)

ResultMap = dict[Document, list[ValidationError]]


class ValidationEngine:
    """Runs configured rules over documents and reports findings.

    One engine handles one run at a time: rule instances may keep state
    between the preprocessing and validation stages.

    Attributes:
        configuration: Configuration the engine was built from.
        sink: Receives every finding as soon as it is produced.
        sentence_boundary: Symbols handed to parsers via ``parse``.
    """

    def __init__(
        self,
        configuration: Configuration,
        sink: ResultSink,
        registry: ValidatorRegistry | None = None,
    ) -> None:
        """Resolve and classify every configured rule.

        Args:
            configuration: Rules, symbols and tokenizer to use.
            sink: Destination for findings.
            registry: Registry to resolve rules with. Defaults to the global one.

        Raises:
            ValueError: If configuration is None.
            ConfigurationError: If a rule is unknown or has no valid target.
            ConstructionError: If a rule fails to initialize.
        """
        if configuration is None:
            raise ValueError("Configuration object is None")

        self.configuration = configuration
        self.sink = sink
        self.sentence_boundary = SentenceBoundary.from_symbol_table(configuration.get_symbol_table())

        registry = registry or get_global_registry()
        document_validators: list[Validator] = []
        section_validators: list[Validator] = []
        sentence_validators: list[Validator] = []

        for config in configuration.validator_configs:
            validator = registry.resolve(config, configuration.get_symbol_table())
            if validator.target is Target.SENTENCE:
                sentence_validators.append(validator)
            elif validator.target is Target.SECTION:
                section_validators.append(validator)
            elif validator.target is Target.DOCUMENT:
                document_validators.append(validator)
            else:
                raise ConfigurationError(
                    f"Validator {config.name} declares no valid target: {validator.target!r}"
                )

        self._document_validators = tuple(document_validators)
        self._section_validators = tuple(section_validators)
        self._sentence_validators = tuple(sentence_validators)
        self._preprocessors = tuple(v for v in sentence_validators if isinstance(v, PreProcessor))

    @property
    def document_validators(self) -> tuple[Validator, ...]:
        return self._document_validators

    @property
    def section_validators(self) -> tuple[Validator, ...]:
        return self._section_validators

    @property
    def sentence_validators(self) -> tuple[Validator, ...]:
        return self._sentence_validators

    def validate(self, documents: DocumentCollection) -> ResultMap:
        """Validate a document collection.

        Args:
            documents: Documents to validate, in reporting order.

        Returns:
            Findings per document, with an entry for every document.
        """
        self.sink.flush_header()
        results: ResultMap = {document: [] for document in documents}
        self._run_document_validators(documents, results)
        self._run_section_validators(documents, results)
        self._run_sentence_preprocessors(documents)
        self._run_sentence_validators(documents, results)
        self.sink.flush_footer()
        return results

    def _apply(self, validator: Validator, entity: Any) -> list[ValidationError]:
        # Single call site for rules. Rule exceptions propagate and end the
        # run; subclasses may override this to isolate failing rules.
        return validator.validate(entity)

    def _collect(self, document: Document, errors: list[ValidationError], results: ResultMap) -> None:
        for error in errors:
            if error.document is None:
                error.document = document
            self._flush_error(document, error)
            results[document].append(error)

    def _flush_error(self, document: Document, error: ValidationError) -> None:
        # A failed write skips the output of this finding only.
        try:
            self.sink.flush_error(document, error)
        except (SinkError, OSError) as e:
            logger.error(
                "Failed to flush error: %s: %s (line %s): %s",
                error.validator_name,
                error.message,
                error.line_number,
                e,
            )
            logger.error("Skipping to flush this error...")

    def _run_document_validators(self, documents: DocumentCollection, results: ResultMap) -> None:
        for document in documents:
            for validator in self._document_validators:
                self._collect(document, self._apply(validator, document), results)

    def _run_section_validators(self, documents: DocumentCollection, results: ResultMap) -> None:
        for document in documents:
            for section in document:
                for validator in self._section_validators:
                    self._collect(document, self._apply(validator, section), results)

    def _run_sentence_preprocessors(self, documents: DocumentCollection) -> None:
        if not self._preprocessors:
            return
        for document in documents:
            for section in document:
                for sentences in section.iter_sentence_containers():
                    self._preprocess_sentences(sentences)

    def _preprocess_sentences(self, sentences: list[Sentence]) -> None:
        for preprocessor in self._preprocessors:
            for sentence in sentences:
                preprocessor.preprocess(sentence)

    def _run_sentence_validators(self, documents: DocumentCollection, results: ResultMap) -> None:
        for document in documents:
            for section in document:
                self._validate_section_sentences(document, section, results)

    def _validate_section_sentences(self, document: Document, section: Section, results: ResultMap) -> None:
        for sentences in section.iter_sentence_containers():
            for validator in self._sentence_validators:
                for sentence in sentences:
                    self._collect(document, self._apply(validator, sentence), results)

    def parse(self, parser: DocumentParser, source: object) -> Document:
        """Parse one source with this engine's sentence boundary and tokenizer."""
        return parser.parse(source, self.sentence_boundary, self.configuration.tokenizer)

    def parse_all(self, parser: DocumentParser, sources: Iterable[object]) -> DocumentCollection:
        """Parse several sources into a collection, keeping their order."""
        builder = DocumentCollectionBuilder()
        for source in sources:
            builder.add_document(self.parse(parser, source))
        return builder.build()

    def __repr__(self) -> str:
        return (
            f"ValidationEngine(document_validators={list(self._document_validators)}, "
            f"section_validators={list(self._section_validators)}, "
            f"sentence_validators={list(self._sentence_validators)}, "
            f"sink={self.sink!r})"
        )


class ValidationEngineBuilder:
    """Step-by-step construction of a ValidationEngine.

    Example:
        >>> engine = ValidationEngineBuilder().set_config_path(Path(".inkcheckrc")).build()
    """

    def __init__(self) -> None:
        self._configuration: Configuration | None = None
        self._sink: ResultSink | None = None
        self._registry: ValidatorRegistry | None = None

    def set_configuration(self, configuration: Configuration) -> ValidationEngineBuilder:
        self._configuration = configuration
        return self

    def set_config_path(self, config_path: Path) -> ValidationEngineBuilder:
        logger.info('Loading config from specified config file: "%s"', config_path)
        self._configuration = load_config(config_path)
        return self

    def set_sink(self, sink: ResultSink) -> ValidationEngineBuilder:
        self._sink = sink
        return self

    def set_registry(self, registry: ValidatorRegistry) -> ValidationEngineBuilder:
        self._registry = registry
        return self

    def build(self) -> ValidationEngine:
        """Create the engine.

        Raises:
            ValueError: If no configuration was set.
        """
        if self._configuration is None:
            raise ValueError("Configuration not set.")
        return ValidationEngine(
            self._configuration,
            self._sink or ConsoleSink(),
            registry=self._registry,
        )
