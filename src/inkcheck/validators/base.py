"""Base validator classes and models for the inkcheck rule framework.

Provides the abstractions every rule plugin implements: the entity type a
rule targets, the finding it returns, and the optional preprocessing hook
for sentence rules.
"""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar

from inkcheck.config import ValidatorConfiguration
from inkcheck.symbols import SymbolTable

if TYPE_CHECKING:
    from inkcheck.model import Document, Sentence

VALIDATOR_SUFFIX = "Validator"


class Target(enum.Enum):
    """Granularity a validator operates on."""

    DOCUMENT = "document"
    SECTION = "section"
    SENTENCE = "sentence"


@dataclass
class ValidationError:
    """A single finding produced by a validator.

    Findings are returned, never raised.

    Attributes:
        message: Human-readable description of the issue.
        validator_name: Name of the rule that produced the finding.
        line_number: Line of the offending text, if known.
        start_position: Column where the issue starts, if known.
        end_position: Column where the issue ends, if known.
        sentence: Sentence the finding refers to, for sentence rules.
        document: Document the finding belongs to; the engine fills it in
            when the validator leaves it unset.
    """

    message: str
    validator_name: str = ""
    line_number: int | None = None
    start_position: int | None = None
    end_position: int | None = None
    sentence: Sentence | None = None
    document: Document | None = None


class Validator(ABC):
    """Abstract base class for all rules.

    Subclasses declare ``target`` and implement ``validate``. A rule must
    subclass ``Validator`` directly; the registry rejects deeper chains.
    Instances are created through ``create`` so that no rule runs before it
    has received its options and symbol table.

    Attributes:
        target: Entity type the rule validates.
        config: Options the rule was configured with.
        symbol_table: Symbols of the document language.
    """

    target: ClassVar[Target | None] = None

    def __init__(self) -> None:
        self.config = ValidatorConfiguration(self.default_name())
        self.symbol_table = SymbolTable()

    @classmethod
    def default_name(cls) -> str:
        name = cls.__name__
        if name.endswith(VALIDATOR_SUFFIX):
            return name[: -len(VALIDATOR_SUFFIX)]
        return name

    @classmethod
    def create(cls, config: ValidatorConfiguration, symbol_table: SymbolTable) -> Validator:
        """Construct a rule and initialize it with its options.

        Args:
            config: Rule declaration with options.
            symbol_table: Symbols of the document language.

        Returns:
            A ready-to-use rule instance.
        """
        validator = cls()
        validator.pre_init(config, symbol_table)
        return validator

    def pre_init(self, config: ValidatorConfiguration, symbol_table: SymbolTable) -> None:
        self.config = config
        self.symbol_table = symbol_table
        self.init()

    def init(self) -> None:
        """Hook for rules that prepare state from their options."""

    @property
    def name(self) -> str:
        return self.config.name

    def get_attribute(self, key: str, default: str | None = None) -> str | None:
        return self.config.get_attribute(key, default)

    def get_int(self, key: str, default: int) -> int:
        """Read an integer option.

        Raises:
            ValueError: If the option is set but not an integer.
        """
        value = self.config.get_attribute(key)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError as e:
            raise ValueError(f"Option '{key}' of {self.name} must be an integer: {value!r}") from e

    def get_bool(self, key: str, default: bool) -> bool:
        value = self.config.get_attribute(key)
        if value is None:
            return default
        return value.strip().lower() in ("true", "yes", "1", "on")

    def get_symbol(self, key: str) -> str:
        return self.symbol_table.value_or_default(key)

    def create_error(self, message: str, sentence: Sentence | None = None, **kwargs: Any) -> ValidationError:
        """Build a finding tagged with this rule's name.

        For sentence findings, the line number defaults to the sentence's.
        """
        if sentence is not None:
            kwargs.setdefault("line_number", sentence.line_number)
            kwargs.setdefault("start_position", sentence.start_position_offset)
        return ValidationError(
            message=message,
            validator_name=self.name,
            sentence=sentence,
            **kwargs,
        )

    @abstractmethod
    def validate(self, entity: Any) -> list[ValidationError]:
        """Check one entity of the target type.

        Returns:
            Findings in the order they were detected (possibly empty).
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class PreProcessor(ABC):
    """Capability of sentence rules that prepare sentences before validation.

    The engine calls ``preprocess`` once per sentence, before any sentence
    rule validates that sentence.
    """

    @abstractmethod
    def preprocess(self, sentence: Sentence) -> None:
        """Annotate a sentence in place (e.g. cache its tokens)."""
