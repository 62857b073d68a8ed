"""Symbol tables and sentence boundary resolution.

A symbol table maps symbol keys (e.g. ``FULL_STOP``) to the literal string a
document uses for them. Only keys the user configured are stored; anything
else falls back to the defaults for the table's language.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "en"

TERMINATOR_KEYS = ("FULL_STOP", "QUESTION_MARK", "EXCLAMATION_MARK")
CLOSING_QUOTATION_KEYS = ("RIGHT_SINGLE_QUOTATION_MARK", "RIGHT_DOUBLE_QUOTATION_MARK")

DEFAULT_SYMBOLS: Mapping[str, Mapping[str, str]] = MappingProxyType(
    {
        "en": MappingProxyType(
            {
                "FULL_STOP": ".",
                "QUESTION_MARK": "?",
                "EXCLAMATION_MARK": "!",
                "COMMA": ",",
                "COLON": ":",
                "SEMICOLON": ";",
                "LEFT_SINGLE_QUOTATION_MARK": "'",
                "RIGHT_SINGLE_QUOTATION_MARK": "'",
                "LEFT_DOUBLE_QUOTATION_MARK": '"',
                "RIGHT_DOUBLE_QUOTATION_MARK": '"',
                "LEFT_PARENTHESIS": "(",
                "RIGHT_PARENTHESIS": ")",
            }
        ),
        "ja": MappingProxyType(
            {
                "FULL_STOP": "。",
                "QUESTION_MARK": "？",
                "EXCLAMATION_MARK": "！",
                "COMMA": "、",
                "COLON": "：",
                "SEMICOLON": "；",
                "LEFT_SINGLE_QUOTATION_MARK": "‘",
                "RIGHT_SINGLE_QUOTATION_MARK": "’",
                "LEFT_DOUBLE_QUOTATION_MARK": "“",
                "RIGHT_DOUBLE_QUOTATION_MARK": "”",
                "LEFT_PARENTHESIS": "（",
                "RIGHT_PARENTHESIS": "）",
            }
        ),
    }
)


def default_symbols(language: str) -> Mapping[str, str]:
    """Return the default symbol table for a language.

    Unknown languages get the English defaults.
    """
    return DEFAULT_SYMBOLS.get(language, DEFAULT_SYMBOLS[DEFAULT_LANGUAGE])


@dataclass(frozen=True)
class SymbolTable:
    """Configured symbol overrides for one language.

    Attributes:
        language: Language code whose defaults back unset keys.
        symbols: Symbol key to literal value, as configured.
    """

    language: str = DEFAULT_LANGUAGE
    symbols: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "symbols", MappingProxyType(dict(self.symbols)))

    def contains(self, key: str) -> bool:
        return key in self.symbols

    def get(self, key: str) -> str:
        """Return a configured symbol.

        Raises:
            KeyError: If the key was not configured.
        """
        return self.symbols[key]

    def value_or_default(self, key: str) -> str:
        """Return the configured value, falling back to the language default.

        Raises:
            KeyError: If no default exists for the key either.
        """
        if self.contains(key):
            return self.get(key)
        defaults = default_symbols(self.language)
        if key in defaults:
            return defaults[key]
        return DEFAULT_SYMBOLS[DEFAULT_LANGUAGE][key]


@dataclass(frozen=True)
class SentenceBoundary:
    """Symbols a parser uses to split text into sentences.

    Attributes:
        terminators: Sentence-ending symbols (full stop, question, exclamation).
        closing_quotations: Right quotation marks that may trail a terminator.
    """

    terminators: tuple[str, ...]
    closing_quotations: tuple[str, ...]

    @classmethod
    def from_symbol_table(cls, symbol_table: SymbolTable) -> SentenceBoundary:
        terminators = _resolve(symbol_table, TERMINATOR_KEYS)
        for terminator in terminators:
            logger.info('"%s" is added as an end of sentence character', terminator)
        closing_quotations = _resolve(symbol_table, CLOSING_QUOTATION_KEYS)
        for quotation in closing_quotations:
            logger.info('"%s" is added as an end of right quotation character', quotation)
        return cls(terminators=terminators, closing_quotations=closing_quotations)


def _resolve(symbol_table: SymbolTable, keys: tuple[str, ...]) -> tuple[str, ...]:
    # dict.fromkeys drops duplicates (e.g. ' and " defaults) but keeps order
    return tuple(dict.fromkeys(symbol_table.value_or_default(key) for key in keys))
