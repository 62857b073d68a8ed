"""Validator registry for mapping rule names to validator classes.

Rules are registered into ordered namespaces. A rule name ``N`` resolves to
the class named ``N + "Validator"`` in the first namespace that has one, so
the outcome never depends on registration timing.
"""

from __future__ import annotations

import importlib
import logging
from collections.abc import Callable, Iterable

from inkcheck.config import ValidatorConfiguration
from inkcheck.exceptions import ConfigurationError, ConstructionError
from inkcheck.symbols import SymbolTable
from inkcheck.validators.base import VALIDATOR_SUFFIX, Validator

logger = logging.getLogger(__name__)

CORE_NAMESPACE = "core"
SENTENCE_NAMESPACE = "sentence"
SECTION_NAMESPACE = "section"

DEFAULT_NAMESPACES = (CORE_NAMESPACE, SENTENCE_NAMESPACE, SECTION_NAMESPACE)

ValidatorClass = type[Validator]


class ValidatorRegistry:
    """Registry that resolves rule declarations into validator instances.

    Example:
        >>> registry = ValidatorRegistry()
        >>> registry.register(SentenceLengthValidator, "sentence")
        >>> validator = registry.resolve(ValidatorConfiguration("SentenceLength"), SymbolTable())
    """

    def __init__(self, namespaces: Iterable[str] = DEFAULT_NAMESPACES) -> None:
        """Initialize a registry with empty, ordered namespaces.

        Args:
            namespaces: Namespace names in search order.

        Raises:
            ValueError: If no namespace is given or a name repeats.
        """
        namespaces = list(namespaces)
        if not namespaces:
            raise ValueError("At least one namespace is required")
        if len(set(namespaces)) != len(namespaces):
            raise ValueError(f"Duplicate namespace in {namespaces}")
        self._tables: dict[str, dict[str, ValidatorClass]] = {ns: {} for ns in namespaces}

    @property
    def namespaces(self) -> tuple[str, ...]:
        return tuple(self._tables)

    def register(
        self, validator_class: ValidatorClass, namespace: str = CORE_NAMESPACE
    ) -> ValidatorClass:
        """Register a validator class under its class name.

        Args:
            validator_class: Rule class, conventionally named ``<Rule>Validator``.
            namespace: Namespace to register into.

        Returns:
            The class, so the method can be used as a decorator.

        Raises:
            ValueError: If the namespace is unknown or the name is taken there.
        """
        if namespace not in self._tables:
            raise ValueError(f"Unknown namespace '{namespace}', expected one of {self.namespaces}")
        table = self._tables[namespace]
        class_name = validator_class.__name__
        if class_name in table:
            raise ValueError(
                f"Validator '{class_name}' already registered in namespace '{namespace}': "
                f"{table[class_name].__module__}.{table[class_name].__qualname__}"
            )
        table[class_name] = validator_class
        return validator_class

    def find(self, rule_name: str) -> ValidatorClass | None:
        """Find the class a rule name resolves to, searching namespaces in order."""
        class_name = rule_name + VALIDATOR_SUFFIX
        for namespace, table in self._tables.items():
            candidate = table.get(class_name)
            if candidate is not None:
                logger.debug("Resolved %s to %s in namespace '%s'", rule_name, class_name, namespace)
                return candidate
        return None

    def resolve(self, config: ValidatorConfiguration, symbol_table: SymbolTable) -> Validator:
        """Create a configured validator instance for a rule declaration.

        Every call builds a fresh instance.

        Args:
            config: Rule declaration (name and options).
            symbol_table: Symbols of the document language.

        Returns:
            An initialized validator.

        Raises:
            ConfigurationError: If no namespace has the rule, or the class
                does not subclass Validator directly.
            ConstructionError: If construction or initialization fails.
        """
        candidate = self.find(config.name)
        if candidate is None:
            raise ConfigurationError(f"There is no such Validator: {config.name}")

        if Validator not in candidate.__bases__:
            raise ConfigurationError(
                f"{candidate.__module__}.{candidate.__qualname__} doesn't extend "
                f"{Validator.__module__}.Validator directly"
            )

        try:
            return candidate.create(config, symbol_table)
        except Exception as e:
            raise ConstructionError(config.name, e) from e

    def resolve_by_name(self, rule_name: str) -> Validator:
        """Resolve a rule with no options and the default English symbols."""
        return self.resolve(ValidatorConfiguration(rule_name), SymbolTable())

    def has_validator(self, rule_name: str) -> bool:
        return self.find(rule_name) is not None

    def names(self) -> list[tuple[str, str]]:
        """List registered rules as (namespace, rule name) in search order."""
        return [
            (namespace, validator_class.default_name())
            for namespace, table in self._tables.items()
            for validator_class in table.values()
        ]


# Global registry instance - populated by register_validator
_global_registry: ValidatorRegistry | None = None


def get_global_registry() -> ValidatorRegistry:
    """Get the process-wide validator registry.

    Returns:
        The global ValidatorRegistry instance.
    """
    global _global_registry
    if _global_registry is None:
        _global_registry = ValidatorRegistry()
    return _global_registry


def register_validator(namespace: str = CORE_NAMESPACE) -> Callable[[ValidatorClass], ValidatorClass]:
    """Class decorator registering a rule in the global registry.

    Example:
        >>> @register_validator("sentence")
        ... class SentenceLengthValidator(Validator):
        ...     target = Target.SENTENCE
    """

    def decorator(validator_class: ValidatorClass) -> ValidatorClass:
        return get_global_registry().register(validator_class, namespace)

    return decorator


def import_plugins(modules: Iterable[str]) -> None:
    """Import plugin modules so their rules register themselves.

    Raises:
        ConfigurationError: If a module cannot be imported.
    """
    for module in modules:
        try:
            importlib.import_module(module)
        except ImportError as e:
            raise ConfigurationError(f"Cannot import plugin module '{module}': {e}") from e
        logger.debug("Imported plugin module %s", module)
