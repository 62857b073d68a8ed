"""Tests for inkcheck.validators.registry module."""

from __future__ import annotations

import sys

import pytest
from sample_rules import (
    BrokenInitValidator,
    DocumentNameValidator,
    EverySentenceValidator,
    NeedsArgumentValidator,
    SectionCountValidator,
    SentenceLengthValidator,
    StrictEverySentenceValidator,
)

from inkcheck.config import ValidatorConfiguration
from inkcheck.exceptions import ConfigurationError, ConstructionError
from inkcheck.symbols import SymbolTable
from inkcheck.validators import (
    Target,
    ValidationError,
    Validator,
    ValidatorRegistry,
    get_global_registry,
    import_plugins,
    register_validator,
)


class TestRegistration:
    """Tests for registering rules."""

    def test_default_namespaces(self) -> None:
        """Test the default namespace search order."""
        assert ValidatorRegistry().namespaces == ("core", "sentence", "section")

    def test_register_and_find(self) -> None:
        """Test a registered class is found by rule name."""
        registry = ValidatorRegistry()
        registry.register(EverySentenceValidator, "sentence")
        assert registry.find("EverySentence") is EverySentenceValidator
        assert registry.has_validator("EverySentence")
        assert not registry.has_validator("Missing")

    def test_register_returns_class(self) -> None:
        """Test register can be used as a decorator."""
        registry = ValidatorRegistry()
        assert registry.register(EverySentenceValidator) is EverySentenceValidator

    def test_duplicate_in_namespace_fails(self) -> None:
        """Test registering the same name twice in a namespace fails."""
        registry = ValidatorRegistry()
        registry.register(EverySentenceValidator, "sentence")
        with pytest.raises(ValueError, match="already registered"):
            registry.register(EverySentenceValidator, "sentence")

    def test_same_name_in_different_namespaces(self) -> None:
        """Test one name may exist in several namespaces."""
        registry = ValidatorRegistry()
        registry.register(EverySentenceValidator, "sentence")
        registry.register(EverySentenceValidator, "section")
        assert registry.names() == [("sentence", "EverySentence"), ("section", "EverySentence")]

    def test_unknown_namespace_fails(self) -> None:
        """Test registering into an unknown namespace fails."""
        with pytest.raises(ValueError, match="Unknown namespace 'paragraph'"):
            ValidatorRegistry().register(EverySentenceValidator, "paragraph")

    def test_empty_namespaces_rejected(self) -> None:
        """Test a registry needs at least one namespace."""
        with pytest.raises(ValueError, match="At least one namespace"):
            ValidatorRegistry([])

    def test_duplicate_namespaces_rejected(self) -> None:
        """Test namespace names must be unique."""
        with pytest.raises(ValueError, match="Duplicate namespace"):
            ValidatorRegistry(["core", "core"])

    def test_names_in_search_order(self) -> None:
        """Test names() follows namespace order, then registration order."""
        registry = ValidatorRegistry()
        registry.register(SectionCountValidator, "section")
        registry.register(SentenceLengthValidator, "sentence")
        registry.register(EverySentenceValidator, "sentence")
        registry.register(DocumentNameValidator, "core")
        assert registry.names() == [
            ("core", "DocumentName"),
            ("sentence", "SentenceLength"),
            ("sentence", "EverySentence"),
            ("section", "SectionCount"),
        ]


def _make_candidate(message: str) -> type[Validator]:
    """Create a distinct class named ShadowValidator reporting ``message``."""

    def validate(self: Validator, entity: object) -> list[ValidationError]:
        return [self.create_error(message)]

    return type("ShadowValidator", (Validator,), {"target": Target.SENTENCE, "validate": validate})


class TestResolve:
    """Tests for resolving rule declarations."""

    def test_first_namespace_wins(self) -> None:
        """Test the earliest namespace with a match is chosen."""
        registry = ValidatorRegistry()
        section_candidate = _make_candidate("section")
        sentence_candidate = _make_candidate("sentence")
        registry.register(section_candidate, "section")
        registry.register(sentence_candidate, "sentence")

        for _ in range(3):
            validator = registry.resolve(ValidatorConfiguration("Shadow"), SymbolTable())
            assert type(validator) is sentence_candidate

    def test_core_namespace_shadows_others(self) -> None:
        """Test core is searched before the sentence namespace."""
        registry = ValidatorRegistry()
        sentence_candidate = _make_candidate("sentence")
        core_candidate = _make_candidate("core")
        registry.register(sentence_candidate, "sentence")
        registry.register(core_candidate, "core")

        validator = registry.resolve(ValidatorConfiguration("Shadow"), SymbolTable())

        assert validator.validate(object())[0].message == "core"

    def test_unknown_rule(self) -> None:
        """Test an undeclared name raises ConfigurationError."""
        registry = ValidatorRegistry()
        registry.register(EverySentenceValidator, "sentence")
        with pytest.raises(ConfigurationError, match="There is no such Validator: NoSuchRule"):
            registry.resolve(ValidatorConfiguration("NoSuchRule"), SymbolTable())

    def test_name_needs_exact_match(self) -> None:
        """Test the full class name is not accepted as a rule name."""
        registry = ValidatorRegistry()
        registry.register(EverySentenceValidator, "sentence")
        with pytest.raises(ConfigurationError):
            registry.resolve(ValidatorConfiguration("EverySentenceValidator"), SymbolTable())

    def test_fresh_instance_per_call(self) -> None:
        """Test instances are never shared between calls."""
        registry = ValidatorRegistry()
        registry.register(EverySentenceValidator, "sentence")
        config = ValidatorConfiguration("EverySentence")
        first = registry.resolve(config, SymbolTable())
        second = registry.resolve(config, SymbolTable())
        assert first is not second

    def test_options_and_symbols_injected(self) -> None:
        """Test the instance receives its options and symbol table."""
        registry = ValidatorRegistry()
        registry.register(SentenceLengthValidator, "sentence")
        symbols = SymbolTable(language="ja")

        validator = registry.resolve(ValidatorConfiguration("SentenceLength", {"max_len": "42"}), symbols)

        assert validator.max_len == 42  # type: ignore[attr-defined]
        assert validator.symbol_table is symbols
        assert validator.name == "SentenceLength"

    def test_indirect_subclass_rejected(self) -> None:
        """Test rules must subclass Validator directly."""
        registry = ValidatorRegistry()
        registry.register(StrictEverySentenceValidator, "sentence")
        with pytest.raises(ConfigurationError, match="doesn't extend"):
            registry.resolve(ValidatorConfiguration("StrictEverySentence"), SymbolTable())

    def test_init_failure_is_construction_error(self) -> None:
        """Test a failing init hook raises ConstructionError."""
        registry = ValidatorRegistry()
        registry.register(BrokenInitValidator, "sentence")
        with pytest.raises(ConstructionError, match="dictionary missing") as exc_info:
            registry.resolve(ValidatorConfiguration("BrokenInit"), SymbolTable())
        assert exc_info.value.rule_name == "BrokenInit"
        assert isinstance(exc_info.value.cause, RuntimeError)

    def test_constructor_arguments_are_construction_error(self) -> None:
        """Test a rule that cannot be built without arguments is rejected."""
        registry = ValidatorRegistry()
        registry.register(NeedsArgumentValidator, "sentence")
        with pytest.raises(ConstructionError):
            registry.resolve(ValidatorConfiguration("NeedsArgument"), SymbolTable())

    def test_bad_option_is_construction_error(self) -> None:
        """Test an unparsable option surfaces as ConstructionError."""
        registry = ValidatorRegistry()
        registry.register(SentenceLengthValidator, "sentence")
        with pytest.raises(ConstructionError, match="must be an integer"):
            registry.resolve(ValidatorConfiguration("SentenceLength", {"max_len": "many"}), SymbolTable())

    def test_resolve_by_name(self) -> None:
        """Test resolving with default options and English symbols."""
        registry = ValidatorRegistry()
        registry.register(SentenceLengthValidator, "sentence")

        validator = registry.resolve_by_name("SentenceLength")

        assert validator.max_len == 10  # type: ignore[attr-defined]
        assert validator.symbol_table.language == "en"


class TestGlobalRegistry:
    """Tests for the process-wide registry and plugins."""

    def test_singleton(self) -> None:
        """Test the global registry is created once."""
        assert get_global_registry() is get_global_registry()

    def test_register_validator_decorator(self) -> None:
        """Test the decorator registers into the global registry."""

        @register_validator("section")
        class HeadingValidator(Validator):
            target = Target.SECTION

            def validate(self, entity: object) -> list[ValidationError]:
                return []

        assert get_global_registry().find("Heading") is HeadingValidator

    def test_import_plugins(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test importing a plugin module registers its rules."""
        monkeypatch.delitem(sys.modules, "plugin_rules", raising=False)

        import_plugins(["plugin_rules"])

        assert get_global_registry().names() == [("sentence", "Exclamation")]

    def test_import_missing_plugin(self) -> None:
        """Test an unimportable plugin is a configuration error."""
        with pytest.raises(ConfigurationError, match="Cannot import plugin module 'no_such_module'"):
            import_plugins(["no_such_module"])
