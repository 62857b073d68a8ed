"""Configuration model and loading for inkcheck.

Configuration is read from the first source found, in order:
explicit path > .inkcheckrc > pyproject.toml [tool.inkcheck] > defaults.
The INKCHECK_LANGUAGE environment variable overrides the language of
whichever source was used.

A configuration file looks like::

    language = "ja"
    plugins = ["mypackage.rules"]

    [symbols]
    FULL_STOP = "."

    [[validators]]
    name = "SentenceLength"
    attributes = { max_len = "120" }
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from inkcheck.exceptions import ConfigurationError
from inkcheck.symbols import DEFAULT_LANGUAGE, SymbolTable

if TYPE_CHECKING:
    from inkcheck.parser import Tokenizer

# tomllib is only available in Python 3.11+
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found]

RC_FILE_NAME = ".inkcheckrc"
LANGUAGE_ENV_VAR = "INKCHECK_LANGUAGE"


@dataclass(frozen=True)
class ValidatorConfiguration:
    """Declaration of a single rule.

    Attributes:
        name: Rule name without the ``Validator`` suffix (e.g. "SentenceLength").
        attributes: Rule options, always string to string.
    """

    name: str
    attributes: dict[str, str] = field(default_factory=dict)

    def get_attribute(self, key: str, default: str | None = None) -> str | None:
        return self.attributes.get(key, default)


@dataclass
class Configuration:
    """Resolved configuration for a validation run.

    Attributes:
        language: Language code of the documents (default: "en").
        validator_configs: Rules in the order they were declared.
        symbol_table: Symbol overrides; its language follows ``language``.
        tokenizer: Tokenizer handed to parsers, if any.
        plugins: Dotted module paths that register extra rules on import.
    """

    language: str = DEFAULT_LANGUAGE
    validator_configs: list[ValidatorConfiguration] = field(default_factory=list)
    symbol_table: SymbolTable | None = None
    tokenizer: Tokenizer | None = None
    plugins: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()
        if self.symbol_table is None:
            self.symbol_table = SymbolTable(language=self.language)
        elif self.symbol_table.language != self.language:
            self.symbol_table = SymbolTable(language=self.language, symbols=self.symbol_table.symbols)

    def _validate(self) -> None:
        """Validate configuration values.

        Raises:
            ValueError: If any configuration value is invalid.
        """
        if not self.language or not isinstance(self.language, str):
            raise ValueError("language must be a non-empty string")

        for config in self.validator_configs:
            if not config.name or not isinstance(config.name, str):
                raise ValueError("validator name must be a non-empty string")

    def get_symbol_table(self) -> SymbolTable:
        if self.symbol_table is None:
            raise ValueError("symbol_table was unset after initialization")
        return self.symbol_table


def find_config_file(filename: str = RC_FILE_NAME, start_dir: Path | None = None) -> Path | None:
    """Find a configuration file by traversing up the directory tree.

    Args:
        filename: Name of the config file to find.
        start_dir: Directory to start searching from. Defaults to current directory.

    Returns:
        Path to the config file if found, None otherwise.
    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        config_path = current / filename
        if config_path.is_file():
            return config_path

        parent = current.parent
        if parent == current:
            return None
        current = parent


def _load_toml_file(path: Path) -> dict[str, Any]:
    """Load a TOML file and return its contents.

    Raises:
        ConfigurationError: If the file cannot be read or is not valid TOML.
    """
    try:
        with open(path, "rb") as f:
            result: dict[str, Any] = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid TOML in {path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Cannot read configuration file {path}: {e}") from e
    return result


def _load_from_rc(start_dir: Path | None = None) -> dict[str, Any] | None:
    config_path = find_config_file(RC_FILE_NAME, start_dir)
    if config_path is None:
        return None
    return _load_toml_file(config_path)


def _load_from_pyproject(start_dir: Path | None = None) -> dict[str, Any] | None:
    config_path = find_config_file("pyproject.toml", start_dir)
    if config_path is None:
        return None

    data = _load_toml_file(config_path)
    section = data.get("tool", {}).get("inkcheck")
    if section is None:
        return None
    if not isinstance(section, dict):
        raise ConfigurationError(f"[tool.inkcheck] in {config_path} must be a table")
    return section


def _parse_validators(raw: Any) -> list[ValidatorConfiguration]:
    """Build rule declarations from the ``validators`` array of tables."""
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ConfigurationError("'validators' must be an array of tables")

    configs: list[ValidatorConfiguration] = []
    for entry in raw:
        if isinstance(entry, str):
            configs.append(ValidatorConfiguration(entry))
            continue
        if not isinstance(entry, dict) or "name" not in entry:
            raise ConfigurationError(f"Validator entry needs a 'name': {entry!r}")
        attributes = entry.get("attributes", {})
        if not isinstance(attributes, dict):
            raise ConfigurationError(f"Attributes of '{entry['name']}' must be a table")
        configs.append(
            ValidatorConfiguration(
                name=str(entry["name"]),
                attributes={str(k): _to_option_string(v) for k, v in attributes.items()},
            )
        )
    return configs


def _to_option_string(value: Any) -> str:
    # TOML booleans would otherwise become "True"/"False"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def config_from_dict(data: dict[str, Any]) -> Configuration:
    """Create a Configuration from parsed TOML data.

    Raises:
        ConfigurationError: If the data has the wrong shape.
    """
    language = os.environ.get(LANGUAGE_ENV_VAR) or data.get("language", DEFAULT_LANGUAGE)

    symbols = data.get("symbols", {})
    if not isinstance(symbols, dict):
        raise ConfigurationError("'symbols' must be a table")

    plugins = data.get("plugins", [])
    if not isinstance(plugins, list):
        raise ConfigurationError("'plugins' must be an array of module paths")

    try:
        return Configuration(
            language=str(language),
            validator_configs=_parse_validators(data.get("validators")),
            symbol_table=SymbolTable(
                language=str(language),
                symbols={str(k): str(v) for k, v in symbols.items()},
            ),
            plugins=[str(p) for p in plugins],
        )
    except ValueError as e:
        raise ConfigurationError(str(e)) from e


def load_config(path: Path | None = None, start_dir: Path | None = None) -> Configuration:
    """Load configuration from the first available source.

    Args:
        path: Explicit configuration file; skips discovery when given.
        start_dir: Directory to start searching for config files.

    Returns:
        Fully resolved Configuration instance.

    Raises:
        ConfigurationError: If a file is unreadable or malformed.
    """
    if path is not None:
        if not path.is_file():
            raise ConfigurationError(f"Configuration file does not exist: {path}")
        return config_from_dict(_load_toml_file(path))

    data = _load_from_rc(start_dir)
    if data is None:
        data = _load_from_pyproject(start_dir)
    return config_from_dict(data or {})
