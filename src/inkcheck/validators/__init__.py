"""Rule framework for inkcheck.

Provides the validator base classes and the registry that turns rule
declarations into runnable validator instances.
"""

from __future__ import annotations

from inkcheck.validators.base import (
    PreProcessor,
    Target,
    ValidationError,
    Validator,
)
from inkcheck.validators.registry import (
    ValidatorRegistry,
    get_global_registry,
    import_plugins,
    register_validator,
)

__all__ = [
    # Base types
    "PreProcessor",
    "Target",
    "ValidationError",
    "Validator",
    # Registry
    "ValidatorRegistry",
    "get_global_registry",
    "import_plugins",
    "register_validator",
]
