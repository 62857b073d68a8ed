"""inkcheck - a rule-driven text inspection engine."""

from __future__ import annotations

__version__ = "0.3.0"
