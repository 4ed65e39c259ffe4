"""Resolve "package.module:attribute" references to rule units."""

import importlib
import logging
from typing import Any

from rule_composer.domain.config import RuleEntryConfig
from rule_composer.domain.errors import InvalidRuleError
from rule_composer.domain.rule_units import RuleUnit

logger = logging.getLogger(__name__)


class RuleLoader:
    @staticmethod
    def load(reference: str) -> Any:
        """Import the module part and walk the dotted attribute part. Raises InvalidRuleError."""
        module_name, _, attribute = reference.partition(":")
        if not module_name or not attribute:
            raise InvalidRuleError(f"rule reference '{reference}' must look like 'package.module:attribute'")
        try:
            target: Any = importlib.import_module(module_name)
        except ImportError as exc:
            raise InvalidRuleError(f"cannot import '{module_name}' for rule '{reference}': {exc}") from exc
        for part in attribute.split("."):
            try:
                target = getattr(target, part)
            except AttributeError as exc:
                raise InvalidRuleError(f"'{reference}' does not resolve: no attribute '{part}'") from exc
        RuleUnit.create_function(target)
        return target

    @staticmethod
    def load_entries(entries: tuple[RuleEntryConfig, ...]) -> list[tuple[RuleEntryConfig, Any]]:
        """Load every configured rule; entries that fail are logged and skipped."""
        loaded = []
        for entry in entries:
            try:
                loaded.append((entry, RuleLoader.load(entry.reference)))
            except InvalidRuleError as exc:
                logger.warning("Skipping rule '%s': %s", entry.name, exc)
        return loaded
