"""Pylint plugin entry point: load-plugins=rule_composer.checker."""

from pylint.lint import PyLinter

from rule_composer.domain.config import ComposerConfig
from rule_composer.infrastructure.checker import CheckedRule, ComposedRuleChecker
from rule_composer.infrastructure.config_file_loader import ConfigFileLoader
from rule_composer.infrastructure.rule_loader import RuleLoader


def register(linter: PyLinter) -> None:
    """Register one checker running every rule configured under [tool.rule-composer]."""
    config = ComposerConfig.from_dict(ConfigFileLoader.load_config_from_fs())
    rules = [
        CheckedRule(name=entry.name, rule=rule, options=entry.options)
        for entry, rule in RuleLoader.load_entries(config.rules)
    ]
    linter.register_checker(ComposedRuleChecker(linter, rules=rules, settings=config.settings))
