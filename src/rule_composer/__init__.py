"""Compose static-analysis rule units by filtering, mapping or joining their reports."""

from rule_composer.composer import RuleComposer, filter_reports, join_reports, map_reports
from rule_composer.domain.entities import (
    Position,
    ReportDescriptor,
    ReportMetadata,
    RuleModule,
    SourceLocation,
)
from rule_composer.domain.errors import InvalidRuleError, MalformedReportError, RuleComposerError
from rule_composer.domain.normalizer import ReportNormalizer, interpolate_message

__all__ = [
    "InvalidRuleError",
    "MalformedReportError",
    "Position",
    "ReportDescriptor",
    "ReportMetadata",
    "ReportNormalizer",
    "RuleComposer",
    "RuleComposerError",
    "RuleModule",
    "SourceLocation",
    "filter_reports",
    "interpolate_message",
    "join_reports",
    "map_reports",
]

__version__ = "1.0.0"
