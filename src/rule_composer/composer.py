"""
Rule composition: filter, map and join the reports of existing rule units.

filter_reports and map_reports interpose on the context's reporting channel;
join_reports merges listener sets. None of them touches a wrapped rule's own
listener logic.
"""

import logging
from collections.abc import Sequence
from types import MappingProxyType
from typing import Any

from rule_composer.domain.context import ReportingContext
from rule_composer.domain.entities import ReportMetadata, RuleModule
from rule_composer.domain.listeners import ListenerMerger
from rule_composer.domain.normalizer import ReportNormalizer
from rule_composer.domain.protocols import Iteratee, Listener, Predicate, RuleContext
from rule_composer.domain.rule_units import RuleUnit

logger = logging.getLogger(__name__)

JOINED_FIXABLE = "code"


class RuleComposer:
    """Factory for composed rule units. Stateless; every create() call gets its own closure."""

    @staticmethod
    def metadata_for(context: RuleContext) -> ReportMetadata:
        """Read the metadata bundle once per create() call."""
        return ReportMetadata(
            source_code=context.get_source_code(),
            settings=context.settings,
            options=context.options,
            filename=context.filename,
        )

    @staticmethod
    def filter_reports(rule: Any, predicate: Predicate) -> RuleModule:
        """Forward a report to the host only when predicate(descriptor, metadata) is truthy."""
        create_rule = RuleUnit.create_function(rule)
        normalizer = ReportNormalizer(RuleUnit.messages(rule))

        def create(context: RuleContext) -> Any:
            metadata = RuleComposer.metadata_for(context)

            def report(*args: Any, **kwargs: Any) -> None:
                descriptor = normalizer.normalize(*args, **kwargs)
                if predicate(descriptor, metadata):
                    context.report(*args, **kwargs)
                else:
                    logger.debug("Suppressed report %r in %s", descriptor.message, metadata.filename)

            return create_rule(ReportingContext(context, report))

        return RuleModule(create=create, meta=RuleUnit.meta(rule), schema=RuleUnit.schema(rule))

    @staticmethod
    def map_reports(rule: Any, iteratee: Iteratee) -> RuleModule:
        """Forward iteratee(descriptor, metadata) to the host in place of every report."""
        create_rule = RuleUnit.create_function(rule)
        normalizer = ReportNormalizer(RuleUnit.messages(rule))

        def create(context: RuleContext) -> Any:
            metadata = RuleComposer.metadata_for(context)

            def report(*args: Any, **kwargs: Any) -> None:
                context.report(iteratee(normalizer.normalize(*args, **kwargs), metadata))

            return create_rule(ReportingContext(context, report))

        return RuleModule(create=create, meta=RuleUnit.meta(rule), schema=RuleUnit.schema(rule))

    @staticmethod
    def join_reports(rules: Sequence[Any]) -> RuleModule:
        """Run several rules as one; same-named listeners fire in list order."""
        create_functions = [RuleUnit.create_function(rule) for rule in rules]

        def create(context: RuleContext) -> dict[str, Listener]:
            listeners = ListenerMerger.merge(create_rule(context) for create_rule in create_functions)
            logger.debug("Joined %d rules into %d listeners", len(create_functions), len(listeners))
            return listeners

        return RuleModule(create=create, meta=RuleComposer.joined_meta(rules))

    @staticmethod
    def joined_meta(rules: Sequence[Any]) -> MappingProxyType:
        """Fixable meta carrying every member's messages; a later member wins a shared id."""
        messages: dict[str, str] = {}
        for rule in rules:
            messages.update(RuleUnit.messages(rule))
        if not messages:
            return MappingProxyType({"fixable": JOINED_FIXABLE})
        return MappingProxyType({"fixable": JOINED_FIXABLE, "messages": MappingProxyType(messages)})


filter_reports = RuleComposer.filter_reports
map_reports = RuleComposer.map_reports
join_reports = RuleComposer.join_reports
