"""Unit tests for RuleComposer.filter_reports / map_reports / join_reports."""

import dataclasses
import unittest
from types import SimpleNamespace
from unittest.mock import MagicMock

from rule_composer import (
    MalformedReportError,
    ReportDescriptor,
    ReportMetadata,
    RuleModule,
    filter_reports,
    join_reports,
    map_reports,
)
from rule_composer.domain.context import ReportingContext
from rule_composer.domain.entities import Position, SourceLocation


def make_context() -> MagicMock:
    context = MagicMock()
    context.settings = {"method": "upper"}
    context.options = [{"token_whitelist": ["foo"]}]
    context.filename = "module.py"
    return context


def node_named(name: str) -> SimpleNamespace:
    return SimpleNamespace(name=name, loc=SourceLocation(Position(1, 0), Position(1, len(name))))


def reporting_rule(*calls):
    """Rule whose visit_module replays the given report calls: (args, kwargs) pairs."""

    def create(context):
        def visit_module(node):
            for args, kwargs in calls:
                context.report(*args, **kwargs)

        return {"visit_module": visit_module}

    return create


class TestFilterReports(unittest.TestCase):
    def test_always_false_suppresses_everything(self) -> None:
        node = node_named("bar")
        rule = filter_reports(reporting_rule(((node, "a"), {}), (({"node": node, "message": "b"},), {})),
                              lambda descriptor, metadata: False)
        context = make_context()

        rule.create(context)["visit_module"]("tree")

        context.report.assert_not_called()

    def test_always_true_forwards_original_arguments(self) -> None:
        node = node_named("bar")
        loc = Position(4, 2)
        rule = filter_reports(
            reporting_rule(((node, "msg {{x}}", {"x": 1}), {}), ((node, loc, "located"), {"fix": "f"})),
            lambda descriptor, metadata: True,
        )
        context = make_context()

        rule.create(context)["visit_module"]("tree")

        self.assertEqual(
            [c.args for c in context.report.call_args_list],
            [(node, "msg {{x}}", {"x": 1}), (node, loc, "located")],
        )
        self.assertEqual(context.report.call_args_list[1].kwargs, {"fix": "f"})

    def test_predicate_sees_normalized_descriptor_and_metadata(self) -> None:
        node = node_named("foo")
        seen = []
        rule = filter_reports(
            reporting_rule(((node, "'{{name}}' undefined", {"name": "foo"}), {})),
            lambda descriptor, metadata: seen.append((descriptor, metadata)) or True,
        )
        context = make_context()

        rule.create(context)["visit_module"]("tree")

        descriptor, metadata = seen[0]
        self.assertEqual(descriptor.message, "'foo' undefined")
        self.assertIs(descriptor.loc, node.loc)
        self.assertEqual(
            metadata,
            ReportMetadata(
                source_code=context.get_source_code.return_value,
                settings=context.settings,
                options=context.options,
                filename="module.py",
            ),
        )

    def test_source_code_read_once_per_create(self) -> None:
        node = node_named("bar")
        sources = []
        rule = filter_reports(
            reporting_rule(*[((node, "m"), {})] * 3),
            lambda descriptor, metadata: sources.append(metadata.source_code) or False,
        )
        context = make_context()

        rule.create(context)["visit_module"]("tree")

        context.get_source_code.assert_called_once_with()
        self.assertTrue(all(source is sources[0] for source in sources))

    def test_meta_and_schema_copied_unchanged(self) -> None:
        meta, schema = {"fixable": "code"}, [{"type": "object"}]
        inner = RuleModule(create=lambda context: {}, meta=meta, schema=schema)
        wrapped = filter_reports(inner, lambda d, m: True)
        self.assertIs(wrapped.meta, meta)
        self.assertIs(wrapped.schema, schema)

    def test_rule_receives_derived_context(self) -> None:
        received = []
        rule = filter_reports(lambda context: received.append(context) or {}, lambda d, m: True)
        context = make_context()

        rule.create(context)

        self.assertIsInstance(received[0], ReportingContext)
        self.assertIs(received[0].wrapped, context)
        self.assertEqual(received[0].filename, "module.py")

    def test_predicate_error_propagates(self) -> None:
        rule = filter_reports(reporting_rule(((node_named("x"), "m"), {})),
                              MagicMock(side_effect=LookupError("predicate")))
        with self.assertRaises(LookupError):
            rule.create(make_context())["visit_module"]("tree")

    def test_malformed_report_propagates_and_channel_survives(self) -> None:
        calls = []

        def create(context):
            return {
                "visit_module": lambda tree: context.report({"message": "no node"}),
                "leave_module": lambda tree: context.report(node_named("ok"), "fine"),
            }

        context = make_context()
        listeners = filter_reports(create, lambda d, m: calls.append(d) or True).create(context)

        with self.assertRaises(MalformedReportError):
            listeners["visit_module"]("tree")
        listeners["leave_module"]("tree")

        self.assertEqual([d.message for d in calls], ["fine"])
        context.report.assert_called_once()

    def test_independent_contexts_do_not_interfere(self) -> None:
        rule = filter_reports(reporting_rule(((node_named("a"), "m"), {})), lambda d, m: True)
        first, second = make_context(), make_context()

        first_listeners = rule.create(first)
        second_listeners = rule.create(second)
        first_listeners["visit_module"]("tree")

        first.report.assert_called_once()
        second.report.assert_not_called()
        self.assertIsNot(first_listeners["visit_module"], second_listeners["visit_module"])


class TestMapReports(unittest.TestCase):
    def test_iteratee_result_replaces_report(self) -> None:
        node = node_named("a")
        replacement = ReportDescriptor(node=node, message="other", loc=node.loc)
        rule = map_reports(reporting_rule((({"node": node, "message": "foo"},), {})),
                           lambda descriptor, metadata: replacement)
        context = make_context()

        rule.create(context)["visit_module"]("tree")

        context.report.assert_called_once_with(replacement)

    def test_iteratee_uses_metadata(self) -> None:
        node = node_named("a")
        rule = map_reports(
            reporting_rule((({"node": node, "message": "foo"},), {})),
            lambda d, m: dataclasses.replace(d, message=getattr(d.message, m.settings["method"])()),
        )
        context = make_context()

        rule.create(context)["visit_module"]("tree")

        (forwarded,), _ = context.report.call_args
        self.assertEqual(forwarded.message, "FOO")
        self.assertIs(forwarded.node, node)

    def test_mapped_message_id_report_survives_outer_filter(self) -> None:
        node = node_named("a")
        inner = {
            "meta": {"messages": {"baz": "Baz error {{myData}}."}},
            "create": reporting_rule((({"node": node, "message_id": "baz", "data": {"myData": "BAZ"}},), {})),
        }
        seen = []
        rule = filter_reports(map_reports(inner, lambda d, m: d), lambda d, m: seen.append(d) or True)
        context = make_context()

        rule.create(context)["visit_module"]("tree")

        self.assertEqual([(d.message, d.message_id, d.data) for d in seen],
                         [("Baz error BAZ.", "baz", {"myData": "BAZ"})])
        context.report.assert_called_once_with(seen[0])

    def test_every_report_forwarded(self) -> None:
        node = node_named("a")
        rule = map_reports(reporting_rule(*[((node, "m"), {})] * 3), lambda d, m: d)
        context = make_context()

        rule.create(context)["visit_module"]("tree")

        self.assertEqual(context.report.call_count, 3)


class TestJoinReports(unittest.TestCase):
    def test_handlers_run_in_list_order(self) -> None:
        order = []
        rules = [
            lambda context, i=i: {"visit_module": lambda node: order.append(i)} for i in range(3)
        ]
        joined = join_reports(rules)

        joined.create(make_context())["visit_module"]("tree")

        self.assertEqual(order, [0, 1, 2])

    def test_each_create_called_once_with_shared_context(self) -> None:
        received = []

        def first(context):
            received.append(("first", context))
            return {}

        def second(context):
            received.append(("second", context))
            return {}

        context = make_context()

        join_reports([first, RuleModule(create=second)]).create(context)

        self.assertEqual(received, [("first", context), ("second", context)])

    def test_joined_meta_is_fixable(self) -> None:
        joined = join_reports([])
        self.assertEqual(dict(joined.meta), {"fixable": "code"})
        self.assertIsNone(joined.schema)

    def test_joined_meta_merges_member_messages(self) -> None:
        first = {"meta": {"messages": {"foo": "Foo.", "shared": "First."}}, "create": lambda context: {}}
        second = RuleModule(create=lambda context: {}, meta={"messages": {"shared": "Second."}})
        joined = join_reports([first, lambda context: {}, second])

        self.assertEqual(joined.meta["fixable"], "code")
        self.assertEqual(dict(joined.meta["messages"]), {"foo": "Foo.", "shared": "Second."})
        with self.assertRaises(TypeError):
            joined.meta["messages"]["foo"] = "changed"

    def test_joined_message_id_report_resolves_with_joined_meta(self) -> None:
        node = node_named("a")
        inner = {
            "meta": {"messages": {"baz": "Baz error {{myData}}."}},
            "create": reporting_rule((({"node": node, "message_id": "baz", "data": {"myData": "BAZ"}},), {})),
        }
        seen = []
        rule = filter_reports(join_reports([inner]), lambda d, m: seen.append(d) or True)

        rule.create(make_context())["visit_module"]("tree")

        self.assertEqual([d.message for d in seen], ["Baz error BAZ."])

    def test_reports_flow_to_shared_context_unmodified(self) -> None:
        node = node_named("a")
        context = make_context()
        join_reports([reporting_rule(((node, "x {{y}}"), {}))]).create(context)["visit_module"]("tree")
        context.report.assert_called_once_with(node, "x {{y}}")
