"""Errors raised by the composition layer. No I/O or infrastructure imports."""


class RuleComposerError(Exception):
    """Base class for every error raised by rule_composer."""


class MalformedReportError(RuleComposerError, ValueError):
    """
    A report call that cannot be resolved into a descriptor.

    Raised when the wrapped rule reports with no derivable location, an unknown
    message id, or an argument list matching none of the supported call shapes.
    Signals a defect in the wrapped rule, so the composer never catches it.
    """


class InvalidRuleError(RuleComposerError, TypeError):
    """A value that is not a rule unit, or a create function that returned no listener set."""
