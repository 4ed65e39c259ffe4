"""Pytest configuration.

Run pytest from the project root; pythonpath in pyproject.toml puts src/ and
the root on sys.path so `rule_composer` and `tests.linter_test_utils` import
without installing the package.
"""
