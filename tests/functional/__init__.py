"""Functional tests.

Operator workflows driven through the ``breachwatch`` command: onboarding a
fresh database and discovering commands from ``--help``. Assertions are on
exit codes and printed output only.
"""
