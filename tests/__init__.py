"""breachwatch test suite.

Folder taxonomy
- unit/         : Isolated checks of one module (hashing, config, CLI helpers).
- contract/     : The same behavior asserted against every adapter of a port.
- integration/  : Real databases and Alembic migrations (SQLite, PostgreSQL).
- e2e/          : CLI commands driven through click's CliRunner.
- functional/   : Operator workflows, e.g. onboarding a fresh database.
- fixtures/     : pytest plugins providing engines and test data.
- helpers/      : Shared assertion utilities (no tests here).

Property-based tests use hypothesis and carry @pytest.mark.property.
"""
