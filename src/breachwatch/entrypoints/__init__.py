"""Entry points (CLI) for breachwatch."""
