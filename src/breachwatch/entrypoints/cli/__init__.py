"""breachwatch command-line interface."""
