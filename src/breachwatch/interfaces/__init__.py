"""Ports (abstract interfaces) for breachwatch adapters."""
