"""Gateways to process-wide resources (global config file, terminal)."""
