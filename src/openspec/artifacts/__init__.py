"""Managed artifact probing, legacy cleanup, migration and reconciliation."""
