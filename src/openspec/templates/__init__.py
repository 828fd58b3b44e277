"""Workflow template catalog."""
