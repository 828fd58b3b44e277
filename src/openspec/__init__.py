"""Spec-driven development scaffolding for AI coding assistants."""
