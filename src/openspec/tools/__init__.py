"""Supported AI assistant tools."""
