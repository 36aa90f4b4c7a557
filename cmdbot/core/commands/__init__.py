"""Command parsing, registry and handlers."""
