"""Command implementations for chronicle."""
