"""Command-line interface for dumpkit."""
