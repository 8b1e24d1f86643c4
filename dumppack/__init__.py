"""Implementation package for dumpkit."""
