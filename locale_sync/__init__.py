"""locale-sync: fill missing keys across locale files from a base locale."""

__version__ = "0.1.0"
