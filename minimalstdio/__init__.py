"""printf-family formatting and sscanf-style parsing with C semantics."""

__version__ = "0.1.0"