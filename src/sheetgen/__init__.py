"""Generate source files from schema tables kept in spreadsheets."""

__version__ = "0.1.0"
