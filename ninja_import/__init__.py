"""
ninja-import: encoding-robust CSV import reader.

A library and CLI tool that reads user-uploaded CSV files of unknown or
mislabeled character encoding, normalizes them to UTF-8 and detects the
field delimiter before the rows are mapped onto importable entities.

Usage:
    from ninja_import.core.reader import read_file_with_proper_encoding
    text = read_file_with_proper_encoding("clients.csv")
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
