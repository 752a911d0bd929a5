"""
ninja-import core library.

This package contains the core functionality:
- reader: encoding normalization, delimiter detection and CSV pre-import
- config: runtime settings
- log: package logging helpers
"""

__all__: list[str] = []
