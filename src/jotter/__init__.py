"""
Jotter: local-first note manager.

A small personal notebook that provides:
- Titled, categorised, timestamped notes
- Regex search and category filters
- Flat-file persistence (one note per line)
"""

__version__ = "0.1.0"
