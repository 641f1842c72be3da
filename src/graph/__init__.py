# src/graph/__init__.py - v1
"""Graph document I/O and layout."""
