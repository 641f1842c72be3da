# src/detection/__init__.py - v1
"""Community detection backends behind a single detect() interface."""
