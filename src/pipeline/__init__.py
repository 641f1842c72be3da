# src/pipeline/__init__.py - v1
"""End-to-end stability run: load, layout, ensemble, ambiguity, annotate, export."""
