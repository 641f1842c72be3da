# src/graph/exporters/__init__.py - v1
"""Concrete graph exporters."""
