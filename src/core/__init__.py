# src/core/__init__.py - v1
"""Core models and numeric reductions."""
