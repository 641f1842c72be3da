# src/logging/__init__.py - v1
"""Logging setup: formatters, rotating file handler, run context."""
