# src/stability/__init__.py - v1
"""Stability ensemble: repeated detection, proximity ratios, pairwise ambiguity."""
