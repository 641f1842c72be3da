# src/__init__.py - v1
"""clusterability: community-detection stability metrics for graphs.

Runs a stochastic community detector many times over the same graph and
annotates every node with how consistently it shares a community with its
neighbours, plus a sampled pairwise ambiguity score.
"""

from clusterability.version import __version__

__all__ = ["__version__"]
