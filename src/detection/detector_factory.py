# src/detection/detector_factory.py - v1
"""Factory for community detector instantiation.

Backends are resolved lazily by dotted path so optional dependencies
(leidenalg, igraph) are only imported when selected.
"""

from __future__ import annotations

import importlib

from clusterability.config.settings import ConfigurationError, Settings
from clusterability.detection.base_detector import BaseCommunityDetector

_DETECTORS: dict[str, str] = {
    "louvain": "clusterability.detection.louvain_detector.LouvainDetector",
    "leiden": "clusterability.detection.leiden_detector.LeidenDetector",
}


def available_detectors() -> list[str]:
    return sorted(_DETECTORS)


def create_detector(settings: Settings | None = None) -> BaseCommunityDetector:
    """Create the configured community detector.

    Returns:
        Detector instance, Louvain with default parameters when no settings given.

    Raises:
        ConfigurationError: If the configured detector is unknown.
    """
    name = settings.detector if settings is not None else "louvain"
    fqcn = _DETECTORS.get(name)
    if fqcn is None:
        raise ConfigurationError(
            f"Unknown detector {name!r}; choose one of {', '.join(available_detectors())}"
        )

    module_path, class_name = fqcn.rsplit(".", 1)
    mod = importlib.import_module(module_path)
    cls = getattr(mod, class_name)

    if settings is None:
        return cls()

    kwargs: dict[str, object] = {
        "resolution": settings.resolution,
        "weight": settings.weight_attribute,
    }
    if name == "louvain":
        kwargs["threshold"] = settings.louvain_threshold
    return cls(**kwargs)
