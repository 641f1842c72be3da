# src/graph/exporter_factory.py - v1
"""Factory for graph exporter instantiation.

The input document's own format is always exported; extra formats come from
settings.
"""

from __future__ import annotations

import importlib

from clusterability.config.settings import Settings
from clusterability.graph.base_graph_exporter import BaseGraphExporter

_EXPORTERS: dict[str, str] = {
    "json": "clusterability.graph.exporters.json_exporter.JsonExporter",
    "graphml": "clusterability.graph.exporters.graphml_exporter.GraphMLExporter",
    "gexf": "clusterability.graph.exporters.gexf_exporter.GexfExporter",
}


def create_exporters(
    primary_format: str = "json",
    settings: Settings | None = None,
) -> list[BaseGraphExporter]:
    """Create the exporters for one run.

    Args:
        primary_format: Format of the input document (always exported first).
        settings: Optional settings providing extra export formats.

    Returns:
        Exporter instances, primary first, extras sorted, no duplicates.
    """
    formats = [primary_format]
    if settings is not None:
        formats += sorted(set(settings.graph_export_formats_list) - {primary_format})

    exporters: list[BaseGraphExporter] = []
    for fmt in formats:
        fqcn = _EXPORTERS.get(fmt)
        if fqcn is None:
            raise ValueError(f"No exporter for format {fmt!r}")
        module_path, class_name = fqcn.rsplit(".", 1)
        mod = importlib.import_module(module_path)
        cls = getattr(mod, class_name)
        exporters.append(cls())

    return exporters
