# src/pipeline/orchestrator.py - v1
"""Pipeline orchestrator for a stability run.

Phases, in order:
  layout     ForceAtlas2 prespatialization (optional, cosmetic)
  ensemble   N detection passes + proximity ratios
  ambiguity  adjacent + sampled pair agreement
  annotate   merge node attributes
  export     write the annotated document (file runs only)

Each phase is timed and logged with the phase name in the log context.
"""

from __future__ import annotations

import logging
import random
import time
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import networkx as nx

from clusterability.config.settings import Settings
from clusterability.core.models import PhaseTiming, StabilityReport
from clusterability.detection.base_detector import BaseCommunityDetector
from clusterability.detection.detector_factory import create_detector
from clusterability.graph.exporter_factory import create_exporters
from clusterability.graph.layout import prespatialize
from clusterability.graph.loader import detect_format, load_graph
from clusterability.logging.context import set_phase_context, set_run_context
from clusterability.stability.ambiguity import estimate_ambiguity
from clusterability.stability.annotator import annotate_graph
from clusterability.stability.ensemble import run_ensemble, spawn_seeds

logger = logging.getLogger(__name__)


def derive_output_path(input_path: str | Path, suffix: str, extension: str | None = None) -> Path:
    """Sibling path with ``suffix`` inserted before the extension.

    ``graph.json`` + ``_with_louvains`` -> ``graph_with_louvains.json``.
    """
    path = Path(input_path)
    ext = extension if extension is not None else path.suffix
    return path.with_name(f"{path.stem}{suffix}{ext}")


class StabilityPipeline:
    """Runs the stability analysis on a graph or a graph document.

    Args:
        settings: Run settings.
        detector: Detection backend; built from settings when omitted.
    """

    def __init__(
        self,
        settings: Settings,
        detector: BaseCommunityDetector | None = None,
    ) -> None:
        self._settings = settings
        self._detector = detector if detector is not None else create_detector(settings)
        self._timings: list[PhaseTiming] = []

    @contextmanager
    def _phase(self, name: str) -> Iterator[None]:
        set_phase_context(name)
        logger.debug("Starting phase %s", name)
        t0 = time.monotonic()
        yield
        elapsed = time.monotonic() - t0
        self._timings.append(PhaseTiming(phase=name, seconds=elapsed))
        logger.info("Phase %s done in %.3fs", name, elapsed)

    def analyze_graph(self, graph: nx.Graph, run_id: str | None = None) -> StabilityReport:
        """Annotate ``graph`` in place and return the run report."""
        s = self._settings
        run_id = run_id or uuid.uuid4().hex[:12]
        set_run_context(run_id)
        self._timings = []

        node_count = graph.number_of_nodes()
        edge_count = graph.number_of_edges()
        density = nx.density(graph) if node_count > 1 else 0.0
        logger.info("Number of nodes: %d", node_count)
        logger.info("Number of edges: %d", edge_count)
        logger.info("Graph density: %.6f", density)

        ensemble_seed, sampling_seed, layout_seed = (
            spawn_seeds(s.seed, 3) if s.seed is not None else (None, None, None)
        )

        if s.layout_iterations > 0:
            with self._phase("layout"):
                prespatialize(graph, s.layout_iterations, seed=layout_seed)

        with self._phase("ensemble"):
            ensemble = run_ensemble(
                graph,
                self._detector,
                s.passes,
                seed=ensemble_seed,
                workers=s.workers,
            )

        with self._phase("ambiguity"):
            ambiguity = estimate_ambiguity(
                ensemble.index,
                ensemble.labels,
                s.sampling_policy,
                random.Random(sampling_seed),
            )

        with self._phase("annotate"):
            annotate_graph(
                graph,
                ensemble,
                ambiguity,
                pass_label_prefix=s.pass_label_prefix if s.keep_pass_labels else None,
            )

        return StabilityReport(
            run_id=run_id,
            node_count=node_count,
            edge_count=edge_count,
            density=density,
            passes=ensemble.passes,
            detector=self._detector.algorithm_name,
            edge_pairs=ambiguity.edge_pairs,
            sampled_pairs=ambiguity.sampled_pairs,
            sample_target=ambiguity.target,
            layout_iterations=s.layout_iterations,
            timings=list(self._timings),
        )

    def analyze_file(self, input_path: str | Path) -> StabilityReport:
        """Load, analyze and write the annotated document next to the input.

        Raises:
            GraphLoadError: If the input cannot be loaded (nothing is written).
        """
        input_path = Path(input_path)
        run_id = uuid.uuid4().hex[:12]
        set_run_context(run_id, str(input_path))

        graph = load_graph(input_path)
        report = self.analyze_graph(graph, run_id=run_id)
        set_run_context(run_id, str(input_path))

        primary = detect_format(input_path) or "json"
        outputs: list[str] = []
        with self._phase("export"):
            for exporter in create_exporters(primary, self._settings):
                ext = input_path.suffix if exporter.format_name == primary else exporter.file_extension
                target = derive_output_path(input_path, self._settings.output_suffix, ext)
                outputs.append(exporter.export(graph, target))
                logger.info("Wrote %s", target)

        return report.model_copy(
            update={"output_paths": outputs, "timings": list(self._timings)}
        )
