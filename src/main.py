# src/main.py - v1
"""CLI entry point.

Usage:
    clusterability <graph_file> [passes] [layout_iterations] [options]

Writes ``<graph_file stem>_with_louvains<ext>`` next to the input.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from clusterability.version import __version__

if TYPE_CHECKING:
    from clusterability.config.settings import Settings
    from clusterability.core.models import StabilityReport

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    from clusterability.config.settings import ConfigurationError, load_settings
    from clusterability.graph.loader import GraphLoadError

    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings(**_settings_overrides(args))
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    _setup_logging(settings, args.verbose)

    try:
        return _cmd_analyze(args.file, settings)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except (GraphLoadError, ConfigurationError) as exc:
        logger.error("%s", exc)
        return 1
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="clusterability",
        description=(
            f"clusterability v{__version__} - community-detection stability "
            "metrics for graph documents"
        ),
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument("file", type=Path, help="Graph document (.json graphology, .gexf, .graphml)")
    parser.add_argument(
        "passes", type=int, nargs="?", default=None,
        help="Number of community detection passes (default: 200)",
    )
    parser.add_argument(
        "layout_iterations", type=int, nargs="?", default=None,
        help="ForceAtlas2 iterations, 0 to skip (default: 100)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument("--seed", type=int, default=None, help="Root random seed")
    parser.add_argument(
        "--workers", type=int, default=None,
        help="Worker processes for detection passes (default: 1)",
    )
    parser.add_argument(
        "--detector", choices=["louvain", "leiden"], default=None,
        help="Community detection algorithm (default: louvain)",
    )
    parser.add_argument("--resolution", type=float, default=None, help="Detector resolution")
    parser.add_argument(
        "--export-formats", default=None,
        help="Comma-separated extra output formats: json, gexf, graphml",
    )
    parser.add_argument(
        "--keep-pass-labels", action="store_true", default=None,
        help="Also store each pass's community label on the nodes",
    )
    return parser


def _settings_overrides(args: argparse.Namespace) -> dict[str, object]:
    """Map CLI arguments onto Settings fields; unset arguments are left to the environment."""
    mapping = {
        "passes": args.passes,
        "layout_iterations": args.layout_iterations,
        "seed": args.seed,
        "workers": args.workers,
        "detector": args.detector,
        "resolution": args.resolution,
        "graph_export_formats": args.export_formats,
        "keep_pass_labels": args.keep_pass_labels,
    }
    return {k: v for k, v in mapping.items() if v is not None}


def _cmd_analyze(file_path: Path, settings: Settings) -> int:
    """Run the stability pipeline on one document."""
    from clusterability.pipeline.orchestrator import StabilityPipeline

    if not file_path.exists():
        logger.error("File not found: %s", file_path)
        return 1

    report = StabilityPipeline(settings).analyze_file(file_path)
    _print_report(report)
    return 0


def _print_report(report: StabilityReport) -> None:
    """Print a human-readable summary of a StabilityReport."""
    print("\nStability analysis complete:")
    print(f"  Run ID:         {report.run_id}")
    print(f"  Nodes:          {report.node_count}")
    print(f"  Edges:          {report.edge_count}")
    print(f"  Density:        {report.density:.6f}")
    print(f"  Passes:         {report.passes} ({report.detector})")
    print(
        f"  Pairs:          {report.evaluated_pairs} "
        f"({report.edge_pairs} adjacent, {report.sampled_pairs} sampled)"
    )
    for timing in report.timings:
        print(f"  {timing.phase + ':':<15} {timing.seconds:.2f}s")
    for path in report.output_paths:
        print(f"  Output:         {path}")


def _setup_logging(settings: Settings, verbose: bool) -> None:
    """Configure logging for CLI usage."""
    from clusterability.logging.logger import setup_logging

    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=settings.log_file,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )


if __name__ == "__main__":
    sys.exit(main())
