# tests/unit/pipeline/test_orchestrator.py - v1
"""Tests for pipeline/orchestrator.py, including small end-to-end runs."""

from __future__ import annotations

import json
from pathlib import Path

import networkx as nx
import pytest

from clusterability.config.settings import Settings
from clusterability.graph.graphology import graph_to_graphology
from clusterability.graph.loader import GraphLoadError
from clusterability.pipeline.orchestrator import StabilityPipeline, derive_output_path
from clusterability.stability.ambiguity import pair_contributions
from clusterability.stability.ensemble import run_ensemble
from conftest import AlternatingRingDetector, ConstantDetector, SingletonDetector

SAME_MEAN = "percentage_neighbors_in_same_community_mean"
SAME_VAR = "percentage_neighbors_in_same_community_variance"
DIVERSITY_MEAN = "ratio_communities_neighbors_mean"


def _settings(**overrides) -> Settings:
    values = {"passes": 4, "seed": 99, "layout_iterations": 0}
    values.update(overrides)
    return Settings(_env_file=None, **values)


class TestDeriveOutputPath:
    def test_inserts_suffix(self):
        assert derive_output_path("data/graph.json", "_with_louvains") == Path(
            "data/graph_with_louvains.json"
        )

    def test_explicit_extension(self):
        assert derive_output_path("g.json", "_x", ".gexf") == Path("g_x.gexf")


class TestAnalyzeGraph:
    def test_single_edge_single_pass(self):
        g = nx.Graph([("a", "b")])
        report = StabilityPipeline(_settings(passes=1), ConstantDetector()).analyze_graph(g)
        for node in g:
            assert g.nodes[node][SAME_MEAN] == 1.0
            assert g.nodes[node][SAME_VAR] == 0.0
            assert g.nodes[node][DIVERSITY_MEAN] == 0.5
            assert g.nodes[node]["ambiguity"] == 0.0
        assert report.passes == 1
        assert report.edge_pairs == 1
        assert report.sampled_pairs == 0

    def test_isolated_nodes(self):
        g = nx.empty_graph(4)
        report = StabilityPipeline(_settings(passes=3), ConstantDetector()).analyze_graph(g)
        for node in g:
            assert g.nodes[node][SAME_MEAN] == 1.0
            assert g.nodes[node][SAME_VAR] == 0.0
            assert g.nodes[node]["ambiguity"] == 0.0
        assert report.edge_pairs == 0
        assert report.sampled_pairs == 6
        assert report.sample_target == 12

    def test_alternating_ring(self, ring_graph):
        pipeline = StabilityPipeline(_settings(passes=20), AlternatingRingDetector())
        report = pipeline.analyze_graph(ring_graph)
        # 10-node ring: every non-adjacent pair fits inside the sampling target
        assert report.sampled_pairs == 35
        for node in ring_graph:
            # 2 adjacent pairs at 0.5/10 + 3 split non-adjacent pairs at 0.5/10
            assert ring_graph.nodes[node]["ambiguity"] == pytest.approx(0.25)

    def test_adjacent_pair_contribution(self, ring_graph):
        ensemble = run_ensemble(ring_graph, AlternatingRingDetector(), 20)
        contributions = pair_contributions(ensemble.labels, ensemble.index.edge_pairs, 10)
        assert contributions.tolist() == pytest.approx([0.05] * 10)

    def test_singletons_are_maximally_split(self, two_cliques):
        StabilityPipeline(_settings(), SingletonDetector()).analyze_graph(two_cliques)
        assert all(d[SAME_MEAN] == 0.0 for _, d in two_cliques.nodes(data=True))
        assert all(d[DIVERSITY_MEAN] == 1.0 for _, d in two_cliques.nodes(data=True))

    def test_keep_pass_labels(self, ring_graph):
        settings = _settings(passes=2, keep_pass_labels=True)
        StabilityPipeline(settings, ConstantDetector()).analyze_graph(ring_graph)
        assert ring_graph.nodes[3]["louvain_0"] == "0"
        assert ring_graph.nodes[3]["louvain_1"] == "0"

    def test_no_pass_labels_by_default(self, ring_graph):
        StabilityPipeline(_settings(), ConstantDetector()).analyze_graph(ring_graph)
        assert "louvain_0" not in ring_graph.nodes[0]

    def test_timings_and_layout(self, ring_graph):
        report = StabilityPipeline(
            _settings(layout_iterations=5), ConstantDetector()
        ).analyze_graph(ring_graph, run_id="r1")
        assert report.run_id == "r1"
        assert [t.phase for t in report.timings] == ["layout", "ensemble", "ambiguity", "annotate"]
        assert isinstance(ring_graph.nodes[0]["x"], float)

    def test_layout_skipped_at_zero(self, ring_graph):
        report = StabilityPipeline(_settings(), ConstantDetector()).analyze_graph(ring_graph)
        assert "layout" not in [t.phase for t in report.timings]
        assert "x" not in ring_graph.nodes[0]

    def test_seeded_runs_pass_same_seeds(self, ring_graph):
        first, second = ConstantDetector(), ConstantDetector()
        StabilityPipeline(_settings(), first).analyze_graph(ring_graph.copy())
        StabilityPipeline(_settings(), second).analyze_graph(ring_graph.copy())
        assert first.calls == second.calls
        assert len(set(first.calls)) == 4

    def test_builds_detector_from_settings(self):
        pipeline = StabilityPipeline(_settings())
        report = pipeline.analyze_graph(nx.path_graph(3))
        assert report.detector == "louvain"


class TestAnalyzeFile:
    def _write(self, tmp_path, graph) -> Path:
        path = tmp_path / "graph.json"
        path.write_text(json.dumps(graph_to_graphology(graph)))
        return path

    def test_writes_annotated_json(self, tmp_path, two_cliques):
        path = self._write(tmp_path, two_cliques)
        report = StabilityPipeline(_settings(), ConstantDetector()).analyze_file(path)

        out = tmp_path / "graph_with_louvains.json"
        assert report.output_paths == [str(out)]
        assert report.timings[-1].phase == "export"
        data = json.loads(out.read_text())
        assert len(data["nodes"]) == 10
        assert len(data["edges"]) == 21
        attrs = data["nodes"][0]["attributes"]
        assert attrs[SAME_MEAN] == 1.0
        assert attrs["ambiguity"] == 0.0
        # input untouched
        assert "ambiguity" not in path.read_text()

    def test_extra_formats(self, tmp_path, ring_graph):
        path = self._write(tmp_path, ring_graph)
        settings = _settings(graph_export_formats="gexf")
        report = StabilityPipeline(settings, ConstantDetector()).analyze_file(path)
        assert report.output_paths == [
            str(tmp_path / "graph_with_louvains.json"),
            str(tmp_path / "graph_with_louvains.gexf"),
        ]
        assert nx.read_gexf(tmp_path / "graph_with_louvains.gexf").number_of_nodes() == 10

    def test_graphml_input_keeps_format(self, tmp_path, ring_graph):
        path = tmp_path / "ring.graphml"
        nx.write_graphml(ring_graph, path)
        StabilityPipeline(_settings(), ConstantDetector()).analyze_file(path)
        back = nx.read_graphml(tmp_path / "ring_with_louvains.graphml")
        assert back.nodes["0"]["ambiguity"] == 0.0

    def test_load_error_writes_nothing(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        with pytest.raises(GraphLoadError):
            StabilityPipeline(_settings(), ConstantDetector()).analyze_file(path)
        assert sorted(p.name for p in tmp_path.iterdir()) == ["broken.json"]

    def test_gexf_input_with_viz(self, tmp_path):
        g = nx.cycle_graph(6)
        for n in g:
            g.nodes[n]["viz"] = {
                "position": {"x": float(n), "y": float(-n), "z": 0.0},
                "size": 3.0,
                "color": {"r": 10, "g": 20, "b": 30, "a": 1.0},
            }
        path = tmp_path / "gephi.gexf"
        nx.write_gexf(g, path)

        StabilityPipeline(_settings(), ConstantDetector()).analyze_file(path)
        back = nx.read_gexf(tmp_path / "gephi_with_louvains.gexf")
        node = back.nodes["3"]
        assert node["ambiguity"] == 0.0
        assert node["viz"]["size"] == 3.0
        assert node["viz"]["position"]["x"] == 3.0

    def test_rerun_on_own_output(self, tmp_path, ring_graph):
        path = self._write(tmp_path, ring_graph)
        settings = _settings(layout_iterations=5)
        StabilityPipeline(settings, ConstantDetector()).analyze_file(path)

        first = tmp_path / "graph_with_louvains.json"
        StabilityPipeline(settings, ConstantDetector()).analyze_file(first)
        data = json.loads((tmp_path / "graph_with_louvains_with_louvains.json").read_text())
        attrs = data["nodes"][0]["attributes"]
        assert isinstance(attrs["x"], float)
        assert attrs["ambiguity"] == 0.0
