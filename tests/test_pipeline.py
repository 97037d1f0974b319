"""
Tests for the relation analysis pipeline.
"""

import json
import logging

import pytest

from grapho_relations.pipeline import PipelineConfig, PipelineStep, RelationPipeline
from grapho_relations.pipeline_config import GraphAnalysisError, PipelineConfigError


def test_pipeline_step_records_status():
    step = PipelineStep("double", lambda context, value: value * 2, params={"value": 21})
    assert step.execute({}) == 42
    assert step.status == "completed"
    assert step.result == 42


def test_disabled_step_is_skipped():
    step = PipelineStep("noop", lambda context: 1, enabled=False)
    assert step.execute({}) is None
    assert step.status == "skipped"


def test_failing_step_records_error():
    def fail(context):
        raise ValueError("boom")

    step = PipelineStep("fail", fail)
    with pytest.raises(ValueError):
        step.execute({})
    assert step.status == "failed"
    assert step.error == "boom"


def test_pipeline_config_from_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        "steps": [{"name": "traverse", "enabled": False}],
        "stop_on_error": False,
    }))

    config = PipelineConfig(config_dict={"stop_on_error": True}, config_file=str(path))
    assert not config.is_step_enabled("traverse")
    assert config.is_step_enabled("compute_roots")
    assert config.get_step_config("traverse") == {}
    assert config.get_global_config() == {"stop_on_error": True}


def test_pipeline_config_rejects_bad_steps(tmp_path):
    with pytest.raises(PipelineConfigError):
        PipelineConfig(config_dict={"steps": {"name": "traverse"}})
    with pytest.raises(PipelineConfigError):
        PipelineConfig(config_file=str(tmp_path / "missing.json"))


def test_unknown_step_in_config():
    with pytest.raises(PipelineConfigError):
        RelationPipeline({"steps": [{"name": "make_coffee"}]})


def test_run_with_graph(branching_graph):
    context = RelationPipeline(graph=branching_graph).run()

    assert context["roots"] == ["1"]
    assert context["equivalence_classes"] == []
    assert context["properties"]["antisymmetric"]
    assert context["traversals"]["iterative_breadth_first_search"] == ["1", "2", "3", "4"]
    assert context["traversals"]["recursive_depth_first_search"] == ["1", "2", "4", "3"]
    assert context["exports"] == {}


def test_run_on_equivalence(equivalence_graph):
    context = RelationPipeline(graph=equivalence_graph).run()
    assert context["equivalence_classes"] == [["1", "2"], ["3"]]
    assert context["roots"] == ["1", "3"]


def test_run_loads_graph_and_exports(tmp_path):
    edges_path = tmp_path / "edges.csv"
    edges_path.write_text("source,destination\n1,2\n2,3\n")
    out_dir = tmp_path / "out"

    pipeline = RelationPipeline({
        "steps": [
            {"name": "load_graph", "params": {"edges_path": str(edges_path)}},
            {"name": "export_results", "enabled": True,
             "params": {"output_directory": str(out_dir), "formats": ["csv", "json"]}},
        ],
    })
    context = pipeline.run()

    assert context["graph"].name == "edges"
    assert set(context["exports"]) == {"vertices", "edges", "results"}
    with open(context["exports"]["results"]) as f:
        results = json.load(f)
    assert results["roots"] == ["1"]
    assert results["traversals"]["iterative_depth_first_search"] == ["1", "2", "3"]
    assert all(step.status == "completed" for step in pipeline.steps)


def test_stop_on_error_without_graph():
    pipeline = RelationPipeline({
        "steps": [{"name": "load_graph", "enabled": False}],
        "stop_on_error": True,
    })
    pipeline.run()

    statuses = {step.name: step.status for step in pipeline.steps}
    assert statuses["check_relations"] == "failed"
    assert statuses["compute_roots"] == "pending"


def test_run_step(chain_graph):
    pipeline = RelationPipeline(graph=chain_graph)
    assert pipeline.run_step("compute_roots") == ["1"]
    with pytest.raises(PipelineConfigError):
        pipeline.run_step("make_coffee")


def test_run_step_without_graph():
    pipeline = RelationPipeline({"steps": []})
    with pytest.raises(GraphAnalysisError):
        pipeline.run_step("compute_roots")


def test_run_steps(chain_graph):
    context = RelationPipeline(graph=chain_graph).run_steps(["compute_roots", "traverse"])
    assert context["roots"] == ["1"]
    assert len(context["traversals"]) == 4
    assert context["properties"] == {}


def test_unknown_traversal(chain_graph):
    pipeline = RelationPipeline({
        "steps": [{"name": "traverse", "params": {"methods": ["topological_sort"]}}],
    }, graph=chain_graph)
    with pytest.raises(PipelineConfigError):
        pipeline.run_step("traverse")


def test_pipeline_logs_progress(chain_graph, caplog):
    with caplog.at_level(logging.INFO, logger="grapho_relations.pipeline"):
        RelationPipeline(graph=chain_graph).run()
    assert "Starting pipeline" in caplog.text
    assert "Step load_graph disabled" in caplog.text


def test_save_context(equivalence_graph, tmp_path):
    pipeline = RelationPipeline(graph=equivalence_graph)
    pipeline.run()
    path = tmp_path / "state.json"
    pipeline.save_context(str(path))

    with open(path) as f:
        state = json.load(f)
    assert [step["name"] for step in state["steps"]] == RelationPipeline.STEP_NAMES
    assert state["results"]["equivalence_classes"] == [["1", "2"], ["3"]]
    assert state["results"]["properties"]["equivalence"] is True
