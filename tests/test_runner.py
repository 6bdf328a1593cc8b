import json
import os

import pytest

from fdclosure.config import ClosureConfig
from fdclosure.model import FDError, FDSet
from fdclosure.notation import parse_fds
from fdclosure.runner import ClosureRunner


def _fds(*notations: str) -> FDSet:
    return parse_fds(notations, compact=True)


def test_default_operations():
    result = ClosureRunner(run_id="t1").run(_fds("A->B", "B->C"))
    assert result.run_id == "t1"
    assert result.attributes == ["A", "B", "C"]
    assert list(result.derived) == ["trivial", "transitive", "closure"]
    assert result.derived["transitive"] == _fds("A->C")
    assert result.rounds[-1]["converged"] is True
    assert result.elapsed_time >= 0.0


def test_augment_operation():
    runner = ClosureRunner(ClosureConfig(operations=["augment"]))
    result = runner.run(_fds("A->B"), augment_with=["C"])
    assert result.derived["augment"] == _fds("AC->BC")
    assert result.augment_with == ["C"]


def test_augment_without_attributes_is_skipped():
    result = ClosureRunner(ClosureConfig(operations=["augment"])).run(_fds("A->B"))
    assert result.derived == {}


def test_attribute_limit_enforced():
    runner = ClosureRunner(ClosureConfig(max_attributes=2))
    with pytest.raises(FDError) as exc:
        runner.run(_fds("A->B", "B->C"))
    assert exc.value.code == "LIMIT_EXCEEDED"
    assert exc.value.details == {"attributes": 3, "max_attributes": 2}


def test_unknown_operation_rejected():
    config = ClosureConfig()
    config.operations = ["closure", "bogus"]
    with pytest.raises(FDError) as exc:
        ClosureRunner(config).run(_fds("A->B"))
    assert exc.value.code == "UNKNOWN_OPERATION"


def test_input_not_mutated():
    fds = _fds("A->B", "B->C")
    ClosureRunner().run(fds)
    assert fds == _fds("A->B", "B->C")


def test_render_is_canonical():
    config = ClosureConfig(operations=["attributes", "transitive"])
    report = ClosureRunner(config).run(_fds("B->C", "A->B")).render()
    assert report.splitlines() == [
        "input (2):",
        "  A -> B",
        "  B -> C",
        "attributes: A, B, C",
        "transitive (1):",
        "  A -> C",
    ]


def test_render_can_hide_trivial_closure_members():
    result = ClosureRunner(ClosureConfig(operations=["closure"])).run(_fds("A->B"))
    shown = result.render(show_trivial=True).splitlines()
    hidden = result.render(show_trivial=False).splitlines()
    assert "  A -> A" in shown
    assert "  A -> A" not in hidden
    assert "  A -> B" in hidden


def test_to_dict_is_json_serialisable():
    result = ClosureRunner().run(_fds("AB->C"))
    data = json.loads(json.dumps(result.to_dict(compact=True)))
    assert data["fds"] == ["AB -> C"]
    assert data["derived"]["trivial"] == ["AB -> A", "AB -> AB", "AB -> B"]
    assert data["derived"]["transitive"] == []


def test_log_dir_receives_run_log_and_result(tmp_path):
    config = ClosureConfig(log_dir=str(tmp_path))
    result = ClosureRunner(config, run_id="run-1").run(_fds("A->B", "B->C"))
    run_dir = tmp_path / "run-1"
    assert result.log_dir == str(run_dir)

    log_text = (run_dir / "run.log").read_text()
    assert "closure round 1:" in log_text
    assert "transitive: 1 FDs" in log_text

    with open(os.path.join(str(run_dir), "result.json")) as f:
        saved = json.load(f)
    assert saved["derived"]["transitive"] == ["A -> C"]


def test_verbose_echoes_to_stderr(capsys):
    ClosureRunner(ClosureConfig(verbose=True, operations=["trivial"])).run(_fds("A->B"))
    err = capsys.readouterr().err
    assert "[fdclosure] trivial: 1 FDs" in err


def test_each_run_gets_its_own_log(tmp_path):
    runner = ClosureRunner(ClosureConfig(log_dir=str(tmp_path), operations=["attributes", "trivial"]), run_id="twice")
    runner.run(_fds("A->B"))
    runner.run(_fds("C->D"))
    run_dir = tmp_path / "twice"

    log_text = (run_dir / "run.log").read_text()
    assert log_text.count("Run twice:") == 1
    assert "attributes: C, D" in log_text
    assert "attributes: A, B" not in log_text
    assert "Result saved to:" in log_text
    with open(os.path.join(str(run_dir), "result.json")) as f:
        saved = json.load(f)
    assert saved["fds"] == ["C -> D"]
    assert saved["derived"]["trivial"] == ["C -> C"]
    assert runner.log_file is None


def test_unused_runner_opens_no_log(tmp_path):
    runner = ClosureRunner(ClosureConfig(log_dir=str(tmp_path)), run_id="idle")
    assert runner.log_file is None
    assert not (tmp_path / "idle").exists()


def test_refused_run_leaves_no_stale_result(tmp_path):
    runner = ClosureRunner(ClosureConfig(log_dir=str(tmp_path), max_attributes=2), run_id="r")
    runner.run(_fds("A->B"))
    with pytest.raises(FDError):
        runner.run(_fds("A->B", "B->C"))
    run_dir = tmp_path / "r"
    assert not (run_dir / "result.json").exists()
    assert "Refusing: 3 attributes" in (run_dir / "run.log").read_text()
    assert runner.log_file is None


def test_hidden_trivial_members_not_counted_in_header():
    result = ClosureRunner(ClosureConfig(operations=["closure"])).run(_fds("A->B"))
    closed = result.derived["closure"]
    non_trivial = [fd for fd in closed if not fd.is_trivial]
    hidden = result.render(show_trivial=False).splitlines()
    shown = result.render(show_trivial=True).splitlines()
    assert f"closure ({len(non_trivial)}):" in hidden
    assert f"closure ({len(closed)}):" in shown
    assert len(non_trivial) < len(closed)
