# -*- coding: utf-8 -*-
"""
Integration tests for result export, logging and the pipeline.

Covers:
  - CsvWriter / OutputOrchestrator files and contents
  - FuzzyARASPipeline phases, debug log and export switches
  - main() command-line entry point
  - Logging helpers (LogContext, decorators, DebugLogger)
"""

import json
import logging

import pandas as pd
import pytest

from config import Config, PathConfig
from data_loader import DecisionProblem, ProblemLoader
from loggers import DebugLogger, LogContext, log_context, log_exceptions, log_execution
from main import main
from mcdm.fuzzy import (
    FUZZY_STEPS,
    compute,
    default_alternative_vocabulary,
    default_criteria_vocabulary,
)
from output import CsvWriter, OutputOrchestrator
from pipeline import FuzzyARASPipeline, run_pipeline


# ---------------------------------------------------------------------------
# Shared fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def config(tmp_path):
    return Config(paths=PathConfig(base_dir=tmp_path, output_name="out"))


@pytest.fixture()
def problem(config):
    return ProblemLoader(config).from_dict({
        "name": "suppliers",
        "alternatives": ["S1", "S2", "S3"],
        "criteria": [{"label": "Price", "type": "cost"}, "Quality"],
        "experts": 2,
        "criteria_judgments": [["H", "M"], ["VH", "MH"]],
        "alternative_judgments": [
            [["G", "F"], ["F", "VG"], ["MG", "G"]],
            [["MG", "F"], ["F", "G"], ["G", "MG"]],
        ],
    })


# ---------------------------------------------------------------------------
# Writers
# ---------------------------------------------------------------------------

class TestCsvWriter:
    def test_ranking_file(self, tmp_path, problem):
        result = problem.solve()
        writer = CsvWriter(str(tmp_path))
        path = writer.save_ranking(result)
        df = pd.read_csv(path, index_col="Alternative")
        assert list(df.columns) == ["S", "K", "Rank", "Best"]
        assert df.index[0] == "A0 (optimal)"
        assert df.loc["A0 (optimal)", "K"] == pytest.approx(1.0)
        assert df.loc[result.best_alternative, "Rank"] == 1
        assert bool(df.loc[result.best_alternative, "Best"])

    def test_best_flag_with_duplicate_labels(self, tmp_path):
        result = compute(2, 1, 1, ["benefit"], default_criteria_vocabulary(),
                         default_alternative_vocabulary(), [["M"]], [[["F"], ["G"]]],
                         alternative_labels=["X", "X"])
        path = CsvWriter(str(tmp_path)).save_ranking(result)
        df = pd.read_csv(path, index_col="Alternative")
        assert df["Best"].sum() == 1
        assert df.loc[df["Best"], "K"].iloc[0] == pytest.approx(1.0)

    def test_float_format(self, tmp_path, problem):
        writer = CsvWriter(str(tmp_path), float_format="%.3f")
        path = writer.save_ranking(problem.solve())
        first_row = open(path, encoding="utf-8").read().splitlines()[1]
        assert len(first_row.split(",")[1].split(".")[1]) == 3

    def test_step_tables(self, tmp_path, problem):
        writer = CsvWriter(str(tmp_path))
        saved = writer.save_step_tables(problem.solve())
        assert set(saved) == set(FUZZY_STEPS)
        weighted = pd.read_csv(saved["weighted_matrix"])
        assert len(weighted) == 4 * 2
        assert list(weighted.columns[-5:]) == ["l", "l_prime", "m", "u_prime", "u"]

    def test_saved_files_tracked(self, tmp_path, problem):
        writer = CsvWriter(str(tmp_path))
        writer.save_result_json(problem.solve())
        assert writer.get_saved_files() == [str(tmp_path / "results" / "aras_result.json")]


class TestOutputOrchestrator:
    def test_save_all(self, tmp_path, problem, config):
        orch = OutputOrchestrator(str(tmp_path))
        summary = orch.save_all(problem, problem.solve(), 0.5, config)
        names = {p.split("/")[-1].split("\\")[-1] for p in summary["saved_files"]}
        assert {"aras_ranking.csv", "aras_expert_terms.csv", "aras_result.json",
                "problem.json", "execution_summary.json", "config_snapshot.json"} <= names
        assert summary["total"] == len(orch.get_saved_files())

    def test_problem_echo_is_reloadable(self, tmp_path, problem, config):
        OutputOrchestrator(str(tmp_path)).save_all(problem, problem.solve(), 0.1)
        reloaded = ProblemLoader(config).load(tmp_path / "results" / "problem.json")
        assert reloaded.alternative_judgments == problem.alternative_judgments
        assert reloaded.polarities == problem.polarities

    def test_empty_result_exports_ranking_only(self, tmp_path, problem):
        from mcdm.fuzzy import FuzzyARASResult
        orch = OutputOrchestrator(str(tmp_path))
        orch.save_all(problem, FuzzyARASResult.empty(), 0.0)
        assert (tmp_path / "results" / "aras_ranking.csv").exists()
        assert not (tmp_path / "results" / "aras_weighted_matrix.csv").exists()


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------

class TestPipeline:
    def test_run_with_problem(self, problem, config):
        result = FuzzyARASPipeline(config).run(problem)
        assert result.problem is problem
        assert result.aras_result.best_alternative in problem.alternatives
        assert result.saved_files
        ranking = result.get_ranking_df()
        assert list(ranking.columns) == ["Alternative", "S", "K", "Rank"]
        assert ranking["Rank"].tolist() == [1, 2, 3]

    def test_run_default_problem(self, config):
        result = run_pipeline(config=config)
        assert result.problem.name == "default"
        assert result.aras_result.utilities == pytest.approx([1.0] * 4)
        assert result.aras_result.best_alternative_index == 0

    def test_run_from_file(self, tmp_path, problem, config):
        path = tmp_path / "suppliers.json"
        ProblemLoader(config).save(problem, path)
        result = FuzzyARASPipeline(config).run(str(path))
        assert result.problem.alternatives == ["S1", "S2", "S3"]

    def test_debug_log_written(self, problem, config):
        FuzzyARASPipeline(config).run(problem)
        logs = list(config.paths.logs_dir.glob("debug_*.json"))
        assert len(logs) == 1
        entries = json.loads(logs[0].read_text(encoding="utf-8"))
        labels = {e["message"] for e in entries if e["level"] == "DATA"}
        assert "step:utility" in labels
        assert any(e.get("problem") == "suppliers" for e in entries)

    def test_no_export(self, problem, config):
        config.output.export = False
        result = FuzzyARASPipeline(config).run(problem)
        assert result.saved_files == []
        assert not (config.paths.results_dir / "aras_ranking.csv").exists()

    def test_invalid_problem_raises(self, config, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"alternatives": 0, "criteria": 1}), encoding="utf-8")
        with pytest.raises(ValueError):
            FuzzyARASPipeline(config).run(path)


class TestMain:
    def test_main_success(self, tmp_path, capsys):
        out = tmp_path / "cli"
        assert main(["--output", str(out)]) == 0
        assert (out / "results" / "aras_ranking.csv").exists()
        assert "RESULTS SUMMARY" in capsys.readouterr().out

    def test_main_no_export(self, tmp_path):
        out = tmp_path / "cli"
        assert main(["--output", str(out), "--no-export"]) == 0
        assert not (out / "results" / "aras_ranking.csv").exists()

    def test_main_missing_file(self, tmp_path):
        assert main([str(tmp_path / "missing.json"), "--output", str(tmp_path / "cli")]) == 1


# ---------------------------------------------------------------------------
# Logging helpers
# ---------------------------------------------------------------------------

class TestLogging:
    def test_log_context_scoped(self):
        with log_context(problem="p1"):
            assert LogContext.get()["problem"] == "p1"
        assert "problem" not in LogContext.get()

    def test_log_execution_preserves_result(self, caplog):
        @log_execution(level=logging.INFO)
        def double(x):
            return 2 * x

        with caplog.at_level(logging.INFO, logger="fuzzy_aras"):
            assert double(3) == 6
        assert "completed" in caplog.text

    def test_log_exceptions_reraise(self):
        @log_exceptions()
        def fail():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            fail()

    def test_log_exceptions_suppress(self):
        @log_exceptions(reraise=False)
        def fail():
            raise RuntimeError("boom")

        assert fail() is None

    def test_debug_logger_intercepts_stdlib(self, tmp_path):
        debug = DebugLogger(str(tmp_path))
        logging.getLogger("fuzzy_aras").info("hello")
        debug.log_data("payload", {"x": 1})
        path = debug.close()
        entries = json.loads(open(path, encoding="utf-8").read())
        assert any(e["message"] == "hello" for e in entries)
        assert any(e["level"] == "DATA" and e["data"] == {"x": 1} for e in entries)
