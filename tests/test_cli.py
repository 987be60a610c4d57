"""Unit tests for the CLI module (wasm_advisor.cli.main)."""

from __future__ import annotations

import json
from unittest.mock import MagicMock, patch

import pytest

from wasm_advisor.advisors.builtin.simd import SIMD128_ERROR
from wasm_advisor.advisors.exceptions import PipelineConfigMissingError
from wasm_advisor.cli.main import (
    EXIT_ADVISOR_ERROR,
    EXIT_INCOMPLETE,
    EXIT_INVALID_INPUT,
    EXIT_KEYBOARD_INTERRUPT,
    EXIT_ORCHESTRATOR_ERROR,
    EXIT_SUCCESS,
    EXIT_UNEXPECTED,
    build_parser,
    create_session as real_create_session,
    determine_exit_code,
    main,
    resolve_pipelines_path,
    validate_project_root,
)
from wasm_advisor.constants import DEFAULT_PIPELINES_PATH, PIPELINES_ENV_VAR
from wasm_advisor.models.config import BuildStep
from wasm_advisor.orchestrator.exceptions import GraphBuildError
from wasm_advisor.project import Project


# ---------------------------------------------------------------------------
# TestBuildParser
# ---------------------------------------------------------------------------
class TestBuildParser:
    def test_advise_args(self):
        args = build_parser().parse_args(
            ["advise", "/tmp", "--tag", "make", "--tag", "emcc", "--error", "boom", "--json"]
        )
        assert args.command == "advise"
        assert args.tag == ["make", "emcc"]
        assert args.error == "boom"
        assert args.json is True

    def test_advise_error_sources_are_exclusive(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["advise", "/tmp", "--error", "x", "--error-file", "f"])

    def test_build_defaults(self):
        args = build_parser().parse_args(["build", "/tmp"])
        assert args.auto_apply is False
        assert args.verbose is False
        assert args.pipelines == ""

    def test_apply_index(self):
        assert build_parser().parse_args(["apply", "/tmp", "--index", "2"]).index == 2

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
class TestValidateProjectRoot:
    def test_valid_dir(self, tmp_path):
        assert validate_project_root(str(tmp_path)) == str(tmp_path.resolve())

    def test_nonexistent(self):
        with pytest.raises(SystemExit) as exc_info:
            validate_project_root("/nonexistent/path/xyz_abc_123")
        assert exc_info.value.code == EXIT_INVALID_INPUT


class TestResolvePipelinesPath:
    def test_cli_value_wins(self, monkeypatch):
        monkeypatch.setenv(PIPELINES_ENV_VAR, "/env.json")
        assert str(resolve_pipelines_path("/cli.json")) == "/cli.json"

    def test_env_var(self, monkeypatch):
        monkeypatch.setenv(PIPELINES_ENV_VAR, "/env.json")
        assert str(resolve_pipelines_path("")) == "/env.json"

    def test_packaged_default(self, monkeypatch):
        monkeypatch.delenv(PIPELINES_ENV_VAR, raising=False)
        assert resolve_pipelines_path("") == DEFAULT_PIPELINES_PATH


class TestDetermineExitCode:
    def test_success(self):
        assert determine_exit_code({"errors": [], "failed_step": None}) == EXIT_SUCCESS

    def test_failed_step(self):
        assert determine_exit_code({"errors": [], "failed_step": 2}) == EXIT_INCOMPLETE

    def test_errors(self):
        assert determine_exit_code({"errors": ["x"], "failed_step": None}) == EXIT_INCOMPLETE


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------
class TestAdviseCommand:
    def test_advise_error_json(self, tmp_path, capsys):
        rc = main(["advise", str(tmp_path), "--tag", "make", "--error", SIMD128_ERROR, "--json"])

        assert rc == EXIT_SUCCESS
        recipes = json.loads(capsys.readouterr().out)
        assert [r["advisor"] for r in recipes] == ["SimdAdvisor"]
        assert (tmp_path / ".wasm_advisor" / "recipes.json").exists()

    def test_advise_error_file(self, tmp_path, capsys):
        log = tmp_path / "err.log"
        log.write_text("totally unknown failure")

        rc = main(["advise", str(tmp_path), "--error-file", str(log)])

        assert rc == EXIT_SUCCESS
        out = capsys.readouterr().out
        assert "Recipes (1)" in out
        assert "Recipe for errors not handled" in out

    def test_advise_prebuild_checks(self, tmp_path, capsys):
        Project(tmp_path).update_build_config(
            builders=[BuildStep(id=1, command="make", args="${nope}")]
        )

        rc = main(["advise", str(tmp_path), "--json"])

        assert rc == EXIT_SUCCESS
        recipes = json.loads(capsys.readouterr().out)
        assert [r["advisor"] for r in recipes] == ["TemplateLiteralValidateAdvisor"]

    def test_missing_error_file(self, tmp_path):
        rc = main(["advise", str(tmp_path), "--error-file", str(tmp_path / "missing.log")])
        assert rc == EXIT_INVALID_INPUT

    def test_missing_pipeline_file(self, tmp_path, capsys):
        rc = main(["advise", str(tmp_path), "--pipelines", str(tmp_path / "none.json")])
        assert rc == EXIT_ADVISOR_ERROR
        assert "Advisor error" in capsys.readouterr().err

    def test_invalid_root(self):
        assert main(["advise", "/nonexistent/path/xyz_abc_123"]) == EXIT_INVALID_INPUT


class TestBuildCommand:
    def test_failing_build(self, tmp_path, capsys):
        Project(tmp_path).update_build_config(builders=[BuildStep(id=1, command="exit 1")])

        rc = main(["build", str(tmp_path), "--json"])

        assert rc == EXIT_INCOMPLETE
        result = json.loads(capsys.readouterr().out)
        assert result["failed_step"] == 1
        assert [r["advisor"] for r in result["recipes"]] == ["ErrorsNotHandledAdvisor"]

    def test_successful_build(self, tmp_path, capsys):
        Project(tmp_path).update_build_config(builders=[BuildStep(id=1, command="true")])

        rc = main(["build", str(tmp_path)])

        assert rc == EXIT_SUCCESS
        assert "without a failing build step" in capsys.readouterr().out

    def test_orchestrator_error(self, tmp_path):
        with patch(
            "wasm_advisor.orchestrator.graph.build_session_graph",
            side_effect=GraphBuildError("broken"),
        ):
            assert main(["build", str(tmp_path)]) == EXIT_ORCHESTRATOR_ERROR

    def test_keyboard_interrupt(self, tmp_path):
        graph = MagicMock()
        graph.invoke.side_effect = KeyboardInterrupt
        with patch("wasm_advisor.orchestrator.graph.build_session_graph", return_value=graph):
            assert main(["build", str(tmp_path)]) == EXIT_KEYBOARD_INTERRUPT

    def test_unexpected_error(self, tmp_path):
        graph = MagicMock()
        graph.invoke.side_effect = RuntimeError("boom")
        with patch("wasm_advisor.orchestrator.graph.build_session_graph", return_value=graph):
            assert main(["build", str(tmp_path)]) == EXIT_UNEXPECTED


class TestApplyCommand:
    def test_apply_persisted_recipes(self, tmp_path, capsys):
        main(["advise", str(tmp_path), "--tag", "make", "--error", SIMD128_ERROR])
        capsys.readouterr()

        rc = main(["apply", str(tmp_path), "--json"])

        assert rc == EXIT_SUCCESS
        assert json.loads(capsys.readouterr().out) == {"applied": 1, "failed": []}
        assert Project(tmp_path).config.options == {"needSimd": True}

    def test_apply_bad_index(self, tmp_path):
        main(["advise", str(tmp_path), "--tag", "make", "--error", SIMD128_ERROR])
        assert main(["apply", str(tmp_path), "--index", "5"]) == EXIT_INVALID_INPUT

    def test_apply_nothing(self, tmp_path, capsys):
        assert main(["apply", str(tmp_path)]) == EXIT_SUCCESS
        assert "Applied 0 of 0" in capsys.readouterr().out

    def test_file_edits_tracked_by_fresh_session(self, tmp_path, capsys):
        (tmp_path / "Makefile").write_text("all:\nCFLAGS = -mfpmath=sse -O2\n")
        main(["advise", str(tmp_path), "--tag", "make", "--error", "unknown FP unit 'sse'"])
        capsys.readouterr()

        sessions = []

        def recording_create_session(root, pipelines_path):
            sessions.append(real_create_session(root, pipelines_path))
            return sessions[-1]

        with patch(
            "wasm_advisor.cli.main.create_session", side_effect=recording_create_session
        ):
            rc = main(["apply", str(tmp_path)])

        assert rc == EXIT_SUCCESS
        project = sessions[0]["project"]
        assert project.file_change_manager.files == [str(tmp_path.resolve() / "Makefile")]
        assert (tmp_path / "Makefile").read_text() == "all:\nCFLAGS =  -O2\n"
