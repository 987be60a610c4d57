"""Tests for Project, its build config and log."""

import json

import pytest

from wasm_advisor.actions.build_step_change import BuildStepChangeManager
from wasm_advisor.actions.file_change import FileChangeManager
from wasm_advisor.constants import BUILD_DIR
from wasm_advisor.models.config import BuildStep, ProjectConfig
from wasm_advisor.project import Project, ProjectConfigError


class TestProjectConfig:
    def test_missing_config_is_empty(self, project):
        assert project.config == ProjectConfig()
        assert project.config.envs == {"cflags": "", "ldflags": ""}

    def test_update_build_config_persists(self, project):
        project.update_build_config(
            envs={"cflags": "-O2", "ldflags": ""},
            options={"needSimd": True},
            builders=[BuildStep(id=1, command="make", root_build_file_path="${projectRoot}/src")],
        )

        raw = json.loads(project.config_path.read_text())
        assert raw["options"] == {"needSimd": True}
        assert raw["builders"][0]["rootBuildFilePath"] == "${projectRoot}/src"
        assert raw["builders"][0]["__type__"] == "NativeBuilder"

        reloaded = Project(project.root)
        assert reloaded.config == project.config

    def test_partial_update_keeps_other_parts(self, project):
        project.update_build_config(options={"needSimd": True})
        project.update_build_config(envs={"cflags": "-g", "ldflags": ""})
        assert project.config.options == {"needSimd": True}

    def test_corrupt_config(self, project):
        project.state_dir.mkdir()
        project.config_path.write_text("{")
        with pytest.raises(ProjectConfigError):
            Project(project.root)

    def test_builder_by_id(self, project_with_builders):
        assert project_with_builders.config.builder_by_id(2).command == "make"
        assert project_with_builders.config.builder_by_id(99) is None


class TestTemplateLiterals:
    def test_constants(self, project):
        assert project.constant["projectRoot"] == project.root
        assert project.constant["projectDist"].endswith(BUILD_DIR)

    def test_eval(self, project):
        assert project.eval_template_literals("${projectRoot}/src") == f"{project.root}/src"
        assert project.eval_template_literals("${unknown}") == "${unknown}"

    def test_validate(self, project):
        result = project.validate_template_literals("-I${projectRoot} -L${libDir} ${x}")
        assert result == ["${libDir}", "${x}"]
        assert project.validate_template_literals("") == []

    def test_get_template_literals(self, project):
        assert f"${{projectRoot}} = {project.root}" in project.get_template_literals()


class TestSession:
    def test_new_session_replaces_managers(self, project):
        old_files, old_steps = project.file_change_manager, project.build_step_change_manager

        project.new_session()

        assert isinstance(project.file_change_manager, FileChangeManager)
        assert isinstance(project.build_step_change_manager, BuildStepChangeManager)
        assert project.file_change_manager is not old_files
        assert project.build_step_change_manager is not old_steps


class TestProjectLog:
    def test_update_appends(self, project):
        project.log.update("# Build\n")
        project.log.update("step 1 ok\n")
        assert project.log.content() == "# Build\nstep 1 ok\n"

    def test_clear(self, project):
        project.log.update("x")
        project.log.clear()
        assert project.log.content() == ""
