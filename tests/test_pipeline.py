"""Tests for the advisor registry and pipeline configuration."""

import json

import pytest

from wasm_advisor.advisors.builtin import register_all
from wasm_advisor.advisors.exceptions import (
    DuplicateAdvisorError,
    PipelineConfigError,
    PipelineConfigMissingError,
    UnknownAdvisorError,
)
from wasm_advisor.advisors.pipeline import AdvisorPipelineConfig, AdvisorPipelineFactory
from wasm_advisor.advisors.registry import AdvisorRegistry
from wasm_advisor.constants import DEFAULT_PIPELINES_PATH

from conftest import RecordingAdvisor


def write_config(path, pipelines):
    path.write_text(json.dumps({"__type__": "AdvisorPipelineConfig", "pipelines": pipelines}))
    return path


class TestAdvisorRegistry:
    def test_register_and_create(self):
        registry = AdvisorRegistry()
        registry.register("A", lambda: RecordingAdvisor("A"))
        assert registry.has("A")
        assert registry.create("A").type == "A"
        assert registry.types() == ["A"]

    def test_duplicate_registration(self):
        registry = AdvisorRegistry()
        registry.register("A", lambda: RecordingAdvisor("A"))
        with pytest.raises(DuplicateAdvisorError):
            registry.register("A", lambda: RecordingAdvisor("A"))

    def test_unknown_type(self):
        with pytest.raises(UnknownAdvisorError):
            AdvisorRegistry().create("Missing")

    def test_args_are_passed_to_factory(self):
        registry = AdvisorRegistry()
        registry.register("A", lambda args=None: RecordingAdvisor(f"A({args})"))
        assert registry.create("A", "fast").type == "A(fast)"
        assert registry.create("A").type == "A(None)"

    def test_factory_for(self):
        registry = AdvisorRegistry()
        assert registry.factory_for("A") is None


class TestAdvisorPipelineConfig:
    def test_load(self, tmp_path):
        path = write_config(tmp_path / "p.json", [
            {"tag": "make", "advisors": [{"__type__": "A"}, {"__type__": "B", "args": "x"}]},
        ])

        config = AdvisorPipelineConfig.load(path)

        item = config.item_for_tag("make")
        assert [a.type for a in item.advisors] == ["A", "B"]
        assert item.advisors[1].args == "x"
        assert config.item_for_tag("cmake") is None

    def test_missing_file(self, tmp_path):
        with pytest.raises(PipelineConfigMissingError) as exc_info:
            AdvisorPipelineConfig.load(tmp_path / "nope.json")
        assert exc_info.value.code == "ADVISOR_PIPELINE_FILE_NOEXT"

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(PipelineConfigError):
            AdvisorPipelineConfig.load(path)

    def test_wrong_type(self, tmp_path):
        path = tmp_path / "other.json"
        path.write_text(json.dumps({"__type__": "Something", "pipelines": []}))
        with pytest.raises(PipelineConfigError):
            AdvisorPipelineConfig.load(path)

    def test_invalid_items(self, tmp_path):
        path = write_config(tmp_path / "p.json", [{"advisors": []}])
        with pytest.raises(PipelineConfigError):
            AdvisorPipelineConfig.load(path)

    def test_to_json(self, tmp_path):
        pipelines = [{"tag": "make", "advisors": [{"__type__": "A"}]}]
        config = AdvisorPipelineConfig.load(write_config(tmp_path / "p.json", pipelines))
        assert config.to_json() == {"__type__": "AdvisorPipelineConfig", "pipelines": pipelines}

    def test_packaged_default_uses_only_builtin_advisors(self):
        registry = AdvisorRegistry()
        register_all(registry)

        config = AdvisorPipelineConfig.load(DEFAULT_PIPELINES_PATH)

        assert config.item_for_tag("pre-build") is not None
        for item in config.pipelines:
            for ref in item.advisors:
                assert registry.has(ref.type), ref.type


class TestAdvisorPipelineFactory:
    def _factory(self, pipelines):
        registry = AdvisorRegistry()
        registry.register("A", lambda: RecordingAdvisor("A"))
        registry.register("B", lambda: RecordingAdvisor("B"))
        config = AdvisorPipelineConfig.model_validate({"pipelines": pipelines})
        return AdvisorPipelineFactory(config, registry)

    def test_pipelines_in_tag_order(self):
        factory = self._factory([
            {"tag": "x", "advisors": [{"__type__": "A"}]},
            {"tag": "y", "advisors": [{"__type__": "B"}, {"__type__": "A"}]},
        ])

        pipelines = factory.create_pipelines(["y", "x"])

        assert [p.tag for p in pipelines] == ["y", "x"]
        assert [a.type for a in pipelines[0].advisors] == ["B", "A"]

    def test_single_tag_string(self):
        factory = self._factory([{"tag": "x", "advisors": [{"__type__": "A"}]}])
        assert [p.tag for p in factory.create_pipelines("x")] == ["x"]

    def test_empty_and_unknown_tags_skipped(self):
        factory = self._factory([{"tag": "empty", "advisors": []}])
        assert factory.create_pipelines(["empty", "unknown"]) == []

    def test_unknown_advisor_skipped(self):
        factory = self._factory([
            {"tag": "x", "advisors": [{"__type__": "Ghost"}, {"__type__": "A"}]},
        ])
        assert [a.type for a in factory.create_pipelines("x")[0].advisors] == ["A"]

    def test_fresh_advisors_per_call(self):
        factory = self._factory([{"tag": "x", "advisors": [{"__type__": "A"}]}])
        first = factory.create_pipelines("x")[0].advisors[0]
        second = factory.create_pipelines("x")[0].advisors[0]
        assert first is not second
