"""Argument string updates and the builder-args action built on them."""

from __future__ import annotations

import shlex
from typing import TYPE_CHECKING, Any, Iterable

from wasm_advisor.factory.json_factory import TYPE_KEY, JsonFactories, check_json_type
from wasm_advisor.models.config import ArgUpdateType, BuildArg

if TYPE_CHECKING:
    from wasm_advisor.project.project import Project


def as_build_args(args: BuildArg | dict | Iterable[BuildArg | dict]) -> list[BuildArg]:
    if isinstance(args, (BuildArg, dict)):
        args = [args]
    return [a if isinstance(a, BuildArg) else BuildArg.model_validate(a) for a in args]


def update_args(original: str, new_args: BuildArg | dict | Iterable[BuildArg | dict]) -> str:
    """Fold ``new_args`` into a shell-style argument string.

    Args:
        original: Existing arguments, e.g. ``"-O2 -msse2"``.
        new_args: One or more BuildArg changes applied in order.

    Returns:
        The updated argument string, shell-joined.
    """
    tokens = shlex.split(original or "")
    for arg in as_build_args(new_args):
        arg_set = False
        for i, token in enumerate(tokens):
            if arg.option not in token:
                continue
            if arg.type == ArgUpdateType.MERGE:
                if arg.value and arg.value not in token:
                    tokens[i] = f"{token} {arg.value}"
                arg_set = True
                break
            if arg.type == ArgUpdateType.REPLACE:
                tokens[i] = f"{arg.option}={arg.value}" if arg.value else arg.option
                arg_set = True
                break
            if arg.type == ArgUpdateType.DELETE:
                tokens[i] = token.replace(arg.value, "", 1) if arg.value else ""
                break
            # deleteAll keeps scanning so every matching token goes
            tokens[i] = ""
        if not arg_set and arg.type not in (ArgUpdateType.DELETE, ArgUpdateType.DELETE_ALL):
            tokens.append(f"{arg.option}={arg.value}" if arg.value else arg.option)
    return shlex.join(t for t in tokens if t)


class BuilderArgsChangeAction:
    """Update the argument string of one build step."""

    TYPE = "BuilderArgsChange"

    def __init__(
        self,
        project: Project,
        desc: str,
        args: list[BuildArg],
        builder_id: int,
    ) -> None:
        self.project = project
        self.desc = desc
        self.args = as_build_args(args)
        self.builder_id = builder_id

    @property
    def type(self) -> str:
        return self.TYPE

    def apply(self) -> bool:
        builders = [step.model_copy() for step in self.project.config.builders]
        if not builders:
            return False
        for step in builders:
            if step.id == self.builder_id:
                # computed at apply time so earlier recipes in the batch are honoured
                new_args = update_args(step.args, self.args)
                if new_args == step.args:
                    return True
                step.args = new_args
                break
        self.project.update_build_config(builders=builders)
        return True

    def to_json(self) -> dict[str, Any]:
        return {
            TYPE_KEY: self.TYPE,
            "desc": self.desc,
            "args": [a.model_dump(mode="json") for a in self.args],
            "builderID": self.builder_id,
        }

    @classmethod
    def from_json(cls, project: Project, o: dict[str, Any]) -> BuilderArgsChangeAction:
        check_json_type(cls.TYPE, o)
        return cls(
            project,
            o.get("desc", ""),
            o.get("args", []),
            o["builderID"],
        )


def register(factories: JsonFactories) -> None:
    factories.register(BuilderArgsChangeAction.TYPE, BuilderArgsChangeAction.from_json)
