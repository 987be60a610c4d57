"""CLI entry point for wasm-advisor."""
import argparse
import json
import logging
import os
import sys
import traceback
from pathlib import Path

from dotenv import load_dotenv

from wasm_advisor.actions.exceptions import ActionError
from wasm_advisor.advisors.exceptions import AdvisorError
from wasm_advisor.constants import DEFAULT_PIPELINES_PATH, PIPELINES_ENV_VAR
from wasm_advisor.factory.exceptions import FactoryError
from wasm_advisor.orchestrator.exceptions import OrchestratorError
from wasm_advisor.project.exceptions import ProjectError

load_dotenv()

# Exit codes
EXIT_SUCCESS = 0
EXIT_INVALID_INPUT = 1
EXIT_ADVISOR_ERROR = 2
EXIT_ORCHESTRATOR_ERROR = 3
EXIT_INCOMPLETE = 4
EXIT_UNEXPECTED = 5
EXIT_KEYBOARD_INTERRUPT = 130

DEFAULT_ERROR_TAG = "native"
PREBUILD_TAG = "pre-build"


def build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--verbose", action="store_true", help="Enable verbose output")
    common.add_argument("--json", action="store_true", help="Output results as JSON")
    common.add_argument(
        "--pipelines",
        type=str,
        default="",
        help=f"Advisor pipeline file (default: ${PIPELINES_ENV_VAR} or the packaged one)",
    )

    parser = argparse.ArgumentParser(
        prog="wasm-advisor",
        description="Build native projects with emscripten and advise on porting issues",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    advise = sub.add_parser(
        "advise", parents=[common], help="Advise one build error, or run pre-build checks"
    )
    advise.add_argument("root", type=str, help="Path to the project root")
    advise.add_argument(
        "--tag",
        action="append",
        default=[],
        help=f"Pipeline tag(s) to route the request to (default: {DEFAULT_ERROR_TAG} "
        f"for errors, {PREBUILD_TAG} otherwise)",
    )
    source = advise.add_mutually_exclusive_group()
    source.add_argument("--error", type=str, default="", help="Build error text")
    source.add_argument("--error-file", type=str, default="", help="File holding the build error")

    build = sub.add_parser("build", parents=[common], help="Run the build steps and advise")
    build.add_argument("root", type=str, help="Path to the project root")
    build.add_argument(
        "--auto-apply", action="store_true", help="Apply the resulting recipes right away"
    )

    apply = sub.add_parser("apply", parents=[common], help="Apply the persisted recipes")
    apply.add_argument("root", type=str, help="Path to the project root")
    apply.add_argument(
        "--index", type=int, default=None, help="Apply only the recipe at this index"
    )
    return parser


def validate_project_root(raw_path: str) -> str:
    """Validate and resolve the project root.

    Raises:
        SystemExit: If path is not a valid directory.
    """
    resolved = Path(raw_path).resolve()
    if not resolved.is_dir():
        print(f"Error: '{raw_path}' is not a valid directory.", file=sys.stderr)
        raise SystemExit(EXIT_INVALID_INPUT)
    return str(resolved)


def resolve_pipelines_path(cli_value: str) -> Path:
    return Path(cli_value or os.getenv(PIPELINES_ENV_VAR) or DEFAULT_PIPELINES_PATH)


def create_session(root: str, pipelines_path: Path) -> dict:
    """Wire a project to its registries, advise manager and recipe store.

    Returns:
        Dict with keys: project, registries, manager, store.
    """
    from wasm_advisor.advisors.manager import AdviseManager
    from wasm_advisor.advisors.pipeline import AdvisorPipelineConfig, AdvisorPipelineFactory
    from wasm_advisor.project import Project, ProjectRecipeStore
    from wasm_advisor.registries import default_registries

    registries = default_registries()
    pipeline_config = AdvisorPipelineConfig.load(pipelines_path)
    project = Project(root)
    manager = AdviseManager(
        project,
        AdvisorPipelineFactory(pipeline_config, registries.advisors),
        registries.advisors,
    )
    return {
        "project": project,
        "registries": registries,
        "manager": manager,
        "store": ProjectRecipeStore(project, registries),
    }


def print_recipes_human(recipes: list) -> None:
    """Print recipes in human-readable format."""
    print(f"\n{'='*60}")
    print(f"Recipes ({len(recipes)})")
    print(f"{'='*60}")
    for i, recipe in enumerate(recipes):
        advisor = "" if recipe.show_no_advisor else f" [{recipe.advisor.type}]"
        print(f"\n[{i}] {recipe.desc}{advisor}")
        for action in recipe.actions:
            print(f"  - {action.type}: {action.desc}")
    print(f"\n{'='*60}")


def format_recipes_json(recipes: list) -> str:
    return json.dumps([r.to_json() for r in recipes], indent=2, default=str)


def format_result_json(result: dict) -> str:
    """Serialize a session result, with recipes in their persisted JSON form."""
    prepared = dict(result)
    prepared["recipes"] = [r.to_json() for r in result.get("recipes", [])]
    return json.dumps(prepared, indent=2, default=str)


def print_result_human(result: dict) -> None:
    """Print a session result in human-readable format."""
    failed_step = result.get("failed_step")
    if failed_step is None:
        print("\nBuild finished without a failing build step.")
    else:
        print(f"\nBuild step {failed_step} failed.")

    print_recipes_human(result.get("recipes", []))

    applied = result.get("applied", [])
    if applied:
        print(f"\nApplied ({len(applied)}):")
        for desc in applied:
            print(f"  - {desc}")

    errors = result.get("errors", [])
    if errors:
        print(f"\nErrors ({len(errors)}):")
        for err in errors:
            print(f"  - {err}")


def determine_exit_code(result: dict) -> int:
    """Determine the exit code from a session result."""
    if result.get("errors") or result.get("failed_step") is not None:
        return EXIT_INCOMPLETE
    return EXIT_SUCCESS


def _read_error_text(args: argparse.Namespace) -> str:
    if args.error_file:
        return Path(args.error_file).read_text(encoding="utf-8")
    return args.error


def run_advise(args: argparse.Namespace, root: str) -> int:
    from wasm_advisor.requests.common import ErrorAdviseRequest, PlainAdviseRequest

    session = create_session(root, resolve_pipelines_path(args.pipelines))
    error = _read_error_text(args)
    if error:
        request = ErrorAdviseRequest(tags=args.tag or [DEFAULT_ERROR_TAG], error=error)
    else:
        request = PlainAdviseRequest(tags=args.tag or [PREBUILD_TAG], plain_data={})

    manager = session["manager"]
    manager.queue_request(request)
    recipes = manager.advise()
    session["store"].save(recipes)

    if args.json:
        print(format_recipes_json(recipes))
    else:
        print_recipes_human(recipes)
    return EXIT_SUCCESS


def run_build(args: argparse.Namespace, root: str) -> int:
    from wasm_advisor.orchestrator.graph import build_session_graph
    from wasm_advisor.orchestrator.state import make_initial_state

    session = create_session(root, resolve_pipelines_path(args.pipelines))
    graph = build_session_graph(session["manager"], session["store"])
    result = graph.invoke(make_initial_state(root, auto_apply=args.auto_apply))

    if args.json:
        print(format_result_json(result))
    else:
        print_result_human(result)
    return determine_exit_code(result)


def run_apply(args: argparse.Namespace, root: str) -> int:
    session = create_session(root, resolve_pipelines_path(args.pipelines))
    # Loaded actions bind to the current session managers
    session["project"].new_session()
    recipes = session["store"].load()
    if args.index is not None:
        if not 0 <= args.index < len(recipes):
            print(f"Error: no recipe at index {args.index} ({len(recipes)} saved).", file=sys.stderr)
            return EXIT_INVALID_INPUT
        recipes = [recipes[args.index]]

    failed = [r.desc for r in recipes if not r.apply()]

    if args.json:
        print(json.dumps({"applied": len(recipes) - len(failed), "failed": failed}, indent=2))
    else:
        print(f"\nApplied {len(recipes) - len(failed)} of {len(recipes)} recipe(s).")
        for desc in failed:
            print(f"  - not applied: {desc}")
    return EXIT_INCOMPLETE if failed else EXIT_SUCCESS


COMMANDS = {
    "advise": run_advise,
    "build": run_build,
    "apply": run_apply,
}


def _handle_error(label: str, exc: BaseException, verbose: bool, exit_code: int) -> int:
    """Print error message to stderr and return the exit code."""
    print(f"{label}: {exc}", file=sys.stderr)
    if verbose:
        traceback.print_exc(file=sys.stderr)
    return exit_code


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:]).

    Returns:
        Exit code integer.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        root = validate_project_root(args.root)
    except SystemExit as exc:
        return exc.code

    try:
        return COMMANDS[args.command](args, root)

    except (AdvisorError, FactoryError, ProjectError, ActionError) as exc:
        return _handle_error("Advisor error", exc, args.verbose, EXIT_ADVISOR_ERROR)

    except OrchestratorError as exc:
        return _handle_error("Orchestrator error", exc, args.verbose, EXIT_ORCHESTRATOR_ERROR)

    except OSError as exc:
        return _handle_error("Invalid input", exc, args.verbose, EXIT_INVALID_INPUT)

    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_KEYBOARD_INTERRUPT

    except Exception as exc:
        return _handle_error("Unexpected error", exc, args.verbose, EXIT_UNEXPECTED)


def main_entry() -> None:
    sys.exit(main())
