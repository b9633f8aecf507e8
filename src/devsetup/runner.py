# runner.py
from __future__ import annotations

import runpy
import tempfile
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from .actions import executor_for, failure_kind
from .errors import ProvisionError, UnknownStepError
from .model import (
    FAILED,
    SUCCEEDED,
    Action,
    ExecutionContext,
    PipelineResult,
    Step,
    StepResult,
)
from .ui.console import Console, get_console


# ----------------------------------------------------------------------
# Plan loading (local file)
# ----------------------------------------------------------------------

def load_plan(path: str | Path) -> List[Step]:
    """
    Load a custom plan from a python file path.

    The file must define either:
      - plan() -> List[Step]
      - STEPS = [Step, ...]
    """
    plan_path = Path(path).expanduser().resolve()
    if not plan_path.exists():
        raise FileNotFoundError(f"Plan file not found: {plan_path}")
    if plan_path.suffix != ".py":
        raise ValueError(f"Plan must be a .py file, got: {plan_path.name}")

    globals_dict = runpy.run_path(str(plan_path), run_name=f"devsetup_plan_{plan_path.stem}")

    steps = None
    if "plan" in globals_dict and callable(globals_dict["plan"]):
        steps = globals_dict["plan"]()
    elif "STEPS" in globals_dict:
        steps = globals_dict["STEPS"]

    if not isinstance(steps, list) or not all(isinstance(s, Step) for s in steps):
        raise TypeError(
            "Plan must return/define a List[Step]. "
            "Define plan() -> List[Step] or STEPS = [Step, ...]."
        )
    return steps


# ----------------------------------------------------------------------
# Selection
# ----------------------------------------------------------------------

def select_steps(steps: Sequence[Step], selector: Optional[str] = None) -> List[Step]:
    """Validate names and return the steps to run, in declaration order."""
    seen: Dict[str, Step] = {}
    for s in steps:
        if s.name in seen:
            raise ValueError(f"Duplicate step name: {s.name}")
        seen[s.name] = s

    if selector is None:
        return list(steps)
    if selector not in seen:
        raise UnknownStepError(
            message=f"unknown step '{selector}'",
            details={"known": ", ".join(seen)},
        )
    return [seen[selector]]


# ----------------------------------------------------------------------
# Execution primitives
# ----------------------------------------------------------------------

def _run_action(action: Action, ctx: ExecutionContext, scratch: Path) -> None:
    executor = executor_for(action)
    try:
        executor(action, ctx, scratch)
    except ProvisionError:
        raise
    except (OSError, ValueError) as e:
        raise failure_kind(action)(
            message=f"{action.describe()} failed: {e}",
            details={"action": action.kind, "error_type": type(e).__name__},
        ) from e


def _run_step(step: Step, ctx: ExecutionContext, console: Console) -> StepResult:
    """
    Run every action of `step` in order inside a private scratch dir.

    The scratch dir holds downloads and is removed on every exit path,
    including KeyboardInterrupt.
    """
    console.print_step_start(step.name)
    with tempfile.TemporaryDirectory(prefix=f"devsetup-{step.name}-") as tmp:
        scratch = Path(tmp)
        for action in step.actions:
            console.print_action(action.describe())
            try:
                _run_action(action, ctx, scratch)
            except ProvisionError as e:
                if e.step is None:
                    e.step = step.name
                return StepResult(name=step.name, status=FAILED, reason=e.message, error=e)

    console.print_success(step.name)
    return StepResult(name=step.name, status=SUCCEEDED)


def _hint_for(error: ProvisionError) -> Optional[str]:
    hint = error.details.get("hint")
    return str(hint) if hint else None


# ----------------------------------------------------------------------
# Public API
# ----------------------------------------------------------------------

def run_pipeline(
    steps: Sequence[Step],
    ctx: ExecutionContext,
    selector: Optional[str] = None,
    *,
    console: Optional[Console] = None,
) -> PipelineResult:
    """
    Run `steps` (or only `selector`) in order, stopping at the first failure.

    Nothing that already happened is undone: packages stay installed and
    copied files stay in place. Steps after the failing one never start and
    have no entry in the result.
    """
    console = console or get_console()
    selected = select_steps(steps, selector)
    results: Dict[str, StepResult] = {}

    for step in selected:
        outcome = _run_step(step, ctx, console)
        results[step.name] = outcome
        if not outcome.ok:
            err = outcome.error
            console.print_failure(
                step.name,
                str(err) if err else (outcome.reason or ""),
                kind=err.kind if err else None,
                hint=_hint_for(err) if err else None,
            )
            return PipelineResult(
                status=FAILED,
                results=results,
                failed_step=step.name,
                reason=outcome.reason,
            )

    return PipelineResult(status=SUCCEEDED, results=results)
