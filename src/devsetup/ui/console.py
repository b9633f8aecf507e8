"""Console output formatting utilities for devsetup."""

from __future__ import annotations

import sys
from typing import Optional

RULE = "=" * 80


class Console:
    """Centralized console output formatting."""

    def __init__(self, debug: bool = False):
        """
        Initialize console formatter.

        Args:
            debug: If True, show detailed output including stack traces
        """
        self.debug = debug

    def print_run_started(
        self,
        distro: str,
        dist_root: str,
        steps: list[str],
    ) -> None:
        """Print run start information."""
        print("\nSETUP STARTED")
        print(f"Distribution: {distro}")
        print(f"Dist root: {dist_root}")
        print(f"Steps: {', '.join(steps)}")

    def print_step_start(self, name: str) -> None:
        """Print step header."""
        print(f"\n{name.upper()}")
        print(RULE)

    def print_action(self, description: str) -> None:
        """Print one action line under the current step."""
        print(f"  - {description}")

    def print_success(self, name: str) -> None:
        """Print success message."""
        print(f"STATUS: {name} setup completed")

    def print_failure(
        self,
        name: str,
        reason: str,
        kind: Optional[str] = None,
        hint: Optional[str] = None,
    ) -> None:
        """
        Print failure message for a step.

        Args:
            name: Step name
            reason: Failure reason (full text; first line only without --debug)
            kind: Optional error kind (e.g. PackageInstallFailed)
            hint: Optional hint for user
        """
        print(f"STEP FAILED: {name}")
        if kind:
            print(f"Kind: {kind}")
        if hint:
            print(f"Hint: {hint}")
        if self.debug:
            print(f"Error details: {reason}")
        else:
            error_line = reason.split("\n")[0] if reason else "Unknown error"
            print(f"Error: {error_line}")

    def print_plan_step(self, name: str, actions: list[str]) -> None:
        """
        Print a planned step and its actions without running anything.

        Args:
            name: Step name
            actions: Human-readable action descriptions, in execution order
        """
        print(f"  {name}")
        for a in actions:
            print(f"      {a}")

    def print_results(self, results: dict[str, str]) -> None:
        """Print final results summary."""
        print("\n" + "=" * 40)
        print("RESULTS")
        print("=" * 40)
        for step, status in results.items():
            print(f"  {step}: {status.upper()}")

    def print_error(
        self,
        title: str,
        message: str,
        details: Optional[list[str]] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        """
        Print structured error message.

        Args:
            title: Error title
            message: Main error message
            details: Optional list of detail lines
            suggestion: Optional suggestion for user
        """
        print(f"\nERROR: {title}", file=sys.stderr)
        print(f"{message}", file=sys.stderr)
        if details:
            for detail in details:
                print(f"  {detail}", file=sys.stderr)
        if suggestion:
            print(f"\n{suggestion}", file=sys.stderr)

    def print_exception(self, exc: BaseException) -> None:
        """Print exception, with full traceback only in debug mode."""
        if self.debug:
            import traceback
            traceback.print_exception(type(exc), exc, exc.__traceback__)
        else:
            print(f"Error: {exc}", file=sys.stderr)

    def print_warning(self, message: str) -> None:
        """Print a non-fatal warning; the step keeps going."""
        print(f"WARNING: {message}")

    def print_info(self, message: str) -> None:
        """Print informational message."""
        print(message)

    def print_debug(self, message: str) -> None:
        """Print debug message (only if debug mode enabled)."""
        if self.debug:
            print(f"[DEBUG] {message}", file=sys.stderr)


# Global console instance (will be initialized by CLI)
_console: Optional[Console] = None


def get_console() -> Console:
    """Get the global console instance."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def set_console(console: Console) -> None:
    """Set the global console instance."""
    global _console
    _console = console
