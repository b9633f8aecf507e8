# cli.py
from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Optional

import click

from devsetup import config
from devsetup.errors import UnknownStepError
from devsetup.model import Step
from devsetup.plans import PLANS, detect_distro, get_plan
from devsetup.runner import load_plan, run_pipeline, select_steps
from devsetup.ui.console import Console, get_console, set_console

EXIT_FAILED = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130


def resolve_distro(distro_arg: Optional[str]) -> str:
    """
    Pick the target distribution from --distro, DEVSETUP_DISTRO or
    /etc/os-release, in that order.

    Raises:
        SystemExit: If no supported distribution can be determined
    """
    console = get_console()
    distro = distro_arg or config.DISTRO or detect_distro()
    if distro is None:
        console.print_error(
            "Unsupported distribution",
            "Could not detect a supported distribution from /etc/os-release.",
            details=[f"Supported: {', '.join(PLANS)}"],
            suggestion="Specify one explicitly:\n  devsetup run --distro ubuntu",
        )
        sys.exit(EXIT_USAGE)
    if distro not in PLANS:
        console.print_error(
            "Unknown distribution",
            f"No plan for '{distro}'.",
            details=[f"Supported: {', '.join(PLANS)}"],
        )
        sys.exit(EXIT_USAGE)
    return distro


def resolve_steps(distro: str, plan_file: Optional[str]) -> List[Step]:
    console = get_console()
    if not plan_file:
        return get_plan(distro)
    try:
        return load_plan(plan_file)
    except Exception as e:
        console.print_error(
            "Failed to load plan",
            f"Could not load plan from {plan_file}",
            details=[f"{type(e).__name__}: {e}"],
        )
        sys.exit(EXIT_USAGE)


@click.group()
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Enable debug mode (show stack traces and detailed output)",
)
@click.pass_context
def cli(ctx, debug):
    """devsetup: provision a Linux developer workstation."""
    console = Console(debug=debug)
    set_console(console)
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug


@cli.command()
@click.option("--distro", type=click.Choice(sorted(PLANS)), default=None, help="Target distribution (auto-detected if omitted)")
@click.option("--dist-root", default=None, type=click.Path(file_okay=False), help="Directory with the bundled dotfiles (env: DIST_ROOT)")
@click.option("--home", default=None, type=click.Path(file_okay=False), help="Home directory to provision (defaults to $HOME)")
@click.option("--only", "only", default=None, metavar="STEP", help="Run a single named step")
@click.option("--neovim", is_flag=True, default=False, help="Shorthand for --only neovim")
@click.option("--plan", "plan_file", default=None, help="Custom plan file (.py defining plan() or STEPS)")
@click.option("--sudo/--no-sudo", default=None, help="Prefix privileged commands with sudo (default: when not root)")
@click.pass_context
def run(ctx, distro, dist_root, home, only, neovim, plan_file, sudo):
    """Run the provisioning steps in order, stopping at the first failure."""
    console = get_console()

    if neovim:
        if only and only != "neovim":
            raise click.UsageError("--neovim cannot be combined with --only")
        only = "neovim"

    distro = resolve_distro(distro)
    steps = resolve_steps(distro, plan_file)
    try:
        exec_ctx = config.build_context(distro, dist_root=dist_root, home=home, use_sudo=sudo)
    except ValueError as e:
        console.print_error("Invalid configuration", str(e))
        sys.exit(EXIT_USAGE)

    try:
        names = [s.name for s in select_steps(steps, only)]
    except UnknownStepError as e:
        console.print_error("Unknown step", e.message, details=[f"Known steps: {e.details.get('known', '')}"])
        sys.exit(EXIT_USAGE)
    except ValueError as e:
        console.print_error("Invalid plan", str(e))
        sys.exit(EXIT_USAGE)

    console.print_run_started(distro=distro, dist_root=str(exec_ctx.dist_root), steps=names)

    try:
        result = run_pipeline(steps, exec_ctx, only, console=console)
    except KeyboardInterrupt:
        console.print_info("\nSetup interrupted by user. Exiting...")
        sys.exit(EXIT_INTERRUPTED)
    except Exception as e:
        console.print_exception(e)
        sys.exit(EXIT_FAILED)

    console.print_results({name: r.status for name, r in result.results.items()})

    if not result.ok:
        console.print_info(f"\nSetup failed at step '{result.failed_step}'.")
        sys.exit(EXIT_FAILED)
    console.print_info("\nAll setups completed successfully!")


@cli.command(name="plan")
@click.option("--distro", type=click.Choice(sorted(PLANS)), default=None, help="Target distribution (auto-detected if omitted)")
@click.option("--plan", "plan_file", default=None, help="Custom plan file (.py defining plan() or STEPS)")
def show_plan(distro, plan_file):
    """Print the ordered steps and their actions without running them."""
    console = get_console()
    distro = resolve_distro(distro)
    steps = resolve_steps(distro, plan_file)

    source = Path(plan_file).name if plan_file else f"built-in {distro} plan"
    console.print_info(f"Plan: {source}")
    for s in steps:
        console.print_plan_step(s.name, [a.describe() for a in s.actions])


if __name__ == "__main__":
    cli()
