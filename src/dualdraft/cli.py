"""
DualDraft Command Line Interface.

This module provides the CLI entry point for the two-agent refinement engine.
"""

import asyncio
import logging
import sys
from pathlib import Path

import click
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from dualdraft.agents import AGENT_PROFILES, PRINCIPLES, TemplateHooks
from dualdraft.alignment import TextAligner, alignment_ratio
from dualdraft.config import (
    ConfigurationError,
    DualDraftConfig,
    EngineConfig,
    LoggingConfig,
    LogLevel,
    load_config,
    load_config_from_env,
)
from dualdraft.exceptions import GenerationFailure
from dualdraft.models import EXAMPLE_REQUEST, AlignmentKind, Request, RunResult, RunState
from dualdraft.orchestrator import EnginePhase, OrchestrationEngine
from dualdraft.synthesis import KNOWN_RISKS, USAGE_TIPS
from dualdraft.version import __version__

console = Console()


def run_async(coro):
    """Run an async coroutine in a new event loop."""
    return asyncio.run(coro)


def _configure_logging(logging_config: LoggingConfig, verbose: bool) -> None:
    """Configure package logging from config, raised to INFO by --verbose."""
    level = getattr(logging, logging_config.level.value)
    if verbose and level > logging.INFO:
        level = logging.INFO

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if logging_config.file:
        handlers.append(logging.FileHandler(logging_config.file))

    logging.basicConfig(
        level=level,
        format=logging_config.format,
        handlers=handlers,
        force=True,
    )
    logging.getLogger("dualdraft").setLevel(level)


def _load_configuration(config_path: str | None) -> DualDraftConfig:
    """Load configuration from an explicit path or by discovery."""
    if config_path:
        return load_config(config_path)
    return load_config_from_env()


@click.group()
@click.version_option(version=__version__, prog_name="dualdraft")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """DualDraft: Two-Agent Iterative Refinement.

    Two agents draft, critique each other and improve until their merged
    output converges, then a final document is synthesized.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


@main.command()
@click.option("--purpose", "-p", type=str, default=None, help="Purpose of the deliverable")
@click.option(
    "--format", "-f", "output_format", type=str, default=None, help="Desired output format"
)
@click.option("--domain", type=str, default=None, help="Domain focus (default: Any)")
@click.option("--constraints", type=str, default=None, help="Constraints (default: None)")
@click.option("--example", is_flag=True, help="Use the built-in example request")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to configuration file",
)
@click.option(
    "--max-rounds",
    type=click.IntRange(1, 20),
    default=None,
    help="Maximum refinement rounds (default: 3)",
)
@click.option(
    "--threshold",
    type=click.IntRange(0, 100),
    default=None,
    help="Convergence score that stops iteration (default: 88)",
)
@click.option("--parallel", is_flag=True, help="Run both agents concurrently")
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Per-round timeout in seconds",
)
@click.option("--json", "json_output", is_flag=True, help="Print the run result as JSON")
@click.option("--verbose", "-v", is_flag=True, help="Show per-round progress and logs")
@click.pass_context
def run(
    ctx: click.Context,
    purpose: str | None,
    output_format: str | None,
    domain: str | None,
    constraints: str | None,
    example: bool,
    config_path: str | None,
    max_rounds: int | None,
    threshold: int | None,
    parallel: bool,
    timeout: float | None,
    json_output: bool,
    verbose: bool,
) -> None:
    """Run the refinement loop on a request."""
    verbose = verbose or ctx.obj.get("verbose", False)

    try:
        cfg = _load_configuration(config_path)
    except (ConfigurationError, FileNotFoundError) as e:
        console.print(f"[red]Configuration error:[/red] {escape(str(e))}")
        sys.exit(1)

    if cfg.debug:
        cfg.logging.level = LogLevel.DEBUG
    _configure_logging(cfg.logging, verbose)

    overrides = {
        "max_rounds": max_rounds,
        "convergence_threshold": threshold,
        "parallel_agents": parallel or None,
        "round_timeout_seconds": timeout,
    }
    engine_config = EngineConfig(
        **{
            **cfg.engine.model_dump(),
            **{key: value for key, value in overrides.items() if value is not None},
        }
    )

    request = _build_request(example, purpose, output_format, domain, constraints)

    if not json_output:
        _display_run_config(request, engine_config, config_path)

    engine = OrchestrationEngine(TemplateHooks(), engine_config)
    if verbose and not json_output:
        engine.on_progress(_print_progress)

    try:
        result = run_async(engine.run(request))
    except GenerationFailure as e:
        console.print(f"[red]Generation failed:[/red] {escape(str(e))}")
        if verbose:
            console.print_exception()
        sys.exit(1)

    if json_output:
        click.echo(result.model_dump_json(indent=2))
        return

    _display_result(result)


def _build_request(
    example: bool,
    purpose: str | None,
    output_format: str | None,
    domain: str | None,
    constraints: str | None,
) -> Request:
    """Build the request from CLI options, or return the example request."""
    if example:
        return EXAMPLE_REQUEST

    if not purpose or not output_format:
        raise click.UsageError("--purpose and --format are required unless --example is given")

    try:
        return Request(
            purpose=purpose,
            format=output_format,
            domain=domain,
            constraints=constraints,
        )
    except ValidationError as e:
        messages = "; ".join(
            f"{'.'.join(str(x) for x in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise click.UsageError(f"Invalid request: {messages}") from e


def _print_progress(phase: EnginePhase, state: RunState) -> None:
    """Progress callback printing one line per completed round."""
    if phase == EnginePhase.FAILED:
        console.print(f"[red]✗ Failed after {state.iteration_count} completed rounds[/red]")
    elif state.iteration_count == 0:
        console.print("[cyan]→ Running refinement rounds...[/cyan]")
    elif phase == EnginePhase.RUNNING:
        console.print(
            f"[dim]  Round {state.iteration_count} | "
            f"Convergence: {state.convergence_score}%[/dim]"
        )
    else:
        console.print(f"[green]✓ {phase.value.capitalize()}[/green]")


def _display_run_config(
    request: Request,
    engine_config: EngineConfig,
    config_path: str | None,
) -> None:
    """Show the banner and effective settings."""
    console.print(
        Panel(
            f"[bold blue]DualDraft v{__version__}[/bold blue]\n"
            "Two-Agent Iterative Refinement",
            title="DualDraft",
        )
    )

    config_table = Table(show_header=False, box=None)
    config_table.add_column("Setting", style="cyan")
    config_table.add_column("Value", style="green")
    config_table.add_row("Purpose", Text(request.purpose))
    config_table.add_row("Format", Text(request.format))
    config_table.add_row("Domain", Text(request.domain_text))
    config_table.add_row("Constraints", Text(request.constraints_text))
    config_table.add_row("Max Rounds", str(engine_config.max_rounds))
    config_table.add_row("Threshold", f"{engine_config.convergence_threshold}%")
    if engine_config.parallel_agents:
        config_table.add_row("Mode", "[yellow]Parallel agents[/yellow]")
    if engine_config.round_timeout_seconds:
        config_table.add_row("Round Timeout", f"{engine_config.round_timeout_seconds:g}s")
    if config_path:
        config_table.add_row("Config File", Text(config_path))
    console.print(config_table)
    console.print()


def _display_result(result: RunResult) -> None:
    """Render the rounds, state, diff and final output."""
    for record in result.history:
        drafts = Table(show_header=True, expand=True)
        drafts.add_column("Agent A Draft")
        drafts.add_column("Agent B Draft")
        drafts.add_row(Text(record.agent_a_draft), Text(record.agent_b_draft))
        drafts.add_row(Text(record.agent_a_critique), Text(record.agent_b_critique))
        improvements = "\n".join(f"• {item}" for item in record.improvements)
        console.print(
            Panel.fit(
                drafts,
                title=f"Round {record.round_number}",
                subtitle=f"convergence {record.convergence_score}%",
            )
        )
        console.print(Panel(Text(improvements), title="Concrete improvements", border_style="dim"))

    state = result.final_state
    state_table = Table(title="Run State", show_header=False)
    state_table.add_column("Field", style="cyan")
    state_table.add_column("Value", style="green")
    state_table.add_row("Intent", Text(state.intent))
    state_table.add_row("Iterations", str(state.iteration_count))
    state_table.add_row("Feedback", Text(state.last_feedback_note or "None"))
    state_table.add_row("Convergence", f"{state.convergence_score}%")
    state_table.add_row("Status", result.status.value)
    console.print(state_table)

    last = result.last_round
    aligner = TextAligner()
    tokens = aligner.align(last.agent_a_draft, last.agent_b_draft)
    console.print(
        Panel(
            aligner.to_rich_text(tokens),
            title="Agent A → Agent B",
            subtitle=f"word overlap {alignment_ratio(tokens):.0%}",
        )
    )

    console.print(Panel(Text(result.final_text), title="Final Prompt", border_style="green"))

    change_table = Table(title="Change Log")
    change_table.add_column("Before", style="red")
    change_table.add_column("After", style="green")
    change_table.add_column("Reason")
    for entry in result.change_log:
        change_table.add_row(Text(entry.before), Text(entry.after), Text(entry.reason))
    console.print(change_table)

    console.print("[bold]Risks[/bold]")
    for risk in KNOWN_RISKS:
        console.print(f"  • {risk}")
    console.print("[bold]Tips[/bold]")
    for tip in USAGE_TIPS:
        console.print(f"  • {tip}")


@main.command()
@click.argument("file_a", type=click.Path(exists=True, dir_okay=False))
@click.argument("file_b", type=click.Path(exists=True, dir_okay=False))
@click.option("--html", "as_html", is_flag=True, help="Print HTML markup instead of colours")
def diff(file_a: str, file_b: str, as_html: bool) -> None:
    """Show a word-level diff between two text files."""
    try:
        text_a = Path(file_a).read_text(encoding="utf-8")
        text_b = Path(file_b).read_text(encoding="utf-8")
    except (UnicodeDecodeError, OSError) as e:
        console.print(f"[red]Cannot read input:[/red] {escape(str(e))}")
        sys.exit(1)

    aligner = TextAligner()
    tokens = aligner.align(text_a, text_b)

    if as_html:
        click.echo(aligner.to_html(tokens))
        return

    console.print(aligner.to_rich_text(tokens))
    console.print()

    added = sum(1 for t in tokens if t.kind == AlignmentKind.ADDED and not t.value.isspace())
    removed = sum(1 for t in tokens if t.kind == AlignmentKind.REMOVED and not t.value.isspace())
    console.print(
        f"[green]+{added}[/green] [red]-{removed}[/red] "
        f"[dim]word overlap {alignment_ratio(tokens):.1%}[/dim]"
    )


@main.command()
def templates() -> None:
    """Show the agent role templates and critique principles."""
    for profile in AGENT_PROFILES:
        console.print(Panel(Text(profile.body), title=profile.title))

    console.print("[bold]Principles[/bold]")
    for principle in PRINCIPLES:
        console.print(f"  • {principle}")


if __name__ == "__main__":
    main()
