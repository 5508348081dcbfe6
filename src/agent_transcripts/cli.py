"""CLI entry points: show, export, annotations, plans, status."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click

from .config import Config
from .load import load_all_transcripts, load_annotations, load_plans, load_transcript
from .transcripts import Tool
from .view import annotate, filter_messages

TOOL_CHOICE = click.Choice([tool.value for tool in Tool])


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory holding transcripts/, annotations/ and plans/",
)
@click.option("--verbose", "-v", is_flag=True, help="Log skipped records and file problems")
@click.pass_context
def cli(ctx: click.Context, data_dir: Path | None, verbose: bool) -> None:
    """Agent Transcripts: normalize Claude Code and Codex session logs."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    config = Config()
    if data_dir is not None:
        config.data_dir = data_dir
    ctx.obj["config"] = config


@cli.command()
@click.argument("phase")
@click.argument("tool", type=TOOL_CHOICE)
@click.option("--thinking", is_flag=True, help="Include thinking and meta-commentary")
@click.option("--tools", "show_tools", is_flag=True, help="Include tool calls")
@click.option("--raw", is_flag=True, help="Print tool input/arguments under each tool call")
@click.pass_context
def show(ctx: click.Context, phase: str, tool: str, thinking: bool, show_tools: bool, raw: bool) -> None:
    """Print one transcript, with annotations inline."""
    config = ctx.obj["config"]
    transcript = load_transcript(phase, tool, config)

    if not transcript.messages:
        click.echo(f"No {transcript.tool} transcript for phase '{phase}'.")
        return

    click.echo(f"{transcript.tool} ({transcript.model or 'unknown model'})")
    visible = filter_messages(transcript.messages, show_thinking=thinking, show_tools=show_tools)
    for message, annotation in annotate(visible, load_annotations(phase, config), tool):
        click.echo(f"\n[{message.original_index}] {message.role.upper()}")
        for line in message.content.splitlines():
            click.echo(f"  {line}")
        if raw and message.raw:
            click.echo(f"  --- {message.raw_label or 'Details'} ---")
            for line in message.raw.splitlines():
                click.echo(f"  {line}")
        if annotation:
            click.echo(f"  ✦ {annotation.content}")

    hidden = len(transcript.messages) - len(visible)
    if hidden:
        click.echo(f"\n({hidden} message(s) hidden; use --thinking / --tools to show)")


@cli.command()
@click.option("--phase", "phases", multiple=True, help="Phase to export (repeatable; default: all configured)")
@click.option("--indent", type=int, default=2, help="JSON indent (0 for compact)")
@click.pass_context
def export(ctx: click.Context, phases: tuple[str, ...], indent: int) -> None:
    """Write transcripts, annotations and plans as JSON for the rendering layer."""
    config = ctx.obj["config"]
    if phases:
        config.phases = phases

    output = {
        "transcripts": {key: t.to_dict() for key, t in load_all_transcripts(config).items()},
        "annotations": {
            phase: [a.to_dict() for a in load_annotations(phase, config)] for phase in config.phases
        },
        "plans": load_plans(config),
    }
    click.echo(json.dumps(output, indent=indent or None, ensure_ascii=False))


@cli.command()
@click.argument("phase")
@click.option("--json", "as_json", is_flag=True, help="Output annotations as JSON")
@click.pass_context
def annotations(ctx: click.Context, phase: str, as_json: bool) -> None:
    """List the annotations recorded for a phase."""
    config = ctx.obj["config"]
    found = load_annotations(phase, config)

    if as_json:
        click.echo(json.dumps([a.to_dict() for a in found], indent=2, ensure_ascii=False))
    elif found:
        for a in found:
            highlight = f" ({a.highlight})" if a.highlight else ""
            click.echo(f"[{a.tool} #{a.message_index}]{highlight} {a.content}")
    else:
        click.echo(f"No annotations for phase '{phase}'.")


@cli.command()
@click.option("--tool", type=TOOL_CHOICE, help="Only print this tool's plan")
@click.pass_context
def plans(ctx: click.Context, tool: str | None) -> None:
    """Print the plan documents."""
    config = ctx.obj["config"]
    loaded = load_plans(config)

    for name in [tool] if tool else list(loaded):
        click.echo(f"=== {Tool(name).display_name} plan ===")
        click.echo(loaded[name] or "(no plan)")


@cli.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show the data directory and what each phase has on disk."""
    config = ctx.obj["config"]

    click.echo("Agent Transcripts Status")
    click.echo("=" * 40)
    click.echo(f"\nData dir: {config.data_dir}")
    click.echo(f"  Exists: {config.data_dir.exists()}")

    for phase in config.phases:
        click.echo(f"\n{phase}:")
        for tool in Tool:
            path = config.transcript_path(phase, tool)
            if path.exists():
                transcript = load_transcript(phase, tool, config)
                click.echo(f"  {tool.value}: {len(transcript.messages)} message(s), model {transcript.model or '-'}")
            else:
                click.echo(f"  {tool.value}: no transcript")
        click.echo(f"  annotations: {len(load_annotations(phase, config))}")

    for tool in Tool:
        path = config.plan_path(tool)
        click.echo(f"\n{tool.value} plan: {'present' if path.exists() else 'missing'}")
