"""
Portfolio CLI: run the demos backend and the offline analyzers from a terminal.
"""
import json
import sys
from pathlib import Path

import click
from rich.panel import Panel
from rich.table import Table

from .analytics import PERIODS, build_analytics
from .config import DEMOS, PROJECT_ROOT, ConfigError, console, load_config
from .cpp_tools import run_cpp_action
from .resume_analyzer import analyze_resume_file

SEVERITY_STYLES = {"error": "red", "warning": "yellow", "info": "cyan", "hint": "magenta"}


def _load(config_path):
    try:
        return load_config(config_path)
    except ConfigError as e:
        raise click.ClickException(str(e))


@click.group()
def cli():
    """Portfolio demos backend: API server and offline analyzers."""
    pass


@cli.command(name="serve")
@click.option("--host", default="127.0.0.1", show_default=True, help="Interface to bind")
@click.option("--port", default=5000, show_default=True, type=int, help="Port to listen on")
@click.option("--debug", is_flag=True, help="Enable the Flask debugger and reloader")
@click.option("--config", "-c", "config_path", type=click.Path(exists=True), help="Path to a JSON config file")
def serve(host, port, debug, config_path):
    """Run the JSON API server"""
    from .app import create_app

    app = create_app(_load(config_path))
    console.print(f"[cyan]Serving {len(DEMOS)} demos on http://{host}:{port}/api[/cyan]")
    app.run(host=host, port=port, debug=debug)


@cli.command(name="cpp")
@click.argument("action", type=click.Choice(["format", "lint", "analyze"]))
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Print raw JSON")
def cpp(action, file, as_json):
    """Format, lint or analyze a C++ source file"""
    code = Path(file).read_text(encoding="utf-8")
    if not code.strip():
        raise click.ClickException("File is empty")

    result = run_cpp_action(action, code, compile_delay=0)

    if as_json:
        click.echo(json.dumps(result, indent=2, ensure_ascii=False))
        return

    if action == "format":
        console.print(result["formatted"], markup=False, highlight=False)
        console.print(f"[green]{result['message']}[/green]")
    elif action == "lint":
        _print_diagnostics(result["diagnostics"], result["summary"])
    else:
        _print_analysis(result["analysis"])


def _print_diagnostics(diagnostics, summary):
    if not diagnostics:
        console.print("[green]No issues found.[/green]")
        return

    table = Table(title="Diagnostics")
    table.add_column("Line", style="cyan", justify="right")
    table.add_column("Col", style="cyan", justify="right")
    table.add_column("Severity")
    table.add_column("Code", style="magenta")
    table.add_column("Message")
    for d in diagnostics:
        style = SEVERITY_STYLES.get(d["severity"], "white")
        table.add_row(str(d["line"]), str(d["column"]), f"[{style}]{d['severity']}[/{style}]", d["code"], d["message"])
    console.print(table)
    console.print(", ".join(f"{count} {name}" for name, count in summary.items()))


def _print_analysis(analysis):
    complexity = analysis["complexity"]
    performance = analysis["performance"]
    style = analysis["style"]

    console.print(Panel.fit(
        f"[cyan]Cyclomatic:[/cyan] {complexity['cyclomatic']}\n"
        f"[cyan]Cognitive:[/cyan] {complexity['cognitive']}\n"
        f"[cyan]Lines of code:[/cyan] {complexity['linesOfCode']}\n"
        f"[cyan]Functions:[/cyan] {complexity['functions']}  [cyan]Classes:[/cyan] {complexity['classes']}\n"
        f"[cyan]Estimated:[/cyan] {performance['estimatedComplexity']}\n"
        f"[cyan]Readability:[/cyan] {style['readabilityScore']}/10",
        title="Analysis",
        border_style="cyan"
    ))
    for suggestion in performance["suggestions"]:
        console.print(f"[yellow]- {suggestion}[/yellow]")


@cli.command(name="resume")
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Print raw JSON")
def resume(file, as_json):
    """Score a resume file (PDF, DOCX or text)"""
    result = analyze_resume_file(file)
    if not result["success"]:
        raise click.ClickException(result["error"])

    analysis = result["analysis"]
    if as_json:
        click.echo(json.dumps(analysis, indent=2, ensure_ascii=False))
        return

    table = Table(title=f"Resume: {result['file']}")
    table.add_column("Section", style="cyan")
    table.add_column("Score", style="green", justify="right")
    table.add_column("Feedback")
    for name, section in analysis["sections"].items():
        table.add_row(name, str(section["score"]), section["feedback"])
    console.print(table)

    console.print(f"[bold]Overall score:[/bold] {analysis['overallScore']}/100  "
                  f"[bold]ATS:[/bold] {analysis['atsCompatibility']['score']}/100  "
                  f"({analysis['wordCount']} words, {analysis['estimatedReadTime']})")
    for suggestion in analysis["suggestions"]:
        console.print(f"[yellow]- {suggestion}[/yellow]")


@cli.command(name="analytics")
@click.option("--period", type=click.Choice(list(PERIODS)), default="30d", show_default=True)
@click.option("--metric", help="Single metric (visitors, pageViews, topPages, traffic, devices, geographic)")
@click.option("--seed", type=int, help="RNG seed for reproducible output")
def analytics(period, metric, seed):
    """Print a sample analytics report"""
    payload = build_analytics(period=period, metric=metric, seed=seed)

    if "summary" not in payload:
        click.echo(json.dumps(payload, indent=2))
        return

    summary = payload["summary"]
    console.print(Panel.fit(
        f"[cyan]Visitors:[/cyan] {summary['totalVisitors']:,} ({summary['visitorsChange']:+d}%)\n"
        f"[cyan]Page views:[/cyan] {summary['totalPageViews']:,} ({summary['pageViewsChange']:+d}%)\n"
        f"[cyan]Sessions:[/cyan] {summary['totalSessions']:,}\n"
        f"[cyan]Bounce rate:[/cyan] {summary['avgBounceRate']}%\n"
        f"[cyan]Avg session:[/cyan] {summary['avgSessionDuration']}s",
        title=f"Analytics ({payload['period']})",
        border_style="cyan"
    ))


@cli.command(name="status")
@click.option("--config", "-c", "config_path", type=click.Path(exists=True), help="Path to a JSON config file")
def status(config_path):
    """Show configuration and integration status"""
    config = _load(config_path)
    hf_status = "Configured" if config["huggingface"]["api_key"] else "Not configured (fallbacks active)"
    webhook = config["contact"]["webhook_url"] or "None"

    console.print(Panel.fit(
        f"[bold cyan]Portfolio Backend Status[/bold cyan]\n"
        f"[cyan]Project Root:[/cyan] {PROJECT_ROOT}\n"
        f"[cyan]Python:[/cyan] {sys.version.split()[0]}\n"
        f"[cyan]Demos:[/cyan] {', '.join(DEMOS)}\n"
        f"[cyan]Hugging Face:[/cyan] {hf_status}\n"
        f"[cyan]State file:[/cyan] {config['state_file'] or 'In memory'}\n"
        f"[cyan]Contact webhook:[/cyan] {webhook}",
        title="Status",
        border_style="cyan"
    ))


if __name__ == "__main__":
    cli()
