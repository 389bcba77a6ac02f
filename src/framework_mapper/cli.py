"""
framework-mapper CLI - capability analysis from the command line.

Commands:
    framework-mapper analyze VENDOR SAFEGUARD TEXT        Detect the role a vendor text supports
    framework-mapper validate VENDOR SAFEGUARD ROLE TEXT  Check a claimed role
    framework-mapper tool-type TEXT [--safeguard ID]      Detect the tool category
    framework-mapper safeguard ID [--examples]            Show a safeguard record
    framework-mapper list [--ig IG1] [--function Detect]  List safeguards
    framework-mapper serve [--host] [--port]              Run the HTTP API

Every command accepts --json for machine-readable output.
"""

import json

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .config import load_settings
from .logging_config import setup_logging
from .safeguards import NotFoundError
from .security import InvalidArgumentError
from .service import MappingService

app = typer.Typer(help="Capability classification and domain validation for CIS Controls safeguards")
console = Console()

STATUS_STYLES = {
    "SUPPORTED": "bold green",
    "QUESTIONABLE": "bold yellow",
    "UNSUPPORTED": "bold red",
}


def _service() -> MappingService:
    return MappingService.from_settings(load_settings())


def _fail(error: Exception) -> None:
    console.print(f"[bold red]Error:[/bold red] {error}")
    raise typer.Exit(1)


def _emit_json(data: dict | list) -> None:
    typer.echo(json.dumps(data, indent=2))


def _bullets(title: str, items: list[str] | tuple[str, ...], style: str) -> None:
    if not items:
        return
    console.print(f"\n[{style}]{title}[/{style}]")
    for item in items:
        console.print(f"  - {item}")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """Classify vendor capability claims against CIS Controls v8.1 safeguards."""
    setup_logging("DEBUG" if verbose else "WARNING")


@app.command()
def version():
    """Show the installed version."""
    console.print(f"framework-mapper {__version__}")


# =============================================================================
# ANALYZE / VALIDATE
# =============================================================================


@app.command()
def analyze(
    vendor: str = typer.Argument(help="Vendor or product name"),
    safeguard_id: str = typer.Argument(help='Safeguard id, e.g. "1.1"'),
    text: str = typer.Argument(help="Vendor's description of the tool"),
    additional: bool = typer.Option(False, "--additional-roles", help="Report other evidenced roles"),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON"),
):
    """Detect which capability role a vendor response supports."""
    try:
        result = _service().analyze(vendor, safeguard_id, text, include_additional_roles=additional)
    except (InvalidArgumentError, NotFoundError) as e:
        _fail(e)

    if as_json:
        _emit_json(result.to_dict())
        return

    table = Table(title=f"{result.vendor} / {result.safeguard_id} {result.safeguard_title}")
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("Role", result.role.label)
    table.add_row("Confidence", f"{result.confidence}%")
    table.add_row("Quality", result.quality)
    table.add_row("Tool type", result.detected_tool_type)
    if result.additional_roles:
        table.add_row("Additional roles", ", ".join(r.label for r in result.additional_roles))
    console.print(table)
    console.print(result.tool_capability_description)
    _bullets("Evidence", result.evidence, "green")
    _bullets("Gaps", result.gaps, "yellow")
    console.print(f"\n[bold]Recommended use:[/bold] {result.recommended_use}")


@app.command()
def validate(
    vendor: str = typer.Argument(help="Vendor or product name"),
    safeguard_id: str = typer.Argument(help='Safeguard id, e.g. "1.1"'),
    claimed_role: str = typer.Argument(help="full, partial, facilitates, governance or validates"),
    text: str = typer.Argument(help="Supporting text for the claim"),
    additional: bool = typer.Option(False, "--additional-roles", help="Report other evidenced roles"),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON"),
):
    """Validate a vendor's claimed capability role against its supporting text."""
    try:
        result = _service().validate_mapping(
            vendor, safeguard_id, claimed_role, text, include_additional_roles=additional
        )
    except (InvalidArgumentError, NotFoundError) as e:
        _fail(e)

    if as_json:
        _emit_json(result.to_dict())
        return

    style = STATUS_STYLES.get(result.status.value, "bold")
    console.print(Panel(
        f"[{style}]{result.status.value}[/{style}]  {result.confidence_score}% confidence",
        title=f"{result.vendor} / {result.safeguard_id}",
    ))

    table = Table()
    table.add_column("Claimed", style="bold")
    table.add_column("Effective")
    table.add_column("Detected")
    table.add_column("Tool type")
    table.add_column("Domain")
    table.add_row(
        result.claimed_role.label,
        result.effective_role.label,
        result.detected_role.label,
        result.detected_tool_type,
        "[green]match[/green]" if result.domain_match else "[red]mismatch[/red]",
    )
    console.print(table)

    if result.domain_adjusted:
        console.print(f"\n[red]{result.domain_reasoning}[/red]")
    _bullets("Strengths", result.strengths, "green")
    _bullets("Gaps", result.gaps, "yellow")
    _bullets("Recommendations", result.recommendations, "blue")
    _bullets("Evidence", result.evidence, "dim")


@app.command("tool-type")
def tool_type(
    text: str = typer.Argument(help="Text describing a product"),
    safeguard_id: str = typer.Option(None, "--safeguard", help="Safeguard for context affinity"),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON"),
):
    """Detect what kind of security tool a text describes."""
    try:
        result = _service().detect_tool_type(text, safeguard_id)
    except (InvalidArgumentError, NotFoundError) as e:
        _fail(e)

    if as_json:
        _emit_json(result)
        return

    console.print(f"\n[bold]Tool type:[/bold] {result['tool_type']}")
    table = Table(title="Category scores")
    table.add_column("Category", style="bold")
    table.add_column("Score", justify="right")
    for category, score in sorted(result["scores"].items(), key=lambda kv: -kv[1]):
        table.add_row(category, str(score))
    console.print(table)


# =============================================================================
# REFERENCE DATA
# =============================================================================


@app.command()
def safeguard(
    safeguard_id: str = typer.Argument(help='Safeguard id, e.g. "1.1"'),
    examples: bool = typer.Option(False, "--examples", help="Include vendor implementation examples"),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON"),
):
    """Show the full record for one safeguard."""
    try:
        details = _service().get_safeguard_details(safeguard_id, include_examples=examples)
    except (InvalidArgumentError, NotFoundError) as e:
        _fail(e)

    if as_json:
        _emit_json(details)
        return

    console.print(f"\n[bold blue]{details['id']} {details['title']}[/bold blue]")
    console.print(details.get("description", ""))
    console.print(
        f"\n[bold]Implementation group:[/bold] {details.get('implementation_group', '')}  "
        f"[bold]Function:[/bold] {', '.join(details.get('security_function', []))}"
    )
    if details.get("domain"):
        console.print(
            f"[bold]Domain:[/bold] {details['domain']} "
            f"(FULL/PARTIAL requires: {', '.join(details['required_tool_types'])})"
        )
    _bullets("Core requirements", details.get("core_requirements", []), "green")
    _bullets("Implementation suggestions", details.get("implementation_suggestions", []), "blue")


@app.command("list")
def list_safeguards(
    ig: str = typer.Option(None, "--ig", help="Filter by implementation group (IG1, IG2, IG3)"),
    function: str = typer.Option(None, "--function", help="Filter by security function"),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON"),
):
    """List safeguards, optionally filtered."""
    summaries = _service().list_safeguards(ig, function)

    if as_json:
        _emit_json(summaries)
        return

    table = Table(title=f"Safeguards ({len(summaries)})")
    table.add_column("ID", style="bold")
    table.add_column("Title")
    table.add_column("IG")
    table.add_column("Function")
    for s in summaries:
        title = s["title"] + (" [dim](domain)[/dim]" if s["domain_restricted"] else "")
        table.add_row(s["id"], title, s["implementation_group"], ", ".join(s["security_function"]))
    console.print(table)


# =============================================================================
# SERVE
# =============================================================================


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", help="Bind address"),
    port: int = typer.Option(8000, help="Port"),
):
    """Run the HTTP API with uvicorn."""
    import uvicorn

    settings = load_settings()
    setup_logging(settings.log_level)
    console.print(f"[bold blue]framework-mapper[/bold blue] serving on http://{host}:{port}")
    uvicorn.run(
        "framework_mapper.api.gateway:create_app",
        factory=True,
        host=host,
        port=port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    app()
