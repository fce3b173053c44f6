import typer
import uvicorn
from rich.console import Console
from rich.table import Table
from rich import box

from config import settings

APP_NAME = "e-Library CLI"

app = typer.Typer(help=f"{APP_NAME}: run the loan service and inspect its catalog.")
console = Console()


@app.command()
def serve(
    host: str = typer.Option(settings.api_host, help="Interface to bind."),
    port: int = typer.Option(settings.api_port, help="Port to listen on."),
    reload: bool = typer.Option(False, help="Restart on code changes (development only)."),
):
    """Start the HTTP API."""
    console.print(f"[bold green]Starting {settings.app_name} server on {host}:{port}...[/]")
    uvicorn.run("api:app", host=host, port=port, reload=reload, log_level=settings.log_level.lower())


@app.command()
def catalog():
    """Show the catalog the server seeds at startup."""
    if not settings.seed_catalog:
        console.print("[yellow]Catalog is empty.[/]")
        return
    table = Table(title="Seed catalog", box=box.SIMPLE)
    table.add_column("Title", style="cyan")
    table.add_column("Copies", justify="right")
    for title, copies in settings.seed_catalog.items():
        table.add_row(title, str(copies))
    console.print(table)
    console.print(
        f"Loans run {settings.loan_period_days} days; each extension adds {settings.loan_extension_days} days."
    )


if __name__ == "__main__":
    app()
