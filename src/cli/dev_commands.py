"""Server and database commands."""

import typer
from rich.console import Console
from rich.panel import Panel

console = Console()

db_app = typer.Typer(help="Database commands")


def serve(
    host: str = typer.Option("0.0.0.0", help="Host to bind the server to"),
    port: int = typer.Option(8000, help="Port to bind the server to"),
    reload: bool = typer.Option(False, help="Enable auto-reload on code changes"),
    log_level: str = typer.Option(
        "info", help="Log level (debug, info, warning, error, critical)"
    ),
) -> None:
    """
    Start the catalog API server.
    """
    import uvicorn

    console.print(
        Panel.fit(
            "[bold green]Starting Product Catalog API[/bold green]",
            border_style="green",
        )
    )
    console.print(f"[blue]Server will be available at:[/blue] http://{host}:{port}")
    console.print("[dim]Press Ctrl+C to stop the server[/dim]")

    uvicorn.run(
        "src.catalog.api.http.app:app",
        host=host,
        port=port,
        reload=reload,
        reload_dirs=["src"] if reload else None,
        log_level=log_level,
        access_log=False,
    )


@db_app.command(name="init")
def init() -> None:
    """Create the product tables in the configured database."""
    from src.catalog.runtime.context import get_config
    from src.catalog.runtime.init_db import init_db

    config = get_config()
    if config.database.backend != "sql":
        console.print("[yellow]database.backend is not 'sql'; nothing to create[/yellow]")
        raise typer.Exit(1)

    init_db()
    console.print(f"[green]Tables created in[/green] {config.database.url}")
