"""Storefront CLI application using Typer.

Command-line utilities for running the API server, preparing the database,
generating secrets and triggering the product report by hand.
"""

import asyncio
import secrets

import typer
from rich.console import Console

from storefront.infrastructure.email import SmtpMailTransport
from storefront.infrastructure.scheduling import ProductReportScheduler
from storefront.presentation.api.dependencies import (
    create_tables,
    get_engine,
    get_session_maker,
)
from storefront_config.settings import get_settings

app = typer.Typer(
    name="storefront",
    help="Storefront - product catalog backend CLI",
    no_args_is_help=True,
)
console = Console()


secrets_app = typer.Typer(
    name="secrets",
    help="Secret generation utilities",
    no_args_is_help=True,
)
app.add_typer(secrets_app)

report_app = typer.Typer(
    name="report",
    help="Product report utilities",
    no_args_is_help=True,
)
app.add_typer(report_app)


@app.command("serve")
def serve(
    host: str = typer.Option(None, help="Bind address (default: API_HOST)"),
    port: int = typer.Option(None, help="Port (default: API_PORT)"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
) -> None:
    """Run the API server with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "storefront.presentation.api.app:create_app",
        factory=True,
        host=host or settings.api_host,
        port=port or settings.api_port,
        reload=reload,
    )


@app.command("init-db")
def init_db() -> None:
    """Create missing database tables. Existing data is left untouched."""

    async def _run() -> None:
        engine = get_engine()
        try:
            await create_tables(engine)
        finally:
            await engine.dispose()

    settings = get_settings()
    url = settings.database_url
    console.print(f"Database: [cyan]{url.split('@')[-1]}[/cyan]")
    asyncio.run(_run())
    console.print("[bold green]Database schema is up to date.[/bold green]")


@secrets_app.command("generate")
def generate_secrets() -> None:
    """Generate a JWT signing secret.

    Copy the output to your .env file.
    """
    console.print("\n[bold green]Storefront Secret Generation[/bold green]")
    console.print("=" * 60)

    # 64 bytes for a strong HS256 key
    jwt_secret = secrets.token_urlsafe(64)
    console.print(f"[cyan]JWT_SECRET_KEY[/cyan]={jwt_secret}")

    console.print("\n" + "=" * 60)
    console.print(
        "[yellow]Keep this secret secure and never commit it "
        "to version control![/yellow]\n"
    )


@report_app.command("send")
def send_report(
    to: str = typer.Option(None, help="Recipient (default: REPORT_RECIPIENT)"),
) -> None:
    """Send the product report once, now."""
    settings = get_settings()
    scheduler = ProductReportScheduler(
        session_maker=get_session_maker(),
        mail_transport=SmtpMailTransport(settings),
        interval_seconds=settings.report_interval_seconds,
        recipient=to or settings.report_recipient,
        subject=settings.report_subject,
    )

    async def _run() -> bool:
        try:
            return await scheduler.run_once()
        finally:
            await get_engine().dispose()

    if asyncio.run(_run()):
        console.print("[bold green]Product report sent.[/bold green]")
    else:
        console.print("[yellow]No report sent (empty catalog or failure, see log).[/yellow]")
        raise typer.Exit(code=1)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
