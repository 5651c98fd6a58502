"""Warden CLI application using Typer.

This module provides command-line utilities for the Warden service:
running the HTTP API and generating secrets for deployment configuration.
"""

import secrets

import typer
import uvicorn
from rich.console import Console

from warden_config.settings import get_settings

app = typer.Typer(
    name="warden",
    help="Warden - account and authentication service CLI",
    no_args_is_help=True,
)
console = Console()


# Create secrets subcommand group
secrets_app = typer.Typer(
    name="secrets",
    help="Secret generation utilities",
    no_args_is_help=True,
)
app.add_typer(secrets_app)


@app.command("serve")
def serve(
    reload: bool = typer.Option(
        False,
        "--reload",
        help="Restart on code changes (development only)",
    ),
) -> None:
    """Run the HTTP API on API_HOST:API_PORT."""
    settings = get_settings()
    console.print(
        f"[bold green]Starting {settings.app_name} API[/bold green] "
        f"on http://{settings.api_host}:{settings.api_port}"
    )
    uvicorn.run(
        "warden.presentation.api.app:create_app",
        factory=True,
        host=settings.api_host,
        port=settings.api_port,
        reload=reload,
    )


SECRET_NAMES = (
    "SESSION_TOKEN_SECRET",
    "PASSWORD_RESET_TOKEN_SECRET",
    "INVITATION_TOKEN_SECRET",
    "REGISTRATION_MASTER_TOKEN",
)


def build_secrets(nbytes: int = 64) -> dict[str, str]:
    """Return a fresh random value for every secret setting.

    Values are drawn until they are pairwise distinct, which the settings
    require for the token signing secrets.
    """
    values: dict[str, str] = {}
    while len(set(values.values())) != len(SECRET_NAMES):
        values = {name: secrets.token_urlsafe(nbytes) for name in SECRET_NAMES}
    return values


@secrets_app.command("generate")
def generate_secrets(
    nbytes: int = typer.Option(
        64,
        "--bytes",
        min=32,
        help="Random bytes per secret",
    ),
) -> None:
    """Generate secure secrets for Warden configuration.

    Generates one signing secret per token purpose (session, password
    reset, invitation) and the master registration token.

    Copy the output to your .env file.
    """
    console.print("\n[bold green]Warden Secret Generation[/bold green]")
    console.print("=" * 60)
    console.print(
        "\nGenerated secrets for your [bold].env[/bold] configuration file:\n"
    )

    for name, value in build_secrets(nbytes).items():
        console.print(f"[cyan]{name}[/cyan]={value}", soft_wrap=True)

    console.print("\n" + "=" * 60)
    console.print(
        "[yellow]Keep these secrets secure and never commit them "
        "to version control![/yellow]"
    )
    console.print(
        "[dim]Copy the above values to your config/.env (Docker) or "
        "config/.env.dev (local) file.[/dim]\n"
    )


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
