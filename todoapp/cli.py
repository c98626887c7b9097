"""
todoapp CLI

Starts one of the three services or prepares the database schema.
"""
import asyncio
from enum import Enum
from typing import Optional

import typer
import uvicorn

from todoapp.config import Settings, load_settings
from todoapp.database import Database
from todoapp.errors import ConfigurationError
from todoapp.logging import setup_logging
from todoapp.main import create_api_app, create_web_app, create_ws_app

app = typer.Typer(
    name="todoapp",
    help="REST API, WebSocket and web page over one shared database client",
    add_completion=False,
)


class Service(str, Enum):
    """Runnable services"""
    API = "api"
    WS = "ws"
    WEB = "web"


FACTORIES = {
    Service.API: create_api_app,
    Service.WS: create_ws_app,
    Service.WEB: create_web_app,
}


def _settings() -> Settings:
    try:
        settings = load_settings()
    except ConfigurationError as exc:
        typer.echo(f"Configuration error: {exc}", err=True)
        raise typer.Exit(code=1)
    setup_logging(settings.log_level, settings.log_format)
    return settings


def default_port(service: Service, settings: Settings) -> int:
    return {
        Service.API: settings.api_port,
        Service.WS: settings.ws_port,
        Service.WEB: settings.web_port,
    }[service]


@app.command()
def serve(
    service: Service = typer.Argument(..., help="Service to run"),
    host: Optional[str] = typer.Option(None, "--host", help="Bind address"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Listen port"),
):
    """Run a service with uvicorn."""
    settings = _settings()
    # the app owns its client and disposes the pool on shutdown
    application = FACTORIES[service](settings=settings)
    uvicorn.run(
        application,
        host=host or settings.host,
        port=port or default_port(service, settings),
        log_config=None,
    )


@app.command()
def initdb():
    """Create the User and Todo tables."""
    settings = _settings()

    async def run():
        db = Database.from_settings(settings)
        try:
            await db.create_all()
        finally:
            await db.dispose()

    asyncio.run(run())
    typer.echo("Schema ready")


def main():
    app()


if __name__ == "__main__":
    main()
