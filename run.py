#!/usr/bin/env python3
"""
Application Entry Script.

Main entry point for Remind. All functionality is accessible through
command-line options.

Usage:
    python run.py --help
    python run.py --action run --verbose
    python run.py --action config
    python run.py --action info
"""

import asyncio
import sys
from pathlib import Path

import click

# Ensure project root is in path for absolute imports
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from modules.remind.core.logging import get_logger, log_with_source, setup_logging


def validate_project_root() -> Path:
    """Validate that we're running from the project root."""
    if not (PROJECT_ROOT / ".project_root").exists():
        click.echo(
            click.style("Error: .project_root not found. Run from project root.", fg="red"),
            err=True,
        )
        sys.exit(1)
    return PROJECT_ROOT


@click.command()
@click.option(
    "--action",
    type=click.Choice(["run", "config", "info"]),
    default="info",
    help="Action to perform.",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable verbose output (INFO level logging).",
)
@click.option(
    "--debug", "-d",
    is_flag=True,
    help="Enable debug output (DEBUG level logging).",
)
def main(action: str, verbose: bool, debug: bool) -> None:
    """
    Remind Entry Point.

    Run the reminder loop, view configuration, or show info.

    Examples:

        # Run the reminder loop with notifications echoed to the terminal
        python run.py --action run --verbose

        # View loaded configuration
        python run.py --action config
    """
    validate_project_root()

    if debug:
        log_level = "DEBUG"
    elif verbose:
        log_level = "INFO"
    else:
        log_level = None

    if log_level is None:
        from modules.remind.core.config import get_settings
        log_level = get_settings().log_level or "WARNING"

    setup_logging(level=log_level, format_type="console")
    logger = get_logger(__name__)

    log_with_source(logger, "cli", "debug", "Starting application", action=action, log_level=log_level)

    if action == "run":
        run_app(logger)
    elif action == "config":
        show_config(logger)
    elif action == "info":
        show_info(logger)


def run_app(logger) -> None:
    """Run the event loop that owns the note store until interrupted."""
    from modules.remind.app import create_app_from_config

    def deliver(request) -> None:
        click.echo(click.style(request.title, bold=True))
        click.echo(f"  {request.body}")
        if request.actions:
            click.echo("  " + "  ".join(f"[{action.title}]" for action in request.actions))
        log_with_source(logger, "cli", "info", "Notification delivered", identifier=request.identifier)

    async def serve() -> None:
        loop = asyncio.get_running_loop()
        app = create_app_from_config(loop, deliver)

        active = app.open_list()
        title = app.status_title()
        click.echo(f"{title.text} ({len(active)}/{app.store.max_active} active)")

        app.restore_reminders()

        click.echo("Press Ctrl+C to stop\n")
        await asyncio.Event().wait()

    try:
        asyncio.run(serve())
    except KeyboardInterrupt:
        log_with_source(logger, "cli", "info", "Stopped")


def show_config(logger) -> None:
    """Display loaded configuration."""
    click.echo("Application Configuration:\n")

    try:
        from modules.remind.core.config import get_app_config, get_storage_path

        app_config = get_app_config()

        click.echo("Application Settings (from YAML):")
        click.echo("-" * 40)
        for key, value in app_config.application.model_dump().items():
            if isinstance(value, dict):
                click.echo(f"  {key}:")
                for k, v in value.items():
                    click.echo(f"    {k}: {v}")
            else:
                click.echo(f"  {key}: {value}")
        click.echo(f"  resolved storage path: {get_storage_path()}")

        click.echo("\nLogging Settings (from YAML):")
        click.echo("-" * 40)
        for key, value in app_config.logging.model_dump().items():
            click.echo(f"  {key}: {value}")

        log_with_source(logger, "cli", "info", "Configuration displayed successfully")

    except Exception as e:
        log_with_source(logger, "cli", "error", "Failed to load configuration", error=str(e))
        click.echo(click.style(f"Error loading configuration: {e}", fg="red"))
        sys.exit(1)


def show_info(logger) -> None:
    """Display application information."""
    try:
        from modules.remind.core.config import get_app_config
        application = get_app_config().application
        click.echo(application.name)
        click.echo("=" * 40)
        click.echo(f"Version: {application.version}")
        click.echo(f"Description: {application.description}")
    except Exception:
        click.echo("Remind")
        click.echo("=" * 40)

    click.echo()
    click.echo("Available Actions:")
    click.echo("  --action run      Run the reminder loop")
    click.echo("  --action config   Display configuration")
    click.echo("  --action info     Show this information")
    click.echo()
    click.echo("Logging Options:")
    click.echo("  --verbose, -v     Enable INFO level logging")
    click.echo("  --debug, -d       Enable DEBUG level logging")

    log_with_source(logger, "cli", "debug", "Info displayed")


if __name__ == "__main__":
    main()
