"""GymFlow developer CLI.

Runs the API server, prepares the database and prints exercise trends using
the same service code path as the HTTP API.
"""

import json
import os
import sys
from pathlib import Path

import typer
import uvicorn
from loguru import logger
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

try:
    import cli.bootstrap
except ImportError:
    _project_root = Path(__file__).parent.parent
    if str(_project_root) not in sys.path:
        sys.path.insert(0, str(_project_root))

from gymflow.analysis.trends import TrendDirection, summarize_trend
from gymflow.config.settings import settings
from gymflow.core.logger import setup_logger
from gymflow.db.repository import ExerciseRepository, LogRepository, SqlTrendStore
from gymflow.db.session import get_session, init_db
from gymflow.errors import ExerciseNotFoundError
from gymflow.metrics.templates import format_measurement
from gymflow.services.trend_service import TrendService

console = Console()

app = typer.Typer(
    name="gymflow-cli",
    help="GymFlow CLI - local server, database setup and trend inspection",
    add_completion=False,
)

DEFAULT_HOST = os.getenv("SERVER_HOST", "127.0.0.1")

DIRECTION_STYLES = {
    TrendDirection.IMPROVING: "bold green",
    TrendDirection.MAINTAINING: "bold blue",
    TrendDirection.DECLINING: "bold yellow",
}


def _setup_logging(debug: bool = False) -> None:
    """Keep the terminal for the command's result; warnings only unless --debug."""
    setup_logger(level="DEBUG" if debug else None, console_level="DEBUG" if debug else "WARNING")


@app.command()
def server(
    host: str = typer.Option(DEFAULT_HOST, "--host", "-h", help="Host to bind to"),
    port: int = typer.Option(8080, "--port", "-p", help="Port to bind to"),
    reload: bool = typer.Option(False, "--reload", help="Enable auto-reload"),
) -> None:
    """Run the FastAPI server."""
    logger.info(f"Starting FastAPI server on {host}:{port} (reload={reload})")
    uvicorn.run("gymflow.main:app", host=host, port=port, reload=reload)


@app.command("init-db")
def init_db_command(
    seed: bool = typer.Option(True, "--seed/--no-seed", help="Insert default categories into an empty database"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
) -> None:
    """Create tables and optionally seed default categories and exercises."""
    _setup_logging(debug)
    init_db(seed=seed)
    console.print(Panel(Text("Database ready", style="bold green"), subtitle=settings.database_url, border_style="green"))


@app.command()
def trend(
    exercise_id: int = typer.Argument(..., help="Exercise ID"),
    show_logs: bool = typer.Option(False, "--logs", help="Also list the logs the trend was computed from"),
    as_json: bool = typer.Option(False, "--json", help="Print the verdict as JSON"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
) -> None:
    """Print the trend verdict for an exercise."""
    _setup_logging(debug)
    try:
        _print_trend(exercise_id, show_logs=show_logs, as_json=as_json)
    except ExerciseNotFoundError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1) from e


def _print_trend(exercise_id: int, show_logs: bool, as_json: bool) -> None:
    with get_session() as session:
        service = TrendService(SqlTrendStore(session))
        exercise = ExerciseRepository.get(session, exercise_id)
        verdict = service.get_trend(exercise_id)

        summary = summarize_trend(verdict, exercise.template_type, service.config)
        if as_json:
            # Plain echo: rich would wrap long lines and break the JSON
            typer.echo(json.dumps({**verdict.to_dict(), "summary": summary}, indent=2))
        else:
            style = DIRECTION_STYLES.get(verdict.direction, "bold")
            console.print(
                Panel(
                    Text(summary, style=style),
                    title=f"{exercise.name} ({exercise.template_type})",
                    subtitle=f"{verdict.session_count} valid sessions",
                )
            )

        if show_logs:
            table = Table("When", "Metrics", "Notes")
            for log in LogRepository.recent_for_exercise(session, exercise_id, service.fetch_limit):
                table.add_row(log.created_at.strftime("%Y-%m-%d %H:%M"), format_measurement(exercise.template_type, log), log.notes or "")
            console.print(table)


if __name__ == "__main__":
    app()
