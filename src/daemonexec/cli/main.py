"""Main CLI entry point for Daemonexec."""

import os
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console

from daemonexec import __version__
from daemonexec.core.config import DaemonizerConfig
from daemonexec.core.daemonizer import Daemonizer
from daemonexec.core.detach import is_supported
from daemonexec.core.errors import DaemonExecError
from daemonexec.core.pidfile import is_running, read_pid
from daemonexec.utils.constants import LAUNCH_RETRY_DELAY_MS, MAX_LAUNCH_ATTEMPTS
from daemonexec.utils.logging import setup_logging

app = typer.Typer(
    name="daemonexec-ctl",
    help="Run a program as a daemon detached from the current terminal.",
    no_args_is_help=True,
)
console = Console()


@app.command(context_settings={"allow_interspersed_args": False})
def run(
    path: str = typer.Argument(..., help="Executable to run as a daemon"),
    args: Optional[List[str]] = typer.Argument(None, help="Arguments passed to the program"),
    debug: bool = typer.Option(False, "--debug", help="Write diagnostics to syslog"),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help="Also write diagnostics to this file"),
    pid_file: Optional[Path] = typer.Option(None, "--pid-file", help="Record the daemon PID here"),
    max_attempts: int = typer.Option(MAX_LAUNCH_ATTEMPTS, "--max-attempts", min=1, help="Launch attempts"),
    retry_delay_ms: int = typer.Option(LAUNCH_RETRY_DELAY_MS, "--retry-delay", min=0, help="Delay between attempts (ms)"),
) -> None:
    """Detach from the terminal and exec PATH with ARGS."""
    if not is_supported():
        console.print("[red]Error:[/red] This platform cannot fork")
        raise typer.Exit(1)

    target = Path(path)
    if not target.is_file() or not os.access(target, os.X_OK):
        console.print(f"[red]Error:[/red] Not an executable file: {path}")
        raise typer.Exit(1)

    if pid_file is not None and is_running(pid_file):
        console.print(f"[yellow]Daemon is already running.[/yellow] (PID: {read_pid(pid_file)})")
        raise typer.Exit(1)

    config = DaemonizerConfig(
        debug=debug,
        log_file=log_file,
        pid_file=pid_file,
        max_attempts=max_attempts,
        retry_delay_ms=retry_delay_ms,
        return_to_parent=True,
    )
    setup_logging(debug=config.debug, log_file=config.log_file)

    # argv[0] restates the path, as exec() expects
    argv = [path] + list(args or [])

    try:
        Daemonizer(config).daemonize_and_exec(path, argv)
    except DaemonExecError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    console.print(f"[green]Started:[/green] {path}")
    if pid_file is not None:
        console.print(f"  PID File: {pid_file}")


@app.command()
def status(
    pid_file: Path = typer.Option(..., "--pid-file", help="PID file written by run"),
) -> None:
    """Show whether the daemon recorded in a PID file is running."""
    if is_running(pid_file):
        console.print(f"  Status: [green]Running[/green] (PID: {read_pid(pid_file)})")
    else:
        console.print("  Status: [yellow]Stopped[/yellow]")
        raise typer.Exit(1)


@app.command()
def version() -> None:
    """Show version."""
    console.print(f"daemonexec {__version__}")


if __name__ == "__main__":
    app()
