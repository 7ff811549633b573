import sys
from dataclasses import dataclass
from typing import Callable, List, Optional

import httpx
import typer
from loguru import logger
from pydantic import ValidationError as PydanticValidationError

from tccli.cache import PingURLCache
from tccli.config import Settings
from tccli.errors import FilesystemError, RemoteError, TcCliError, ValidationError
from tccli.expandscope import expand_scopes
from tccli.status import StatusChecker
from tccli.utils import create_client

SUCCESS_EXIT_CODE = 0
VALIDATION_ERROR_EXIT_CODE = 2
FILESYSTEM_ERROR_EXIT_CODE = 3
REMOTE_ERROR_EXIT_CODE = 4

app = typer.Typer(no_args_is_help=True, help="Command line interface for taskcluster services")


@dataclass(frozen=True)
class CliConfig:
    """Options shared by all commands of one invocation"""

    settings: Settings


def exit_code_for(exc: TcCliError) -> int:
    if isinstance(exc, ValidationError):
        return VALIDATION_ERROR_EXIT_CODE
    if isinstance(exc, FilesystemError):
        return FILESYSTEM_ERROR_EXIT_CODE
    if isinstance(exc, RemoteError):
        return REMOTE_ERROR_EXIT_CODE
    return 1


def _run_command(
    cfg: CliConfig,
    invoke: Callable[[httpx.Client], int],
    error_prefix: str = "error",
) -> None:
    """Run a command with a fresh http client and map errors to an exit code"""
    try:
        with create_client(cfg.settings.http_timeout) as client:
            code = invoke(client)
    except TcCliError as exc:
        logger.debug(f"{type(exc).__name__}: {exc}")
        typer.echo(f"{error_prefix}: {exc}", err=True)
        raise typer.Exit(code=exit_code_for(exc)) from exc
    raise typer.Exit(code=code)


def _require_config(ctx: typer.Context) -> CliConfig:
    cfg = ctx.obj
    if not isinstance(cfg, CliConfig):
        raise typer.BadParameter("CLI config not initialized")
    return cfg


def configure_logging(level: str) -> None:
    """Send log records at or above level to stderr, keeping stdout for command output"""
    logger.remove()
    logger.add(sys.stderr, level=level.upper())


@app.callback()
def main(
    ctx: typer.Context,
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Log level (defaults to TCCLI_LOG_LEVEL or INFO)"
    ),
) -> None:
    """Load settings and logging for all commands."""
    try:
        settings = Settings()
    except PydanticValidationError as exc:
        typer.echo(f"error: invalid settings: {exc}", err=True)
        raise typer.Exit(code=VALIDATION_ERROR_EXIT_CODE) from exc
    try:
        configure_logging(log_level or settings.log_level)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--log-level") from exc
    ctx.obj = CliConfig(settings=settings)


@app.command("status")
def status_command(
    ctx: typer.Context,
    services: Optional[List[str]] = typer.Argument(
        None, help="Services to check (all known services when omitted)"
    ),
) -> None:
    """Query the current running status of taskcluster services.

    When called without arguments, returns the current running status of all
    production taskcluster services. By specifying one or more services as
    arguments, you can limit the services included in the status report.
    """
    cfg = _require_config(ctx)
    cache = PingURLCache(
        path=cfg.settings.cache_path,
        manifest_url=cfg.settings.manifest_url,
        max_age=cfg.settings.cache_max_age,
    )
    _run_command(cfg, lambda client: StatusChecker(cache, client).run(services or []))


@app.command("expand-scope")
def expand_scope_command(
    ctx: typer.Context,
    scopes: List[str] = typer.Argument(..., help="Scopes to expand"),
) -> None:
    """Expand the given scope set.

    Returns an expanded copy of the given scope set, with scopes implied by
    any roles included.
    """
    cfg = _require_config(ctx)

    def invoke(client: httpx.Client) -> int:
        for scope in expand_scopes(client, cfg.settings.auth_url, scopes):
            typer.echo(scope)
        return SUCCESS_EXIT_CODE

    _run_command(cfg, invoke, error_prefix="Error expanding scopes")


def run() -> None:
    app()


if __name__ == "__main__":
    run()
