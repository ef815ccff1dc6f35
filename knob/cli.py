from __future__ import annotations

import typer

from .config import get_config
from .errors import SettingParseError
from .logging import configure_logging
from .net import SocketSettings
from .options import optopt
from .settings import Settings

app = typer.Typer(help="knob example programs")

PASSTHROUGH = {"allow_extra_args": True, "ignore_unknown_options": True}


@app.callback()
def main(
    log_level: str | None = typer.Option(None, help="Log level, e.g. DEBUG"),
    log_format: str | None = typer.Option(None, help="plain or json"),
    verbose: bool = typer.Option(False, help="Print effective configuration"),
) -> None:
    """Configure logging before running a command."""
    configure_logging(log_level, log_format)
    if verbose:
        typer.echo(get_config().model_dump_json(indent=2), err=True)


def _load(ctx: typer.Context, settings: Settings) -> None:
    failure = settings.load_args([ctx.command_path, *ctx.args])
    if failure is not None:
        typer.echo(f"error: {failure}", err=True)
        typer.echo(settings.usage("Try one of these:"))
        raise typer.Exit(code=2)


@app.command(context_settings=PASSTHROUGH)
def options(ctx: typer.Context) -> None:
    """Load -p/--port and -e/--environment from the trailing arguments."""
    settings = Settings()
    settings.opt(optopt("p", "port", "the port to bind to", "4000"))
    settings.opt(optopt("e", "environment", "the environment to run in", ""))
    _load(ctx, settings)
    for descriptor in settings.options:
        typer.echo(f"{descriptor.long_name}={settings.fetch(descriptor.long_name) or ''}")


@app.command(context_settings=PASSTHROUGH)
def socket(ctx: typer.Context) -> None:
    """Print the socket address derived from --addr, or --ip and --port."""
    settings = SocketSettings()
    settings.register_options()
    _load(ctx, settings)
    try:
        addr = settings.socket()
    except SettingParseError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=2) from exc
    typer.echo(str(addr))


if __name__ == "__main__":  # pragma: no cover
    app()
