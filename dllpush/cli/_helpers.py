"""Shared helpers and the main CLI group."""

import logging
import os

import click

from ..settings import ConfigError, load_config


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _configure_logging(verbose: bool) -> None:
    """Send library logs to stderr; DEBUG with -v, WARNING otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _status(ctx, msg):
    """Emit a status message to stderr when verbose mode (-v) is on."""
    if ctx.obj.get("verbose"):
        click.echo(msg, err=True)


def _cwd(ctx) -> str:
    return ctx.obj.get("cwd") or os.getcwd()


def _load_config_or_fail(cwd: str):
    try:
        return load_config(cwd)
    except ConfigError as exc:
        raise click.ClickException(str(exc))


_STATUS_COLORS = {
    "ok": "bright_green",
    "warning": "bright_yellow",
    "debug": "bright_red",
    "failed": "bright_red",
}


def _task_reporter(title: str, status: str, output: str) -> None:
    """Print one push step as a coloured title with indented output."""
    mark = "x" if status == "failed" else "✔"
    click.echo(f"{mark} " + click.style(title, fg=_STATUS_COLORS.get(status)))
    if output:
        for line in output.splitlines():
            click.echo(f"    {line}")


# ---------------------------------------------------------------------------
# Main group
# ---------------------------------------------------------------------------

@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Verbose output on stderr.")
@click.option("--cwd", type=click.Path(exists=True, file_okay=False),
              help="Project directory (defaults to the current directory).")
@click.pass_context
def main(ctx, verbose, cwd):
    """dll-push: push local docassemble packages to a playground.

    Collects the API key, playground project and package folder
    interactively, then runs the playground manager script to push.

    \b
    Commands:
      push  Run the push wizard
      ls    Show the folders offered for autocomplete
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["cwd"] = os.path.abspath(cwd) if cwd else None
    _configure_logging(verbose)
