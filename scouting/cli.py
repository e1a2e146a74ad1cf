"""Command-line entry points: one command per scouting menu action."""
import logging
from contextlib import contextmanager
from functools import wraps
from pathlib import Path

import click

from scouting.backends import get_backend
from scouting.batch import run_batch, run_fixed_test, run_sheet_test
from scouting.config import LLM_PROVIDER, LOG_LEVEL, WORKBOOK_PATH
from scouting.notify import ConsoleNotifier
from scouting.run_config import ConfigError, load_run_config
from scouting.workbook import XlsxWorkbook, create_template

logger = logging.getLogger(__name__)


def _reported(func):
    """Turn any failure of an action into an alert and a non-zero exit status."""

    @wraps(func)
    def wrapper(ctx, *args, **kwargs):
        notifier = ctx.obj["notifier"]
        try:
            return func(ctx, *args, **kwargs)
        except (click.ClickException, click.exceptions.Exit, click.exceptions.Abort):
            raise
        except ConfigError as e:
            notifier.alert(f"❌ ERRORE Config: {e}")
            ctx.exit(1)
        except Exception as e:
            logger.exception("[CLI] %s failed: %s", func.__name__, e)
            notifier.alert(f"❌ ERRORE: {e}")
            ctx.exit(1)

    return wrapper


def _open(ctx):
    workbook = XlsxWorkbook(ctx.obj["workbook_path"])
    config = load_run_config(workbook, provider=ctx.obj["provider"])
    return workbook, config


@contextmanager
def _backend(ctx):
    backend = get_backend(ctx.obj["provider"])
    try:
        yield backend
    finally:
        backend.close()


@click.group()
@click.option(
    "--workbook", "workbook_path", default=WORKBOOK_PATH, show_default=True,
    type=click.Path(dir_okay=False), help="Scouting workbook (.xlsx)",
)
@click.option(
    "--provider", default=LLM_PROVIDER, show_default=True,
    type=click.Choice(["groq", "claude"]), help="Text-generation backend",
)
@click.pass_context
def cli(ctx, workbook_path, provider):
    """Startup scouting: match startups to accelerators and draft value propositions."""
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj.setdefault("notifier", ConsoleNotifier())
    ctx.obj["workbook_path"] = workbook_path
    ctx.obj["provider"] = provider


@cli.command("test-fixed")
@click.pass_context
@_reported
def fixed_test(ctx):
    """Generate one value proposition for a built-in sample pair."""
    workbook, config = _open(ctx)
    notifier = ctx.obj["notifier"]
    notifier.alert("⏳ Test in corso...")
    with _backend(ctx) as backend:
        result = run_fixed_test(config, backend, notifier)
    if not result.ok:
        ctx.exit(1)


@cli.command("test-sheet")
@click.pass_context
@_reported
def sheet_test(ctx):
    """Generate for the first startup and accelerator of the workbook."""
    workbook, config = _open(ctx)
    with _backend(ctx) as backend:
        run_sheet_test(workbook, config, backend, ctx.obj["notifier"])


@cli.command("generate-all")
@click.option("--yes", "-y", is_flag=True, help="Skip the confirmation prompt")
@click.pass_context
@_reported
def generate_all(ctx, yes):
    """Clear the results sheet and generate for every pair above threshold."""
    workbook, config = _open(ctx)
    notifier = ctx.obj["notifier"]
    if yes and isinstance(notifier, ConsoleNotifier):
        notifier.assume_yes = True
    with _backend(ctx) as backend:
        run_batch(workbook, config, backend, notifier)


@cli.command("init-workbook")
@click.argument("path", type=click.Path(dir_okay=False))
@click.option("--force", is_flag=True, help="Overwrite an existing file")
@click.pass_context
@_reported
def init_workbook(ctx, path, force):
    """Write an empty workbook with the Config, data and results sheets."""
    if Path(path).exists() and not force:
        raise click.UsageError(f"{path} already exists (use --force to overwrite)")
    create_template(path)
    ctx.obj["notifier"].alert(f"✅ Workbook creato: {path}")


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
