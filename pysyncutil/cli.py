"""CLI interface for syncutil."""

import logging
from typing import Any, Optional

import click

from . import __version__
from .config import config
from .exceptions import StoreAccessError, ValidationError
from .output import OutputFormatter
from .sync import (
    BatchRunner,
    ChangeAccountant,
    DeletionNegotiator,
    RsyncMirror,
    RuleStore,
    RunMode,
    SyncEngine,
)

logger = logging.getLogger(__name__)


class _UsageErrorExitOne:
    """Report command line usage errors with exit status 1."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)  # type: ignore[misc]
        except click.UsageError as e:
            e.exit_code = 1
            raise


class SyncUtilCommand(_UsageErrorExitOne, click.Command):
    """Command whose usage errors exit with status 1."""


class SyncUtilGroup(_UsageErrorExitOne, click.Group):
    """Command group whose usage errors (including unknown commands) exit 1."""

    command_class = SyncUtilCommand

    def resolve_command(self, ctx: click.Context, args: list[str]) -> Any:
        try:
            return super().resolve_command(ctx, args)
        except click.UsageError as e:
            e.exit_code = 1
            raise


def _open_store(ctx: Any) -> RuleStore:
    """Get the rule store, creating its file on first use.

    Exits with status 1 if the store cannot be created.
    """
    out: OutputFormatter = ctx.obj["out"]
    store: RuleStore = ctx.obj["store"]
    accountant: ChangeAccountant = ctx.obj["accountant"]

    try:
        created = store.ensure_exists()
    except StoreAccessError as e:
        out.error(str(e))
        ctx.exit(1)
        raise  # Unreachable, ctx.exit raises

    if created:
        out.info(f"Rules file ready: {store.path}")
        accountant.add(created)
    return store


def _report_updates(ctx: Any) -> None:
    """Show the change total after a non-sync command that changed files."""
    out: OutputFormatter = ctx.obj["out"]
    accountant: ChangeAccountant = ctx.obj["accountant"]
    if accountant.total > 0:
        out.info(f"Total updates: {accountant.total}")


@click.group(
    cls=SyncUtilGroup,
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.option(
    "--dry-run", "-d", is_flag=True, help="Preview without making changes"
)
@click.option("--quiet", "-q", is_flag=True, help="Suppress all non-error output")
@click.option("--verbose", "-v", is_flag=True, help="Show detailed output (default)")
@click.option("--force", "-f", is_flag=True, help="Skip deletion confirmation")
@click.option(
    "--rules-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Rules file to use (default: ~/.config/syncutil/rules.conf)",
)
@click.option("--json", is_flag=True, help="Output in JSON format")
@click.option("--debug", is_flag=True, help="Enable debug logging output")
@click.version_option(__version__, prog_name="syncutil")
@click.pass_context
def main(
    ctx: Any,
    dry_run: bool,
    quiet: bool,
    verbose: bool,
    force: bool,
    rules_file: Optional[str],
    json: bool,
    debug: bool,
) -> None:
    """syncutil - mirror directories according to stored sync rules.

    \b
    Examples:
        syncutil sync                       # Start sync
        syncutil -d sync                    # Preview sync
        syncutil -f sync                    # Sync with forced deletions
        syncutil list                       # Show all rules
        syncutil add ~/docs /backup/docs    # Add a rule
        syncutil remove 2                   # Remove rule at index 2
    """
    # -v wins over -q, verbose output is the default
    show_output = verbose or not quiet

    ctx.ensure_object(dict)
    ctx.obj["out"] = OutputFormatter(json_output=json, quiet=not show_output)
    ctx.obj["mode"] = RunMode(
        simulate=dry_run, verbose=show_output, force_delete=force
    )
    ctx.obj["store"] = RuleStore(config.get_rules_path(rules_file))
    ctx.obj["accountant"] = ChangeAccountant()

    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%H:%M:%S",
        )
        logging.getLogger("pysyncutil").setLevel(logging.DEBUG)
    else:
        logging.basicConfig(level=logging.WARNING)

    if ctx.invoked_subcommand is None:
        ctx.invoke(sync)


@main.command()
@click.pass_context
def sync(ctx: Any) -> None:
    """Execute the synchronization (default)."""
    out: OutputFormatter = ctx.obj["out"]
    mode: RunMode = ctx.obj["mode"]
    accountant: ChangeAccountant = ctx.obj["accountant"]

    store = _open_store(ctx)

    try:
        rules = store.list()
    except StoreAccessError as e:
        out.error(str(e))
        ctx.exit(1)
        return

    engine = SyncEngine(RsyncMirror(), out, DeletionNegotiator(out))
    runner = BatchRunner(engine, out)

    try:
        summary = runner.run_all(rules, mode, accountant)
    except KeyboardInterrupt:
        out.warning("Sync cancelled by user")
        ctx.exit(130)
        return

    if out.json_output:
        out.output_json(summary.to_dict())


@main.command(name="list")
@click.pass_context
def list_rules(ctx: Any) -> None:
    """Display all synchronization rules."""
    out: OutputFormatter = ctx.obj["out"]
    store = _open_store(ctx)

    try:
        rules = store.list()
    except StoreAccessError as e:
        out.error(str(e))
        ctx.exit(1)
        return

    if out.json_output:
        out.output_json([rule.to_dict() for rule in rules])
    elif not rules:
        out.info("No synchronization rules defined.")
    else:
        out.header("Synchronization Rules:")
        for rule in rules:
            out.echo(f"{rule.position}. Source: {rule.source}")
            out.echo(f"   Destination: {rule.destination}")

    _report_updates(ctx)


@main.command()
@click.argument("source", type=str)
@click.argument("destination", type=str)
@click.pass_context
def add(ctx: Any, source: str, destination: str) -> None:
    """Add a new synchronization rule.

    SOURCE must exist; DESTINATION is created on the next sync if needed.
    """
    out: OutputFormatter = ctx.obj["out"]
    store = _open_store(ctx)

    try:
        rule = store.append(source, destination)
    except (ValidationError, StoreAccessError) as e:
        out.error(str(e))
        ctx.exit(1)
        return

    out.success(f"New sync rule added: {rule.label}")
    if out.json_output:
        out.output_json(rule.to_dict())
    _report_updates(ctx)


@main.command()
@click.argument("index", type=str)
@click.pass_context
def remove(ctx: Any, index: str) -> None:
    """Remove a rule by its index (as shown by 'list')."""
    out: OutputFormatter = ctx.obj["out"]

    if not index.isdigit():
        out.error("Index must be a number")
        ctx.exit(1)

    store = _open_store(ctx)

    try:
        removed = store.remove_at(int(index))
    except (ValidationError, StoreAccessError) as e:
        out.error(str(e))
        ctx.exit(1)
        return

    out.success(f"Rule removed at index {index}")
    if out.json_output:
        out.output_json(removed.to_dict())
    _report_updates(ctx)


if __name__ == "__main__":
    main()
