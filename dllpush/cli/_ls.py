"""ls: print the paths the autocomplete prompts would offer."""

import os
from fnmatch import fnmatch

import click

from ..config import EntryType, TraversalOptions, default_exclude_path
from ..core.traverser import TraversalEngine
from ._helpers import _cwd, _status, main


def _exclude_predicate(patterns):
    """Default pruning plus glob patterns matched on the path or its base name."""
    if not patterns:
        return default_exclude_path

    def exclude(relative_path):
        if default_exclude_path(relative_path):
            return True
        name = os.path.basename(relative_path)
        return any(fnmatch(relative_path, p) or fnmatch(name, p) for p in patterns)

    return exclude


@main.command("ls")
@click.argument("path", required=False, type=click.Path(exists=True))
@click.option("--type", "entry_type", default=EntryType.DIRECTORY.value,
              type=click.Choice([t.value for t in EntryType]),
              help="Which entries to list.")
@click.option("--depth", type=click.IntRange(min=1), default=3, show_default=True,
              help="Levels to descend before listing leaves.")
@click.option("--unbounded", is_flag=True, help="Ignore --depth and walk the whole tree.")
@click.option("--base-only", is_flag=True, help="Print base names instead of paths.")
@click.option("--include-root", is_flag=True, help="Print a line for the root first.")
@click.option("--root-label", default=".", show_default=True,
              help="Text of the root line.")
@click.option("--exclude", "excludes", multiple=True,
              help="Glob of paths to prune (repeatable).")
@click.pass_context
def ls(ctx, path, entry_type, depth, unbounded, base_only, include_root, root_label,
       excludes):
    """List folders (and optionally files) under PATH, as the prompts see them."""
    root = os.path.abspath(path) if path else _cwd(ctx)
    options = TraversalOptions(
        entry_type=EntryType(entry_type),
        base_name_only=base_only,
        depth_limit=None if unbounded else depth,
        exclude_path=_exclude_predicate(excludes),
        include_root_sentinel=include_root,
        root_sentinel_label=root_label,
    )

    result = TraversalEngine().run(root, options)
    if result.error is not None:
        _status(ctx, f"Traversal aborted after {len(result.partial_paths)} entries")
        raise click.ClickException(f"Could not list {root}: {result.error}")

    for line in result.paths:
        click.echo(line)
