"""Manage per-project specsentry configuration (.specsentry/config.json)."""

from __future__ import annotations

import click

from specsentry.config import (
    _load_project_config,
    config_path,
    find_project_root,
    load_config,
    write_project_config,
)
from specsentry.output.formatter import json_envelope, to_json


@click.command("config")
@click.option("--set-spec-dir", "spec_dir", default=None, help="Directory holding the specs (default: spec).")
@click.option("--set-base-ref", "base_ref", default=None, help="Git ref --changed diffs against (default: main).")
@click.option(
    "--exclude",
    "exclude_pattern",
    default=None,
    help="Add a glob pattern to the exclude list in .specsentry/config.json.",
)
@click.option(
    "--remove-exclude",
    "remove_pattern",
    default=None,
    help="Remove a glob pattern from the exclude list in .specsentry/config.json.",
)
@click.option("--show", is_flag=True, help="Print the effective configuration.")
@click.pass_context
def config(ctx, spec_dir, base_ref, exclude_pattern, remove_pattern, show):
    """Manage per-project specsentry configuration (.specsentry/config.json).

    \b
    Examples:
      specsentry config --set-base-ref origin/develop
      specsentry config --exclude 'app/admin/*'
      specsentry --json config --show
    """
    json_mode = ctx.obj.get("json") if ctx.obj else False
    root = find_project_root()

    updates: dict = {}
    if spec_dir:
        updates["spec_dir"] = spec_dir
    if base_ref:
        updates["base_ref"] = base_ref
    if exclude_pattern or remove_pattern:
        excludes = list(_load_project_config(root).get("exclude", []))
        if exclude_pattern and exclude_pattern not in excludes:
            excludes.append(exclude_pattern)
        if remove_pattern and remove_pattern in excludes:
            excludes.remove(remove_pattern)
        updates["exclude"] = excludes

    if updates:
        path = write_project_config(updates, root)
        if not json_mode:
            click.echo(f"Updated {path}")

    if show or json_mode or not updates:
        effective = load_config(root)
        if json_mode:
            click.echo(
                to_json(
                    json_envelope(
                        "config",
                        summary={"verdict": "configuration", "path": str(config_path(root))},
                        config=effective,
                    )
                )
            )
            return
        for key in sorted(effective):
            click.echo(f"{key:16s} {effective[key]}")
