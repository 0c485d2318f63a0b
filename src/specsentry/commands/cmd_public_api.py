"""List the public methods of Ruby source files."""

from __future__ import annotations

import click

from specsentry.exit_codes import ParseFailureError
from specsentry.languages.registry import FrontEndError
from specsentry.output.formatter import format_table, json_envelope, loc, to_json
from specsentry.public_api import InvalidRootKind, public_methods_for_file, sorted_entries


def analyse_file(path: str):
    """Return the sorted public methods of *path* or raise ParseFailureError."""
    try:
        return sorted_entries(public_methods_for_file(path))
    except (InvalidRootKind, FrontEndError) as exc:
        raise ParseFailureError(f"{path}: {exc}") from exc


@click.command("public-api")
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def public_api(ctx, paths):
    """Show the public methods each file declares.

    Methods after a bare ``private`` are hidden, ``class << self`` methods
    are listed as class methods, and ``private_class_method :name`` retracts
    ``Scope.name``.

    \b
    Examples:
      specsentry public-api app/models/user.rb
      specsentry --json public-api lib/billing/*.rb
    """
    json_mode = ctx.obj.get("json") if ctx.obj else False

    per_file = [(path.replace("\\", "/"), analyse_file(path)) for path in paths]
    total = sum(len(entries) for _, entries in per_file)

    if json_mode:
        click.echo(
            to_json(
                json_envelope(
                    "public-api",
                    summary={
                        "verdict": f"{total} public method(s) in {len(per_file)} file(s)",
                        "files": len(per_file),
                        "methods": total,
                    },
                    files=[
                        {"path": path, "methods": [e.to_dict() for e in entries]}
                        for path, entries in per_file
                    ],
                )
            )
        )
        return

    for path, entries in per_file:
        click.echo(f"=== {path} ({len(entries)} public) ===")
        rows = [
            [e.display, "instance" if e.is_instance_method else "class", loc(path, e.source_line)]
            for e in entries
        ]
        click.echo(format_table(["method", "kind", "location"], rows))
        click.echo("")
