"""Warn about public methods whose spec file does not describe them.

Exit codes:
  0  Every checked method has a spec (or --strict was not given).
  3  The spec directory does not exist.
  4  A source file could not be parsed.
  5  --strict and at least one method lacks a spec (EXIT_GATE_FAILURE).
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from specsentry.config import find_project_root, load_config
from specsentry.exit_codes import GateFailureError, ParseFailureError, SpecDirMissingError
from specsentry.index.spec_coverage import (
    SpecDirMissing,
    check_missing_specs,
    existing_files,
    new_methods_by_file,
)
from specsentry.languages.registry import FrontEndError
from specsentry.output.formatter import json_envelope, loc, to_json
from specsentry.public_api import InvalidRootKind

log = logging.getLogger(__name__)


def _relative_to_root(root: Path, path: str) -> str:
    resolved = Path(path).resolve()
    try:
        return resolved.relative_to(root).as_posix()
    except ValueError:
        raise click.UsageError(f"{path} is outside the project root {root}") from None


@click.command("missing-specs")
@click.argument("paths", nargs=-1, type=click.Path(exists=True, dir_okay=False))
@click.option("--changed", is_flag=True, help="Check methods added since the base ref (base...HEAD).")
@click.option("--staged", is_flag=True, help="Check methods added in the staging area.")
@click.option("--range", "commit_range", default=None, help="Check methods added in a git range, e.g. HEAD~3..HEAD.")
@click.option("--base", "base_ref", default=None, help="Base ref for --changed (default: config base_ref).")
@click.option("--strict", is_flag=True, help="Exit with code 5 when any method lacks a spec.")
@click.pass_context
def missing_specs(ctx, paths, changed, staged, commit_range, base_ref, strict):
    """Report public methods without a matching ``describe`` in their spec.

    With explicit PATHS every public method of those files is checked.  With
    --changed, --staged or --range only methods whose ``def`` line was added
    in that diff are checked.

    \b
    Examples:
      specsentry missing-specs app/models/user.rb
      specsentry missing-specs --changed --base origin/main
      specsentry --json missing-specs --staged --strict
    """
    json_mode = ctx.obj.get("json") if ctx.obj else False
    modes = [
        flag
        for flag, enabled in (("--changed", changed), ("--staged", staged), ("--range", commit_range is not None))
        if enabled
    ]
    git_mode = bool(modes)

    if len(modes) > 1:
        raise click.UsageError(f"{' and '.join(modes)} are mutually exclusive.")
    if base_ref and not changed:
        raise click.UsageError("--base only applies to --changed.")
    if git_mode and paths:
        raise click.UsageError("PATHS cannot be combined with --changed, --staged or --range.")
    if not git_mode and not paths:
        raise click.UsageError("provide file paths or use --changed, --staged or --range.")

    root = find_project_root()
    config = load_config(root)
    if base_ref:
        config["base_ref"] = base_ref

    try:
        if git_mode:
            new_methods = new_methods_by_file(
                root, config, staged=staged, commit_range=commit_range, pr=changed
            )
            findings = check_missing_specs(root, new_methods=new_methods, config=config)
            checked = len(existing_files(root, new_methods))
        else:
            files = [_relative_to_root(root, p) for p in paths]
            findings = check_missing_specs(root, files=files, config=config)
            checked = len(existing_files(root, files))
    except SpecDirMissing as exc:
        raise SpecDirMissingError(str(exc)) from exc
    except (InvalidRootKind, FrontEndError) as exc:
        raise ParseFailureError(str(exc)) from exc

    log.debug("%d file(s) checked, %d finding(s)", checked, len(findings))
    verdict = (
        f"{len(findings)} warning(s) in {checked} file(s)" if findings else f"All specs present ({checked} file(s))"
    )

    if json_mode:
        click.echo(
            to_json(
                json_envelope(
                    "missing-specs",
                    summary={
                        "verdict": verdict,
                        "files_checked": checked,
                        "warnings": len(findings),
                        "clean": not findings,
                    },
                    findings=[f.to_dict() for f in findings],
                )
            )
        )
    else:
        click.echo(f"VERDICT: {verdict}")
        for f in findings:
            click.echo(f"  WARN  {loc(f.path, f.line)}  {f.message}")

    if strict and findings:
        raise GateFailureError(f"{len(findings)} public method(s) without specs.")
