"""Match public methods against the ``describe`` strings of their specs."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from specsentry.commands.changed_files import (
    diff_for_file,
    get_changed_files,
    new_method_names,
    ruby_source_files,
)
from specsentry.config import DEFAULTS
from specsentry.index.test_conventions import spec_markers, spec_path_for
from specsentry.public_api import MethodEntry, public_methods_for_file, sorted_entries

log = logging.getLogger(__name__)

MISSING_SPEC = "missing_spec"
MISSING_SPEC_FILE = "missing_spec_file"


class SpecDirMissing(Exception):
    """The project has no spec directory at all."""


@dataclass(frozen=True)
class Finding:
    kind: str
    path: str
    message: str
    line: int | None = None
    method: str | None = None

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "path": self.path,
            "line": self.line,
            "method": self.method,
            "message": self.message,
        }


def new_methods_by_file(
    root: Path,
    config: dict | None = None,
    staged: bool = False,
    commit_range: str | None = None,
    pr: bool = False,
) -> dict[str, set[str]]:
    """Map each changed Ruby source file to the names of methods it adds.

    Files under the spec directory, files matching an ``exclude`` glob and
    files that add no method are left out.
    """
    config = config or DEFAULTS
    base_ref = config["base_ref"]
    changed = ruby_source_files(
        get_changed_files(root, staged=staged, commit_range=commit_range, pr=pr, base_ref=base_ref),
        spec_dir=config["spec_dir"],
        exclude=config["exclude"],
    )
    result: dict[str, set[str]] = {}
    for cf in changed:
        patch = diff_for_file(root, cf, staged=staged, commit_range=commit_range, pr=pr, base_ref=base_ref)
        names = new_method_names(patch, ignored=config["ignored_methods"])
        if names:
            result[cf.path] = names
    log.debug("new methods: %s", {path: sorted(names) for path, names in result.items()})
    return result


def _covered(entry: MethodEntry, markers: set[str]) -> bool:
    return entry.name_with_prefix in markers or entry.display in markers


def check_file(
    root: Path,
    rel_path: str,
    names: set[str] | None = None,
    config: dict | None = None,
) -> list[Finding]:
    """Check one source file; *names* restricts which methods are checked."""
    config = config or DEFAULTS
    entries = public_methods_for_file(root / rel_path)
    if names is not None:
        entries = [e for e in entries if e.method_name in names]
    if not entries:
        return []

    spec_rel = spec_path_for(rel_path, config["spec_dir"], config["strip_prefixes"])
    spec_file = root / spec_rel
    if not spec_file.is_file():
        return [Finding(MISSING_SPEC_FILE, rel_path, f"No spec found for file {rel_path}.")]

    markers = spec_markers(spec_file.read_text(encoding="utf-8", errors="replace"))
    findings = []
    for entry in sorted_entries(entries):
        if _covered(entry, markers):
            continue
        findings.append(
            Finding(
                MISSING_SPEC,
                rel_path,
                f"Missing spec for `{entry}`",
                line=entry.source_line,
                method=entry.display,
            )
        )
    return findings


def check_missing_specs(
    root: Path,
    files: list[str] | None = None,
    new_methods: dict[str, set[str]] | None = None,
    config: dict | None = None,
) -> list[Finding]:
    """Report public methods with no matching spec description.

    With *new_methods* (path -> method names, see :func:`new_methods_by_file`)
    only those files and methods are checked; otherwise every public method
    of every path in *files*.

    Raises:
        SpecDirMissing: the configured spec directory does not exist.
        InvalidRootKind, FrontEndError: a file could not be analysed.
    """
    config = config or DEFAULTS
    if not (root / config["spec_dir"]).is_dir():
        raise SpecDirMissing(f"`{config['spec_dir']}` directory is missing")

    if new_methods is not None:
        targets = sorted(new_methods.items())
    else:
        targets = [(path, None) for path in files or []]

    present = set(existing_files(root, [path for path, _ in targets]))
    findings: list[Finding] = []
    for rel_path, names in targets:
        if rel_path in present:
            findings.extend(check_file(root, rel_path, names, config))
    return findings


def existing_files(root: Path, paths) -> list[str]:
    """Keep the paths that are regular files under *root*.

    A ``--range`` diff can name a file that a later commit deleted.
    """
    kept = []
    for rel_path in paths:
        if (root / rel_path).is_file():
            kept.append(rel_path)
        else:
            log.debug("skipping %s: not a file", rel_path)
    return kept
