"""Shared utilities for resolving changed files and new methods from git."""

from __future__ import annotations

import fnmatch
import logging
import re
import subprocess
from dataclasses import dataclass
from pathlib import Path

log = logging.getLogger(__name__)

# Added diff line that defines a method, e.g. "+  def self.build(attrs)".
_NEW_METHOD_RE = re.compile(r"^\+\s+def \b(?:self\.)?([^(\s]+)")

DEFAULT_IGNORED_METHODS = frozenset({"initialize"})


@dataclass(frozen=True)
class ChangedFile:
    """A file touched by a change; *old_path* is set for renames."""

    path: str
    old_path: str | None = None


def new_method_names(patch: str, ignored=DEFAULT_IGNORED_METHODS) -> set[str]:
    """Return the names of methods whose ``def`` line was added in *patch*."""
    names: set[str] = set()
    for line in patch.splitlines():
        m = _NEW_METHOD_RE.match(line)
        if m:
            names.add(m.group(1))
    return names - set(ignored)


def _diff_args(staged: bool, commit_range: str | None, pr: bool, base_ref: str) -> list[str]:
    if commit_range:
        return [commit_range]
    if pr:
        return [f"{base_ref}...HEAD"]
    if staged:
        return ["--cached"]
    return []


def _run_git(root: Path, args: list[str]) -> str | None:
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=str(root),
            capture_output=True,
            text=True,
            timeout=30,
            encoding="utf-8",
            errors="replace",
        )
    except (FileNotFoundError, subprocess.TimeoutExpired) as exc:
        log.debug("git %s failed: %s", " ".join(args), exc)
        return None
    if result.returncode != 0:
        log.debug("git %s exited %d: %s", " ".join(args), result.returncode, result.stderr.strip())
        return None
    return result.stdout


def get_changed_files(
    root: Path,
    staged: bool = False,
    commit_range: str | None = None,
    pr: bool = False,
    base_ref: str = "main",
) -> list[ChangedFile]:
    """Get added, modified and renamed files from git diff.

    Supports four mutually exclusive sources:
    - *commit_range*: arbitrary range (e.g. ``HEAD~3..HEAD``)
    - *staged*: files in the staging area
    - *pr*: files changed in ``base_ref...HEAD``
    - (default): unstaged working-tree changes

    Deleted files are dropped.  Returns forward-slash paths relative to the
    repo root, or an empty list when git is unavailable or fails.
    """
    out = _run_git(root, ["diff", "--name-status", "-M", *_diff_args(staged, commit_range, pr, base_ref)])
    if out is None:
        return []
    changed: list[ChangedFile] = []
    for line in out.splitlines():
        parts = line.split("\t")
        if len(parts) < 2:
            continue
        status = parts[0][:1]
        if status == "D":
            continue
        if status in ("R", "C") and len(parts) >= 3:
            changed.append(ChangedFile(parts[2].replace("\\", "/"), parts[1].replace("\\", "/")))
        else:
            changed.append(ChangedFile(parts[1].replace("\\", "/")))
    return changed


def diff_for_file(
    root: Path,
    changed: ChangedFile,
    staged: bool = False,
    commit_range: str | None = None,
    pr: bool = False,
    base_ref: str = "main",
) -> str:
    """Return the unified diff of one changed file ("" on git failure)."""
    paths = [changed.old_path, changed.path] if changed.old_path else [changed.path]
    args = ["diff", "-M", *_diff_args(staged, commit_range, pr, base_ref), "--", *paths]
    return _run_git(root, args) or ""


def ruby_source_files(changed: list[ChangedFile], spec_dir: str = "spec", exclude=()) -> list[ChangedFile]:
    """Keep ``.rb`` files outside *spec_dir* that match no *exclude* glob."""
    prefix = spec_dir.rstrip("/") + "/"
    kept = []
    for cf in changed:
        if not cf.path.endswith(".rb") or cf.path.startswith(prefix):
            continue
        if any(fnmatch.fnmatch(cf.path, pat) for pat in exclude):
            log.debug("excluded by config: %s", cf.path)
            continue
        kept.append(cf)
    return kept
