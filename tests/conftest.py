"""Shared test fixtures and helpers for specsentry tests.

Provides:
- Git helpers: git_init(), git_commit(), git()
- CliRunner fixtures: cli_runner, invoke_cli()
- Tree builders for core tests: cls(), mod(), seq(), defn(), ...
- Composable project fixtures: git_repo -> ruby_project
- JSON validation helpers: parse_json_output(), assert_json_envelope()
"""

from __future__ import annotations

import json
import os
import subprocess

import pytest
from click.testing import CliRunner

from specsentry.public_api.tree import NodeKind, TreeNode

# ===========================================================================
# Git helpers
# ===========================================================================


def git(path, *args):
    """Run a git command in *path* and return its stdout."""
    result = subprocess.run(["git", *args], cwd=path, capture_output=True, text=True)
    return result.stdout


def git_init(path, branch="main"):
    """Initialize a git repo, add all files, and commit."""
    subprocess.run(["git", "init", "-q"], cwd=path, capture_output=True)
    subprocess.run(["git", "symbolic-ref", "HEAD", f"refs/heads/{branch}"], cwd=path, capture_output=True)
    subprocess.run(["git", "config", "user.email", "t@t.com"], cwd=path, capture_output=True)
    subprocess.run(["git", "config", "user.name", "Test"], cwd=path, capture_output=True)
    subprocess.run(["git", "config", "commit.gpgsign", "false"], cwd=path, capture_output=True)
    subprocess.run(["git", "add", "."], cwd=path, capture_output=True)
    subprocess.run(["git", "commit", "-q", "-m", "init"], cwd=path, capture_output=True)


def git_commit(path, msg="update"):
    """Stage all and commit."""
    subprocess.run(["git", "add", "."], cwd=path, capture_output=True)
    subprocess.run(["git", "commit", "-q", "-m", msg], cwd=path, capture_output=True)


# ===========================================================================
# Tree builders
# ===========================================================================


def _body(statements):
    if not statements:
        return ()
    if len(statements) == 1:
        return (statements[0],)
    return (TreeNode(NodeKind.SEQUENCE, tuple(statements)),)


def cls(name, *body, line=1):
    return TreeNode(NodeKind.CLASS_DEF, _body(body), name, line)


def mod(name, *body, line=1):
    return TreeNode(NodeKind.MODULE_DEF, _body(body), name, line)


def sclass(*body, line=1):
    return TreeNode(NodeKind.SINGLETON_CLASS_BLOCK, _body(body), None, line)


def seq(*children):
    return TreeNode(NodeKind.SEQUENCE, tuple(children))


def defn(name, line=1):
    return TreeNode(NodeKind.METHOD_DEF, (), name, line)


def defs(name, line=1):
    return TreeNode(NodeKind.SINGLETON_METHOD_DEF, (), name, line)


def call(name, *args, line=1):
    return TreeNode(NodeKind.CALL, tuple(args), name, line)


def sym(name):
    return TreeNode(NodeKind.SYMBOL, (), name)


def other(*children):
    return TreeNode(NodeKind.OTHER, tuple(children))


PRIVATE = call("private")


# ===========================================================================
# CliRunner helpers
# ===========================================================================


@pytest.fixture
def cli_runner():
    """Provide a Click CliRunner for in-process CLI testing."""
    return CliRunner()


def invoke_cli(runner, args, cwd=None, json_mode=False):
    """Invoke the specsentry CLI via CliRunner.

    Args:
        runner: CliRunner instance
        args: list of CLI arguments (e.g. ["missing-specs", "--changed"])
        cwd: directory to run in
        json_mode: if True, prepend --json flag
    Returns:
        click.testing.Result
    """
    from specsentry.cli import cli

    full_args = []
    if json_mode:
        full_args.append("--json")
    full_args.extend(args)

    old_cwd = os.getcwd()
    try:
        if cwd:
            os.chdir(str(cwd))
        result = runner.invoke(cli, full_args)
    finally:
        os.chdir(old_cwd)

    return result


# ===========================================================================
# JSON validation helpers
# ===========================================================================


def parse_json_output(result, command=None):
    """Parse JSON from a CliRunner result (stdout only)."""
    assert result.exit_code == 0, f"Command {command or '?'} failed (exit {result.exit_code}):\n{result.output}"
    try:
        return json.loads(result.stdout)
    except json.JSONDecodeError as e:
        pytest.fail(f"Invalid JSON from {command or '?'}: {e}\nOutput was:\n{result.stdout[:500]}")


def assert_json_envelope(data, command=None):
    """Validate that a parsed JSON dict follows the envelope contract."""
    assert isinstance(data, dict), f"Expected dict, got {type(data)}"
    for key in ("schema", "command", "version", "summary", "_meta"):
        assert key in data, f"Missing {key!r} key in envelope"
    assert "timestamp" in data["_meta"]
    if command:
        assert data["command"] == command, f"Expected command={command}, got {data['command']}"
    assert isinstance(data["summary"], dict)
    assert "verdict" in data["summary"]


# ===========================================================================
# Composable project fixtures
# ===========================================================================


USER_RB = """\
class User
  def full_name
  end

  def self.find_by_email(email)
  end

  private

  def secret
  end
end
"""

USER_SPEC_RB = """\
require "rails_helper"

RSpec.describe User do
  describe "#full_name" do
  end
end
"""


@pytest.fixture
def git_repo(tmp_path):
    """Create an empty git repo on branch main with an initial commit."""
    repo = tmp_path / "repo"
    repo.mkdir()
    (repo / ".gitignore").write_text(".specsentry/\n")
    git_init(repo)
    return repo


@pytest.fixture
def ruby_project(git_repo):
    """A tiny Rails-shaped project: one model and its spec, committed."""
    (git_repo / "app" / "models").mkdir(parents=True)
    (git_repo / "spec" / "models").mkdir(parents=True)
    (git_repo / "app" / "models" / "user.rb").write_text(USER_RB)
    (git_repo / "spec" / "models" / "user_spec.rb").write_text(USER_SPEC_RB)
    git_commit(git_repo, "add user")
    return git_repo
