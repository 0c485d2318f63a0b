"""Click CLI entry point with lazy-loaded subcommands."""

import logging

import click


# Lazy-loading command group: imports command modules only when invoked.
# This keeps tree-sitter out of `specsentry --help` and `config`.
_COMMANDS = {
    "public-api":    ("specsentry.commands.cmd_public_api",    "public_api"),
    "missing-specs": ("specsentry.commands.cmd_missing_specs", "missing_specs"),
    "config":        ("specsentry.commands.cmd_config",        "config"),
}


class LazyGroup(click.Group):
    """A Click group that lazy-loads command modules on first access."""

    def list_commands(self, ctx):
        return sorted(_COMMANDS.keys())

    def get_command(self, ctx, cmd_name):
        if cmd_name not in _COMMANDS:
            return None
        module_path, attr_name = _COMMANDS[cmd_name]
        import importlib
        mod = importlib.import_module(module_path)
        return getattr(mod, attr_name)


@click.group(cls=LazyGroup)
@click.version_option(package_name="specsentry")
@click.option('--json', 'json_mode', is_flag=True, help='Output in JSON format')
@click.option('-v', '--verbose', is_flag=True, help='Enable verbose (debug) logging')
@click.pass_context
def cli(ctx, json_mode, verbose):
    """specsentry: flag public Ruby methods that have no spec."""
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    if verbose:
        logging.getLogger("specsentry").setLevel(logging.DEBUG)
    ctx.ensure_object(dict)
    ctx.obj['json'] = json_mode
