## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# bracefmt — Render brace templates from the command line.
#

import sys
import json
import logging
from typing import Any
from dataclasses import dataclass, replace

import click

from .errors import FormatError, RenderError
from .runtime import Runtime, RenderConfig
from .formatting import write_without_ansi


@dataclass(frozen=True)
class CliConfig:
    decode_json: bool
    plain: bool
    newline: bool


def _decode(text: str, decode_json: bool) -> Any:
    if not decode_json: return text
    try:
        return json.loads(text)
    except ValueError:
        return text


def _parse_assignments(pairs: tuple[str, ...], decode_json: bool) -> dict[str, Any]:
    named = {}
    for pair in pairs:
        key, sep, value = pair.partition('=')
        if not sep or not key:
            raise click.BadParameter(f"Expected KEY=VALUE, got `{pair}`.", param_hint="--set")
        named[key] = _decode(value, decode_json)
    return named


def format_error_context(exc: FormatError) -> str:
    """Show the offending format string with the faulty brace highlighted."""
    text, pos = exc.format or '', exc.position
    if pos is None or not 0 <= pos < len(text):
        return f"\033[97m    {text}\033[0m\n"
    marked = text[:pos] + f"\033[48;5;30m\033[1;97m{text[pos]}\033[0m" + text[pos + 1:]
    return f"\033[97m    {marked}\n\033[90m    {' ' * pos}^ column {pos + 1}\033[0m\n"


def _fatal(message: str, detail: str, context: str = '') -> None:
    click.echo(f'\033[30;43m {message} \033[0m {detail}\n{context}', err=True, nl=False)
    sys.exit(1)


@click.command(context_settings={'ignore_unknown_options': True})
@click.argument('format')
@click.argument('args', nargs=-1)
@click.option('--set', '-s', 'assignments', multiple=True, metavar='KEY=VALUE', help='Named argument, may be repeated.')
@click.option('--json', '-j', 'decode_json', is_flag=True, help='Decode arguments and named values as JSON when possible.')
@click.option('--no-color', is_flag=True, help='Ignore color tags in placeholders.')
@click.option('--plain', '-p', is_flag=True, help='Strip ANSI color codes from the output.')
@click.option('--expand-env', is_flag=True, help='Expand $VARIABLES in the rendered output.')
@click.option('--check', is_flag=True, help='Only validate brace balance of FORMAT.')
@click.option('--no-newline', '-n', is_flag=True, help='Do not print the trailing newline.')
@click.option('--log-level', default='WARNING', show_default=True,
              type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False))
def cli(format: str, args: tuple[str, ...], assignments: tuple[str, ...], decode_json: bool, no_color: bool,
        plain: bool, expand_env: bool, check: bool, no_newline: bool, log_level: str) -> None:
    logging.basicConfig(level=log_level.upper(), format='%(levelname)s %(name)s: %(message)s')
    options = CliConfig(decode_json=decode_json, plain=plain, newline=not no_newline)

    config = RenderConfig.from_env()
    if no_color: config = replace(config, color=False)
    if expand_env: config = replace(config, expand_env=True)
    runtime = Runtime(config=config)

    if check:
        if (problem := runtime.validate(format)) is not None:
            _fatal("FORMAT ERROR.", f"Template has {problem.args[0]}!", format_error_context(problem))
        click.echo("ok")
        return

    values = [_decode(a, options.decode_json) for a in args]
    named = _parse_assignments(assignments, options.decode_json)
    try:
        text = runtime.render(format, *values, **named)
    except RenderError as exc:
        cause = type(exc.__cause__).__name__ if exc.__cause__ else type(exc).__name__
        _fatal("RENDER ERROR.", f"Placeholder `\033[1;97m{exc.placeholder}\033[0m` failed (Exception: \033[33m{cause}\033[0m)",
               f"\033[90m{exc.args[0]}\033[0m\n")

    write = write_without_ansi(sys.stdout.write) if options.plain else sys.stdout.write
    write(text + ('\n' if options.newline else ''))


def main(argv: list[str] | None = None) -> None:
    cli.main(args=argv, prog_name='bracefmt')


if __name__ == "__main__":
    main()
