"""Command-line interface: grep-style byte search over files.

    patscan find PATTERN [FILE...] [-i] [--count | --first]
    patscan multi -p PATTERN [-p PATTERN ...] [FILE...] [-i] [--count]
    patscan scan --config rules.yaml [FILE...]

Files are read in binary; "-" (or no file at all) reads standard input.
Patterns are taken as raw argv bytes, so non-UTF-8 bytes can be searched for.
Exit status is 0 when something matched, 1 when nothing did and 2 on
errors, as with grep.
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

import click

from patscan import __version__
from patscan._aho_corasick import AhoCorasick
from patscan._boyer_moore import BoyerMoore
from patscan._config import ConfigParseError, load_search_config
from patscan._logging import setup_logging, verbosity_level
from patscan._registry import RegistryBuilder, SearcherError, register_core_searchers

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = logging.getLogger(__name__)

STDIN_LABEL = "(standard input)"

EXIT_MATCH = 0
EXIT_NO_MATCH = 1


class ScanError(click.ClickException):
    """Config or I/O failure; exits with status 2."""

    exit_code = 2


@click.group()
@click.option("-v", "--verbose", count=True, help="Increase log verbosity (-vv for debug)")
@click.version_option(__version__, prog_name="patscan")
def main(verbose: int) -> None:
    """Exact byte-sequence search with Boyer-Moore and Aho-Corasick."""
    setup_logging(verbosity_level(verbose))


@main.command()
@click.argument("pattern")
@click.argument("files", nargs=-1, type=click.Path(dir_okay=False, allow_dash=True))
@click.option("-i", "--ignore-case", is_flag=True, help="Fold ASCII letters")
@click.option("--count", "mode", flag_value="count", help="Print the number of matches")
@click.option("--first", "mode", flag_value="first", help="Print only the first match")
@click.pass_context
def find(
    ctx: click.Context,
    pattern: str,
    files: tuple[str, ...],
    ignore_case: bool,
    mode: str | None,
) -> None:
    """Search for one PATTERN (Boyer-Moore)."""
    matcher = BoyerMoore(os.fsencode(pattern), ignore_case=ignore_case)
    found = False
    for label, data in _read_inputs(files):
        if mode == "count":
            n = matcher.count(data)
            found = found or n > 0
            click.echo(f"{label}:{n}")
        elif mode == "first":
            first = matcher.find_first(data)
            if first is not None:
                found = True
                click.echo(f"{label}:{first}")
        else:
            for start in matcher.iter_starts(data):
                found = True
                click.echo(f"{label}:{start}")
    ctx.exit(EXIT_MATCH if found else EXIT_NO_MATCH)


@main.command()
@click.option(
    "-p", "--pattern", "patterns", multiple=True, required=True, help="Keyword (repeatable)"
)
@click.argument("files", nargs=-1, type=click.Path(dir_okay=False, allow_dash=True))
@click.option("-i", "--ignore-case", is_flag=True, help="Fold ASCII letters")
@click.option("--count", is_flag=True, help="Print the number of matches")
@click.pass_context
def multi(
    ctx: click.Context,
    patterns: tuple[str, ...],
    files: tuple[str, ...],
    ignore_case: bool,
    count: bool,
) -> None:
    """Search for several keywords at once (Aho-Corasick)."""
    automaton = AhoCorasick([os.fsencode(p) for p in patterns], ignore_case=ignore_case)
    keywords = [click.format_filename(p) for p in patterns]
    found = False
    for label, data in _read_inputs(files):
        if count:
            n = automaton.count(data)
            found = found or n > 0
            click.echo(f"{label}:{n}")
            continue
        for match in automaton.iter_matches(data):
            found = True
            click.echo(f"{label}:{match.start}-{match.end}:{keywords[match.pattern_index]}")
    ctx.exit(EXIT_MATCH if found else EXIT_NO_MATCH)


@main.command()
@click.option(
    "-c",
    "--config",
    "config_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="YAML or JSON search config",
)
@click.argument("files", nargs=-1, type=click.Path(dir_okay=False, allow_dash=True))
@click.pass_context
def scan(ctx: click.Context, config_path: str, files: tuple[str, ...]) -> None:
    """Run every searcher declared in a config file."""
    registry = register_core_searchers(RegistryBuilder()).build()
    try:
        search_set = registry.load(load_search_config(config_path))
    except (ConfigParseError, SearcherError) as e:
        raise ScanError(f"{config_path}: {e}") from e
    except OSError as e:
        raise ScanError(str(e)) from e

    found = False
    for label, data in _read_inputs(files):
        for name, results in search_set.scan(data).items():
            if results:
                found = True
                click.echo(f"{label}:{name}:{len(results)}")
    ctx.exit(EXIT_MATCH if found else EXIT_NO_MATCH)


def _read_inputs(files: tuple[str, ...]) -> Iterator[tuple[str, bytes]]:
    """Yield (label, content) for each file, stdin for "-" or no files."""
    for path in files or ("-",):
        label = STDIN_LABEL if path == "-" else click.format_filename(path)
        try:
            with click.open_file(path, "rb") as f:
                data = f.read()
        except OSError as e:
            raise ScanError(f"{label}: {e.strerror or e}") from e
        logger.debug("read %d bytes from %s", len(data), label)
        yield label, data
