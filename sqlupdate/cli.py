#!/usr/bin/env python3
"""
sqlupdate – send the SQL statements of a text file to a database.

    sqlupdate [OPTIONS] <pool> <input file> [<separator>]

• ``pool``        name of a connection pool defined in sqlupdate.config.yml
• ``input file``  text file holding the SQL statements
• ``separator``   optional statement delimiter; without it every line of the
                  file is a statement of its own

Lines starting with ``#`` are comments.  When a separator is given, lines
starting with ``--`` are comments too, and a comment line discards any
statement still waiting for its separator.
"""
from __future__ import annotations

import logging
import pathlib
import sys

import click
import sqlparse

from sqlupdate import __version__
from sqlupdate.config import ConfigError, load
from sqlupdate.driver import CommitError, DBConnectionError
from sqlupdate.loader import LoadError, load_text
from sqlupdate.runner import ExecutionError, run_file
from sqlupdate.splitter import split_sql

log = logging.getLogger("sqlupdate")

_LOG_FORMAT = "%(asctime)s - %(levelname)s - [%(module)s:%(lineno)d] - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _configure_logging(verbose: int) -> None:
    level = {0: logging.WARNING, 1: logging.INFO}.get(verbose, logging.DEBUG)
    logging.basicConfig(format=_LOG_FORMAT, datefmt=_DATE_FORMAT)
    log.setLevel(level)


def _print_statements(statements: list[str], separator: str | None) -> None:
    for n, sql in enumerate(statements, 1):
        click.echo(f"-- (DRY) statement {n}")
        pretty = sqlparse.format(sql, reindent=True, keyword_case="upper")
        click.echo(f"{pretty}{separator or ''}\n")
    click.echo(f"-- DRY‑RUN complete ({len(statements)} statement(s), nothing executed)")


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("pool", required=False)
@click.argument("file", required=False, type=click.Path(path_type=pathlib.Path))
@click.argument("separator", required=False)
@click.option(
    "-c", "--config", "config_path",
    type=click.Path(dir_okay=False), envvar="SQLUPDATE_CONFIG",
    help="pool config YAML (default: ./sqlupdate.config.yml)",
)
@click.option("--encoding", default="utf-8", show_default=True, help="input file encoding")
@click.option("--dry-run", is_flag=True, help="print the statements, do not connect")
@click.option("--strict", is_flag=True, help="exit with status 1 when a statement fails")
@click.option("-v", "--verbose", count=True, help="-v for progress, -vv to trace every statement")
@click.version_option(__version__, prog_name="sqlupdate")
@click.pass_context
def main(ctx, pool, file, separator, config_path, encoding, dry_run, strict, verbose):
    """Issue the SQL statements in FILE against the connection pool POOL."""
    if pool is None or file is None:
        click.echo(ctx.get_usage())
        ctx.exit(0)

    _configure_logging(verbose)
    if separator is not None:
        click.echo(f"Separator: {separator}")

    if dry_run:
        try:
            text = load_text(file, encoding)
        except LoadError as exc:
            click.echo(str(exc), err=True)
            sys.exit(1)
        _print_statements(split_sql(text, separator), separator)
        return

    try:
        cfg = load(config_path, pool)
    except ConfigError as exc:
        click.echo(f"Config error: {exc}", err=True)
        sys.exit(1)

    try:
        count = run_file(cfg, file, separator, encoding=encoding, logger=log)
    except LoadError as exc:
        click.echo(str(exc), err=True)
        sys.exit(1)
    except (DBConnectionError, CommitError) as exc:
        click.echo(str(exc), err=True)
        sys.exit(1)
    except ExecutionError as exc:
        click.echo(f"{exc}\n  SQL: {exc.sql}", err=True)
        if exc.__cause__ is not None:
            click.echo(f"  cause: {exc.__cause__!r}", err=True)
        # Failed statements do not change the exit status unless --strict.
        if strict:
            sys.exit(1)
        return

    click.echo(f"Executed {count} statement(s).")
