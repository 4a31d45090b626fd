from __future__ import annotations

"""Command line entry point for printing FavQs quotes."""

import json
from dataclasses import dataclass
from typing import Iterable

import click
from tabulate import tabulate

from favqsCli import __version__
from favqsCli.config import load_config
from favqsCli.models import Quote
from favqsCli.utils import log_json
from favqsCli.utils.log_json import JsonLogger
from api_clients.favqs_client import FavQsClient, FavQsError

DEFAULT_FILTER = "science"
DEFAULT_LIMIT = 1
OUTPUT_FORMATS = ("text", "json", "table")

_logger = JsonLogger("cli")


@dataclass(frozen=True)
class Settings:
    filter: str = DEFAULT_FILTER
    limit: int = DEFAULT_LIMIT
    random_filter: bool = False
    output: str = "text"


class AliasedGroup(click.Group):
    """Group that also resolves single-letter command aliases."""

    aliases = {"s": "single", "m": "many"}

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        return super().get_command(ctx, self.aliases.get(cmd_name, cmd_name))

    def resolve_command(self, ctx: click.Context, args: list[str]):
        _, cmd, rest = super().resolve_command(ctx, args)
        return (cmd.name if cmd else None), cmd, rest


def _filter_options(default_filter, default_limit, default_random):
    def decorator(fn):
        fn = click.option(
            "--random-filter",
            is_flag=True,
            default=default_random,
            help="Pick the filter at random from the built-in defaults.",
        )(fn)
        fn = click.option(
            "--limit",
            "-l",
            type=click.IntRange(min=0),
            default=default_limit,
            show_default=default_limit is not None,
            help="The max number of quotes to return.",
        )(fn)
        fn = click.option(
            "--filter",
            "-f",
            "filter_",
            default=default_filter,
            show_default=default_filter is not None,
            help="Tag used to filter quotes.",
        )(fn)
        return fn

    return decorator


def _format_option(default):
    return click.option(
        "--format",
        "output",
        type=click.Choice(OUTPUT_FORMATS),
        default=default,
        show_default=default is not None,
        help="Output format.",
    )


def _make_client() -> FavQsClient:
    return FavQsClient(load_config())


def _fail(command: str, exc: Exception) -> click.ClickException:
    _logger.info("cli.command_failed", command=command, kind=type(exc).__name__, error=str(exc))
    return click.ClickException(str(exc))


def _echo_quotes(quotes: Iterable[Quote], output: str) -> None:
    quotes = list(quotes)
    if output == "json":
        click.echo(json.dumps([q.to_dict() for q in quotes], ensure_ascii=False, indent=2))
    elif output == "table":
        click.echo(tabulate([(q.author, q.body) for q in quotes], headers=["Author", "Quote"]))
    else:
        for q in quotes:
            click.echo(f"Author: {q.author}\nQuote: {q.body}\n")


@click.group(cls=AliasedGroup)
@click.version_option(__version__)
@_filter_options(DEFAULT_FILTER, DEFAULT_LIMIT, False)
@_format_option("text")
@click.option("--verbose", "-v", is_flag=True, help="Emit INFO-level JSON logs on stderr.")
@click.pass_context
def cli(
    ctx: click.Context,
    filter_: str,
    limit: int,
    random_filter: bool,
    output: str,
    verbose: bool,
) -> None:
    """Print quotes from FavQs.

    The API key is read from FAVQS_APIKEY.
    """
    if verbose:
        log_json.configure("INFO")
    ctx.obj = Settings(filter=filter_, limit=limit, random_filter=random_filter, output=output)


@cli.command()
@_format_option(None)
@click.pass_obj
def single(settings: Settings, output: str | None) -> None:
    """Print the quote of the day (alias: s)."""
    output = output or settings.output
    try:
        with _make_client() as client:
            qotd = client.get_quote_of_day()
    except (FavQsError, ValueError) as exc:
        raise _fail("single", exc) from exc
    if output == "json":
        click.echo(json.dumps(qotd.to_dict(), ensure_ascii=False, indent=2))
    elif output == "table":
        click.echo(
            tabulate(
                [(qotd.qotd_date, qotd.quote.author, qotd.quote.body)],
                headers=["Date", "Author", "Quote"],
            )
        )
    else:
        click.echo(f"Author: {qotd.quote.author}\nQuote: {qotd.quote.body}")


@cli.command()
@_filter_options(None, None, None)
@_format_option(None)
@click.pass_obj
def many(
    settings: Settings,
    filter_: str | None,
    limit: int | None,
    random_filter: bool | None,
    output: str | None,
) -> None:
    """Print a list of quotes filtered by -f and limited by -l (alias: m)."""
    limit = settings.limit if limit is None else limit
    output = output or settings.output
    try:
        with _make_client() as client:
            if random_filter or settings.random_filter:
                tag = client.random_filter()
            else:
                tag = settings.filter if filter_ is None else filter_
            quotes = client.get_quotes(tag, limit)
    except (FavQsError, ValueError) as exc:
        raise _fail("many", exc) from exc
    _echo_quotes(quotes, output)


if __name__ == "__main__":  # pragma: no cover - module execution
    cli()
