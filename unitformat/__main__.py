"""Unit format command line interface"""

import sys
import logging
from pprint import pformat
import click
from tabulate import tabulate
from babel import UnknownLocaleError

from . import __version__, PROGRAM, DESCRIPTION, set_log_verbosity
from .format import UnitFormat
from .config import UnitFormatConfig, ConfigDoesntExistException, ConfigAlreadyExistsException

LOGGER = logging.getLogger(__name__)
CONF = UnitFormatConfig()

# Formatter kinds and their factories.
KINDS = {
    "si": UnitFormat.si_instance,
    "bytes": UnitFormat.bytes_instance,
    "si-bytes": UnitFormat.si_bytes_instance,
    "confusing-bytes": UnitFormat.confusing_bytes_instance,
}

KIND_CHOICE = click.Choice(tuple(KINDS), case_sensitive=False)

# Shared arguments:
# https://github.com/pallets/click/issues/108
class State:
    """CLI state"""
    MIN_VERBOSITY = logging.WARNING
    MAX_VERBOSITY = logging.DEBUG

    def __init__(self):
        self._verbosity = self.MIN_VERBOSITY

    @property
    def verbosity(self):
        """Verbosity on stdout"""
        return self._verbosity

    @verbosity.setter
    def verbosity(self, verbosity):
        self._verbosity = self.MIN_VERBOSITY - 10 * int(verbosity)

        if self._verbosity < self.MAX_VERBOSITY:
            self._verbosity = self.MAX_VERBOSITY

        set_log_verbosity(self._verbosity)

        # write some debug info now that we've set up the logger
        LOGGER.debug("%s %s", PROGRAM, __version__)


def set_verbosity(ctx, _, value):
    """Set stdout verbosity"""
    state = ctx.ensure_object(State)
    state.verbosity = value

def formatter_options(func):
    """Options shared by commands that build a formatter."""
    options = [
        click.option("-k", "--kind", type=KIND_CHOICE, default="bytes", show_default=True,
                     help="Prefix system and unit."),
        click.option("-s", "--symbol", help="Base unit symbol. Required for the 'si' kind."),
        click.option("-l", "--locale", help="Locale, e.g. 'fr' or 'en_GB'. Defaults to the "
                     "process locale."),
        click.option("--next-prefix-at", type=click.FloatRange(min=0, min_open=True),
                     help="Largest number displayed before the next prefix is used."),
        click.option("--min-fraction", type=click.IntRange(min=0),
                     help="Minimum number of fraction digits."),
        click.option("--max-fraction", type=click.IntRange(min=0),
                     help="Maximum number of fraction digits."),
        click.option("--grouping/--no-grouping", default=None,
                     help="Group integer digits, e.g. 1,024."),
        click.option("-t", "--template", help="Output template: {0} is the number, {1} the "
                     "prefix and {2} the symbol."),
    ]
    for option in reversed(options):
        func = option(func)
    return func

def build_formatter(kind, symbol, locale, next_prefix_at, min_fraction, max_fraction, grouping,
                    template):
    """Create formatter from command line options."""
    kind = kind.lower()
    try:
        if kind == "si":
            if symbol is None:
                raise click.UsageError("--symbol is required for the 'si' kind")
            unit_format = KINDS[kind](symbol, locale=locale)
        else:
            unit_format = KINDS[kind](locale=locale)
            if symbol is not None:
                unit_format.symbol = symbol
    except (UnknownLocaleError, ValueError) as error:
        raise click.BadParameter(str(error), param_hint="--locale")

    try:
        if next_prefix_at is not None:
            unit_format.next_prefix_at = next_prefix_at
        if min_fraction is not None:
            unit_format.minimum_fraction_digits = min_fraction
        if max_fraction is not None:
            unit_format.maximum_fraction_digits = max_fraction
        if grouping is not None:
            unit_format.grouping_used = grouping
        if template is not None:
            unit_format.template = template
    except ValueError as error:
        raise click.UsageError(str(error))

    LOGGER.debug("using %r", unit_format)
    return unit_format

@click.group(help=DESCRIPTION)
@click.version_option(version=__version__, prog_name=PROGRAM)
@click.option("-v", "--verbose", count=True, default=0, callback=set_verbosity, expose_value=False,
              help="Enable verbose output. Supply extra flag for greater verbosity, i.e. \"-vv\".")
def cli():
    """Base CLI command group"""
    pass

# negative values look like short options
@cli.command("format", context_settings={"ignore_unknown_options": True})
@click.argument("values", type=float, nargs=-1, required=True, metavar="VALUE...")
@formatter_options
def format_values(values, **options):
    """Format numbers with unit prefixes.

    Values are in base units, e.g. bytes:

        unitformat format 26112

    prints "25.5 KiB".
    """
    unit_format = build_formatter(**options)
    for value in values:
        click.echo(unit_format.format(value))

@cli.command("parse")
@click.argument("texts", nargs=-1, required=True, metavar="TEXT...")
@formatter_options
def parse_texts(texts, **options):
    """Parse numbers with unit prefixes into base units.

    Each text must start with a number, optionally followed by a prefixed unit:

        unitformat parse "25.5 KiB"

    prints 26112. Put texts starting with a minus sign after "--", e.g.

        unitformat parse -- "-1 KiB"
    """
    unit_format = build_formatter(**options)
    failed = False

    for text in texts:
        result = unit_format.parse_at(text)

        if result.value is None:
            click.echo(f"cannot parse '{text}' (position {result.error_index})", err=True)
            failed = True
            continue

        if result.index < len(text):
            LOGGER.info("ignoring trailing text '%s'", text[result.index:])

        click.echo(result.value)

    if failed:
        sys.exit(1)

@cli.command("prefixes")
@click.option("-k", "--kind", type=KIND_CHOICE, default="bytes", show_default=True,
              help="Prefix system and unit.")
@click.option("-l", "--locale", help="Locale used for the unit symbol.")
def show_prefixes(kind, locale):
    """Print a formatter's prefixes and their scale factors."""
    unit_format = build_formatter(kind=kind, symbol="" if kind.lower() == "si" else None,
                                  locale=locale, next_prefix_at=None, min_fraction=None,
                                  max_fraction=None, grouping=None, template=None)
    prefixes = unit_format.prefixes
    rows = [[prefix, f"{scale:g}"] for scale, prefix in prefixes.scales()]

    click.echo(f"interval {prefixes.interval:g}, next prefix above {prefixes.next_prefix_at:g}")
    click.echo(tabulate(rows, ["prefix", "scale"], tablefmt=CONF["format"]["table"]))

@cli.group()
def config():
    """Unitformat configuration functions."""
    pass

@config.command("path")
def config_path():
    """Print user config file path.

    Note: this path may not exist.
    """
    click.echo(click.format_filename(CONF.user_config_path))

@config.command("create")
def config_create():
    """Create empty config file in user directory."""
    # create config
    try:
        CONF.create_user_config()
    except ConfigAlreadyExistsException as e:
        click.echo(e, err=True)
    else:
        click.echo(f"Config created at {CONF.user_config_path}")

@config.command("edit")
def config_edit():
    """Open user config file in default editor."""
    try:
        CONF.open_user_config()
    except ConfigDoesntExistException:
        click.echo("Configuration file doesn't exist. Try 'unitformat config create'.", err=True)

@config.command("remove")
def config_remove():
    """Remove user config file."""
    path = click.format_filename(CONF.user_config_path)
    click.confirm(f"Delete config file at {path}?", abort=True)
    try:
        CONF.remove_user_config()
    except ConfigDoesntExistException as e:
        click.echo(e, err=True)

@config.command("show")
@click.option("--paged", is_flag=True, default=False, help="Print with paging.")
def config_show(paged):
    """Print the config that unitformat uses."""
    echo = click.echo_via_pager if paged else click.echo
    echo(pformat(CONF))


if __name__ == "__main__":
    cli()
