"""Formatting and parsing of numbers with unit prefixes"""

import logging
from collections import namedtuple

from .misc import signum
from .prefixes import PrefixSet
from .numbers import LocaleNumberFormat, INTEGER_MIN, INTEGER_MAX
from .grammar import Grammar, parse_template

LOGGER = logging.getLogger(__name__)

# Result of parsing at a position. On failure, value is None, index is the start position and
# error_index is where parsing failed; on success error_index is -1.
ParseResult = namedtuple("ParseResult", "value index error_index")


class UnitParseError(ValueError):
    """Text could not be parsed as a number with a unit"""
    def __init__(self, text, error_index, **kwargs):
        self.text = text
        self.error_index = error_index
        super().__init__(f"unparseable quantity '{text}' (position {error_index})", **kwargs)


class UnitFormat:
    """Formats numbers by choosing an appropriate unit prefix, like "MB" or "GiB".

    The number of units is formatted by a separate number format, so digit counts, grouping and
    rounding follow its settings. Text produced by :meth:`format` is read back by :meth:`parse`.

    For most use cases, prefer the factory class methods:

    - :meth:`si_instance` for a unit with SI prefixes, e.g. metres
    - :meth:`bytes_instance` for bytes with IEC prefixes (KiB, MiB, ...)
    - :meth:`si_bytes_instance` for bytes with SI prefixes (kB, MB, ...)

    Parameters
    ----------
    number_format : :class:`.NumberFormat`
        Formatter and parser for the number of units.
    symbol : :class:`str`
        The base unit's symbol, e.g. "B".
    prefixes : :class:`.PrefixSet`, optional
        The prefixes to choose from. Defaults to the SI prefixes.
    template : :class:`str`, optional
        Layout of the formatted text, with fields {0} (number), {1} (prefix) and optionally {2}
        (symbol).

    Notes
    -----
    Instances are not thread safe.
    """
    # Default layout: number, space, prefix, symbol.
    DEFAULT_TEMPLATE = "{0} {1}{2}"

    def __init__(self, number_format, symbol, prefixes=None, template=None):
        if prefixes is None:
            prefixes = PrefixSet.from_system("si")
        if template is None:
            template = self.DEFAULT_TEMPLATE

        self._number_format = number_format
        self._symbol = self._check_symbol(symbol)
        self._prefixes = prefixes
        self._template = template

        # parse grammars and prefix scales, built by _compile
        self._no_prefix_grammar = None
        self._prefix_grammar = None
        self._choices = None

        self._compile()

    @classmethod
    def si_instance(cls, symbol, locale=None):
        """Formatter for a unit with SI prefixes at intervals of 1000.

        The next prefix is used above 750.

        Parameters
        ----------
        symbol : :class:`str`
            The base unit's symbol, e.g. "m".
        locale : :class:`str` or :class:`babel.Locale`, optional
            The locale for number formatting. Defaults to the process locale.

        Returns
        -------
        :class:`.UnitFormat`
            The formatter.
        """
        return cls(LocaleNumberFormat(locale), symbol, PrefixSet.from_system("si"))

    @classmethod
    def bytes_instance(cls, locale=None):
        """Formatter for bytes with IEC prefixes (Ki, Mi, ...) at intervals of 1024.

        The next prefix is used above 768. The localized byte symbol is used, e.g. "o" in French.
        Numbers have at least one integer digit and at most one fraction digit.

        Parameters
        ----------
        locale : :class:`str` or :class:`babel.Locale`, optional
            The locale. Defaults to the process locale.

        Returns
        -------
        :class:`.UnitFormat`
            The formatter.
        """
        return cls._bytes_instance("iec", locale)

    @classmethod
    def si_bytes_instance(cls, locale=None):
        """Formatter for bytes with SI prefixes (k, M, ...) at intervals of 1000.

        The next prefix is used above 750. Otherwise as :meth:`bytes_instance`.
        """
        return cls._bytes_instance("si", locale)

    @classmethod
    def confusing_bytes_instance(cls, locale=None):
        """Formatter for bytes with SI letters (K, M, ...) at binary intervals of 1024.

        Otherwise as :meth:`bytes_instance`. Its output is easily mistaken for SI prefixes, so
        its use is discouraged; it is provided for compatibility with existing text.
        """
        LOGGER.warning("binary multiples with SI letters are ambiguous; prefer IEC prefixes")
        return cls._bytes_instance("binary", locale)

    @classmethod
    def _bytes_instance(cls, system, locale):
        from . import CONF

        number_format = LocaleNumberFormat(locale)
        number_format.minimum_integer_digits = CONF["bytes"]["minimum_integer_digits"]
        number_format.maximum_integer_digits = None
        number_format.minimum_fraction_digits = CONF["bytes"]["minimum_fraction_digits"]
        number_format.maximum_fraction_digits = CONF["bytes"]["maximum_fraction_digits"]

        symbol = CONF.localized_symbol("byte", number_format.locale)

        return cls(number_format, symbol, PrefixSet.from_system(system))

    @staticmethod
    def _check_symbol(symbol):
        if not isinstance(symbol, str):
            raise TypeError(f"symbol must be a string, not {type(symbol).__name__}")
        return symbol

    def _compile(self):
        """Rebuild the parse grammars and prefix scales from the current configuration.

        Nothing is replaced unless every part builds.
        """
        no_prefix_grammar = Grammar.from_template(self._template, self._symbol, with_prefix=False)
        prefix_grammar = Grammar.from_template(self._template, self._symbol)
        choices = self._prefixes.choices()

        self._no_prefix_grammar = no_prefix_grammar
        self._prefix_grammar = prefix_grammar
        self._choices = choices

        LOGGER.debug("compiled parse grammars %r and %r", self._no_prefix_grammar,
                     self._prefix_grammar)

    def select_prefix(self, number):
        """Choose the prefix for a number and scale the number to it.

        The next larger prefix is used while the magnitude is strictly greater than the next
        prefix threshold, and the next smaller one while the magnitude is at most the threshold
        divided by the interval. Zero and NaN get no prefix.

        Parameters
        ----------
        number : :class:`float`
            The number.

        Returns
        -------
        scaled : :class:`float`
            The number in units of the prefix, with the original sign.
        prefix : :class:`str`
            The prefix, or an empty string.
        """
        number = float(number)
        prefixes = self._prefixes
        prefix = ""

        sign = signum(number)
        number *= sign

        if number > prefixes.next_prefix_at:
            for candidate in prefixes.multiples:
                if number <= prefixes.next_prefix_at:
                    break

                prefix = candidate
                number /= prefixes.interval
        elif number != 0:
            threshold = prefixes.next_prefix_at / prefixes.interval

            if number <= threshold:
                for candidate in prefixes.subdivisions:
                    if number > threshold:
                        break

                    prefix = candidate
                    number *= prefixes.interval

        return number * sign, prefix

    def format(self, number):
        """Format a number with the appropriate prefix.

        Parameters
        ----------
        number : :class:`float` or :class:`int`
            The number, in base units.

        Returns
        -------
        :class:`str`
            The formatted number, prefix and symbol.
        """
        scaled, prefix = self.select_prefix(number)
        return self._template.format(self._number_format.format(scaled), prefix, self._symbol)

    def parse_at(self, text, position=0):
        """Parse a number with an optional prefix at a position in text.

        Text is read both without and with a prefix; the reading that consumes more characters
        wins. Text after the match is ignored.

        Parameters
        ----------
        text : :class:`str`
            The text.
        position : :class:`int`, optional
            Where parsing starts.

        Returns
        -------
        :class:`.ParseResult`
            The value in base units and the position after the match. The value is an
            :class:`int` if it is integral and fits in 64 bits, otherwise a :class:`float`. If
            nothing could be parsed, the value is None, the index is `position` and the error
            index is where parsing failed.
        """
        number_format = self._number_format

        plain = self._no_prefix_grammar.match(text, position, number_format, self._choices)
        prefixed = self._prefix_grammar.match(text, position, number_format, self._choices)

        if prefixed.number is not None and prefixed.index > position and (
                plain.number is None or plain.index <= position or prefixed.index > plain.index):
            match = prefixed
        elif plain.number is not None and plain.index > position:
            match = plain
        else:
            return ParseResult(None, position, prefixed.error_index)

        scaled = float(match.number) * match.scale

        if INTEGER_MIN <= scaled <= INTEGER_MAX and scaled == int(scaled):
            value = int(scaled)
        else:
            value = scaled

        return ParseResult(value, match.index, -1)

    def parse(self, text):
        """Parse a number with an optional prefix from the start of text.

        Parameters
        ----------
        text : :class:`str`
            The text.

        Returns
        -------
        :class:`int` or :class:`float`
            The value in base units.

        Raises
        ------
        :class:`.UnitParseError`
            If no number is found at the start of the text.
        """
        result = self.parse_at(text)

        if result.value is None:
            raise UnitParseError(text, result.error_index)

        return result.value

    @property
    def number_format(self):
        """Formatter and parser for the number of units."""
        return self._number_format

    @property
    def locale(self):
        """The number format's locale, if it has one."""
        return getattr(self._number_format, "locale", None)

    @property
    def symbol(self):
        """The base unit's symbol."""
        return self._symbol

    @symbol.setter
    def symbol(self, symbol):
        self._symbol = self._check_symbol(symbol)
        self._compile()

    @property
    def template(self):
        """Layout of formatted text: {0} is the number, {1} the prefix and {2} the symbol."""
        return self._template

    @template.setter
    def template(self, template):
        # validate before changing anything
        parse_template(template)
        self._template = template
        self._compile()

    @property
    def prefixes(self):
        """The prefix set."""
        return self._prefixes

    @prefixes.setter
    def prefixes(self, prefixes):
        if not isinstance(prefixes, PrefixSet):
            raise TypeError(f"prefixes must be a PrefixSet, not {type(prefixes).__name__}")
        self._prefixes = prefixes
        self._compile()

    @property
    def interval(self):
        """Number of times a prefix is larger than the next smaller prefix."""
        return self._prefixes.interval

    @interval.setter
    def interval(self, interval):
        self.prefixes = self._prefixes.replace(interval=interval)

    @property
    def next_prefix_at(self):
        """Largest number displayed before the next larger prefix is used."""
        return self._prefixes.next_prefix_at

    @next_prefix_at.setter
    def next_prefix_at(self, next_prefix_at):
        # only affects formatting; parsing accepts any prefix
        self._prefixes = self._prefixes.replace(next_prefix_at=next_prefix_at)

    @property
    def multiples(self):
        """Multiple prefixes in increasing order of magnitude, starting one interval up."""
        return self._prefixes.multiples

    @multiples.setter
    def multiples(self, multiples):
        self.prefixes = self._prefixes.replace(multiples=multiples)

    @property
    def subdivisions(self):
        """Subdivision prefixes in decreasing order of magnitude, starting one interval down."""
        return self._prefixes.subdivisions

    @subdivisions.setter
    def subdivisions(self, subdivisions):
        self.prefixes = self._prefixes.replace(subdivisions=subdivisions)

    @property
    def minimum_integer_digits(self):
        return self._number_format.minimum_integer_digits

    @minimum_integer_digits.setter
    def minimum_integer_digits(self, value):
        self._number_format.minimum_integer_digits = value
        self._compile()

    @property
    def maximum_integer_digits(self):
        return self._number_format.maximum_integer_digits

    @maximum_integer_digits.setter
    def maximum_integer_digits(self, value):
        self._number_format.maximum_integer_digits = value
        self._compile()

    @property
    def minimum_fraction_digits(self):
        return self._number_format.minimum_fraction_digits

    @minimum_fraction_digits.setter
    def minimum_fraction_digits(self, value):
        self._number_format.minimum_fraction_digits = value
        self._compile()

    @property
    def maximum_fraction_digits(self):
        return self._number_format.maximum_fraction_digits

    @maximum_fraction_digits.setter
    def maximum_fraction_digits(self, value):
        self._number_format.maximum_fraction_digits = value
        self._compile()

    @property
    def grouping_used(self):
        return self._number_format.grouping_used

    @grouping_used.setter
    def grouping_used(self, value):
        self._number_format.grouping_used = value
        self._compile()

    @property
    def rounding_mode(self):
        return self._number_format.rounding_mode

    @rounding_mode.setter
    def rounding_mode(self, value):
        self._number_format.rounding_mode = value
        self._compile()

    @property
    def parse_integer_only(self):
        return self._number_format.parse_integer_only

    @parse_integer_only.setter
    def parse_integer_only(self, value):
        self._number_format.parse_integer_only = value
        self._compile()

    def __repr__(self):
        return (f"{self.__class__.__name__}({self._number_format!r}, symbol={self._symbol!r}, "
                f"prefixes={self._prefixes!r}, template={self._template!r})")
