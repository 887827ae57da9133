"""Locale aware number formatting and parsing"""

import abc
import math
import decimal
import logging
from babel import Locale, default_locale
from babel.numbers import (format_decimal, get_decimal_symbol, get_group_symbol,
                           get_minus_sign_symbol, get_exponential_symbol, get_infinity_symbol)

LOGGER = logging.getLogger(__name__)

# Rounding modes understood by number formats.
ROUNDING_MODES = (decimal.ROUND_UP, decimal.ROUND_DOWN, decimal.ROUND_CEILING,
                  decimal.ROUND_FLOOR, decimal.ROUND_HALF_UP, decimal.ROUND_HALF_DOWN,
                  decimal.ROUND_HALF_EVEN, decimal.ROUND_05UP)

# Range of values returned as integers by parsers.
INTEGER_MIN = -2 ** 63
INTEGER_MAX = 2 ** 63 - 1

# Space characters used for digit grouping, which are treated as equivalent when parsing.
SPACE_GROUP_SYMBOLS = ("\u00a0", "\u202f")

DIGITS = "0123456789"


class NumberFormat(metaclass=abc.ABCMeta):
    """Number formatter and parser.

    This handles the digit settings shared by all implementations. Subclasses implement
    :meth:`format` and :meth:`parse`.

    Parameters
    ----------
    minimum_integer_digits, maximum_integer_digits : :class:`int`, optional
        Integer digit bounds. A maximum of None means unlimited.
    minimum_fraction_digits, maximum_fraction_digits : :class:`int`, optional
        Fraction digit bounds.
    grouping_used : :class:`bool`, optional
        Whether to group integer digits.
    rounding_mode : :class:`str`, optional
        A :mod:`decimal` rounding mode, e.g. :data:`decimal.ROUND_HALF_EVEN`.
    parse_integer_only : :class:`bool`, optional
        Whether parsing stops at the decimal separator.
    """
    def __init__(self, minimum_integer_digits=1, maximum_integer_digits=None,
                 minimum_fraction_digits=0, maximum_fraction_digits=3, grouping_used=True,
                 rounding_mode=decimal.ROUND_HALF_EVEN, parse_integer_only=False):
        self._minimum_integer_digits = 1
        self._maximum_integer_digits = None
        self._minimum_fraction_digits = 0
        self._maximum_fraction_digits = 3
        self._rounding_mode = decimal.ROUND_HALF_EVEN

        self.maximum_integer_digits = maximum_integer_digits
        self.minimum_integer_digits = minimum_integer_digits
        self.maximum_fraction_digits = maximum_fraction_digits
        self.minimum_fraction_digits = minimum_fraction_digits
        self.grouping_used = grouping_used
        self.rounding_mode = rounding_mode
        self.parse_integer_only = parse_integer_only

    @abc.abstractmethod
    def format(self, number):
        """Format a number as text.

        Parameters
        ----------
        number : :class:`float`, :class:`int` or :class:`~decimal.Decimal`
            The number.

        Returns
        -------
        :class:`str`
            The formatted number.
        """
        raise NotImplementedError

    @abc.abstractmethod
    def parse(self, text, position=0):
        """Parse a number at a position in text.

        Parsing stops at the first character that cannot be part of the number; the rest of the
        text is left alone.

        Parameters
        ----------
        text : :class:`str`
            The text.
        position : :class:`int`, optional
            Where the number starts.

        Returns
        -------
        :class:`tuple` or None
            The number (an :class:`int` if it is integral and fits in 64 bits, otherwise a
            :class:`float`) and the position after it, or None if there is no number at
            `position`.
        """
        raise NotImplementedError

    @staticmethod
    def _check_digits(value, name):
        value = int(value)
        if value < 0:
            raise ValueError(f"{name} cannot be negative (got {value})")
        return value

    @property
    def minimum_integer_digits(self):
        return self._minimum_integer_digits

    @minimum_integer_digits.setter
    def minimum_integer_digits(self, value):
        value = self._check_digits(value, "minimum integer digits")
        self._minimum_integer_digits = value
        if self._maximum_integer_digits is not None and self._maximum_integer_digits < value:
            self._maximum_integer_digits = value

    @property
    def maximum_integer_digits(self):
        """Maximum integer digits, or None if unlimited."""
        return self._maximum_integer_digits

    @maximum_integer_digits.setter
    def maximum_integer_digits(self, value):
        if value is not None:
            value = self._check_digits(value, "maximum integer digits")
            if self._minimum_integer_digits > value:
                self._minimum_integer_digits = value
        self._maximum_integer_digits = value

    @property
    def minimum_fraction_digits(self):
        return self._minimum_fraction_digits

    @minimum_fraction_digits.setter
    def minimum_fraction_digits(self, value):
        value = self._check_digits(value, "minimum fraction digits")
        self._minimum_fraction_digits = value
        if self._maximum_fraction_digits < value:
            self._maximum_fraction_digits = value

    @property
    def maximum_fraction_digits(self):
        return self._maximum_fraction_digits

    @maximum_fraction_digits.setter
    def maximum_fraction_digits(self, value):
        value = self._check_digits(value, "maximum fraction digits")
        self._maximum_fraction_digits = value
        if self._minimum_fraction_digits > value:
            self._minimum_fraction_digits = value

    @property
    def grouping_used(self):
        return self._grouping_used

    @grouping_used.setter
    def grouping_used(self, value):
        self._grouping_used = bool(value)

    @property
    def rounding_mode(self):
        return self._rounding_mode

    @rounding_mode.setter
    def rounding_mode(self, value):
        if value not in ROUNDING_MODES:
            raise ValueError(f"unrecognised rounding mode '{value}' (use one of "
                             f"{', '.join(ROUNDING_MODES)})")
        self._rounding_mode = value

    @property
    def parse_integer_only(self):
        return self._parse_integer_only

    @parse_integer_only.setter
    def parse_integer_only(self, value):
        self._parse_integer_only = bool(value)


class LocaleNumberFormat(NumberFormat):
    """Number format using a locale's symbols, backed by Babel.

    Floats are rounded from their shortest decimal representation, i.e. the digits shown by
    :func:`repr`, rather than their exact binary value. Ties therefore round as written: with one
    fraction digit 1.15 becomes "1.2", although the float 1.15 is slightly below 1.15.

    Parameters
    ----------
    locale : :class:`str` or :class:`babel.Locale`, optional
        The locale. Defaults to the process locale, falling back to the configured default.

    Other parameters are passed to :class:`.NumberFormat`.
    """
    def __init__(self, locale=None, **kwargs):
        self._locale = None
        self._symbols = None
        self.locale = locale
        super().__init__(**kwargs)

    @property
    def locale(self):
        return self._locale

    @locale.setter
    def locale(self, locale):
        self._locale = self.get_locale(locale)
        self._symbols = NumberSymbols(self._locale)

    @staticmethod
    def get_locale(locale=None):
        """Resolve a locale.

        Parameters
        ----------
        locale : :class:`str` or :class:`babel.Locale`, optional
            A locale or locale identifier such as "fr" or "en_GB". If None, the process locale is
            used, or the configured default if the process has none.

        Returns
        -------
        :class:`babel.Locale`
            The locale.

        Raises
        ------
        :class:`babel.UnknownLocaleError`
            If there is no data for the locale.
        """
        if isinstance(locale, Locale):
            return locale

        if locale is None:
            locale = default_locale("LC_NUMERIC")

            if locale is None:
                from . import CONF
                locale = CONF["format"]["locale"]
                LOGGER.debug("no process locale set, using %s", locale)

        return Locale.parse(str(locale).replace("-", "_"))

    @property
    def symbols(self):
        """The locale's number symbols."""
        return self._symbols

    @property
    def pattern(self):
        """Babel number pattern matching the digit settings."""
        integer = "0" * self.minimum_integer_digits

        if self.grouping_used:
            integer = integer.rjust(4, "#")
            integer = integer[:-3] + "," + integer[-3:]
        elif not integer:
            integer = "#"

        if self.maximum_fraction_digits > 0:
            fraction = ("." + "0" * self.minimum_fraction_digits
                        + "#" * (self.maximum_fraction_digits - self.minimum_fraction_digits))
        else:
            fraction = ""

        return integer + fraction

    def format(self, number):
        if isinstance(number, decimal.Decimal):
            value = number
        elif isinstance(number, int):
            value = decimal.Decimal(number)
        else:
            # the shortest representation avoids binary noise in the last digits
            value = decimal.Decimal(repr(float(number)))

        if value.is_nan():
            return self.symbols.nan
        if value.is_infinite():
            return (self.symbols.minus if value.is_signed() else "") + self.symbols.infinity

        # enough precision for every digit that survives rounding
        context = decimal.Context(prec=max(value.adjusted(), 0) + self.maximum_fraction_digits + 2,
                                  rounding=self.rounding_mode)
        value = value.quantize(decimal.Decimal(1).scaleb(-self.maximum_fraction_digits),
                               context=context)

        if (self.maximum_integer_digits is not None
                and value.adjusted() >= self.maximum_integer_digits):
            # drop high order digits
            value = context.remainder(value, decimal.Decimal(1).scaleb(self.maximum_integer_digits))

        with decimal.localcontext(context):
            return format_decimal(value, format=self.pattern, locale=self.locale)

    def parse(self, text, position=0):
        symbols = self.symbols
        index = position
        negative = False

        for minus in symbols.minus_signs:
            if text.startswith(minus, index):
                negative = True
                index += len(minus)
                break

        if text.startswith(symbols.infinity, index):
            return -math.inf if negative else math.inf, index + len(symbols.infinity)
        if not negative and text.startswith(symbols.nan, index):
            return math.nan, index + len(symbols.nan)

        integer, index = self._scan_digits(text, index, grouping=self.grouping_used)

        fraction = ""
        if not self.parse_integer_only and text.startswith(symbols.decimal, index):
            fraction, after = self._scan_digits(text, index + len(symbols.decimal))
            if integer or fraction:
                index = after

        if not integer and not fraction:
            return None

        exponent, index = self._scan_exponent(text, index)

        value = decimal.Decimal(f"{'-' if negative else ''}{integer or '0'}.{fraction or '0'}"
                                f"E{exponent}")

        if value.is_zero() and negative:
            return -0.0, index
        if INTEGER_MIN <= value <= INTEGER_MAX and value == value.to_integral_value():
            return int(value), index

        return float(value), index

    def _scan_digits(self, text, index, grouping=False):
        """Scan digits, skipping group separators between them."""
        digits = []

        while index < len(text):
            if text[index] in DIGITS:
                digits.append(text[index])
                index += 1
                continue

            if grouping and digits:
                group = self._match_group(text, index)

                if group and index + len(group) < len(text) and text[index + len(group)] in DIGITS:
                    index += len(group)
                    continue

            break

        return "".join(digits), index

    def _match_group(self, text, index):
        for group in self.symbols.groups:
            if text.startswith(group, index):
                return group
        return None

    def _scan_exponent(self, text, index):
        """Scan an exponent, if one with at least one digit is present."""
        symbols = self.symbols

        if not symbols.exponential or not text.startswith(symbols.exponential, index):
            return 0, index

        cursor = index + len(symbols.exponential)
        sign = ""

        if text.startswith("+", cursor):
            cursor += 1
        else:
            for minus in symbols.minus_signs:
                if text.startswith(minus, cursor):
                    sign = "-"
                    cursor += len(minus)
                    break

        digits, cursor = self._scan_digits(text, cursor)

        if not digits:
            return 0, index

        return int(sign + digits), cursor

    def __repr__(self):
        return f"{self.__class__.__name__}(locale={str(self.locale)!r}, pattern={self.pattern!r})"


class NumberSymbols:
    """Number symbols of a locale."""
    def __init__(self, locale):
        self.locale = locale
        self.decimal = get_decimal_symbol(locale)
        self.group = get_group_symbol(locale)
        self.minus = get_minus_sign_symbol(locale)
        self.exponential = get_exponential_symbol(locale)
        self.infinity = get_infinity_symbol(locale)
        # no accessor for NaN in babel.numbers
        self.nan = locale.number_symbols["latn"]["nan"]

    @property
    def minus_signs(self):
        """Minus signs accepted when parsing."""
        if self.minus == "-":
            return ("-",)
        return (self.minus, "-")

    @property
    def groups(self):
        """Group separators accepted when parsing."""
        if self.group in SPACE_GROUP_SYMBOLS:
            return (self.group,) + tuple(symbol for symbol in SPACE_GROUP_SYMBOLS
                                         if symbol != self.group)
        return (self.group,)
