"""Parse grammars derived from display templates"""

from string import Formatter
from collections import namedtuple

# Template fields.
NUMBER_FIELD = "0"
PREFIX_FIELD = "1"
SYMBOL_FIELD = "2"

# Result of matching a grammar. On failure, number is None and error_index is where matching
# stopped; on success error_index is -1.
Match = namedtuple("Match", "number scale index error_index")


class TemplateError(ValueError):
    """Invalid display template"""
    def __init__(self, message, template=None, **kwargs):
        if template is not None:
            message = f"{message} in template '{template}'"

        super().__init__(message, **kwargs)


class Literal:
    """Text that must appear verbatim."""
    def __init__(self, text):
        self.text = text

    def __repr__(self):
        return f"{self.__class__.__name__}({self.text!r})"


class NumberSlot:
    """Number, read by the number format."""
    def __repr__(self):
        return f"{self.__class__.__name__}()"


class PrefixSlot:
    """Unit prefix, read from the choice table."""
    def __repr__(self):
        return f"{self.__class__.__name__}()"


def parse_template(template):
    """Split a template into literal text and field numbers.

    Parameters
    ----------
    template : :class:`str`
        The template, with fields {0} (number), {1} (prefix) and optionally {2} (symbol).

    Returns
    -------
    :class:`list`
        The template's pieces: :class:`str` for literal text and :class:`int` for fields.

    Raises
    ------
    :class:`TemplateError`
        If the template is malformed or has the wrong fields.
    """
    if not isinstance(template, str):
        raise TemplateError(f"template must be a string, not {type(template).__name__}")

    pieces = []

    try:
        parsed = list(Formatter().parse(template))
    except ValueError as e:
        raise TemplateError(str(e), template)

    for literal, field, spec, conversion in parsed:
        if literal:
            # escaped braces split literal text
            if pieces and isinstance(pieces[-1], str):
                pieces[-1] += literal
            else:
                pieces.append(literal)

        if field is None:
            continue

        if field not in (NUMBER_FIELD, PREFIX_FIELD, SYMBOL_FIELD):
            raise TemplateError(f"unrecognised field '{{{field}}}' (use {{0}}, {{1}} or {{2}})",
                                template)
        if spec or conversion:
            raise TemplateError(f"field '{{{field}}}' cannot have a conversion or format spec",
                                template)

        pieces.append(int(field))

    for field, name in ((NUMBER_FIELD, "number"), (PREFIX_FIELD, "prefix")):
        if pieces.count(int(field)) != 1:
            raise TemplateError(f"{name} field {{{field}}} must appear exactly once", template)

    if pieces.count(int(SYMBOL_FIELD)) > 1:
        raise TemplateError(f"symbol field {{{SYMBOL_FIELD}}} can appear at most once", template)

    return pieces


class Grammar:
    """Sequence of literal text, number and prefix slots matched against text.

    Parameters
    ----------
    segments : sequence
        :class:`.Literal`, :class:`.NumberSlot` and :class:`.PrefixSlot` segments in order.
    """
    def __init__(self, segments):
        self.segments = tuple(segments)

    @classmethod
    def from_template(cls, template, symbol, with_prefix=True):
        """Build a grammar from a display template.

        The symbol becomes literal text. Without a prefix, the prefix field is removed. As with
        displayed text, leading and trailing whitespace of the whole pattern is dropped, so that
        e.g. "{0} {1}{2}" with an empty prefix and symbol matches just the number.

        Parameters
        ----------
        template : :class:`str`
            The template.
        symbol : :class:`str`
            The base unit symbol.
        with_prefix : :class:`bool`, optional
            Whether the grammar has a prefix slot.

        Returns
        -------
        :class:`.Grammar`
            The grammar.
        """
        segments = []

        for piece in parse_template(template):
            if piece == int(NUMBER_FIELD):
                segments.append(NumberSlot())
                continue
            elif piece == int(PREFIX_FIELD):
                if with_prefix:
                    segments.append(PrefixSlot())
                    continue
                piece = ""
            elif piece == int(SYMBOL_FIELD):
                piece = symbol

            if segments and isinstance(segments[-1], Literal):
                segments[-1] = Literal(segments[-1].text + piece)
            else:
                segments.append(Literal(piece))

        if segments and isinstance(segments[0], Literal):
            segments[0] = Literal(segments[0].text.lstrip())
        if segments and isinstance(segments[-1], Literal):
            segments[-1] = Literal(segments[-1].text.rstrip())

        return cls(segment for segment in segments
                   if not isinstance(segment, Literal) or segment.text)

    def match(self, text, position, number_format, choices):
        """Match the grammar against text.

        Parameters
        ----------
        text : :class:`str`
            The text.
        position : :class:`int`
            Where matching starts.
        number_format : :class:`.NumberFormat`
            Parser for the number slot.
        choices : :class:`.ChoiceTable`
            Scale factors of the prefixes, for the prefix slot.

        Returns
        -------
        :class:`.Match`
            The number, prefix scale factor (1 without a prefix slot) and the position after the
            match. If the text does not match, the number is None and the error index is set.
        """
        index = position
        number = None
        scale = 1.0

        for segment in self.segments:
            if isinstance(segment, Literal):
                if not text.startswith(segment.text, index):
                    return Match(None, None, position, index)
                index += len(segment.text)
            elif isinstance(segment, NumberSlot):
                parsed = number_format.parse(text, index)
                if parsed is None or parsed[1] == index:
                    return Match(None, None, position, index)
                number, index = parsed
            else:
                parsed = choices.parse(text, index)
                if parsed is None:
                    return Match(None, None, position, index)
                scale, index = parsed

        return Match(number, scale, index, -1)

    def __repr__(self):
        return f"{self.__class__.__name__}({list(self.segments)!r})"
