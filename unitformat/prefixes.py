"""Unit prefix tables"""

import math


class PrefixError(ValueError):
    """Invalid prefix table"""
    pass


class ChoiceTable:
    """Labels associated with ascending numeric limits.

    Text maps to the limit of the longest label found at a given position.

    Parameters
    ----------
    limits : sequence of :class:`float`
        The limits, in ascending order.
    labels : sequence of :class:`str`
        The label for each limit.
    """
    def __init__(self, limits, labels):
        limits = tuple(limits)
        labels = tuple(labels)

        if len(limits) != len(labels):
            raise ValueError("limits and labels must have the same length")
        if any(lower >= upper for lower, upper in zip(limits, limits[1:])):
            raise ValueError("limits must be in ascending order")

        self.limits = limits
        self.labels = labels

    def __len__(self):
        return len(self.limits)

    def __iter__(self):
        return iter(zip(self.limits, self.labels))

    def __repr__(self):
        return f"{self.__class__.__name__}({list(self.limits)!r}, {list(self.labels)!r})"

    def parse(self, text, position=0):
        """Match a label in text.

        The longest label present at `position` wins; between labels of equal length the first
        in the table wins.

        Parameters
        ----------
        text : :class:`str`
            The text to search.
        position : :class:`int`, optional
            Where the label must start.

        Returns
        -------
        :class:`tuple` or None
            The matched label's limit and the position after it, or None if no label matches.
        """
        best = None
        end = position

        for limit, label in self:
            if label and len(label) > end - position and text.startswith(label, position):
                best = limit
                end = position + len(label)

        if best is None:
            return None

        return best, end


class PrefixSet:
    """Ordered unit prefixes with the ratio between them.

    Instances are immutable; use :meth:`replace` to derive a modified copy.

    Parameters
    ----------
    multiples : sequence of :class:`str`
        Prefixes for large magnitudes, in increasing order of magnitude starting one interval
        above the base unit.
    subdivisions : sequence of :class:`str`
        Prefixes for small magnitudes, in decreasing order of magnitude starting one interval
        below the base unit.
    interval : :class:`float`
        Ratio between adjacent prefixes.
    next_prefix_at : :class:`float`
        Largest number displayed before the next larger prefix is used.

    Raises
    ------
    :class:`PrefixError`
        If any of the parameters is invalid.
    """
    def __init__(self, multiples=(), subdivisions=(), interval=1000.0, next_prefix_at=750.0):
        self._multiples = self._check_prefixes(multiples, "multiples")
        self._subdivisions = self._check_prefixes(subdivisions, "subdivisions")
        self._interval = self._check_positive(interval, "interval")
        self._next_prefix_at = self._check_positive(next_prefix_at, "next prefix threshold")

        if self._interval <= 1:
            raise PrefixError(f"interval must be greater than 1 (got {interval})")

        self._check_scales()

    @classmethod
    def from_system(cls, name):
        """Create prefix set from a configured prefix system.

        Parameters
        ----------
        name : :class:`str`
            The system name, e.g. "si", "iec" or "binary".

        Returns
        -------
        :class:`.PrefixSet`
            The prefix set.
        """
        from . import CONF

        system = CONF.prefix_system(name)
        return cls(multiples=system.get("multiples") or (),
                   subdivisions=system.get("subdivisions") or (),
                   interval=system["interval"],
                   next_prefix_at=system["next_prefix_at"])

    @staticmethod
    def _check_prefixes(prefixes, name):
        if isinstance(prefixes, str):
            # a bare string would be split into characters
            raise PrefixError(f"{name} must be a sequence of strings, not a string")

        prefixes = tuple(prefixes)

        for prefix in prefixes:
            if not isinstance(prefix, str):
                raise PrefixError(f"{name} must be strings (got {prefix!r})")
            if not prefix:
                raise PrefixError(f"{name} cannot contain an empty prefix")

        if len(set(prefixes)) != len(prefixes):
            duplicates = sorted({prefix for prefix in prefixes if prefixes.count(prefix) > 1})
            raise PrefixError(f"{name} contain duplicate prefixes: {', '.join(duplicates)}")

        return prefixes

    @staticmethod
    def _check_positive(value, name):
        try:
            value = float(value)
        except (TypeError, ValueError):
            raise PrefixError(f"{name} must be a number (got {value!r})")

        if not math.isfinite(value) or value <= 0:
            raise PrefixError(f"{name} must be positive and finite (got {value})")

        return value

    def _check_scales(self):
        """Check the prefix scales are representable as distinct floats."""
        scales = [scale for scale, _ in self.scales()]

        if any(not math.isfinite(scale) or scale == 0 for scale in scales):
            raise PrefixError(f"prefix scales overflow with interval {self._interval:g} and "
                              f"{len(self._multiples)} multiples, {len(self._subdivisions)} "
                              "subdivisions")
        if any(lower >= upper for lower, upper in zip(scales, scales[1:])):
            raise PrefixError(f"prefix scales are not distinct with interval {self._interval:g}")

    @property
    def multiples(self):
        return self._multiples

    @property
    def subdivisions(self):
        return self._subdivisions

    @property
    def interval(self):
        return self._interval

    @property
    def next_prefix_at(self):
        return self._next_prefix_at

    def replace(self, **changes):
        """Copy of this prefix set with the specified attributes changed."""
        values = {"multiples": self.multiples, "subdivisions": self.subdivisions,
                  "interval": self.interval, "next_prefix_at": self.next_prefix_at}

        unknown = set(changes) - set(values)
        if unknown:
            raise TypeError(f"unknown prefix set attributes: {', '.join(sorted(unknown))}")

        values.update(changes)
        return self.__class__(**values)

    def scales(self):
        """Scale factor of each prefix, smallest first.

        Scales are built up by repeated division and multiplication by the interval, which is
        what formatting does, so that parsed values round trip.

        Returns
        -------
        :class:`list` of (:class:`float`, :class:`str`)
            The scale factors and their prefixes, in ascending order of scale.
        """
        below = []
        scale = 1.0
        for prefix in self.subdivisions:
            scale /= self.interval
            below.append((scale, prefix))

        above = []
        scale = 1.0
        for prefix in self.multiples:
            scale *= self.interval
            above.append((scale, prefix))

        return list(reversed(below)) + above

    def choices(self):
        """Choice table mapping scale factors to prefixes.

        Returns
        -------
        :class:`.ChoiceTable`
            The table.
        """
        scales = self.scales()
        return ChoiceTable([scale for scale, _ in scales], [prefix for _, prefix in scales])

    def __eq__(self, other):
        if not isinstance(other, PrefixSet):
            return NotImplemented

        return (self.multiples == other.multiples
                and self.subdivisions == other.subdivisions
                and self.interval == other.interval
                and self.next_prefix_at == other.next_prefix_at)

    def __hash__(self):
        return hash((self.multiples, self.subdivisions, self.interval, self.next_prefix_at))

    def __repr__(self):
        return (f"{self.__class__.__name__}(multiples={self.multiples!r}, "
                f"subdivisions={self.subdivisions!r}, interval={self.interval!r}, "
                f"next_prefix_at={self.next_prefix_at!r})")
