"""Configuration parser and defaults"""

from .base import BaseConfig


class UnitFormatConfig(BaseConfig):
    """Unitformat config parser"""
    # user config filename
    USER_CONFIG_FILENAME = "unitformat.yaml"
    # default config copied to user directory if requested
    DEFAULT_USER_CONFIG_FILENAME = USER_CONFIG_FILENAME + ".dist"
    # config into which others are merged
    BASE_CONFIG_FILENAME = USER_CONFIG_FILENAME + ".dist.default"

    def prefix_system(self, name):
        """Get the settings of a named prefix system.

        Parameters
        ----------
        name : :class:`str`
            The prefix system name, e.g. "si" or "iec".

        Returns
        -------
        :class:`dict`
            The system's interval, next prefix threshold, multiples and subdivisions.

        Raises
        ------
        ValueError
            If the system is not defined.
        """
        try:
            return self["systems"][name]
        except KeyError:
            raise ValueError(f"prefix system '{name}' is not defined (available: "
                             f"{', '.join(self['systems'])})")

    def localized_symbol(self, unit, locale):
        """Get the symbol used for a unit in a locale.

        The full locale identifier is tried first, then its language, then the unit's default.

        Parameters
        ----------
        unit : :class:`str`
            The unit name, e.g. "byte".
        locale : :class:`babel.Locale`
            The locale.

        Returns
        -------
        :class:`str`
            The localized symbol.
        """
        try:
            symbols = self["symbols"][unit]
        except KeyError:
            raise ValueError(f"no symbols defined for unit '{unit}'")

        for key in (str(locale), locale.language):
            if key in symbols:
                return symbols[key]

        return symbols["default"]
