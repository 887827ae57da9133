"""Miscellaneous functions"""

import abc


class Singleton(abc.ABCMeta):
    """Metaclass implementing the singleton pattern

    This ensures that there is only ever one instance of a class that
    inherits this one.

    This is a subclass of ABCMeta so that it can be used as a metaclass of a
    subclass of an ABCMeta class.
    """

    # list of children by class
    _instances = {}

    def __call__(cls, *args, **kwargs):
        if cls not in cls._instances:
            cls._instances[cls] = super().__call__(*args, **kwargs)

        return cls._instances[cls]


def signum(number):
    """Sign of a number as a float.

    Zero (including negative zero) and NaN are returned unchanged, so that multiplying by the
    result preserves them.
    """
    if number > 0:
        return 1.0
    if number < 0:
        return -1.0
    return number
