r"""
This module contains helper functions for working with equatorial coordinates.

The angular math is vectorized using numpy so that a whole catalog query can be processed at once, while the
sexagesimal helpers work on single values and are used to build the default record and coordinate derived
identifiers of :class:`.FieldObject`.

Right ascension is carried in hours (0 to 24) and declination in degrees (-90 to 90) throughout fieldstars, matching
how catalog query results are normally reported.  :func:`radec_distance` is the exception and works in radians.
"""

import re

from typing import Sequence

import numpy as np

from fieldstars._typing import SCALAR_OR_ARRAY, F_SCALAR_OR_ARRAY


__all__ = ['HOUR2DEG', 'DEG2RAD', 'RAD2DEG', 'DEG2AMIN',
           'radec_distance', 'angular_separation_arcmin',
           'ra_hms_to_hr', 'dec_dms_to_deg', 'ra_hr_to_hms', 'dec_deg_to_dms', 'radec_to_object_id']


HOUR2DEG: float = 15.0  # deg/hr
"""
This constant converts right ascension in hours to degrees through multiplication.
"""

DEG2RAD: float = np.pi / 180  # rad/deg
r"""
This constant converts from units of degrees to units of radians through multiplication.

Mathematically this is :math:`\frac{\pi}{180}`.
"""

RAD2DEG: float = 180 / np.pi  # deg/rad
r"""
This constant converts from units of radians to units of degrees through multiplication.

Mathematically this is :math:`\frac{180}{\pi}`.
"""

DEG2AMIN: float = 60.0  # arcmin/deg
"""
This constant converts from units of degrees to units of arc-minutes through multiplication.
"""

_SEXAGESIMAL_SPLIT = re.compile(r'[:\s]+')


def radec_distance(ra1: SCALAR_OR_ARRAY, dec1: SCALAR_OR_ARRAY,
                   ra2: SCALAR_OR_ARRAY, dec2: SCALAR_OR_ARRAY) -> F_SCALAR_OR_ARRAY:
    r"""
    This function computes the great-circle angular distance in units of radians between ra/dec pairs.

    The distance is computed using the spherical law of cosines

    .. math::

        \text{cos}^{-1}\left(\text{sin}(\delta_1)\text{sin}(\delta_2) +
        \text{cos}(\delta_1)\text{cos}(\delta_2)\text{cos}(\alpha_1-\alpha_2)\right)

    where :math:`\delta_1` is the first declination, :math:`\delta_2` is the second declination, :math:`\alpha_1` is the
    first right ascension, and :math:`\alpha_2` is the second right ascension, all in radians.

    For nearly coincident points rounding can push the cosine argument slightly outside of [-1, 1], so it is clipped
    to that range before the inverse cosine is taken.  NaN inputs are passed through and produce NaN outputs.

    This function is vectorized and uses broadcasting rules, therefore you can specify the inputs as mixtures of scalars
    and arrays, as long as they can all be broadcast to a common shape.  The output will be either a scalar (if all
    scalars are input) or an array if any of the inputs are an array.

    :param ra1: The right ascension values for the first parts of the pairs with units of radians
    :param dec1: The declination values for the first parts of the pairs with units of radians
    :param ra2: The right ascension values for the second parts of the pairs with units of radians
    :param dec2: The declination values for the second parts of the pairs with units of radians
    :return: The great circle angular distance between the points with units of radians
    """
    ra1 = np.asanyarray(ra1)

    cos_dist = np.sin(dec1) * np.sin(dec2) + np.cos(dec1) * np.cos(dec2) * np.cos(ra1 - ra2)

    return np.arccos(np.clip(cos_dist, -1.0, 1.0))


def angular_separation_arcmin(ra_hr1: SCALAR_OR_ARRAY, dec_deg1: SCALAR_OR_ARRAY,
                              ra_hr2: SCALAR_OR_ARRAY, dec_deg2: SCALAR_OR_ARRAY) -> F_SCALAR_OR_ARRAY:
    """
    This function computes the great-circle angular distance in arc-minutes between catalog style coordinates.

    The right ascensions are converted from hours to radians (through degrees) and the declinations from degrees to
    radians, then :func:`radec_distance` is applied and the result converted to arc-minutes.

    Like :func:`radec_distance` this is vectorized and follows numpy broadcasting rules.

    :param ra_hr1: The right ascension(s) of the first points in hours
    :param dec_deg1: The declination(s) of the first points in degrees
    :param ra_hr2: The right ascension(s) of the second points in hours
    :param dec_deg2: The declination(s) of the second points in degrees
    :return: The angular separation(s) in arc-minutes
    """

    ra1 = np.asanyarray(ra_hr1, dtype=np.float64) * HOUR2DEG * DEG2RAD
    ra2 = np.asanyarray(ra_hr2, dtype=np.float64) * HOUR2DEG * DEG2RAD
    dec1 = np.asanyarray(dec_deg1, dtype=np.float64) * DEG2RAD
    dec2 = np.asanyarray(dec_deg2, dtype=np.float64) * DEG2RAD

    return radec_distance(ra1, dec1, ra2, dec2) * RAD2DEG * DEG2AMIN


def _split_sexagesimal(value: str) -> tuple[float, Sequence[float]]:
    """
    Splits a sexagesimal string into its sign and its three unsigned components.

    :param value: the string to split, separated by colons or whitespace
    :return: the sign (+1 or -1) and the three components
    :raises ValueError: if the string does not contain exactly 3 numeric components
    """

    text = value.strip()

    sign = 1.0
    if text and text[0] in '+-':
        if text[0] == '-':
            sign = -1.0
        text = text[1:]

    parts = [part for part in _SEXAGESIMAL_SPLIT.split(text) if part]

    if len(parts) != 3:
        raise ValueError('sexagesimal values must have 3 components, got {!r}'.format(value))

    return sign, [abs(float(part)) for part in parts]


def ra_hms_to_hr(ra_hms: str) -> float:
    """
    Converts a right ascension string in ``HH:MM:SS.sss`` form into decimal hours.

    :param ra_hms: the right ascension string, colon or whitespace separated
    :return: the right ascension in hours
    :raises ValueError: if the string is malformed
    """

    sign, (hours, minutes, seconds) = _split_sexagesimal(ra_hms)

    return sign * (hours + minutes / 60 + seconds / 3600)


def dec_dms_to_deg(dec_dms: str) -> float:
    """
    Converts a declination string in ``±DD:MM:SS.ss`` form into decimal degrees.

    The sign is taken from the string rather than the degrees component so that values such as ``-00:30:00`` are
    handled correctly.

    :param dec_dms: the declination string, colon or whitespace separated
    :return: the declination in degrees
    :raises ValueError: if the string is malformed
    """

    sign, (degrees, minutes, seconds) = _split_sexagesimal(dec_dms)

    return sign * (degrees + minutes / 60 + seconds / 3600)


def _to_sexagesimal(value: float, units_per_whole: int) -> tuple[int, int, int]:
    """
    Rounds an unsigned decimal value to hundredths of a second and splits it into whole, minutes and centi-seconds.
    """

    centi = int(round(abs(value) * 3600 * 100))

    whole, centi = divmod(centi, 3600 * 100)
    minutes, centi = divmod(centi, 60 * 100)

    return whole % units_per_whole, minutes, centi


def ra_hr_to_hms(ra_hr: float, separator: str = ':') -> str:
    """
    Formats a right ascension in hours as ``HH:MM:SS.ss``.

    The value is wrapped into [0, 24) hours.

    :param ra_hr: the right ascension in hours
    :param separator: the string to place between the components
    :return: the formatted right ascension
    """

    hours, minutes, centi = _to_sexagesimal(ra_hr % 24, 24)

    return '{:02d}{sep}{:02d}{sep}{:05.2f}'.format(hours, minutes, centi / 100, sep=separator)


def dec_deg_to_dms(dec_deg: float, separator: str = ':') -> str:
    """
    Formats a declination in degrees as ``±DD:MM:SS.ss``.

    :param dec_deg: the declination in degrees
    :param separator: the string to place between the components
    :return: the formatted declination
    """

    degrees, minutes, centi = _to_sexagesimal(dec_deg, 360)

    sign = '-' if dec_deg < 0 else '+'

    return '{}{:02d}{sep}{:02d}{sep}{:05.2f}'.format(sign, degrees, minutes, centi / 100, sep=separator)


def radec_to_object_id(ra_hr: float, dec_deg: float) -> str:
    """
    Builds a coordinate derived identifier in the ``HHMMSSss±DDMMSSss`` form used by 2MASS style catalogs.

    For instance ``ra_hr=6.50862013, dec_deg=29.688453`` gives ``'06303103+29411843'``.

    :param ra_hr: the right ascension in hours
    :param dec_deg: the declination in degrees
    :return: the identifier string
    """

    ra_part = ra_hr_to_hms(ra_hr, separator='').replace('.', '')
    dec_part = dec_deg_to_dms(dec_deg, separator='').replace('.', '')

    return ra_part + dec_part
