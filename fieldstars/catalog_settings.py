# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.


"""
This module defines the settings that control how candidate comparison stars are filtered and ordered.

The settings are collected in the :class:`CatalogSettings` options dataclass, which is consumed read-only by
:meth:`.FieldObjectCollection.filter_by_mag_limits` and which configures the :class:`.ComparisonStarSelector`.

Magnitude limits are expressed as offsets from a nominal (expected target) magnitude.  Either side of the limit can be
switched off independently through the :attr:`~CatalogSettings.upper_limit_enabled` and
:attr:`~CatalogSettings.lower_limit_enabled` flags, and the whole magnitude filter is gated by
:attr:`~CatalogSettings.apply_limits`.  The helper functions in this module are the single place that decides whether
a side is disabled, so that callers never need to reason about the flags directly.
"""

from dataclasses import dataclass

from enum import Enum

from fieldstars.utilities.options import UserOptions


__all__ = ['SortOrder', 'CatalogSettings', 'is_upper_limit_disabled', 'is_lower_limit_disabled',
           'upper_mag_range', 'lower_mag_range']


class SortOrder(Enum):
    """
    This enumeration provides the orderings that can be applied to a collection after filtering.

    Strings are accepted case insensitively, so ``SortOrder('Delta_Mag')`` gives :attr:`DELTA_MAG`.
    """

    DISTANCE = "distance"
    """
    Sort ascending by angular separation from the target.
    """

    DELTA_MAG = "delta_mag"
    """
    Sort ascending by the absolute magnitude difference from the target.
    """

    NONE = "none"
    """
    Leave the collection in its current order.
    """

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            lowered = value.lower()
            for member in cls:
                if member.value == lowered:
                    return member
        return None


@dataclass
class CatalogSettings(UserOptions):
    """
    :param apply_limits: A flag specifying whether the magnitude limits filter is applied at all
    :param nominal_mag: The expected magnitude of the target star
    :param upper_limit: The offset from the nominal magnitude giving the faint (numerically upper) bound
    :param lower_limit: The offset from the nominal magnitude giving the bright (numerically lower) bound
    :param upper_limit_enabled: A flag specifying whether the upper bound is applied
    :param lower_limit_enabled: A flag specifying whether the lower bound is applied
    :param min_observations: The minimum number of catalog observations a star needs to pass the observation filter
    :param sort_order: The ordering applied once the filters have been run
    """

    apply_limits: bool = False
    """
    Apply the magnitude limits filter.

    When this is ``False`` the magnitude filter leaves every record untouched.
    """

    nominal_mag: float = 12.0
    """
    The expected magnitude of the target star in the active filter band.
    """

    upper_limit: float = 1.0
    """
    The offset added to :attr:`nominal_mag` to get the faintest magnitude that passes the filter.
    """

    lower_limit: float = -1.0
    """
    The offset added to :attr:`nominal_mag` to get the brightest magnitude that passes the filter.

    This is normally negative.
    """

    upper_limit_enabled: bool = True
    """
    Apply the upper (faint) side of the magnitude range.
    """

    lower_limit_enabled: bool = True
    """
    Apply the lower (bright) side of the magnitude range.
    """

    min_observations: int = 1
    """
    The minimum number of observations contributing to a catalog magnitude for a star to pass.
    """

    sort_order: SortOrder | str = SortOrder.DISTANCE
    """
    The ordering to apply once filtering is complete.

    This can be given as a :class:`SortOrder` or as its string value.
    """

    def override_options(self):
        """
        Normalizes :attr:`sort_order` into a :class:`SortOrder`.

        :raises ValueError: if the sort order is not recognized
        """

        self.sort_order = SortOrder(self.sort_order)


def is_upper_limit_disabled(settings: CatalogSettings) -> bool:
    """
    Decides whether the upper (faint) side of the magnitude range is switched off.

    :param settings: the settings to check
    :return: ``True`` if the upper bound should not be applied
    """

    return not settings.upper_limit_enabled


def is_lower_limit_disabled(settings: CatalogSettings) -> bool:
    """
    Decides whether the lower (bright) side of the magnitude range is switched off.

    :param settings: the settings to check
    :return: ``True`` if the lower bound should not be applied
    """

    return not settings.lower_limit_enabled


def upper_mag_range(settings: CatalogSettings) -> float:
    """
    Returns the absolute faint bound of the magnitude range, ``nominal_mag + upper_limit``.
    """

    return settings.nominal_mag + settings.upper_limit


def lower_mag_range(settings: CatalogSettings) -> float:
    """
    Returns the absolute bright bound of the magnitude range, ``nominal_mag + lower_limit``.
    """

    return settings.nominal_mag + settings.lower_limit
