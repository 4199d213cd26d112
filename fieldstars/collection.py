# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.


"""
This module provides the :class:`FieldObjectCollection`, which manages the candidate comparison stars from a single
catalog query.

Description
-----------

A collection owns an ordered sequence of :class:`.FieldObject` records.  Insertion order is the canonical order until
one of the sort methods is applied, at which point the order is replaced.  The collection keeps the target relative
fields of its members up to date (:meth:`~FieldObjectCollection.update`), flags members according to the observation
count and magnitude range criteria, and reports counts for the presentation layer.

The two filters compose as a logical and.  :meth:`~FieldObjectCollection.filter_by_number_observations` always starts
a fresh pass, overwriting the observation gate and clearing the magnitude gate of each member, while
:meth:`~FieldObjectCollection.filter_by_mag_limits` can only narrow the result.  The observation filter must therefore
be run first; :meth:`~FieldObjectCollection.filter` runs both in the correct order.

None of the operations in this class raise for numeric input.  An empty collection gives counts of 0, NaN coordinates
or magnitudes propagate into the derived fields, and a missing target leaves the collection untouched.

Use
---

Typically a collection is populated once from a query result, either from a list of records with
:meth:`~FieldObjectCollection.add_field_objects` or from a table with :meth:`~FieldObjectCollection.from_dataframe`,
then updated, filtered and sorted::

    >>> collection = FieldObjectCollection.from_dataframe(query_results)
    >>> collection.update(target)
    >>> collection.filter(min_obs=2, settings=CatalogSettings(apply_limits=True))
    >>> collection.sort_by_distance()
    >>> table = collection.to_dataframe(filtered_only=True)

A collection is not safe to mutate from multiple threads; use one collection per query session.
"""

import logging

import warnings

from typing import Iterator, List, Dict, Type, Optional, Any

import numpy as np
import pandas as pd

from fieldstars.field_object import FieldObject, DEFAULT_APERTURE_ID
from fieldstars.catalog_settings import (CatalogSettings, is_upper_limit_disabled, is_lower_limit_disabled,
                                         upper_mag_range, lower_mag_range)
from fieldstars.utilities.spherical_coordinates import angular_separation_arcmin
from fieldstars.utilities.boolean_filter_list import boolean_filter_list
from fieldstars._typing import FIELD_OBJECTS


_LOGGER: logging.Logger = logging.getLogger(__name__)
"""
This is the logging interface for reporting status, results, issues, and other information.
"""


FIELD_OBJECT_COLUMNS: List[str] = ['object_id', 'ra_hr', 'dec_deg', 'mag', 'mag_err', 'n_obs', 'aperture_id',
                                   'rad_sep_amin', 'delta_mag', 'selected', 'accepted', 'is_target', 'filtered']
"""
This specifies the name of the DataFrame columns used to exchange field objects with the query and presentation layers.

===================== ======== =================================================================================
column                units    description
===================== ======== =================================================================================
`'object_id'`         N/A      The catalog name or coordinate derived identifier
`'ra_hr'`             hour     The J2000 right ascension
`'dec_deg'`           deg      The J2000 declination
`'mag'`               N/A      The catalog magnitude in the active filter band
`'mag_err'`           N/A      The uncertainty in the catalog magnitude
`'n_obs'`             N/A      The number of observations contributing to the catalog magnitude
`'aperture_id'`       N/A      The aperture label
`'rad_sep_amin'`      arcmin   The angular separation from the target
`'delta_mag'`         N/A      The magnitude difference from the target
`'selected'`          N/A      The user selection flag
`'accepted'`          N/A      The acceptance flag
`'is_target'`         N/A      Whether the record is the target
`'filtered'`          N/A      Whether the record passes the current filters
===================== ======== =================================================================================

Only ``object_id``, ``ra_hr``, ``dec_deg``, and ``mag`` are required when populating a collection from a DataFrame.
"""

FIELD_OBJECT_TYPES: Dict[str, Type] = {'object_id': object, 'ra_hr': np.float64, 'dec_deg': np.float64,
                                       'mag': np.float64, 'mag_err': np.float64, 'n_obs': np.int64,
                                       'aperture_id': object, 'rad_sep_amin': np.float64, 'delta_mag': np.float64,
                                       'selected': np.bool_, 'accepted': np.bool_, 'is_target': np.bool_,
                                       'filtered': np.bool_}
"""
This specifies the data type for each column of the field object DataFrame.
"""

_REQUIRED_COLUMNS: List[str] = ['object_id', 'ra_hr', 'dec_deg', 'mag']

_FLAG_COLUMNS: List[str] = ['selected', 'accepted', 'is_target']


class FieldObjectCollection:
    """
    An ordered collection of candidate comparison stars from one catalog query.

    The collection exclusively owns its records for the duration of a query session.  :attr:`field_objects` returns a
    new list each time so that reordering the collection never changes a list a caller is already holding.
    """

    def __init__(self, field_objects: Optional[FIELD_OBJECTS] = None):
        """
        :param field_objects: An optional initial sequence of records
        """

        self._field_objects: List[FieldObject] = []

        if field_objects is not None:
            self.add_field_objects(field_objects)

    @classmethod
    def from_dataframe(cls, star_records: pd.DataFrame) -> 'FieldObjectCollection':
        """
        Creates a new collection populated from a catalog query table.

        See :meth:`add_from_dataframe` for the expected columns.

        :param star_records: the query results with columns from :attr:`FIELD_OBJECT_COLUMNS`
        :return: the populated collection
        """

        out = cls()
        out.add_from_dataframe(star_records)

        return out

    @property
    def field_objects(self) -> List[FieldObject]:
        """
        The records in the current order, as a new list.
        """
        return list(self._field_objects)

    @property
    def filtered_objects(self) -> List[FieldObject]:
        """
        The records that pass the current filters, in the current order.
        """
        return boolean_filter_list(self._field_objects, [fo.filtered for fo in self._field_objects])

    @property
    def selected_objects(self) -> List[FieldObject]:
        """
        The records that pass the current filters and are selected, in the current order.
        """
        return boolean_filter_list(self._field_objects, [fo.filtered and fo.selected for fo in self._field_objects])

    @property
    def target(self) -> Optional[FieldObject]:
        """
        The first record flagged as the target, or ``None`` if there isn't one.
        """
        return next((fo for fo in self._field_objects if fo.is_target), None)

    def add_field_objects(self, field_objects: FIELD_OBJECTS) -> None:
        """
        Appends records to the end of the collection.

        No de-duplication or validation is performed.

        :param field_objects: the records to append
        """

        self._field_objects.extend(field_objects)

    def add_from_dataframe(self, star_records: pd.DataFrame) -> None:
        """
        Appends records built from the rows of a catalog query table.

        The ``object_id``, ``ra_hr``, ``dec_deg``, and ``mag`` columns are required.  ``mag_err`` defaults to 0,
        ``n_obs`` to 1, and ``aperture_id`` to the placeholder label when the columns are missing or the values are
        null.  A null ``object_id`` gives a coordinate derived identifier.  The ``selected``, ``accepted`` and
        ``is_target`` flags are copied when present.

        :param star_records: the query results
        :raises ValueError: if a required column is missing
        """

        missing = [col for col in _REQUIRED_COLUMNS if col not in star_records.columns]
        if missing:
            raise ValueError('the star records are missing required columns {}'.format(missing))

        new_objects = []
        for record in star_records.to_dict('records'):
            new_objects.append(self._record_to_field_object(record))

        _LOGGER.debug(f'adding {len(new_objects)} field objects from a table')

        self.add_field_objects(new_objects)

    @staticmethod
    def _record_to_field_object(record: Dict[str, Any]) -> FieldObject:
        """
        Builds a single record from a row dictionary, filling in defaults for null or missing values.
        """

        def value_or(key: str, default: Any) -> Any:
            value = record.get(key, default)
            if value is None or (np.isscalar(value) and pd.isna(value)):
                return default
            return value

        fo = FieldObject(value_or('object_id', None), float(record['ra_hr']), float(record['dec_deg']),
                         float(record['mag']), float(value_or('mag_err', 0.0)), int(value_or('n_obs', 1)),
                         str(value_or('aperture_id', DEFAULT_APERTURE_ID)))

        for flag in _FLAG_COLUMNS:
            if flag in record and not pd.isna(record[flag]):
                setattr(fo, flag, bool(record[flag]))

        return fo

    def to_dataframe(self, filtered_only: bool = False) -> pd.DataFrame:
        """
        Returns the records as a table in the current order.

        :param filtered_only: Only include the records that pass the current filters
        :return: a DataFrame with columns :attr:`FIELD_OBJECT_COLUMNS`
        """

        field_objects = self.filtered_objects if filtered_only else self._field_objects

        rows = [[getattr(fo, col) for col in FIELD_OBJECT_COLUMNS] for fo in field_objects]

        return pd.DataFrame(rows, columns=FIELD_OBJECT_COLUMNS).astype(FIELD_OBJECT_TYPES)

    def update(self, target: Optional[FieldObject]) -> None:
        """
        Recomputes the separation and magnitude difference of every member relative to the target.

        The target itself may be a member, in which case its own separation and magnitude difference become 0.  This is
        idempotent.  A ``None`` target leaves the collection untouched.

        If more than one member is flagged as the target a warning is issued, but the update still proceeds relative to
        the supplied target.

        :param target: the record to compute the derived fields relative to
        """

        if target is None:
            _LOGGER.warning('no target supplied, field objects not updated')
            return

        if not self._field_objects:
            return

        n_targets = sum(1 for fo in self._field_objects if fo.is_target)
        if n_targets > 1:
            warnings.warn(f'{n_targets} field objects are flagged as the target.  Separations are computed relative '
                          f'to {target.object_id}')

        n_objects = len(self._field_objects)

        ra_hr = np.fromiter((fo.ra_hr for fo in self._field_objects), dtype=np.float64, count=n_objects)
        dec_deg = np.fromiter((fo.dec_deg for fo in self._field_objects), dtype=np.float64, count=n_objects)
        mags = np.fromiter((fo.mag for fo in self._field_objects), dtype=np.float64, count=n_objects)

        separations = np.atleast_1d(angular_separation_arcmin(ra_hr, dec_deg, target.ra_hr, target.dec_deg))
        delta_mags = mags - target.mag

        for fo, separation, delta_mag in zip(self._field_objects, separations, delta_mags):
            fo.rad_sep_amin = float(separation)
            fo.delta_mag = float(delta_mag)

        _LOGGER.debug(f'updated {n_objects} field objects relative to {target.object_id}')

    def sort_by_distance(self) -> None:
        """
        Reorders the collection ascending by separation from the target.

        The sort is stable, so records at equal separation keep their prior relative order.
        """

        self._field_objects = sorted(self._field_objects, key=lambda fo: fo.rad_sep_amin)

    def sort_by_delta_mag(self) -> None:
        """
        Reorders the collection ascending by absolute magnitude difference from the target.

        The sort is stable, so records with equal absolute differences keep their prior relative order.
        """

        self._field_objects = sorted(self._field_objects, key=lambda fo: abs(fo.delta_mag))

    def filter_by_number_observations(self, min_obs: int) -> None:
        """
        Starts a fresh filtering pass by flagging the members with at least ``min_obs`` observations.

        Every member's observation gate is overwritten and its magnitude gate cleared, so ``filtered`` becomes exactly
        ``n_obs >= min_obs``.  Repeated calls overwrite rather than accumulate.

        :param min_obs: the minimum number of observations to pass
        """

        for fo in self._field_objects:
            fo.filtered = fo.n_obs >= min_obs

        _LOGGER.debug(f'{self.filtered_count()} of {self.total_count()} field objects have at least '
                      f'{min_obs} observations')

    def filter_by_mag_limits(self, settings: CatalogSettings) -> None:
        """
        Narrows the current filter result to members inside the magnitude range.

        Nothing happens unless ``settings.apply_limits`` is set.  Otherwise each member's magnitude gate is and-ed with
        ``(upper disabled or mag <= nominal + upper) and (lower disabled or mag >= nominal + lower)``.  This can only
        turn ``filtered`` from true to false, so it must run after :meth:`filter_by_number_observations`.

        :param settings: the catalog settings providing the limits
        """

        if not settings.apply_limits:
            return

        upper_range = upper_mag_range(settings)
        lower_range = lower_mag_range(settings)
        disable_upper = is_upper_limit_disabled(settings)
        disable_lower = is_lower_limit_disabled(settings)

        if not (disable_upper or disable_lower) and upper_range < lower_range:
            warnings.warn(f'The magnitude range is inverted (upper {upper_range} < lower {lower_range}).  '
                          'No field objects will pass the magnitude filter')

        for fo in self._field_objects:
            in_range = (disable_upper or fo.mag <= upper_range) and (disable_lower or fo.mag >= lower_range)
            fo.magnitude_gate = fo.magnitude_gate and in_range

        _LOGGER.debug(f'{self.filtered_count()} of {self.total_count()} field objects pass the magnitude limits '
                      f'[{lower_range}, {upper_range}]')

    def filter(self, min_obs: int, settings: CatalogSettings) -> None:
        """
        Runs the observation count filter followed by the magnitude limits filter.

        :param min_obs: the minimum number of observations to pass
        :param settings: the catalog settings providing the magnitude limits
        """

        self.filter_by_number_observations(min_obs)
        self.filter_by_mag_limits(settings)

    def total_count(self) -> int:
        """
        Returns the number of records regardless of filter state.
        """
        return len(self._field_objects)

    def filtered_count(self) -> int:
        """
        Returns the number of records that pass the current filters.
        """
        return sum(1 for fo in self._field_objects if fo.filtered)

    def selected_count(self) -> int:
        """
        Returns the number of records that pass the current filters and are selected.
        """
        return sum(1 for fo in self._field_objects if fo.filtered and fo.selected)

    def __len__(self) -> int:
        return len(self._field_objects)

    def __iter__(self) -> Iterator[FieldObject]:
        return iter(list(self._field_objects))

    def __getitem__(self, index: int) -> FieldObject:
        return self._field_objects[index]

    def __str__(self) -> str:
        return '\n'.join(str(fo) for fo in self._field_objects)
