# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.


"""
This module provides the :class:`ComparisonStarSelector`, which runs the full selection pipeline over a
:class:`.FieldObjectCollection`.

The pipeline is

#. flag the target record,
#. update the separation and magnitude difference of every member relative to the target,
#. apply the observation count filter,
#. narrow with the magnitude limits filter, and
#. sort the collection according to :attr:`~.CatalogSettings.sort_order`.

The selector is configured with a :class:`.CatalogSettings` instance, and any of the settings can be changed on the
selector directly between runs.  :meth:`~ComparisonStarSelector.reset_settings` returns it to the settings it was
created with.
"""

import logging

from typing import Optional

from fieldstars.catalog_settings import CatalogSettings, SortOrder
from fieldstars.collection import FieldObjectCollection
from fieldstars.field_object import FieldObject
from fieldstars.utilities.mixin_classes.attribute_printing import AttributePrinting
from fieldstars.utilities.mixin_classes.user_option_configured import UserOptionConfigured


_LOGGER: logging.Logger = logging.getLogger(__name__)
"""
This is the logging interface for reporting status, results, issues, and other information.
"""


class ComparisonStarSelector(UserOptionConfigured[CatalogSettings], AttributePrinting, CatalogSettings):
    """
    Selects and orders comparison stars relative to a target.

    The settings in :class:`.CatalogSettings` are available as attributes of the selector, and the selector itself is
    passed as the settings to :meth:`.FieldObjectCollection.filter_by_mag_limits`.
    """

    def __init__(self, options: Optional[CatalogSettings] = None):
        """
        :param options: The catalog settings to use.  Defaults are used if this is ``None``
        """

        super().__init__(CatalogSettings, options=options)

    def sort(self, collection: FieldObjectCollection) -> None:
        """
        Sorts the collection according to :attr:`sort_order`.

        :param collection: the collection to sort
        :raises ValueError: if :attr:`sort_order` is not a recognized :class:`.SortOrder`
        """

        sort_order = SortOrder(self.sort_order)

        if sort_order is SortOrder.DISTANCE:
            collection.sort_by_distance()
        elif sort_order is SortOrder.DELTA_MAG:
            collection.sort_by_delta_mag()

    def select(self, collection: FieldObjectCollection, target: FieldObject) -> FieldObjectCollection:
        """
        Runs the selection pipeline on the collection in place.

        Any earlier target flags on the members of the collection are cleared first, then the
        :attr:`~.FieldObject.is_target` flag of ``target`` itself is set, so the caller's record is modified.  A ``None``
        target logs a warning and leaves the collection untouched.

        :param collection: the candidate stars
        :param target: the target star.  It is flagged as the target but is not added to the collection
        :return: the same collection, updated, filtered, and sorted
        """

        if target is None:
            _LOGGER.warning('no target supplied, comparison stars not selected')
            return collection

        _LOGGER.info(f'Selecting comparison stars for {target.object_id} from {collection.total_count()} candidates')

        for fo in collection:
            fo.is_target = False

        target.is_target = True

        collection.update(target)
        collection.filter(self.min_observations, self)
        self.sort(collection)

        _LOGGER.info(f'{collection.filtered_count()} candidates pass the filters')

        return collection
