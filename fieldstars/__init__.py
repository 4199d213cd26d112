# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.


"""
Welcome to fieldstars

This package selects and orders candidate comparison and reference stars from a catalog query for differential
photometry of a target star.

The records for each candidate are held in :class:`.FieldObject` instances, which are gathered into a
:class:`.FieldObjectCollection`.  The collection computes the angular separation and magnitude difference of every
candidate relative to the target, flags the candidates that satisfy the observation count and magnitude range
criteria in :class:`.CatalogSettings`, and sorts them for presentation.  :class:`.ComparisonStarSelector` runs the
whole pipeline in the required order.
"""

from fieldstars.field_object import BaseFieldObject, FieldObject
from fieldstars.catalog_settings import CatalogSettings, SortOrder
from fieldstars.collection import FieldObjectCollection, FIELD_OBJECT_COLUMNS
from fieldstars.selection import ComparisonStarSelector

__all__ = ['BaseFieldObject', 'FieldObject', 'CatalogSettings', 'SortOrder', 'FieldObjectCollection',
           'FIELD_OBJECT_COLUMNS', 'ComparisonStarSelector']
