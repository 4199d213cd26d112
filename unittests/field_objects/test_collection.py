"""
test_collection
===============

Tests the FieldObjectCollection update, filter, sort, count and table conversion operations.

Test Cases
__________
"""

from unittest import TestCase

import logging
import warnings

import numpy as np
import pandas as pd

from fieldstars.catalog_settings import CatalogSettings
from fieldstars.collection import FieldObjectCollection, FIELD_OBJECT_COLUMNS
from fieldstars.field_object import FieldObject


def scenario():
    """
    Builds the target and the three candidates used in the filtering scenario.
    """

    target = FieldObject('target', 6.5, 29.7, 12.0, 0.05)
    a = FieldObject('A', 6.51, 29.75, 12.5, 0.05, n_obs=3)
    b = FieldObject('B', 6.49, 29.60, 14.0, 0.05, n_obs=5)
    c = FieldObject('C', 6.52, 29.80, 11.5, 0.05, n_obs=1)

    return target, a, b, c


class TestAddFieldObjects(TestCase):

    def test_append_preserves_order(self):

        fos = [FieldObject(str(ind), 6.0, ind, 12.0, 0.1) for ind in range(5)]

        collection = FieldObjectCollection(fos[:2])
        collection.add_field_objects(fos[2:])
        collection.add_field_objects([fos[0]])

        self.assertEqual([fo.object_id for fo in collection], ['0', '1', '2', '3', '4', '0'])
        self.assertEqual(collection.total_count(), 6)
        self.assertEqual(len(collection), 6)
        self.assertIs(collection[2], fos[2])

    def test_field_objects_is_not_aliased(self):

        collection = FieldObjectCollection([FieldObject('a', 6.0, 1.0, 12.0, 0.1)])

        listing = collection.field_objects
        listing.append(FieldObject('b', 6.0, 2.0, 12.0, 0.1))

        self.assertEqual(collection.total_count(), 1)


class TestUpdate(TestCase):

    def test_update_matches_direct_computation(self):

        target, a, b, c = scenario()

        collection = FieldObjectCollection([a, b, c])
        collection.update(target)

        for fo in (a, b, c):
            self.assertAlmostEqual(fo.rad_sep_amin,
                                   FieldObject('x', fo.ra_hr, fo.dec_deg, 0, 0).compute_rad_sep_amin(target))
            self.assertEqual(fo.delta_mag, fo.mag - target.mag)

    def test_update_includes_target(self):

        target, a, b, c = scenario()

        collection = FieldObjectCollection([target, a, b, c])
        collection.update(target)

        self.assertAlmostEqual(target.rad_sep_amin, 0.0, places=3)
        self.assertEqual(target.delta_mag, 0.0)

    def test_idempotent(self):

        target, a, b, c = scenario()

        collection = FieldObjectCollection([a, b, c])
        collection.update(target)
        first = [(fo.rad_sep_amin, fo.delta_mag) for fo in collection]

        collection.update(target)
        second = [(fo.rad_sep_amin, fo.delta_mag) for fo in collection]

        self.assertEqual(first, second)

    def test_missing_target_is_a_no_op(self):

        _, a, b, c = scenario()

        collection = FieldObjectCollection([a, b, c])

        with self.assertLogs('fieldstars.collection', level=logging.WARNING):
            collection.update(None)

        self.assertEqual([fo.rad_sep_amin for fo in collection], [0.0, 0.0, 0.0])

    def test_empty_collection(self):

        target, _, _, _ = scenario()

        collection = FieldObjectCollection()
        collection.update(target)
        collection.sort_by_distance()
        collection.sort_by_delta_mag()
        collection.filter(2, CatalogSettings(apply_limits=True))

        self.assertEqual(collection.total_count(), 0)
        self.assertEqual(collection.filtered_count(), 0)
        self.assertEqual(collection.selected_count(), 0)

    def test_multiple_targets_warns(self):

        target, a, b, c = scenario()
        a.is_target = True
        b.is_target = True

        collection = FieldObjectCollection([a, b, c])

        with self.assertWarns(UserWarning):
            collection.update(target)

        self.assertEqual(c.delta_mag, c.mag - target.mag)
        self.assertIs(collection.target, a)

    def test_nan_propagates(self):

        target = FieldObject('target', np.nan, np.nan, np.nan, 0.0)
        _, a, b, c = scenario()

        collection = FieldObjectCollection([a, b, c])
        collection.update(target)

        self.assertTrue(all(np.isnan(fo.rad_sep_amin) for fo in collection))
        self.assertTrue(all(np.isnan(fo.delta_mag) for fo in collection))


class TestSorting(TestCase):

    def test_sort_by_distance(self):

        target = FieldObject('target', 6.0, 0.0, 12.0, 0.05)
        fos = [FieldObject(str(ind), 6.0, dec, 12.0, 0.05) for ind, dec in enumerate([0.9, 0.1, 0.5, 0.3, 0.7])]

        collection = FieldObjectCollection(fos)
        collection.update(target)
        collection.sort_by_distance()

        distances = [fo.rad_sep_amin for fo in collection]

        self.assertTrue(all(d1 <= d2 for d1, d2 in zip(distances[:-1], distances[1:])))
        self.assertEqual([fo.object_id for fo in collection], ['1', '3', '2', '4', '0'])

    def test_sort_by_distance_is_stable(self):

        target = FieldObject('target', 6.0, 0.0, 12.0, 0.05)
        north = FieldObject('north', 6.0, 0.5, 12.0, 0.05)
        south = FieldObject('south', 6.0, -0.5, 12.0, 0.05)
        near = FieldObject('near', 6.0, 0.1, 12.0, 0.05)

        collection = FieldObjectCollection([north, south, near])
        collection.update(target)

        self.assertEqual(north.rad_sep_amin, south.rad_sep_amin)

        collection.sort_by_distance()
        self.assertEqual([fo.object_id for fo in collection], ['near', 'north', 'south'])

        collection = FieldObjectCollection([south, north, near])
        collection.sort_by_distance()
        self.assertEqual([fo.object_id for fo in collection], ['near', 'south', 'north'])

    def test_sort_by_delta_mag(self):

        target = FieldObject('target', 6.0, 0.0, 12.0, 0.05)
        mags = [13.5, 11.9, 12.2, 10.0, 12.1, 11.8]
        fos = [FieldObject(str(ind), 6.0, 1.0, mag, 0.05) for ind, mag in enumerate(mags)]

        collection = FieldObjectCollection(fos)
        collection.update(target)
        collection.sort_by_delta_mag()

        abs_delta = [abs(fo.delta_mag) for fo in collection]

        self.assertTrue(all(d1 <= d2 for d1, d2 in zip(abs_delta[:-1], abs_delta[1:])))
        self.assertEqual(collection[0].object_id, '1')
        self.assertEqual(collection[-1].object_id, '3')

    def test_sort_by_delta_mag_is_stable(self):

        target = FieldObject('target', 6.0, 0.0, 12.0, 0.05)
        fainter = FieldObject('fainter', 6.0, 1.0, 12.5, 0.05)
        brighter = FieldObject('brighter', 6.0, 1.0, 11.5, 0.05)

        collection = FieldObjectCollection([fainter, brighter])
        collection.update(target)
        collection.sort_by_delta_mag()

        self.assertEqual([fo.object_id for fo in collection], ['fainter', 'brighter'])

    def test_sort_does_not_change_held_list(self):

        target = FieldObject('target', 6.0, 0.0, 12.0, 0.05)
        fos = [FieldObject(str(ind), 6.0, dec, 12.0, 0.05) for ind, dec in enumerate([0.9, 0.1])]

        collection = FieldObjectCollection(fos)
        collection.update(target)

        held = collection.field_objects
        collection.sort_by_distance()

        self.assertEqual([fo.object_id for fo in held], ['0', '1'])
        self.assertEqual([fo.object_id for fo in collection.field_objects], ['1', '0'])


class TestFilters(TestCase):

    def test_scenario(self):

        target, a, b, c = scenario()

        settings = CatalogSettings(apply_limits=True, nominal_mag=12.0, upper_limit=1.0, lower_limit=-1.0)

        collection = FieldObjectCollection([a, b, c])
        collection.update(target)
        collection.filter_by_number_observations(2)
        collection.filter_by_mag_limits(settings)

        self.assertTrue(a.filtered)
        self.assertFalse(b.filtered)
        self.assertFalse(c.filtered)
        self.assertEqual(collection.filtered_count(), 1)
        self.assertEqual(collection.total_count(), 3)
        self.assertEqual(collection.filtered_objects, [a])

    def test_filter_runs_both_gates(self):

        target, a, b, c = scenario()

        collection = FieldObjectCollection([a, b, c])
        collection.filter(2, CatalogSettings(apply_limits=True))

        self.assertEqual([fo.filtered for fo in collection], [True, False, False])

    def test_number_observations_overwrites(self):

        fos = [FieldObject(str(n_obs), 6.0, 1.0, 12.0, 0.05, n_obs=n_obs) for n_obs in range(1, 6)]

        collection = FieldObjectCollection(fos)

        collection.filter_by_number_observations(4)
        self.assertEqual([fo.filtered for fo in collection], [False, False, False, True, True])

        collection.filter_by_number_observations(2)
        self.assertEqual([fo.filtered for fo in collection], [False, True, True, True, True])

    def test_number_observations_resets_magnitude_gate(self):

        _, a, b, c = scenario()

        collection = FieldObjectCollection([a, b, c])
        collection.filter(1, CatalogSettings(apply_limits=True))
        self.assertFalse(b.filtered)

        collection.filter_by_number_observations(1)
        self.assertTrue(b.filtered)

    def test_mag_limits_not_applied(self):

        _, a, b, c = scenario()

        collection = FieldObjectCollection([a, b, c])
        collection.filter_by_number_observations(2)
        before = [fo.filtered for fo in collection]

        collection.filter_by_mag_limits(CatalogSettings(apply_limits=False, nominal_mag=20.0))

        self.assertEqual([fo.filtered for fo in collection], before)

    def test_mag_limits_only_narrow(self):

        fos = [FieldObject(str(mag), 6.0, 1.0, mag, 0.05) for mag in [10.5, 11.0, 12.0, 13.0, 13.5]]
        fos[2].filtered = False

        collection = FieldObjectCollection(fos)
        collection.filter_by_mag_limits(CatalogSettings(apply_limits=True, nominal_mag=12.0,
                                                        upper_limit=1.0, lower_limit=-1.0))

        self.assertEqual([fo.filtered for fo in collection], [False, True, False, True, False])

    def test_mag_limits_accumulate(self):

        fos = [FieldObject(str(mag), 6.0, 1.0, mag, 0.05) for mag in [11.0, 12.0, 13.0]]

        collection = FieldObjectCollection(fos)
        collection.filter_by_mag_limits(CatalogSettings(apply_limits=True, nominal_mag=12.0,
                                                        upper_limit=0.0, lower_limit=-1.0))
        collection.filter_by_mag_limits(CatalogSettings(apply_limits=True, nominal_mag=12.0,
                                                        upper_limit=1.0, lower_limit=0.0))

        self.assertEqual([fo.filtered for fo in collection], [False, True, False])

    def test_disabled_sides(self):

        mags = [9.0, 12.0, 15.0]
        collection = FieldObjectCollection([FieldObject(str(mag), 6.0, 1.0, mag, 0.05) for mag in mags])

        collection.filter_by_number_observations(1)
        collection.filter_by_mag_limits(CatalogSettings(apply_limits=True, upper_limit_enabled=False))
        self.assertEqual([fo.filtered for fo in collection], [False, True, True])

        collection.filter_by_number_observations(1)
        collection.filter_by_mag_limits(CatalogSettings(apply_limits=True, lower_limit_enabled=False))
        self.assertEqual([fo.filtered for fo in collection], [True, True, False])

        collection.filter_by_number_observations(1)
        collection.filter_by_mag_limits(CatalogSettings(apply_limits=True, upper_limit_enabled=False,
                                                        lower_limit_enabled=False))
        self.assertEqual([fo.filtered for fo in collection], [True, True, True])

    def test_inverted_range_warns(self):

        collection = FieldObjectCollection([FieldObject('a', 6.0, 1.0, 12.0, 0.05)])

        with self.assertWarns(UserWarning):
            collection.filter_by_mag_limits(CatalogSettings(apply_limits=True, upper_limit=-1.0, lower_limit=1.0))

        self.assertEqual(collection.filtered_count(), 0)

    def test_inverted_range_with_disabled_side_is_quiet(self):

        collection = FieldObjectCollection([FieldObject('a', 6.0, 1.0, 12.0, 0.05)])

        with warnings.catch_warnings():
            warnings.simplefilter('error')
            collection.filter_by_mag_limits(CatalogSettings(apply_limits=True, upper_limit=-1.0, lower_limit=1.0,
                                                            upper_limit_enabled=False))


class TestCounts(TestCase):

    def test_selected_count(self):

        target, a, b, c = scenario()
        d = FieldObject('D', 6.5, 29.71, 12.2, 0.05, n_obs=4)
        d.selected = False

        collection = FieldObjectCollection([a, b, c, d])
        collection.filter(2, CatalogSettings(apply_limits=True))

        self.assertEqual(collection.total_count(), 4)
        self.assertEqual(collection.filtered_count(), 2)
        self.assertEqual(collection.selected_count(), 1)
        self.assertEqual(collection.selected_objects, [a])

    def test_selected_requires_filtered(self):

        _, a, b, c = scenario()

        collection = FieldObjectCollection([a, b, c])
        collection.filter_by_number_observations(10)

        self.assertEqual(collection.selected_count(), 0)


class TestDataFrames(TestCase):

    def test_from_dataframe(self):

        records = pd.DataFrame({'object_id': ['A', None, 'C'],
                                'ra_hr': [6.51, 6.50862013, 6.52],
                                'dec_deg': [29.75, 29.688453, 29.80],
                                'mag': [12.5, 14.0, 11.5],
                                'n_obs': [3, np.nan, 1]})

        collection = FieldObjectCollection.from_dataframe(records)

        self.assertEqual(collection.total_count(), 3)
        self.assertEqual([fo.object_id for fo in collection], ['A', '06303103+29411843', 'C'])
        self.assertEqual([fo.n_obs for fo in collection], [3, 1, 1])
        self.assertEqual([fo.mag_err for fo in collection], [0.0, 0.0, 0.0])
        self.assertIsInstance(collection[0].n_obs, int)

    def test_from_dataframe_flags(self):

        records = pd.DataFrame({'object_id': ['A', 'B'], 'ra_hr': [6.5, 6.6], 'dec_deg': [1.0, 2.0],
                                'mag': [12.0, 13.0], 'selected': [True, False]})

        collection = FieldObjectCollection.from_dataframe(records)

        self.assertEqual([fo.selected for fo in collection], [True, False])

    def test_missing_columns(self):

        records = pd.DataFrame({'object_id': ['A'], 'ra_hr': [6.5], 'mag': [12.0]})

        with self.assertRaises(ValueError):
            FieldObjectCollection.from_dataframe(records)

    def test_to_dataframe(self):

        target, a, b, c = scenario()

        collection = FieldObjectCollection([a, b, c])
        collection.update(target)
        collection.filter(2, CatalogSettings(apply_limits=True))
        collection.sort_by_delta_mag()

        table = collection.to_dataframe()

        self.assertEqual(list(table.columns), FIELD_OBJECT_COLUMNS)
        self.assertEqual(list(table['object_id']), [fo.object_id for fo in collection])
        np.testing.assert_array_equal(table['rad_sep_amin'].to_numpy(), [fo.rad_sep_amin for fo in collection])
        self.assertEqual(list(table['filtered']), [fo.filtered for fo in collection])

        filtered = collection.to_dataframe(filtered_only=True)

        self.assertEqual(list(filtered['object_id']), ['A'])

    def test_empty_to_dataframe(self):

        table = FieldObjectCollection().to_dataframe()

        self.assertEqual(len(table), 0)
        self.assertEqual(list(table.columns), FIELD_OBJECT_COLUMNS)


if __name__ == '__main__':
    import unittest
    unittest.main()
