# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.


"""
This module defines the record used to hold a single candidate comparison or reference star.

Description
-----------

Each record returned from an on-line catalog query is stored as a :class:`FieldObject`.  The identity and location of
the star (catalog id, right ascension in hours and declination in degrees) are held in an immutable
:class:`BaseFieldObject` which is composed into the :class:`FieldObject`, while the photometric data, the quantities
derived relative to a target star, and the selection flags are regular mutable attributes.

Filtering is carried as two explicit gates.  :attr:`FieldObject.observation_gate` is set by the observation count
filter and :attr:`FieldObject.magnitude_gate` by the magnitude limits filter.  The :attr:`FieldObject.filtered` flag
is the logical and of the two, so ``filtered == True`` means the record is *included* by the current filters.

Use
---

Records are normally built by the catalog query layer and handed to a :class:`.FieldObjectCollection`, which keeps
the derived fields up to date.  The derived fields can also be computed directly::

    >>> from fieldstars.field_object import FieldObject
    >>> target = FieldObject('wasp12', 6.50862013, 29.688453, 12.345, 0.23)
    >>> star = FieldObject(None, 6.5090, 29.70, 13.1, 0.05)
    >>> star.object_id
    '06303240+29420000'
    >>> round(star.compute_delta_mag(target.mag), 3)
    0.755
"""

import copy

from dataclasses import dataclass

from typing import Optional, Self

import numpy as np

from fieldstars.utilities.spherical_coordinates import (angular_separation_arcmin, radec_to_object_id,
                                                        ra_hms_to_hr, dec_dms_to_deg)
from fieldstars.utilities.mixin_classes.attribute_printing import AttributePrinting


__all__ = ['BaseFieldObject', 'FieldObject', 'DEFAULT_APERTURE_ID']


DEFAULT_APERTURE_ID: str = 'Cnn'
"""
The placeholder aperture label used until the aperture mapping assigns a real one.
"""

_SIRIUS_ID: str = 'sirius'
_SIRIUS_RA_HR: float = ra_hms_to_hr('06:45:08.917')
_SIRIUS_DEC_DEG: float = dec_dms_to_deg('-16:42:58.02')
_SIRIUS_MAG: float = -1.46
_SIRIUS_MAG_ERR: float = 0.02


@dataclass(frozen=True)
class BaseFieldObject:
    """
    The identity and J2000 location of a catalog star.

    If ``object_id`` is ``None`` an identifier is derived from the coordinates using
    :func:`.radec_to_object_id`.  Non-finite coordinates leave the derived identifier empty.
    """

    object_id: Optional[str]
    """
    The catalog name or coordinate derived identifier for the star.
    """

    ra_hr: float
    """
    The J2000 right ascension in hours (0 to 24).
    """

    dec_deg: float
    """
    The J2000 declination in degrees (-90 to 90).
    """

    def __post_init__(self):

        if self.object_id is None:
            if np.isfinite(self.ra_hr) and np.isfinite(self.dec_deg):
                object.__setattr__(self, 'object_id', radec_to_object_id(self.ra_hr, self.dec_deg))
            else:
                object.__setattr__(self, 'object_id', '')


class FieldObject(AttributePrinting):
    """
    Single record resulting from an on-line catalog query.

    Instances of this class encapsulate the coordinate and magnitude data for a single comparison or reference star
    together with the quantities computed relative to the current target star and the flags used to select the star.

    With no arguments the record describes Sirius, which is useful as a placeholder.

    Two instances are always distinct even when every field matches; equality is by identity.
    """

    _printed_properties = ('filtered',)

    def __init__(self, object_id: Optional[str] = _SIRIUS_ID, ra_hr: float = _SIRIUS_RA_HR,
                 dec_deg: float = _SIRIUS_DEC_DEG, mag: float = _SIRIUS_MAG, mag_err: float = _SIRIUS_MAG_ERR,
                 n_obs: int = 1, aperture_id: str = DEFAULT_APERTURE_ID):
        """
        :param object_id: The object identifier.  ``None`` derives one from the coordinates
        :param ra_hr: J2000 right ascension in hours (0 to 24)
        :param dec_deg: J2000 declination in degrees (±90)
        :param mag: The catalog magnitude for the current filter band
        :param mag_err: The estimated uncertainty in the magnitude
        :param n_obs: The number of observations contributing to the catalog magnitude
        :param aperture_id: The aperture label, normally assigned later by the aperture mapping
        """

        self._base: BaseFieldObject = BaseFieldObject(object_id, ra_hr, dec_deg)

        self.mag: float = mag
        """
        The catalog magnitude in the active filter band.
        """

        self.mag_err: float = mag_err
        """
        The uncertainty in :attr:`mag`.
        """

        self.n_obs: int = n_obs
        """
        The number of observations contributing to the catalog magnitude.
        """

        self.aperture_id: str = aperture_id
        """
        An opaque label assigned by the aperture mapping.
        """

        self.rad_sep_amin: float = 0.0
        """
        The angular separation from the target in arc-minutes, set by :meth:`compute_rad_sep_amin`.
        """

        self.delta_mag: float = 0.0
        """
        The signed magnitude difference ``mag - target mag``, set by :meth:`compute_delta_mag`.
        """

        self.selected: bool = True
        self.accepted: bool = True
        self.is_target: bool = False

        self.observation_gate: bool = True
        """
        The result of the most recent observation count filter.
        """

        self.magnitude_gate: bool = True
        """
        The accumulated result of the magnitude limits filters since the last observation count filter.
        """

    @property
    def base(self) -> BaseFieldObject:
        """
        The immutable identity and location of this star.
        """
        return self._base

    @property
    def object_id(self) -> str:
        """
        The object identifier.  This cannot be changed after construction.
        """
        return self._base.object_id

    @property
    def ra_hr(self) -> float:
        """
        The J2000 right ascension in hours.

        Setting this replaces the composed :class:`BaseFieldObject`; it is intended only for corrections.
        """
        return self._base.ra_hr

    @ra_hr.setter
    def ra_hr(self, val: float):
        self._base = BaseFieldObject(self.object_id, val, self.dec_deg)

    @property
    def dec_deg(self) -> float:
        """
        The J2000 declination in degrees.

        Setting this replaces the composed :class:`BaseFieldObject`; it is intended only for corrections.
        """
        return self._base.dec_deg

    @dec_deg.setter
    def dec_deg(self, val: float):
        self._base = BaseFieldObject(self.object_id, self.ra_hr, val)

    @property
    def filtered(self) -> bool:
        """
        Whether this record passes the current filter criteria.

        This is ``observation_gate and magnitude_gate``.  Setting it directly stores the value in
        :attr:`observation_gate` and resets :attr:`magnitude_gate`, which starts a fresh filtering pass.
        """
        return self.observation_gate and self.magnitude_gate

    @filtered.setter
    def filtered(self, val: bool):
        self.observation_gate = bool(val)
        self.magnitude_gate = True

    def compute_rad_sep_amin(self, target: 'FieldObject') -> float:
        r"""
        Computes the angular distance in arc-minutes between this object and the target object.

        The separation follows the spherical law of cosines

        .. math::
            A = \text{cos}^{-1}\left(\text{sin}(\delta)\text{sin}(\delta_0) +
            \text{cos}(\delta)\text{cos}(\delta_0)\text{cos}(\alpha-\alpha_0)\right)

        where :math:`(\alpha_0, \delta_0)` and :math:`(\alpha, \delta)` are the target and this object's coordinates.
        The cosine argument is clipped to [-1, 1] so that coincident points give exactly 0.

        The result is stored in :attr:`rad_sep_amin`.

        :param target: the target :class:`FieldObject`
        :return: the separation in arc-minutes
        """

        self.rad_sep_amin = float(angular_separation_arcmin(self.ra_hr, self.dec_deg, target.ra_hr, target.dec_deg))

        return self.rad_sep_amin

    def compute_delta_mag(self, target_mag: float) -> float:
        """
        Computes the magnitude difference between this object and the target object.

        The result is stored in :attr:`delta_mag`.

        :param target_mag: the estimate for the target magnitude in the current filter band
        :return: ``mag - target_mag``
        """

        self.delta_mag = self.mag - target_mag

        return self.delta_mag

    def copy(self) -> Self:
        """
        Returns an independent copy of this record with every field duplicated.
        """

        return copy.copy(self)
