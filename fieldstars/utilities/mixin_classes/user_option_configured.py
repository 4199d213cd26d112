"""
This module provides the :class:`UserOptionConfigured` mixin class that enables classes to be
configured using :class:`.UserOptions`-derived classes while maintaining the ability to reset
to the original configuration state.

Example:
    Basic usage of the UserOptionConfigured mixin::

        from fieldstars.catalog_settings import CatalogSettings
        from fieldstars.utilities.mixin_classes.user_option_configured import UserOptionConfigured

        class MySelector(UserOptionConfigured[CatalogSettings], CatalogSettings):
            def __init__(self, options: CatalogSettings = None):
                super().__init__(CatalogSettings, options=options)

        selector = MySelector()
        selector.nominal_mag = 14.0  # Make a change
        selector.reset_settings()  # back to the default of 12.0

.. Note::
    The :class:`UserOptionConfigured` class should come first in the inheritance order
    due to Method Resolution Order (MRO) requirements.
"""

import copy

from typing import Generic, TypeVar

from fieldstars.utilities.options import UserOptions


OptionsT = TypeVar("OptionsT", bound=UserOptions)
"""
Type variable bound to UserOptions for type safety
"""


class UserOptionConfigured(Generic[OptionsT]):
    """
    Mixin class providing UserOptions-based configuration with reset capability.

    This mixin class enables classes to be configured using :class:`UserOptions`-derived
    classes and provides the ability to reset the class to its default (initially provided)
    state.

    :attr original_options: A copy of the configuration used during initialization.  It is used for reset operations.

    .. Warning::
        If options are not provided during initialization, default initialization of the
        options_type class will be used.
    """

    def __init__(self, options_type: type[OptionsT], *args, options: OptionsT | None = None, **kwargs) -> None:
        """
        :param options_type: The type of the :class:`.UserOptions` to use
        :param options: An optional instance of `options_type` preconfigured.
        """

        super().__init__(*args, **kwargs)

        if options is None:
            options = options_type()

        options.apply_options(self)

        self._original_options: OptionsT = copy.deepcopy(options)
        """
        The original configuration for this class
        """

    def reset_settings(self) -> None:
        """
        Resets the class to the state it was originally initialized with.
        """

        self.original_options.apply_options(self)

    @property
    def original_options(self) -> OptionsT:
        """
        Get the original configuration options.

        .. Warning::
            Modifying the returned object will affect reset behavior.
        """
        return self._original_options

    @original_options.setter
    def original_options(self, value: OptionsT) -> None:
        """
        Manually set the original configuration options.
        """
        self._original_options = value
