# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.


"""
This package provides a few different utility routines used throughout fieldstars.

The modules in this package each contain detailed information about what they provide/do.  In brief,
:mod:`.spherical_coordinates` handles the angular math and coordinate formatting, :mod:`.options` and
:mod:`.mixin_classes` provide the configuration layer, and :mod:`.boolean_filter_list` provides mask based list
filtering.
"""
