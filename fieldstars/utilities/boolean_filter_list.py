from typing import TypeVar

from fieldstars._typing import BOOL_SEQUENCE

ContentsT = TypeVar("ContentsT")


def boolean_filter_list(inlist: list[ContentsT], boolean_filter: BOOL_SEQUENCE) -> list[ContentsT]:
    """
    Filter a list based on a boolean sequence or NumPy array.

    The relative order of the kept elements is preserved.

    :param inlist: The input list to be filtered.
    :param boolean_filter: A boolean sequence or NumPy array used for filtering. Must have the same length as inlist.

    :returns: A new list containing only the elements from inlist
              where the corresponding boolean in boolean_filter is True.

    :raises ValueError: If the lengths of inlist and boolean_filter do not match.
    """

    if len(inlist) != len(boolean_filter):
        raise ValueError('the filter must be the same length as the provided list')

    return [item for item, test in zip(inlist, boolean_filter) if test]
