from typing import Union, Sequence, Iterable, TYPE_CHECKING

import numpy as np
import numpy.typing as npt

if TYPE_CHECKING:
    from fieldstars.field_object import FieldObject

DOUBLE_ARRAY = np.typing.NDArray[np.float64]
BOOL_ARRAY = np.typing.NDArray[np.bool_]
SCALAR_OR_ARRAY = Union[float, npt.ArrayLike]
F_SCALAR_OR_ARRAY = Union[float, DOUBLE_ARRAY]

FIELD_OBJECTS = Iterable['FieldObject']

BOOL_SEQUENCE = Sequence[bool] | BOOL_ARRAY
