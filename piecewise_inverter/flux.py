import math
from typing import Callable

import numpy as np

from .constants import MAGNET_LENGTH, MAGNET_WIDTH, MAGNET_THICKNESS, MAGNET_REMANENCE


def _pole_term(distance, length: float, width: float):
    # atan(w l / (2 d sqrt(4 d^2 + w^2 + l^2))), written with arctan2 so that d = 0 gives pi/2
    return np.arctan2(width * length, 2 * distance * np.sqrt(4 * distance ** 2 + width ** 2 + length ** 2))


def flux_density(
        distance,
        length: float = MAGNET_LENGTH,
        width: float = MAGNET_WIDTH,
        thickness: float = MAGNET_THICKNESS,
        remanence: float = MAGNET_REMANENCE,
        ):
    '''
    Magnetic flux density (mT) on the axis of a block magnet at the given
    distance (mm, >= 0) from its face, as read by a Hall-effect sensor.
    See the DRV5056 datasheet. Accepts scalars or numpy arrays.
    '''
    near = _pole_term(distance, length, width)
    far = _pole_term(distance + thickness, length, width)
    return remanence / math.pi * (near - far)


def flux_function(
        length: float = MAGNET_LENGTH,
        width: float = MAGNET_WIDTH,
        thickness: float = MAGNET_THICKNESS,
        remanence: float = MAGNET_REMANENCE,
        ) -> Callable[[float], float]:
    def func(distance: float) -> float:
        return float(flux_density(distance, length, width, thickness, remanence))

    return func
