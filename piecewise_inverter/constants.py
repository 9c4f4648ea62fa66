import numpy as np

DTYPE = np.float64  # precision of sample points, chords and lookups

# N52 block magnet of the DRV5056 datasheet example, dimensions in mm
MAGNET_LENGTH = 19.05
MAGNET_WIDTH = 9.525
MAGNET_THICKNESS = 1.5875
MAGNET_REMANENCE = 1320  # mT

DEFAULT_SEGMENTS = 100
DEFAULT_INTERVAL = (0.0, 16.0)  # distance from the sensor, mm
