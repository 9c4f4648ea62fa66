__version__ = '1.0.0'

from .chord import Chord
from .errors import (
    PiecewiseError,
    InvalidPartition,
    NonFiniteSample,
    ZeroSlopeSegment,
    DomainOutOfRange,
    RangeOutOfRange,
)
from .inverter import ForwardSegment, InverseSegment, PiecewiseInverter
from .flux import flux_density, flux_function
