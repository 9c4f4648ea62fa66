from typing import Tuple


class PiecewiseError(ValueError):
    pass


class InvalidPartition(PiecewiseError):
    def __init__(self, n_segments, interval, reason: str):
        self.n_segments = n_segments
        self.interval = interval
        super().__init__(F'Cannot partition {interval} into {n_segments} segments: {reason}.')


class NonFiniteSample(PiecewiseError):
    def __init__(self, x: float, y: float, reason: str = None):
        self.x = x
        self.y = y
        super().__init__(F'Function sample {y} at x = {x} is unusable: {reason}.' if reason else F'Function returned non-finite value {y} at x = {x}.')


class ZeroSlopeSegment(PiecewiseError):
    def __init__(self, index: int, x_lo: float, x_hi: float, y: float):
        self.index = index
        self.x_lo = x_lo
        self.x_hi = x_hi
        self.y = y
        super().__init__(F'Segment {index} on [{x_lo}, {x_hi}) has zero slope (y = {y}) and cannot be inverted.')


class DomainOutOfRange(PiecewiseError):
    def __init__(self, x: float, interval: Tuple[float, float]):
        self.x = x
        self.interval = interval
        super().__init__(F'x = {x} is outside of the piecewise function\'s interval [{interval[0]}, {interval[1]}).')


class RangeOutOfRange(PiecewiseError):
    def __init__(self, y: float):
        self.y = y
        super().__init__(F'y = {y} is outside of the piecewise function\'s range.')
