from __future__ import annotations
from dataclasses import dataclass
from numbers import Integral
from typing import Callable, Optional, Sequence, Tuple
import math

import numpy as np

from .chord import Chord
from .constants import DTYPE
from .errors import InvalidPartition, NonFiniteSample, ZeroSlopeSegment, DomainOutOfRange, RangeOutOfRange
from .logger import logger


@dataclass(frozen=True)
class ForwardSegment:
    x_lo: float
    x_hi: float
    chord: Chord

    def contains(self, x: float) -> bool:
        return self.x_lo <= x < self.x_hi


@dataclass(frozen=True)
class InverseSegment:
    y_lo: float
    y_hi: float
    chord: None | Chord  # None for a zero-slope segment
    excluded: None | float = None  # f(b) on the last segment, the inverse of the open end of [a, b)

    @property
    def invertible(self) -> bool:
        return self.chord is not None

    def contains(self, y: float) -> bool:
        return self.invertible and self.y_lo <= y <= self.y_hi and y != self.excluded


def _sample_points(a: float, b: float, n_segments: int) -> Tuple[float, np.ndarray]:
    width = (b - a) / n_segments

    # a + i * w for every i instead of accumulating w, so the error does not grow along the interval
    xs = a + np.arange(n_segments + 1, dtype=DTYPE) * width
    xs[-1] = b

    return width, xs


class PiecewiseInverter:
    '''
    Piecewise-linear approximation of a function on [a, b), split into
    n_segments chords of equal width, that can be evaluated in both
    directions.

    Forward evaluation (x -> y) picks the chord by index arithmetic. Backward
    evaluation (y -> x) returns the inverse of the first chord, in segment
    order, whose y-range [y_lo, y_hi] contains y, so a value shared by two
    neighbouring segments belongs to the lower index. f(b) itself is only
    covered if a segment other than the last one reaches it. If the function
    is strictly monotone on the sample points, the chord is found with a
    binary search.

    A chord with zero slope has no inverse. With strict=True it aborts the
    construction, otherwise the segment is kept for forward evaluation and
    skipped by backward evaluation. Its value is still found through the
    closed range of the neighbouring segment.
    '''

    def __init__(self, func: Callable[[float], float], n_segments: int, interval: Sequence[float], strict: bool = False):
        if isinstance(n_segments, bool) or not isinstance(n_segments, Integral):
            raise InvalidPartition(n_segments, interval, 'number of segments must be an integer')
        if n_segments < 1:
            raise InvalidPartition(n_segments, interval, 'at least one segment is required')

        a, b = (float(v) for v in interval)
        if not (math.isfinite(a) and math.isfinite(b)):
            raise InvalidPartition(n_segments, interval, 'interval bounds must be finite')
        if not a < b:
            raise InvalidPartition(n_segments, interval, 'interval start must be less than its end')

        self._func = func
        self._n = int(n_segments)
        self._a = a
        self._b = b
        self._width, xs = _sample_points(a, b, self._n)
        if not np.all(np.diff(xs) > 0):
            raise InvalidPartition(n_segments, interval, 'segments are narrower than the floating point resolution')

        # evaluated once per point, neighbouring segments share their endpoint
        ys = np.empty_like(xs)
        for k, x in enumerate(xs):
            y = float(func(float(x)))
            if not math.isfinite(y):
                raise NonFiniteSample(float(x), y)
            ys[k] = y

        forward = []
        inverse = []
        for i in range(self._n):
            x0, x1 = float(xs[i]), float(xs[i + 1])
            y0, y1 = float(ys[i]), float(ys[i + 1])

            chord = Chord.through(x0, y0, x1, y1)
            if not chord.is_finite():
                raise NonFiniteSample(x1, y1, F'chord from x = {x0} to x = {x1} overflows: {chord}')
            forward.append(ForwardSegment(x0, x1, chord))

            excluded = y1 if i == self._n - 1 else None
            if chord.slope == 0:
                if strict:
                    raise ZeroSlopeSegment(i, x0, x1, y0)
                logger.debug('Segment %d on [%f, %f) has zero slope, it is not invertible.', i, x0, x1)
                inverse.append(InverseSegment(min(y0, y1), max(y0, y1), None, excluded))
            else:
                inverse_chord = chord.invert()
                if not inverse_chord.is_finite():
                    raise NonFiniteSample(x1, y1, F'inverse of the chord from x = {x0} to x = {x1} overflows: {inverse_chord}')
                inverse.append(InverseSegment(min(y0, y1), max(y0, y1), inverse_chord, excluded))

        self._forward: Tuple[ForwardSegment, ...] = tuple(forward)
        self._inverse: Tuple[InverseSegment, ...] = tuple(inverse)

        # flat tables for vectorized forward evaluation
        self._ar_x_lo = xs[:-1].copy()
        self._ar_x_hi = xs[1:].copy()
        self._ar_slope = np.array([s.chord.slope for s in self._forward], dtype=DTYPE)
        self._ar_intercept = np.array([s.chord.intercept for s in self._forward], dtype=DTYPE)

        self._increasing = bool(np.all(self._ar_slope > 0))
        self._is_monotone = self._increasing or bool(np.all(self._ar_slope < 0))

        # ascending bounds for the binary search, only used when monotone
        if self._increasing:
            self._ar_y_bound_sorted = np.array([s.y_hi for s in self._inverse], dtype=DTYPE)
        else:
            self._ar_y_bound_sorted = np.array([s.y_lo for s in self._inverse[::-1]], dtype=DTYPE)

        uninvertible = sum(1 for s in self._inverse if not s.invertible)
        logger.debug('Built %d segments of width %f on [%f, %f), %d not invertible, monotone: %s.',
                     self._n, self._width, a, b, uninvertible, self._is_monotone)

    @property
    def func(self) -> Callable[[float], float]:
        return self._func

    @property
    def n_segments(self) -> int:
        return self._n

    @property
    def width(self) -> float:
        return self._width

    @property
    def x_range(self) -> Tuple[float, float]:
        return self._a, self._b

    @property
    def y_range(self) -> Optional[Tuple[float, float]]:
        '''
        Smallest and largest y covered by an invertible segment, or None if
        no segment is invertible. f(b) closes the last segment but is not
        covered by it, and for a non-monotone function the range may contain
        gaps.
        '''
        invertible = [s for s in self._inverse if s.invertible]
        if not invertible:
            return None

        return min(s.y_lo for s in invertible), max(s.y_hi for s in invertible)

    @property
    def forward_segments(self) -> Tuple[ForwardSegment, ...]:
        return self._forward

    @property
    def inverse_segments(self) -> Tuple[InverseSegment, ...]:
        return self._inverse

    @property
    def is_monotone(self) -> bool:
        return self._is_monotone

    def __len__(self) -> int:
        return self._n

    def __repr__(self):
        return F'PiecewiseInverter[n_segments={self._n}, interval=[{self._a}, {self._b})]'

    def __call__(self, x: float) -> float:
        return self.x_to_y(x)

    def segment_index(self, x: float) -> int:
        x = float(x)
        if not self._a <= x < self._b:
            raise DomainOutOfRange(x, self.x_range)

        index = min(max(math.floor((x - self._a) / self._width), 0), self._n - 1)

        # the division may round onto the neighbouring segment
        if x < self._forward[index].x_lo:
            index -= 1
        elif x >= self._forward[index].x_hi:
            index += 1

        return index

    def x_to_y(self, x: float) -> float:
        x = float(x)
        return self._forward[self.segment_index(x)].chord(x)

    def y_to_x(self, y: float) -> float:
        y = float(y)
        return self._find_inverse_segment(y).chord(y)

    def x_to_y_many(self, xs) -> np.ndarray:
        ar_x = np.asarray(xs, dtype=DTYPE)

        outside = ~((ar_x >= self._a) & (ar_x < self._b))
        if np.any(outside):
            raise DomainOutOfRange(float(ar_x[outside][0]), self.x_range)

        ar_index = np.clip(np.floor((ar_x - self._a) / self._width).astype(int), 0, self._n - 1)
        ar_index = ar_index - (ar_x < self._ar_x_lo[ar_index]).astype(int)
        ar_index = ar_index + (ar_x >= self._ar_x_hi[ar_index]).astype(int)

        return self._ar_slope[ar_index] * ar_x + self._ar_intercept[ar_index]

    def y_to_x_many(self, ys) -> np.ndarray:
        ar_y = np.asarray(ys, dtype=DTYPE)
        ar_x = np.array([self.y_to_x(y) for y in ar_y.ravel()], dtype=DTYPE)
        return ar_x.reshape(ar_y.shape)

    def _find_inverse_segment(self, y: float) -> InverseSegment:
        if self._is_monotone:
            # ranges are sorted and only touch at their ends, the lowest index whose far bound reaches y is the only candidate
            if self._increasing:
                index = int(np.searchsorted(self._ar_y_bound_sorted, y, side='left'))
            else:
                index = self._n - int(np.searchsorted(self._ar_y_bound_sorted, y, side='right'))
            if index < self._n and self._inverse[index].contains(y):
                return self._inverse[index]
            raise RangeOutOfRange(y)

        for segment in self._inverse:
            if segment.contains(y):
                return segment

        raise RangeOutOfRange(y)
