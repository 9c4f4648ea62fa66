from __future__ import annotations
from dataclasses import dataclass
import math


@dataclass(frozen=True)
class Chord:
    '''
    Straight line L(t) = slope * t + intercept. Used both for the forward
    chord through two samples of a function and for its algebraic inverse.
    '''
    slope: float
    intercept: float

    @classmethod
    def through(cls, x0: float, y0: float, x1: float, y1: float) -> Chord:
        slope = (y1 - y0) / (x1 - x0)
        return cls(slope, y0 - slope * x0)

    def __call__(self, value: float) -> float:
        return self.slope * value + self.intercept

    def is_finite(self) -> bool:
        return math.isfinite(self.slope) and math.isfinite(self.intercept)

    def invert(self) -> Chord:
        '''
        y = m x + c  ->  x = y / m - c / m. Raises ZeroDivisionError for a
        horizontal chord.
        '''
        return Chord(1 / self.slope, -self.intercept / self.slope)
