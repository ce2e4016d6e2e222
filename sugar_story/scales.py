# scales.py
# Value-to-pixel mappings. Built once per render and handed to whoever needs them.

from typing import List, Sequence, Tuple

import numpy as np
from matplotlib.ticker import MaxNLocator


def _locator(count: int) -> MaxNLocator:
    # 1-2-5 steps, the same round numbers the axes of every chart use
    return MaxNLocator(nbins=count, steps=[1, 2, 5, 10])


class LinearScale:
    def __init__(self, domain: Tuple[float, float], range_: Tuple[float, float]):
        self.domain = (float(domain[0]), float(domain[1]))
        self.range = (float(range_[0]), float(range_[1]))

    def __call__(self, value: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        if d1 == d0:
            # degenerate domain: everything sits at the midpoint
            return (r0 + r1) / 2
        return r0 + (value - d0) / (d1 - d0) * (r1 - r0)

    def nice(self, count: int = 10) -> "LinearScale":
        """Extend the domain outwards to round tick values."""
        start, stop = self.domain
        if stop < start:
            raise ValueError("nice() expects an ascending domain")
        if start == stop:
            return self
        values = _locator(count).tick_values(start, stop)
        self.domain = (float(values[0]), float(values[-1]))
        return self

    def ticks(self, count: int = 10) -> List[float]:
        start, stop = self.domain
        if start == stop:
            return [start]
        values = _locator(count).tick_values(start, stop)
        # the locator may step past the domain; keep what lies inside
        eps = (stop - start) * 1e-9
        inside = values[(values >= start - eps) & (values <= stop + eps)]
        return [float(v) for v in np.round(inside, 12)]


class BandScale:
    def __init__(self, domain: Sequence[str], range_: Tuple[float, float], padding: float = 0.0):
        self.domain = list(dict.fromkeys(domain))  # repeated keys share one band
        self.range = (float(range_[0]), float(range_[1]))
        self.padding = padding
        n = len(self.domain)
        r0, r1 = self.range
        self.step = (r1 - r0) / max(1, n - padding + padding * 2)
        self.bandwidth = self.step * (1 - padding)
        # align 0.5: leftover space split evenly on both ends
        self._start = r0 + (r1 - r0 - self.step * (n - padding)) * 0.5
        self._index = {key: i for i, key in enumerate(self.domain)}

    def __call__(self, key: str) -> float:
        return self._start + self.step * self._index[key]

    def center(self, key: str) -> float:
        return self(key) + self.bandwidth / 2
