# sneaker_tryon/tryon_engine/processing/one_euro_filter.py
import math
import numpy as np
from typing import Optional
from ..common.config import SmoothingConfig
from ..common.models import PlacementTransform

class OneEuroFilter:
    """
    One-Euro low-pass filter over a fixed-length placement vector.

    Slow foot motion is smoothed hard to hide per-frame jitter; fast motion
    raises the cutoff so the shoe keeps up with the foot.
    """
    def __init__(self, min_cutoff=0.5, beta=0.05, d_cutoff=1.0):
        self.min_cutoff = min_cutoff
        self.beta = beta
        self.d_cutoff = d_cutoff
        self.reset()

    def reset(self):
        self.x_prev = None
        self.dx_prev = None
        self.t_prev = None

    def _smoothing_factor(self, te, cutoff):
        r = 2 * np.pi * cutoff * te
        return r / (r + 1)

    def __call__(self, x: np.ndarray, t: float) -> np.ndarray:
        if self.t_prev is None:
            self.t_prev = t
            self.x_prev = x
            self.dx_prev = np.zeros_like(x)
            return x

        te = t - self.t_prev
        if te < 1e-6:
            return self.x_prev

        alpha_d = self._smoothing_factor(te, self.d_cutoff)
        dx = (x - self.x_prev) / te
        dx_hat = alpha_d * dx + (1 - alpha_d) * self.dx_prev

        cutoff = self.min_cutoff + self.beta * np.abs(dx_hat)
        alpha = self._smoothing_factor(te, cutoff)
        x_hat = alpha * x + (1 - alpha) * self.x_prev

        self.x_prev = x_hat
        self.dx_prev = dx_hat
        self.t_prev = t
        return x_hat


class PlacementSmoother:
    """
    Optional cross-frame smoothing of placement transforms.

    The angle is filtered as (cos, sin) so it never jumps at +-pi. The filter
    restarts whenever tracking is lost or the anchored foot changes side.
    """

    def __init__(self, config: SmoothingConfig):
        self.filter = OneEuroFilter(config.min_cutoff, config.beta, config.d_cutoff)
        self._side = None

    def reset(self):
        self.filter.reset()
        self._side = None

    def __call__(self, transform: Optional[PlacementTransform], t: float) -> Optional[PlacementTransform]:
        if transform is None:
            self.reset()
            return None
        if transform.side != self._side:
            self.filter.reset()
            self._side = transform.side

        x, y, z = transform.position
        signal = np.array([x, y, z, math.cos(transform.rotation_z), math.sin(transform.rotation_z), transform.scale])
        s = self.filter(signal, t)
        return PlacementTransform(
            position=(float(s[0]), float(s[1]), float(s[2])),
            rotation_z=math.atan2(s[4], s[3]),
            mirror_y=transform.mirror_y,
            scale=float(s[5]),
            side=transform.side,
        )
