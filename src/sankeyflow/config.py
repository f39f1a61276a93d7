"""
Layout configuration.

LayoutConfig bundles every knob the layout pipeline reads. It is immutable
once built; use ``replace()`` to derive a modified copy.
"""

import dataclasses
import math
from dataclasses import dataclass
from typing import Any, Mapping

from .errors import ConfigError

MIN_ITERATIONS = 0
MAX_ITERATIONS = 50


@dataclass(frozen=True)
class LayoutConfig:
    """
    Geometry and behaviour settings for a layout run.

    Attributes:
        width: Total usable width in pixels.
        height: Total usable height in pixels.
        node_width: Pixel width of every node rectangle.
        spacing_factor: Share (0-1) of the available vertical slack that
            becomes padding between nodes in the same stage.
        reverse_graph: Swap every link's source and target before linking.
        justify_origins_left: Keep nodes without inflow in stage 0.
        justify_endpoints_right: Push nodes without outflow to the last stage.
        iterations: Number of relaxation iterations (clamped to 0-50).
        recenter: Centre the occupied extent vertically after each iteration.
    """

    width: float = 600
    height: float = 400
    node_width: float = 9
    spacing_factor: float = 0.85
    reverse_graph: bool = False
    justify_origins_left: bool = False
    justify_endpoints_right: bool = False
    iterations: int = 25
    recenter: bool = False

    def __post_init__(self):
        for name in ("width", "height", "node_width"):
            value = getattr(self, name)
            if not math.isfinite(value) or value < 0:
                raise ConfigError(f"{name} must be a finite, non-negative number: {value!r}")
        if not 0 <= self.spacing_factor <= 1:
            raise ConfigError(f"spacing_factor must be between 0 and 1: {self.spacing_factor!r}")

    @property
    def effective_iterations(self) -> int:
        """The iteration count clamped to the supported range."""
        return max(MIN_ITERATIONS, min(MAX_ITERATIONS, int(self.iterations)))

    def replace(self, **changes: Any) -> "LayoutConfig":
        """Return a copy of this config with the given fields changed."""
        return dataclasses.replace(self, **changes)

    @classmethod
    def from_dict(cls, settings: Mapping[str, Any]) -> "LayoutConfig":
        """
        Build a config from a settings mapping.

        Keys that are not LayoutConfig fields are ignored, so a full
        application settings dictionary can be passed directly.
        """
        known = {f.name for f in dataclasses.fields(cls)}
        return cls(**{key: value for key, value in settings.items() if key in known})
