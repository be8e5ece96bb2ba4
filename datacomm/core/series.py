"""
Plot-ready sample series.

This module defines the `Series` class, the single data structure every
generator in the package returns. It encapsulates:
- The x-axis positions (time, sample index or bit position).
- The y-axis values (voltage level, amplitude, magnitude).
- A display name used by the plotting helpers.
"""

from typing import Any, Dict, Iterable, List, Tuple

import numpy as np
from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class Series(BaseModel):
    """
    An ordered, immutable sequence of (x, y) samples.

    Both arrays are stored as read-only 1-D ``float64`` arrays so a series
    cannot be mutated after a generator hands it out.

    Attributes:
        x: Sample positions, non-decreasing.
        y: Sample values.
        name: Optional label for legends.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    x: Any
    y: Any
    name: str = ""

    @field_validator("x", "y", mode="before")
    @classmethod
    def validate_samples(cls, v: Any) -> np.ndarray:
        try:
            arr = np.array(v, dtype=float)
        except (TypeError, ValueError):
            raise ValueError(f"Could not convert input of type {type(v)} to array.")
        if arr.ndim != 1:
            raise ValueError(f"Series data must be 1-D, got shape {arr.shape}.")
        arr.setflags(write=False)
        return arr

    @model_validator(mode="after")
    def check_lengths(self) -> "Series":
        if self.x.shape != self.y.shape:
            raise ValueError(
                f"Length mismatch: x has {self.x.size} samples, y has {self.y.size}."
            )
        return self

    def __len__(self) -> int:
        return int(self.x.size)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Series):
            return NotImplemented
        return (
            self.name == other.name
            and np.array_equal(self.x, other.x)
            and np.array_equal(self.y, other.y)
        )

    @classmethod
    def from_points(
        cls, points: Iterable[Tuple[float, float]], name: str = ""
    ) -> "Series":
        """Builds a series from an iterable of ``(x, y)`` pairs."""
        pts = list(points)
        if not pts:
            return cls(x=[], y=[], name=name)
        xs, ys = zip(*pts)
        return cls(x=xs, y=ys, name=name)

    def points(self) -> List[Tuple[float, float]]:
        """Returns the samples as a list of ``(x, y)`` tuples."""
        return list(zip(self.x.tolist(), self.y.tolist()))

    def to_records(self) -> List[Dict[str, float]]:
        """Returns the samples as ``{"x": .., "y": ..}`` records for chart widgets."""
        return [{"x": x, "y": y} for x, y in self.points()]

    def with_name(self, name: str) -> "Series":
        """Returns a copy of the series carrying a different label."""
        return Series(x=self.x, y=self.y, name=name)
