"""
Coordinate bookkeeping for rendering a formula to an image.

Every output pixel goes through three coordinate systems:
1. its pixel position (x, y) in the output image,
2. the pattern viewport point the pixel stands for,
3. the point the formula transforms it to.

The collection keeps all three as numpy arrays of the output image's shape,
plus a mask of transformed points that passed the threshold filter and the
source image positions they are mapped to.
"""

from dataclasses import dataclass
from typing import Optional, Union

import numpy as np

ArrayOrFloat = Union[float, np.ndarray]


def scale_value_between_two_ranges(value: ArrayOrFloat, old_min: float, old_max: float,
                                   new_min: float, new_max: float) -> ArrayOrFloat:
    """
    Linearly map ``value`` from [old_min, old_max] to [new_min, new_max].

    Values at or beyond the old bounds are clamped to the new bounds, so
    a degenerate old range (old_min == old_max) never divides by zero in the
    result.

    Example:
        >>> scale_value_between_two_ranges(25, 0, 100, 0, 1)
        0.25
    """
    value = np.asarray(value, dtype=float)
    with np.errstate(divide='ignore', invalid='ignore'):
        ratio = (value - old_min) / (old_max - old_min)
        scaled = ratio * (new_max - new_min) + new_min
    scaled = np.where(value >= old_max, new_max, scaled)
    scaled = np.where(value <= old_min, new_min, scaled)
    if scaled.ndim == 0:
        return float(scaled)
    return scaled


@dataclass
class CoordinateCollection:
    """Per-pixel coordinates of an output image, all shaped (height, width)."""
    input_x: np.ndarray
    input_y: np.ndarray
    viewport: Optional[np.ndarray] = None
    transformed: Optional[np.ndarray] = None
    satisfies_filter: Optional[np.ndarray] = None
    mapped_x: Optional[np.ndarray] = None
    mapped_y: Optional[np.ndarray] = None

    @classmethod
    def from_output_size(cls, width: int, height: int) -> 'CoordinateCollection':
        input_y, input_x = np.mgrid[0:height, 0:width]
        return cls(input_x=input_x, input_y=input_y)

    @property
    def shape(self):
        return self.input_x.shape

    def scale_to_viewport(self, x_min: float, y_min: float, x_max: float, y_max: float) -> None:
        """Store the viewport point each pixel stands for."""
        height, width = self.shape
        viewport_x = scale_value_between_two_ranges(self.input_x, 0, width, x_min, x_max)
        viewport_y = scale_value_between_two_ranges(self.input_y, 0, height, y_min, y_max)
        self.viewport = np.asarray(viewport_x) + 1j * np.asarray(viewport_y)

    def store_transformed(self, transformed: np.ndarray) -> None:
        self.transformed = np.asarray(transformed, dtype=complex).reshape(self.shape)
        self.satisfies_filter = np.zeros(self.shape, dtype=bool)
        self.mapped_x = None
        self.mapped_y = None

    def can_be_compared(self) -> np.ndarray:
        """Transformed points with finite real and imaginary parts."""
        return np.isfinite(self.transformed.real) & np.isfinite(self.transformed.imag)

    def _valid(self) -> np.ndarray:
        return self.can_be_compared() & self.satisfies_filter

    def _extreme(self, values: np.ndarray, reducer) -> float:
        valid = self._valid()
        if not valid.any():
            return float('nan')
        return float(reducer(values[valid]))

    def minimum_transformed_x(self) -> float:
        return self._extreme(self.transformed.real, np.min)

    def maximum_transformed_x(self) -> float:
        return self._extreme(self.transformed.real, np.max)

    def minimum_transformed_y(self) -> float:
        return self._extreme(self.transformed.imag, np.min)

    def maximum_transformed_y(self) -> float:
        return self._extreme(self.transformed.imag, np.max)

    def has_mapped_coordinate(self) -> np.ndarray:
        if self.mapped_x is None:
            return np.zeros(self.shape, dtype=bool)
        return np.isfinite(self.mapped_x) & np.isfinite(self.mapped_y)


@dataclass
class CoordinateThreshold:
    """Inclusive box that transformed coordinates must land in to be colored."""
    minimum_x: float
    maximum_x: float
    minimum_y: float
    maximum_y: float

    def filter_and_mark(self, collection: CoordinateCollection) -> np.ndarray:
        """
        Mark the finite transformed coordinates inside the box.

        Returns:
            The boolean mask, also stored on the collection
        """
        x = collection.transformed.real
        y = collection.transformed.imag
        with np.errstate(invalid='ignore'):
            mask = (
                collection.can_be_compared()
                & (x >= self.minimum_x) & (x <= self.maximum_x)
                & (y >= self.minimum_y) & (y <= self.maximum_y)
            )
        collection.satisfies_filter = mask
        return mask
