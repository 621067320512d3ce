"""
Eyedropper: samples colors from a rectangle of the source image.
"""

from dataclasses import dataclass

import numpy as np

from .coordinates import CoordinateCollection, scale_value_between_two_ranges

TRANSPARENT = (0, 0, 0, 0)


@dataclass
class Eyedropper:
    """
    Picks a color for every filtered coordinate.

    Transformed coordinates are rescaled from the collection's own bounds into
    the [left, right] x [top, bottom] box, then the source pixel at
    (int(x), int(y)) is sampled. Anything unmapped or outside the source image
    stays transparent.

    Attributes:
        source_image: RGBA uint8 array shaped (height, width, 4)
    """
    left: int
    right: int
    top: int
    bottom: int
    source_image: np.ndarray

    def map_coordinates_to_boundary(self, collection: CoordinateCollection) -> None:
        valid = collection.can_be_compared() & collection.satisfies_filter
        mapped_x = np.full(collection.shape, np.nan)
        mapped_y = np.full(collection.shape, np.nan)

        if valid.any():
            transformed = collection.transformed[valid]
            mapped_x[valid] = scale_value_between_two_ranges(
                transformed.real,
                collection.minimum_transformed_x(),
                collection.maximum_transformed_x(),
                self.left,
                self.right,
            )
            mapped_y[valid] = scale_value_between_two_ranges(
                transformed.imag,
                collection.minimum_transformed_y(),
                collection.maximum_transformed_y(),
                self.top,
                self.bottom,
            )

        collection.mapped_x = mapped_x
        collection.mapped_y = mapped_y

    def convert_coordinates_to_colors(self, collection: CoordinateCollection) -> np.ndarray:
        """
        Returns:
            RGBA uint8 array shaped like the collection plus a channel axis
        """
        self.map_coordinates_to_boundary(collection)

        colors = np.zeros(collection.shape + (4,), dtype=np.uint8)
        colors[...] = TRANSPARENT

        source_height, source_width = self.source_image.shape[:2]
        mapped = collection.has_mapped_coordinate()
        pixel_x = np.zeros(collection.shape, dtype=int)
        pixel_y = np.zeros(collection.shape, dtype=int)
        pixel_x[mapped] = collection.mapped_x[mapped].astype(int)
        pixel_y[mapped] = collection.mapped_y[mapped].astype(int)

        inside = (
            mapped
            & (pixel_x >= 0) & (pixel_x < source_width)
            & (pixel_y >= 0) & (pixel_y < source_height)
        )
        colors[inside] = self.source_image[pixel_y[inside], pixel_x[inside], :4]
        return colors
