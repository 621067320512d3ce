"""
Render a formula into an RGBA image.

Pipeline:
1. one coordinate per output pixel,
2. scale pixels into the pattern viewport,
3. transform viewport points with the formula,
4. keep transformed points inside the coordinate threshold,
5. sample colors from the source image with the eyedropper.
"""

import logging
from dataclasses import dataclass
from multiprocessing import Pool
from typing import List, Tuple

import numpy as np
from tqdm import tqdm

from ..formula.arbitrary import Arbitrary
from .coordinates import CoordinateCollection, CoordinateThreshold
from .eyedropper import Eyedropper

logger = logging.getLogger(__name__)


@dataclass
class ViewportBounds:
    """Region of the complex plane shown in the output image."""
    x_min: float
    y_min: float
    x_max: float
    y_max: float


@dataclass
class TransformSettings:
    formula: Arbitrary
    pattern_viewport: ViewportBounds
    coordinate_threshold: CoordinateThreshold
    eyedropper: Eyedropper
    output_width: int
    output_height: int


def _calculate_chunk(args: Tuple[Arbitrary, np.ndarray]) -> np.ndarray:
    formula, points = args
    return np.asarray(formula.calculate(points), dtype=complex)


class FormulaTransformer:
    """
    Turns transform settings into pixels.

    Args:
        num_workers: Processes used to evaluate the formula. 1 evaluates the
            whole grid in this process.
        chunk_rows: Rows of the output image per work item
        show_progress: Show a tqdm bar while evaluating chunks
    """

    def __init__(self, num_workers: int = 1, chunk_rows: int = 64, show_progress: bool = False):
        self.num_workers = max(1, num_workers)
        self.chunk_rows = max(1, chunk_rows)
        self.show_progress = show_progress

    def transform(self, settings: TransformSettings) -> np.ndarray:
        """
        Returns:
            RGBA uint8 array shaped (output_height, output_width, 4)
        """
        collection = CoordinateCollection.from_output_size(settings.output_width, settings.output_height)
        viewport = settings.pattern_viewport
        collection.scale_to_viewport(viewport.x_min, viewport.y_min, viewport.x_max, viewport.y_max)

        collection.store_transformed(self.calculate(settings.formula, collection.viewport))

        mask = settings.coordinate_threshold.filter_and_mark(collection)
        logger.debug("%d of %d transformed coordinates inside the threshold", int(mask.sum()), mask.size)

        return settings.eyedropper.convert_coordinates_to_colors(collection)

    def calculate(self, formula: Arbitrary, points: np.ndarray) -> np.ndarray:
        """Evaluate ``formula`` over a 2D grid of points, chunked by rows."""
        chunks: List[np.ndarray] = [
            points[start:start + self.chunk_rows]
            for start in range(0, points.shape[0], self.chunk_rows)
        ]
        work = [(formula, chunk) for chunk in chunks]

        if self.num_workers == 1:
            results = [
                _calculate_chunk(item)
                for item in tqdm(work, desc="Transforming", disable=not self.show_progress)
            ]
        else:
            with Pool(self.num_workers) as pool:
                results = list(tqdm(
                    pool.imap(_calculate_chunk, work),
                    total=len(work),
                    desc="Transforming",
                    disable=not self.show_progress,
                ))

        if not results:
            return np.zeros(points.shape, dtype=complex)
        return np.concatenate([np.broadcast_to(r, c.shape) for r, c in zip(results, chunks)], axis=0)
