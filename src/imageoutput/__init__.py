from .coordinates import CoordinateCollection, CoordinateThreshold, scale_value_between_two_ranges
from .eyedropper import Eyedropper
from .transformer import FormulaTransformer, TransformSettings, ViewportBounds
from .images import open_source_image, save_image

__all__ = [
    # Coordinates
    'CoordinateCollection',
    'CoordinateThreshold',
    'scale_value_between_two_ranges',
    # Color sampling
    'Eyedropper',
    # Rendering
    'FormulaTransformer',
    'TransformSettings',
    'ViewportBounds',
    # Image IO
    'open_source_image',
    'save_image',
]
