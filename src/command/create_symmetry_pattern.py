"""
Commands read from YAML or JSON files.

A CreateSymmetryPattern command says which part of the plane to render, which
transformed values to keep, which rectangle of the source image to sample, and
which formula to apply:

    pattern_viewport:     {x_min: -2, y_min: -2, x_max: 2, y_max: 2}
    coordinate_threshold: {x_min: -5, y_min: -5, x_max: 5, y_max: 5}
    eyedropper:           {left: 0, right: 100, top: 0, bottom: 100}
    formula:
      type: square
      desired_symmetry: p4m
      wave_packets:
        - multiplier: {real: 1, imaginary: 0}
          terms:
            - power_n: 1
              power_m: -2

OutputSettings holds the size of the rendered image:

    output_width: 800
    output_height: 600
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union

import numpy as np
import yaml

from ..formula.arbitrary import Arbitrary, Identity
from ..formula.builder import Builder
from ..formula.errors import DeserializationError, FormulaError
from ..imageoutput.coordinates import CoordinateThreshold
from ..imageoutput.eyedropper import Eyedropper
from ..imageoutput.transformer import TransformSettings, ViewportBounds

logger = logging.getLogger(__name__)


@dataclass
class PixelCorners:
    """Rectangle of the source image, in pixels."""
    left: int
    right: int
    top: int
    bottom: int


@dataclass
class CreateSymmetryPattern:
    pattern_viewport: ViewportBounds
    coordinate_threshold: CoordinateThreshold
    eyedropper: Optional[PixelCorners]
    formula: Arbitrary
    formula_error: Optional[FormulaError] = None

    def transform_settings(self, source_image: np.ndarray, output_width: int,
                           output_height: int) -> TransformSettings:
        """
        Combine this command with a loaded source image.

        Without an eyedropper box the whole source image is sampled.
        """
        corners = self.eyedropper
        if corners is None:
            source_height, source_width = source_image.shape[:2]
            corners = PixelCorners(0, source_width, 0, source_height)

        return TransformSettings(
            formula=self.formula,
            pattern_viewport=self.pattern_viewport,
            coordinate_threshold=self.coordinate_threshold,
            eyedropper=Eyedropper(corners.left, corners.right, corners.top, corners.bottom, source_image),
            output_width=output_width,
            output_height=output_height,
        )


@dataclass
class OutputSettings:
    output_width: int = 0
    output_height: int = 0


def _corner_values(options: Dict[str, Any], section: str, keys, cast: Callable) -> list:
    values = options.get(section)
    if not isinstance(values, dict):
        raise DeserializationError(f"{section} must be a mapping with keys: {', '.join(keys)}")
    try:
        return [cast(values.get(key, 0)) for key in keys]
    except (TypeError, ValueError) as err:
        raise DeserializationError(f"invalid {section}: {err}") from err


def command_from_dict(options: Dict[str, Any]) -> CreateSymmetryPattern:
    """
    Build a command from an already parsed mapping.

    Malformed sections raise DeserializationError. A well-formed formula that
    fails validation does not: the command gets the Identity formula and keeps
    the error in ``formula_error``.
    """
    if not isinstance(options, dict):
        raise DeserializationError("command must be a mapping")

    corner_keys = ('x_min', 'y_min', 'x_max', 'y_max')
    viewport = ViewportBounds(*_corner_values(options, 'pattern_viewport', corner_keys, float))

    x_min, y_min, x_max, y_max = _corner_values(options, 'coordinate_threshold', corner_keys, float)
    threshold = CoordinateThreshold(minimum_x=x_min, maximum_x=x_max, minimum_y=y_min, maximum_y=y_max)

    eyedropper = None
    if options.get('eyedropper') is not None:
        eyedropper = PixelCorners(*_corner_values(options, 'eyedropper', ('left', 'right', 'top', 'bottom'), int))

    formula: Arbitrary = Identity()
    formula_error = None
    if options.get('formula') is not None:
        formula, formula_error = Builder().with_marshal_options(options['formula']).build()

    return CreateSymmetryPattern(
        pattern_viewport=viewport,
        coordinate_threshold=threshold,
        eyedropper=eyedropper,
        formula=formula,
        formula_error=formula_error,
    )


def _parse(data: Union[str, bytes], loader: Callable, format_name: str) -> Any:
    try:
        return loader(data)
    except (yaml.YAMLError, json.JSONDecodeError, UnicodeDecodeError) as err:
        raise DeserializationError(f"could not parse {format_name}: {err}") from err


def command_from_yaml(data: Union[str, bytes]) -> CreateSymmetryPattern:
    return command_from_dict(_parse(data, yaml.safe_load, "YAML"))


def command_from_json(data: Union[str, bytes]) -> CreateSymmetryPattern:
    return command_from_dict(_parse(data, json.loads, "JSON"))


def load_command(path: Union[str, Path]) -> CreateSymmetryPattern:
    """Read a command file. ``.json`` files are parsed as JSON, anything else as YAML."""
    path = Path(path)
    data = path.read_text()
    logger.debug("loading command from %s", path)
    if path.suffix.lower() == '.json':
        return command_from_json(data)
    return command_from_yaml(data)


def output_settings_from_dict(options: Dict[str, Any]) -> OutputSettings:
    """Non-positive sizes are ignored and left at 0."""
    settings = OutputSettings()
    if not isinstance(options, dict):
        raise DeserializationError("output settings must be a mapping")
    try:
        width = int(options.get('output_width', 0))
        height = int(options.get('output_height', 0))
    except (TypeError, ValueError) as err:
        raise DeserializationError(f"invalid output settings: {err}") from err
    if width > 0:
        settings.output_width = width
    if height > 0:
        settings.output_height = height
    return settings


def output_settings_from_yaml(data: Union[str, bytes]) -> OutputSettings:
    return output_settings_from_dict(_parse(data, yaml.safe_load, "YAML"))


def output_settings_from_json(data: Union[str, bytes]) -> OutputSettings:
    return output_settings_from_dict(_parse(data, json.loads, "JSON"))
