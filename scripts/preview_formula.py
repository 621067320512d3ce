#!/usr/bin/env python3
"""
Preview a formula without a source image.

Plots the transformed field with domain coloring: hue follows the argument of
f(z), brightness follows its magnitude. Useful to check a formula's symmetry
before rendering it against a photo.

Usage:
    python scripts/preview_formula.py -f scripts/formulas/hexagonal_p6m.yaml
    python scripts/preview_formula.py -f formula.json -r 400 -o preview.png
"""

import argparse
import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import numpy as np
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
from matplotlib.colors import hsv_to_rgb

from src.command.create_symmetry_pattern import load_command
from src.imageoutput.coordinates import CoordinateCollection


def domain_coloring(values: np.ndarray) -> np.ndarray:
    """Map complex values to RGB; non-finite values are drawn black."""
    finite = np.isfinite(values)
    safe = np.where(finite, values, 0)
    hue = (np.angle(safe) / (2 * np.pi)) % 1.0
    magnitude = np.abs(safe)
    value = magnitude / (1.0 + magnitude)
    hsv = np.stack([hue, np.full(hue.shape, 0.9), value], axis=-1)
    rgb = hsv_to_rgb(hsv)
    rgb[~finite] = 0
    return rgb


def main():
    parser = argparse.ArgumentParser(description='Domain-coloring preview of a formula')
    parser.add_argument('-f', '--formula', type=str, required=True,
                        help='Formula/command file (.yaml, .yml or .json)')
    parser.add_argument('-r', '--resolution', type=int, default=300,
                        help='Pixels per side')
    parser.add_argument('-o', '--output', type=str, default='./output/preview.png',
                        help='Where to save the figure')
    args = parser.parse_args()

    command = load_command(args.formula)
    if command.formula_error is not None:
        print(f"✗ Formula is invalid, previewing the identity formula: {command.formula_error}")

    viewport = command.pattern_viewport
    collection = CoordinateCollection.from_output_size(args.resolution, args.resolution)
    collection.scale_to_viewport(viewport.x_min, viewport.y_min, viewport.x_max, viewport.y_max)
    with np.errstate(all='ignore'):
        values = np.asarray(command.formula.calculate(collection.viewport), dtype=complex)
    values = np.broadcast_to(values, collection.shape)

    fig, axes = plt.subplots(1, 2, figsize=(12, 6))
    extent = [viewport.x_min, viewport.x_max, viewport.y_max, viewport.y_min]

    axes[0].imshow(domain_coloring(values), extent=extent)
    axes[0].set_title(f'{type(command.formula).__name__}: arg / |f(z)|')

    with np.errstate(all='ignore'):
        axes[1].imshow(np.log1p(np.abs(values)), extent=extent, cmap='magma')
    axes[1].set_title('log(1 + |f(z)|)')

    symmetries = [symmetry.value for symmetry in command.formula.symmetries_found()]
    fig.suptitle(f"Symmetries: {', '.join(symmetries) or 'none reported'}")
    plt.tight_layout()

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    plt.savefig(output_path, dpi=100)
    plt.close(fig)
    print(f"✓ Saved preview to {output_path}")


if __name__ == '__main__':
    main()
