#!/usr/bin/env python3
"""
Render a symmetry pattern from a formula file and a source image.

The formula file (YAML or JSON) describes the viewport, coordinate threshold,
eyedropper and formula; see scripts/formulas/ for examples. Every output pixel
is mapped into the viewport, transformed by the formula and colored by
sampling the source image.

Usage:
    python scripts/create_symmetry_pattern.py -s source.png -f scripts/formulas/square_p4m.yaml -o out.png
    python scripts/create_symmetry_pattern.py -s source.png -f formula.json -o out.png -W 1600 -H 1200 --workers 4
"""

import argparse
import logging
import sys
from multiprocessing import cpu_count
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from src.analysis.symmetry_verifier import FormulaSymmetryVerifier
from src.command.create_symmetry_pattern import load_command, output_settings_from_yaml
from src.formula.errors import DeserializationError
from src.imageoutput.images import open_source_image, save_image
from src.imageoutput.transformer import FormulaTransformer

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def main():
    parser = argparse.ArgumentParser(description='Render a symmetry pattern from a formula file')
    parser.add_argument('-s', '--source', type=str, required=True,
                        help='Image to sample colors from')
    parser.add_argument('-f', '--formula', type=str, required=True,
                        help='Formula/command file (.yaml, .yml or .json)')
    parser.add_argument('-o', '--output', type=str, default='./output/pattern.png',
                        help='Where to write the PNG')
    parser.add_argument('-W', '--width', type=int, default=None,
                        help='Output width in pixels')
    parser.add_argument('-H', '--height', type=int, default=None,
                        help='Output height in pixels')
    parser.add_argument('--output-settings', type=str, default=None,
                        help='YAML/JSON file with output_width and output_height')
    parser.add_argument('--workers', type=int, default=1,
                        help=f'Worker processes (max useful: {cpu_count()})')
    parser.add_argument('--verify', action='store_true',
                        help='Numerically check the symmetries the formula claims')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Debug logging')

    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format=LOG_FORMAT)

    width, height = 800, 800
    if args.output_settings:
        output_settings = output_settings_from_yaml(Path(args.output_settings).read_text())
        width = output_settings.output_width or width
        height = output_settings.output_height or height
    width = args.width or width
    height = args.height or height

    print("=" * 60)
    print("Creating symmetry pattern")
    print("=" * 60)
    print(f"Source image: {args.source}")
    print(f"Formula file: {args.formula}")
    print(f"Output size: {width}x{height}")
    print(f"Workers: {args.workers}")
    print("=" * 60)

    try:
        command = load_command(args.formula)
    except DeserializationError as err:
        print(f"✗ Could not read {args.formula}: {err}")
        sys.exit(1)

    if command.formula_error is not None:
        print(f"✗ Formula is invalid, rendering with the identity formula: {command.formula_error}")

    formula = command.formula
    print(f"\nFormula: {type(formula).__name__}")
    symmetries = [symmetry.value for symmetry in formula.symmetries_found()]
    if symmetries:
        print(f"Symmetries found: {', '.join(symmetries)}")

    if args.verify:
        result = FormulaSymmetryVerifier().verify(formula, verbose=True)
        print(result.message)

    source_image = open_source_image(args.source)
    settings = command.transform_settings(source_image, width, height)

    transformer = FormulaTransformer(num_workers=args.workers, show_progress=True)
    pixels = transformer.transform(settings)

    output_path = save_image(pixels, args.output)
    print(f"\n✓ Saved pattern to {output_path}")


if __name__ == '__main__':
    main()
