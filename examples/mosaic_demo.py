#!/usr/bin/env python3
"""
Demo script rendering a few mosaics into PNG files.
"""

import math
import sys
from pathlib import Path

from starry_mosaic.core import Color, Gradient, MosaicBuilder, Vector
from starry_mosaic.core.coloring_method import ConicGradient, LinearGradient
from starry_mosaic.utils.logging import configure_logging


def main():
    """Render starry and polygonal mosaics with different coloring methods."""
    configure_logging("info", "console")
    output_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("mosaic_output")
    output_dir.mkdir(parents=True, exist_ok=True)

    print("Starry Mosaic Demo")
    print("=" * 40)

    width, height = 320, 320
    center = Vector(width / 2, height / 2)
    gradient = Gradient.from_colors(["#1b1f3b", "#4f5fbf", "#f2c14e", "#f78154"])

    configurations = {
        "octagon_star": MosaicBuilder()
        .set_image_size(width, height)
        .set_regular_polygon_shape(8)
        .set_uniform_scale(0.9),
        "polygonal_star": MosaicBuilder()
        .set_image_size(width, height)
        .set_polygonal_star_shape(7)
        .set_rotation_angle(math.pi / 7),
        "tilted_grid": MosaicBuilder()
        .set_image_size(width, height)
        .set_tilted_grid_shape(4, 4, 0.3, 0.0)
        .set_uniform_scale(0.8),
    }

    for name, builder in configurations.items():
        print(f"\n{name}:")
        print("-" * 30)
        print(f"  Key points: {len(builder.construct_shape())}")

        star = builder.build_star()
        if star is None:
            print("  Degenerate shape, skipped")
            continue
        star.draw(ConicGradient(gradient, center, 0.0, 0.5)).save(output_dir / f"{name}_starry.png")
        print(f"  Saved {name}_starry.png")

        polygon = builder.build_polygon()
        if polygon is not None:
            method = LinearGradient.step(gradient, Vector(0.0, 0.0), Vector(width, height))
            polygon.draw(method).save(output_dir / f"{name}_polygonal.png")
            print(f"  Saved {name}_polygonal.png")

    print("\n\nSolid color with lightening:")
    print("-" * 30)
    mosaic = MosaicBuilder().set_image_size(width, height).set_regular_polygon_shape(5).build_star()
    mosaic.draw(Color.parse("crimson"), workers=2).save(output_dir / "pentagon_solid.png")
    rotated = mosaic.transform(mosaic.transformation.with_changes(rotation_angle=math.pi / 5))
    rotated.draw_simple_radial_gradient(gradient).save(output_dir / "pentagon_radial.png")
    print("  Saved pentagon_solid.png and pentagon_radial.png")

    print(f"\nImages written to {output_dir.resolve()}")


if __name__ == "__main__":
    main()
