#!/usr/bin/env python3
"""Ray cast a small scene and save a depth image.

Builds an OpenGL-style camera on the CPU, unprojects every pixel to a
world-space ray, and intersects each ray against a sphere, a box and a
floor quad inside a single Taichi kernel. The nearest forward hit is
written as a grayscale depth value (near is bright, far is dark).

Usage:
    python -m examples.raycast_depth [options]

Options:
    --width WIDTH       Image width in pixels (default: 320)
    --height HEIGHT     Image height in pixels (default: 240)
    --output OUTPUT     Output file path (default: depth.png)
    --arch ARCH         Taichi backend (default: from VECTOR_MATH_ARCH or cpu)

Example:
    python -m examples.raycast_depth --width 640 --height 480
"""

from __future__ import annotations

import argparse
import logging
import math
import sys
from pathlib import Path

import numpy as np
import taichi as ti
from PIL import Image as PILImage

logger = logging.getLogger(__name__)

Z_NEAR = 0.1
Z_FAR = 50.0


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Ray cast a small scene and save a depth image.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--width", type=int, default=320, help="Image width (default: 320)")
    parser.add_argument("--height", type=int, default=240, help="Image height (default: 240)")
    parser.add_argument(
        "--output",
        type=str,
        default="depth.png",
        help="Output file path (default: depth.png)",
    )
    parser.add_argument(
        "--arch",
        type=str,
        default=None,
        help="Taichi backend: cpu, gpu, cuda, vulkan or metal",
    )
    return parser.parse_args()


def pixel_rays(camera: np.ndarray, width: int, height: int):
    """Near and far plane points for every pixel center.

    Same mapping as pick_ray, done for the whole viewport with one
    matrix product instead of one unproject call per pixel. Column 0 of
    the result is the top row of the image.

    Returns:
        Two (width, height, 3) arrays of world-space points.
    """
    xs = (np.arange(width) + 0.5) / width * 2.0 - 1.0
    ys = 1.0 - (np.arange(height) + 0.5) / height * 2.0
    ndc_x, ndc_y = np.meshgrid(xs, ys, indexing="ij")

    inverse = np.linalg.inv(camera)
    points = []
    for ndc_z in (-1.0, 1.0):
        ndc = np.stack(
            [ndc_x, ndc_y, np.full_like(ndc_x, ndc_z), np.ones_like(ndc_x)], axis=-1
        )
        world = ndc @ inverse.T
        points.append(world[..., :3] / world[..., 3:4])
    return points[0], points[1]


def raycast_depth(width: int, height: int, output_path: str) -> Path:
    """Render the depth image and save it as PNG.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        output_path: Output file path.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports so Taichi is initialized first
    from vector_math.camera.opengl import (
        make_perspective_matrix,
        make_view_matrix,
        pick_ray,
    )
    from vector_math.core.ray import (
        Ray,
        intersect_aabb3,
        intersect_quad,
        intersect_sphere,
    )
    from vector_math.core.vector import normalize, vec3
    from vector_math.geometry.aabb import Aabb3
    from vector_math.geometry.quad import Quad
    from vector_math.geometry.sphere import Sphere

    view = make_view_matrix((4.0, 3.0, 6.0), (0.0, 0.5, 0.0), (0.0, 1.0, 0.0))
    projection = make_perspective_matrix(math.radians(50.0), width / height, Z_NEAR, Z_FAR)
    camera = projection @ view
    near_points, far_points = pixel_rays(camera, width, height)

    # Top-left pixel center must agree with the library picking path
    ray_near, ray_far = pick_ray(camera, 0.0, width, 0.0, height, 0.5, 0.5)
    if not (np.allclose(ray_near, near_points[0, 0]) and np.allclose(ray_far, far_points[0, 0])):
        raise RuntimeError("Vectorized pixel rays disagree with pick_ray")

    origins = ti.Vector.field(3, dtype=ti.f64, shape=(width, height))
    targets = ti.Vector.field(3, dtype=ti.f64, shape=(width, height))
    depth = ti.field(dtype=ti.f64, shape=(width, height))
    origins.from_numpy(near_points)
    targets.from_numpy(far_points)

    @ti.func
    def closer(best: ti.f64, hit: ti.i32, t: ti.f64) -> ti.f64:
        result = best
        if hit == 1 and t >= 0.0 and t < best:
            result = t
        return result

    @ti.kernel
    def render():
        for i, j in depth:
            sphere = Sphere(center=vec3(-1.0, 1.0, 0.0), radius=1.0)
            box = Aabb3(min=vec3(0.5, 0.0, -1.0), max=vec3(2.0, 1.5, 0.5))
            floor = Quad(
                point0=vec3(-4.0, 0.0, -4.0),
                point1=vec3(-4.0, 0.0, 4.0),
                point2=vec3(4.0, 0.0, 4.0),
                point3=vec3(4.0, 0.0, -4.0),
            )
            ray = Ray(origin=origins[i, j], direction=normalize(targets[i, j] - origins[i, j]))
            best = ti.cast(Z_FAR, ti.f64)
            rec = intersect_sphere(ray, sphere)
            best = closer(best, rec.hit, rec.t)
            rec = intersect_aabb3(ray, box)
            best = closer(best, rec.hit, rec.t)
            rec = intersect_quad(ray, floor)
            best = closer(best, rec.hit, rec.t)
            depth[i, j] = best

    render()

    values = depth.to_numpy()
    hit_mask = values < Z_FAR
    logger.info("%d of %d pixels hit geometry", int(hit_mask.sum()), values.size)

    shade = np.zeros_like(values)
    if hit_mask.any():
        lo = values[hit_mask].min()
        hi = values[hit_mask].max()
        span = hi - lo if hi > lo else 1.0
        shade[hit_mask] = 1.0 - 0.8 * (values[hit_mask] - lo) / span

    # Fields are indexed (x, y); images are (row, column)
    image_uint8 = (np.clip(shade.T, 0.0, 1.0) * 255.0).astype(np.uint8)
    output_file = Path(output_path)
    PILImage.fromarray(image_uint8, mode="L").save(output_file)
    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    from vector_math.config import RuntimeConfig, init

    config = RuntimeConfig.from_env()
    if args.arch is not None:
        config.arch = args.arch
    try:
        init(config)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    output_file = raycast_depth(args.width, args.height, args.output)
    print(f"Saved to: {output_file.absolute()}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
