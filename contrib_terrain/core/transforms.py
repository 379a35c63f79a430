"""
Height field transforms.

Each pass takes a (days, weeks) field and returns a new field of the same
shape; inputs are never modified in place. The render pipeline applies them
in order:

1. apply_radial_influence - bleed activity into nearby active cells
2. gaussian_smooth - edge-aware separable blur
3. preserve_zero_valleys - restore flat ground where there was no activity
4. add_terrain_noise - break up flat plateaus with value noise
"""

import math

import numpy as np
from typing import Union

INFLUENCE_STRENGTH = 0.2
INFLUENCE_CAP = 0.5
PEAK_COMPRESSION = 0.95
EDGE_SENSITIVITY = 2.0
NOISE_MIN_HEIGHT = 0.1
NOISE_OCTAVES = ((1.0, 0.6), (2.0, 0.3), (4.0, 0.1))


def round_half_up(value: float) -> int:
    """Round halves away from zero for positive values (2.5 -> 3)."""
    return int(math.floor(value + 0.5))


def apply_radial_influence(field: np.ndarray, radius: float = 2.5) -> np.ndarray:
    """
    Spread each active cell's value to its neighbors.

    Falloff is (1 - d/r)^3 * exp(-3 d/r), scaled by 0.2. The amount added to
    a neighbor is capped at half of that neighbor's current value, so inactive
    cells never gain height. Cells are visited row-major and the cap reads the
    running result, which makes the pass order dependent.

    Args:
        field: Height field
        radius: Influence radius in cells (rounded, at least 1)

    Returns:
        New influenced field
    """
    days, weeks = field.shape
    influenced = np.array(field, dtype=np.float64, copy=True)
    r = max(1, round_half_up(radius))

    # Offsets inside the disc, in scan order
    offsets = []
    for dy in range(-r, r + 1):
        for dx in range(-r, r + 1):
            if dy == 0 and dx == 0:
                continue
            distance = math.sqrt(dx * dx + dy * dy)
            if distance > r:
                continue
            t = distance / r
            falloff = (1 - t) ** 3 * math.exp(-t * 3)
            offsets.append((dy, dx, falloff * INFLUENCE_STRENGTH))

    for y in range(days):
        for x in range(weeks):
            center = field[y, x]
            if center <= 0:
                continue
            for dy, dx, weight in offsets:
                ny, nx = y + dy, x + dx
                if ny < 0 or ny >= days or nx < 0 or nx >= weeks:
                    continue
                current = influenced[ny, nx]
                influenced[ny, nx] = current + min(center * weight, current * INFLUENCE_CAP)

    return influenced


def gaussian_kernel(sigma: float) -> np.ndarray:
    """Normalized 1D Gaussian kernel with radius max(1, round(2 sigma))."""
    radius = max(1, round_half_up(sigma * 2))
    offsets = np.arange(-radius, radius + 1, dtype=np.float64)
    kernel = np.exp(-(offsets ** 2) / (2 * sigma * sigma))
    return kernel / kernel.sum()


def _edge_aware_pass(field: np.ndarray, kernel: np.ndarray, axis: int) -> np.ndarray:
    """One blur pass along an axis with clamp-to-edge borders."""
    radius = len(kernel) // 2
    pad = [(0, 0), (0, 0)]
    pad[axis] = (radius, radius)
    padded = np.pad(field, pad, mode="edge")
    length = field.shape[axis]

    acc = np.zeros_like(field)
    weight_sum = np.zeros_like(field)
    for i, k in enumerate(kernel):
        neighbor = np.take(padded, np.arange(i, i + length), axis=axis)
        weight = k * np.exp(-np.abs(field - neighbor) * EDGE_SENSITIVITY)
        acc += neighbor * weight
        weight_sum += weight

    return np.where(weight_sum > 0, acc / np.where(weight_sum > 0, weight_sum, 1), field)


def gaussian_smooth(field: np.ndarray, sigma: float = 0.6) -> np.ndarray:
    """
    Edge-aware separable Gaussian blur.

    Values are compressed by v^0.95 first. Each neighbor's kernel weight is
    multiplied by exp(-2 |center - neighbor|) so that active and inactive
    regions keep a sharp boundary. Horizontal pass first, then vertical.

    Args:
        field: Height field
        sigma: Gaussian sigma; non-positive returns an unmodified copy

    Returns:
        New smoothed field
    """
    if not sigma or sigma <= 0 or field.size == 0:
        return np.array(field, dtype=np.float64, copy=True)

    kernel = gaussian_kernel(sigma)
    compressed = np.where(field > 0, np.power(np.maximum(field, 0), PEAK_COMPRESSION), 0.0)

    horizontal = _edge_aware_pass(compressed, kernel, axis=1)
    return _edge_aware_pass(horizontal, kernel, axis=0)


def preserve_zero_valleys(smoothed: np.ndarray, original: np.ndarray) -> np.ndarray:
    """Force cells that were zero in the original field back to zero."""
    preserved = np.array(smoothed, dtype=np.float64, copy=True)
    preserved[original == 0] = 0.0
    return preserved


def simple_noise(
    x: Union[float, np.ndarray], y: Union[float, np.ndarray], frequency: float = 1.0
) -> Union[float, np.ndarray]:
    """
    Deterministic hash-style value noise in [-1, 1].

    Not Perlin noise: a fractional-part-of-sine hash of the scaled
    coordinates. Identical inputs always give identical output.
    """
    seed1 = np.sin(x * frequency * 12.9898 + y * frequency * 78.233) * 43758.5453
    seed2 = np.sin(x * frequency * 93.9898 + y * frequency * 47.233) * 28618.5453
    noise1 = (seed1 - np.floor(seed1)) * 2 - 1
    noise2 = (seed2 - np.floor(seed2)) * 2 - 1
    return (noise1 + noise2) * 0.5


def add_terrain_noise(
    field: np.ndarray,
    original: np.ndarray,
    noise_scale: float = 0.3,
    noise_frequency: float = 0.4,
) -> np.ndarray:
    """
    Add three-octave value noise to cells taller than 0.1.

    Intensity follows the original count (saturating at 5) and blends in
    more strongly for taller cells (saturating at 10). Results are clamped
    at zero.

    Args:
        field: Smoothed height field
        original: Raw counts before any transform
        noise_scale: Overall noise intensity
        noise_frequency: Base octave frequency

    Returns:
        New noisy field
    """
    days, weeks = field.shape
    ys, xs = np.mgrid[0:days, 0:weeks].astype(np.float64)

    combined = np.zeros_like(field, dtype=np.float64)
    for multiplier, weight in NOISE_OCTAVES:
        combined += simple_noise(xs, ys, noise_frequency * multiplier) * weight

    intensity = noise_scale * np.minimum(1.0, original / 5.0)
    noise_value = combined * intensity * field
    height_factor = np.minimum(1.0, field / 10.0)
    noisy = np.maximum(0.0, field + noise_value * (0.3 + height_factor * 0.7))

    return np.where(field > NOISE_MIN_HEIGHT, noisy, field).astype(np.float64)
