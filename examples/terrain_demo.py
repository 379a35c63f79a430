#!/usr/bin/env python3
"""
Demo script rendering synthetic contribution calendars as terrain.
"""

import numpy as np
from contrib_terrain import GraphSvgGenerator, TerrainConfig, TerrainSvgGenerator
from contrib_terrain.core import build_grid, compute_thresholds, summarize
from contrib_terrain.github import generate_sample_data, generate_zero_contributions


def main():
    """Demonstrate terrain generation."""
    print("Contribution Terrain Demo")
    print("=" * 40)

    records = generate_sample_data(seed=2024)
    grid = build_grid(records)
    stats = summarize(records)

    print(f"\nGrid: {grid.shape[0]} days x {grid.shape[1]} weeks")
    print(f"  Total contributions: {stats.total}")
    print(f"  Busiest day: {stats.max_in_day}")
    print(f"  Active days: {stats.active_days} / {stats.total_days}")

    thresholds = compute_thresholds(grid)
    print(f"  Quartiles: q1={thresholds.q1} q2={thresholds.q2} q3={thresholds.q3} max={thresholds.max}")

    # Activity per weekday
    print("  Activity by weekday:")
    per_day = grid.sum(axis=1)
    for name, total in zip(["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"], per_day):
        bar = '#' * int(total / max(1, np.max(per_day)) * 20)
        print(f"    {name}: {bar} ({total})")

    variants = {
        "terrain_default.svg": (records, TerrainConfig()),
        "terrain_contours.svg": (records, TerrainConfig(contours_enabled=True)),
        "terrain_front.svg": (records, TerrainConfig(rotation_angle=0.0, include_credit=False)),
        "terrain_empty.svg": (generate_zero_contributions(), TerrainConfig()),
    }

    print("\nRendering variants:")
    print("-" * 30)
    for filename, (data, config) in variants.items():
        svg = TerrainSvgGenerator(config).generate_svg(data, "demo-user")
        with open(filename, "w", encoding="utf-8") as f:
            f.write(svg)
        print(f"  {filename}: {len(svg) // 1024} KiB")

    svg = GraphSvgGenerator().generate_svg(records, "demo-user")
    with open("graph_default.svg", "w", encoding="utf-8") as f:
        f.write(svg)
    print(f"  graph_default.svg: {len(svg) // 1024} KiB")


if __name__ == "__main__":
    main()
