"""
Command line entry point.

Renders a user's contribution calendar (fetched, read from a saved API
response, or synthesized) to ``<style>-<username>.svg``, as a bar graph or
as terrain.
"""

import argparse
import json
from pathlib import Path

import structlog
from pydantic import ValidationError
from typing import List, Optional

from .config import settings
from .core import GraphConfig, GraphSvgGenerator, TerrainConfig, TerrainSvgGenerator, summarize
from .github import (
    ContributionFetchError,
    generate_sample_data,
    parse_contribution_data,
    retrieve_contribution_data,
)
from .logging_config import configure_logging

logger = structlog.get_logger()

STYLES = ("graph", "terrain")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="contrib-terrain",
        description="Render a GitHub contribution calendar as an isometric SVG.",
    )
    parser.add_argument("username", help="GitHub login shown in the title block")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--input", type=Path, help="Saved GraphQL response (JSON); skips the API call")
    source.add_argument("--sample", action="store_true", help="Render synthetic sample data")
    parser.add_argument(
        "--style", choices=STYLES, default="graph", help="Bar graph or smoothed terrain (default: graph)"
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for --sample")
    parser.add_argument("--rotation", type=float, default=TerrainConfig.rotation_angle, help="Camera rotation in degrees")
    parser.add_argument("--contours", action="store_true", help="Overlay contour lines (terrain style)")
    parser.add_argument("--no-credit", action="store_true", help="Omit the attribution line")
    parser.add_argument("--output", type=Path, help="Output SVG path")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def load_records(args: argparse.Namespace):
    if args.sample:
        logger.info("Generating sample data", seed=args.seed)
        return generate_sample_data(seed=args.seed)
    if args.input is not None:
        logger.info("Reading contribution data", path=str(args.input))
        return parse_contribution_data(json.loads(args.input.read_text(encoding="utf-8")))

    response = retrieve_contribution_data(
        args.username,
        settings.github_token,
        api_url=settings.github_api_url,
        timeout=settings.request_timeout,
    )
    return parse_contribution_data(response)


def build_generator(args: argparse.Namespace):
    if args.style == "terrain":
        return TerrainSvgGenerator(TerrainConfig(
            rotation_angle=args.rotation,
            contours_enabled=args.contours,
            include_credit=not args.no_credit,
        ))
    return GraphSvgGenerator(GraphConfig(rotation_angle=args.rotation, include_credit=not args.no_credit))


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging("DEBUG" if args.verbose else settings.log_level, settings.log_format)

    try:
        records = load_records(args)
        svg = build_generator(args).generate_svg(records, args.username)

        output = args.output or Path(settings.output_dir) / f"{args.style}-{args.username}.svg"
        output.write_text(svg, encoding="utf-8")
    except (ContributionFetchError, ValidationError, ValueError, OSError) as e:
        logger.error("SVG generation failed", user=args.username, style=args.style, error=str(e))
        return 1

    stats = summarize(records)
    print("Stats:")
    print(f"   Total contributions: {stats.total}")
    print(f"   Most contributions in a day: {stats.max_in_day}")
    print(f"   Active days: {stats.active_days} / {stats.total_days}")
    print(f"Saved SVG to {output}")
    logger.info("SVG generation completed", user=args.username, style=args.style, output=str(output))
    return 0
