"""Write contribution heatmap presets for a GitHub user to disk.

Usage:
    contribution-heatmap octocat --preset clean --preset linkedin --png
"""

import argparse
import logging
import sys
from pathlib import Path

from contribution_heatmap.api.schemas.heatmap import ProcessedContributions
from contribution_heatmap.core.export import RasterConverter
from contribution_heatmap.core.export import RasterOptions
from contribution_heatmap.core.export import UnavailableRasterConverter
from contribution_heatmap.core.export import load_raster_converter
from contribution_heatmap.core.export import save_svg
from contribution_heatmap.core.observability import configure_logging
from contribution_heatmap.services.heatmap_service import GitHubAPIError
from contribution_heatmap.services.heatmap_service import GitHubUserNotFoundError
from contribution_heatmap.services.heatmap_service import InvalidGitHubTokenError
from contribution_heatmap.services.heatmap_service import get_user_contributions
from contribution_heatmap.services.normalizer import create_heatmap_data
from contribution_heatmap.services.presets import PRESETS
from contribution_heatmap.services.presets import render_preset
from contribution_heatmap.settings import Settings


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="contribution-heatmap",
        description="Render a GitHub contribution heatmap as SVG (and PNG).",
    )
    parser.add_argument("username", help="GitHub login to fetch")
    parser.add_argument(
        "--preset",
        action="append",
        choices=sorted(PRESETS),
        help="preset to render; repeat for several (default: default)",
    )
    parser.add_argument("--output-dir", help="directory for generated files")
    parser.add_argument("--png", action="store_true", help="also write PNG files")
    parser.add_argument("--scale", type=float, default=1, help="PNG scale factor")
    parser.add_argument("--width", type=int, help="PNG width in pixels")
    parser.add_argument("--height", type=int, help="PNG height in pixels")
    return parser


def print_summary(login: str, processed: ProcessedContributions) -> None:
    stats = processed.statistics
    print(f"Contribution summary for {login}")
    print(f"  Total contributions: {stats.total_contributions}")
    print(f"  Average per day:     {stats.average_per_day:.2f}")
    print(f"  Max in a day:        {stats.max_per_day}")
    print(f"  Current streak:      {stats.streaks.current} days")
    print(f"  Longest streak:      {stats.streaks.longest} days")


def write_presets(
    login: str,
    processed: ProcessedContributions,
    presets: list[str],
    output_dir: Path,
    converter: RasterConverter,
    raster_options: RasterOptions | None,
) -> list[Path]:
    """Render and save each preset; returns the files actually written."""

    data = create_heatmap_data(processed, username=login)
    written: list[Path] = []
    for name in presets:
        svg = render_preset(name, data)
        svg_path = output_dir / f"{login}-{name}.svg"
        if save_svg(svg, svg_path):
            written.append(svg_path)
        if raster_options is not None:
            png_path = svg_path.with_suffix(".png")
            if converter.convert(svg, png_path, raster_options):
                written.append(png_path)
    return written


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if (args.width is None) != (args.height is None):
        parser.error("--width and --height must be given together")
    settings = Settings()
    configure_logging(settings)

    if args.png:
        converter = load_raster_converter(settings)
        raster_options = RasterOptions(
            scale=args.scale, width=args.width, height=args.height
        )
    else:
        converter = UnavailableRasterConverter("PNG output not requested")
        raster_options = None

    if not settings.github_token:
        print("GITHUB_TOKEN is not set.", file=sys.stderr)
        print("Create a token at https://github.com/settings/tokens", file=sys.stderr)
        return 2

    try:
        login, processed = get_user_contributions(
            username=args.username,
            token=settings.github_token,
            graphql_url=settings.github_graphql_url,
        )
    except InvalidGitHubTokenError:
        print("Bad credentials: check the GITHUB_TOKEN value.", file=sys.stderr)
        print("Create a token at https://github.com/settings/tokens", file=sys.stderr)
        return 1
    except GitHubUserNotFoundError:
        print(f"GitHub user {args.username!r} was not found.", file=sys.stderr)
        return 1
    except GitHubAPIError as exc:
        logger.error("GitHub API request failed: %s", exc)
        return 1

    print_summary(login, processed)

    output_dir = Path(args.output_dir or settings.output_dir)
    written = write_presets(
        login,
        processed,
        args.preset or ["default"],
        output_dir,
        converter,
        raster_options,
    )
    for path in written:
        print(f"  wrote {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
