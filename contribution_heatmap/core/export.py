import logging
from pathlib import Path
from types import ModuleType
from typing import Protocol

from pydantic import BaseModel
from pydantic import Field

from contribution_heatmap.settings import Settings


logger = logging.getLogger(__name__)


class RasterOptions(BaseModel):
    """PNG output size.

    Explicit `width` and `height` take precedence over `scale`. PNG is
    lossless, so `quality` has no effect on the output.
    """

    quality: int = Field(default=100, ge=1, le=100)
    scale: float = Field(default=1, gt=0)
    width: int | None = Field(default=None, gt=0)
    height: int | None = Field(default=None, gt=0)


class RasterConverter(Protocol):
    available: bool

    def convert(
        self, svg: str, destination: str | Path, options: RasterOptions | None = None
    ) -> bool: ...


class CairoRasterConverter:
    """Converts SVG markup to PNG files with cairosvg."""

    available = True

    def __init__(self, cairosvg: ModuleType) -> None:
        self._cairosvg = cairosvg

    def convert(
        self, svg: str, destination: str | Path, options: RasterOptions | None = None
    ) -> bool:
        opts = options or RasterOptions()
        kwargs: dict[str, float | int] = {}
        if opts.width and opts.height:
            kwargs["output_width"] = opts.width
            kwargs["output_height"] = opts.height
        elif opts.scale != 1:
            kwargs["scale"] = opts.scale

        try:
            self._cairosvg.svg2png(
                bytestring=svg.encode("utf-8"), write_to=str(destination), **kwargs
            )
        except Exception:
            logger.exception("PNG conversion failed for %s", destination)
            return False

        logger.info("PNG saved to %s", destination)
        return True


class UnavailableRasterConverter:
    """Stand-in used when PNG conversion is disabled or cairosvg is missing."""

    available = False

    def __init__(self, reason: str) -> None:
        self.reason = reason

    def convert(
        self, svg: str, destination: str | Path, options: RasterOptions | None = None
    ) -> bool:
        logger.info("PNG conversion skipped for %s: %s", destination, self.reason)
        return False


def load_raster_converter(app_settings: Settings) -> RasterConverter:
    """Pick the raster converter once, at start-up."""

    if not app_settings.raster_enabled:
        return UnavailableRasterConverter("raster output is disabled")

    try:
        import cairosvg
    except (ImportError, OSError) as exc:
        logger.info("cairosvg is not available, PNG output disabled: %s", exc)
        return UnavailableRasterConverter(
            "cairosvg is not installed (pip install 'contribution-heatmap[raster]')"
        )

    return CairoRasterConverter(cairosvg)


def save_svg(svg: str, destination: str | Path) -> bool:
    """Write SVG markup to `destination`; failures are logged, not raised."""

    path = Path(destination)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(svg, encoding="utf-8")
    except OSError:
        logger.exception("Could not save SVG to %s", path)
        return False

    logger.info("SVG saved to %s", path)
    return True
