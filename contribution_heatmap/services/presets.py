from collections.abc import Callable
from typing import Any
from typing import Literal

from contribution_heatmap.api.schemas.heatmap import HeatmapData
from contribution_heatmap.api.schemas.heatmap import LayoutOptions
from contribution_heatmap.api.schemas.heatmap import Padding
from contribution_heatmap.services.banner import BannerOptions
from contribution_heatmap.services.banner import render_custom_banner
from contribution_heatmap.services.banner import render_linkedin_header
from contribution_heatmap.services.svg_renderer import render_svg


COLOR_SCHEMES: dict[str, tuple[str, ...]] = {
    "github": ("#ebedf0", "#9be9a8", "#40c463", "#30a14e", "#216e39"),
    "green": ("#f0f9ff", "#c7f0c7", "#6cc04a", "#4a9e3d", "#2d5a27"),
    "blue": ("#f0f9ff", "#bfdbfe", "#60a5fa", "#3b82f6", "#1d4ed8"),
    "purple": ("#faf5ff", "#e9d5ff", "#c084fc", "#a855f7", "#7c3aed"),
    "orange": ("#fff7ed", "#fed7aa", "#fb923c", "#ea580c", "#c2410c"),
}

BLACK_COLORS = ("#161b22", "#0d1117", "#21262d", "#30363d", "#484f58")

AestheticStyle = Literal["modern", "glassmorphism", "neumorphism", "neon"]

DEFAULT_OPTIONS = LayoutOptions()

MINIMAL_OPTIONS = DEFAULT_OPTIONS.merged(
    cell_size=16,
    cell_padding=3,
    show_month_labels=False,
    show_day_labels=False,
    show_legend=False,
    show_title=False,
    padding=Padding(top=20, right=20, bottom=30, left=20),
)

CLEAN_OPTIONS = DEFAULT_OPTIONS.merged(
    cell_size=18,
    cell_padding=4,
    border_radius=3,
    show_month_labels=False,
    show_day_labels=False,
    show_legend=False,
    show_title=False,
    padding=Padding(top=20, right=20, bottom=40, left=20),
)

BLACK_OPTIONS = CLEAN_OPTIONS.merged(cell_size=16, cell_padding=3, colors=BLACK_COLORS)

LAYOUT_PRESETS: dict[str, LayoutOptions] = {
    "default": DEFAULT_OPTIONS,
    "minimal": MINIMAL_OPTIONS,
    "clean": CLEAN_OPTIONS,
    "black": BLACK_OPTIONS,
}


def render_color_scheme(data: HeatmapData, scheme: str, **overrides: Any) -> str:
    """Full heatmap using a named palette; the scheme wins over `colors`."""

    overrides["colors"] = COLOR_SCHEMES[scheme]
    return render_svg(data, DEFAULT_OPTIONS.merged(**overrides))


def render_minimal(data: HeatmapData, **overrides: Any) -> str:
    """Bigger cells and the summary line only."""

    return render_svg(data, MINIMAL_OPTIONS.merged(**overrides))


def render_clean(data: HeatmapData, **overrides: Any) -> str:
    """Rounded cells without labels, legend or title."""

    return render_svg(data, CLEAN_OPTIONS.merged(**overrides))


def render_black(data: HeatmapData, **overrides: Any) -> str:
    return render_svg(data, BLACK_OPTIONS.merged(**overrides))


def aesthetic_options(
    style: AestheticStyle = "modern",
    primary_color: str = "#000000",
    background_color: str = "#ffffff",
    border_radius: float = 8,
) -> LayoutOptions:
    """Palette and cell geometry for the decorative styles.

    Palettes built from `primary_color` append two-digit hex alpha suffixes,
    so `primary_color` is expected in `#rrggbb` form.
    """

    styles: dict[str, tuple[tuple[str, ...], int, int]] = {
        "modern": (
            (
                background_color,
                f"{primary_color}20",
                f"{primary_color}40",
                f"{primary_color}60",
                primary_color,
            ),
            18,
            4,
        ),
        "glassmorphism": (
            (
                "rgba(255,255,255,0.1)",
                "rgba(0,0,0,0.2)",
                "rgba(0,0,0,0.4)",
                "rgba(0,0,0,0.6)",
                "rgba(0,0,0,0.8)",
            ),
            16,
            3,
        ),
        "neumorphism": (
            (background_color, "#e0e0e0", "#c0c0c0", "#a0a0a0", "#808080"),
            20,
            6,
        ),
        "neon": (
            (
                "#0a0a0a",
                f"{primary_color}30",
                f"{primary_color}60",
                f"{primary_color}90",
                primary_color,
            ),
            16,
            3,
        ),
    }
    colors, cell_size, cell_padding = styles[style]

    return DEFAULT_OPTIONS.merged(
        cell_size=cell_size,
        cell_padding=cell_padding,
        border_radius=border_radius,
        colors=colors,
        show_month_labels=False,
        show_day_labels=False,
        show_legend=False,
        show_title=False,
        padding=Padding(top=30, right=30, bottom=50, left=30),
    )


def render_aesthetic(
    data: HeatmapData,
    style: AestheticStyle = "modern",
    primary_color: str = "#000000",
    background_color: str = "#ffffff",
    border_radius: float = 8,
    **overrides: Any,
) -> str:
    options = aesthetic_options(style, primary_color, background_color, border_radius)
    return render_svg(data, options.merged(**overrides))


DEFAULT_BANNER_OPTIONS = BannerOptions(
    header_text="Software Engineer",
    sub_text=(
        "Building refined user interfaces and the solid infrastructure "
        "that supports them"
    ),
    callout_text="Patience\nPerseverance\nDedication",
    highlights=("user interfaces", "solid infrastructure"),
)


def _linkedin(theme: str) -> Callable[..., str]:
    def render(data: HeatmapData) -> str:
        return render_linkedin_header(data, theme=theme)

    return render


def _banner(data: HeatmapData) -> str:
    return render_custom_banner(data, DEFAULT_BANNER_OPTIONS)


def _aesthetic(style: AestheticStyle, **defaults: Any) -> Callable[..., str]:
    def render(data: HeatmapData, **overrides: Any) -> str:
        return render_aesthetic(data, style, **{**defaults, **overrides})

    return render


def _layout(name: str) -> Callable[..., str]:
    def render(data: HeatmapData, **overrides: Any) -> str:
        return render_svg(data, LAYOUT_PRESETS[name].merged(**overrides))

    return render


# Named entry points used by the HTTP API and the CLI. Layout presets accept
# LayoutOptions overrides; banner presets draw on a fixed canvas and take none.
PRESETS: dict[str, Callable[..., str]] = {
    **{name: _layout(name) for name in LAYOUT_PRESETS},
    "aesthetic-modern": _aesthetic("modern"),
    "aesthetic-neon": _aesthetic("neon", primary_color="#39d353", border_radius=4),
    "linkedin": _linkedin("black"),
    "linkedin-professional": _linkedin("professional"),
    "linkedin-minimal": _linkedin("minimal"),
    "linkedin-gradient": _linkedin("gradient"),
    "banner": _banner,
}

FIXED_CANVAS_PRESETS = frozenset(
    {
        "linkedin",
        "linkedin-professional",
        "linkedin-minimal",
        "linkedin-gradient",
        "banner",
    }
)


def render_preset(name: str, data: HeatmapData, **overrides: Any) -> str:
    """Render `data` with the preset called `name`.

    `None` overrides are dropped, so callers can forward optional settings.

    Raises:
        KeyError: If no preset has that name.
        ValueError: If overrides are given to a fixed canvas preset.
    """

    render = PRESETS[name]
    overrides = {key: value for key, value in overrides.items() if value is not None}
    if overrides and name in FIXED_CANVAS_PRESETS:
        raise ValueError(
            f"preset {name!r} has a fixed layout and takes no overrides: "
            + ", ".join(sorted(overrides))
        )
    return render(data, **overrides)
