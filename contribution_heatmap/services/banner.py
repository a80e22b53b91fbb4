"""LinkedIn banner layouts built from the heatmap grid plus text overlays.

Both layouts draw on a fixed 1584x396 (4:1) canvas. The grid is the same
week/weekday placement used by the full renderer, just smaller and without
labels; everything else is positioned with fixed offsets.
"""

import re
from collections.abc import Sequence
from typing import Literal

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

from contribution_heatmap.api.schemas.heatmap import ContributionWeek
from contribution_heatmap.api.schemas.heatmap import HeatmapData
from contribution_heatmap.services.icons import DEFAULT_ICONS
from contribution_heatmap.services.svg_renderer import DAYS_PER_WEEK
from contribution_heatmap.services.svg_renderer import contribution_level
from contribution_heatmap.services.svg_renderer import escape_attr
from contribution_heatmap.services.svg_renderer import escape_text
from contribution_heatmap.services.svg_renderer import fmt
from contribution_heatmap.services.svg_renderer import open_document


BANNER_WIDTH = 1584
BANNER_HEIGHT = 396

SYSTEM_FONT_FAMILY = (
    "-apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, Arial, sans-serif"
)

LinkedInThemeName = Literal["black", "professional", "minimal", "gradient"]


class LinkedInTheme(BaseModel):
    model_config = ConfigDict(frozen=True)

    background: str
    text: str
    accent: str
    colors: tuple[str, str, str, str, str]


LINKEDIN_THEMES: dict[str, LinkedInTheme] = {
    "black": LinkedInTheme(
        background="#000000",
        text="#ffffff",
        accent="#ffffff",
        colors=("#161b22", "#0d1117", "#21262d", "#30363d", "#8b949e"),
    ),
    "professional": LinkedInTheme(
        background="#0a66c2",
        text="#ffffff",
        accent="#ffffff",
        colors=("#004182", "#0a66c2", "#378fe9", "#54a3ff", "#70b5f9"),
    ),
    "minimal": LinkedInTheme(
        background="#f8f9fa",
        text="#212529",
        accent="#6c757d",
        colors=("#e9ecef", "#dee2e6", "#ced4da", "#adb5bd", "#6c757d"),
    ),
    "gradient": LinkedInTheme(
        background="url(#gradient)",
        text="#ffffff",
        accent="#ffffff",
        colors=("#1a1a2e", "#16213e", "#0f3460", "#533483", "#e94560"),
    ),
}

# Grid palettes for the custom banner. "dark" cells sit on a light canvas.
BANNER_GRID_THEMES: dict[str, tuple[str, ...]] = {
    "dark": ("#e4e4e7", "#a1a1aa", "#52525b", "#27272a", "#09090b"),
    "light": ("#161b22", "#0d1117", "#21262d", "#30363d", "#8b949e"),
}

GRADIENT_DEFS = (
    '<defs><linearGradient id="gradient" x1="0%" y1="0%" x2="100%" y2="100%">'
    '<stop offset="0%" style="stop-color:#667eea;stop-opacity:1"/>'
    '<stop offset="100%" style="stop-color:#764ba2;stop-opacity:1"/>'
    "</linearGradient></defs>"
)


class CustomFont(BaseModel):
    """A web font (`url`), a local font file (`local_path`) or a bare family."""

    model_config = ConfigDict(frozen=True)

    family: str
    url: str | None = None
    local_path: str | None = None
    fallback: str | None = None
    weight: int | str | None = None
    style: Literal["normal", "italic", "oblique"] = "normal"
    format: Literal["truetype", "opentype", "woff", "woff2"] = "truetype"


class FontConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    username: CustomFont | None = None
    header_text: CustomFont | None = None
    sub_text: CustomFont | None = None
    callout_text: CustomFont | None = None


class BannerOptions(BaseModel):
    """Text, colours and fonts of the custom banner.

    `sub_text` and `callout_text` are split on newlines into separately
    positioned lines. Phrases listed in `highlights` are recoloured with
    `highlight_color` wherever they occur in the sub-heading.
    """

    model_config = ConfigDict(frozen=True)

    username: str | None = None
    header_text: str | None = None
    sub_text: str = ""
    callout_text: str = ""
    highlights: tuple[str, ...] = ()
    highlight_color: str = "#F2541B"
    background_color: str = "#fff"
    header_text_color: str = "#000"
    sub_text_color: str = "#000"
    sub_text_opacity: float = Field(default=0.54, ge=0, le=1)
    callout_text_color: str = "#000"
    heatmap_theme: Literal["dark", "light"] = "dark"
    fonts: FontConfig = FontConfig()
    custom_fonts: tuple[CustomFont, ...] = ()
    icons: tuple[str, ...] = DEFAULT_ICONS


def font_definitions(custom_fonts: Sequence[CustomFont]) -> str:
    """Build a `<defs><style>` block importing or declaring `custom_fonts`."""

    if not custom_fonts:
        return ""

    rules = []
    for font in custom_fonts:
        weight = font.weight or "normal"
        if font.url:
            rules.append(f"@import url('{escape_text(font.url)}');")
        elif font.local_path:
            rules.append(
                f"@font-face {{ font-family: '{escape_text(font.family)}'; "
                f"src: url('{escape_text(font.local_path)}') format('{font.format}'); "
                f"font-weight: {weight}; font-style: {font.style}; "
                "font-display: swap; }"
            )
        else:
            rules.append(
                f"@font-face {{ font-family: '{escape_text(font.family)}'; "
                f"font-weight: {weight}; font-style: {font.style}; }}"
            )
    return "<defs><style>" + "".join(rules) + "</style></defs>"


def font_family(font: CustomFont | None) -> str:
    if font is None:
        return SYSTEM_FONT_FAMILY
    return f"'{font.family}', {font.fallback or 'Arial, sans-serif'}"


def font_weight(font: CustomFont | None, default: str | int = "normal") -> str:
    if font is None or font.weight is None:
        return str(default)
    return str(font.weight)


def render_grid(
    weeks: Sequence[ContributionWeek],
    x: float,
    y: float,
    cell_size: int,
    cell_padding: int,
    colors: Sequence[str],
    radius: float,
) -> str:
    """Unlabelled heatmap grid anchored at (`x`, `y`)."""

    stride = cell_size + cell_padding
    parts = []
    for week_index, week in enumerate(weeks):
        for day in week.days:
            color = colors[contribution_level(day.count)]
            parts.append(
                f'<rect x="{fmt(x + week_index * stride)}" '
                f'y="{fmt(y + day.weekday * stride)}" width="{cell_size}" '
                f'height="{cell_size}" rx="{fmt(radius)}" ry="{fmt(radius)}" '
                f'fill="{color}" opacity="0.9"/>'
            )
    return "".join(parts)


def text_element(
    content: str,
    x: float,
    y: float,
    size: int,
    weight: str | int,
    fill: str,
    family: str = SYSTEM_FONT_FAMILY,
    extra: str = "",
) -> str:
    return (
        f'<text x="{fmt(x)}" y="{fmt(y)}" font-family={escape_attr(family)} '
        f'font-size="{size}" font-weight="{weight}" fill={escape_attr(fill)}{extra}>'
        f"{content}</text>"
    )


def render_linkedin_header(
    data: HeatmapData,
    theme: LinkedInThemeName = "black",
    include_profile: bool = True,
    header_text: str | None = None,
    sub_text: str | None = "Building in public, one commit at a time",
    background_color: str | None = None,
    text_color: str | None = None,
    accent_color: str | None = None,
) -> str:
    """Text block on the left, compact heatmap on the right."""

    palette = LINKEDIN_THEMES[theme]
    background = background_color or palette.background
    text = text_color or palette.text
    accent = accent_color or palette.accent
    if header_text is None:
        header_text = f"{data.total_contributions} contributions on GitHub"

    cell_size, cell_padding = 8, 1
    grid_width = len(data.weeks) * (cell_size + cell_padding)
    grid_height = DAYS_PER_WEEK * (cell_size + cell_padding)
    grid_x = BANNER_WIDTH - grid_width - 60
    grid_y = (BANNER_HEIGHT - grid_height) / 2

    content_x = 80
    content_y = BANNER_HEIGHT / 2

    parts = [open_document(BANNER_WIDTH, BANNER_HEIGHT)]
    if theme == "gradient":
        parts.append(GRADIENT_DEFS)
    parts.append(
        f'<rect width="{BANNER_WIDTH}" height="{BANNER_HEIGHT}" '
        f"fill={escape_attr(background)}/>"
    )
    parts.append(
        text_element(escape_text(header_text), content_x, content_y - 20, 36, 700, text)
    )
    if sub_text:
        parts.append(
            text_element(
                escape_text(sub_text),
                content_x,
                content_y + 20,
                18,
                400,
                accent,
                extra=' opacity="0.8"',
            )
        )
    if include_profile and data.username:
        parts.append(
            text_element(
                f"github.com/{escape_text(data.username)}",
                content_x,
                content_y + 50,
                16,
                500,
                accent,
                extra=' opacity="0.9"',
            )
        )

    parts.append(
        render_grid(
            data.weeks, grid_x, grid_y, cell_size, cell_padding, palette.colors, 2
        )
    )

    if theme != "minimal":
        stroke = escape_attr(accent)
        parts.append(
            f'<line x1="{content_x}" y1="{fmt(content_y + 80)}" '
            f'x2="{content_x + 300}" y2="{fmt(content_y + 80)}" '
            f'stroke={stroke} stroke-width="2" opacity="0.3"/>'
            f'<line x1="{BANNER_WIDTH - 400}" y1="50" x2="{BANNER_WIDTH - 50}" y2="50" '
            f'stroke={stroke} stroke-width="1" opacity="0.2"/>'
            f'<line x1="{BANNER_WIDTH - 400}" y1="{BANNER_HEIGHT - 50}" '
            f'x2="{BANNER_WIDTH - 50}" y2="{BANNER_HEIGHT - 50}" '
            f'stroke={stroke} stroke-width="1" opacity="0.2"/>'
        )

    parts.append("</svg>")
    return "".join(parts)


def highlight(line: str, phrases: Sequence[str], color: str) -> str:
    """Escape `line` and wrap each highlighted phrase in a coloured tspan.

    Matching runs on the raw text, so phrases never match inside escaped
    entities or inserted markup. When phrases start at the same position the
    longer one wins.
    """

    phrases = sorted({phrase for phrase in phrases if phrase}, key=len, reverse=True)
    if not phrases:
        return escape_text(line)

    pattern = "(" + "|".join(map(re.escape, phrases)) + ")"
    fill = escape_attr(color)
    parts = []
    # re.split with one capture group puts the matches at odd indexes.
    for index, piece in enumerate(re.split(pattern, line)):
        if index % 2:
            parts.append(f"<tspan fill={fill}>{escape_text(piece)}</tspan>")
        else:
            parts.append(escape_text(piece))
    return "".join(parts)


def split_lines(text: str) -> list[str]:
    if not text:
        return []
    return text.split("\n")


def render_custom_banner(
    data: HeatmapData, options: BannerOptions | None = None
) -> str:
    """Handle, icon grid, centred sub-heading, callout and top-right heatmap."""

    opts = options or BannerOptions()
    username = opts.username or data.username or ""
    fonts = opts.fonts

    cell_size, cell_padding = 12, 2
    grid_width = len(data.weeks) * (cell_size + cell_padding)
    grid_height = DAYS_PER_WEEK * (cell_size + cell_padding)
    grid_x = BANNER_WIDTH - grid_width - 60
    grid_y = 50

    parts = [open_document(BANNER_WIDTH, BANNER_HEIGHT)]
    parts.append(font_definitions(opts.custom_fonts))
    parts.append(
        f'<rect width="{BANNER_WIDTH}" height="{BANNER_HEIGHT}" '
        f"fill={escape_attr(opts.background_color)}/>"
    )

    if username:
        parts.append(
            text_element(
                f"@{escape_text(username)}",
                60,
                60,
                18,
                600,
                opts.header_text_color,
                font_family(fonts.username),
            )
        )

    if opts.header_text:
        parts.append(
            text_element(
                escape_text(opts.header_text),
                60,
                130,
                48,
                700,
                opts.header_text_color,
                font_family(fonts.header_text),
            )
        )

    for index, line in enumerate(split_lines(opts.sub_text)):
        parts.append(
            text_element(
                highlight(line.strip(), opts.highlights, opts.highlight_color),
                BANNER_WIDTH / 2,
                BANNER_HEIGHT / 2 + (index + 1) * 30,
                28,
                font_weight(fonts.sub_text, 500),
                opts.sub_text_color,
                font_family(fonts.sub_text),
                extra=(
                    f' opacity="{fmt(opts.sub_text_opacity)}" '
                    'text-anchor="middle" dominant-baseline="middle"'
                ),
            )
        )

    icon_start_y = BANNER_HEIGHT / 3 - 32
    for index, icon in enumerate(opts.icons):
        column, row = index % 6, index // 6
        x = column * 60 + 64
        y = icon_start_y + row * 44
        parts.append(f'<g transform="translate({fmt(x)}, {fmt(y)})">{icon}</g>')

    callout_lines = split_lines(opts.callout_text)
    line_spacing = 28
    callout_y = BANNER_HEIGHT - len(callout_lines) * line_spacing - 20
    for index, line in enumerate(callout_lines):
        parts.append(
            text_element(
                escape_text(line.strip()),
                BANNER_WIDTH - 60,
                callout_y + index * line_spacing,
                32,
                font_weight(fonts.callout_text),
                opts.callout_text_color,
                font_family(fonts.callout_text),
                extra=' text-anchor="end" letter-spacing="0.1em"',
            )
        )

    parts.append(
        render_grid(
            data.weeks,
            grid_x,
            grid_y,
            cell_size,
            cell_padding,
            BANNER_GRID_THEMES[opts.heatmap_theme],
            3,
        )
    )

    line_color = escape_attr(opts.header_text_color)
    parts.append(
        f'<line x1="60" y1="75" x2="240" y2="75" stroke={line_color} '
        'stroke-width="2" opacity="0.1"/>'
    )
    parts.append(
        f'<rect x="{fmt(grid_x - 20)}" y="{grid_y}" width="2" height="{grid_height}" '
        f'fill={line_color} opacity="0.1"/>'
    )

    parts.append("</svg>")
    return "".join(parts)
