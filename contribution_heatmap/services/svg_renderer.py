from collections.abc import Sequence
from xml.sax.saxutils import escape
from xml.sax.saxutils import quoteattr

from contribution_heatmap.api.schemas.heatmap import ContributionDay
from contribution_heatmap.api.schemas.heatmap import ContributionWeek
from contribution_heatmap.api.schemas.heatmap import HeatmapComponents
from contribution_heatmap.api.schemas.heatmap import HeatmapData
from contribution_heatmap.api.schemas.heatmap import LayoutDimensions
from contribution_heatmap.api.schemas.heatmap import LayoutOptions


SVG_NAMESPACE = "http://www.w3.org/2000/svg"
DAYS_PER_WEEK = 7
DAY_LABELS = ("", "Mon", "", "Wed", "", "Fri", "")
MONTH_NAMES = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

DAY_LABEL_MARGIN = 30
MONTH_LABEL_MARGIN = 20
LEGEND_OFFSET = 150
CELL_STROKE = "rgba(27,31,35,0.06)"


def contribution_level(count: int) -> int:
    """Map daily contribution count to a heatmap level in range 0..4."""

    if count <= 0:
        return 0
    if count <= 3:
        return 1
    if count <= 6:
        return 2
    if count <= 9:
        return 3
    return 4


def fmt(value: float) -> str:
    """Format a coordinate, dropping the fraction for whole numbers."""

    if float(value).is_integer():
        return str(int(value))
    return str(round(float(value), 2))


def escape_text(value: str) -> str:
    """Escape user supplied text placed inside an element."""

    return escape(value)


def escape_attr(value: str) -> str:
    """Escape and quote user supplied text placed in an attribute."""

    return quoteattr(value)


def radius_attrs(radius: float) -> str:
    if radius <= 0:
        return ""
    return f' rx="{fmt(radius)}" ry="{fmt(radius)}"'


def format_tooltip(day: ContributionDay) -> str:
    """Describe a day as e.g. ``3 contributions on Mon, Jan 1, 2024``."""

    date_string = f"{day.date:%a}, {day.date:%b} {day.date.day}, {day.date.year}"
    noun = "contribution" if day.count == 1 else "contributions"
    return f"{day.count} {noun} on {date_string}"


def calculate_dimensions(weeks_count: int, opts: LayoutOptions) -> LayoutDimensions:
    stride = opts.cell_size + opts.cell_padding
    graph_width = weeks_count * stride - opts.cell_padding
    graph_height = DAYS_PER_WEEK * stride - opts.cell_padding

    left_padding = opts.padding.left or 10
    if opts.show_day_labels:
        left_padding = DAY_LABEL_MARGIN
    top_padding = opts.padding.top or 10
    if opts.show_month_labels:
        top_padding = MONTH_LABEL_MARGIN
    bottom_padding = opts.padding.bottom or 20
    right_padding = opts.padding.right or 10

    return LayoutDimensions(
        graph_width=graph_width,
        graph_height=graph_height,
        total_width=left_padding + graph_width + right_padding,
        total_height=top_padding + graph_height + bottom_padding,
        left_padding=left_padding,
        top_padding=top_padding,
        right_padding=right_padding,
        bottom_padding=bottom_padding,
    )


def open_document(width: float, height: float) -> str:
    return f'<svg width="{fmt(width)}" height="{fmt(height)}" xmlns="{SVG_NAMESPACE}">'


def render_styles(opts: LayoutOptions) -> str:
    family = escape_text(opts.font_family)
    size = opts.font_size
    hover = (
        ".contribution-square:hover { stroke: #24292f; stroke-width: 2; }"
        if opts.show_tooltips
        else ""
    )
    return (
        "<style>"
        f".day-label {{ font-family: {family}; font-size: {size}px; fill: #656d76; }}"
        f".month-label {{ font-family: {family}; font-size: {size}px; "
        "fill: #656d76; }"
        f".title {{ font-family: {family}; font-size: {size + 2}px; "
        "font-weight: 600; fill: #24292f; }"
        f".summary {{ font-family: {family}; font-size: {size - 1}px; fill: #656d76; }}"
        f".legend-text {{ font-family: {family}; font-size: {size - 1}px; "
        "fill: #656d76; }"
        f".contribution-square {{ stroke: {CELL_STROKE}; stroke-width: 1; "
        "shape-rendering: crispEdges; }"
        f"{hover}"
        "</style>"
    )


def render_title(username: str, dims: LayoutDimensions) -> str:
    return (
        f'<text x="{fmt(dims.total_width / 2)}" y="15" text-anchor="middle" '
        f"class=\"title\">{escape_text(username)}'s Contribution Graph</text>"
    )


def render_day_labels(left: int, top: int, opts: LayoutOptions) -> str:
    stride = opts.cell_size + opts.cell_padding
    parts = []
    for row, label in enumerate(DAY_LABELS):
        if not label:
            continue
        y = top + row * stride + opts.cell_size / 2 + 3
        parts.append(
            f'<text x="{fmt(left - 10)}" y="{fmt(y)}" text-anchor="end" '
            f'class="day-label">{label}</text>'
        )
    return "".join(parts)


def render_month_labels(
    weeks: Sequence[ContributionWeek], left: int, top: int, opts: LayoutOptions
) -> str:
    """Label each week that starts a new month.

    The first week is never labelled, even when it starts a month.
    """

    stride = opts.cell_size + opts.cell_padding
    parts = []
    last_month = None
    for week_index, week in enumerate(weeks):
        month = week.first_day.month
        if month != last_month and week_index > 0:
            x = left + week_index * stride
            parts.append(
                f'<text x="{fmt(x)}" y="{fmt(top - 5)}" '
                f'class="month-label">{MONTH_NAMES[month - 1]}</text>'
            )
            last_month = month
    return "".join(parts)


def render_cells(
    weeks: Sequence[ContributionWeek], left: int, top: int, opts: LayoutOptions
) -> str:
    stride = opts.cell_size + opts.cell_padding
    rounded = radius_attrs(opts.border_radius)
    parts = []
    for week_index, week in enumerate(weeks):
        x = left + week_index * stride
        for day in week.days:
            y = top + day.weekday * stride
            level = contribution_level(day.count)
            tooltip = (
                f"<title>{escape_text(format_tooltip(day))}</title>"
                if opts.show_tooltips
                else ""
            )
            parts.append(
                f'<rect x="{fmt(x)}" y="{fmt(y)}" width="{opts.cell_size}" '
                f'height="{opts.cell_size}"{rounded} fill="{opts.colors[level]}" '
                f'class="contribution-square" data-date="{day.date.isoformat()}" '
                f'data-count="{day.count}" data-level="{level}">{tooltip}</rect>'
            )
    return "".join(parts)


def render_legend(dims: LayoutDimensions, opts: LayoutOptions) -> str:
    legend_x = dims.total_width - LEGEND_OFFSET
    legend_y = dims.total_height - 15
    swatch_stride = opts.cell_size + 2
    rounded = radius_attrs(opts.border_radius)

    parts = [
        f'<text x="{fmt(legend_x - 10)}" y="{fmt(legend_y)}" text-anchor="end" '
        'class="legend-text">Less</text>'
    ]
    for index, color in enumerate(opts.colors):
        parts.append(
            f'<rect x="{fmt(legend_x + index * swatch_stride)}" '
            f'y="{fmt(legend_y - opts.cell_size)}" width="{opts.cell_size}" '
            f'height="{opts.cell_size}"{rounded} fill="{color}" '
            f'stroke="{CELL_STROKE}" stroke-width="1"/>'
        )
    more_x = legend_x + len(opts.colors) * swatch_stride + 5
    parts.append(
        f'<text x="{fmt(more_x)}" y="{fmt(legend_y)}" class="legend-text">More</text>'
    )
    return "".join(parts)


def render_summary(total_contributions: int, dims: LayoutDimensions) -> str:
    return (
        f'<text x="{fmt(dims.left_padding)}" y="{fmt(dims.total_height - 5)}" '
        f'class="summary">{total_contributions} contributions this year</text>'
    )


def render_modular_svg(
    data: HeatmapData,
    components: HeatmapComponents | None = None,
    options: LayoutOptions | None = None,
) -> str:
    """Render the heatmap, emitting only the stages enabled in `components`.

    A stage appears when both its include flag and its option toggle are on.
    """

    components = components or HeatmapComponents()
    opts = options or LayoutOptions()
    dims = calculate_dimensions(len(data.weeks), opts)
    left, top = dims.left_padding, dims.top_padding

    parts = [open_document(dims.total_width, dims.total_height), render_styles(opts)]

    if components.include_title and data.username and opts.show_title:
        parts.append(render_title(data.username, dims))
    if components.include_day_labels and opts.show_day_labels:
        parts.append(render_day_labels(left, top, opts))
    if components.include_month_labels and opts.show_month_labels:
        parts.append(render_month_labels(data.weeks, left, top, opts))
    if components.include_grid:
        parts.append(render_cells(data.weeks, left, top, opts))
    if components.include_legend and opts.show_legend:
        parts.append(render_legend(dims, opts))
    if components.include_summary and opts.show_summary:
        parts.append(render_summary(data.total_contributions, dims))

    parts.append("</svg>")
    return "".join(parts)


def render_svg(data: HeatmapData, options: LayoutOptions | None = None) -> str:
    """Render a complete calendar heatmap SVG document."""

    return render_modular_svg(data, HeatmapComponents(), options)
