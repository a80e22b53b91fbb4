import re
import xml.etree.ElementTree as ET
from datetime import date

import pytest
from pydantic import ValidationError

from contribution_heatmap.api.schemas.heatmap import ContributionDay
from contribution_heatmap.api.schemas.heatmap import ContributionWeek
from contribution_heatmap.api.schemas.heatmap import HeatmapComponents
from contribution_heatmap.api.schemas.heatmap import HeatmapData
from contribution_heatmap.api.schemas.heatmap import LayoutOptions
from contribution_heatmap.api.schemas.heatmap import Padding
from contribution_heatmap.services.svg_renderer import calculate_dimensions
from contribution_heatmap.services.svg_renderer import contribution_level
from contribution_heatmap.services.svg_renderer import format_tooltip
from contribution_heatmap.services.svg_renderer import render_modular_svg
from contribution_heatmap.services.svg_renderer import render_svg


SVG = "{http://www.w3.org/2000/svg}"


def texts(svg: str) -> list[ET.Element]:
    return list(ET.fromstring(svg).iter(f"{SVG}text"))


@pytest.mark.parametrize(
    ("count", "level"),
    [(0, 0), (1, 1), (3, 1), (4, 2), (6, 2), (7, 3), (9, 3), (10, 4), (1000, 4)],
)
def test_contribution_level_boundaries(count: int, level: int) -> None:
    assert contribution_level(count) == level


def test_contribution_level_is_monotonic_and_bounded() -> None:
    levels = [contribution_level(count) for count in range(200)]

    assert levels == sorted(levels)
    assert set(levels) <= {0, 1, 2, 3, 4}


def test_dimensions_for_a_full_year() -> None:
    dims = calculate_dimensions(53, LayoutOptions())

    assert dims.graph_width == 687
    assert dims.graph_height == 7 * 13 - 2
    assert dims.left_padding == 30
    assert dims.top_padding == 20
    assert dims.total_width == 30 + 687 + 10
    assert dims.total_height == 20 + 89 + 20


def test_dimensions_use_configured_padding_without_labels() -> None:
    opts = LayoutOptions(
        show_day_labels=False,
        show_month_labels=False,
        padding=Padding(top=0, right=7, bottom=9, left=15),
    )

    dims = calculate_dimensions(10, opts)

    assert dims.left_padding == 15
    assert dims.top_padding == 10
    assert dims.right_padding == 7
    assert dims.bottom_padding == 9


def test_document_declares_pixel_size(year_heatmap: HeatmapData) -> None:
    root = ET.fromstring(render_svg(year_heatmap))

    assert root.tag == f"{SVG}svg"
    assert root.get("width") == "727"
    assert root.get("height") == "129"


def test_summary_contains_total(year_heatmap: HeatmapData) -> None:
    summary = [
        node
        for node in texts(render_svg(year_heatmap))
        if node.get("class") == "summary"
    ]

    assert len(summary) == 1
    assert "1247" in summary[0].text
    assert "contributions" in summary[0].text


def test_grid_places_cells_by_week_and_weekday(single_week_calendar) -> None:
    data = HeatmapData(weeks=single_week_calendar.weeks, total_contributions=24)

    root = ET.fromstring(render_svg(data))
    cells = [rect for rect in root.iter(f"{SVG}rect") if rect.get("data-date")]

    assert len(cells) == 7
    assert [int(cell.get("data-level")) for cell in cells] == [0, 1, 2, 3, 4, 1, 0]
    assert [cell.get("y") for cell in cells] == [str(20 + row * 13) for row in range(7)]
    assert {cell.get("x") for cell in cells} == {"30"}
    assert cells[4].get("fill") == "#216e39"


def test_weekday_field_decides_the_row() -> None:
    day = ContributionDay(date=date(2024, 1, 10), count=2, weekday=3)
    data = HeatmapData(
        weeks=[ContributionWeek(first_day=date(2024, 1, 7), days=[day])],
        total_contributions=2,
    )

    cell = next(
        rect
        for rect in ET.fromstring(render_svg(data)).iter(f"{SVG}rect")
        if rect.get("data-date")
    )

    assert cell.get("y") == str(20 + 3 * 13)


def test_first_week_never_gets_a_month_label(year_heatmap: HeatmapData) -> None:
    labels = [
        (node.get("x"), node.text)
        for node in texts(render_svg(year_heatmap))
        if node.get("class") == "month-label"
    ]

    assert all(x != "30" for x, _ in labels)
    assert ("82", "Feb") in labels
    assert labels[0] == ("43", "Jan")


def test_day_labels_are_mon_wed_fri(year_heatmap: HeatmapData) -> None:
    labels = [
        (node.text, node.get("y"))
        for node in texts(render_svg(year_heatmap))
        if node.get("class") == "day-label"
    ]

    assert labels == [("Mon", "41.5"), ("Wed", "67.5"), ("Fri", "93.5")]


def test_title_uses_username(year_heatmap: HeatmapData) -> None:
    titles = [
        node for node in texts(render_svg(year_heatmap)) if node.get("class") == "title"
    ]

    assert titles[0].text == "octocat's Contribution Graph"
    assert titles[0].get("x") == "363.5"


def test_title_skipped_without_username(year_calendar) -> None:
    data = HeatmapData(weeks=year_calendar.weeks, total_contributions=5)

    assert 'class="title"' not in render_svg(data)


def test_user_text_is_escaped(year_calendar) -> None:
    data = HeatmapData(
        weeks=year_calendar.weeks, total_contributions=1, username='<b>"Tom" & co'
    )

    titles = [node for node in texts(render_svg(data)) if node.get("class") == "title"]

    assert titles[0].text == '<b>"Tom" & co\'s Contribution Graph'


def test_tooltips_use_singular_and_plural() -> None:
    single = ContributionDay(date=date(2024, 1, 1), count=1, weekday=1)
    many = ContributionDay(date=date(2024, 1, 2), count=5, weekday=2)

    assert format_tooltip(single) == "1 contribution on Mon, Jan 1, 2024"
    assert format_tooltip(many) == "5 contributions on Tue, Jan 2, 2024"


def test_tooltips_and_hover_can_be_disabled(year_heatmap: HeatmapData) -> None:
    svg = render_svg(year_heatmap, LayoutOptions(show_tooltips=False))

    assert "<title>" not in svg
    assert ":hover" not in svg


def test_border_radius_applies_to_cells_and_legend(year_heatmap: HeatmapData) -> None:
    svg = render_svg(year_heatmap, LayoutOptions(border_radius=3))

    rects = list(ET.fromstring(svg).iter(f"{SVG}rect"))
    assert rects
    assert all(rect.get("rx") == "3" for rect in rects)


def test_square_cells_have_no_radius(year_heatmap: HeatmapData) -> None:
    assert " rx=" not in render_svg(year_heatmap)


def test_legend_has_five_swatches(year_heatmap: HeatmapData) -> None:
    root = ET.fromstring(render_svg(year_heatmap))

    swatches = [rect for rect in root.iter(f"{SVG}rect") if not rect.get("data-date")]
    captions = [
        node.text
        for node in root.iter(f"{SVG}text")
        if node.get("class") == "legend-text"
    ]

    assert [rect.get("fill") for rect in swatches] == list(LayoutOptions().colors)
    assert captions == ["Less", "More"]
    assert swatches[0].get("x") == str(727 - 150)


def test_toggles_remove_optional_stages(year_heatmap: HeatmapData) -> None:
    opts = LayoutOptions(
        show_title=False,
        show_legend=False,
        show_summary=False,
        show_day_labels=False,
        show_month_labels=False,
    )

    assert texts(render_svg(year_heatmap, opts)) == []


def test_modular_render_can_drop_the_grid(year_heatmap: HeatmapData) -> None:
    svg = render_modular_svg(
        year_heatmap,
        HeatmapComponents(include_grid=False, include_legend=False),
    )

    assert "<rect" not in svg
    assert "octocat's Contribution Graph" in svg


@pytest.mark.parametrize("size", [4, 6])
def test_palette_must_have_five_colors(size: int) -> None:
    with pytest.raises(ValidationError):
        LayoutOptions(colors=tuple(f"#00000{index}" for index in range(size)))


def test_merged_overrides_fields_and_merges_padding() -> None:
    base = LayoutOptions(padding=Padding(top=5, right=6, bottom=7, left=8))

    merged = base.merged(cell_size=20, padding={"left": 40}, border_radius=None)

    assert merged.cell_size == 20
    assert merged.border_radius == 0
    assert merged.padding == Padding(top=5, right=6, bottom=7, left=40)
    assert base.cell_size == 11


@pytest.mark.parametrize("overrides", [{"cellsize": 40}, {"padding": {"middle": 5}}])
def test_merged_rejects_unknown_option_names(overrides: dict) -> None:
    with pytest.raises(ValidationError):
        LayoutOptions().merged(**overrides)


def test_numbers_are_written_without_trailing_zero(year_heatmap: HeatmapData) -> None:
    svg = render_svg(year_heatmap)

    assert not re.search(r'="\d+\.0"', svg)
