#!/usr/bin/env python3
"""描画パイプライン.

表示範囲と日付キー → 値の dict からセルのモデル（HeatmapGrid）を組み立て、
それを表示面の要素ツリーに変換します。描画は毎回すべてを作り直します。
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date
from typing import Any

import calendar_heatmap.color
import calendar_heatmap.const
import calendar_heatmap.date_format
import calendar_heatmap.dates
from calendar_heatmap.exceptions import InvalidRangeError
from calendar_heatmap.options import RenderOptions
from calendar_heatmap.surface import Document, Element
from calendar_heatmap.view_range import ViewWindow


@dataclass(frozen=True)
class HeatmapCell:
    """ヒートマップのセル（1 日分）"""

    day: date
    key: str  # YYYY-MM-DD
    value: int | float
    color: str
    level: int
    range_start: str
    range_end: str
    title: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.key,
            "value": self.value,
            "color": self.color,
            "level": self.level,
            "title": self.title,
        }


@dataclass(frozen=True)
class HeatmapWeek:
    """週の列（7 日分）"""

    days: tuple[HeatmapCell, ...]


@dataclass(frozen=True)
class HeatmapGrid:
    """ヒートマップ全体のモデル"""

    window: ViewWindow
    max_value: float
    weeks: tuple[HeatmapWeek, ...]
    weekday_labels: tuple[str, ...]
    legend: tuple[str, ...] | None
    legend_captions: tuple[str, str]
    locale: calendar_heatmap.date_format.LocaleFormat

    def cells(self) -> list[HeatmapCell]:
        return [cell for week in self.weeks for cell in week.days]

    def to_dict(self) -> dict[str, Any]:
        """JSON 化できる dict に変換."""
        window = self.window
        return {
            "start": calendar_heatmap.dates.date_key(window.start),
            "end": calendar_heatmap.dates.date_key(window.end),
            "aligned_start": calendar_heatmap.dates.date_key(window.aligned_start),
            "aligned_end": calendar_heatmap.dates.date_key(window.aligned_end),
            "max_value": self.max_value,
            "weekday_labels": list(self.weekday_labels),
            "weeks": [[cell.to_dict() for cell in week.days] for week in self.weeks],
            "legend": list(self.legend) if self.legend is not None else None,
        }


def _to_max_value(override: object) -> float:
    """maxValue の指定を有限の数値に変換."""
    if isinstance(override, bool):
        msg = f"invalid maxValue: {override!r}"
        raise InvalidRangeError(msg)
    try:
        value = float(override)  # type: ignore[arg-type]
    except (TypeError, ValueError) as e:
        msg = f"invalid maxValue: {override!r}"
        raise InvalidRangeError(msg) from e
    if not math.isfinite(value):
        msg = f"invalid maxValue: {override!r}"
        raise InvalidRangeError(msg)
    return value


def compute_max_value(data: Mapping[str, float], override: object) -> float:
    """正規化の基準となる最大値.

    override が指定されていれば（0 も含めて）それを使い、
    無ければ全観測値の最大値（空または全て負なら 0）。

    Raises:
        InvalidRangeError: override が有限の数値として解釈できない
    """
    if override is not None:
        return _to_max_value(override)
    return max([0, *data.values()])


def build_grid(window: ViewWindow, data: Mapping[str, float], options: RenderOptions) -> HeatmapGrid:
    """セルのモデルを組み立てる.

    days の先頭が週境界であることを前提に、位置だけで 7 日ずつ列に分けます。
    """
    locale = calendar_heatmap.date_format.resolve_locale(options.locale)
    max_value = compute_max_value(data, options.max_value)
    range_start = calendar_heatmap.dates.date_key(window.start)
    range_end = calendar_heatmap.dates.date_key(window.end)

    weeks: list[HeatmapWeek] = []
    for week_days in window.weeks():
        cells = []
        for day in week_days:
            key = calendar_heatmap.dates.date_key(day)
            value = data.get(key, 0)
            resolved = calendar_heatmap.color.compute_color(value, max_value, options.color_scale)
            date_text = calendar_heatmap.date_format.format_date(day, locale)
            value_text = calendar_heatmap.date_format.format_value(value)
            cells.append(
                HeatmapCell(
                    day=day,
                    key=key,
                    value=value,
                    color=resolved.color,
                    level=resolved.level,
                    range_start=range_start,
                    range_end=range_end,
                    title=calendar_heatmap.date_format.tooltip_text(value_text, date_text, locale),
                )
            )
        weeks.append(HeatmapWeek(days=tuple(cells)))

    week_start = int(options.week_start) % 7
    legend = calendar_heatmap.color.resolve_palette(options.color_scale) if options.legend else None

    return HeatmapGrid(
        window=window,
        max_value=max_value,
        weeks=tuple(weeks),
        weekday_labels=tuple(calendar_heatmap.date_format.weekday_labels(week_start, locale)),
        legend=legend,
        legend_captions=(locale.legend_less, locale.legend_more),
        locale=locale,
    )


def _build_labels(document: Document, grid: HeatmapGrid) -> Element:
    labels = document.create_element("div", calendar_heatmap.const.CLASS_LABELS)
    for text in grid.weekday_labels:
        label = document.create_element("span")
        label.text = text
        labels.append_child(label)
    return labels


def _build_day(document: Document, cell: HeatmapCell) -> Element:
    node = document.create_element("div", calendar_heatmap.const.CLASS_DAY)
    node.style["background-color"] = cell.color
    node.dataset["level"] = str(cell.level)
    node.dataset["value"] = calendar_heatmap.date_format.format_value(cell.value)
    node.dataset["date"] = cell.key
    node.dataset["rangeStart"] = cell.range_start
    node.dataset["rangeEnd"] = cell.range_end
    node.attrs["title"] = cell.title
    return node


def _build_week_column(document: Document, week: HeatmapWeek) -> Element:
    column = document.create_element("div", calendar_heatmap.const.CLASS_WEEK)
    for cell in week.days:
        column.append_child(_build_day(document, cell))
    return column


def _build_legend(document: Document, grid: HeatmapGrid) -> Element:
    legend = document.create_element("div", calendar_heatmap.const.CLASS_LEGEND)
    less, more = grid.legend_captions

    caption_low = document.create_element("span")
    caption_low.text = less
    legend.append_child(caption_low)

    for color in grid.legend or ():
        swatch = document.create_element("span", calendar_heatmap.const.CLASS_SWATCH)
        swatch.style["background-color"] = color
        legend.append_child(swatch)

    caption_high = document.create_element("span")
    caption_high.text = more
    legend.append_child(caption_high)
    return legend


def build_root(document: Document, grid: HeatmapGrid, options: RenderOptions) -> Element:
    """モデルから表示用の要素ツリーを作る（まだどこにも取り付けない）."""
    root = document.create_element("div", calendar_heatmap.const.CLASS_ROOT)
    root.style["--ch-size"] = f"{options.square_size}px"
    root.style["--ch-gap"] = f"{options.square_gap}px"

    wrapper = document.create_element("div")
    wrapper.style["display"] = "flex"
    wrapper.append_child(_build_labels(document, grid))

    grid_node = document.create_element("div", calendar_heatmap.const.CLASS_GRID)
    for week in grid.weeks:
        grid_node.append_child(_build_week_column(document, week))
    wrapper.append_child(grid_node)
    root.append_child(wrapper)

    if grid.legend is not None:
        root.append_child(_build_legend(document, grid))

    return root
