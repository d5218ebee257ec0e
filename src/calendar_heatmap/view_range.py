#!/usr/bin/env python3
"""表示範囲の生成.

ビュー種別（year / month / week / recent）から表示期間を求め、
グリッドの列が欠けないよう週境界まで外側に広げた日付列を生成します。
"""

from __future__ import annotations

import calendar
import logging
from dataclasses import dataclass
from datetime import date

import calendar_heatmap.const
import calendar_heatmap.dates
from calendar_heatmap.exceptions import InvalidRangeError, UnsupportedViewError
from calendar_heatmap.options import RenderOptions


@dataclass(frozen=True)
class ViewWindow:
    """表示範囲.

    start / end は要求された期間、aligned_start / aligned_end は週境界に揃えた期間。
    days は aligned_start から aligned_end までの全日付（両端を含む昇順）。
    """

    start: date
    end: date
    aligned_start: date
    aligned_end: date
    days: tuple[date, ...]

    def weeks(self) -> list[tuple[date, ...]]:
        """days を先頭から 7 日ずつの列に分割."""
        size = calendar_heatmap.const.DAYS_PER_WEEK
        return [self.days[i : i + size] for i in range(0, len(self.days), size)]


def _to_int(value: object, name: str) -> int:
    """範囲計算用の数値パラメータを int に変換."""
    if isinstance(value, bool):
        msg = f"invalid {name}: {value!r}"
        raise InvalidRangeError(msg)
    try:
        return int(value)  # type: ignore[call-overload]
    except (TypeError, ValueError, OverflowError) as e:
        msg = f"invalid {name}: {value!r}"
        raise InvalidRangeError(msg) from e


def _year_range(year: int) -> tuple[date, date]:
    try:
        return date(year, 1, 1), date(year, 12, 31)
    except ValueError as e:
        msg = f"invalid year: {year}"
        raise InvalidRangeError(msg) from e


def _month_range(year: int, month: int) -> tuple[date, date]:
    if not 1 <= month <= 12:
        msg = f"invalid month: {month} (expected 1-12)"
        raise InvalidRangeError(msg)
    try:
        last_day = calendar.monthrange(year, month)[1]
        return date(year, month, 1), date(year, month, last_day)
    except ValueError as e:
        msg = f"invalid year: {year}"
        raise InvalidRangeError(msg) from e


def _week_range(start_date: object, today: date, week_start: int) -> tuple[date, date]:
    base = today
    if start_date:
        parsed = calendar_heatmap.dates.parse_date(start_date)
        if parsed is None:
            msg = f"invalid startDate for week view: {start_date!r}"
            raise InvalidRangeError(msg)
        base = parsed
    return (
        calendar_heatmap.dates.start_of_week(base, week_start),
        calendar_heatmap.dates.end_of_week(base, week_start),
    )


def _recent_range(recent_days: object, today: date) -> tuple[date, date]:
    if recent_days is None:
        recent_days = calendar_heatmap.const.DEFAULT_RECENT_DAYS
    days = max(_to_int(recent_days, "recentDays"), 1)
    return calendar_heatmap.dates.add_days(today, -days + 1), today


def generate_range(options: RenderOptions, today: date) -> ViewWindow:
    """ビュー種別とパラメータから表示範囲を生成.

    Args:
        options: 描画オプション
        today: 基準となる今日の日付（"現在" は呼び出し側から注入する）

    Returns:
        週境界に揃えた表示範囲

    Raises:
        UnsupportedViewError: 未対応のビュー種別
        InvalidRangeError: startDate や数値パラメータが不正
    """
    view = options.view
    if view not in calendar_heatmap.const.VIEWS:
        msg = f"unsupported view: {view!r}"
        raise UnsupportedViewError(msg)

    week_start = _to_int(options.week_start, "weekStart") % 7

    try:
        if view == calendar_heatmap.const.VIEW_YEAR:
            year = today.year if options.year is None else _to_int(options.year, "year")
            start, end = _year_range(year)
        elif view == calendar_heatmap.const.VIEW_MONTH:
            year = today.year if options.year is None else _to_int(options.year, "year")
            month = today.month if options.month is None else _to_int(options.month, "month")
            start, end = _month_range(year, month)
        elif view == calendar_heatmap.const.VIEW_WEEK:
            start, end = _week_range(options.start_date, today, week_start)
        else:
            start, end = _recent_range(options.recent_days, today)

        # グリッドの列を揃えるため週単位に広げる
        aligned_start = calendar_heatmap.dates.start_of_week(start, week_start)
        aligned_end = calendar_heatmap.dates.end_of_week(end, week_start)
    except OverflowError as e:
        # date.min / date.max を越える範囲
        msg = f"{view} range is out of supported dates"
        raise InvalidRangeError(msg) from e

    count = (aligned_end - aligned_start).days + 1
    days = tuple(calendar_heatmap.dates.add_days(aligned_start, i) for i in range(count))

    logging.debug("Generated %s range %s - %s (%d days)", view, aligned_start, aligned_end, count)

    return ViewWindow(
        start=start,
        end=end,
        aligned_start=aligned_start,
        aligned_end=aligned_end,
        days=days,
    )
