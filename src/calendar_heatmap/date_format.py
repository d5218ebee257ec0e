#!/usr/bin/env python3
"""ロケールに応じた日付・ラベルの表示.

locale は曜日ラベル・セルのタイトル・ツールチップ・凡例の文言にだけ影響し、
範囲計算には一切使いません。
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class LocaleFormat:
    """ロケールごとの表示形式"""

    code: str
    weekdays: tuple[str, ...]  # 日曜始まり
    months: tuple[str, ...]
    date_pattern: str
    tooltip_pattern: str
    legend_less: str
    legend_more: str


_EN = LocaleFormat(
    code="en",
    weekdays=("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"),
    months=("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"),
    date_pattern="{month_name} {day}, {year}",
    tooltip_pattern="{value} on {date}",
    legend_less="Less",
    legend_more="More",
)

_JA = LocaleFormat(
    code="ja",
    weekdays=("日", "月", "火", "水", "木", "金", "土"),
    months=tuple(f"{m}月" for m in range(1, 13)),
    date_pattern="{year}年{month}月{day}日",
    tooltip_pattern="{date}: {value}",
    legend_less="少",
    legend_more="多",
)

_ZH_CN = LocaleFormat(
    code="zh-CN",
    weekdays=("周日", "周一", "周二", "周三", "周四", "周五", "周六"),
    months=tuple(f"{m}月" for m in range(1, 13)),
    date_pattern="{year}年{month}月{day}日",
    tooltip_pattern="{date}: {value}",
    legend_less="少",
    legend_more="多",
)

_LOCALES = {"en": _EN, "ja": _JA, "zh": _ZH_CN}

DEFAULT_LOCALE = _EN


def resolve_locale(locale: str | Sequence[str] | None) -> LocaleFormat:
    """locale 指定から表示形式を決める.

    リストの場合は先頭を使い、言語部分（"ja-JP" → "ja"）で照合します。
    未対応のロケールは英語になります。
    """
    if locale is not None and not isinstance(locale, str):
        locale = next(iter(locale), None)
    if not locale:
        return DEFAULT_LOCALE
    language = locale.replace("_", "-").split("-")[0].lower()
    return _LOCALES.get(language, DEFAULT_LOCALE)


def format_value(value: float) -> str:
    """値の表示（整数値は小数点なし）."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_date(day: date, locale: LocaleFormat) -> str:
    """日付を "Jan 1, 2024" / "2024年1月1日" の形式で表示."""
    return locale.date_pattern.format(
        year=day.year,
        month=day.month,
        month_name=locale.months[day.month - 1],
        day=day.day,
    )


def weekday_labels(week_start: int, locale: LocaleFormat) -> list[str]:
    """週の開始曜日から並べた曜日ラベル（7 個）"""
    return [locale.weekdays[(week_start + i) % 7] for i in range(7)]


def tooltip_text(value: str, date_text: str, locale: LocaleFormat) -> str:
    """ツールチップの文言"""
    return locale.tooltip_pattern.format(value=value, date=date_text)
