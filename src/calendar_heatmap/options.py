#!/usr/bin/env python3
"""描画オプション.

RenderOptions は設定のスナップショットです。set_options のたびに浅くマージされ、
マージ時には値の検証を行いません（不正な数値は描画時の範囲計算で失敗します）。
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from datetime import date
from typing import Any, Union

import calendar_heatmap.const

# パレット（色トークンの列）またはスコアリング関数
ColorScale = Union[Sequence[str], Callable[[float, float], Any], None]

# 元のオプション名（camelCase）との対応
_ALIASES = {
    "weekStart": "week_start",
    "recentDays": "recent_days",
    "startDate": "start_date",
    "squareSize": "square_size",
    "squareGap": "square_gap",
    "colorScale": "color_scale",
    "maxValue": "max_value",
}


@dataclass(frozen=True)
class RenderOptions:
    """描画オプション.

    year / month が None の場合は描画時点の日付から補完します。
    month は 1〜12 です。
    """

    view: str = calendar_heatmap.const.VIEW_YEAR
    year: Any = None
    month: Any = None
    week_start: Any = 0  # 0: 日曜, 1: 月曜
    recent_days: Any = calendar_heatmap.const.DEFAULT_RECENT_DAYS
    start_date: date | str | None = None
    square_size: int = 14
    square_gap: int = 2
    color_scale: ColorScale = calendar_heatmap.const.DEFAULT_COLORS
    max_value: float | None = None
    legend: bool = False
    tooltip: bool = True
    locale: str | Sequence[str] | None = None

    def merge(self, partial: Mapping[str, Any] | None = None) -> RenderOptions:
        """partial を浅くマージした新しい RenderOptions を返す.

        snake_case と camelCase のどちらのキーも受け付けます。
        未知のキーは警告ログを出して無視します。
        """
        if not partial:
            return self

        field_names = {f.name for f in dataclasses.fields(self)}
        changes: dict[str, Any] = {}
        for key, value in partial.items():
            name = _ALIASES.get(key, key)
            if name not in field_names:
                logging.warning("Ignore unknown heatmap option: %s", key)
                continue
            changes[name] = value

        return dataclasses.replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        """オプションを dict に変換（color_scale が関数の場合はそのまま）."""
        return {f.name: getattr(self, f.name) for f in dataclasses.fields(self)}


DEFAULT_OPTIONS = RenderOptions()
