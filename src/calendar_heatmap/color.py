#!/usr/bin/env python3
"""色とレベルの決定.

値と表示期間の最大値から、パレットの線形量子化または
呼び出し側のスコアリング関数によって {color, level} を求めます。
同じ入力に対して常に同じ結果を返す純粋関数です。
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Union

import calendar_heatmap.const
from calendar_heatmap.options import ColorScale


@dataclass(frozen=True)
class ColorCell:
    """セルの色とレベル"""

    color: str
    level: int


@dataclass(frozen=True)
class PlainColor:
    """スコアリング関数が色トークンだけを返した場合"""

    token: str


@dataclass(frozen=True)
class StructuredColor:
    """スコアリング関数が {color, level} を返した場合（どちらも省略可）"""

    color: str | None = None
    level: Any = None


ColorResult = Union[PlainColor, StructuredColor]


def coerce_color_result(raw: object) -> ColorResult | None:
    """スコアリング関数の戻り値を ColorResult に変換.

    Returns:
        文字列なら PlainColor、dict（または StructuredColor）なら StructuredColor、
        それ以外は None（不正な戻り値）
    """
    if isinstance(raw, (PlainColor, StructuredColor)):
        return raw
    if isinstance(raw, str):
        return PlainColor(raw)
    if isinstance(raw, Mapping):
        color = raw.get("color")
        return StructuredColor(
            color=color if isinstance(color, str) and color else None,
            level=raw.get("level"),
        )
    return None


def resolve_palette(color_scale: ColorScale) -> tuple[str, ...]:
    """color_scale から実際に使うパレットを返す.

    関数・空・未指定の場合はデフォルトパレット。
    """
    if isinstance(color_scale, Sequence) and not isinstance(color_scale, str) and len(color_scale) > 0:
        return tuple(color_scale)
    return calendar_heatmap.const.DEFAULT_COLORS


def _activity_level(value: float) -> int:
    return 1 if value > 0 else 0


def _finite_level(level: Any) -> float | None:
    if level is None or isinstance(level, bool):
        return None
    try:
        number = float(level)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _from_result(result: ColorResult, value: float, palette: tuple[str, ...]) -> ColorCell:
    if isinstance(result, PlainColor):
        return ColorCell(color=result.token, level=_activity_level(value))

    level = _finite_level(result.level)
    if level is None:
        safe_level = _activity_level(value)
    else:
        # パレットの範囲に収める
        safe_level = int(max(0, min(level, len(palette) - 1)))

    color = result.color or palette[min(safe_level, len(palette) - 1)] or palette[0]
    return ColorCell(color=color, level=safe_level)


def _quantize(value: float, max_value: float, palette: tuple[str, ...]) -> ColorCell:
    if not value or math.isnan(value) or max_value <= 0:
        return ColorCell(color=palette[0], level=0)

    levels = len(palette) - 1
    if levels <= 0:
        return ColorCell(color=palette[0], level=_activity_level(value))

    ratio = min(value / max_value, 1)
    # 四捨五入（0.5 は切り上げ）
    level = max(1, math.floor(ratio * levels + 0.5))
    return ColorCell(color=palette[level], level=level)


def compute_color(value: float, max_value: float, color_scale: ColorScale) -> ColorCell:
    """値から色とレベルを求める.

    Args:
        value: セルの値
        max_value: 表示期間の最大値（正規化の基準）
        color_scale: パレット、またはスコアリング関数 (value, max_value) -> 色 | {color, level}

    Returns:
        色とレベル
    """
    palette = resolve_palette(color_scale)

    if callable(color_scale):
        result = coerce_color_result(color_scale(value, max_value))
        if result is not None:
            return _from_result(result, value, palette)

    return _quantize(value, max_value, palette)
