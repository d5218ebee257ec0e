#!/usr/bin/env python3
# ruff: noqa: S101
"""
styles モジュールのユニットテスト
"""

from __future__ import annotations

import calendar_heatmap.const
from calendar_heatmap.styles import default_style_sheet


class TestDefaultStyleSheet:
    """default_style_sheet 関数のテスト"""

    def test_style_id(self) -> None:
        """既定の id"""
        assert default_style_sheet().style_id == calendar_heatmap.const.STYLE_ID

    def test_covers_all_classes(self) -> None:
        """描画に使うクラスのルールを全て含む"""
        css = default_style_sheet().css_text

        for name in (
            calendar_heatmap.const.CLASS_ROOT,
            calendar_heatmap.const.CLASS_GRID,
            calendar_heatmap.const.CLASS_WEEK,
            calendar_heatmap.const.CLASS_DAY,
            calendar_heatmap.const.CLASS_LABELS,
            calendar_heatmap.const.CLASS_LEGEND,
            calendar_heatmap.const.CLASS_SWATCH,
            calendar_heatmap.const.CLASS_TOOLTIP,
        ):
            assert f".{name}" in css

    def test_level_zero_uses_empty_color(self) -> None:
        """レベル 0 はパレット先頭の色"""
        css = default_style_sheet().css_text

        assert f'[data-level="0"] {{ background-color: {calendar_heatmap.const.DEFAULT_COLORS[0]}; }}' in css

    def test_pure(self) -> None:
        """呼び出すたびに同じ値"""
        assert default_style_sheet() == default_style_sheet()
