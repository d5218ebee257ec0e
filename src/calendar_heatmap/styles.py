#!/usr/bin/env python3
"""ヒートマップの既定スタイル.

スタイルは値として返すだけで、表示面への適用はホスト側
（Document.install_style）が一度だけ行います。
"""

from __future__ import annotations

from dataclasses import dataclass

import calendar_heatmap.const


@dataclass(frozen=True)
class StyleSheet:
    """スタイルシート記述子"""

    style_id: str
    rules: tuple[str, ...]

    @property
    def css_text(self) -> str:
        return "\n".join(self.rules)


def default_style_sheet() -> StyleSheet:
    """既定スタイルを返す."""
    empty = calendar_heatmap.const.DEFAULT_COLORS[0]
    rules = (
        ".ch-root { font-family: system-ui, -apple-system, BlinkMacSystemFont, 'Segoe UI', sans-serif; "
        "--ch-size: 14px; --ch-gap: 2px; }",
        ".ch-grid { display: grid; grid-auto-flow: column; grid-auto-columns: max-content; "
        "column-gap: var(--ch-gap); }",
        ".ch-week { display: grid; grid-template-rows: repeat(7, auto); row-gap: var(--ch-gap); }",
        ".ch-day { width: var(--ch-size); height: var(--ch-size); box-sizing: border-box; "
        f"border-radius: 2px; background-color: {empty}; position: relative; }}",
        f'.ch-day[data-level="0"] {{ background-color: {empty}; }}',
        ".ch-tooltip { position: absolute; pointer-events: none; z-index: 9999; padding: 4px 6px; "
        "border-radius: 4px; font-size: 12px; background: rgba(17, 24, 39, 0.9); color: #fff; }",
        ".ch-legend { display: flex; align-items: center; gap: 4px; font-size: 12px; margin-top: 8px; "
        "color: #555; }",
        ".ch-legend .ch-swatch { display: inline-block; width: var(--ch-size); height: var(--ch-size); "
        "border-radius: 2px; }",
        ".ch-labels { display: grid; grid-template-rows: repeat(7, var(--ch-size)); row-gap: var(--ch-gap); "
        "margin-right: 6px; font-size: 10px; color: #555; }",
    )
    return StyleSheet(style_id=calendar_heatmap.const.STYLE_ID, rules=rules)
