#!/usr/bin/env python3
"""ツールチップ.

描画したルート要素にポインタの移動・離脱の購読を付け、
日付セルの上にある間だけ浮動ツールチップを表示します。
"""

from __future__ import annotations

from collections.abc import Callable, Mapping

import calendar_heatmap.const
from calendar_heatmap.surface import Document, Element, Event

TooltipFormatter = Callable[[Mapping[str, str]], str]
Disposer = Callable[[], None]


def default_formatter(dataset: Mapping[str, str]) -> str:
    """"{value} on {date}" 形式の文言"""
    return f"{dataset.get('value', '')} on {dataset.get('date', '')}"


def attach_tooltip(document: Document, root: Element, formatter: TooltipFormatter = default_formatter) -> Disposer:
    """ツールチップを取り付ける.

    body にツールチップ要素を 1 つ追加し、root に mousemove / mouseleave の
    2 つのハンドラを登録します。

    Returns:
        ハンドラとツールチップ要素を取り除く関数（何度呼んでもよい）
    """
    tooltip: Element | None = document.create_element("div", calendar_heatmap.const.CLASS_TOOLTIP)
    tooltip.style["display"] = "none"
    document.body.append_child(tooltip)

    def hide() -> None:
        if tooltip is not None:
            tooltip.style["display"] = "none"

    def handle_move(event: Event) -> None:
        if tooltip is None:
            return
        target = event.target.closest(calendar_heatmap.const.CLASS_DAY) if event.target else None
        if target is None or not root.contains(target):
            hide()
            return
        offset = calendar_heatmap.const.TOOLTIP_OFFSET
        tooltip.text = formatter(target.dataset)
        tooltip.style["display"] = "block"
        tooltip.style["left"] = f"{event.page_x + offset}px"
        tooltip.style["top"] = f"{event.page_y + offset}px"

    def handle_leave(event: Event) -> None:
        hide()

    root.add_event_listener(calendar_heatmap.const.EVENT_MOVE, handle_move)
    root.add_event_listener(calendar_heatmap.const.EVENT_LEAVE, handle_leave)

    def dispose() -> None:
        nonlocal tooltip
        root.remove_event_listener(calendar_heatmap.const.EVENT_MOVE, handle_move)
        root.remove_event_listener(calendar_heatmap.const.EVENT_LEAVE, handle_leave)
        if tooltip is not None:
            tooltip.remove()
        tooltip = None

    return dispose
