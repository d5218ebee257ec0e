#!/usr/bin/env python3
"""カレンダーヒートマップ本体.

データとオプションを保持し、更新のたびに表示をすべて作り直します。
描画のたびに前回のツールチップ（ハンドラ 2 つと浮動要素 1 つ）を
片付けてから付け直すため、何度描画してもリソースは増えません。
"""

from __future__ import annotations

import logging
import types
from collections.abc import Callable, Iterable, Mapping
from datetime import date
from typing import Any

import my_lib.time

import calendar_heatmap.date_format
import calendar_heatmap.dates
import calendar_heatmap.normalize
import calendar_heatmap.render
import calendar_heatmap.styles
import calendar_heatmap.tooltip
import calendar_heatmap.view_range
from calendar_heatmap.exceptions import (
    ContainerNotFoundError,
    DisplayEnvironmentError,
    HeatmapDestroyedError,
    InvalidRangeError,
)
from calendar_heatmap.options import DEFAULT_OPTIONS, RenderOptions
from calendar_heatmap.surface import Document, Element

Clock = Callable[[], date]

CONTAINER_ID = "heatmap"


def _today() -> date:
    return my_lib.time.now().date()


def _resolve_container(container: Element | str | None, document: Document | None) -> tuple[Element, Document]:
    if container is None:
        msg = "container is required"
        raise ContainerNotFoundError(msg)

    if isinstance(container, str):
        if document is None:
            msg = "display surface is required to resolve a container selector"
            raise DisplayEnvironmentError(msg)
        node = document.query_selector(container)
        if node is None:
            msg = f'container selector "{container}" not found'
            raise ContainerNotFoundError(msg)
        return node, document

    owner = document or container.owner_document
    if owner is None:
        msg = "container is not attached to a display surface"
        raise DisplayEnvironmentError(msg)
    return container, owner


class CalendarHeatmap:
    """カレンダーヒートマップ.

    生成時に一度描画し、以後 set_options / set_data のたびに描画し直します。
    destroy() の後はどの操作も受け付けません。
    """

    def __init__(
        self,
        container: Element | str | None,
        data: Iterable[object] | None = None,
        options: Mapping[str, Any] | RenderOptions | None = None,
        *,
        document: Document | None = None,
        clock: Clock | None = None,
    ) -> None:
        """CalendarHeatmap を初期化して描画.

        Args:
            container: 描画先の要素、またはセレクタ（"#id" / ".class"）
            data: 観測レコードの列
            options: 描画オプション（dict の場合は既定値にマージ）
            document: 表示面（セレクタを使う場合は必須）
            clock: 今日の日付を返す関数（省略時は my_lib.time.now()）

        Raises:
            ContainerNotFoundError: コンテナが見つからない
            DisplayEnvironmentError: 表示面が無い
        """
        self.container, self.document = _resolve_container(container, document)
        self._clock: Clock = clock or _today
        if isinstance(options, RenderOptions):
            self._options = options
        else:
            self._options = DEFAULT_OPTIONS.merge(options)
        self._data = calendar_heatmap.normalize.normalize_data(data)
        self._root: Element | None = None
        self._tooltip_disposer: calendar_heatmap.tooltip.Disposer | None = None
        self._destroyed = False

        self.render()

    # === 参照 ===

    @classmethod
    def defaults(cls) -> RenderOptions:
        return DEFAULT_OPTIONS

    @staticmethod
    def style_sheet() -> calendar_heatmap.styles.StyleSheet:
        """ホスト側で一度だけ適用する既定スタイル"""
        return calendar_heatmap.styles.default_style_sheet()

    @property
    def options(self) -> RenderOptions:
        return self._options

    @property
    def data(self) -> Mapping[str, float]:
        return types.MappingProxyType(self._data)

    @property
    def root(self) -> Element | None:
        """現在表示中のルート要素"""
        return self._root

    @property
    def is_destroyed(self) -> bool:
        return self._destroyed

    # === 更新 ===

    def set_options(self, partial: Mapping[str, Any] | None = None, **kwargs: Any) -> None:
        """オプションを浅くマージして描画し直す.

        描画に失敗した場合はオプションを元に戻してから例外を送出します。
        """
        self._ensure_alive()
        previous = self._options
        self._options = previous.merge({**(partial or {}), **kwargs})
        try:
            self.render()
        except Exception:
            self._options = previous
            raise

    def set_data(self, records: Iterable[object] | None = None) -> None:
        """データを正規化し直して描画し直す（差分ではなく全置換）."""
        self._ensure_alive()
        self._replace_map(calendar_heatmap.normalize.normalize_data(records))

    def replace_data(self, records: Iterable[object] | None = None) -> None:
        self.set_data(records)

    def update_data(self, records: Iterable[object] | None = None) -> None:
        """既存データに新しいレコードを上書きして描画し直す."""
        self._ensure_alive()
        merged = dict(self._data)
        merged.update(calendar_heatmap.normalize.normalize_data(records))
        self._replace_map(merged)

    def set_value(self, day: date | str, value: float) -> None:
        """1 日分の値を設定して描画し直す."""
        self._ensure_alive()
        parsed = calendar_heatmap.dates.parse_date(day)
        if parsed is None:
            msg = f"invalid date: {day!r}"
            raise InvalidRangeError(msg)
        self.update_data([{"date": parsed, "value": value}])

    def _replace_map(self, data: dict[str, float]) -> None:
        previous = self._data
        self._data = data
        try:
            self.render()
        except Exception:
            self._data = previous
            raise

    # === 描画 ===

    def render(self) -> None:
        """現在のデータとオプションで表示をすべて作り直す.

        範囲計算に失敗した場合は表示を一切変更せずに例外を送出します。
        """
        self._ensure_alive()
        options = self._options

        window = calendar_heatmap.view_range.generate_range(options, self._clock())
        grid = calendar_heatmap.render.build_grid(window, self._data, options)
        root = calendar_heatmap.render.build_root(self.document, grid, options)

        self._dispose_tooltip()
        self.container.clear()
        self.container.append_child(root)
        self._root = root

        if options.tooltip:
            locale = grid.locale

            def formatter(dataset: Mapping[str, str]) -> str:
                return calendar_heatmap.date_format.tooltip_text(
                    dataset.get("value", ""), dataset.get("date", ""), locale
                )

            self._tooltip_disposer = calendar_heatmap.tooltip.attach_tooltip(self.document, root, formatter)

        logging.debug(
            "Rendered %s heatmap: %s - %s (%d weeks, max %s)",
            options.view,
            window.aligned_start,
            window.aligned_end,
            len(grid.weeks),
            grid.max_value,
        )

    def destroy(self) -> None:
        """ツールチップと表示を片付け、以後の操作を受け付けなくする."""
        self._dispose_tooltip()
        if not self._destroyed:
            self.container.clear()
        self._root = None
        self._destroyed = True

    def _dispose_tooltip(self) -> None:
        if self._tooltip_disposer is not None:
            self._tooltip_disposer()
            self._tooltip_disposer = None

    def _ensure_alive(self) -> None:
        if self._destroyed:
            msg = "heatmap has been destroyed"
            raise HeatmapDestroyedError(msg)


def create(
    container: Element | str | None,
    data: Iterable[object] | None = None,
    options: Mapping[str, Any] | RenderOptions | None = None,
    *,
    document: Document | None = None,
    clock: Clock | None = None,
) -> CalendarHeatmap:
    """CalendarHeatmap を生成して描画."""
    return CalendarHeatmap(container, data, options, document=document, clock=clock)


def render_html(
    records: Iterable[object] | None,
    options: Mapping[str, Any] | RenderOptions | None,
    today: date,
    title: str = "Calendar Heatmap",
) -> str:
    """記録を描画した HTML 文書を返す.

    新しい表示面に既定スタイルを適用し、エンジンで描画してから書き出します。
    """
    document = Document(title=title)
    document.install_style(CalendarHeatmap.style_sheet())
    container = document.create_element("div")
    container.id = CONTAINER_ID
    document.body.append_child(container)

    heatmap = create(f"#{CONTAINER_ID}", records, options, document=document, clock=lambda: today)
    html = document.to_html()
    heatmap.destroy()
    return html
