#!/usr/bin/env python3
# ruff: noqa: S101
"""
engine モジュールのユニットテスト

ヒートマップの生成・更新・破棄と、描画の繰り返しでリソースが増えないことを検証します。
"""

from __future__ import annotations

from datetime import date

import pytest
import time_machine

import calendar_heatmap.const
import calendar_heatmap.engine
from calendar_heatmap.engine import CalendarHeatmap
from calendar_heatmap.exceptions import (
    ContainerNotFoundError,
    DisplayEnvironmentError,
    HeatmapDestroyedError,
    InvalidRangeError,
    UnsupportedViewError,
)
from calendar_heatmap.options import DEFAULT_OPTIONS
from calendar_heatmap.surface import Document, Element, Event


def _days(heatmap: CalendarHeatmap) -> dict[str, Element]:
    assert heatmap.root is not None
    return {node.dataset["date"]: node for node in heatmap.root.find_all(calendar_heatmap.const.CLASS_DAY)}


def _tooltips(document: Document) -> list[Element]:
    return [node for node in document.body.children if node.has_class(calendar_heatmap.const.CLASS_TOOLTIP)]


class TestCreate:
    """生成のテスト"""

    def test_renders_on_create(self, document: Document, container: Element, sample_records, clock) -> None:
        """生成時に描画する"""
        heatmap = calendar_heatmap.engine.create(container, sample_records, {"view": "month"}, clock=clock)

        assert heatmap.document is document
        assert container.children == [heatmap.root]
        assert len(_days(heatmap)) == 42
        assert _days(heatmap)["2024-03-10"].dataset["level"] == "4"

    def test_selector(self, document: Document, container: Element, clock) -> None:
        """セレクタでコンテナを指定"""
        heatmap = CalendarHeatmap("#heatmap", [], {"view": "week"}, document=document, clock=clock)

        assert heatmap.container is container

    def test_selector_not_found(self, document: Document, clock) -> None:
        """セレクタに一致する要素が無ければ ContainerNotFoundError"""
        with pytest.raises(ContainerNotFoundError):
            CalendarHeatmap("#missing", [], document=document, clock=clock)

    def test_none_container(self, clock) -> None:
        """コンテナ未指定は ContainerNotFoundError"""
        with pytest.raises(ContainerNotFoundError):
            CalendarHeatmap(None, [], clock=clock)

    def test_selector_without_document(self, clock) -> None:
        """表示面が無ければ DisplayEnvironmentError"""
        with pytest.raises(DisplayEnvironmentError):
            CalendarHeatmap("#heatmap", [], clock=clock)

    def test_detached_element(self, clock) -> None:
        """表示面に属さない要素は DisplayEnvironmentError"""
        with pytest.raises(DisplayEnvironmentError):
            CalendarHeatmap(Element("div"), [], clock=clock)

    def test_default_options(self, container: Element, clock) -> None:
        """オプション省略時は既定値（year ビュー）"""
        heatmap = CalendarHeatmap(container, [], clock=clock)

        assert heatmap.options == DEFAULT_OPTIONS
        assert CalendarHeatmap.defaults() is DEFAULT_OPTIONS
        assert "2024-01-01" in _days(heatmap)
        assert "2024-12-31" in _days(heatmap)

    def test_unsupported_view(self, container: Element, clock) -> None:
        """未対応のビューは UnsupportedViewError"""
        with pytest.raises(UnsupportedViewError):
            CalendarHeatmap(container, [], {"view": "decade"}, clock=clock)
        assert container.children == []

    def test_invalid_max_value(self, container: Element, clock) -> None:
        """数値にならない maxValue は InvalidRangeError"""
        with pytest.raises(InvalidRangeError):
            CalendarHeatmap(container, [], {"view": "week", "maxValue": "abc"}, clock=clock)
        assert container.children == []

    def test_default_clock(self, container: Element) -> None:
        """clock 省略時は現在日時から今日を求める"""
        with time_machine.travel("2024-06-10 12:00:00+09:00", tick=False):
            heatmap = CalendarHeatmap(container, [], {"view": "recent", "recentDays": 1})

        assert heatmap.root is not None
        day = heatmap.root.find(calendar_heatmap.const.CLASS_DAY)
        assert day is not None
        assert day.dataset["rangeEnd"] == "2024-06-10"

    def test_style_sheet(self) -> None:
        """既定スタイルは値として返す"""
        sheet = CalendarHeatmap.style_sheet()

        assert sheet.style_id == calendar_heatmap.const.STYLE_ID


class TestRenderLifecycle:
    """描画の繰り返しとリソースのテスト"""

    def test_rerender_does_not_leak(self, document: Document, container: Element, sample_records, clock) -> None:
        """何度描画してもハンドラは 2 つ、ツールチップは 1 つ"""
        heatmap = CalendarHeatmap(container, sample_records, {"view": "month"}, clock=clock)

        for _ in range(5):
            heatmap.render()
            heatmap.set_options({"legend": True})
            heatmap.set_data(sample_records)

        assert document.active_listener_count == 2
        assert len(_tooltips(document)) == 1
        assert len(container.children) == 1

    def test_tooltip_disabled(self, document: Document, container: Element, clock) -> None:
        """tooltip=False ならハンドラを登録しない"""
        CalendarHeatmap(container, [], {"view": "week", "tooltip": False}, clock=clock)

        assert document.active_listener_count == 0
        assert _tooltips(document) == []

    def test_tooltip_toggled_off(self, document: Document, container: Element, clock) -> None:
        """描画し直しで tooltip を外せる"""
        heatmap = CalendarHeatmap(container, [], {"view": "week"}, clock=clock)

        heatmap.set_options(tooltip=False)

        assert document.active_listener_count == 0
        assert _tooltips(document) == []

    def test_tooltip_uses_locale(self, document: Document, container: Element, sample_records, clock) -> None:
        """ツールチップの文言は locale に従う"""
        heatmap = CalendarHeatmap(container, sample_records, {"view": "week", "locale": "ja"}, clock=clock)

        _days(heatmap)["2024-03-15"].dispatch_event(Event("mousemove", page_x=0, page_y=0))

        assert _tooltips(document)[0].text == "2024-03-15: 5"

    def test_tooltip_shows_on_hover(self, document: Document, container: Element, sample_records, clock) -> None:
        """日付セル上で表示、離れると隠す"""
        heatmap = CalendarHeatmap(container, sample_records, {"view": "week"}, clock=clock)
        tooltip = _tooltips(document)[0]

        _days(heatmap)["2024-03-14"].dispatch_event(Event("mousemove", page_x=5, page_y=5))
        assert tooltip.style["display"] == "block"
        assert tooltip.text == "3 on 2024-03-14"

        assert heatmap.root is not None
        heatmap.root.dispatch_event(Event("mouseleave"))
        assert tooltip.style["display"] == "none"

    def test_failed_render_keeps_previous_tree(self, document: Document, container: Element, clock) -> None:
        """範囲計算に失敗したら表示とオプションは変わらない"""
        heatmap = CalendarHeatmap(container, [], {"view": "week"}, clock=clock)
        root = heatmap.root

        with pytest.raises(InvalidRangeError):
            heatmap.set_options({"startDate": "not-a-date"})

        assert heatmap.root is root
        assert container.children == [root]
        assert heatmap.options.start_date is None
        assert document.active_listener_count == 2

    def test_invalid_max_value_keeps_previous_tree(self, document: Document, container: Element, clock) -> None:
        """数値にならない maxValue なら表示とオプションは変わらない"""
        heatmap = CalendarHeatmap(container, [], {"view": "week", "maxValue": 10}, clock=clock)
        root = heatmap.root

        with pytest.raises(InvalidRangeError):
            heatmap.set_options({"maxValue": "abc"})

        assert heatmap.root is root
        assert container.children == [root]
        assert heatmap.options.max_value == 10
        assert document.active_listener_count == 2


class TestDataUpdates:
    """データ更新のテスト"""

    def test_set_data_replaces(self, container: Element, sample_records, clock) -> None:
        """set_data は全置換"""
        heatmap = CalendarHeatmap(container, sample_records, {"view": "month"}, clock=clock)

        heatmap.set_data([{"date": "2024-03-02", "value": 1}])

        assert dict(heatmap.data) == {"2024-03-02": 1}
        assert _days(heatmap)["2024-03-10"].dataset["level"] == "0"

    def test_replace_data(self, container: Element, sample_records, clock) -> None:
        """replace_data は set_data と同じ"""
        heatmap = CalendarHeatmap(container, sample_records, {"view": "month"}, clock=clock)

        heatmap.replace_data(None)

        assert dict(heatmap.data) == {}

    def test_update_data_merges(self, container: Element, sample_records, clock) -> None:
        """update_data は既存データに上書き"""
        heatmap = CalendarHeatmap(container, sample_records, {"view": "month"}, clock=clock)
        before = heatmap.data

        heatmap.update_data([{"date": "2024-03-10", "value": 1}, {"date": "2024-03-20", "value": 2}])

        assert heatmap.data["2024-03-10"] == 1
        assert heatmap.data["2024-03-20"] == 2
        assert heatmap.data["2024-03-01"] == 2
        # 以前の参照は変わらない
        assert before["2024-03-10"] == 8

    def test_set_value(self, container: Element, clock) -> None:
        """set_value は 1 日分を設定"""
        heatmap = CalendarHeatmap(container, [], {"view": "week"}, clock=clock)

        heatmap.set_value("2024-03-12", 7)
        heatmap.set_value(date(2024, 3, 13), 14)

        assert heatmap.data["2024-03-12"] == 7
        assert _days(heatmap)["2024-03-13"].dataset["level"] == "4"
        assert _days(heatmap)["2024-03-12"].dataset["level"] == "2"

    def test_set_value_invalid_date(self, container: Element, clock) -> None:
        """日付として解釈できなければ InvalidRangeError"""
        heatmap = CalendarHeatmap(container, [], {"view": "week"}, clock=clock)

        with pytest.raises(InvalidRangeError):
            heatmap.set_value("bogus", 1)

    def test_data_is_read_only(self, container: Element, clock) -> None:
        """data プロパティは読み取り専用"""
        heatmap = CalendarHeatmap(container, [{"date": "2024-03-12", "value": 1}], {"view": "week"}, clock=clock)

        with pytest.raises(TypeError):
            heatmap.data["2024-03-12"] = 5  # type: ignore[index]


class TestDestroy:
    """destroy のテスト"""

    def test_releases_resources(self, document: Document, container: Element, clock) -> None:
        """ハンドラ・ツールチップ・表示をすべて片付ける"""
        heatmap = CalendarHeatmap(container, [], {"view": "month"}, clock=clock)

        heatmap.destroy()

        assert document.active_listener_count == 0
        assert _tooltips(document) == []
        assert container.children == []
        assert heatmap.root is None
        assert heatmap.is_destroyed

    def test_idempotent(self, container: Element, clock) -> None:
        """二度呼んでもよい"""
        heatmap = CalendarHeatmap(container, [], {"view": "week"}, clock=clock)

        heatmap.destroy()
        heatmap.destroy()

        assert heatmap.is_destroyed

    def test_does_not_clear_foreign_content(self, document: Document, container: Element, clock) -> None:
        """二度目の destroy は後から置かれた内容を消さない"""
        heatmap = CalendarHeatmap(container, [], {"view": "week"}, clock=clock)
        heatmap.destroy()
        other = container.append_child(document.create_element("p"))

        heatmap.destroy()

        assert container.children == [other]

    @pytest.mark.parametrize(
        ("method", "args"),
        [
            ("render", ()),
            ("set_options", ({"view": "week"},)),
            ("set_data", ([],)),
            ("update_data", ([],)),
            ("set_value", ("2024-03-01", 1)),
        ],
    )
    def test_operations_after_destroy(self, container: Element, clock, method: str, args: tuple) -> None:
        """破棄後の操作は HeatmapDestroyedError"""
        heatmap = CalendarHeatmap(container, [], {"view": "week"}, clock=clock)
        heatmap.destroy()

        with pytest.raises(HeatmapDestroyedError):
            getattr(heatmap, method)(*args)


class TestRenderHtml:
    """render_html 関数のテスト"""

    def test_document(self, sample_records, today) -> None:
        """スタイル込みの HTML 文書"""
        html = calendar_heatmap.engine.render_html(sample_records, {"view": "month", "legend": True}, today)

        assert html.startswith("<!DOCTYPE html>")
        assert f'id="{calendar_heatmap.const.STYLE_ID}"' in html
        assert 'id="heatmap"' in html
        assert 'data-date="2024-03-10"' in html
        assert 'class="ch-legend"' in html
        assert "<title>Calendar Heatmap</title>" in html

    def test_title(self, today) -> None:
        """タイトルを指定できる"""
        html = calendar_heatmap.engine.render_html([], {"view": "week"}, today, title="活動")

        assert "<title>活動</title>" in html
