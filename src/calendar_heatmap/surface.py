#!/usr/bin/env python3
"""表示面（要素ツリー）.

ヒートマップの描画先となるメモリ上の要素ツリーです。
クラス・属性・data 属性・インラインスタイルを持つ要素と、
ポインタイベントの購読／配送、HTML への書き出しを提供します。
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import markupsafe

if TYPE_CHECKING:
    from calendar_heatmap.styles import StyleSheet

EventHandler = Callable[["Event"], None]

# 伝播しないイベント
_NON_BUBBLING = frozenset({"mouseenter", "mouseleave"})

_VOID_TAGS = frozenset({"br", "hr", "img", "input", "meta", "link"})


@dataclass
class Event:
    """ポインタイベント"""

    type: str
    target: Element | None = None
    page_x: float = 0
    page_y: float = 0
    current_target: Element | None = field(default=None, repr=False)


def _dataset_attr(name: str) -> str:
    """rangeStart / range_start → data-range-start"""
    chars = []
    for ch in name:
        if ch.isupper():
            chars.append("-" + ch.lower())
        elif ch == "_":
            chars.append("-")
        else:
            chars.append(ch)
    return "data-" + "".join(chars)


class Element:
    """表示面の要素."""

    def __init__(self, tag: str, owner_document: Document | None = None) -> None:
        self.tag = tag
        self.owner_document = owner_document
        self.class_list: list[str] = []
        self.attrs: dict[str, str] = {}
        self.dataset: dict[str, str] = {}
        self.style: dict[str, str] = {}
        self.text: str = ""
        self.children: list[Element] = []
        self.parent: Element | None = None
        self._listeners: dict[str, list[EventHandler]] = {}

    def __repr__(self) -> str:
        classes = ".".join(self.class_list)
        return f"<Element {self.tag}{'.' + classes if classes else ''}>"

    # === 属性 ===

    @property
    def id(self) -> str | None:
        return self.attrs.get("id")

    @id.setter
    def id(self, value: str) -> None:
        self.attrs["id"] = value

    @property
    def class_name(self) -> str:
        return " ".join(self.class_list)

    @class_name.setter
    def class_name(self, value: str) -> None:
        self.class_list = value.split()

    def has_class(self, name: str) -> bool:
        return name in self.class_list

    # === ツリー操作 ===

    def append_child(self, child: Element) -> Element:
        """子要素を末尾に追加（既に別の親がいれば付け替える）."""
        if child.parent is not None:
            child.parent.remove_child(child)
        child.parent = self
        self.children.append(child)
        return child

    def remove_child(self, child: Element) -> None:
        self.children.remove(child)
        child.parent = None

    def remove(self) -> None:
        """自身を親から取り外す."""
        if self.parent is not None:
            self.parent.remove_child(self)

    def clear(self) -> None:
        """子要素とテキストを全て取り除く."""
        for child in list(self.children):
            self.remove_child(child)
        self.text = ""

    def iter(self) -> Iterator[Element]:
        """自身と子孫を深さ優先で列挙."""
        yield self
        for child in self.children:
            yield from child.iter()

    def contains(self, other: Element | None) -> bool:
        """other が自身または子孫なら True."""
        node = other
        while node is not None:
            if node is self:
                return True
            node = node.parent
        return False

    def closest(self, class_name: str) -> Element | None:
        """自身から祖先方向に class_name を持つ最初の要素を探す."""
        node: Element | None = self
        while node is not None:
            if node.has_class(class_name):
                return node
            node = node.parent
        return None

    def find_all(self, class_name: str) -> list[Element]:
        return [node for node in self.iter() if node.has_class(class_name)]

    def find(self, class_name: str) -> Element | None:
        for node in self.iter():
            if node.has_class(class_name):
                return node
        return None

    # === イベント ===

    def add_event_listener(self, event_type: str, handler: EventHandler) -> None:
        handlers = self._listeners.setdefault(event_type, [])
        if handler in handlers:
            return
        handlers.append(handler)
        if self.owner_document is not None:
            self.owner_document._listener_added()

    def remove_event_listener(self, event_type: str, handler: EventHandler) -> None:
        handlers = self._listeners.get(event_type, [])
        if handler not in handlers:
            return
        handlers.remove(handler)
        if self.owner_document is not None:
            self.owner_document._listener_removed()

    def listener_count(self, event_type: str | None = None) -> int:
        if event_type is not None:
            return len(self._listeners.get(event_type, []))
        return sum(len(handlers) for handlers in self._listeners.values())

    def dispatch_event(self, event: Event) -> None:
        """イベントを配送.

        target が未設定なら自身を target とし、target から祖先へ順に
        ハンドラを呼び出します（mouseleave などは target のみ）。
        """
        if event.target is None:
            event.target = self

        node: Element | None = event.target
        while node is not None:
            event.current_target = node
            # ハンドラ内での購読解除に備えてコピーしてから呼ぶ
            for handler in list(node._listeners.get(event.type, [])):
                handler(event)
            if event.type in _NON_BUBBLING:
                break
            node = node.parent

    # === 書き出し ===

    def _style_text(self) -> str:
        return "; ".join(f"{key}: {value}" for key, value in self.style.items())

    def to_html(self) -> str:
        attrs: list[tuple[str, str]] = []
        if self.class_list:
            attrs.append(("class", self.class_name))
        attrs.extend(self.attrs.items())
        attrs.extend((_dataset_attr(key), value) for key, value in self.dataset.items())
        if self.style:
            attrs.append(("style", self._style_text()))

        attr_text = "".join(f' {name}="{markupsafe.escape(value)}"' for name, value in attrs)
        if self.tag in _VOID_TAGS:
            return f"<{self.tag}{attr_text}>"

        # style 要素の中身は CSS なのでエスケープしない
        inner = self.text if self.tag == "style" else str(markupsafe.escape(self.text))
        inner += "".join(child.to_html() for child in self.children)
        return f"<{self.tag}{attr_text}>{inner}</{self.tag}>"


class Document:
    """表示面.

    head / body を持ち、要素の生成・検索とスタイルの適用を行います。
    イベント購読数を数えており、リソースリークの確認に使えます。
    """

    def __init__(self, title: str = "") -> None:
        self.title = title
        self.head = Element("head", self)
        self.body = Element("body", self)
        self._active_listeners = 0

    def create_element(self, tag: str, class_name: str | None = None) -> Element:
        element = Element(tag, self)
        if class_name:
            element.class_name = class_name
        return element

    def iter(self) -> Iterator[Element]:
        yield from self.head.iter()
        yield from self.body.iter()

    def get_element_by_id(self, element_id: str) -> Element | None:
        for node in self.iter():
            if node.id == element_id:
                return node
        return None

    def query_selector(self, selector: str) -> Element | None:
        """単純なセレクタ（#id / .class / タグ名）で最初の要素を探す."""
        selector = selector.strip()
        if not selector:
            return None
        if selector.startswith("#"):
            return self.get_element_by_id(selector[1:])
        if selector.startswith("."):
            name = selector[1:]
            return next((node for node in self.iter() if node.has_class(name)), None)
        return next((node for node in self.iter() if node.tag == selector), None)

    def install_style(self, sheet: StyleSheet) -> bool:
        """スタイルシートを head に適用.

        同じ style_id のものが既にあれば何もしません。

        Returns:
            新たに追加した場合は True
        """
        if self.get_element_by_id(sheet.style_id) is not None:
            return False
        style = self.create_element("style")
        style.id = sheet.style_id
        style.text = sheet.css_text
        self.head.append_child(style)
        return True

    @property
    def active_listener_count(self) -> int:
        """現在購読中のイベントハンドラ数"""
        return self._active_listeners

    def _listener_added(self) -> None:
        self._active_listeners += 1

    def _listener_removed(self) -> None:
        self._active_listeners -= 1

    def to_html(self) -> str:
        """HTML 文書として書き出す."""
        head_inner = '<meta charset="utf-8">'
        if self.title:
            head_inner += f"<title>{markupsafe.escape(self.title)}</title>"
        head_inner += "".join(child.to_html() for child in self.head.children)
        body_html = self.body.to_html()
        return f"<!DOCTYPE html>\n<html><head>{head_inner}</head>{body_html}</html>\n"
