#!/usr/bin/env python3
"""観測データの正規化.

任意の観測レコード列を「日付キー → 値」の dict にまとめます。
不正なレコードは一件ずつ黙って捨て、バッチ全体を失敗させることはありません。
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping
from datetime import date

import calendar_heatmap.dates

# 日付・値を探すフィールド（先に見つかったものを使う）
DATE_FIELDS = ("date", "day", "dateString", "date_string")
VALUE_FIELDS = ("value", "count")

DayValueMap = dict[str, int | float]


def _get_field(record: object, name: str) -> object:
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def resolve_date(record: object, fields: tuple[str, ...] = DATE_FIELDS) -> date | None:
    """レコードから暦日を取り出す.

    fields のうち最初に存在する空でないフィールドを使い、どれも無ければ
    レコード自身が日付（または日付文字列）であるかを確認します。
    """
    if record is None:
        return None

    raw: object = None
    if isinstance(record, (str, date)):
        raw = record
    else:
        for name in fields:
            raw = _get_field(record, name)
            if raw is not None and raw != "":
                break

    return calendar_heatmap.dates.parse_date(raw)


def resolve_value(record: object) -> int | float | None:
    """レコードから有限の数値を取り出す.

    bool は数値として扱いません。数値文字列は受け付けます。

    Returns:
        数値。無い・有限でない場合は None。
    """
    if record is None or isinstance(record, (str, date)):
        return None

    raw: object = None
    for name in VALUE_FIELDS:
        raw = _get_field(record, name)
        if raw is not None:
            break

    if raw is None or isinstance(raw, bool):
        return None

    value: int | float
    if isinstance(raw, (int, float)):
        value = raw
    elif isinstance(raw, str):
        try:
            value = float(raw)
        except ValueError:
            return None
        if value.is_integer():
            value = int(value)
    else:
        return None

    if not math.isfinite(value):
        return None
    return value


def normalize_data(records: Iterable[object] | None) -> DayValueMap:
    """観測レコード列を日付キー → 値の dict に変換.

    同じ日付のレコードが複数ある場合は入力順で最後のものが勝ちます。

    Args:
        records: 観測レコードの列（dict または属性を持つオブジェクト）

    Returns:
        日付キー (YYYY-MM-DD) → 値
    """
    result: DayValueMap = {}
    if records is None or isinstance(records, (str, bytes, Mapping)):
        return result

    try:
        items = list(records)
    except TypeError:
        return result

    dropped = 0
    for record in items:
        day = resolve_date(record)
        value = resolve_value(record)
        if day is None or value is None:
            dropped += 1
            continue
        result[calendar_heatmap.dates.date_key(day)] = value

    if dropped:
        logging.debug("Dropped %d invalid observation(s)", dropped)

    return result
