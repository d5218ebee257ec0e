#!/usr/bin/env python3
"""記録ファイルの読み書き.

観測レコード（{"date": "YYYY-MM-DD", "value": N} など）の JSON 配列を読み込みます。
個々のレコードの検証は正規化時に行うため、読み込みでは配列であることだけを確認します。
書き込みは今日の記録（チェックイン）の追加だけで、1 日 1 件に限ります。
"""

from __future__ import annotations

import json
import logging
import pathlib
import threading
from collections.abc import Iterable
from datetime import date
from typing import Any

import calendar_heatmap.dates
import calendar_heatmap.normalize
from calendar_heatmap.exceptions import AlreadyCheckedInError, ConfigError

# 読み込みから書き込みまでを直列化する
_write_lock = threading.Lock()


def load(path: pathlib.Path) -> list[Any]:
    """記録ファイルを読み込む.

    Args:
        path: JSON ファイルのパス

    Returns:
        レコードのリスト。ファイルが無い場合は空リスト。

    Raises:
        ConfigError: JSON として読めない、または配列でない場合
    """
    if not path.exists():
        logging.warning("Records file not found: %s", path)
        return []

    try:
        with path.open(encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        msg = f"記録ファイルの読み込みに失敗しました: {path}"
        raise ConfigError(msg) from e

    if not isinstance(data, list):
        msg = f"記録ファイルは配列である必要があります: {path}"
        raise ConfigError(msg)

    logging.debug("Loaded %d record(s) from %s", len(data), path)
    return data


def has_entry(records: Iterable[object] | None, day: date) -> bool:
    """day の記録があるか（値は見ない）."""
    for record in records or ():
        if calendar_heatmap.normalize.resolve_date(record) == day:
            return True
    return False


def _save(path: pathlib.Path, records: list[Any]) -> None:
    """記録ファイルを保存（アトミック書き込み）."""
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tmp_path.open("w", encoding="utf-8") as f:
            json.dump(records, f, ensure_ascii=False, indent=4)
        tmp_path.replace(path)
    except OSError as e:
        msg = f"記録ファイルの保存に失敗しました: {path}"
        raise ConfigError(msg) from e


def append_today(path: pathlib.Path, value: int, today: date) -> dict[str, Any]:
    """今日の記録を末尾に追加する.

    Args:
        path: JSON ファイルのパス（無ければ作成）
        value: 記録する値
        today: 今日の日付

    Returns:
        追加したレコード

    Raises:
        AlreadyCheckedInError: 今日の記録が既にある場合
        ConfigError: 記録ファイルの読み書きに失敗した場合
    """
    with _write_lock:
        records = load(path)
        if has_entry(records, today):
            msg = f"{calendar_heatmap.dates.date_key(today)} は記録済みです"
            raise AlreadyCheckedInError(msg)

        entry = {"date": calendar_heatmap.dates.date_key(today), "value": value}
        records.append(entry)
        _save(path, records)

    logging.info("Checked in %s: %s", entry["date"], value)
    return entry
