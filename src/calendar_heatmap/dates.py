#!/usr/bin/env python3
"""日付演算.

週の開始曜日を考慮した週頭・週末の計算と、日付キーの変換を提供します。
計算はすべて暦日単位（datetime.date）で行うため、夏時間の切り替えで
日付が重複したり抜けたりすることはありません。
"""

from __future__ import annotations

from datetime import date, datetime, timedelta


def to_date(day: date | datetime) -> date:
    """datetime を暦日に切り詰める（時刻は 00:00:00 相当）."""
    if isinstance(day, datetime):
        return day.date()
    return day


def add_days(day: date | datetime, amount: int) -> date:
    """amount 日ずらした日付を返す（負の値も可）."""
    return to_date(day) + timedelta(days=amount)


def day_of_week(day: date | datetime) -> int:
    """曜日インデックスを返す.

    Returns:
        0 (日曜) 〜 6 (土曜)
    """
    # date.weekday() は月曜始まり (0=月) なので日曜始まりに変換する
    return (to_date(day).weekday() + 1) % 7


def start_of_week(day: date | datetime, week_start: int) -> date:
    """day を含む週の最初の日を返す.

    Args:
        day: 基準日
        week_start: 週の開始曜日 (0=日曜 〜 6=土曜)

    Returns:
        曜日インデックスが week_start となる週頭の日付
    """
    diff = (day_of_week(day) - week_start + 7) % 7
    return add_days(day, -diff)


def end_of_week(day: date | datetime, week_start: int) -> date:
    """day を含む週の最後の日を返す."""
    return add_days(start_of_week(day, week_start), 6)


def date_key(day: date | datetime) -> str:
    """YYYY-MM-DD 形式の日付キーを返す."""
    return to_date(day).isoformat()


def parse_date(raw: object) -> date | None:
    """日付らしき値を暦日に変換.

    date / datetime はそのまま（datetime は自身の壁時計上の日付）、
    文字列は ISO 形式の日付または日時として解釈します。

    Returns:
        変換した日付。解釈できない場合は None。
    """
    if isinstance(raw, (date, datetime)):
        return to_date(raw)
    if not isinstance(raw, str):
        return None

    text = raw.strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None
