#!/usr/bin/env python3
"""今日の概要.

記録のある日付から、今日の記録有無・連続記録日数・直近の空白日を求めます。
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import asdict, dataclass
from datetime import date
from typing import Any

import calendar_heatmap.dates
import calendar_heatmap.normalize

# 概要では "key" フィールドも日付として扱う
_DATE_FIELDS = (*calendar_heatmap.normalize.DATE_FIELDS, "key")


@dataclass(frozen=True)
class DailyOverview:
    """今日の概要"""

    has_entries: bool
    has_today: bool
    streak: int
    last_missing: str | None  # YYYY-MM-DD

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def compute_daily_overview(entries: Iterable[object] | None, today: date) -> DailyOverview:
    """記録から今日の概要を計算.

    Args:
        entries: 記録の列（値は見ず、日付だけを使う）
        today: 今日の日付

    Returns:
        今日の概要
    """
    days: set[date] = set()
    for entry in entries or ():
        day = calendar_heatmap.normalize.resolve_date(entry, _DATE_FIELDS)
        if day is not None:
            days.add(day)

    if not days:
        return DailyOverview(has_entries=False, has_today=False, streak=0, last_missing=None)

    # 今日から遡って記録が続いている日数
    streak = 0
    cursor = today
    while cursor in days:
        streak += 1
        cursor = calendar_heatmap.dates.add_days(cursor, -1)

    # 今日から最古の記録日までで、記録の無い最も新しい日
    earliest = min(days)
    last_missing = None
    cursor = today
    while cursor >= earliest:
        if cursor not in days:
            last_missing = calendar_heatmap.dates.date_key(cursor)
            break
        cursor = calendar_heatmap.dates.add_days(cursor, -1)

    return DailyOverview(
        has_entries=True,
        has_today=today in days,
        streak=streak,
        last_missing=last_missing,
    )
