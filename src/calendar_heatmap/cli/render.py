#!/usr/bin/env python3
"""
記録ファイルからカレンダーヒートマップの HTML を生成します。

Usage:
  calendar-heatmap-render [-c CONFIG] [-i RECORDS] [-o OUTPUT] [-v VIEW] [-y YEAR] [-D]

Options:
  -c CONFIG         : CONFIG を設定ファイルとして読み込んで実行します。[default: config.yaml]
  -i RECORDS        : 記録ファイル（JSON）を指定します。省略時は設定ファイルの値を使います。
  -o OUTPUT         : 出力する HTML ファイルを指定します。[default: heatmap.html]
  -v VIEW           : ビュー種別（year / month / week / recent）を指定します。
  -y YEAR           : year / month ビューの年を指定します。
  -D                : デバッグモードで動作します。
"""

from __future__ import annotations

import logging
import pathlib
from datetime import date
from typing import Any

import my_lib.time

import calendar_heatmap.config
import calendar_heatmap.engine
import calendar_heatmap.overview
import calendar_heatmap.records


def build_options(
    config: calendar_heatmap.config.AppConfig,
    view: str | None = None,
    year: int | None = None,
) -> dict[str, Any]:
    """設定ファイルの既定値にコマンドライン指定を重ねる."""
    options = config.heatmap.to_options()
    if view is not None:
        options["view"] = view
    if year is not None:
        options["year"] = year
    return options


def execute(
    config: calendar_heatmap.config.AppConfig,
    output: pathlib.Path,
    *,
    records_file: pathlib.Path | None = None,
    view: str | None = None,
    year: int | None = None,
    today: date | None = None,
) -> calendar_heatmap.overview.DailyOverview:
    """HTML を生成してファイルに書き出す.

    Returns:
        記録から求めた今日の概要
    """
    if today is None:
        today = my_lib.time.now().date()

    records = calendar_heatmap.records.load(records_file or config.data.records)
    options = build_options(config, view, year)

    html = calendar_heatmap.engine.render_html(records, options, today)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(html, encoding="utf-8")
    logging.info("Wrote heatmap to %s", output)

    overview = calendar_heatmap.overview.compute_daily_overview(records, today)
    logging.info(
        "Today: %s, streak: %d day(s), last missing: %s",
        "checked in" if overview.has_today else "missed",
        overview.streak,
        overview.last_missing or "-",
    )
    return overview


def main() -> None:
    """Console script entry point."""
    import docopt
    import my_lib.logger

    assert __doc__ is not None  # noqa: S101
    args = docopt.docopt(__doc__)

    config_file = pathlib.Path(args["-c"])
    records_file = pathlib.Path(args["-i"]) if args["-i"] else None
    output = pathlib.Path(args["-o"])
    view = args["-v"]
    year = int(args["-y"]) if args["-y"] else None
    debug_mode = args["-D"]

    my_lib.logger.init("calendar-heatmap-render", level=logging.DEBUG if debug_mode else logging.INFO)

    logging.info("Using config: %s", config_file)

    config = calendar_heatmap.config.load(config_file)
    execute(config, output, records_file=records_file, view=view, year=year)


if __name__ == "__main__":
    main()
