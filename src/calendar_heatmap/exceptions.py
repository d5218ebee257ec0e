#!/usr/bin/env python3
"""Calendar Heatmap 例外階層.

アプリケーション固有の例外クラスを定義します。
データは寛容に（不正なレコードは黙って捨てる）、設定は厳密に扱うため、
例外は設定・表示面・ライフサイクルの問題に対してのみ送出されます。
"""

from __future__ import annotations


class CalendarHeatmapError(Exception):
    """Calendar Heatmap 基底例外.

    アプリケーション固有の全ての例外の基底クラス。
    """


class ContainerNotFoundError(CalendarHeatmapError):
    """コンテナ未検出エラー.

    セレクタに一致する要素が存在しない場合。
    """


class DisplayEnvironmentError(CalendarHeatmapError):
    """表示環境エラー.

    描画先となる表示面（Document）が利用できない場合。
    """


class UnsupportedViewError(CalendarHeatmapError):
    """未対応ビューエラー.

    view に year / month / week / recent 以外が指定された場合。
    """


class InvalidRangeError(CalendarHeatmapError):
    """表示範囲エラー.

    startDate が日付として解釈できない場合や、
    year / month / weekStart などの数値パラメータが範囲計算に使えない場合。
    """


class HeatmapDestroyedError(CalendarHeatmapError):
    """破棄済みインスタンスへの操作.

    destroy() 後に描画や更新を行おうとした場合。
    """


class ConfigError(CalendarHeatmapError):
    """設定エラー.

    設定ファイルやレコードファイルの読み込みに失敗した場合。
    """


class AlreadyCheckedInError(CalendarHeatmapError):
    """記録済みエラー.

    今日の記録が既にあるのに、もう一度記録しようとした場合。
    """
