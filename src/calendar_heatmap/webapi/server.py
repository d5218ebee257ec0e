#!/usr/bin/env python3
"""
カレンダーヒートマップの Web API サーバー.

Flask アプリケーションの作成と、バックグラウンドスレッドでの起動・停止を提供します。
起動コマンドは calendar_heatmap.cli.webui です。
"""

import logging
import threading
import urllib.parse
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date

import flask
import flask.typing
import flask_cors
import werkzeug.exceptions
import werkzeug.serving

import calendar_heatmap.config

URL_PREFIX = "/heatmap"


def _get_cors_origins(external_url: str | None) -> list[str] | str:
    """external_url から CORS 許可オリジンを抽出.

    Args:
        external_url: アプリケーションの外部 URL（例: https://example.com/heatmap/）

    Returns:
        CORS 許可オリジンのリスト、または "*"（全許可）
    """
    if not external_url:
        return "*"

    parsed = urllib.parse.urlparse(external_url)
    if not parsed.scheme or not parsed.netloc:
        logging.warning("Invalid external_url format: %s, allowing all origins", external_url)
        return "*"

    origin = f"{parsed.scheme}://{parsed.netloc}"
    logging.info("CORS origin restricted to: %s", origin)
    return [origin]


@dataclass
class ServerHandle:
    """サーバーハンドル."""

    server: werkzeug.serving.BaseWSGIServer
    thread: threading.Thread


def create_app(
    app_config: calendar_heatmap.config.AppConfig,
    clock: Callable[[], date] | None = None,
) -> flask.Flask:
    """Flask アプリケーションを作成.

    Args:
        app_config: アプリケーション設定
        clock: 今日の日付を返す関数（省略時は現在時刻から求める）
    """
    import calendar_heatmap.webapi.page

    # NOTE: アクセスログは無効にする
    logging.getLogger("werkzeug").setLevel(logging.ERROR)

    app = flask.Flask("calendar_heatmap_webui")
    app.config["app_config"] = app_config
    app.config["clock"] = clock

    flask_cors.CORS(app, origins=_get_cors_origins(app_config.webapp.external_url))

    app.json.compat = True  # type: ignore[attr-defined]

    @app.after_request
    def add_cache_control_headers(response: flask.Response) -> flask.Response:
        """API レスポンスはキャッシュさせない（記録は随時更新されるため）."""
        if flask.request.path.startswith(f"{URL_PREFIX}/api/"):
            response.headers["Cache-Control"] = "no-store"
        return response

    app.register_blueprint(calendar_heatmap.webapi.page.blueprint, url_prefix=URL_PREFIX)

    @app.errorhandler(500)
    def handle_internal_error(error: Exception) -> flask.typing.ResponseReturnValue:
        """Handle internal server errors."""
        logging.exception("Internal server error: %s", error)
        return flask.jsonify({"error": "Internal Server Error"}), 500

    @app.errorhandler(Exception)
    def handle_exception(error: Exception) -> flask.typing.ResponseReturnValue:
        """Handle uncaught exceptions."""
        # HTTPException はそのまま処理（Response に変換して返す）
        if isinstance(error, werkzeug.exceptions.HTTPException):
            return error.get_response()
        logging.exception("Unhandled exception: %s", error)
        return flask.jsonify({"error": "Internal Server Error"}), 500

    return app


def start(port: int, app_config: calendar_heatmap.config.AppConfig) -> ServerHandle:
    """サーバーを開始.

    Args:
        port: サーバーのポート番号
        app_config: アプリケーション設定
    """
    server = werkzeug.serving.make_server(
        "0.0.0.0",  # noqa: S104
        port,
        create_app(app_config),
        threaded=True,
    )
    thread = threading.Thread(target=server.serve_forever, daemon=True)

    logging.info("Start webui server on port %d", port)

    thread.start()

    return ServerHandle(server=server, thread=thread)


def term(handle: ServerHandle) -> None:
    """サーバーを停止."""
    logging.info("Stop webui server")

    handle.server.shutdown()
    handle.server.server_close()

    handle.thread.join(timeout=10)
    if handle.thread.is_alive():
        logging.error("Server thread did not stop within timeout")
    else:
        logging.info("Server thread stopped successfully")
