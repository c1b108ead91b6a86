"""
リモート生成サービスクライアント

Git差分をJSONでSAIのテンプレート実行APIへPOSTし、
レスポンス本文をそのままコミットメッセージとして返す。
"""

import locale
import logging
import os
from typing import Any, Dict, Mapping, Optional

import requests

from .errors import GeneratorError

logger = logging.getLogger(__name__)

DEFAULT_API_URL = (
    "https://sai-library.saiapplications.com/api/templates/66b12119075c349831386040/execute"
)
DEFAULT_LANGUAGE = "pt-BR"

# 優先順に参照するロケール環境変数
LOCALE_ENV_VARS = ("LC_ALL", "LC_MESSAGES", "LANG")


def _normalize_locale(value: Optional[str]) -> Optional[str]:
    """`pt_BR.UTF-8@euro` 形式を `pt-BR` 形式に変換（判別不能ならNone）"""
    if not value:
        return None
    tag = value.split("@", 1)[0].split(".", 1)[0].strip()
    if not tag or tag.upper() in ("C", "POSIX"):
        return None
    return tag.replace("_", "-")


def detect_language(environ: Optional[Mapping[str, str]] = None,
                    default: str = DEFAULT_LANGUAGE) -> str:
    """
    システムロケールを検出

    Args:
        environ: 参照する環境変数（省略時は os.environ）
        default: 検出できなかった場合の言語タグ

    Returns:
        `en-US` のような言語タグ
    """
    env = os.environ if environ is None else environ

    for name in LOCALE_ENV_VARS:
        value = env.get(name)
        if value:
            # 最初に見つかった値を採用する（LC_ALL=C なら他は見ない）
            return _normalize_locale(value) or default

    try:
        language, _ = locale.getlocale()
    except ValueError:
        logger.debug("ロケールの取得に失敗", exc_info=True)
        language = None

    return _normalize_locale(language) or default


class SaiGeneratorClient:
    """
    SAIテンプレート実行APIのクライアント

    レスポンスは構造化せず、本文全体をコミットメッセージとして扱う。
    リトライやタイムアウト設定は行わない。
    """

    def __init__(self, api_key: str, api_url: str = DEFAULT_API_URL,
                 session: Optional[requests.Session] = None):
        """
        クライアントを初期化

        Args:
            api_key: `X-Api-Key` ヘッダーに設定するAPIキー
            api_url: POST先のエンドポイント
            session: 使用するHTTPセッション（省略時は新規作成）
        """
        if not api_key:
            raise ValueError("api_key は空にできません")
        self.api_key = api_key
        self.api_url = api_url
        self.session = session or requests.Session()

    def build_headers(self) -> Dict[str, str]:
        return {
            "X-Api-Key": self.api_key,
            "Content-Type": "application/json",
        }

    @staticmethod
    def build_payload(diff: str, language: str) -> Dict[str, Any]:
        """
        リクエスト本文を構築

        diff と language は常に文字列として送信する。
        """
        return {
            "inputs": {
                "diff": diff if diff is not None else "",
                "language": language or DEFAULT_LANGUAGE,
            }
        }

    def generate(self, diff: str, language: str) -> str:
        """
        差分からコミットメッセージを生成

        Args:
            diff: `git diff HEAD` の出力
            language: 生成するメッセージの言語タグ

        Returns:
            レスポンス本文（未加工）

        Raises:
            GeneratorError: 通信失敗、または成功以外のステータスの場合
        """
        payload = self.build_payload(diff, language)
        logger.debug("生成リクエスト送信: url=%s, diff_length=%d, language=%s",
                     self.api_url, len(payload["inputs"]["diff"]), payload["inputs"]["language"])

        try:
            response = self.session.post(
                self.api_url,
                headers=self.build_headers(),
                json=payload,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            logger.debug("生成リクエスト失敗", exc_info=True)
            raise GeneratorError(f"Request failed: {e}") from e

        message = response.text
        logger.debug("生成レスポンス受信: status=%s, length=%d", response.status_code, len(message))
        return message
