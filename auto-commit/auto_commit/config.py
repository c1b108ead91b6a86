"""
設定管理モジュール

環境変数から認証情報とエンドポイントを読み込む。
設定ファイルは使用せず、プロセス起動時に一度だけ読み込んだ値を
各コンポーネントへ明示的に渡す。
"""

import os
import logging
from dataclasses import dataclass
from typing import Mapping, Optional

from .errors import ConfigError
from .generator_client import DEFAULT_API_URL

logger = logging.getLogger(__name__)

API_KEY_ENV = "SAI_API_KEY"
API_URL_ENV = "SAI_API_URL"


@dataclass(frozen=True)
class Settings:
    """実行時設定"""
    api_key: str
    api_url: str = DEFAULT_API_URL

    def __repr__(self) -> str:
        # APIキーはログに出さない
        return f"Settings(api_key='***', api_url={self.api_url!r})"


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    環境変数から設定を読み込み

    Args:
        environ: 参照する環境変数（省略時は os.environ）

    Returns:
        読み込まれた設定

    Raises:
        ConfigError: APIキーが設定されていない場合
    """
    env = os.environ if environ is None else environ

    api_key = (env.get(API_KEY_ENV) or "").strip()
    if not api_key:
        raise ConfigError(f"Please set the {API_KEY_ENV} environment variable.")

    api_url = (env.get(API_URL_ENV) or "").strip() or DEFAULT_API_URL
    if api_url != DEFAULT_API_URL:
        logger.debug("エンドポイントを上書き: %s", api_url)

    return Settings(api_key=api_key, api_url=api_url)
