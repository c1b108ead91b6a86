"""
進捗表示モジュール

リモート生成の待ち時間にスピナーを表示する。
ログ出力が無効（サイレント）の場合のみ使用し、表示は純粋に装飾目的。
"""

import logging
import random
from typing import Any, List, Optional

from rich.console import Console
from rich.spinner import SPINNERS
from rich.status import Status

logger = logging.getLogger(__name__)

SPINNER_PALETTE = (
    "earth", "aesthetic", "hearts", "boxBounce", "boxBounce2", "bouncingBar",
    "christmas", "clock", "fingerDance", "fistBump", "flip", "layer", "line",
    "material", "mindblown", "monkey", "noise", "point", "pong", "runner",
    "soccerHeader", "speaker", "squareCorners", "triangle",
)
FALLBACK_SPINNER = "dots"


def available_spinners() -> List[str]:
    """インストール済みのrichが提供するスピナーに絞り込んだパレット"""
    names = [name for name in SPINNER_PALETTE if name in SPINNERS]
    return names or [FALLBACK_SPINNER]


def should_show_progress(options: Any) -> bool:
    """ドライランでなく、ログがサイレントの場合のみ表示する"""
    return not options.dry_run and options.is_silent


class ProgressIndicator:
    """
    スピナー表示

    start() でランダムに選んだスピナーを開始し、stop() で完了メッセージに置き換える。
    stop() は一度だけ有効で、以降の呼び出しは何もしない。
    """

    def __init__(self, console: Optional[Console] = None, rng: Optional[random.Random] = None):
        self.console = console or Console(stderr=True)
        self.rng = rng or random.Random()
        self.spinner_name: Optional[str] = None
        self._status: Optional[Status] = None
        self._stopped = False

    @property
    def running(self) -> bool:
        return self._status is not None and not self._stopped

    def start(self, text: str = "Analyzing Codebase...") -> None:
        if self._status is not None:
            return
        self.spinner_name = self.rng.choice(available_spinners())
        logger.debug("スピナー開始: %s", self.spinner_name)
        self._status = Status(text, console=self.console, spinner=self.spinner_name)
        self._status.start()

    def stop(self, message: Optional[str] = "Finished Analyzing!") -> None:
        """
        スピナーを停止

        Args:
            message: 置き換えて表示する完了メッセージ（Noneなら表示しない）
        """
        if self._status is None or self._stopped:
            return
        self._stopped = True
        self._status.stop()
        if message:
            self.console.print(message)
