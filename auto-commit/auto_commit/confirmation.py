"""
確認プロンプトモジュール

提案されたコミットメッセージを表示し、端末でyes/noを問い合わせる。
"""

from typing import Optional

from rich.console import Console
from rich.prompt import Confirm, InvalidResponse

from .errors import CommitAbortedError

SEPARATOR = "-" * 30

YES_ANSWERS = ("y", "yes")
NO_ANSWERS = ("n", "no")


def format_proposal(message: str) -> str:
    """提案メッセージを区切り線で囲む"""
    return f"Proposed Commit:\n{SEPARATOR}\n{message}\n{SEPARATOR}"


class YesNoConfirm(Confirm):
    """y/yes/n/no を大文字小文字を問わず受け付ける確認プロンプト"""

    validate_error_message = "[prompt.invalid]Please answer yes or no"

    def process_response(self, value: str) -> bool:
        answer = value.strip().lower()
        if answer in YES_ANSWERS:
            return True
        if answer in NO_ANSWERS:
            return False
        raise InvalidResponse(self.validate_error_message)


def ask_to_continue(console: Optional[Console] = None) -> bool:
    """
    コミットを続行するか問い合わせる

    空入力はyesとして扱い、解釈できない入力には再度問い合わせる。

    Returns:
        続行する場合True

    Raises:
        CommitAbortedError: 標準入力が終端に達して応答を読めない場合
    """
    try:
        return YesNoConfirm.ask(
            "Do you want to continue? (Y/n)",
            console=console,
            default=True,
            show_default=False,
            show_choices=False,
        )
    except EOFError as e:
        raise CommitAbortedError("Couldn't ask question.") from e
