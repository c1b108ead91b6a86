"""
コミット作成モジュール

`git commit -F -` を起動し、生成されたメッセージを標準入力へ流し込む。
書き込みは別スレッドで行い、呼び出し側は出力の読み取りと終了待ちを並行して進める。
"""

import logging
import subprocess
import threading
from typing import IO, List, Optional

from .errors import GitError
from .git_processor import CommandFailure, CommandResult, resolve_git

logger = logging.getLogger(__name__)


def build_commit_args(review: bool = False, git_path: str = "git") -> List[str]:
    """`git commit [-e] -F -` の引数を構築"""
    args = [git_path, "commit"]
    if review:
        args.append("-e")
    args.extend(["-F", "-"])
    return args


def _feed_stdin(stream: IO[bytes], data: bytes, errors: List[BaseException]) -> None:
    """メッセージを書き込んで標準入力を閉じる（ライタースレッド本体）"""
    try:
        stream.write(data)
        stream.flush()
    except OSError as e:
        errors.append(e)
    finally:
        try:
            stream.close()
        except OSError as e:
            errors.append(e)


def write_commit(message: str, review: bool = False, cwd: Optional[str] = None,
                 git_path: Optional[str] = None) -> CommandResult:
    """
    生成されたメッセージでコミットを作成

    Args:
        message: コミットメッセージ
        review: Trueの場合、確定前にエディタで編集する
        cwd: 実行ディレクトリ
        git_path: gitの実行パス

    Returns:
        コミットコマンドの実行結果（非ゼロ終了は failure で表す）

    Raises:
        GitError: コミットコマンドの起動、またはメッセージの書き込みに失敗した場合
    """
    args = build_commit_args(review, resolve_git(git_path))
    # エディタが端末を使えるよう、レビュー時は標準出力を取り込まない
    capture = None if review else subprocess.PIPE
    logger.debug("コミット実行: %s", " ".join(args))

    try:
        process = subprocess.Popen(
            args,
            cwd=cwd,
            stdin=subprocess.PIPE,
            stdout=capture,
            shell=False,
        )
    except OSError as e:
        raise GitError(f"There was an error when creating the commit: {e}") from e

    write_errors: List[BaseException] = []
    writer = threading.Thread(
        target=_feed_stdin,
        args=(process.stdin, message.encode("utf-8"), write_errors),
        name="commit-message-writer",
        daemon=True,
    )
    writer.start()

    stdout = b""
    if process.stdout is not None:
        stdout = process.stdout.read()
        process.stdout.close()
    returncode = process.wait()
    writer.join()

    if write_errors and returncode == 0:
        raise GitError(f"Failed to write the commit message to git: {write_errors[0]}")
    if write_errors:
        # gitが入力を読む前に終了した場合は、終了コードと出力を優先する
        logger.debug("メッセージ書き込み失敗（gitは終了済み）: %s", write_errors[0])

    result = CommandResult(
        args=args,
        returncode=returncode,
        stdout=stdout.decode("utf-8", errors="replace"),
        failure=CommandFailure.NON_ZERO_EXIT if returncode != 0 else None,
    )
    logger.debug("コミット終了: exit_code=%d", returncode)
    return result
