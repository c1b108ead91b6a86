"""
Git操作モジュール

subprocess経由でgitコマンドを実行し、リポジトリの確認と差分の取得を行う。
各コマンドの結果は CommandResult として返し、プロセス終了は行わない。
"""

import logging
import shutil
import subprocess
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .errors import GitError, NotARepositoryError, NothingStagedError

logger = logging.getLogger(__name__)


class CommandFailure(Enum):
    """コマンド失敗の種類"""
    SPAWN_FAILED = "spawn_failed"
    NON_ZERO_EXIT = "non_zero_exit"


@dataclass
class CommandResult:
    """外部コマンドの実行結果"""
    args: List[str]
    returncode: Optional[int]
    stdout: str = ""
    stderr: str = ""
    failure: Optional[CommandFailure] = None
    error: Optional[str] = field(default=None, repr=False)

    @property
    def ok(self) -> bool:
        return self.failure is None

    def describe(self) -> str:
        """ログ・エラーメッセージ用の要約"""
        command = " ".join(self.args)
        if self.failure is CommandFailure.SPAWN_FAILED:
            return f"`{command}` could not be started: {self.error}"
        if self.failure is CommandFailure.NON_ZERO_EXIT:
            detail = self.stderr.strip() or self.stdout.strip() or "no output"
            return f"`{command}` exited with code {self.returncode}: {detail}"
        return f"`{command}` succeeded"


def resolve_git(git_path: Optional[str] = None) -> str:
    """gitの実行パスを解決（見つからなければ 'git' のまま返す）"""
    if git_path:
        return git_path
    return shutil.which("git") or "git"


def run_git(args: List[str], cwd: Optional[str] = None,
            git_path: Optional[str] = None) -> CommandResult:
    """
    gitコマンドを同期実行

    Args:
        args: git以降の引数
        cwd: 実行ディレクトリ
        git_path: gitの実行パス

    Returns:
        実行結果（プロセスの失敗は例外ではなく failure で表す）
    """
    cmd = [resolve_git(git_path)] + list(args)
    logger.debug("gitコマンド実行: %s", " ".join(cmd))

    try:
        result = subprocess.run(
            cmd,
            cwd=cwd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            shell=False,
            check=False,
        )
    except OSError as e:
        logger.debug("gitコマンドを起動できません: %s", e)
        return CommandResult(
            args=cmd,
            returncode=None,
            failure=CommandFailure.SPAWN_FAILED,
            error=str(e),
        )

    failure = CommandFailure.NON_ZERO_EXIT if result.returncode != 0 else None
    return CommandResult(
        args=cmd,
        returncode=result.returncode,
        stdout=result.stdout or "",
        stderr=result.stderr or "",
        failure=failure,
    )


class GitRepository:
    """
    カレントディレクトリのGitリポジトリ

    リポジトリ判定、ステージ済み差分、作業ツリー差分の3つの問い合わせを提供する。
    """

    def __init__(self, cwd: Optional[str] = None, git_path: Optional[str] = None):
        """
        Args:
            cwd: 対象ディレクトリ（省略時はカレントディレクトリ）
            git_path: gitの実行パス
        """
        self.cwd = cwd
        self.git_path = resolve_git(git_path)

    def _run(self, *args: str) -> CommandResult:
        return run_git(list(args), cwd=self.cwd, git_path=self.git_path)

    def _require_success(self, result: CommandResult) -> CommandResult:
        if not result.ok:
            logger.debug("gitコマンド失敗: %s", result.describe())
            raise GitError(result.describe())
        return result

    def is_inside_work_tree(self) -> bool:
        """
        作業ツリー内かどうかを確認

        リポジトリ外ではgitが非ゼロで終了するため、その場合もFalseを返す。

        Raises:
            GitError: gitを起動できない場合
        """
        result = self._run("rev-parse", "--is-inside-work-tree")
        if result.failure is CommandFailure.SPAWN_FAILED:
            raise GitError(result.describe())
        inside = result.stdout.strip() == "true"
        logger.debug("作業ツリー判定: %s", inside)
        return inside

    def staged_diff(self) -> str:
        """ステージ済みの差分（`git diff --staged`）を取得"""
        diff = self._require_success(self._run("diff", "--staged")).stdout
        logger.debug("ステージ済み差分: %d文字", len(diff))
        return diff

    def has_head(self) -> bool:
        """
        HEADが存在するか（最初のコミット前ではないか）を確認

        Raises:
            GitError: gitを起動できない場合
        """
        result = self._run("rev-parse", "--verify", "--quiet", "HEAD")
        if result.failure is CommandFailure.SPAWN_FAILED:
            raise GitError(result.describe())
        return result.ok

    def head_diff(self) -> str:
        """
        最新コミットと作業ツリーの差分（`git diff HEAD`）を取得

        最初のコミット前はHEADと比較できないため、ステージ済み差分を返す。
        """
        if not self.has_head():
            logger.debug("HEADが未作成のため、ステージ済み差分を使用")
            return self.staged_diff()
        diff = self._require_success(self._run("diff", "HEAD")).stdout
        logger.debug("作業ツリー差分: %d文字", len(diff))
        return diff

    def ensure_ready(self) -> None:
        """
        コミット可能な状態か確認

        Raises:
            NotARepositoryError: リポジトリ外の場合
            NothingStagedError: ステージ済みの変更がない場合
        """
        if not self.is_inside_work_tree():
            raise NotARepositoryError(
                "It looks like you are not in a git repository.\n"
                "Please run this command from the root of a git repository, "
                "or initialize one using `git init`."
            )
        if not self.staged_diff():
            raise NothingStagedError(
                "There are no staged files to commit.\n"
                "Try running `git add` to stage some files."
            )
