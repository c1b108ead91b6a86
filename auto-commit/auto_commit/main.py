#!/usr/bin/env python3
"""
Auto Commit - メインエントリーポイント

ステージされた変更を確認し、作業ツリーの差分をリモート生成サービスへ送信して
生成されたメッセージでコミットを作成する。

使用方法:
    auto-commit [-v|-vv|-q] [--dry-run] [-r|--review] [-f|--force]

環境変数:
    SAI_API_KEY  リモート生成サービスのAPIキー（必須）
    SAI_API_URL  エンドポイントの上書き（任意）
"""

import sys
import argparse
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

import colorlog

from auto_commit import __version__, __description__
from auto_commit.commit_writer import write_commit
from auto_commit.config import load_settings
from auto_commit.confirmation import ask_to_continue, format_proposal
from auto_commit.errors import AutoCommitError, CommitAbortedError, GitError
from auto_commit.generator_client import SaiGeneratorClient, detect_language
from auto_commit.git_processor import CommandResult, GitRepository
from auto_commit.progress import ProgressIndicator, should_show_progress

logger = logging.getLogger(__name__)

# -v/-q を加減するログレベルの並び（既定はINFO）
LOG_LEVELS = (logging.ERROR, logging.WARNING, logging.INFO, logging.DEBUG)
DEFAULT_VERBOSITY = 2


@dataclass(frozen=True)
class Options:
    """コマンドラインオプション"""
    dry_run: bool = False
    review: bool = False
    force: bool = False
    verbosity: int = DEFAULT_VERBOSITY

    @property
    def is_silent(self) -> bool:
        return self.verbosity < 0

    @property
    def log_level(self) -> Optional[int]:
        """ログレベル（サイレントの場合None、トレース相当はDEBUG）"""
        if self.is_silent:
            return None
        return LOG_LEVELS[min(self.verbosity, len(LOG_LEVELS) - 1)]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="auto-commit",
        description=__description__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )

    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="More output per occurrence",
    )

    parser.add_argument(
        "-q", "--quiet",
        action="count",
        default=0,
        help="Less output per occurrence",
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Output the generated message, but don't create a commit.",
    )

    parser.add_argument(
        "-r", "--review",
        action="store_true",
        help="Edit the generated commit message before committing.",
    )

    parser.add_argument(
        "-f", "--force",
        action="store_true",
        help="Don't ask for confirmation before committing.",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser


def parse_arguments(argv: Optional[List[str]] = None) -> Options:
    """
    コマンドライン引数を解析

    Args:
        argv: 引数リスト（省略時は sys.argv[1:]）

    Returns:
        解析されたオプション
    """
    args = build_parser().parse_args(argv)
    return Options(
        dry_run=args.dry_run,
        review=args.review,
        force=args.force,
        verbosity=DEFAULT_VERBOSITY + args.verbose - args.quiet,
    )


def setup_logging(level: Optional[int]) -> None:
    """
    ロギング設定を初期化

    Args:
        level: ログレベル（Noneの場合は全てのログを抑制）
    """
    handler = colorlog.StreamHandler(sys.stderr)
    handler.setFormatter(colorlog.ColoredFormatter(
        "%(log_color)s%(levelname)-8s%(reset)s %(message)s",
        log_colors={
            "DEBUG": "cyan",
            "INFO": "green",
            "WARNING": "yellow",
            "ERROR": "red",
            "CRITICAL": "red,bg_white",
        },
    ))
    logging.basicConfig(
        level=logging.CRITICAL + 1 if level is None else level,
        handlers=[handler],
        force=True,
    )


def run(options: Options,
        repository: GitRepository,
        client: SaiGeneratorClient,
        ask: Callable[[], bool] = ask_to_continue,
        commit: Callable[..., CommandResult] = write_commit,
        progress: Optional[ProgressIndicator] = None) -> int:
    """
    コミットメッセージの生成からコミット作成までを実行

    Args:
        options: コマンドラインオプション
        repository: 対象リポジトリ
        client: リモート生成クライアント
        ask: 確認プロンプト
        commit: コミット作成関数
        progress: 進捗表示（Noneの場合は表示しない）

    Returns:
        終了コード 0

    Raises:
        AutoCommitError: 処理を継続できない場合
    """
    repository.ensure_ready()
    diff = repository.head_diff()

    if not options.dry_run:
        logger.info("Loading Data...")

    language = detect_language()
    logger.debug("検出した言語: %s", language)

    commit_msg: Optional[str] = None
    if progress is not None:
        progress.start()
    try:
        commit_msg = client.generate(diff, language)
    finally:
        if progress is not None:
            # 失敗時は完了メッセージを出さずに停止
            progress.stop("Finished Analyzing!" if commit_msg is not None else None)

    if options.dry_run:
        print(commit_msg)
        return 0

    if options.force:
        logger.info(format_proposal(commit_msg))
    else:
        print(format_proposal(commit_msg))
        if not ask():
            raise CommitAbortedError("Commit aborted by user.")
        logger.info("Committing Message...")

    result = commit(commit_msg, review=options.review, cwd=repository.cwd,
                    git_path=repository.git_path)
    if result.stdout:
        logger.info(result.stdout.rstrip("\n"))
    if not result.ok:
        raise GitError(f"There was an error when creating the commit: {result.describe()}")

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    メイン処理

    Returns:
        終了コード (0: 成功, 1: エラー, 130: 中断)
    """
    options = parse_arguments(argv)
    setup_logging(options.log_level)

    try:
        settings = load_settings()
        repository = GitRepository()
        client = SaiGeneratorClient(settings.api_key, settings.api_url)
        progress = ProgressIndicator() if should_show_progress(options) else None
        return run(options, repository, client,
                   ask=ask_to_continue, commit=write_commit, progress=progress)

    except AutoCommitError as e:
        logger.error("%s", e)
        return 1

    except KeyboardInterrupt:
        logger.error("Operation interrupted")
        return 130


if __name__ == "__main__":
    sys.exit(main())
