"""
エラー定義モジュール

ツール全体で使用する例外クラスを定義。
ライブラリ側のコードは例外を送出するだけで、終了コードへの変換は
main モジュールのみが行う。
"""


class AutoCommitError(Exception):
    """全エラーの基底クラス"""
    pass


class ConfigError(AutoCommitError):
    """設定（認証情報）関連のエラー"""
    pass


class GitError(AutoCommitError):
    """Git処理関連のエラー"""
    pass


class NotARepositoryError(GitError):
    """カレントディレクトリがGitリポジトリではない"""
    pass


class NothingStagedError(GitError):
    """ステージされた変更が存在しない"""
    pass


class GeneratorError(AutoCommitError):
    """リモート生成サービスとの通信エラー"""
    pass


class CommitAbortedError(AutoCommitError):
    """ユーザーがコミットを中止した"""
    pass
