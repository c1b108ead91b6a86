"""
pytest設定ファイルと共通フィクスチャ

テスト実行時の設定とテスト間で共有するフィクスチャを定義。
"""

import subprocess
import sys
from pathlib import Path
from unittest.mock import Mock

import pytest

# パッケージディレクトリをPythonパスに追加（未インストールでもテスト可能にする）
package_root = Path(__file__).parent.parent / "auto-commit"
sys.path.insert(0, str(package_root))

from auto_commit.git_processor import CommandResult  # noqa: E402

# テスト用のサンプルデータ
SAMPLE_GIT_DIFF = """diff --git a/login.py b/login.py
new file mode 100644
index 0000000..ed708ec
--- /dev/null
+++ b/login.py
@@ -0,0 +1,3 @@
+def login(provider):
+    return provider.authorize()
+
"""

SAMPLE_COMMIT_MESSAGE = "feat: add login\n\nAdds OAuth login flow."


@pytest.fixture
def sample_git_diff():
    """サンプルGit差分データ"""
    return SAMPLE_GIT_DIFF


@pytest.fixture
def sample_commit_message():
    """リモートサービスが返すコミットメッセージ"""
    return SAMPLE_COMMIT_MESSAGE


@pytest.fixture
def mock_repository(sample_git_diff):
    """コミット可能な状態のリポジトリのモック"""
    repository = Mock()
    repository.cwd = None
    repository.git_path = "git"
    repository.ensure_ready.return_value = None
    repository.head_diff.return_value = sample_git_diff
    return repository


@pytest.fixture
def mock_client(sample_commit_message):
    """生成クライアントのモック"""
    client = Mock()
    client.generate.return_value = sample_commit_message
    return client


@pytest.fixture
def commit_success():
    """成功したコミットの結果"""
    return CommandResult(
        args=["git", "commit", "-F", "-"],
        returncode=0,
        stdout="[main 1a2b3c4] feat: add login\n 1 file changed, 3 insertions(+)\n",
    )


@pytest.fixture
def clean_environment(monkeypatch):
    """テスト用にクリーンな環境変数を提供"""
    for var in ("SAI_API_KEY", "SAI_API_URL"):
        monkeypatch.delenv(var, raising=False)


# pytest設定
def pytest_configure(config):
    """pytest設定"""
    config.addinivalue_line(
        "markers", "integration: mark test as requiring a real git binary"
    )


def _git_available():
    try:
        subprocess.run(["git", "--version"], capture_output=True, check=True)
    except (OSError, subprocess.CalledProcessError):
        return False
    return True


class GitRepo:
    """テスト用のGitリポジトリ"""

    def __init__(self, path):
        self.path = path

    def git(self, *args):
        return subprocess.run(
            ["git", *args], cwd=self.path, capture_output=True, text=True, check=True
        ).stdout


@pytest.fixture
def git_repo(tmp_path, monkeypatch):
    """一時的なGitリポジトリを作成"""
    if not _git_available():
        pytest.skip("git is not available")

    global_config = tmp_path / "gitconfig"
    global_config.write_text("")
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(global_config))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Test User")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "test@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Test User")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "test@example.com")

    repo = GitRepo(tmp_path / "repo")
    repo.path.mkdir()
    repo.git("init", "-q")
    (repo.path / "README.md").write_text("hello\n")
    repo.git("add", "README.md")
    repo.git("commit", "-q", "-m", "initial")
    return repo
