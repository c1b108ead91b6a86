"""
コミット作成のユニットテスト

`git commit -F -` への標準入力の書き込みと終了待ちをテスト。
"""

import io
import subprocess
from unittest.mock import Mock, patch

import pytest

from auto_commit.commit_writer import build_commit_args, write_commit
from auto_commit.errors import GitError
from auto_commit.git_processor import CommandFailure


class RecordingStdin(io.BytesIO):
    """閉じた後も書き込み内容を参照できる標準入力"""

    def close(self):
        self.written = self.getvalue()
        self.was_closed = True
        super().close()


def make_process(stdout=b"", returncode=0, stdin=None):
    process = Mock()
    process.stdin = stdin if stdin is not None else RecordingStdin()
    process.stdout = io.BytesIO(stdout)
    process.wait.return_value = returncode
    return process


class TestBuildCommitArgs:
    """build_commit_argsのテストクラス"""

    def test_default(self):
        assert build_commit_args() == ["git", "commit", "-F", "-"]

    def test_review(self):
        assert build_commit_args(review=True, git_path="/usr/bin/git") == [
            "/usr/bin/git", "commit", "-e", "-F", "-",
        ]


class TestWriteCommit:
    """write_commitのテストクラス"""

    def test_message_written_to_stdin(self, sample_commit_message):
        """メッセージが標準入力に書き込まれ、閉じられること"""
        process = make_process(stdout=b"[main 1a2b3c4] feat: add login\n")

        with patch("auto_commit.commit_writer.subprocess.Popen", return_value=process) as mock_popen:
            result = write_commit(sample_commit_message, git_path="git")

        assert process.stdin.written == sample_commit_message.encode("utf-8")
        assert process.stdin.was_closed
        assert result.ok
        assert result.stdout == "[main 1a2b3c4] feat: add login\n"
        assert mock_popen.call_args[0][0] == ["git", "commit", "-F", "-"]
        assert mock_popen.call_args[1]["stdin"] == subprocess.PIPE
        assert mock_popen.call_args[1]["stdout"] == subprocess.PIPE

    def test_review_leaves_stdout_to_terminal(self, sample_commit_message):
        """レビュー時はエディタのために標準出力を取り込まない"""
        process = make_process()
        process.stdout = None

        with patch("auto_commit.commit_writer.subprocess.Popen", return_value=process) as mock_popen:
            result = write_commit(sample_commit_message, review=True, git_path="git")

        assert mock_popen.call_args[0][0] == ["git", "commit", "-e", "-F", "-"]
        assert mock_popen.call_args[1]["stdout"] is None
        assert result.stdout == ""

    def test_non_zero_exit(self, sample_commit_message):
        """コミット失敗は結果として返す"""
        process = make_process(stdout=b"nothing to commit\n", returncode=1)

        with patch("auto_commit.commit_writer.subprocess.Popen", return_value=process):
            result = write_commit(sample_commit_message, git_path="git")

        assert result.failure is CommandFailure.NON_ZERO_EXIT
        assert result.returncode == 1

    def test_spawn_failure(self, sample_commit_message):
        """起動失敗はエラー"""
        with patch("auto_commit.commit_writer.subprocess.Popen", side_effect=FileNotFoundError("git")):
            with pytest.raises(GitError, match="creating the commit"):
                write_commit(sample_commit_message, git_path="git")

    def test_write_failure(self, sample_commit_message):
        """書き込み失敗はエラー"""
        stdin = Mock()
        stdin.write.side_effect = BrokenPipeError("Broken pipe")
        process = make_process(stdin=stdin)

        with patch("auto_commit.commit_writer.subprocess.Popen", return_value=process):
            with pytest.raises(GitError, match="Failed to write"):
                write_commit(sample_commit_message, git_path="git")

        stdin.close.assert_called_once()

    def test_git_exits_before_reading(self, sample_commit_message):
        """gitが入力を読む前に終了した場合は終了コードと出力を返す"""
        stdin = Mock()
        stdin.write.side_effect = BrokenPipeError("Broken pipe")
        process = make_process(stdout=b"nothing to commit, working tree clean\n", returncode=1, stdin=stdin)

        with patch("auto_commit.commit_writer.subprocess.Popen", return_value=process):
            result = write_commit(sample_commit_message, git_path="git")

        assert result.failure is CommandFailure.NON_ZERO_EXIT
        assert result.returncode == 1
        assert result.stdout == "nothing to commit, working tree clean\n"


@pytest.mark.integration
class TestWriteCommitIntegration:
    """実際のgitを使用した統合テスト"""

    def test_commit_created(self, git_repo, sample_commit_message):
        """生成メッセージでコミットが作成されること"""
        (git_repo.path / "login.py").write_text("def login():\n    pass\n")
        git_repo.git("add", "login.py")

        result = write_commit(sample_commit_message, cwd=str(git_repo.path))

        assert result.ok
        assert "feat: add login" in result.stdout
        assert git_repo.git("log", "-1", "--format=%B").strip() == sample_commit_message

    def test_large_message(self, git_repo):
        """パイプバッファを超えるメッセージでも停止しないこと"""
        body = "\n".join(f"- change number {i}" for i in range(20000))
        message = f"chore: large change\n\n{body}"
        (git_repo.path / "big.txt").write_text("x\n")
        git_repo.git("add", "big.txt")

        result = write_commit(message, cwd=str(git_repo.path))

        assert result.ok
        assert git_repo.git("log", "-1", "--format=%B").strip() == message
