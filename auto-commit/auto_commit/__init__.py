"""
Auto Commit

ステージされた変更の差分をリモートのテキスト生成サービスに送信し、
生成されたメッセージでコミットを作成するツール。
"""

__version__ = "1.0.0"
__author__ = "Nicholas Ferreira"
__description__ = "Automagically generate commit messages."
