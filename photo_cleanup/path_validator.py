"""
パス検証ユーティリティ

ルートディレクトリの検証とクロスプラットフォーム対応を提供します。
"""

import os
from pathlib import Path

from .exceptions import RootNotFoundError, RootUnreadableError


class PathValidator:
    """パス検証を行うユーティリティクラス"""

    @staticmethod
    def validate_directory(path: Path) -> None:
        """
        ディレクトリの存在とアクセス権を検証

        Args:
            path: 検証するディレクトリパス

        Raises:
            RootNotFoundError: ディレクトリが存在しない、またはディレクトリではない場合
            RootUnreadableError: ディレクトリの内容を読み取れない場合
        """
        if not path.exists():
            raise RootNotFoundError(f"ディレクトリが存在しません: {path}")

        if not path.is_dir():
            raise RootNotFoundError(f"指定されたパスはディレクトリではありません: {path}")

        # 読み取り権限の確認
        if not os.access(path, os.R_OK | os.X_OK):
            raise RootUnreadableError(f"ディレクトリに読み取り権限がありません: {path}")

        # 実際に一覧を取得できるか確認
        try:
            with os.scandir(path):
                pass
        except OSError as e:
            raise RootUnreadableError(f"ディレクトリを読み取れません: {path} ({e})") from e

    @staticmethod
    def normalize_path(path_str: str) -> Path:
        """
        パス文字列を正規化してPathオブジェクトに変換
        macOSとWindowsの両方のパス形式をサポート

        Args:
            path_str: パス文字列

        Returns:
            正規化されたPathオブジェクト
        """
        # パス文字列をPathオブジェクトに変換（自動的にOS固有の形式に正規化される）
        path = Path(path_str).expanduser().resolve()
        return path
