"""
ファイル削除処理モジュール

削除対象と判定されたJPEGファイルを削除する機能を提供します。
ドライラン時はファイルシステムを変更せずに削除予定として記録します。
削除に失敗してもエラーを記録して処理を継続します。
"""

import logging
from pathlib import Path
from typing import Optional, Tuple

from .models import FileAction, FileOutcome, MatchResult


class Deleter:
    """JPEGファイルを削除するクラス"""

    def __init__(self, dry_run: bool = False):
        """
        Deleterを初期化

        Args:
            dry_run: Trueの場合は削除せずに削除予定として記録
        """
        self.dry_run = dry_run
        self.logger = logging.getLogger(__name__)

    def apply(self, result: MatchResult, should_delete: bool) -> FileOutcome:
        """
        マッチング結果に削除方針を適用

        Args:
            result: マッチング結果
            should_delete: 削除対象の場合True

        Returns:
            ファイルの最終状態
        """
        if not should_delete:
            return FileOutcome(result=result, action=FileAction.SKIPPED)

        if self.dry_run:
            size = self._file_size(result.jpeg_path)
            self.logger.debug(f"削除予定（ドライラン）: {result.jpeg_path}")
            return FileOutcome(result=result, action=FileAction.WOULD_DELETE, bytes_reclaimed=size)

        action, error_msg, size = self._delete_single_file_with_error(result.jpeg_path)
        return FileOutcome(result=result, action=action, error=error_msg, bytes_reclaimed=size)

    def _delete_single_file_with_error(self, file_path: Path) -> Tuple[FileAction, Optional[str], int]:
        """
        単一ファイルを削除（エラーメッセージ付き）

        Args:
            file_path: 削除するファイル

        Returns:
            (最終状態, エラーメッセージ, 解放したバイト数) のタプル
        """
        try:
            size = file_path.lstat().st_size
            file_path.unlink()
            self.logger.debug(f"削除成功: {file_path}")
            return FileAction.DELETED, None, size
        except FileNotFoundError as e:
            error_msg = f"ファイルが存在しません: {e}"
        except PermissionError as e:
            error_msg = f"アクセス権限エラー: {e}"
        except OSError as e:
            error_msg = f"ファイル操作エラー: {e}"

        self.logger.debug(f"削除失敗: {file_path} - {error_msg}")
        return FileAction.DELETE_FAILED, error_msg, 0

    def _file_size(self, file_path: Path) -> int:
        """ファイルサイズを取得（リンク自体のサイズ、取得できない場合は0）"""
        try:
            return file_path.lstat().st_size
        except OSError as e:
            self.logger.debug(f"ファイルサイズ取得エラー: {file_path} - {e}")
            return 0
