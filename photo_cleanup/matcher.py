"""
マッチング処理モジュール

JPEGファイルに対応するRAWファイルがあるかを判定する機能を提供します。
相対ディレクトリとステムが完全一致した場合のみマッチとみなし、
RAW側の拡張子（大文字小文字を含む）は問いません。ステムは大文字小文字を区別します。
"""

import logging

from .indexer import RawFileIndex
from .models import CleanMode, FileEntry, MatchResult, MatchStatus


class Matcher:
    """JPEGファイルとRAWファイルをマッチングするクラス"""

    def __init__(self, index: RawFileIndex):
        """
        Matcherを初期化

        Args:
            index: 構築済みのRAWファイルインデックス
        """
        self.index = index
        self.logger = logging.getLogger(__name__)

    def classify(self, jpeg: FileEntry) -> MatchResult:
        """
        JPEGファイルを分類

        Args:
            jpeg: JPEGファイル

        Returns:
            マッチング結果（MATCHEDまたはORPHANED）
        """
        raw_paths = self.index.find(jpeg.key)

        if raw_paths:
            self.logger.debug(f"マッチ発見: {jpeg.path} -> "
                              f"{', '.join(p.name for p in raw_paths)}")
            return MatchResult(entry=jpeg, status=MatchStatus.MATCHED, raw_paths=raw_paths)

        self.logger.debug(f"マッチなし: {jpeg.path}")
        return MatchResult(entry=jpeg, status=MatchStatus.ORPHANED)

    @staticmethod
    def should_delete(result: MatchResult, mode: CleanMode) -> bool:
        """
        削除対象かどうかを判定

        Args:
            result: マッチング結果
            mode: 削除モード

        Returns:
            ORPHAN_ONLYで孤立、またはMATCHED_ONLYでマッチの場合True
        """
        if mode is CleanMode.ORPHAN_ONLY:
            return result.status is MatchStatus.ORPHANED
        return result.status is MatchStatus.MATCHED
