"""
RAWファイルインデックス作成モジュール

RAWファイルを（相対ディレクトリ, ステム）のキーでインデックス化し、
JPEGとの照合を高速に行えるようにします。
インデックスは実行ごとにメモリ上で構築し、永続化はしません。
"""

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from .exceptions import ProcessingError
from .file_scanner import FileScanner
from .models import FileEntry, IndexKey


class RawFileIndex:
    """RAWファイル情報を保持するインデックス"""

    def __init__(self):
        """RawFileIndexを初期化"""
        self.by_key: Dict[IndexKey, List[Path]] = {}
        self.file_count: int = 0
        self._frozen = False
        self.logger = logging.getLogger(__name__)

    def add(self, entry: FileEntry) -> None:
        """
        インデックスにRAWファイルを追加

        Args:
            entry: 追加するRAWファイル

        Raises:
            ProcessingError: 構築済み（読み取り専用）のインデックスに追加しようとした場合
        """
        if self._frozen:
            raise ProcessingError("インデックスは読み取り専用です")

        self.by_key.setdefault(entry.key, []).append(entry.path)
        self.file_count += 1
        self.logger.debug(f"インデックスに追加: {entry.path} "
                          f"(キー: {entry.relative_dir}/{entry.stem})")

    def freeze(self) -> None:
        """インデックスを読み取り専用にする"""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def contains(self, key: IndexKey) -> bool:
        """
        キーに対応するRAWファイルが存在するか判定

        Args:
            key: (相対ディレクトリ, ステム)

        Returns:
            1つ以上のRAWファイルが存在する場合True
        """
        return key in self.by_key

    def find(self, key: IndexKey) -> List[Path]:
        """
        キーに対応するRAWファイルを検索

        Args:
            key: (相対ディレクトリ, ステム)

        Returns:
            マッチするRAWファイルパスのリスト
        """
        return list(self.by_key.get(key, []))

    def __contains__(self, key: object) -> bool:
        return key in self.by_key

    def __len__(self) -> int:
        return len(self.by_key)


@dataclass
class IndexResult:
    """インデックス構築結果"""
    index: RawFileIndex
    file_count: int
    errors: List[Tuple[str, str]]  # (ディレクトリパス, エラーメッセージ)
    processing_time: float = 0.0


class RawIndexer:
    """RAWディレクトリツリーからインデックスを構築するクラス"""

    def __init__(self, file_scanner: Optional[FileScanner] = None):
        """
        RawIndexerを初期化

        Args:
            file_scanner: ファイルスキャナー（省略時は新規作成）
        """
        self.file_scanner = file_scanner or FileScanner()
        self.logger = logging.getLogger(__name__)

    def build(self, source_dir: Path) -> IndexResult:
        """
        RAWディレクトリを走査してインデックスを構築

        Args:
            source_dir: RAWファイルのルートディレクトリ

        Returns:
            読み取り専用となった構築済みインデックスとファイル数、走査エラー

        Raises:
            RootNotFoundError: ディレクトリが存在しない場合
            RootUnreadableError: ディレクトリを読み取れない場合
        """
        start_time = time.time()
        self.logger.debug(f"インデックス構築開始: {source_dir}")

        scan_result = self.file_scanner.scan_raw_files(source_dir)

        index = RawFileIndex()
        for entry in scan_result.entries:
            index.add(entry)
        index.freeze()

        processing_time = time.time() - start_time
        self.logger.debug(f"インデックス構築完了: {index.file_count}ファイル, "
                          f"{len(index)}キー ({processing_time:.2f}秒)")

        return IndexResult(
            index=index,
            file_count=index.file_count,
            errors=scan_result.errors,
            processing_time=processing_time
        )
