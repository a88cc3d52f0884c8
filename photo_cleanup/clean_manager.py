"""
クリーンアップ管理モジュール

RAWディレクトリのインデックス構築、JPEGディレクトリの走査、分類、削除を
一連の処理として管理します。
インデックス構築が完了してからJPEGの照合を開始します（2パス処理）。
"""

from pathlib import Path
from typing import Optional

from .deleter import Deleter
from .file_scanner import FileScanner
from .indexer import RawIndexer
from .logger import ProgressLogger, create_default_logger
from .matcher import Matcher
from .models import CleanMode, CleanStats
from .path_validator import PathValidator


class CleanManager:
    """JPEGファイルのクリーンアップ処理を担当するクラス"""

    def __init__(self, progress_logger: Optional[ProgressLogger] = None):
        """
        CleanManagerを初期化

        Args:
            progress_logger: 使用するロガー（省略時はrun()の引数から作成）
        """
        self.file_scanner = FileScanner()
        self.indexer = RawIndexer(self.file_scanner)
        self.progress_logger = progress_logger

    def run(self, raw_dir: Path, jpeg_dir: Path, mode: CleanMode, dry_run: bool = False,
            verbose: bool = False, summary_only: bool = False,
            log_file: Optional[Path] = None) -> CleanStats:
        """
        RAWファイルの有無に応じてJPEGファイルを削除

        Args:
            raw_dir: RAWファイルのルートディレクトリ
            jpeg_dir: JPEGファイルのルートディレクトリ
            mode: 削除モード
            dry_run: Trueの場合は削除せずに削除予定として報告
            verbose: ファイルごとの結果を表示する場合True
            summary_only: サマリーのみ表示する場合True（verboseより優先）
            log_file: 詳細ログの出力先

        Returns:
            処理統計情報

        Raises:
            RootNotFoundError: ルートディレクトリが存在しない場合
            RootUnreadableError: ルートディレクトリを読み取れない場合
        """
        logger = self.progress_logger or create_default_logger(
            verbose=verbose, summary_only=summary_only, log_file=log_file
        )

        # 1. 削除を始める前に両方のルートを検証
        PathValidator.validate_directory(raw_dir)
        PathValidator.validate_directory(jpeg_dir)

        logger.log_processing_start(raw_dir, jpeg_dir, mode, dry_run)
        stats = CleanStats()

        # 2. RAWインデックスの構築
        index_result = self.indexer.build(raw_dir)
        stats.raw_files_indexed = index_result.file_count
        stats.record_walk_errors(index_result.errors)
        logger.log_index_complete(index_result.file_count, index_result.processing_time)

        # 3. JPEGファイルの走査
        logger.log_debug(f"JPEGファイルを走査中: {jpeg_dir}")
        scan_result = self.file_scanner.scan_jpeg_files(jpeg_dir)
        stats.record_walk_errors(scan_result.errors)

        # 4. 分類と削除
        matcher = Matcher(index_result.index)
        deleter = Deleter(dry_run=dry_run)

        for jpeg in scan_result.entries:
            result = matcher.classify(jpeg)
            outcome = deleter.apply(result, Matcher.should_delete(result, mode))
            stats.record(outcome)
            logger.log_file_result(outcome)

        # 5. 結果レポート
        logger.log_processing_complete(stats, mode, dry_run)
        return stats
