"""
ロギングシステム

photo-cleanupのロギング機能を提供します。
標準出力とファイル出力の両方をサポートし、ファイルごとの結果表示とサマリー表示を管理します。
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional
from dataclasses import dataclass

from .exceptions import FileOperationError
from .models import CleanMode, CleanStats, FileAction, FileOutcome, MatchStatus


LOGGER_NAME = 'photo_cleanup'

STATUS_LABELS = {
    MatchStatus.MATCHED: 'RAWあり',
    MatchStatus.ORPHANED: 'RAWなし',
}

ACTION_LABELS = {
    FileAction.SKIPPED: '保持',
    FileAction.DELETED: '削除',
    FileAction.WOULD_DELETE: '削除予定',
    FileAction.DELETE_FAILED: '削除失敗',
}

MODE_LABELS = {
    CleanMode.ORPHAN_ONLY: 'clean (RAWのないJPEGを削除)',
    CleanMode.MATCHED_ONLY: 'clean-matched (RAWのあるJPEGを削除)',
}


@dataclass
class LogConfig:
    """ログ設定"""
    console_level: int = logging.INFO
    file_level: int = logging.DEBUG
    log_file: Optional[Path] = None
    verbose: bool = False
    summary_only: bool = False


class ProgressLogger:
    """処理経過とサマリー表示を管理するクラス"""

    def __init__(self, config: LogConfig):
        self.config = config
        self.logger = self._setup_logger()

    def _setup_logger(self) -> logging.Logger:
        """ロガーのセットアップ"""
        logger = logging.getLogger(LOGGER_NAME)
        logger.setLevel(logging.DEBUG)

        # 既存のハンドラーをクリア
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

        # フォーマッターを作成
        console_formatter = logging.Formatter(
            '%(message)s'
        )
        file_formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

        # コンソールハンドラー（各モジュールのデバッグログは表示しない）
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(self.config.console_level)
        console_handler.setFormatter(console_formatter)
        logger.addHandler(console_handler)

        # ファイルハンドラー（指定されている場合）
        if self.config.log_file:
            try:
                # ログディレクトリを作成
                self.config.log_file.parent.mkdir(parents=True, exist_ok=True)
                file_handler = logging.FileHandler(self.config.log_file, encoding='utf-8')
            except OSError as e:
                raise FileOperationError(f"ログファイルを作成できません: {self.config.log_file} - {e}") from e

            file_handler.setLevel(self.config.file_level)
            file_handler.setFormatter(file_formatter)
            logger.addHandler(file_handler)

        return logger

    @property
    def show_file_lines(self) -> bool:
        """ファイルごとの結果を表示するか"""
        return self.config.verbose and not self.config.summary_only

    def _log_progress(self, message: str) -> None:
        # --summary-only 指定時はサマリー以外をコンソールに出さない
        if self.config.summary_only:
            self.logger.debug(message)
        else:
            self.logger.info(message)

    def log_processing_start(self, raw_dir: Path, jpeg_dir: Path, mode: CleanMode, dry_run: bool):
        """処理開始時の表示"""
        self._log_progress("=" * 60)
        self._log_progress("photo-cleanup - 処理開始")
        self._log_progress("=" * 60)
        # 実行ごとに変わる値はファイルログのみに記録
        self.logger.debug(f"開始時刻: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
        self._log_progress(f"RAWディレクトリ: {raw_dir}")
        self._log_progress(f"JPEGディレクトリ: {jpeg_dir}")
        self._log_progress(f"モード: {MODE_LABELS[mode]}")
        if dry_run:
            self._log_progress("ドライラン: ファイルは削除しません")
        self._log_progress("")

    def log_index_complete(self, raw_files_count: int, processing_time: float):
        """インデックス構築完了のログ"""
        self._log_progress(f"インデックス構築完了: {raw_files_count}個のRAWファイルを処理")
        self.logger.debug(f"処理時間: {processing_time:.2f}秒")
        self._log_progress("")

    def log_file_result(self, outcome: FileOutcome):
        """ファイルごとの結果表示"""
        line = (f"{ACTION_LABELS[outcome.action]}: {outcome.result.jpeg_path} "
                f"({STATUS_LABELS[outcome.result.status]})")
        if outcome.error:
            line += f" - {outcome.error}"

        if self.show_file_lines:
            self.logger.info(line)
        else:
            self.logger.debug(line)

    def format_summary(self, stats: CleanStats, mode: CleanMode, dry_run: bool) -> List[str]:
        """サマリーの各行を作成"""
        mb = stats.bytes_reclaimed / 1024 / 1024
        lines = [
            "=" * 60,
            "処理完了サマリー",
            "=" * 60,
            f"モード: {MODE_LABELS[mode]}",
            f"ドライラン: {'はい' if dry_run else 'いいえ'}",
            "",
            "処理結果:",
            f"  - RAWファイル発見数: {stats.raw_files_indexed}",
            f"  - JPEGファイル発見数: {stats.jpeg_files_scanned}",
            f"  - RAWあり: {stats.matched}",
            f"  - RAWなし: {stats.orphaned}",
        ]
        if dry_run:
            lines.append(f"  - 削除予定: {stats.would_delete}")
        else:
            lines.append(f"  - 削除: {stats.deleted}")
        lines += [
            f"  - 保持: {stats.kept}",
            f"  - 削除失敗: {stats.delete_failed}",
            f"  - {'解放予定容量' if dry_run else '解放容量'}: {stats.bytes_reclaimed:,} bytes ({mb:.2f} MB)",
            f"  - エラー: {stats.error_count}",
        ]
        return lines

    def log_processing_complete(self, stats: CleanStats, mode: CleanMode, dry_run: bool):
        """処理完了時のサマリー表示"""
        lines = self.format_summary(stats, mode, dry_run)
        for line in lines:
            self.logger.info(line)

        if stats.errors:
            self.logger.info("")
            self.logger.info(f"エラー詳細 ({len(stats.errors)}件):")
            for file_path, error_msg in stats.errors:
                self.logger.error(f"  - {file_path}: {error_msg}")

        self.logger.info("=" * 60)

    def log_debug(self, message: str):
        """デバッグメッセージのログ"""
        self.logger.debug(message)


def create_default_logger(verbose: bool = False, summary_only: bool = False,
                          log_file: Optional[Path] = None) -> ProgressLogger:
    """デフォルトのロガーを作成"""
    config = LogConfig(
        console_level=logging.INFO,
        file_level=logging.DEBUG,
        log_file=log_file,
        verbose=verbose,
        summary_only=summary_only
    )
    return ProgressLogger(config)
