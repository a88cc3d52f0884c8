"""
データモデル定義

photo-cleanupで使用するデータクラスと列挙型を定義します。
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple


IndexKey = Tuple[str, str]  # (相対ディレクトリ, ステム)


class MatchStatus(Enum):
    """JPEGの分類"""
    MATCHED = 'matched'    # 対応するRAWあり
    ORPHANED = 'orphaned'  # 対応するRAWなし


class CleanMode(Enum):
    """削除モード"""
    ORPHAN_ONLY = 'clean'            # RAWのないJPEGを削除
    MATCHED_ONLY = 'clean-matched'   # RAWのあるJPEGを削除


class FileAction(Enum):
    """ファイルごとの最終状態"""
    SKIPPED = 'skipped'
    DELETED = 'deleted'
    WOULD_DELETE = 'would_delete'
    DELETE_FAILED = 'delete_failed'


@dataclass(frozen=True)
class FileEntry:
    """走査中に発見したファイルの情報"""
    relative_dir: str  # ルートからの相対ディレクトリ（'/'区切り、ルート直下は''）
    stem: str          # 拡張子を除いたファイル名（大文字小文字はそのまま）
    extension: str     # 元の大文字小文字を保持した拡張子
    path: Path         # 絶対パス

    @property
    def key(self) -> IndexKey:
        return (self.relative_dir, self.stem)


@dataclass
class MatchResult:
    """マッチング結果"""
    entry: FileEntry
    status: MatchStatus
    raw_paths: List[Path] = field(default_factory=list)

    @property
    def jpeg_path(self) -> Path:
        return self.entry.path


@dataclass
class FileOutcome:
    """1ファイル分の処理結果"""
    result: MatchResult
    action: FileAction
    error: Optional[str] = None
    bytes_reclaimed: int = 0


@dataclass
class ScanResult:
    """ディレクトリ走査結果"""
    root: Path
    entries: List[FileEntry]
    errors: List[Tuple[str, str]]  # (ディレクトリパス, エラーメッセージ)


@dataclass
class CleanStats:
    """処理統計情報

    走査中に結果を積み上げ、処理の最後に返すアキュムレーター。
    """
    raw_files_indexed: int = 0
    jpeg_files_scanned: int = 0
    matched: int = 0
    orphaned: int = 0
    deleted: int = 0
    would_delete: int = 0
    kept: int = 0
    delete_failed: int = 0
    bytes_reclaimed: int = 0
    errors: List[Tuple[str, str]] = field(default_factory=list)  # (file_path, error_message)

    def record(self, outcome: FileOutcome) -> None:
        """1ファイル分の処理結果を集計に反映"""
        self.jpeg_files_scanned += 1

        if outcome.result.status is MatchStatus.MATCHED:
            self.matched += 1
        else:
            self.orphaned += 1

        if outcome.action is FileAction.DELETED:
            self.deleted += 1
        elif outcome.action is FileAction.WOULD_DELETE:
            self.would_delete += 1
        elif outcome.action is FileAction.DELETE_FAILED:
            self.delete_failed += 1
            self.errors.append((str(outcome.result.jpeg_path), outcome.error or ''))
        else:
            self.kept += 1

        self.bytes_reclaimed += outcome.bytes_reclaimed

    def record_walk_errors(self, errors: List[Tuple[str, str]]) -> None:
        """走査中に読み取れなかったディレクトリを記録"""
        self.errors.extend(errors)

    @property
    def error_count(self) -> int:
        return len(self.errors)
