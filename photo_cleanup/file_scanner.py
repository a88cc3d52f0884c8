"""
ファイルスキャナー

ディレクトリツリーを再帰的に走査してRAWファイルとJPEGファイルを検索する機能を提供します。
読み取れないサブディレクトリは記録してスキップし、走査全体は中断しません。
"""

import logging
import os
from pathlib import Path
from typing import Iterable, List, Optional, Set, Tuple

from .exceptions import RootUnreadableError
from .models import FileEntry, ScanResult
from .path_validator import PathValidator


class FileScanner:
    """ディレクトリを走査してファイルを検索するクラス

    拡張子は小文字で保持し、比較時にファイル側の拡張子を小文字化します。
    シンボリックリンクのディレクトリは辿りません（ループ対策は行っていません）。
    """

    # RAWファイル拡張子
    RAW_EXTENSIONS: Set[str] = {
        '.raf',    # Fujifilm
        '.cr2',    # Canon
        '.cr3',    # Canon
        '.nef',    # Nikon
        '.arw',    # Sony
        '.dng',    # Adobe/Leica
        '.orf',    # Olympus
        '.rw2',    # Panasonic
        '.raw',    # 汎用
    }

    # JPEG拡張子
    JPEG_EXTENSIONS: Set[str] = {
        '.jpg',
        '.jpeg',
    }

    def __init__(self):
        """FileScannerを初期化"""
        self.logger = logging.getLogger(__name__)

    def scan_raw_files(self, directory: Path) -> ScanResult:
        """
        ディレクトリを走査してRAWファイルを検索

        Args:
            directory: 走査するルートディレクトリ

        Returns:
            見つかったRAWファイルと走査エラー

        Raises:
            RootNotFoundError: ディレクトリが存在しない場合
            RootUnreadableError: ディレクトリを読み取れない場合
        """
        return self.scan(directory, self.RAW_EXTENSIONS)

    def scan_jpeg_files(self, directory: Path) -> ScanResult:
        """
        ディレクトリを走査してJPEGファイルを検索

        Args:
            directory: 走査するルートディレクトリ

        Returns:
            見つかったJPEGファイルと走査エラー

        Raises:
            RootNotFoundError: ディレクトリが存在しない場合
            RootUnreadableError: ディレクトリを読み取れない場合
        """
        return self.scan(directory, self.JPEG_EXTENSIONS)

    def scan(self, directory: Path, extensions: Iterable[str]) -> ScanResult:
        """
        ディレクトリを再帰的に走査し、指定拡張子のファイルを収集

        Args:
            directory: 走査するルートディレクトリ
            extensions: 対象とする拡張子（大文字小文字を区別しない）

        Returns:
            相対パス順に並んだファイル一覧と、読み取れなかったサブディレクトリ
        """
        # ディレクトリの検証
        PathValidator.validate_directory(directory)

        wanted = {ext.lower() for ext in extensions}
        entries: List[FileEntry] = []
        errors: List[Tuple[str, str]] = []

        def on_error(error: OSError) -> None:
            failed_dir = Path(error.filename) if error.filename else directory
            if failed_dir == directory:
                # ルート自体が読めない場合は致命的エラー
                raise RootUnreadableError(f"ディレクトリを読み取れません: {directory} ({error})") from error
            message = f"サブディレクトリを読み取れません: {error.strerror or error}"
            self.logger.debug(f"走査スキップ: {failed_dir} - {message}")
            errors.append((str(failed_dir), message))

        for dirpath, dirnames, filenames in os.walk(directory, onerror=on_error):
            # 走査順序を安定させる
            dirnames.sort()
            relative_dir = self.relative_dir(directory, Path(dirpath))

            for filename in sorted(filenames):
                entry = self.make_entry(relative_dir, Path(dirpath) / filename)
                if entry is not None and self.has_extension(entry, wanted):
                    entries.append(entry)

        self.logger.debug(f"走査完了: {directory} ({len(entries)}ファイル, エラー{len(errors)}件)")
        return ScanResult(root=directory, entries=entries, errors=errors)

    @staticmethod
    def relative_dir(root: Path, directory: Path) -> str:
        """
        ルートからの相対ディレクトリを'/'区切りで取得

        Args:
            root: ルートディレクトリ
            directory: 対象ディレクトリ

        Returns:
            相対ディレクトリ（ルート自身は空文字列）
        """
        relative = Path(os.path.relpath(directory, root))
        if relative == Path('.'):
            return ''
        return relative.as_posix()

    @staticmethod
    def make_entry(relative_dir: str, file_path: Path) -> Optional[FileEntry]:
        """
        ファイルパスからFileEntryを作成

        拡張子のないファイルや'.jpg'のようなドットファイルはNoneを返します。
        """
        extension = file_path.suffix
        if not extension:
            return None

        return FileEntry(
            relative_dir=relative_dir,
            stem=file_path.stem,
            extension=extension,
            path=file_path.absolute()
        )

    @staticmethod
    def has_extension(entry: FileEntry, extensions: Set[str]) -> bool:
        """拡張子が対象に含まれるか判定（extensionsは小文字で渡す）"""
        return entry.extension.lower() in extensions
