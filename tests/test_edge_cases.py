"""
エッジケースのユニットテスト

photo-cleanupの各シナリオと境界条件をテストします。
"""

import errno
import os
import shutil
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from photo_cleanup.clean_manager import CleanManager
from photo_cleanup.exceptions import RootNotFoundError
from photo_cleanup.logger import LogConfig, ProgressLogger
from photo_cleanup.models import CleanMode


class CleanTestCase(unittest.TestCase):
    """一時ディレクトリにRAW/JPEGツリーを用意する基底クラス"""

    def setUp(self):
        """テスト前の準備"""
        self.temp_dir = Path(tempfile.mkdtemp())
        self.raw_root = self.temp_dir / "raw"
        self.jpeg_root = self.temp_dir / "jpeg"
        self.raw_root.mkdir()
        self.jpeg_root.mkdir()

    def tearDown(self):
        """テスト後のクリーンアップ"""
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def touch(self, root: Path, relative_path: str, content: bytes = b"data") -> Path:
        file_path = root / relative_path
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_bytes(content)
        return file_path

    def run_clean(self, mode: CleanMode, dry_run: bool = False):
        manager = CleanManager(ProgressLogger(LogConfig(summary_only=True)))
        return manager.run(self.raw_root, self.jpeg_root, mode, dry_run=dry_run)


class TestScenarios(CleanTestCase):
    """代表的なシナリオのテスト"""

    def test_clean_deletes_only_orphan(self):
        """cleanはRAWのないJPEGのみ削除する"""
        self.touch(self.raw_root, "foo/test.cr2")
        test_jpeg = self.touch(self.jpeg_root, "foo/test.jpeg")
        other_jpeg = self.touch(self.jpeg_root, "foo/other.jpeg")

        stats = self.run_clean(CleanMode.ORPHAN_ONLY)

        self.assertTrue(test_jpeg.exists())
        self.assertFalse(other_jpeg.exists())
        self.assertEqual(stats.matched, 1)
        self.assertEqual(stats.orphaned, 1)
        self.assertEqual(stats.deleted, 1)
        self.assertEqual(stats.kept, 1)

    def test_clean_matched_deletes_only_matched(self):
        """clean-matchedはRAWのあるJPEGのみ削除する"""
        self.touch(self.raw_root, "foo/test.cr2")
        test_jpeg = self.touch(self.jpeg_root, "foo/test.jpeg")
        other_jpeg = self.touch(self.jpeg_root, "foo/other.jpeg")

        stats = self.run_clean(CleanMode.MATCHED_ONLY)

        self.assertFalse(test_jpeg.exists())
        self.assertTrue(other_jpeg.exists())
        self.assertEqual(stats.deleted, 1)

    def test_empty_raw_root_clean(self):
        """空のRAWルートではcleanがすべてのJPEGを削除する"""
        jpeg = self.touch(self.jpeg_root, "only.jpg")

        stats = self.run_clean(CleanMode.ORPHAN_ONLY)

        self.assertFalse(jpeg.exists())
        self.assertEqual(stats.raw_files_indexed, 0)
        self.assertEqual(stats.deleted, 1)

    def test_empty_raw_root_clean_matched(self):
        """空のRAWルートではclean-matchedは何も削除しない"""
        jpeg = self.touch(self.jpeg_root, "only.jpg")

        stats = self.run_clean(CleanMode.MATCHED_ONLY)

        self.assertTrue(jpeg.exists())
        self.assertEqual(stats.deleted, 0)
        self.assertEqual(stats.kept, 1)

    def test_empty_jpeg_root(self):
        """JPEGがない場合も正常に完了する"""
        self.touch(self.raw_root, "a.cr2")

        stats = self.run_clean(CleanMode.ORPHAN_ONLY)

        self.assertEqual(stats.jpeg_files_scanned, 0)
        self.assertEqual(stats.error_count, 0)


class TestMatchingRules(CleanTestCase):
    """マッチング規則のテスト"""

    def test_any_supported_raw_extension_matches(self):
        """サポートするRAW拡張子であれば大文字小文字を問わずマッチする"""
        for i, extension in enumerate(['.raf', '.CR2', '.cr3', '.Nef', '.arw', '.DNG', '.orf', '.rw2', '.RAW']):
            self.touch(self.raw_root, f"a/b/x{i}{extension}")
            self.touch(self.jpeg_root, f"a/b/x{i}.jpeg")

        stats = self.run_clean(CleanMode.ORPHAN_ONLY)

        self.assertEqual(stats.matched, 9)
        self.assertEqual(stats.deleted, 0)

    def test_unsupported_raw_extension_does_not_match(self):
        """サポート外の拡張子はRAWとして扱わない"""
        self.touch(self.raw_root, "x.xmp")
        self.touch(self.raw_root, "y.pef")
        self.touch(self.jpeg_root, "x.jpg")
        self.touch(self.jpeg_root, "y.jpg")

        stats = self.run_clean(CleanMode.ORPHAN_ONLY)

        self.assertEqual(stats.raw_files_indexed, 0)
        self.assertEqual(stats.deleted, 2)

    def test_different_relative_directory_does_not_match(self):
        """相対ディレクトリが異なればマッチしない"""
        self.touch(self.raw_root, "a/c/x.cr2")
        jpeg = self.touch(self.jpeg_root, "a/b/x.jpeg")

        self.run_clean(CleanMode.ORPHAN_ONLY)

        self.assertFalse(jpeg.exists())

    def test_stem_case_differs_does_not_match(self):
        """ステムの大文字小文字が異なればマッチしない"""
        self.touch(self.raw_root, "a/b/x.cr2")
        jpeg = self.touch(self.jpeg_root, "a/b/X.jpeg")

        stats = self.run_clean(CleanMode.MATCHED_ONLY)

        self.assertTrue(jpeg.exists())
        self.assertEqual(stats.orphaned, 1)

    def test_jpeg_extension_case_insensitive(self):
        """JPEG拡張子は大文字小文字を区別しない"""
        self.touch(self.jpeg_root, "a.JPG")
        self.touch(self.jpeg_root, "b.Jpeg")
        self.touch(self.jpeg_root, "c.png")

        stats = self.run_clean(CleanMode.ORPHAN_ONLY)

        self.assertEqual(stats.jpeg_files_scanned, 2)
        self.assertTrue((self.jpeg_root / "c.png").exists())

    def test_non_jpeg_files_in_jpeg_tree_untouched(self):
        """JPEGツリー内のRAWファイルや他のファイルは削除しない"""
        raw_in_jpeg_tree = self.touch(self.jpeg_root, "x.cr2")
        sidecar = self.touch(self.jpeg_root, "x.xmp")

        self.run_clean(CleanMode.ORPHAN_ONLY)

        self.assertTrue(raw_in_jpeg_tree.exists())
        self.assertTrue(sidecar.exists())

    def test_same_root_for_raw_and_jpeg(self):
        """RAWとJPEGが同じディレクトリにある場合も動作する"""
        self.jpeg_root = self.raw_root
        self.touch(self.raw_root, "pair.raf")
        pair_jpeg = self.touch(self.raw_root, "pair.jpg")
        single_jpeg = self.touch(self.raw_root, "single.jpg")

        self.run_clean(CleanMode.ORPHAN_ONLY)

        self.assertTrue(pair_jpeg.exists())
        self.assertFalse(single_jpeg.exists())
        self.assertTrue((self.raw_root / "pair.raf").exists())

    def test_dotted_stems(self):
        """ステムにドットを含むファイルは最後の拡張子のみ除去して比較する"""
        self.touch(self.raw_root, "IMG_0001.edit.dng")
        jpeg = self.touch(self.jpeg_root, "IMG_0001.edit.jpg")
        plain = self.touch(self.jpeg_root, "IMG_0001.jpg")

        self.run_clean(CleanMode.ORPHAN_ONLY)

        self.assertTrue(jpeg.exists())
        self.assertFalse(plain.exists())

    def test_symlinked_directory_is_not_followed(self):
        """シンボリックリンクのディレクトリは辿らない"""
        outside = self.temp_dir / "outside"
        self.touch(outside, "linked.jpg")
        os.symlink(outside, self.jpeg_root / "link", target_is_directory=True)

        stats = self.run_clean(CleanMode.ORPHAN_ONLY)

        self.assertEqual(stats.jpeg_files_scanned, 0)
        self.assertTrue((outside / "linked.jpg").exists())


class TestErrorHandling(CleanTestCase):
    """エラー処理のテスト"""

    def test_dry_run_never_deletes(self):
        """ドライランではファイルを削除しない"""
        jpeg = self.touch(self.jpeg_root, "orphan.jpg", b"12345")

        stats = self.run_clean(CleanMode.ORPHAN_ONLY, dry_run=True)

        self.assertTrue(jpeg.exists())
        self.assertEqual(stats.would_delete, 1)
        self.assertEqual(stats.deleted, 0)
        self.assertEqual(stats.bytes_reclaimed, 5)

    def test_dangling_symlinked_jpeg_is_deleted(self):
        """リンク先のないシンボリックリンクのJPEGも通常ファイルと同様に削除する"""
        link = self.jpeg_root / "orphan.jpg"
        os.symlink(self.temp_dir / "nowhere.jpg", link)

        stats = self.run_clean(CleanMode.ORPHAN_ONLY)

        self.assertFalse(os.path.lexists(link))
        self.assertEqual(stats.deleted, 1)
        self.assertEqual(stats.delete_failed, 0)
        self.assertEqual(stats.error_count, 0)

    def test_symlinked_jpeg_reclaims_link_size_only(self):
        """シンボリックリンクの削除ではリンク先のサイズを解放容量に含めない"""
        target = self.touch(self.temp_dir, "outside/target.bin", b"x" * 100000)
        link = self.jpeg_root / "orphan.jpg"
        os.symlink(target, link)
        link_size = os.lstat(link).st_size

        dry_stats = self.run_clean(CleanMode.ORPHAN_ONLY, dry_run=True)
        stats = self.run_clean(CleanMode.ORPHAN_ONLY)

        self.assertEqual(dry_stats.bytes_reclaimed, link_size)
        self.assertEqual(stats.bytes_reclaimed, link_size)
        self.assertNotEqual(stats.bytes_reclaimed, 100000)
        self.assertFalse(os.path.lexists(link))
        self.assertTrue(target.exists())
        self.assertEqual(target.stat().st_size, 100000)

    def test_missing_jpeg_root_aborts_before_deletion(self):
        """JPEGルートが存在しない場合は削除前に中断する"""
        self.touch(self.raw_root, "x.cr2")
        shutil.rmtree(self.jpeg_root)

        with self.assertRaises(RootNotFoundError):
            self.run_clean(CleanMode.ORPHAN_ONLY)

    def test_missing_raw_root_aborts_before_deletion(self):
        """RAWルートが存在しない場合は何も削除せずに中断する"""
        jpeg = self.touch(self.jpeg_root, "orphan.jpg")
        shutil.rmtree(self.raw_root)

        with self.assertRaises(RootNotFoundError):
            self.run_clean(CleanMode.ORPHAN_ONLY)

        self.assertTrue(jpeg.exists())

    def test_delete_failure_does_not_abort_run(self):
        """削除に失敗したファイルがあっても残りの処理を継続する"""
        locked = self.touch(self.jpeg_root, "a_locked.jpg")
        other = self.touch(self.jpeg_root, "b_other.jpg")
        original_unlink = Path.unlink

        def failing_unlink(path, *args, **kwargs):
            if path.name == "a_locked.jpg":
                raise PermissionError(errno.EACCES, "Permission denied", str(path))
            return original_unlink(path, *args, **kwargs)

        with patch.object(Path, 'unlink', new=failing_unlink):
            stats = self.run_clean(CleanMode.ORPHAN_ONLY)

        self.assertTrue(locked.exists())
        self.assertFalse(other.exists())
        self.assertEqual(stats.deleted, 1)
        self.assertEqual(stats.delete_failed, 1)
        self.assertEqual(stats.error_count, 1)
        self.assertEqual(stats.errors[0][0], str(locked))

    def test_unreadable_raw_subdirectory_is_skipped(self):
        """RAWツリーの読み取れないサブディレクトリはスキップされ、エラーとして集計される"""
        self.touch(self.raw_root, "locked/x.cr2")
        self.touch(self.raw_root, "ok/y.cr2")
        x_jpeg = self.touch(self.jpeg_root, "locked/x.jpg")
        y_jpeg = self.touch(self.jpeg_root, "ok/y.jpg")
        real_walk = os.walk
        raw_root = str(self.raw_root)

        def walk_with_locked_raw_dir(top, onerror=None, **kwargs):
            for dirpath, dirnames, filenames in real_walk(top, onerror=onerror, **kwargs):
                if dirpath == raw_root and 'locked' in dirnames:
                    dirnames.remove('locked')
                    onerror(PermissionError(errno.EACCES, 'Permission denied', os.path.join(dirpath, 'locked')))
                yield dirpath, dirnames, filenames

        with patch('photo_cleanup.file_scanner.os.walk', side_effect=walk_with_locked_raw_dir):
            stats = self.run_clean(CleanMode.MATCHED_ONLY, dry_run=True)

        self.assertEqual(stats.raw_files_indexed, 1)
        self.assertEqual(stats.matched, 1)
        self.assertEqual(stats.error_count, 1)
        self.assertTrue(x_jpeg.exists())
        self.assertTrue(y_jpeg.exists())


if __name__ == '__main__':
    unittest.main()
