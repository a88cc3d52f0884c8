#!/usr/bin/env python3
"""
photo-cleanup - 基本的な使用例

このスクリプトは、photo-cleanupをプログラムから呼び出す方法を示します。
まずドライランで削除予定を確認し、確認後に実際の削除を行います。
"""

import sys
from pathlib import Path

from photo_cleanup import CleanManager, CleanMode, ValidationError


def example_basic_workflow():
    """基本的なワークフローの例"""
    print("=" * 60)
    print("photo-cleanup - 基本的な使用例")
    print("=" * 60)

    # 例用のディレクトリパス（実際の使用時は適切なパスに変更してください）
    raw_directory = Path("~/Photos/RAW").expanduser()
    jpeg_directory = Path("~/Photos/JPEG").expanduser()

    print(f"RAWファイルディレクトリ: {raw_directory}")
    print(f"JPEGファイルディレクトリ: {jpeg_directory}")
    print()

    try:
        # ステップ1: ドライランで削除予定を確認
        print("ステップ1: ドライランで削除予定を確認")
        print("-" * 40)

        stats = CleanManager().run(
            raw_dir=raw_directory,
            jpeg_dir=jpeg_directory,
            mode=CleanMode.ORPHAN_ONLY,
            dry_run=True,  # ファイルは削除しない
            verbose=True   # ファイルごとの結果を表示
        )

        if stats.would_delete == 0:
            print("削除対象のJPEGファイルはありません。")
            return

        # ステップ2: 確認後に削除
        print()
        answer = input(f"{stats.would_delete}個のJPEGファイルを削除しますか？ [y/N]: ")
        if answer.strip().lower() != 'y':
            print("削除を中止しました。")
            return

        print("ステップ2: 削除を実行")
        print("-" * 40)

        stats = CleanManager().run(
            raw_dir=raw_directory,
            jpeg_dir=jpeg_directory,
            mode=CleanMode.ORPHAN_ONLY,
            summary_only=True
        )

        print()
        print(f"✅ 処理が完了しました！（削除: {stats.deleted}個、失敗: {stats.delete_failed}個）")

    except ValidationError as e:
        print(f"⚠️  {e}")
        print("実際のディレクトリパスに変更してください。")
        sys.exit(1)


if __name__ == "__main__":
    example_basic_workflow()
