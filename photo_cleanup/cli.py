"""
コマンドラインインターフェース

photo-cleanupのメインエントリーポイントです。
argparseのサブコマンド機能を使用して、clean、clean-matchedコマンドを提供します。
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .clean_manager import CleanManager
from .exceptions import ProcessingError, ValidationError
from .models import CleanMode
from .path_validator import PathValidator


COMMAND_MODES = {
    'clean': CleanMode.ORPHAN_ONLY,
    'clean-matched': CleanMode.MATCHED_ONLY,
}


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    """clean / clean-matched 共通のオプションを追加"""
    parser.add_argument(
        '--raw', '-r',
        type=str,
        required=True,
        help='RAWファイルのルートディレクトリパス'
    )
    parser.add_argument(
        '--compressed', '-c',
        type=str,
        required=True,
        help='JPEGファイルのルートディレクトリパス'
    )
    parser.add_argument(
        '--dry',
        action='store_true',
        help='削除せずに削除予定のファイルを報告する'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='ファイルごとの結果を表示'
    )
    parser.add_argument(
        '--summary-only',
        action='store_true',
        help='サマリーのみ表示（--verboseより優先）'
    )
    parser.add_argument(
        '--log-file',
        type=str,
        help='詳細ログ（DEBUGレベル）の出力先ファイル'
    )


def create_parser() -> argparse.ArgumentParser:
    """
    コマンドライン引数パーサーを作成

    Returns:
        設定済みのArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog='photo-cleanup',
        description='RAWファイルの有無に応じてJPEGファイルを削除するツール',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
使用例:
  # 対応するRAWファイルのないJPEGファイルを削除
  photo-cleanup clean --raw /path/to/raw --compressed /path/to/jpeg

  # 対応するRAWファイルのあるJPEGファイルを削除
  photo-cleanup clean-matched -r /path/to/raw -c /path/to/jpeg

  # 削除せずに結果のみ確認
  photo-cleanup clean -r /path/to/raw -c /path/to/jpeg --dry --verbose

詳細については各サブコマンドのヘルプを参照してください:
  photo-cleanup <command> --help
        """
    )
    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    # サブコマンドを作成
    subparsers = parser.add_subparsers(
        dest='command',
        help='利用可能なコマンド',
        metavar='<command>'
    )

    # cleanコマンド
    clean_parser = subparsers.add_parser(
        'clean',
        help='対応するRAWファイルのないJPEGファイルを削除',
        description='RAWディレクトリに同じ相対パス・同じファイル名のRAWファイルがないJPEGファイルを削除します。',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
使用例:
  # 基本的な使用方法
  photo-cleanup clean --raw /path/to/raw --compressed /path/to/jpeg

  # 削除予定のファイルを確認（ドライラン）
  photo-cleanup clean -r /path/to/raw -c /path/to/jpeg --dry --verbose
        """
    )
    _add_common_arguments(clean_parser)

    # clean-matchedコマンド
    matched_parser = subparsers.add_parser(
        'clean-matched',
        help='対応するRAWファイルのあるJPEGファイルを削除',
        description='RAWディレクトリに同じ相対パス・同じファイル名のRAWファイルがあるJPEGファイルを削除します。',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
使用例:
  # 基本的な使用方法
  photo-cleanup clean-matched --raw /path/to/raw --compressed /path/to/jpeg

  # サマリーのみ表示
  photo-cleanup clean-matched -r /path/to/raw -c /path/to/jpeg --summary-only
        """
    )
    _add_common_arguments(matched_parser)

    return parser


def handle_clean_command(args) -> int:
    """
    clean / clean-matchedコマンドを処理

    Args:
        args: 解析されたコマンドライン引数

    Returns:
        終了コード（0: 成功（ファイル単位のエラーを含む）、1: エラー）
    """
    try:
        raw_path = PathValidator.normalize_path(args.raw)
        jpeg_path = PathValidator.normalize_path(args.compressed)
        log_file = Path(args.log_file).expanduser() if args.log_file else None

        clean_manager = CleanManager()
        clean_manager.run(
            raw_dir=raw_path,
            jpeg_dir=jpeg_path,
            mode=COMMAND_MODES[args.command],
            dry_run=args.dry,
            verbose=args.verbose,
            summary_only=args.summary_only,
            log_file=log_file
        )

        return 0

    except ValidationError as e:
        print(f"❌ 入力エラー: {e}", file=sys.stderr)
        return 1
    except ProcessingError as e:
        print(f"❌ 処理エラー: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"❌ 予期しないエラー: {e}", file=sys.stderr)
        return 1


def main(argv: Optional[List[str]] = None) -> int:
    """
    メインエントリーポイント

    Args:
        argv: コマンドライン引数（省略時はsys.argv）

    Returns:
        終了コード（0: 成功、1: エラー）
    """
    parser = create_parser()

    if argv is None:
        argv = sys.argv[1:]

    # 引数が指定されていない場合はヘルプを表示
    if not argv:
        parser.print_help()
        return 0

    args = parser.parse_args(argv)

    # コマンドが指定されていない場合はヘルプを表示
    if not args.command:
        parser.print_help()
        return 0

    if args.command in COMMAND_MODES:
        return handle_clean_command(args)

    print(f"❌ 不明なコマンド: {args.command}", file=sys.stderr)
    parser.print_help()
    return 1


if __name__ == '__main__':
    sys.exit(main())
