"""
カスタム例外クラス定義

photo-cleanupで使用する例外クラスを定義します。
サブディレクトリの読み取り失敗やファイル単位の削除失敗は例外ではなく
記録として扱い、ここで定義するのは処理を中断させるエラーのみです。
"""


class ProcessingError(Exception):
    """処理エラーの基底クラス"""
    pass


class ValidationError(ProcessingError):
    """検証エラー"""
    pass


class RootNotFoundError(ValidationError):
    """ルートディレクトリが存在しない"""
    pass


class RootUnreadableError(ValidationError):
    """ルートディレクトリを読み取れない"""
    pass


class FileOperationError(ProcessingError):
    """ファイル操作エラー"""
    pass
