# photo-cleanup
# A Python tool to delete JPEG files depending on whether a matching RAW file exists

__version__ = '0.1.0'

from .models import (
    CleanMode, CleanStats, FileAction, FileEntry, FileOutcome, MatchResult, MatchStatus, ScanResult
)
from .exceptions import (
    ProcessingError, ValidationError, RootNotFoundError, RootUnreadableError, FileOperationError
)
from .path_validator import PathValidator
from .file_scanner import FileScanner
from .indexer import RawFileIndex, RawIndexer, IndexResult
from .matcher import Matcher
from .deleter import Deleter
from .logger import ProgressLogger, LogConfig, create_default_logger
from .clean_manager import CleanManager

__all__ = [
    'CleanMode',
    'CleanStats',
    'FileAction',
    'FileEntry',
    'FileOutcome',
    'MatchResult',
    'MatchStatus',
    'ScanResult',
    'ProcessingError',
    'ValidationError',
    'RootNotFoundError',
    'RootUnreadableError',
    'FileOperationError',
    'PathValidator',
    'FileScanner',
    'RawFileIndex',
    'RawIndexer',
    'IndexResult',
    'Matcher',
    'Deleter',
    'ProgressLogger',
    'LogConfig',
    'create_default_logger',
    'CleanManager'
]
