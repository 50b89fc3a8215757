import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from contextlib import closing
from pathlib import Path
from typing import BinaryIO, Callable, Iterable, Optional, Union

from loccount.utils.buffer_pool import DEFAULT_POOL, BufferPool
from loccount.utils.line_reader import LineReader

from .classifier import LineClassifier
from .errors import LineTooLongError
from .language import LanguageCommentSpec
from .models import FileResult, ResultCollection, ScanOptions, ScanStatus

LOGGER_NAME = "loccount.counter"
logger = logging.getLogger(LOGGER_NAME)

LanguageResolver = Callable[[Path], Optional[LanguageCommentSpec]]

DEFAULT_WORKERS = 4


def _classify_into(
    result: FileResult,
    classifier: LineClassifier,
    lines: Iterable[str],
    options: ScanOptions,
) -> None:
    for line in classifier.classify_lines(lines):
        result.record(line, options)


def _log_line_numbers(result: FileResult) -> None:
    logger.debug("code_line=%s", result.line_numbers.code)
    logger.debug("blanks_line=%s", result.line_numbers.blank)
    logger.debug("comments_line=%s", result.line_numbers.comment)


def analyze_lines(
    name: str,
    language: LanguageCommentSpec,
    lines: Iterable[str],
    options: Optional[ScanOptions] = None,
) -> FileResult:
    """
    Classify already split text lines.
    """
    options = options or ScanOptions()
    result = FileResult(name=name, language=language.name)
    classifier = LineClassifier(language, debug=options.debug)

    _classify_into(result, classifier, lines, options)

    if options.debug:
        _log_line_numbers(result)
    return result


def analyze_reader(
    name: str,
    language: LanguageCommentSpec,
    stream: BinaryIO,
    options: Optional[ScanOptions] = None,
    pool: Optional[BufferPool] = None,
) -> FileResult:
    """
    Classify every line of a binary stream.

    A line longer than ``options.max_line_length`` ends the scan; the lines
    before it stay counted and the result is marked TRUNCATED. A read error
    does the same, or marks the result UNAVAILABLE when no line was read.
    """
    options = options or ScanOptions()
    pool = pool or DEFAULT_POOL

    if options.debug:
        logger.debug("filename=%s", name)

    result = FileResult(name=name, language=language.name)
    classifier = LineClassifier(language, debug=options.debug)

    with pool.borrow() as buffer:
        reader = LineReader(
            stream,
            buffer,
            max_line_length=options.max_line_length,
            encoding=options.encoding,
            errors=options.errors,
        )
        try:
            with closing(iter(reader)) as lines:
                _classify_into(result, classifier, lines, options)
        except LineTooLongError as exc:
            logger.warning("Stopped scanning %s: %s", name, exc)
            result.status = ScanStatus.TRUNCATED
        except OSError as exc:
            logger.warning("Read error in %s: %s", name, exc)
            if result.total_lines:
                result.status = ScanStatus.TRUNCATED
            else:
                result.status = ScanStatus.UNAVAILABLE

    if options.debug:
        _log_line_numbers(result)
    return result


def analyze_file(
    path: Union[str, Path],
    language: LanguageCommentSpec,
    options: Optional[ScanOptions] = None,
    pool: Optional[BufferPool] = None,
) -> FileResult:
    """
    Classify a file on disk. A file that cannot be opened yields an empty
    result rather than an error.
    """
    name = str(path)
    try:
        handle = open(path, "rb")
    except OSError as exc:
        logger.warning("Cannot open %s: %s", name, exc)
        return FileResult.empty(name)

    with handle:
        return analyze_reader(name, language, handle, options, pool)


def analyze_files(
    paths: Iterable[Union[str, Path]],
    resolver: LanguageResolver,
    options: Optional[ScanOptions] = None,
    *,
    max_workers: int = DEFAULT_WORKERS,
    cancel_event: Optional[threading.Event] = None,
    pool: Optional[BufferPool] = None,
) -> ResultCollection:
    """
    Scan many files in parallel and collect the results.

    Files whose language cannot be resolved are skipped. A set
    ``cancel_event`` stops new scans from starting; scans already running
    finish their file.
    """
    collection = ResultCollection()
    pool = pool or DEFAULT_POOL

    def scan(path: Path) -> None:
        if cancel_event is not None and cancel_event.is_set():
            return
        language = resolver(path)
        if language is None:
            logger.debug("Skipping %s: unknown language", path)
            return
        collection.add(analyze_file(path, language, options, pool))

    with ThreadPoolExecutor(max_workers=max(1, max_workers)) as executor:
        futures = [executor.submit(scan, Path(p)) for p in paths]
        for future in futures:
            future.result()

    return collection
