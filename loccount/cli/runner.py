from pathlib import Path
from typing import Iterable, Optional

from loccount.analyzers.loc.counter import DEFAULT_WORKERS, analyze_files
from loccount.analyzers.loc.exclusions import collect_source_files
from loccount.analyzers.loc.languages import detect_language
from loccount.analyzers.loc.models import DEFAULT_MAX_LINE_LENGTH, ResultCollection, ScanOptions
from loccount.analyzers.loc.report import build_report, render
from loccount.analyzers.loc.statistics import compute_statistics
from loccount.analyzers.loc.whitelist import build_whitelist_results, read_whitelist

def run_analysis(
    path: str,
    *,
    exclude: Iterable[str] = (),
    workers: int = DEFAULT_WORKERS,
    max_line_length: int = DEFAULT_MAX_LINE_LENGTH,
    debug: bool = False,
) -> ResultCollection:
    root = Path(path).resolve()
    if not root.exists():
        raise FileNotFoundError(f"Path not found: {root}")

    options = ScanOptions(debug=debug, max_line_length=max_line_length)
    files = collect_source_files(root, exclude)
    return analyze_files(files, detect_language, options, max_workers=workers)


def build_output(
    collection: ResultCollection,
    *,
    as_json: bool = False,
    by_file: bool = False,
    line_numbers: bool = False,
    whitelist: Optional[str] = None,
) -> str:
    report = build_report(
        collection,
        compute_statistics(collection),
        include_files=by_file or line_numbers,
        include_line_numbers=line_numbers,
    )

    if whitelist is not None:
        names = [str(Path(n).resolve()) for n in read_whitelist(whitelist)]
        report["whitelist"] = [
            r.as_dict() for r in build_whitelist_results(collection, names)
        ]

    return render(report, as_json)
