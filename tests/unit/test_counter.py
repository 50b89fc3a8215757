import io
import threading
from pathlib import Path

import pytest

from loccount.analyzers.loc.counter import (
    analyze_file,
    analyze_files,
    analyze_lines,
    analyze_reader,
)
from loccount.analyzers.loc.language import make_language
from loccount.analyzers.loc.languages import detect_language
from loccount.analyzers.loc.models import ScanOptions, ScanStatus
from loccount.utils.buffer_pool import BufferPool


C_SOURCE = """\
#include <stdio.h>

/*
 * Entry point.
 */
int main(void) {
    // say hello
    printf("hi\\n"); /* trailing */
    return 0;
}
"""


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def c_lang():
    return make_language("C", ["//"], [("/*", "*/")])


@pytest.fixture
def source_tree(tmp_path: Path) -> Path:
    root = tmp_path / "proj"
    root.mkdir()
    (root / "main.c").write_text(C_SOURCE, encoding="utf-8")
    (root / "util.py").write_text('"""Module doc."""\n\nx = 1  # note\n', encoding="utf-8")
    (root / "run.sh").write_text("#!/bin/sh\n# comment\necho hi\n", encoding="utf-8")
    (root / "notes.bin").write_bytes(b"\x00\x01")
    return root


def assert_partition(result):
    total = result.total_lines
    numbers = result.line_numbers
    combined = numbers.code + numbers.comment + numbers.blank
    assert sorted(combined) == list(range(1, total + 1))
    for lines in (numbers.code, numbers.comment, numbers.blank):
        assert lines == sorted(lines)


# =============================================================================
# Single stream analysis
# =============================================================================

def test_analyze_reader_counts_c_file(c_lang):
    result = analyze_reader("main.c", c_lang, io.BytesIO(C_SOURCE.encode()))

    assert (result.code, result.comment, result.blank) == (5, 4, 1)
    assert result.line_numbers.comment == [3, 4, 5, 7]
    assert result.line_numbers.blank == [2]
    assert result.language == "C"
    assert result.status is ScanStatus.COMPLETE
    assert_partition(result)


def test_analyze_reader_empty_stream(c_lang):
    result = analyze_reader("empty.c", c_lang, io.BytesIO(b""))

    assert (result.code, result.comment, result.blank) == (0, 0, 0)
    assert result.line_numbers.code == []
    assert result.line_numbers.comment == []
    assert result.line_numbers.blank == []


def test_shebang_only_file_is_code():
    shell = detect_language(Path("run.sh"))
    result = analyze_reader("run.sh", shell, io.BytesIO(b"#!/bin/sh\n"))
    assert (result.code, result.comment) == (1, 0)


def test_analyze_lines_matches_reader(c_lang):
    from_lines = analyze_lines("main.c", c_lang, C_SOURCE.splitlines())
    from_reader = analyze_reader("main.c", c_lang, io.BytesIO(C_SOURCE.encode()))
    assert from_lines.line_numbers == from_reader.line_numbers


def test_observers_see_lines_in_order(c_lang):
    seen = []
    options = ScanOptions(
        on_code=lambda text: seen.append(("code", text)),
        on_comment=lambda text: seen.append(("comment", text)),
        on_blank=lambda text: seen.append(("blank", text)),
    )
    analyze_reader("a.c", c_lang, io.BytesIO(b"int a;\n\n  // c  \n"), options)

    assert seen == [("code", "int a;"), ("blank", ""), ("comment", "// c")]


def test_observers_do_not_change_counts(c_lang):
    plain = analyze_reader("main.c", c_lang, io.BytesIO(C_SOURCE.encode()))
    observed = analyze_reader(
        "main.c",
        c_lang,
        io.BytesIO(C_SOURCE.encode()),
        ScanOptions(on_code=lambda _: None, on_comment=lambda _: None),
    )
    assert plain == observed


def test_crlf_and_bom(c_lang):
    data = b"\xef\xbb\xbf// header\r\nint a;\r\n"
    result = analyze_reader("bom.c", c_lang, io.BytesIO(data))
    assert result.line_numbers.comment == [1]
    assert result.line_numbers.code == [2]


# =============================================================================
# Truncation & unavailable files
# =============================================================================

def test_line_too_long_marks_result_truncated(c_lang, caplog):
    data = b"int a;\n// c\n" + b"x" * 100 + b"\nint b;\n"
    pool = BufferPool(buffer_size=16)

    with caplog.at_level("WARNING", logger="loccount.counter"):
        result = analyze_reader(
            "long.c", c_lang, io.BytesIO(data), ScanOptions(max_line_length=50), pool
        )

    assert result.status is ScanStatus.TRUNCATED
    assert result.truncated is True
    assert (result.code, result.comment) == (1, 1)
    assert pool.stats()["in_use"] == 0
    assert "long.c" in caplog.text


def test_buffer_released_after_scan(c_lang):
    pool = BufferPool(buffer_size=16)
    analyze_reader("main.c", c_lang, io.BytesIO(C_SOURCE.encode()), pool=pool)
    assert pool.stats() == {"buffer_size": 16, "in_use": 0, "free": 1, "allocated": 1}


def test_analyze_file_missing_returns_empty(tmp_path: Path, c_lang):
    missing = tmp_path / "nope.c"
    result = analyze_file(missing, c_lang)

    assert result.name == str(missing)
    assert result.total_lines == 0
    assert result.status is ScanStatus.UNAVAILABLE


def test_analyze_file_reads_disk(source_tree: Path, c_lang):
    result = analyze_file(source_tree / "main.c", c_lang)
    assert result.code == 5
    assert result.name == str(source_tree / "main.c")


# =============================================================================
# Parallel scans
# =============================================================================

def test_analyze_files_skips_unknown_languages(source_tree: Path):
    paths = sorted(source_tree.iterdir())
    collection = analyze_files(paths, detect_language, max_workers=3)

    names = {Path(f.name).name for f in collection}
    assert names == {"main.c", "util.py", "run.sh"}


def test_parallel_matches_sequential(source_tree: Path):
    paths = [p for p in sorted(source_tree.iterdir()) if detect_language(p)]
    parallel = analyze_files(paths, detect_language, max_workers=4)
    sequential = analyze_files(paths, detect_language, max_workers=1)

    assert [f.as_dict(True) for f in parallel.sorted()] == [
        f.as_dict(True) for f in sequential.sorted()
    ]


def test_python_and_shell_counts(source_tree: Path):
    collection = analyze_files(sorted(source_tree.iterdir()), detect_language)
    by_name = {Path(f.name).name: f for f in collection}

    assert (by_name["util.py"].code, by_name["util.py"].comment, by_name["util.py"].blank) == (1, 1, 1)
    assert (by_name["run.sh"].code, by_name["run.sh"].comment) == (2, 1)


def test_cancelled_scan_starts_no_files(source_tree: Path):
    cancel = threading.Event()
    cancel.set()
    collection = analyze_files(sorted(source_tree.iterdir()), detect_language, cancel_event=cancel)
    assert len(collection) == 0


# =============================================================================
# Read errors
# =============================================================================

class FailingStream(io.BytesIO):
    """Serves ``good_reads`` chunks, then fails like a bad disk."""

    def __init__(self, data: bytes = b"", good_reads: int = 0):
        super().__init__(data)
        self.good_reads = good_reads

    def readinto(self, buffer):
        if self.good_reads <= 0:
            raise OSError(5, "Input/output error")
        self.good_reads -= 1
        return super().readinto(buffer)


def test_read_error_before_any_line_is_unavailable(c_lang, caplog):
    pool = BufferPool(buffer_size=16)
    with caplog.at_level("WARNING", logger="loccount.counter"):
        result = analyze_reader("bad.c", c_lang, FailingStream(), pool=pool)

    assert result.status is ScanStatus.UNAVAILABLE
    assert result.total_lines == 0
    assert pool.stats()["in_use"] == 0
    assert "bad.c" in caplog.text


def test_read_error_mid_file_keeps_partial_result(c_lang):
    stream = FailingStream(b"int a;\n// c\nint b;\n", good_reads=1)
    result = analyze_reader("half.c", c_lang, stream, pool=BufferPool(buffer_size=12))

    assert result.status is ScanStatus.TRUNCATED
    assert (result.code, result.comment) == (1, 1)


def test_read_error_does_not_abort_other_files(source_tree: Path, monkeypatch):
    import loccount.analyzers.loc.counter as counter

    real_open = open

    def flaky_open(path, mode="r", *args, **kwargs):
        if Path(path).name == "util.py":
            return FailingStream()
        return real_open(path, mode, *args, **kwargs)

    monkeypatch.setattr(counter, "open", flaky_open, raising=False)
    collection = analyze_files(sorted(source_tree.iterdir()), detect_language, max_workers=1)
    by_name = {Path(f.name).name: f for f in collection}

    assert by_name["util.py"].status is ScanStatus.UNAVAILABLE
    assert by_name["main.c"].code == 5
    assert by_name["run.sh"].status is ScanStatus.COMPLETE


def test_debug_line_lists_logged_without_cli(c_lang, caplog):
    caplog.set_level("DEBUG")
    analyze_reader("a.c", c_lang, io.BytesIO(b"int a;\n// c\n"), ScanOptions(debug=True))

    assert "code_line=[1]" in caplog.text
    assert "comments_line=[2]" in caplog.text
