import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Iterator, List, Optional, Tuple

DEFAULT_MAX_LINE_LENGTH = 1024 * 1024

LineObserver = Callable[[str], None]


class LineCategory(str, Enum):
    CODE = "code"
    COMMENT = "comment"
    BLANK = "blank"


class ScanStatus(str, Enum):
    COMPLETE = "complete"
    TRUNCATED = "truncated"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class ClassifiedLine:
    line_number: int
    category: LineCategory
    content: str
    raw: str = ""


@dataclass
class ScanOptions:
    """
    Per-scan settings and observer hooks.

    Observers receive the trimmed text of each line of their category, in
    line order. They never influence classification.
    """

    on_code: Optional[LineObserver] = None
    on_comment: Optional[LineObserver] = None
    on_blank: Optional[LineObserver] = None
    debug: bool = False
    max_line_length: int = DEFAULT_MAX_LINE_LENGTH
    encoding: str = "utf-8"
    errors: str = "replace"


@dataclass
class LineNumbers:
    code: List[int] = field(default_factory=list)
    comment: List[int] = field(default_factory=list)
    blank: List[int] = field(default_factory=list)


@dataclass
class FileResult:
    name: str
    language: str = ""
    code: int = 0
    comment: int = 0
    blank: int = 0
    line_numbers: LineNumbers = field(default_factory=LineNumbers)
    status: ScanStatus = ScanStatus.COMPLETE

    @classmethod
    def empty(cls, name: str) -> "FileResult":
        """Result for a file that could not be opened at all."""
        return cls(name=name, status=ScanStatus.UNAVAILABLE)

    @property
    def total_lines(self) -> int:
        return self.code + self.comment + self.blank

    @property
    def truncated(self) -> bool:
        return self.status is ScanStatus.TRUNCATED

    def record_code(self, line_number: int, content: str, options: Optional[ScanOptions] = None) -> None:
        self.code += 1
        self.line_numbers.code.append(line_number)
        if options is not None and options.on_code is not None:
            options.on_code(content)

    def record_comment(self, line_number: int, content: str, options: Optional[ScanOptions] = None) -> None:
        self.comment += 1
        self.line_numbers.comment.append(line_number)
        if options is not None and options.on_comment is not None:
            options.on_comment(content)

    def record_blank(self, line_number: int, content: str, options: Optional[ScanOptions] = None) -> None:
        self.blank += 1
        self.line_numbers.blank.append(line_number)
        if options is not None and options.on_blank is not None:
            options.on_blank(content)

    def record(self, line: ClassifiedLine, options: Optional[ScanOptions] = None) -> None:
        if line.category is LineCategory.CODE:
            self.record_code(line.line_number, line.content, options)
        elif line.category is LineCategory.COMMENT:
            self.record_comment(line.line_number, line.content, options)
        else:
            self.record_blank(line.line_number, line.content, options)

    def sort_key(self) -> Tuple[int, str]:
        return -self.code, self.name

    def __lt__(self, other: "FileResult") -> bool:
        return self.sort_key() < other.sort_key()

    def as_dict(self, include_line_numbers: bool = False) -> Dict[str, object]:
        data: Dict[str, object] = {
            "name": self.name,
            "language": self.language,
            "code": self.code,
            "comment": self.comment,
            "blank": self.blank,
            "status": self.status.value,
        }
        if include_line_numbers:
            data["line_num"] = {
                "code_line": list(self.line_numbers.code),
                "comments_line": list(self.line_numbers.comment),
                "blanks_line": list(self.line_numbers.blank),
            }
        return data


class ResultCollection:
    """
    Thread-safe collection of per-file results.

    Appends may come from concurrent workers; ``sorted()`` gives report order
    (code lines descending, then name ascending).
    """

    def __init__(self, files: Optional[List[FileResult]] = None) -> None:
        self._lock = threading.Lock()
        self._files: List[FileResult] = list(files or [])

    def add(self, result: FileResult) -> None:
        with self._lock:
            self._files.append(result)

    def __len__(self) -> int:
        return len(self.files)

    def __iter__(self) -> Iterator[FileResult]:
        return iter(self.files)

    @property
    def files(self) -> List[FileResult]:
        with self._lock:
            return list(self._files)

    def sorted(self) -> List[FileResult]:
        return sorted(self.files, key=FileResult.sort_key)

    @property
    def total_files(self) -> int:
        return len(self.files)

    @property
    def code(self) -> int:
        return sum(f.code for f in self.files)

    @property
    def comment(self) -> int:
        return sum(f.comment for f in self.files)

    @property
    def blank(self) -> int:
        return sum(f.blank for f in self.files)

    @property
    def total_lines(self) -> int:
        return sum(f.total_lines for f in self.files)

    def truncated(self) -> List[FileResult]:
        return [f for f in self.sorted() if f.truncated]

    def unavailable(self) -> List[FileResult]:
        return [f for f in self.sorted() if f.status is ScanStatus.UNAVAILABLE]

    def scanned(self) -> List[FileResult]:
        """Results of files that could be read at least in part."""
        return [f for f in self.files if f.status is not ScanStatus.UNAVAILABLE]

    def by_language(self) -> Dict[str, Dict[str, int]]:
        totals: Dict[str, Dict[str, int]] = {}
        for f in self.scanned():
            entry = totals.setdefault(
                f.language,
                {"files": 0, "code": 0, "comment": 0, "blank": 0},
            )
            entry["files"] += 1
            entry["code"] += f.code
            entry["comment"] += f.comment
            entry["blank"] += f.blank
        return dict(
            sorted(totals.items(), key=lambda item: (-item[1]["code"], item[0]))
        )

    def as_dict(self) -> Dict[str, int]:
        return {
            "files": self.total_files,
            "total_lines": self.total_lines,
            "code_lines": self.code,
            "blank_lines": self.blank,
            "comment_lines": self.comment,
        }
