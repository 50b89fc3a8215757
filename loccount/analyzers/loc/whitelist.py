from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Union

from .errors import WhitelistError
from .models import ResultCollection


@dataclass
class WhitelistResult:
    file_name: str
    code_lines: List[int] = field(default_factory=list)
    comment_lines: List[int] = field(default_factory=list)
    blank_lines: List[int] = field(default_factory=list)

    def as_dict(self) -> Dict[str, object]:
        return {
            "file_name": self.file_name,
            "code_line": list(self.code_lines),
            "comments_line": list(self.comment_lines),
            "blanks_line": list(self.blank_lines),
        }


def read_whitelist(path: Union[str, Path]) -> List[str]:
    """
    Read one file name per line, skipping blank lines.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise WhitelistError(f"Failed to read whitelist {path}: {exc}") from exc

    return [line.strip() for line in text.splitlines() if line.strip()]


def build_whitelist_results(
    collection: ResultCollection,
    names: Iterable[str],
) -> List[WhitelistResult]:
    """
    Line-number breakdown for each scanned file named in the whitelist,
    in report order.
    """
    wanted = set(names)
    results = []
    for f in collection.sorted():
        if f.name not in wanted:
            continue
        results.append(
            WhitelistResult(
                file_name=f.name,
                code_lines=list(f.line_numbers.code),
                comment_lines=list(f.line_numbers.comment),
                blank_lines=list(f.line_numbers.blank),
            )
        )
    return results
