import json
from typing import Any, Dict, List

from .models import ResultCollection

def build_report(
    collection: ResultCollection,
    stats: dict,
    *,
    include_files: bool = True,
    include_line_numbers: bool = False,
) -> Dict[str, Any]:
    report: Dict[str, Any] = {
        "summary": collection.as_dict(),
        "languages": collection.by_language(),
        "statistics": stats,
        "truncated": [f.name for f in collection.truncated()],
        "unavailable": [f.name for f in collection.unavailable()],
    }

    if include_files:
        report["files"] = [
            f.as_dict(include_line_numbers=include_line_numbers)
            for f in collection.sorted()
        ]

    return report


def _table(header: List[str], rows: List[List[Any]]) -> List[str]:
    cells = [header] + [[str(c) for c in row] for row in rows]
    widths = [max(len(row[i]) for row in cells) for i in range(len(header))]

    def fmt(row: List[str]) -> str:
        first = row[0].ljust(widths[0])
        rest = [c.rjust(w) for c, w in zip(row[1:], widths[1:])]
        return "  ".join([first] + rest)

    rule = "-" * len(fmt(header))
    lines = [rule, fmt(header), rule]
    lines.extend(fmt(row) for row in cells[1:])
    lines.append(rule)
    return lines


def render_text(report: Dict[str, Any]) -> str:
    lines: List[str] = []

    if "files" in report:
        rows = [
            [f["name"], f["blank"], f["comment"], f["code"]]
            for f in report["files"]
        ]
        lines.extend(_table(["File", "blank", "comment", "code"], rows))
    else:
        rows = [
            [name, entry["files"], entry["blank"], entry["comment"], entry["code"]]
            for name, entry in report["languages"].items()
        ]
        lines.extend(_table(["Language", "files", "blank", "comment", "code"], rows))

    summary = report["summary"]
    lines.append(
        "TOTAL: {files} files, {code_lines} code, {comment_lines} comment, "
        "{blank_lines} blank".format(**summary)
    )

    for entry in report.get("whitelist", []):
        lines.append(
            f"{entry['file_name']}: code={len(entry['code_line'])} "
            f"comment={len(entry['comments_line'])} blank={len(entry['blanks_line'])}"
        )

    for name in report.get("truncated", []):
        lines.append(f"WARNING: {name} was only partially scanned")

    for name in report.get("unavailable", []):
        lines.append(f"WARNING: {name} could not be read")

    return "\n".join(lines)


def render(report: Dict[str, Any], as_json: bool) -> str:
    return json.dumps(report, indent=2) if as_json else render_text(report)
