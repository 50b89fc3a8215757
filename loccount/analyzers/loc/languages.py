from pathlib import Path
from typing import Dict, Optional

from .language import NO_BLOCK_COMMENTS, LanguageCommentSpec, make_language

C_BLOCK = ("/*", "*/")
HTML_BLOCK = ("<!--", "-->")

BUILTIN_LANGUAGES: Dict[str, LanguageCommentSpec] = {
    lang.name: lang
    for lang in (
        make_language("C", ["//"], [C_BLOCK]),
        make_language("C Header", ["//"], [C_BLOCK]),
        make_language("C++", ["//"], [C_BLOCK]),
        make_language("C#", ["//"], [C_BLOCK]),
        make_language("CSS", [], [C_BLOCK]),
        make_language("Go", ["//"], [C_BLOCK]),
        make_language("Java", ["//"], [C_BLOCK]),
        make_language("JavaScript", ["//"], [C_BLOCK]),
        make_language("TypeScript", ["//"], [C_BLOCK]),
        make_language("Kotlin", ["//"], [C_BLOCK]),
        make_language("Scala", ["//"], [C_BLOCK]),
        make_language("Swift", ["//"], [C_BLOCK]),
        make_language("Rust", ["//"], [C_BLOCK]),
        make_language("PHP", ["#", "//"], [C_BLOCK]),
        make_language("Python", ["#"], [('"""', '"""'), ("'''", "'''")]),
        make_language("Ruby", ["#"], [("=begin", "=end")]),
        make_language("Perl", ["#"], [("=pod", "=cut")]),
        make_language("Bourne Shell", ["#"], [NO_BLOCK_COMMENTS]),
        make_language("PowerShell", ["#"], [("<#", "#>")]),
        make_language("Lua", ["--"], [("--[[", "]]")]),
        make_language("Haskell", ["--"], [("{-", "-}")]),
        make_language("SQL", ["--"], [C_BLOCK]),
        make_language("HTML", ["//", "<!--"], [HTML_BLOCK]),
        make_language("XML", ["<!--"], [HTML_BLOCK]),
        make_language("Markdown", [], [NO_BLOCK_COMMENTS]),
        make_language("YAML", ["#"], [NO_BLOCK_COMMENTS]),
        make_language("TOML", ["#"], [NO_BLOCK_COMMENTS]),
        make_language("Makefile", ["#"], [NO_BLOCK_COMMENTS]),
        make_language("Plain Text", [], [NO_BLOCK_COMMENTS]),
    )
}

LANGUAGE_BY_EXTENSION: Dict[str, str] = {
    ".c": "C",
    ".h": "C Header",
    ".cc": "C++",
    ".cpp": "C++",
    ".cxx": "C++",
    ".hpp": "C++",
    ".cs": "C#",
    ".css": "CSS",
    ".go": "Go",
    ".java": "Java",
    ".js": "JavaScript",
    ".mjs": "JavaScript",
    ".ts": "TypeScript",
    ".tsx": "TypeScript",
    ".kt": "Kotlin",
    ".scala": "Scala",
    ".swift": "Swift",
    ".rs": "Rust",
    ".php": "PHP",
    ".py": "Python",
    ".rb": "Ruby",
    ".pl": "Perl",
    ".sh": "Bourne Shell",
    ".ps1": "PowerShell",
    ".lua": "Lua",
    ".hs": "Haskell",
    ".sql": "SQL",
    ".html": "HTML",
    ".htm": "HTML",
    ".xml": "XML",
    ".md": "Markdown",
    ".yml": "YAML",
    ".yaml": "YAML",
    ".toml": "TOML",
    ".mk": "Makefile",
    ".txt": "Plain Text",
}

LANGUAGE_BY_FILENAME: Dict[str, str] = {
    "Makefile": "Makefile",
    "makefile": "Makefile",
    "GNUmakefile": "Makefile",
}

LANGUAGE_BY_INTERPRETER: Dict[str, str] = {
    "sh": "Bourne Shell",
    "bash": "Bourne Shell",
    "zsh": "Bourne Shell",
    "python": "Python",
    "python3": "Python",
    "ruby": "Ruby",
    "perl": "Perl",
    "node": "JavaScript",
    "lua": "Lua",
}


def get_language(name: str) -> Optional[LanguageCommentSpec]:
    return BUILTIN_LANGUAGES.get(name)


def detect_language_from_shebang(path: Path) -> Optional[str]:
    """
    Read the first line of an extensionless file and map its interpreter.
    """
    try:
        with path.open("rb") as handle:
            first = handle.readline(256)
    except OSError:
        return None

    if not first.startswith(b"#!"):
        return None

    parts = first[2:].decode("utf-8", errors="ignore").split()
    if not parts:
        return None

    interpreter = Path(parts[0]).name
    if interpreter == "env" and len(parts) > 1:
        interpreter = parts[1]
    return LANGUAGE_BY_INTERPRETER.get(interpreter)


def detect_language(path: Path) -> Optional[LanguageCommentSpec]:
    """
    Resolve a file to its comment syntax, or None when the language is
    unknown.
    """
    name = LANGUAGE_BY_FILENAME.get(path.name)
    if name is None:
        name = LANGUAGE_BY_EXTENSION.get(path.suffix.lower())
    if name is None and not path.suffix:
        name = detect_language_from_shebang(path)
    if name is None:
        return None
    return BUILTIN_LANGUAGES[name]
