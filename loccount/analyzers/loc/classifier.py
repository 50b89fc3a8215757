"""
Line Classifier

Streaming classification of physical lines into code, comment and blank.

One ``LineClassifier`` serves exactly one file scan. The only state carried
from line to line is its ``BlockCommentStack`` of unclosed block comments,
so independent scans never share anything and can run concurrently.
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, List, Optional

from .language import BlockPair, LanguageCommentSpec
from .models import ClassifiedLine, LineCategory

LOGGER_NAME = "loccount.classifier"
logger = logging.getLogger(LOGGER_NAME)

BYTE_ORDER_MARK = "\ufeff"
SHEBANG = "#!"


class BlockCommentStack:
    """
    Block comments opened but not yet closed, innermost last.
    """

    def __init__(self) -> None:
        self._contexts: List[BlockPair] = []

    def __len__(self) -> int:
        return len(self._contexts)

    def __bool__(self) -> bool:
        return bool(self._contexts)

    def push(self, pair: BlockPair) -> None:
        self._contexts.append(pair)

    def pop(self) -> BlockPair:
        return self._contexts.pop()

    def top(self) -> Optional[BlockPair]:
        return self._contexts[-1] if self._contexts else None

    def is_open(self, pair: BlockPair) -> bool:
        return pair in self._contexts


def trim_bom(line: str) -> str:
    if line.startswith(BYTE_ORDER_MARK):
        return line[len(BYTE_ORDER_MARK):]
    return line


def scan_block_comments(
    line: str,
    language: LanguageCommentSpec,
    stack: BlockCommentStack,
) -> bool:
    """
    Walk ``line`` left to right, opening and closing block comments on
    ``stack``. Returns True when a non-whitespace character was seen outside
    every block comment.
    """
    saw_code = False
    pos = 0
    length = len(line)

    while pos < length:
        top = stack.top()
        if top is not None and line.startswith(top[1], pos):
            stack.pop()
            pos += len(top[1])
            continue

        opened = None
        for pair in language.block_pairs:
            start, end = pair
            if not start or not line.startswith(start, pos):
                continue
            if start != end or not stack.is_open(pair):
                opened = pair
                break

        if opened is not None:
            stack.push(opened)
            pos += len(opened[0])
            continue

        if not stack and not line[pos].isspace():
            saw_code = True
        pos += 1

    return saw_code


class LineClassifier:
    """
    Classifies the lines of a single file for one language.
    """

    def __init__(self, language: LanguageCommentSpec, *, debug: bool = False) -> None:
        self.language = language
        self.debug = debug
        self.stack = BlockCommentStack()
        self.line_number = 0
        self._counts = {category: 0 for category in LineCategory}

    @property
    def in_block_comment(self) -> bool:
        return bool(self.stack)

    def classify(self, raw: str) -> ClassifiedLine:
        """
        Classify the next physical line of the file.
        """
        self.line_number += 1
        category, content = self._categorize(raw.strip())
        self._counts[category] += 1

        if self.debug:
            self._trace(category, raw)

        return ClassifiedLine(
            line_number=self.line_number,
            category=category,
            content=content,
            raw=raw,
        )

    def classify_lines(self, lines: Iterable[str]) -> Iterator[ClassifiedLine]:
        for raw in lines:
            yield self.classify(raw)

    def _categorize(self, line: str):
        language = self.language
        first_line = self.line_number == 1

        if not line:
            return LineCategory.BLANK, line

        if first_line and line.startswith(SHEBANG):
            return LineCategory.CODE, line

        if not self.stack:
            if first_line:
                line = trim_bom(line)

            for marker in language.line_markers:
                if line.startswith(marker):
                    if language.starts_block(line):
                        break
                    return LineCategory.COMMENT, line

            if not language.block_pairs:
                return LineCategory.CODE, line

            if not language.contains_block_start(line):
                return LineCategory.CODE, line

        if language.only_sentinel:
            return LineCategory.CODE, line

        if scan_block_comments(line, language, self.stack):
            return LineCategory.CODE, line
        return LineCategory.COMMENT, line

    def _trace(self, category: LineCategory, raw: str) -> None:
        tag = {
            LineCategory.CODE: "CODE",
            LineCategory.COMMENT: "COMM",
            LineCategory.BLANK: "BLNK",
        }[category]
        logger.debug(
            "[%s, cd:%d, cm:%d, bk:%d, iscm:%s, line_num:%d] %s",
            tag,
            self._counts[LineCategory.CODE],
            self._counts[LineCategory.COMMENT],
            self._counts[LineCategory.BLANK],
            self.in_block_comment,
            self.line_number,
            raw,
        )
