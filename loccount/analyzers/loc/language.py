from dataclasses import dataclass, field
from typing import Iterable, Tuple

from .errors import InvalidLanguageSpecError

BlockPair = Tuple[str, str]

NO_BLOCK_COMMENTS: BlockPair = ("", "")


@dataclass(frozen=True)
class LanguageCommentSpec:
    """
    Comment syntax for one language.

    ``line_markers`` are checked in order and the first match wins.
    ``block_pairs`` holds (start, end) delimiters; the pair ("", "") means the
    language has no block comments and must then be the only pair.
    """

    name: str
    line_markers: Tuple[str, ...] = ()
    block_pairs: Tuple[BlockPair, ...] = ()
    block_starts: Tuple[str, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        markers = tuple(self.line_markers)
        pairs = tuple((start, end) for start, end in self.block_pairs)

        if NO_BLOCK_COMMENTS in pairs and len(pairs) != 1:
            raise InvalidLanguageSpecError(
                f"{self.name}: the no-block-comments pair must be the sole block pair"
            )
        for start, end in pairs:
            if (start == "") != (end == ""):
                raise InvalidLanguageSpecError(
                    f"{self.name}: block pair {start!r}, {end!r} is half empty"
                )
        if any(marker == "" for marker in markers):
            raise InvalidLanguageSpecError(f"{self.name}: empty line comment marker")

        object.__setattr__(self, "line_markers", markers)
        object.__setattr__(self, "block_pairs", pairs)
        object.__setattr__(
            self, "block_starts", tuple(start for start, _ in pairs if start)
        )

    @property
    def has_block_comments(self) -> bool:
        return bool(self.block_pairs) and self.block_pairs != (NO_BLOCK_COMMENTS,)

    @property
    def only_sentinel(self) -> bool:
        return self.block_pairs == (NO_BLOCK_COMMENTS,)

    def starts_block(self, line: str) -> bool:
        """True if some block start delimiter is a prefix of ``line``."""
        return any(line.startswith(start) for start in self.block_starts)

    def contains_block_start(self, line: str) -> bool:
        """True if ``line`` contains any block start delimiter."""
        if self.only_sentinel:
            return True
        return any(start in line for start in self.block_starts)


def make_language(
    name: str,
    line_markers: Iterable[str] = (),
    block_pairs: Iterable[BlockPair] = (),
) -> LanguageCommentSpec:
    return LanguageCommentSpec(
        name=name,
        line_markers=tuple(line_markers),
        block_pairs=tuple(block_pairs),
    )
