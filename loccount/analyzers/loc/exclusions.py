from pathlib import Path
from typing import Iterable, Iterator

from loccount.utils.repository_utils import walk_repository_tree

from .languages import detect_language

def collect_source_files(root: Path, exclude: Iterable[str] = ()) -> Iterator[Path]:
    """
    Yield files under ``root`` whose language is known, in walk order.

    Directory names in ``exclude`` are pruned on top of the walker's
    defaults.
    """
    if root.is_file():
        if detect_language(root) is not None:
            yield root
        return

    for item in walk_repository_tree(root, exclude_dirs=exclude):
        if detect_language(item) is not None:
            yield item
