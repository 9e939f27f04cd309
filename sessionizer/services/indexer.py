import fnmatch
import logging
import os
from collections.abc import Iterable, Iterator
from pathlib import Path

from sessionizer.config import IndexEntry

logger = logging.getLogger(__name__)

DepthSpec = dict[int, set[Path]]


def build_depth_spec(entries: Iterable[IndexEntry]) -> DepthSpec:
    """Group configured roots by scan depth, merging entries that share a depth."""
    spec: DepthSpec = {}
    for entry in entries:
        roots = spec.setdefault(entry.depth, set())
        roots.update(Path(os.path.abspath(os.path.expanduser(r))) for r in entry.roots)
    return spec


def _is_excluded(name: str, exclude: list[str]) -> bool:
    return any(fnmatch.fnmatchcase(name, pattern) for pattern in exclude)


def _as_entry(path: str) -> str:
    return path.rstrip(os.sep) + os.sep


def _walk(root: Path, max_depth: int, exclude: list[str]) -> Iterator[str]:
    """Yield directories 1..max_depth levels below root, pruning excluded names."""
    root_str = str(root)
    root_level = root_str.rstrip(os.sep).count(os.sep)

    def _on_error(err: OSError) -> None:
        logger.debug("Skipping unreadable directory", extra={"path": err.filename, "error": err.strerror})

    for dirpath, dirnames, _ in os.walk(root_str, onerror=_on_error):
        level = dirpath.rstrip(os.sep).count(os.sep) - root_level
        dirnames[:] = [d for d in dirnames if not _is_excluded(d, exclude)]
        for d in dirnames:
            yield _as_entry(os.path.join(dirpath, d))
        if level + 1 >= max_depth:
            dirnames.clear()


def scan_root(root: Path, depth: int, exclude: list[str]) -> list[str]:
    """Directories under one root. Depth 0 means the root itself only."""
    if not root.is_dir():
        logger.debug("Skipping missing scan root", extra={"root": str(root)})
        return []
    if any(_is_excluded(part, exclude) for part in root.parts):
        return []
    if depth == 0:
        return [_as_entry(str(root))]
    return list(_walk(root, depth, exclude))


def index_directories(depth_spec: DepthSpec, exclude: list[str]) -> list[str]:
    found: set[str] = set()
    for depth, roots in depth_spec.items():
        for root in roots:
            found.update(scan_root(root, depth, exclude))
    logger.debug("Indexed directories", extra={"count": len(found)})
    return sorted(found)


class FilesystemIndexer:
    def __init__(self, depth_spec: DepthSpec, exclude: list[str]) -> None:
        self.depth_spec = depth_spec
        self.exclude = exclude

    def index(self) -> list[str]:
        return index_directories(self.depth_spec, self.exclude)
