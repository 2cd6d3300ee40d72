"""Line-oriented text files, one integer age per line, one file per region."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator, Optional, TextIO, Tuple

from ..config import DEFAULT_SUFFIX

COMMENT_PREFIX = "#"


def parse_age(line: str, lineno: int, path: Path) -> Optional[int]:
    """Parse one line into an age, returning None for blank or comment lines."""
    text = line.strip()
    if not text or text.startswith(COMMENT_PREFIX):
        return None
    try:
        return int(text)
    except ValueError as exc:
        raise ValueError(f"{path}:{lineno}: expected an integer age, found {text!r}") from exc


class TextFileSource:
    """AgeSource reading a file lazily; the open handle is the released resource."""

    def __init__(self, path: Path, encoding: str = "utf-8") -> None:
        self.path = Path(path)
        self._handle: Optional[TextIO] = self.path.open("r", encoding=encoding)

    @property
    def closed(self) -> bool:
        return self._handle is None

    def __iter__(self) -> Iterator[int]:
        if self._handle is None:
            raise ValueError(f"Source for {self.path} is already closed.")
        for lineno, line in enumerate(self._handle, start=1):
            age = parse_age(line, lineno, self.path)
            if age is not None:
                yield age

    def close(self) -> None:
        if self._handle is not None:
            handle, self._handle = self._handle, None
            handle.close()


class DirectorySourceFactory:
    """SourceFactory mapping region ``name`` to ``<root>/<name><suffix>``."""

    def __init__(self, root: Path, suffix: str = DEFAULT_SUFFIX, encoding: str = "utf-8") -> None:
        self.root = Path(root)
        self.suffix = suffix
        self.encoding = encoding

    def path_for(self, region: str) -> Path:
        if not region or Path(region).name != region or region in {".", ".."}:
            raise ValueError(f"Region identifier {region!r} cannot be used as a file name.")
        return self.root / f"{region}{self.suffix}"

    def available_regions(self) -> Tuple[str, ...]:
        """Return region names with a data file under `root`, sorted."""
        if not self.root.is_dir():
            return ()
        names = []
        for path in self.root.glob(f"*{self.suffix}"):
            if not path.is_file():
                continue
            names.append(path.name[: len(path.name) - len(self.suffix)])
        return tuple(sorted(names))

    def __call__(self, region: str) -> TextFileSource:
        return TextFileSource(self.path_for(region), encoding=self.encoding)


__all__ = ["COMMENT_PREFIX", "DirectorySourceFactory", "TextFileSource", "parse_age"]
