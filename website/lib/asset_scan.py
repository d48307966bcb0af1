import logging
import os
from collections.abc import Iterator
from pathlib import Path
from typing import NamedTuple


class ScannedFile(NamedTuple):
    path: Path
    relative_path: str
    """POSIX path relative to the scan root."""
    name: str
    extension: str
    """Extension without the leading dot."""
    data: bytes


class ScanSkip(NamedTuple):
    path: Path
    reason: str


class AssetScan:
    """
    Recursive, fault-tolerant scan of a build output directory.

    Iterating yields every regular file that could be read. Entries that
    cannot be used are logged and collected in `skipped` instead of
    interrupting the scan. A root directory that cannot be opened
    yields nothing.

    >>> scan = AssetScan('build')
    >>> [f.relative_path for f in scan]
    ['fonts/inter-7f3e9a1b.woff2', 'index.a1b2c3d4.js', 'index.css']
    """

    __slots__ = ('root', 'skipped')

    def __init__(self, root: str | os.PathLike[str]) -> None:
        self.root = Path(root)
        self.skipped: list[ScanSkip] = []

    def __iter__(self) -> Iterator[ScannedFile]:
        self.skipped.clear()
        try:
            yield from self._scan_dir(self.root, '')
        except OSError as e:
            # only reachable for the root, subdirectory errors are skipped
            self._skip(self.root, f'cannot open directory: {e.strerror or e}')

    def _scan_dir(self, dir: Path, prefix: str) -> Iterator[ScannedFile]:
        with os.scandir(dir) as it:
            entries = sorted(it, key=lambda entry: entry.name)

        for entry in entries:
            path = Path(entry.path)
            name = entry.name

            try:
                name.encode()
            except UnicodeEncodeError:
                self._skip(path, 'filename is not valid UTF-8')
                continue

            try:
                is_dir = entry.is_dir(follow_symlinks=False)
                is_file = not is_dir and entry.is_file()
            except OSError as e:
                self._skip(path, f'cannot stat: {e.strerror or e}')
                continue

            if is_dir:
                try:
                    yield from self._scan_dir(path, f'{prefix}{name}/')
                except OSError as e:
                    self._skip(path, f'cannot open directory: {e.strerror or e}')
                continue

            if not is_file:
                self._skip(path, 'not a regular file')
                continue

            extension = Path(name).suffix[1:]
            if not extension:
                self._skip(path, 'missing file extension')
                continue

            try:
                data = path.read_bytes()
            except OSError as e:
                self._skip(path, f'cannot read: {e.strerror or e}')
                continue

            yield ScannedFile(path, prefix + name, name, extension, data)

    def _skip(self, path: Path, reason: str) -> None:
        logging.warning('Skipping asset %r: %s', str(path), reason)
        self.skipped.append(ScanSkip(path, reason))
