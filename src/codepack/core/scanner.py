# src/codepack/core/scanner.py
import sys
import os
from pathlib import Path
from typing import Iterator, List, Set

import pathspec

from codepack.config import BINARY_EXTENSIONS
from codepack.core.ignore import is_path_ignored
from codepack.models import SourceFile


class ProjectScanner:
    def __init__(self, root_dir: Path, ignore_spec: pathspec.PathSpec, extensions: Set[str]):
        self.root_dir = root_dir
        self.ignore_spec = ignore_spec
        self.extensions = extensions
        self.match_all = "*" in extensions

    def _is_binary_file(self, path: Path) -> bool:
        """
        Known binary extension, or a null byte in the first 8 KiB.
        """
        if path.suffix.lower().lstrip(".") in BINARY_EXTENSIONS:
            return True
        try:
            with path.open("rb") as f:
                chunk = f.read(8192)
                return b'\0' in chunk
        except OSError:
            # If we can't read it (permission, etc), treat as unsafe/binary
            return True

    def _matches_extension(self, path: Path) -> bool:
        if self.match_all:
            return True
        return path.suffix in self.extensions or path.name in self.extensions

    def _walk(self) -> Iterator[SourceFile]:
        for root, dirs, files in os.walk(self.root_dir):
            root_path = Path(root)

            # --- 1. Prune ignored directories (in-place, so os.walk skips them) ---
            for d in list(dirs):
                dir_rel_path = (root_path / d).relative_to(self.root_dir)
                if is_path_ignored(dir_rel_path, self.ignore_spec, is_directory=True):
                    dirs.remove(d)

            # --- 2. Process files ---
            for f in files:
                file_abs_path = root_path / f
                rel_path = file_abs_path.relative_to(self.root_dir)

                if is_path_ignored(rel_path, self.ignore_spec):
                    continue
                if not self._matches_extension(file_abs_path):
                    continue
                if self._is_binary_file(file_abs_path):
                    continue

                try:
                    content = file_abs_path.read_text(encoding="utf-8")
                except UnicodeDecodeError:
                    continue
                except OSError as e:
                    print(f"  > [Warning] Skipping {rel_path.as_posix()} (read error: {e})", file=sys.stderr)
                    continue

                yield SourceFile(path=rel_path.as_posix(), content=content)

    def scan(self) -> List[SourceFile]:
        """
        Walks the directory tree, pruning ignored directories, and returns the
        text files found, sorted by relative path.
        """
        return sorted(self._walk(), key=lambda f: f.path)
