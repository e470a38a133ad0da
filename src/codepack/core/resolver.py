# src/codepack/core/resolver.py
from typing import List, Mapping, Optional

from codepack.config import PATH_ALIASES, REJECTED_PREFIXES, RESOLVE_EXTENSIONS


def normalize_path(path: str) -> str:
    """
    Forward-slash form of `path` with '.' and '..' collapsed against an
    implicit root. '..' segments above the root are dropped.
    """
    parts: List[str] = []
    for segment in path.replace("\\", "/").split("/"):
        if segment in ("", "."):
            continue
        if segment == "..":
            if parts:
                parts.pop()
            continue
        parts.append(segment)
    return "/".join(parts)


def parent_dir(normalized_path: str) -> str:
    head, _, _ = normalized_path.rpartition("/")
    return head


def _has_probe_extension(base: str) -> bool:
    name = base.rpartition("/")[2]
    stem, dot, ext = name.rpartition(".")
    return bool(dot and stem and ext.lower() in RESOLVE_EXTENSIONS)


def candidate_bases(specifier: str, from_path: str) -> List[str]:
    """Root-relative base paths a specifier may refer to, in probe order."""
    candidates: List[str] = []

    for alias, target in PATH_ALIASES:
        if specifier.startswith(alias):
            candidates.append(target + specifier[len(alias):])

    if specifier.startswith(("./", "../")):
        candidates.append(f"{parent_dir(from_path)}/{specifier}")
    elif specifier.startswith("/"):
        candidates.append(specifier)

    if not candidates:
        candidates.append(specifier)

    return [normalize_path(c) for c in candidates]


def resolve_specifier(
    specifier: str,
    from_path: str,
    path_index: Mapping[str, int],
) -> Optional[int]:
    """
    Resolves `specifier`, written in the file at normalized path `from_path`,
    to the index of a known file. Returns None for external references.
    Never touches the filesystem.
    """
    if not specifier or specifier.startswith(REJECTED_PREFIXES):
        return None

    for base in candidate_bases(specifier, from_path):
        if not base:
            continue
        if base in path_index:
            return path_index[base]
        if _has_probe_extension(base):
            continue
        for ext in RESOLVE_EXTENSIONS:
            probe = f"{base}.{ext}"
            if probe in path_index:
                return path_index[probe]
        for ext in RESOLVE_EXTENSIONS:
            probe = f"{base}/index.{ext}"
            if probe in path_index:
                return path_index[probe]

    return None
