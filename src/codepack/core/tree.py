# src/codepack/core/tree.py
from typing import Dict, List, Mapping, Optional


def generate_project_tree(
    file_paths: List[str],
    root_name: str,
    annotations: Optional[Mapping[str, str]] = None,
) -> str:
    """
    Renders the paths as a box-drawing tree. `annotations` maps a file path to
    a short label shown after its leaf, e.g. a token count.
    """
    annotations = annotations or {}
    tree_dict: Dict = {}
    leaf_labels: Dict[tuple, str] = {}
    for path in sorted(file_paths):
        parts = tuple(p for p in path.replace("\\", "/").split("/") if p)
        current_level = tree_dict
        for part in parts:
            current_level = current_level.setdefault(part, {})
        if path in annotations:
            leaf_labels[parts] = annotations[path]

    lines = [f"{root_name}/"]

    def _walk(subtree: Dict, prefix: str, trail: tuple):
        entries = sorted(subtree.items())
        for i, (name, children) in enumerate(entries):
            is_last = (i == len(entries) - 1)
            connector = "└── " if is_last else "├── "
            label = leaf_labels.get(trail + (name,))
            lines.append(f"{prefix}{connector}{name}" + (f" ({label})" if label else ""))

            if children:
                _walk(children, prefix + ("    " if is_last else "│   "), trail + (name,))

    _walk(tree_dict, "", ())
    return "\n".join(lines) + "\n"
