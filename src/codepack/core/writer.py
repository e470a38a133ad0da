# src/codepack/core/writer.py
from pathlib import Path
from typing import List, Optional, Sequence

from codepack.config import FORMAT_FILE_EXTENSIONS
from codepack.models import OutputFormat, Pack


class PackWriteError(ValueError):
    pass


class PackWriter:
    """
    Writes pack files below a single allowed root directory.

    The allowed root is carried by the instance rather than process-wide
    state; anything resolving outside it is refused.
    """

    def __init__(self, root: Path):
        self.root = Path(root).resolve()

    def _target(self, name: str) -> Path:
        target = (self.root / name).resolve()
        if target != self.root and self.root not in target.parents:
            raise PackWriteError(f"Refusing to write outside {self.root}: {name}")
        return target

    def write(self, name: str, content: str) -> Path:
        target = self._target(name)
        target.parent.mkdir(parents=True, exist_ok=True)
        with open(target, "w", encoding="utf-8") as f:
            f.write(content)
        return target

    def write_packs(
        self,
        packs: Sequence[Pack],
        basename: str,
        fmt: OutputFormat,
        header: Optional[str] = None,
    ) -> List[Path]:
        """
        Writes one file per pack: `{basename}_pack_{k}.{ext}`, k starting at 1.
        `header` (e.g. the project tree) is prepended to the first pack only.
        """
        ext = FORMAT_FILE_EXTENSIONS[OutputFormat(fmt).value]
        written = []
        for pack in packs:
            name = f"{basename}_pack_{pack.index + 1}.{ext}"
            if fmt == OutputFormat.XML:
                # Written verbatim so the file stays a well-formed document
                written.append(self.write(name, pack.content + "\n"))
                continue

            lines = [
                f"# --- codepack Pack {pack.index + 1}/{len(packs)} ---",
                f"# Files: {pack.file_count} | Tokens: {pack.token_total}",
            ]
            if header and pack.index == 0:
                lines.append("# --- Project Tree ---")
                lines.append(header.rstrip("\n"))
            lines.append("# --- Context Start ---\n")
            text = "\n".join(lines) + "\n" + pack.content + "\n"
            written.append(self.write(name, text))
        return written
