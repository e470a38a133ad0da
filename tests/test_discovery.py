# tests/test_discovery.py
from pathlib import Path

import pathspec
import pytest

from codepack.core.ignore import is_path_ignored, load_ignore_spec
from codepack.core.scanner import ProjectScanner
from codepack.core.tree import generate_project_tree
from codepack.core.writer import PackWriteError, PackWriter
from codepack.models import OutputFormat, Pack

# --- Fixtures: a temporary project on disk ---

@pytest.fixture
def complex_project(tmp_path):
    """
    A project with:
    1. regular code files (.py, .ts)
    2. an ignored directory (logs/)
    3. a binary file (.png) and a file with a NUL byte
    4. a force-included file (!logs/important.log)
    5. a .packignore and a .gitignore
    """
    src = tmp_path / "src"
    src.mkdir()
    logs = tmp_path / "logs"
    logs.mkdir()
    assets = tmp_path / "assets"
    assets.mkdir()

    (src / "main.py").write_text("from src.utils import util", encoding="utf-8")
    (src / "utils.py").write_text("def util(): pass", encoding="utf-8")
    (src / "app.ts").write_text('import x from "./x";', encoding="utf-8")
    (tmp_path / "README.md").write_text("# Project", encoding="utf-8")

    (logs / "app.log").write_text("error...", encoding="utf-8")
    (logs / "important.log").write_text("SAVE ME", encoding="utf-8")

    (assets / "image.png").write_bytes(b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR")
    (assets / "blob.dat").write_bytes(b"abc\x00def")

    (tmp_path / ".packignore").write_text("!logs/important.log\n", encoding="utf-8")
    (tmp_path / ".gitignore").write_text("src/app.ts\n", encoding="utf-8")

    return tmp_path

# --- Test 1: Ignore rules ---

def test_is_path_ignored_logic():
    spec = pathspec.PathSpec.from_lines("gitwildmatch", ["logs/", "*.tmp", "!logs/important.txt"])

    assert is_path_ignored(Path("logs/debug.log"), spec) is True
    assert is_path_ignored(Path("temp.tmp"), spec) is True
    assert is_path_ignored(Path("src/main.py"), spec) is False
    assert is_path_ignored("logs", spec, is_directory=True) is True


def test_load_ignore_spec_layers(complex_project):
    spec = load_ignore_spec(complex_project)
    assert is_path_ignored("node_modules", spec, is_directory=True)
    assert is_path_ignored("src/app.ts", spec)
    assert not is_path_ignored("src/main.py", spec)

    no_git = load_ignore_spec(complex_project, respect_gitignore=False, extra_patterns=["*.md"])
    assert not is_path_ignored("src/app.ts", no_git)
    assert is_path_ignored("README.md", no_git)

# --- Test 2: Scanner ---

def test_scanner_wildcard_behavior(complex_project):
    spec = pathspec.PathSpec.from_lines("gitwildmatch", ["logs/"])
    results = ProjectScanner(complex_project, spec, {"*"}).scan()
    paths = [f.path for f in results]

    assert paths == sorted(paths)
    assert "src/main.py" in paths
    assert "README.md" in paths
    assert "assets/image.png" not in paths
    assert "assets/blob.dat" not in paths
    assert "logs/app.log" not in paths
    assert all(f.token_count is None for f in results)


def test_scanner_specific_extensions(complex_project):
    spec = pathspec.PathSpec.from_lines("gitwildmatch", [])
    paths = [f.path for f in ProjectScanner(complex_project, spec, {".py"}).scan()]
    assert paths == ["src/main.py", "src/utils.py"]


def test_scanner_with_project_rules(complex_project):
    spec = load_ignore_spec(complex_project)
    paths = [f.path for f in ProjectScanner(complex_project, spec, {"*"}).scan()]

    assert "src/app.ts" not in paths
    assert ".packignore" in paths
    assert "logs/important.log" not in paths  # its directory is pruned by the default rules

# --- Test 3: Tree generation ---

def test_tree_generation():
    paths = ["src/main.py", "src/utils/helper.py", "README.md"]
    tree_str = generate_project_tree(paths, root_name="my_project", annotations={"README.md": "3 tok"})

    assert tree_str.splitlines() == [
        "my_project/",
        "├── README.md (3 tok)",
        "└── src",
        "    ├── main.py",
        "    └── utils",
        "        └── helper.py",
    ]

# --- Test 4: Writer ---

def _pack(index, content="body"):
    return Pack(index=index, file_indices=(index,), file_paths=("a.txt",), token_total=5, content=content)


def test_writer_writes_numbered_packs(tmp_path):
    writer = PackWriter(tmp_path / "out")
    written = writer.write_packs([_pack(0), _pack(1)], "proj", OutputFormat.MARKDOWN, header="proj/\n")

    assert [p.name for p in written] == ["proj_pack_1.md", "proj_pack_2.md"]
    first = written[0].read_text(encoding="utf-8")
    second = written[1].read_text(encoding="utf-8")
    assert "# --- codepack Pack 1/2 ---" in first
    assert "proj/" in first
    assert "Project Tree" not in second
    assert second.endswith("body\n")


def test_writer_xml_is_verbatim(tmp_path):
    written = PackWriter(tmp_path).write_packs([_pack(0, "<documents>\n</documents>")], "p", OutputFormat.XML)
    assert written[0].read_text(encoding="utf-8") == "<documents>\n</documents>\n"


def test_writer_refuses_escape(tmp_path):
    writer = PackWriter(tmp_path / "sandbox")
    with pytest.raises(PackWriteError):
        writer.write("../escape.txt", "nope")
    assert not (tmp_path / "escape.txt").exists()
