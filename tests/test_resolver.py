# tests/test_resolver.py
import pytest

from codepack.core.resolver import candidate_bases, normalize_path, resolve_specifier


@pytest.fixture
def path_index():
    """Known files of a small mixed-language project."""
    paths = [
        "src/App.tsx",
        "src/lib/utils.ts",
        "src/components/index.tsx",
        "src/styles/app.css",
        "pkg/mod.py",
        "crates/core/src/lib.rs",
        "crates/core/src/parser.rs",
        "shared/config.js",
    ]
    return {p: i for i, p in enumerate(paths)}

# --- Test 1: Path normalization ---

@pytest.mark.parametrize("raw, expected", [
    ("src/lib/utils.ts", "src/lib/utils.ts"),
    ("src\\lib\\utils.ts", "src/lib/utils.ts"),
    ("./src/./lib//utils.ts", "src/lib/utils.ts"),
    ("src/components/../lib/utils.ts", "src/lib/utils.ts"),
    ("../../outside.ts", "outside.ts"),
    ("/abs/file.py", "abs/file.py"),
])
def test_normalize_path(raw, expected):
    assert normalize_path(raw) == expected

# --- Test 2: Resolution ---

def test_alias_resolves_to_src(path_index):
    assert resolve_specifier("@/lib/utils", "src/App.tsx", path_index) == path_index["src/lib/utils.ts"]


def test_bare_package_name_is_unresolved(path_index):
    assert resolve_specifier("react", "src/App.tsx", path_index) is None


def test_relative_specifier(path_index):
    assert resolve_specifier("./lib/utils", "src/App.tsx", path_index) == path_index["src/lib/utils.ts"]
    assert resolve_specifier("../lib/utils", "src/components/index.tsx", path_index) == path_index["src/lib/utils.ts"]


def test_directory_index_probe(path_index):
    assert resolve_specifier("./components", "src/App.tsx", path_index) == path_index["src/components/index.tsx"]


def test_explicit_extension(path_index):
    assert resolve_specifier("./styles/app.css", "src/App.tsx", path_index) == path_index["src/styles/app.css"]
    assert resolve_specifier("./styles/missing.css", "src/App.tsx", path_index) is None


def test_root_relative_specifier(path_index):
    assert resolve_specifier("/shared/config", "src/App.tsx", path_index) == path_index["shared/config.js"]


def test_verbatim_same_repo_reference(path_index):
    # `from pkg.mod import x` is extracted as "pkg/mod"
    assert resolve_specifier("pkg/mod", "main.py", path_index) == path_index["pkg/mod.py"]


def test_rust_mod_resolves_next_to_parent(path_index):
    assert resolve_specifier("./parser", "crates/core/src/lib.rs", path_index) == path_index["crates/core/src/parser.rs"]


@pytest.mark.parametrize("specifier", [
    "", "https://cdn.example.com/x.js", "http://x/y", "node:fs", "node:path", "bun:sqlite", "deno:fs",
])
def test_rejected_specifiers(path_index, specifier):
    assert resolve_specifier(specifier, "src/App.tsx", path_index) is None


def test_candidate_bases_order():
    assert candidate_bases("@/a/b", "src/x.ts") == ["src/a/b"]
    assert candidate_bases("./a", "src/x.ts") == ["src/a"]
    assert candidate_bases("../a", "src/deep/x.ts") == ["src/a"]
    assert candidate_bases("/a", "src/x.ts") == ["a"]
    assert candidate_bases("lodash/fp", "src/x.ts") == ["lodash/fp"]


def test_rejected_prefix_wins_over_matching_file():
    index = {"bun:sqlite.ts": 0, "deno:fs.ts": 1}
    assert resolve_specifier("bun:sqlite", "src/App.tsx", index) is None
    assert resolve_specifier("deno:fs", "src/App.tsx", index) is None


def test_tilde_alias_resolves_to_src(path_index):
    assert candidate_bases("~/lib/utils", "src/App.tsx") == ["src/lib/utils"]
    assert resolve_specifier("~/lib/utils", "src/App.tsx", path_index) == path_index["src/lib/utils.ts"]
    assert resolve_specifier("~/components", "src/App.tsx", path_index) == path_index["src/components/index.tsx"]
