# tests/test_imports.py
from codepack.core.imports import extract_specifiers, iter_quoted_literals

# --- Test 1: Quoted literals on import-like lines ---

def test_es_module_imports():
    text = (
        'import { b } from "./b";\n'
        "import React from 'react';\n"
        'export * from "./c";\n'
        "const d = require('./d');\n"
        'const e = await import("./e");\n'
    )
    assert extract_specifiers(text) == {"./b", "react", "./c", "./d", "./e"}


def test_lines_without_markers_are_ignored():
    text = 'const msg = "./not-an-import";\nconsole.log("hello");\n'
    assert extract_specifiers(text) == set()


def test_comment_and_blank_lines_yield_nothing():
    text = (
        "\n"
        "   \n"
        '// import a from "./a"\n'
        '# from pkg import thing\n'
        ' * import b from "./b"\n'
    )
    assert extract_specifiers(text) == set()


def test_escaped_quotes_and_unterminated_literals():
    assert list(iter_quoted_literals(r"""import 'it\'s' """)) == ["it's"]
    # The unterminated literal is dropped, earlier ones survive
    assert list(iter_quoted_literals('import "./ok" from "./broken')) == ["./ok"]


def test_empty_literal_is_dropped():
    assert extract_specifiers('import "" from "./x";') == {"./x"}

# --- Test 2: Non-quoted forms ---

def test_python_from_import():
    assert extract_specifiers("from pkg.sub.mod import thing") == {"pkg/sub/mod"}


def test_python_relative_from_import():
    text = "from .sibling import a\nfrom ..parent.mod import b\nfrom . import c\n"
    assert extract_specifiers(text) == {"./sibling", "../parent/mod"}


def test_plain_import_list():
    assert extract_specifiers("import os.path, json as j, pkg.util") == {"os/path", "json", "pkg/util"}


def test_java_style_import_strips_semicolon():
    assert extract_specifiers("import com.example.Widget;") == {"com/example/Widget"}


def test_rust_mod_declarations():
    text = "mod parser;\npub mod lexer;\npub(crate) mod util;\nmod inline { }\n"
    assert extract_specifiers(text) == {"./parser", "./lexer", "./util"}


def test_rust_use_line_has_no_literals():
    # `use` lines are inspected for literals but carry none here
    assert extract_specifiers("use std::collections::HashMap;") == set()
