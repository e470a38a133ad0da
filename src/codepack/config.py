# src/codepack/config.py

IGNORE_FILE_NAME = ".packignore"

DEFAULT_IGNORE_PATTERNS = [
    "# Default ignore patterns",
    ".git/",
    "node_modules/",
    "venv/",
    ".venv/",
    "__pycache__/",
    "dist/",
    "build/",
    "target/",
    "coverage/",
    ".next/",
    ".nuxt/",
    ".turbo/",
    ".cache/",
    ".vscode/",
    ".idea/",
    ".DS_Store",
    "Thumbs.db",
    "*.log",
    "logs/",
    "*_packs/",
]

BINARY_EXTENSIONS = {
    "png", "jpg", "jpeg", "gif", "bmp", "ico", "webp", "avif", "tiff", "pdf",
    "doc", "docx", "xls", "xlsx", "ppt", "pptx", "zip", "tar", "gz", "bz2",
    "7z", "rar", "exe", "dll", "so", "dylib", "a", "lib", "bin", "wasm",
    "mp3", "mp4", "wav", "ogg", "flac", "avi", "mov", "mkv", "webm", "ttf",
    "otf", "woff", "woff2", "eot", "class", "pyc", "pyo", "o", "obj",
}

# --- Import extraction ---
IMPORT_MARKERS = ("import ", "export ", " from ", "require(", "import(", "use ")
COMMENT_PREFIXES = ("//", "#", "*")

# --- Path resolution ---
REJECTED_PREFIXES = ("http://", "https://", "node:", "bun:", "deno:")
PATH_ALIASES = (
    ("@/", "src/"),
    ("~/", "src/"),
)
# Probe order matters: the first hit wins.
RESOLVE_EXTENSIONS = (
    "ts", "tsx", "js", "jsx", "mjs", "cjs", "mts", "cts",
    "py", "rs", "go", "vue", "svelte", "json", "css", "scss",
)

# --- Documentation ordering ---
DOC_EXTENSIONS = {"md", "mdx", "txt", "rst", "adoc"}
DOC_PRIORITY_PREFIXES = ("overview", "architecture", "design", "spec", "contributing")

# --- Output ---
LANGUAGE_BY_EXTENSION = {
    "ts": "typescript",
    "tsx": "typescript",
    "js": "javascript",
    "jsx": "javascript",
    "rs": "rust",
    "py": "python",
    "go": "go",
    "md": "markdown",
    "json": "json",
    "css": "css",
    "html": "html",
    "toml": "toml",
    "yaml": "yaml",
    "yml": "yaml",
    "sh": "bash",
    "bash": "bash",
}

FORMAT_FILE_EXTENSIONS = {
    "markdown": "md",
    "plaintext": "txt",
    "xml": "xml",
}

# --- Token budgets ---
APPROX_CHARS_PER_TOKEN = 4
# Approximate-tokenizer profiles count with every encoding and keep the largest
CONSERVATIVE_ENCODINGS = ("cl100k_base", "o200k_base")
MIN_ADVISORY_TOKENS_PER_FILE = 4_000
MAX_ADVISORY_TOKENS_PER_FILE = 20_000
ADVISORY_WINDOW_RATIO = 0.08
ADVISORY_WARN_RATIO = 0.85
MIN_BREAK_SCAN_RATIO = 0.35
