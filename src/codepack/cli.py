# src/codepack/cli.py
import sys
import argparse
import logging
import os
from pathlib import Path
from typing import List, Optional

from codepack.core.ignore import load_ignore_spec
from codepack.core.scanner import ProjectScanner
from codepack.core.strategy import (
    evaluate_per_pack_advisory,
    find_oversized_files,
    forecast_split_part_counts,
    oversized_files_warning,
    prepare_files,
    resolve_advisory_max_tokens_per_file,
    split_oversized_files,
)
from codepack.core.tree import generate_project_tree
from codepack.core.writer import PackWriter
from codepack.models import OutputFormat, PackOptions, PackRequest, SourceFile
from codepack.packer import pack_files
from codepack.profiles import (
    PROFILES_BY_ID,
    get_profile,
    is_approximate_tokenizer,
    tokenizer_for,
)
from codepack.utils.tokenizer import effective_token_count


def create_arg_parser():
    parser = argparse.ArgumentParser(
        description="Split your project's code into dependency-ordered, token-balanced packs for LLM context windows."
    )
    parser.add_argument("root_dir", type=str, nargs="?", default=os.getcwd(), help="Project root directory")
    parser.add_argument("-n", "--packs", type=int, default=1, help="Number of packs to produce (default: 1)")
    parser.add_argument(
        "-f", "--format",
        choices=[f.value for f in OutputFormat],
        default=OutputFormat.PLAINTEXT.value,
        help="Pack output format",
    )
    parser.add_argument(
        "-o", "--output-dir",
        type=str,
        default=None,
        help="Output directory (default: {root}/{folder_name}_packs)",
    )
    parser.add_argument("-e", "--extensions", type=str, default="*", help="Comma-separated file extensions or '*' for all")
    parser.add_argument(
        "--profile",
        choices=sorted(PROFILES_BY_ID),
        default="claude-opus-4",
        help="Target LLM profile (tokenizer and advisory budget)",
    )
    parser.add_argument(
        "--max-tokens-per-file",
        type=int,
        default=None,
        help="Advisory per-file token limit (default: derived from the profile's context window)",
    )
    parser.add_argument("--split-oversized", action="store_true", help="Split files above the advisory limit into parts")
    parser.add_argument("--strip-comments", action="store_true", help="Remove source comments")
    parser.add_argument("--reduce-whitespace", action="store_true", help="Collapse blank lines and trailing spaces")
    parser.add_argument("--minify-markdown", action="store_true", help="Drop badges, HTML and extra blank lines from .md files")
    parser.add_argument("--strip-md-headings", action="store_true", help="With --minify-markdown, also drop headings")
    parser.add_argument("--strip-md-blockquotes", action="store_true", help="With --minify-markdown, also drop blockquotes")
    parser.add_argument("--no-gitignore", action="store_true", help="Do not apply .gitignore rules")
    parser.add_argument("--ignore", action="append", default=[], metavar="PATTERN", help="Extra ignore pattern (repeatable)")
    parser.add_argument("-y", "--yes", action="store_true", help="Skip confirmation")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def get_default_output_dir(root_dir: Path) -> Path:
    """Generates a dynamic output directory name based on the project folder."""
    folder_name = root_dir.name or "project"
    return root_dir / f"{folder_name.replace(' ', '_')}_packs"


def output_ignore_patterns(root_dir: Path, output_dir: Path, basename: str) -> List[str]:
    """
    Ignore patterns keeping earlier pack files out of the scan. The pack file
    pattern also covers an output directory equal to the root itself.
    """
    try:
        rel = output_dir.relative_to(root_dir).as_posix()
    except ValueError:
        return []
    if rel == ".":
        return [f"/{basename}_pack_*"]
    return [f"/{rel}/", f"/{rel}/{basename}_pack_*"]


def options_from_args(args) -> PackOptions:
    return PackOptions(
        num_packs=args.packs,
        output_format=OutputFormat(args.format),
        profile_id=args.profile,
        max_tokens_per_file=args.max_tokens_per_file,
        split_oversized=args.split_oversized,
        strip_comments=args.strip_comments,
        reduce_whitespace=args.reduce_whitespace,
        minify_markdown=args.minify_markdown,
        strip_markdown_headings=args.strip_md_headings,
        strip_markdown_blockquotes=args.strip_md_blockquotes,
        respect_gitignore=not args.no_gitignore,
        ignore_patterns=tuple(args.ignore),
    )


def print_top_files(files: List[SourceFile], total_tokens: int):
    ranked = sorted(files, key=effective_token_count, reverse=True)
    print("\n--- Top 10 Largest Files (Est. Tokens) ---")
    print(f"{'Rank':<5} | {'Tokens':<10} | {'File Path'}")
    print("-" * 60)
    for i, f in enumerate(ranked[:10]):
        print(f"{i+1:<5} | {effective_token_count(f):<10} | {f.path}")
    print("-" * 60)
    print(f"Total files: {len(files)}")
    print(f"Total tokens: {total_tokens}")
    print("-" * 60)


def main(argv: Optional[List[str]] = None):
    try:
        # 1. Setup
        parser = create_arg_parser()
        args = parser.parse_args(argv)

        if args.verbose:
            logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

        root_dir = Path(args.root_dir).resolve()
        if not root_dir.is_dir():
            print(f"Error: Invalid directory '{root_dir}'", file=sys.stderr)
            sys.exit(1)
        if args.packs < 1:
            print(f"Error: Pack count must be at least 1 (got {args.packs})", file=sys.stderr)
            sys.exit(1)

        options = options_from_args(args)
        profile = get_profile(options.profile_id)
        output_dir = Path(args.output_dir).resolve() if args.output_dir else get_default_output_dir(root_dir)
        basename = root_dir.name or "project"

        raw_exts = args.extensions.strip()
        extensions = {"*"} if raw_exts == "*" else {e.strip() for e in raw_exts.split(",")}

        print(f"--- codepack ---")
        print(f"Scanning: {root_dir}")
        print(f"Output:   {output_dir}")
        print(f"Packs:    {options.num_packs} ({options.output_format.value})")
        approx = " (approximate token counts)" if is_approximate_tokenizer(profile) else ""
        print(f"Profile:  {profile.name}{approx}")

        # 2. Ignore Rules (the output directory is never scanned)
        extra_patterns = list(options.ignore_patterns) + output_ignore_patterns(root_dir, output_dir, basename)
        ignore_spec = load_ignore_spec(root_dir, options.respect_gitignore, extra_patterns)

        # 3. Scanning
        scanned = ProjectScanner(root_dir, ignore_spec, extensions).scan()
        if not scanned:
            print("No matching files found.")
            return

        # 4. Prepare: transforms, token counts, oversized splitting
        tokenizer = tokenizer_for(profile)
        files = prepare_files(scanned, options, tokenizer)

        advisory_max = resolve_advisory_max_tokens_per_file(options.max_tokens_per_file, profile.context_window_tokens)
        forecast = {}
        if options.split_oversized:
            split = split_oversized_files(files, advisory_max, tokenizer)
            files = split.files
            warnings = split.warnings
        else:
            warning = oversized_files_warning(find_oversized_files(files, advisory_max), advisory_max)
            warnings = [warning] if warning else []
            forecast = forecast_split_part_counts(files, advisory_max)
        for warning in warnings:
            print(f"Warning: {warning}", file=sys.stderr)
        for path, parts in forecast.items():
            print(f"  > {path} would split into {parts} parts with --split-oversized", file=sys.stderr)

        # 5. Pack
        response = pack_files(PackRequest(files, options.num_packs, options.output_format))
        print_top_files(files, response.total_tokens)

        advisory = evaluate_per_pack_advisory(response.total_tokens, len(response.packs), advisory_max)
        print(f"Advisory [{advisory.level}]: {advisory.message}")

        if not args.yes:
            choice = input(f"> Write {len(response.packs)} pack(s) to {output_dir.name}? (Y/n): ").strip().lower()
            if choice == "n":
                print("Cancelled.")
                return

        # 6. Output
        annotations = {f.path: f"{effective_token_count(f)} tok" for f in files}
        tree_str = generate_project_tree([f.path for f in files], root_dir.name, annotations)

        writer = PackWriter(output_dir)
        written = writer.write_packs(response.packs, basename, options.output_format, tree_str)

        print("\n--- Packs ---")
        for pack, path in zip(response.packs, written):
            print(f"Pack {pack.index + 1}: {pack.file_count} files, {pack.token_total} tokens -> {path.name}")
        print(f"\nSuccess! {len(written)} pack(s) written to: {output_dir}")

    except KeyboardInterrupt:
        print("\nCancelled.")
        sys.exit(1)

    except OSError as e:
        print(f"Error writing packs: {e}", file=sys.stderr)
        sys.exit(1)

    except Exception as e:
        print(f"An unexpected error occurred: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
