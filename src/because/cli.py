#!/usr/bin/env python3
"""
because: Find the files that refer to a piece of project documentation

Format:
  because because/path/to/file.ext

Examples:
  because because/project/deployment.md
  because because/project/scripts.md
  because --only-list-files-being-searched
  because --setup

Files are searched according to the glob patterns in `.becauserc` (one per line,
`!` to exclude, `#` for comments), or `**`, `!.git/**`, `!node_modules/**` when
there is no such file. Files ignored by `.gitignore` are never searched.
"""

from __future__ import annotations

import argparse
import importlib.metadata
import sys
from dataclasses import dataclass
from pathlib import Path

from rich.text import Text

from because.config import load_patterns
from because.file_resolver import FileResolver, FileResolverConfig
from because.install_context import detect_install_context, linking_note, project_directory
from because.linker import reconcile, reconcile_failed
from because.output import Reporter
from because.scanner import scan


@dataclass
class Options:
    """Command-line options for the because tool."""

    target: str | None
    only_list_files_being_searched: bool
    setup: bool
    version: bool
    respect_gitignore: bool
    follow_symlinks: bool
    source_folder: str
    link_root: str


def _build_parser() -> argparse.ArgumentParser:
    # Use the module's docstring as the description
    module_doc = __doc__ or ""
    doc_parts = module_doc.strip().split("\n\n")
    description = doc_parts[0]
    epilog = "\n\n".join(doc_parts[1:])

    parser = argparse.ArgumentParser(
        prog="because",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "target",
        nargs="?",
        default=None,
        help="Text to look for, conventionally a path such as because/project/deployment.md",
    )
    parser.add_argument(
        "--only-list-files-being-searched",
        action="store_true",
        dest="only_list_files_being_searched",
        help="Only list the files being searched and exit",
    )
    parser.add_argument(
        "--setup",
        action="store_true",
        help="Link files/folders from <project>/because/* to <project>/node_modules/because/* "
        "(skip existing links)",
    )
    parser.add_argument(
        "--no-respect-gitignore",
        action="store_true",
        dest="no_respect_gitignore",
        help="Also search files ignored by .gitignore",
    )
    parser.add_argument(
        "--follow-symlinks",
        action="store_true",
        dest="follow_symlinks",
        help="Descend into symbolic links to directories while searching",
    )
    parser.add_argument(
        "--source-folder",
        default="because",
        metavar="DIR",
        help="Project folder whose entries --setup links (default: %(default)s)",
    )
    parser.add_argument(
        "--link-root",
        default="node_modules/because",
        metavar="DIR",
        help="Folder, relative to the project, where --setup creates links (default: %(default)s)",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show version information and exit",
    )
    return parser


def _parse_args(args: list[str] | None = None) -> tuple[Options, argparse.ArgumentParser]:
    parser = _build_parser()
    opts = parser.parse_args(args)
    return (
        Options(
            target=opts.target,
            only_list_files_being_searched=opts.only_list_files_being_searched,
            setup=opts.setup,
            version=opts.version,
            respect_gitignore=not opts.no_respect_gitignore,
            follow_symlinks=opts.follow_symlinks,
            source_folder=opts.source_folder,
            link_root=opts.link_root,
        ),
        parser,
    )


def run_setup(options: Options, reporter: Reporter) -> int:
    """Link the project's source folder entries into the link root."""
    context = detect_install_context()
    note = linking_note(context)
    project_dir = project_directory()
    results = reconcile(
        project_dir / options.source_folder,
        project_dir / options.link_root,
        allowed=note is None,
        reporter=reporter,
        note=note,
    )
    return 1 if reconcile_failed(results) else 0


def run_search(options: Options, reporter: Reporter) -> int:
    """Discover files per the pattern set, then search them for the target."""
    root = Path.cwd()
    config = FileResolverConfig(
        patterns=load_patterns(root, reporter),
        respect_gitignore=options.respect_gitignore,
        follow_symlinks=options.follow_symlinks,
    )
    paths = FileResolver(config).discover(root)

    if options.only_list_files_being_searched:
        report = scan(paths, "", root, list_only=True)
        reporter.debug(
            f"The command would look for documentation in the following {report.count} files"
        )
        for path in report.matches:
            reporter.log(path)
        return 0

    target = options.target or ""
    reporter.debug(Text.assemble("Looking for ", (target, "underline"), f" in {len(paths)} files."))
    report = scan(paths, target, root)
    if report.count:
        reporter.info("Found following matches:")
        for path in report.matches:
            reporter.info(f"    {path}")
    else:
        reporter.verbose("No matches found.")
    return 0


def main(args: list[str] | None = None) -> int:
    """
    Main entry point for the because CLI.

    Args:
        args: Command-line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    options, parser = _parse_args(args)
    reporter = Reporter()

    # Display version information if requested
    if options.version:
        try:
            version = importlib.metadata.version("because")
            reporter.log(f"v{version}")
        except importlib.metadata.PackageNotFoundError:
            reporter.log("unknown (package not installed)")
        return 0

    if not (options.target or options.only_list_files_being_searched or options.setup):
        parser.print_help()
        return 0

    try:
        if options.setup:
            return run_setup(options, reporter)
        return run_search(options, reporter)
    except Exception as e:
        reporter.error(f"Error: {e}")
        reporter.error("This scenario is not handled yet. Exiting with error code 1.")
        return 1


if __name__ == "__main__":
    sys.exit(main())
