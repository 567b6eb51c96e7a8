#!/usr/bin/env python3
"""
depgraph CLI

Scan a JavaScript/TypeScript source tree for import, require and export
statements and print its module dependency graph as JSON.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Set

from exporters import analysis_to_json, to_json
from scanner.builder import run_pipeline
from scanner.config import ConfigError, ScanConfig, find_config, load_config, normalize_extension
from scanner.discovery import DEFAULT_EXCLUDE_DIRS, SourceCollectionError

# Loggers of the project's packages, raised to DEBUG by --verbose.
PROJECT_LOGGERS = ("scanner", "graph", "exporters")


def parse_args(args=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="depgraph",
        description="Extract the module dependency graph of a JavaScript/TypeScript source tree.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  depgraph .                            # Graph payload for current directory
  depgraph ./web -f analysis            # Per-file imports/requires/exports
  depgraph . -o graph.json              # Write graph to a file
  depgraph . --relative-to .            # Show file ids relative to a directory
  depgraph . --include-ext .js .mjs     # Only scan these extensions
  depgraph . --exclude-dir dist build   # Skip more directories
        """,
    )

    parser.add_argument(
        "root",
        nargs="?",
        default=".",
        help="Source root directory (default: current directory)",
    )

    parser.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        help="Output file (default: stdout)",
    )

    parser.add_argument(
        "-f", "--format",
        choices=["graph", "analysis"],
        default="graph",
        help="Output: the node/edge graph or the per-file analysis report (default: graph)",
    )

    parser.add_argument(
        "--indent",
        type=int,
        default=2,
        help="JSON indentation (default: 2)",
    )

    parser.add_argument(
        "--relative-to",
        type=str,
        default=None,
        help="Base path for relative path display",
    )

    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="YAML config file (default: <root>/.depgraph.yml if present)",
    )

    parser.add_argument(
        "--include-ext",
        nargs="+",
        default=None,
        help="File extensions to include (e.g., .js .ts)",
    )

    parser.add_argument(
        "--exclude-dir",
        nargs="+",
        default=None,
        help="Directory names to exclude, in addition to node_modules and hidden directories",
    )

    parser.add_argument(
        "--max-depth",
        type=int,
        default=None,
        help="Maximum directory depth to scan",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose (debug) logging",
    )

    return parser.parse_args(args)


def _load_scan_config(parsed, root: Path) -> ScanConfig:
    """Combine the config file (if any) with command line overrides."""
    config_path = Path(parsed.config) if parsed.config else find_config(root)
    config = load_config(config_path) if config_path is not None else ScanConfig()

    include_ext: Optional[Set[str]] = None
    if parsed.include_ext:
        include_ext = {normalize_extension(ext) for ext in parsed.include_ext}

    exclude_dirs: Optional[Set[str]] = None
    if parsed.exclude_dir:
        exclude_dirs = set(parsed.exclude_dir) | config.exclude_dirs | DEFAULT_EXCLUDE_DIRS

    return config.merged(include_ext, exclude_dirs, parsed.max_depth)


def main(args=None):
    """Main entry point."""
    parsed = parse_args(args)

    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    if parsed.verbose:
        for name in PROJECT_LOGGERS:
            logging.getLogger(name).setLevel(logging.DEBUG)

    root = Path(parsed.root).resolve()
    if not root.is_dir():
        print(f"Error: '{parsed.root}' is not a directory", file=sys.stderr)
        return 1

    base = Path(parsed.relative_to).resolve() if parsed.relative_to else None
    indent = parsed.indent if parsed.indent > 0 else None

    try:
        config = _load_scan_config(parsed, root)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        result = run_pipeline(root, config=config)
    except SourceCollectionError as e:
        print(f"Error scanning repository: {e}", file=sys.stderr)
        return 1

    if parsed.format == "analysis":
        output = analysis_to_json(result.outcomes, base=base, indent=indent)
    else:
        output = to_json(result.graph, base=base, indent=indent)

    if parsed.output:
        try:
            output_path = Path(parsed.output)
            output_path.write_text(output + "\n", encoding="utf-8")
            print(f"Output written to: {output_path}", file=sys.stderr)
        except OSError as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            return 1
    else:
        print(output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
