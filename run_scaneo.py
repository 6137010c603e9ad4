#!/usr/bin/env python3
"""
Command-line entry point for scan function generation.

Reads Go struct declarations and writes a Go file of functions that scan
database rows into those structs.

Usage:
    python run_scaneo.py github.com/acme/blog/models=./models
    python run_scaneo.py -o scans.go -p models =tables.go
    python run_scaneo.py -c scaneo.yml
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from core import __version__
from core.errors import (
    ConfigValidationError,
    GoSyntaxError,
    NothingToGenerateError,
    TargetError,
)
from core.scan_config import ScanConfig, load_scan_config, merge_cli_overrides
from core.structured_logging import (
    configure_structured_logging,
    phase_scope,
    resolve_log_level,
    set_run_id,
)
from extraction.extractor import extract_import_map, find_files
from generation.pipeline import generate_scans
from generation.renderer import render_scans

logger = logging.getLogger(__name__)

USAGE_TEXT = """SCANEO
    Generate Go code to convert database rows into arbitrary structs.

USAGE
    scaneo [options] <golang_import_path=golang_source_package_or_file>...

OPTIONS
    -o, --output
        Set the name of the generated file. Default is scans.go.

    -p, --package
        Set the package name for the generated file. Default is current
        directory name.

    -u, --unexport
        Generate unexported functions. Default is export all.

    -w, --whitelist
        Only include structs specified in case-sensitive, comma-delimited
        string.

    -c, --config
        Read options and targets from a YAML or JSON file. Flags given on
        the command line take precedence.

    --log-level
        Logging level (DEBUG, INFO, WARNING, ERROR). Default is
        $SCANEO_LOG_LEVEL or INFO.

    --dry-run
        Print the generated code to stdout instead of writing a file.

    --json
        Print the extracted structs as JSON instead of generating code.

    -v, --version
        Print version and exit.

    -h, --help
        Print help and exit.

EXAMPLES
    tables.go is a file that contains one or more struct declarations.
    An empty import path means the structs live in the generated package.

    Generate scan functions based on structs in tables.go.
        scaneo =tables.go

    Generate scan functions and name the output file funcs.go
        scaneo -o funcs.go =tables.go

    Generate scans.go with unexported functions.
        scaneo -u =tables.go

    Generate scans.go with only struct Post and struct user.
        scaneo -w "Post,user" =tables.go

    Generate scans for every struct of another package.
        scaneo github.com/acme/blog/models=./models

NOTES
    Struct field names don't have to match database column names at all.
    However, the order of the types must match.

    Integrate this with go generate by adding this line to the top of your
    tables.go file.
        //go:generate scaneo =$GOFILE
"""


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed argument namespace.
    """
    parser = argparse.ArgumentParser(
        prog="scaneo",
        add_help=False,
        usage="scaneo [options] <golang_import_path=golang_source_package_or_file>...",
    )
    parser.add_argument("targets", nargs="*")
    parser.add_argument("-o", "--output", default=None)
    parser.add_argument("-p", "--package", default=None)
    parser.add_argument("-u", "--unexport", action="store_true", default=False)
    parser.add_argument("-w", "--whitelist", default=None)
    parser.add_argument("-c", "--config", default=None)
    parser.add_argument("--log-level", default=None)
    parser.add_argument("--dry-run", action="store_true", default=False)
    parser.add_argument("--json", action="store_true", default=False)
    parser.add_argument("-v", "--version", action="store_true", default=False)
    parser.add_argument("-h", "--help", action="store_true", default=False)
    return parser.parse_args(argv)


def resolve_config(args: argparse.Namespace) -> ScanConfig:
    """Combine the optional config file with command-line flags."""
    config = load_scan_config(args.config) if args.config else ScanConfig()
    return merge_cli_overrides(
        config,
        output=args.output,
        package=args.package,
        unexport=args.unexport,
        whitelist=args.whitelist,
        targets=args.targets,
    )


def run(args: argparse.Namespace) -> int:
    """Execute one scaneo run. Returns the process exit code."""
    config = resolve_config(args)

    with phase_scope("discover"):
        import_map = find_files(config.targets)

    package_name = config.resolved_package()

    if args.json or args.dry_run:
        with phase_scope("extract"):
            structs = extract_import_map(import_map, whitelist=config.whitelist)
        if args.json:
            print(json.dumps([s.to_dict() for s in structs], indent=2))
            return 0
        if not structs:
            raise NothingToGenerateError("no structs found")
        sys.stdout.write(render_scans(package_name, structs, unexport=config.unexport))
        return 0

    result = generate_scans(
        output_path=config.output,
        package_name=package_name,
        unexport=config.unexport,
        whitelist=config.whitelist,
        import_map=import_map,
    )
    logger.info(
        "Generated %s: %d structs from %d files, imports=%s",
        result.output_path,
        len(result.structs),
        result.stats.files_processed,
        list(result.namespaces),
    )
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the scaneo command."""
    args = parse_args(argv)

    if args.help:
        # stdout so that `scaneo -h | less` works
        print(USAGE_TEXT)
        return 0

    if args.version:
        print(f"scaneo version {__version__}")
        return 0

    configure_structured_logging(resolve_log_level(args.log_level))
    set_run_id()

    try:
        return run(args)
    except ConfigValidationError as e:
        logger.error("invalid config: %s", e)
    except TargetError as e:
        logger.error("couldn't find files: %s", e)
        print(USAGE_TEXT, file=sys.stderr)
    except GoSyntaxError as e:
        logger.error('"syntax error" - parser probably: %s', e)
    except NothingToGenerateError as e:
        logger.error("couldn't generate file: %s", e)
    except OSError as e:
        logger.error("I/O error: %s", e)
    return 1


if __name__ == "__main__":
    sys.exit(main())
