#!/usr/bin/env python3
"""Command-line interface for STENCIL template helpers.

Usage:
    stencil-helpers upper "hello world"
    stencil-helpers repeat abc 3
    stencil-helpers --json repeat null 2
    stencil-helpers --helpers-file ./my_helpers.py --list
"""

import argparse
import json
import logging
import sys
from typing import Any, List, Optional

import yaml

from config import get_config_value, load_config
from helpers.registry import (
    HelperError,
    HelperLoadError,
    HelperNotFoundError,
    HelperRegistry,
)
from utils.logging_setup import setup_logging


logger = logging.getLogger(__name__)


def setup_argparser() -> argparse.ArgumentParser:
    """Set up the argument parser.

    Returns:
        Configured ArgumentParser.
    """
    parser = argparse.ArgumentParser(
        prog='stencil-helpers',
        description='Call template helpers from the command line.',
        epilog='Example: stencil-helpers repeat abc 3',
    )

    parser.add_argument(
        'helper',
        nargs='?',
        help='Helper name (e.g., upper, repeat, wrap)',
    )

    parser.add_argument(
        'params',
        nargs='*',
        help='Positional helper parameters',
    )

    parser.add_argument(
        '--list', '-l',
        action='store_true',
        help='List registered helpers',
    )

    parser.add_argument(
        '--helpers-file', '-f',
        action='append',
        default=[],
        metavar='PATH',
        help='Python file whose public functions are registered as helpers (repeatable)',
    )

    parser.add_argument(
        '--json', '-j',
        action='store_true',
        help='Parse each parameter as JSON (e.g., null, 0, false, "text")',
    )

    parser.add_argument(
        '--config', '-c',
        help='Path to a YAML config file (layered over the defaults)',
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose output and helper call tracing',
    )

    return parser


def parse_params(raw_params: List[str], as_json: bool) -> List[Any]:
    """Convert command-line parameters to helper arguments.

    Args:
        raw_params: Parameters as typed on the command line.
        as_json: Decode each parameter as JSON, keeping the raw string when
            it is not valid JSON.

    Returns:
        Helper arguments.
    """
    if not as_json:
        return list(raw_params)

    params = []
    for raw in raw_params:
        try:
            params.append(json.loads(raw))
        except json.JSONDecodeError:
            params.append(raw)
    return params


def build_registry(helper_files: List[str]) -> HelperRegistry:
    """Create a registry with the built-in helpers and any helper files.

    Args:
        helper_files: Paths of Python helper files to load, in order.

    Returns:
        Populated HelperRegistry.

    Raises:
        HelperLoadError: If a helper file cannot be loaded.
    """
    registry = HelperRegistry.with_builtins()
    for path in helper_files:
        names = registry.load_file(path)
        logger.debug(f"Helpers from {path}: {', '.join(names) or '(none)'}")
    return registry


def main(argv: Optional[list] = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command-line arguments (default: sys.argv[1:]).

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    parser = setup_argparser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except (FileNotFoundError, yaml.YAMLError) as e:
        print(f"Config error: {e}", file=sys.stderr)
        return 1

    logging_config = dict(get_config_value(config, 'logging', {}) or {})
    trace_calls = bool(get_config_value(config, 'helpers.trace_calls', False))
    if args.verbose:
        logging_config['level'] = 'DEBUG'
        trace_calls = True
    setup_logging(logging_config, trace_calls=trace_calls)

    configured_files = get_config_value(config, 'helpers.files', []) or []
    if isinstance(configured_files, str):
        configured_files = [configured_files]
    helper_files = [str(path) for path in configured_files]
    helper_files.extend(args.helpers_file)

    try:
        registry = build_registry(helper_files)

        if args.list:
            for name in registry.names():
                print(name)
            return 0

        if not args.helper:
            parser.print_help()
            return 1

        params = parse_params(args.params, args.json)
        print(registry.call(args.helper, *params))
        return 0

    except HelperNotFoundError as e:
        print(f"Unknown helper: {e.name}", file=sys.stderr)
        return 1
    except HelperLoadError as e:
        print(f"Helper load error: {e}", file=sys.stderr)
        return 1
    except HelperError as e:
        logger.error(f"Helper failed: {e}")
        print(f"Helper error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nAborted.", file=sys.stderr)
        return 130


if __name__ == '__main__':
    sys.exit(main())
