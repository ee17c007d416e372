"""
Entry point: python -m fsgen / fsgen.

Exit status: 0 success, 1 run-time failure (format-device), 2 configuration error.
"""

import logging
import os
import sys
from argparse import Namespace
from typing import List, Optional

from .cli import parse_args
from .errors import ConfigError, FsgenError
from .format_action import run_format_action
from .pipeline import RESULT_FILENAME, generate, load_config, load_result, save_result
from .renderers import run_all as run_all_renderers
from .schema import FormatAction, GenerationResult

logger = logging.getLogger("fsgen")


def _configure_logging(verbose: bool) -> None:
    debug = verbose or bool(os.environ.get("FSGEN_DEBUG", ""))
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("[fsgen] %(module)s: %(message)s"))
    logger.handlers[:] = [handler]
    logger.setLevel(logging.DEBUG if debug else logging.INFO)


def _generate(args: Namespace) -> GenerationResult:
    if args.from_result:
        logger.info("re-rendering from %s", args.from_result)
        return load_result(args.from_result)
    return generate(load_config(args.config))


def _run_generate(args: Namespace) -> int:
    result = _generate(args)
    output_dir = args.output_dir
    output_dir.mkdir(parents=True, exist_ok=True)
    save_result(result, output_dir / RESULT_FILENAME)
    if not args.generate_only:
        run_all_renderers(result, output_dir)
    if args.print_fstab:
        sys.stdout.write(result.fstab)
    if args.commit:
        from .history import commit_output
        changed = commit_output(output_dir)
        if changed:
            print(f"{len(changed)} paths changed", file=sys.stderr)
        else:
            print("no changes", file=sys.stderr)
    return 0


def _run_format_device(args: Namespace) -> int:
    outcome = run_format_action(FormatAction(device=args.device, fs_type=args.fs_type))
    logger.debug("format-device %s: %s", args.device, outcome.value)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    _configure_logging(args.verbose)
    try:
        if args.command == "format-device":
            return _run_format_device(args)
        return _run_generate(args)
    except ConfigError as e:
        print(f"fsgen: configuration error: {e}", file=sys.stderr)
        return 2
    except FsgenError as e:
        print(f"fsgen: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
