"""Command-line interface."""

import argparse
from pathlib import Path
from typing import List, Optional


def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Debug logging (also enabled by FSGEN_DEBUG=1)",
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="fsgen",
        description="Generate fstab, systemd mount/format units and boot filesystem lists from a filesystem config.",
    )
    sub = parser.add_subparsers(dest="command")
    sub.required = True

    gen = sub.add_parser("generate", help="Generate all artifacts into an output directory")
    gen.add_argument(
        "--config",
        type=Path,
        default=Path("filesystems.json"),
        help="Filesystem configuration (JSON, default: filesystems.json)",
    )
    gen.add_argument(
        "--output-dir",
        type=Path,
        default=Path("./fsgen-output"),
        help="Directory for generated artifacts (default: ./fsgen-output)",
    )
    gen.add_argument(
        "--from-result",
        type=Path,
        default=None,
        metavar="PATH",
        help="Skip generation; re-render from a saved generation.json",
    )
    gen.add_argument(
        "--generate-only",
        action="store_true",
        help="Only write generation.json, do not render artifacts",
    )
    gen.add_argument(
        "--commit",
        action="store_true",
        help="Commit the output directory to git and report whether it changed",
    )
    gen.add_argument(
        "--print-fstab",
        action="store_true",
        help="Also print the generated fstab to stdout",
    )
    _add_common(gen)

    fmt = sub.add_parser(
        "format-device",
        help="Format DEVICE with --fs-type unless it already has a filesystem (run by mkfs-*.service)",
    )
    fmt.add_argument("device", help="Device node, e.g. /dev/sdb")
    fmt.add_argument("--fs-type", required=True, help="Filesystem type passed to mkfs.<type>")
    _add_common(fmt)

    return parser.parse_args(argv)
