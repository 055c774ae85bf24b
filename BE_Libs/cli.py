from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from BE_Libs.constants import (
    DEFAULT_ALGORITHM,
    DEFAULT_SMOOTHING,
    DEFAULT_TOLERANCE,
)
from BE_Libs.RemovalLib import REMOVER_REGISTRY
from BE_Libs.SessionLib import EditorSession, EditorSettings

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Remove a flat background from an image and write a transparent PNG.",
    )
    parser.add_argument(
        "input",
        type=Path,
        help="Source image file.",
    )
    parser.add_argument(
        "output",
        type=Path,
        help="Output PNG file, or a directory to write processed_image.png into.",
    )
    parser.add_argument(
        "--algorithm",
        type=str.upper,
        default=DEFAULT_ALGORITHM,
        choices=list(REMOVER_REGISTRY.keys()),
        help="FLOOD_FILL clears only background connected to a corner; "
        "BORDER_MODEL clears every pixel matching a corner color.",
    )
    parser.add_argument(
        "--tolerance",
        type=float,
        default=DEFAULT_TOLERANCE,
        help="Color match tolerance, 1-100 (clamped).",
    )
    parser.add_argument(
        "--smoothing",
        type=float,
        default=DEFAULT_SMOOTHING,
        help="Alpha edge feathering strength, 0-10 (clamped).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    return parser.parse_args(argv)


def run(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    input_path = args.input.expanduser()
    if not input_path.is_file():
        raise SystemExit(f"Input image {input_path} does not exist.")

    settings = EditorSettings(
        algorithm=args.algorithm,
        tolerance=args.tolerance,
        smoothing=args.smoothing,
    ).clamped()

    try:
        session = EditorSession(input_path, settings)
    except ValueError as e:
        raise SystemExit(f"Cannot load {input_path}: {e}")

    cleared = session.run_removal()
    destination = session.save(args.output.expanduser())
    print(f"[+] Cleared {cleared} pixels, wrote {destination}")
    return 0


if __name__ == "__main__":
    raise SystemExit(run())
