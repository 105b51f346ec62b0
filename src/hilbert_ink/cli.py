"""Command-line entry point: image → Hilbert line drawing.

Runs the approximation pipeline on one image and saves the rendered drawing:
    1. Load config (YAML) and apply CLI overrides
    2. Decode the image to grayscale
    3. Hilbert path → crop → smooth → partition → thickness → strokes
    4. Rasterize strokes onto a blank canvas and save atomically
    5. Optionally write a YAML run manifest

CLI:
    hilbert-ink portrait.jpg portrait_hilbert.png --order 8
    hilbert-ink portrait.jpg out.png --config configs/approximation_v1.yaml \\
                --style zigzag --no-smooth --manifest out_manifest.yaml
    python scripts/approximate.py portrait.jpg out.png --omega 0.5

Exit status is 0 on success and 1 on any configuration, geometry or I/O error.
"""

import argparse
import logging
import sys
from typing import List, Optional

import yaml

from .approximation import run_approximation
from .utils import logging_config, validators
from .utils.geometry import DegenerateGeometryError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hilbert-ink",
        description="Approximate a grayscale image with a single modulated Hilbert curve",
    )
    parser.add_argument("input", type=str, help="Input image (PNG/JPEG/...)")
    parser.add_argument("output", type=str, help="Output drawing (PNG recommended)")
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to approximation.v1 YAML config (defaults are built in)",
    )
    parser.add_argument("--order", type=int, default=None, help="Hilbert curve order")
    parser.add_argument(
        "--path-source",
        choices=["hilbert", "scanlines"],
        default=None,
        help="Path to modulate",
    )
    parser.add_argument(
        "--style",
        choices=["zigzag", "sine", "continuous_sine"],
        default=None,
        help="Stroke renderer",
    )
    parser.add_argument("--omega", type=float, default=None, help="Angular frequency for continuous_sine")
    parser.add_argument("--max-length", type=float, default=None, help="Partition max segment length (px)")
    parser.add_argument("--no-smooth", action="store_true", help="Skip corner smoothing")
    parser.add_argument("--no-contrast", action="store_true", help="Skip contrast stretch")
    parser.add_argument("--manifest", type=str, default=None, help="Write a YAML run manifest here")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    parser.add_argument("--json-logs", action="store_true", help="Emit JSON log lines")
    return parser


def resolve_config(args: argparse.Namespace) -> validators.ApproximationConfigV1:
    """Load the config file (if any) and apply CLI overrides."""
    if args.config:
        cfg = validators.load_approximation_config(args.config)
    else:
        cfg = validators.ApproximationConfigV1()

    overrides = {
        'order': args.order,
        'path_source': args.path_source,
        'style': args.style,
        'omega': args.omega,
        'partition_max_length': args.max_length,
        'smooth_corners': False if args.no_smooth else None,
        'stretch_contrast': False if args.no_contrast else None,
    }
    return validators.config_with_overrides(cfg, overrides)


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)

    logging_config.setup_logging(
        log_level=args.log_level,
        json=args.json_logs,
        context={"app": "hilbert-ink"},
    )
    logging_config.install_excepthook()

    try:
        cfg = resolve_config(args)
        logging_config.push_context(order=cfg.order, style=cfg.style)
        result = run_approximation(args.input, args.output, cfg, manifest_path=args.manifest)
    except (FileNotFoundError, ValueError, RuntimeError, yaml.YAMLError) as e:
        # DegenerateGeometryError is a ValueError
        kind = "Degenerate geometry" if isinstance(e, DegenerateGeometryError) else "Approximation failed"
        logger.error(f"{kind}: {e}")
        return 1
    finally:
        logging_config.pop_context(keys=["order", "style"])

    logger.info(
        f"Done: {result['stats'].get('n_output', 0)} segments, "
        f"max thickness {result['max_thickness']:.3f} px → {result['output']}"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
