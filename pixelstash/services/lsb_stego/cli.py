"""
Command line interface for hiding bytes in images

Usage:
    pixelstash embed INPUT OUTPUT [-i PAYLOAD_FILE]
    pixelstash extract INPUT [-o OUTPUT_FILE]
    pixelstash capacity INPUT
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from pixelstash.utility.constants_manager import ConstantsManager

from .core.errors import StegoError
from .core.pixel_store import PixelStoreError
from .core.service import ImageStegoService
from .models.stego_models import StegoCommand


logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="pixelstash",
        description="Hide arbitrary bytes in the low bits of an image",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    pixelstash embed cover.png stego.png < secret.bin
    pixelstash embed cover.png stego.png -i secret.bin
    pixelstash extract stego.png > secret.bin
    pixelstash capacity cover.png
        """,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    embed_parser = subparsers.add_parser(StegoCommand.EMBED.value, help="Embed a payload into an image")
    embed_parser.add_argument("input", type=Path, help="Cover image")
    embed_parser.add_argument("output", type=Path, help="Stego image to write (lossless format)")
    embed_parser.add_argument("-i", "--payload-file", type=Path, help="Read the payload from a file instead of stdin")
    embed_parser.set_defaults(func=cmd_embed)

    extract_parser = subparsers.add_parser(StegoCommand.EXTRACT.value, help="Extract a payload from an image")
    extract_parser.add_argument("input", type=Path, help="Stego image")
    extract_parser.add_argument("-o", "--output", type=Path, help="Write the payload to a file instead of stdout")
    extract_parser.set_defaults(func=cmd_extract)

    capacity_parser = subparsers.add_parser(StegoCommand.CAPACITY.value, help="Show how many bytes an image can hold")
    capacity_parser.add_argument("input", type=Path, help="Cover image")
    capacity_parser.set_defaults(func=cmd_capacity)

    return parser


def cmd_embed(args: argparse.Namespace, service: ImageStegoService) -> int:
    if args.payload_file is not None:
        payload = args.payload_file.read_bytes()
    else:
        payload = sys.stdin.buffer.read()

    result = service.hide_file(args.input, args.output, payload)
    logger.info(
        f"Embedded {result.payload_size_bytes} bytes, "
        f"{result.remaining_capacity_bytes} of {result.capacity_bytes} bytes still free"
    )
    return 0


def cmd_extract(args: argparse.Namespace, service: ImageStegoService) -> int:
    result = service.reveal_file(args.input)
    if args.output is not None:
        args.output.write_bytes(result.data)
    else:
        sys.stdout.buffer.write(result.data)
        sys.stdout.buffer.flush()
    return 0


def cmd_capacity(args: argparse.Namespace, service: ImageStegoService) -> int:
    result = service.capacity_file(args.input)
    print(result.capacity_bytes)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)

    level = logging.DEBUG if args.verbose else ConstantsManager().get_log_level()
    logging.basicConfig(level=level, stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")

    try:
        return args.func(args, ImageStegoService())
    except (StegoError, PixelStoreError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
