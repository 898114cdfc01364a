"""
BlurHash DSP
Compact image placeholders from a truncated DCT
"""

import logging
import sys

USAGE = """Usage: python main.py --encode <image_path> [components_x] [components_y]
       python main.py --encode --synthetic <gradient|checkerboard|stripes|landscape> [components_x] [components_y]
       python main.py --decode <blurhash> <width> <height> [output_path] [punch]"""


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
    )


def run_encode(args) -> int:
    """Encode an image file or a synthetic image."""
    from models.blurhash_params import EncodeParams
    from engines.pipeline import encode_image
    from utils.test_images import generate_demo_image
    from utils.image_io import load_image

    if not args or args[0] == '--help':
        print(USAGE)
        return 0

    if args[0] == '--synthetic':
        key = args[1] if len(args) > 1 else 'landscape'
        image = generate_demo_image(key)
        if image is None:
            print(f"Unknown synthetic image: {key}", file=sys.stderr)
            return 1
        rest = args[2:]
    else:
        image = load_image(args[0])
        rest = args[1:]

    params = EncodeParams(
        components_x=int(rest[0]) if len(rest) > 0 else 4,
        components_y=int(rest[1]) if len(rest) > 1 else 3,
        measure_quality=True
    )
    result = encode_image(image, params)

    print(result.blurhash)
    print(f"Image:     {result.width}x{result.height}", file=sys.stderr)
    print(f"Components: {params.components_x}x{params.components_y}", file=sys.stderr)
    print(f"PSNR:      {result.psnr_rgb:.2f} dB", file=sys.stderr)
    print(f"SSIM:      {result.ssim_rgb:.4f}", file=sys.stderr)
    print(f"Time:      {result.encode_time_ms:.2f} ms", file=sys.stderr)
    return 0


def run_decode(args) -> int:
    """Decode a BlurHash to a placeholder image."""
    from models.blurhash_params import DecodeParams
    from engines.pipeline import decode_to_image
    from utils.image_io import save_image

    if len(args) < 3 or args[0] == '--help':
        print(USAGE)
        return 0 if args and args[0] == '--help' else 1

    blurhash = args[0]
    params = DecodeParams(
        width=int(args[1]),
        height=int(args[2]),
        punch=float(args[4]) if len(args) > 4 else 1.0
    )
    output_path = args[3] if len(args) > 3 else "placeholder.png"

    result = decode_to_image(blurhash, params)
    save_image(result.image, output_path)
    print(f"Saved: {output_path} ({result.decode_time_ms:.2f} ms)")
    return 0


def main(argv=None) -> int:
    from models.errors import BlurHashError

    argv = sys.argv[1:] if argv is None else argv
    verbose = '--verbose' in argv
    argv = [a for a in argv if a != '--verbose']
    configure_logging(verbose)

    if not argv:
        print(USAGE)
        return 1

    try:
        if argv[0] == '--encode':
            return run_encode(argv[1:])
        if argv[0] == '--decode':
            return run_decode(argv[1:])
    except BlurHashError as e:
        logging.getLogger(__name__).error("Invalid BlurHash: %s", e)
        return 2
    except ValueError as e:
        logging.getLogger(__name__).error("%s", e)
        return 1

    print(USAGE)
    return 1


if __name__ == '__main__':
    sys.exit(main())
