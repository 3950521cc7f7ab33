import argparse
from pathlib import Path
import os
import sys

# Ensure repository root is on sys.path so `from xfractals...` works when running
# this script directly (e.g. `python scripts/make_image.py`).
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from xfractals.coloring import SCHEMES
from xfractals.iterators import ITERATION_CAP
from xfractals.render import build_frame
from xfractals.utils import parse_kind
from xfractals.viewport import Viewport, default_viewport


def main(argv=None):
    parser = argparse.ArgumentParser(description="Render one fractal view to PNG")
    parser.add_argument("--type", type=str, default="mandelbrot",
                        help="1/mandelbrot, 2/julia, 3/spiral")
    parser.add_argument("--xmin", type=float, default=None)
    parser.add_argument("--xmax", type=float, default=None)
    parser.add_argument("--ymin", type=float, default=None)
    parser.add_argument("--ymax", type=float, default=None)
    parser.add_argument("--width", type=int, default=250)
    parser.add_argument("--height", type=int, default=250)
    parser.add_argument("--max_iter", type=int, default=ITERATION_CAP)
    parser.add_argument("--scheme", type=str, default="grey", choices=list(SCHEMES))
    parser.add_argument("--workers", type=int, default=1)
    parser.add_argument("--outfile", type=str, required=True)

    args = parser.parse_args(argv)

    kind = parse_kind(args.type)
    bounds = (args.xmin, args.xmax, args.ymin, args.ymax)
    if all(b is None for b in bounds):
        viewport = default_viewport(kind)
    elif any(b is None for b in bounds):
        parser.error("give all of --xmin --xmax --ymin --ymax, or none of them")
    else:
        viewport = Viewport(*bounds)

    out_path = Path(args.outfile)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    print(f"[run] fractal={kind.title}, viewport={viewport.as_tuple()}, saving to {out_path}")

    frame = build_frame(
        kind,
        viewport,
        args.width,
        args.height,
        args.max_iter,
        scheme=args.scheme,
        workers=args.workers,
    )

    from PIL import Image
    im = Image.fromarray(frame.to_rgb())
    im.save(out_path)
    print("[run] done.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
