"""
Interactive fractal explorer.

Run:
    xfractals                       (prompts for fractal type and colors)
    xfractals --type 1 --scheme 0
    xfractals --type julia --save figures/julia.png

Fractal type 0 at the prompt exits without opening a window.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from xfractals.coloring import SCHEMES
from xfractals.config import load_config
from xfractals.session import FractalSession
from xfractals.utils import parse_kind

TYPE_MENU = """
Fractal Type?
1) Mandelbrot
2) Julia
3) Spiral
"""


def _scheme_menu() -> str:
    lines = ["", "Color Scheme?"]
    for i, name in enumerate(SCHEMES):
        lines.append(f"{i}) {name}")
    return "\n".join(lines) + "\n"


def prompt_type(input_fn=input) -> str:
    print(TYPE_MENU)
    return input_fn("Enter the number of your choice: ").strip()


def prompt_scheme(input_fn=input) -> str:
    print(_scheme_menu())
    answer = input_fn("Enter the number of your choice: ").strip()
    return answer or "grey"


def save_png(frame, out_path: str | Path) -> Path:
    from PIL import Image

    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    Image.fromarray(frame.to_rgb()).save(out_path)
    return out_path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Explore Mandelbrot, Julia and Spiral fractals")
    parser.add_argument("--type", type=str, default=None,
                        help="1/mandelbrot, 2/julia, 3/spiral; 0 quits")
    parser.add_argument("--scheme", type=str, default=None,
                        help=f"color scheme name or number: {', '.join(SCHEMES)}")
    parser.add_argument("--config", type=str, default=None, help="YAML config file")
    parser.add_argument("--width", type=int, default=None)
    parser.add_argument("--height", type=int, default=None)
    parser.add_argument("--max-iter", dest="max_iter", type=int, default=None)
    parser.add_argument("--workers", type=int, default=None)
    parser.add_argument("--save", type=str, default=None,
                        help="render the first view to this PNG and exit")
    return parser


def main(argv=None, input_fn=input) -> int:
    args = build_parser().parse_args(argv)

    try:
        cfg = load_config(args.config).with_overrides(
            scheme=args.scheme,
            width=args.width,
            height=args.height,
            max_iter=args.max_iter,
            workers=args.workers,
        )

        choice = args.type
        if choice is None and cfg.fractal is None:
            choice = prompt_type(input_fn)
        if choice is not None and choice.strip() == "0":
            print("\n*** End Of Processing ***\n")
            return 0
        kind = parse_kind(choice) if choice is not None else cfg.fractal

        if cfg.scheme is None:
            cfg = cfg.with_overrides(scheme=prompt_scheme(input_fn))
    except ValueError as e:
        print(f"[error] {e}")
        return 2

    session = FractalSession(
        kind,
        width=cfg.width,
        height=cfg.height,
        iteration_cap=cfg.max_iter,
        scheme=cfg.scheme,
        workers=cfg.workers,
    )

    print(f"[run] fractal={kind.title}, grid={cfg.width}x{cfg.height}, "
          f"max_iter={cfg.max_iter}, scheme={cfg.scheme}")
    if args.save:
        out_path = save_png(session.start(), args.save)
        print(f"[run] saved {out_path}")
        return 0

    from xfractals.viewer import DisplayError, FractalViewer

    # the viewer checks the display before rendering the first frame
    try:
        viewer = FractalViewer(session)
    except DisplayError as e:
        print(f"[error] {e}")
        return 1

    code = viewer.show()
    print("\n*** End Of Processing ***\n")
    return code


if __name__ == "__main__":
    sys.exit(main())
