# tools/map_points.py
#!/usr/bin/env python3
import sys, argparse, logging
from quadmap.core.contracts import as_point, order_corners_clockwise
from quadmap.io.config import load_config, merge_cfg, transformer_from_config


def _parse_point(text):
    try:
        x, y = text.split(",")
        return as_point((float(x), float(y)))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected x,y but got '{text}'")


def build_parser():
    ap = argparse.ArgumentParser(description="Map points from a source quad into a destination quad.")
    ap.add_argument("points", nargs="*", type=_parse_point, help="points as x,y")
    ap.add_argument("--config", help="YAML config with src_quad/dst_quad/margin")
    ap.add_argument("--src", nargs=8, type=float, metavar="V", help="source quad x0 y0 .. x3 y3")
    ap.add_argument("--dst", nargs=8, type=float, metavar="V", help="destination quad (default unit square)")
    ap.add_argument("--margin", type=float, help="outside margin in destination units")
    ap.add_argument("--filter", action="store_true", help="drop mapped points outside the destination")
    ap.add_argument("--order", action="store_true", help="reorder source corners clockwise from top-left")
    ap.add_argument("-v", "--verbose", action="store_true")
    return ap


def main(argv=None):
    args = build_parser().parse_args(argv)

    cfg = load_config(args.config) if args.config else merge_cfg(None)
    if args.src is not None:
        cfg["src_quad"] = args.src
    if args.dst is not None:
        cfg["dst_quad"] = args.dst
    if args.margin is not None:
        cfg["margin"] = args.margin
    if args.order and cfg["src_quad"] is not None:
        cfg["src_quad"] = order_corners_clockwise(cfg["src_quad"])

    level = logging.DEBUG if args.verbose else cfg["log_level"]
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")

    qt = transformer_from_config(cfg)
    if not qt.is_ready():
        print("[ERR] no usable source quad; nothing to map", file=sys.stderr)
        return 2

    mapped = [qt.transform(p) for p in args.points]
    if args.filter:
        mapped = qt.filter_points_inside(mapped)
    for x, y in mapped:
        print(f"{x:.6f} {y:.6f}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
