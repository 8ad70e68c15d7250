#!/usr/bin/env python3
"""
scripts/measures.py
===================
Compute grid indices from the command line.

Usage:
    python scripts/measures.py examples/grids/dilemma_grid.json --index summary
    python scripts/measures.py GRID.json --index conflict3 --e-threshold 20
    python scripts/measures.py GRID.json --index dilemma --self 1 --ideal 6 --mode 0
    python scripts/measures.py GRID.json --index conflict2 --output 2 --json

Element numbers on the command line are 1-based, as printed in reports.
"""
import argparse
import json
import logging
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

INDICES = (
    "summary", "bias", "variability", "pvaff", "intensity",
    "conflict1", "conflict2", "conflict3", "dilemma",
)


def element_number(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"element numbers start at 1, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Repertory grid index measures")
    parser.add_argument("grid", help="Path to grid JSON")
    parser.add_argument("--index", choices=INDICES, default="summary")
    parser.add_argument("--digits", type=int, default=None, help="Rounding in the report")
    parser.add_argument("--output", type=int, default=1, choices=(1, 2),
                        help="Report level for conflict2 / conflict3")
    parser.add_argument("--no-discrepancies", action="store_true",
                        help="Hide conflict3 discrepancy matrices")
    parser.add_argument("--crit", type=float, default=None, help="conflict2 sensitivity")
    parser.add_argument("--power", type=float, default=None, help="conflict3 Minkowski power")
    parser.add_argument("--e-threshold", type=float, default=None)
    parser.add_argument("--c-threshold", type=float, default=None)
    parser.add_argument("--self", dest="self_element", type=element_number, default=None,
                        help="Self element (1-based, default first)")
    parser.add_argument("--ideal", dest="ideal_element", type=element_number, default=None,
                        help="Ideal self element (1-based, default last)")
    parser.add_argument("--mode", type=int, default=None, help="Dilemma mode (0 or 1)")
    parser.add_argument("--r-min", type=float, default=None)
    parser.add_argument("--exclude", action="store_true",
                        help="Dilemma criterion excludes self and ideal")
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    parser.add_argument("--verbose", "-v", action="store_true")
    return parser


def run(args) -> int:
    from gridmeasures.api.grid_measures import GridMeasures
    from gridmeasures.core.exceptions import GridMeasuresError
    from gridmeasures.core.grid import RepGrid

    with open(args.grid, "r", encoding="utf-8") as fh:
        data = json.load(fh)

    try:
        gm = GridMeasures(RepGrid.from_dict(data))
        if args.index == "summary":
            summary = gm.summary()
            if args.json:
                print(json.dumps(summary, indent=2))
            else:
                print(repr(gm))
                for name, value in summary.items():
                    print(f"  {name:<12} {'n/a' if value is None else round(value, 3)}")
            return 0

        if args.index == "conflict2":
            result = gm.conflict2(crit=args.crit)
        elif args.index == "conflict3":
            result = gm.conflict3(
                power=args.power,
                e_threshold=args.e_threshold,
                c_threshold=args.c_threshold,
            )
        elif args.index == "dilemma":
            n = gm.grid.element_count()
            self_index = 0 if args.self_element is None else args.self_element - 1
            ideal_index = n - 1 if args.ideal_element is None else args.ideal_element - 1
            result = gm.dilemma(
                self_index=self_index,
                ideal_index=ideal_index,
                mode=args.mode,
                r_min=args.r_min,
                exclude=args.exclude or None,
            )
        else:
            result = getattr(gm, args.index)()
    except GridMeasuresError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(gm.explain(
            result,
            digits=args.digits,
            output=args.output,
            discrepancies=not args.no_discrepancies,
        ))
    return 0


def main():
    args = build_parser().parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    sys.exit(run(args))


if __name__ == "__main__":
    main()
