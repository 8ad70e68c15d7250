"""
examples/dilemma_demo.py
========================
Implicative dilemmas of a client who would like to be socially skilled
but construes socially skilled people as selfish.
"""
import json
import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from gridmeasures import GridMeasures, RepGrid


def main():
    path = os.path.join(os.path.dirname(__file__), "grids", "dilemma_grid.json")
    with open(path, "r", encoding="utf-8") as fh:
        grid = RepGrid.from_dict(json.load(fh))

    gm = GridMeasures(grid)

    dist = gm.correlation_distribution(self_index=0, ideal_index=-1)
    print("Absolute construct correlations (quantiles):")
    for p, inc, exc in zip(dist.probs, dist.including, dist.excluding):
        print(f"  {p:.0%}: including {inc:.2f}  excluding {exc:.2f}")
    print()

    result = gm.dilemma(self_index=0, ideal_index=-1)
    print(gm.explain(result))

    midpoint_result = gm.dilemma(mode=0)
    print(f"\nMidpoint criterion: {midpoint_result.count} dilemma(s)")

    assert result.count == 2, "Expected two implicative dilemmas"
    print("✓ Dilemma example passed.")


if __name__ == "__main__":
    main()
