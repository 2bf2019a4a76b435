#!/usr/bin/env python3
"""Write the demo store and division datasets used by the map."""

import argparse
import sys
from pathlib import Path

# Make the src directory importable when run from a checkout
sys.path.insert(0, str(Path(__file__).resolve().parent / "src"))

from pulsemap.data.generator import StoreGenerator, division_regions  # noqa: E402
from pulsemap.services.export.geojson import save_geojson  # noqa: E402


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--out", type=Path, default=Path("data"), help="Output directory")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (use -1 for a random dataset)")
    args = parser.parse_args()

    seed = None if args.seed < 0 else args.seed
    stores = StoreGenerator(seed=seed).stores()
    save_geojson(stores, args.out / "stores.geo.json")
    save_geojson(division_regions(), args.out / "regions.geo.json")
    print(f"Wrote {len(stores['features'])} stores to {args.out / 'stores.geo.json'}")
    print(f"Wrote division regions to {args.out / 'regions.geo.json'}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
