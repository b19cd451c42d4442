#!/usr/bin/env python3
"""Write the sample catalogue to CATALOG_PATH (or --path) so it can be edited by hand."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from dotenv import load_dotenv

load_dotenv()

from app.core.config import settings
from app.infrastructure.catalog.product_catalog_data import SAMPLE_PRODUCTS
from app.infrastructure.catalog.product_catalog_store import write_catalog


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed the product catalogue JSON file")
    parser.add_argument("--path", default=settings.CATALOG_PATH)
    parser.add_argument("--force", action="store_true", help="Overwrite an existing catalogue")
    args = parser.parse_args()

    if Path(args.path).exists() and not args.force:
        print(f"{args.path} already exists. Use --force to overwrite.")
        return

    write_catalog(args.path, SAMPLE_PRODUCTS)
    print(f"Wrote {len(SAMPLE_PRODUCTS)} products to {args.path}")


if __name__ == "__main__":
    main()
