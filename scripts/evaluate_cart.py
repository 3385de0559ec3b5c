#!/usr/bin/env python3
"""
Evaluate coupons against a cart from the command line.

Reads a cart JSON file ({"items": [{"productId", "quantity", "unitPrice"}]})
and a coupons JSON file (a list of coupon records). Without --apply it prints
the applicable coupons with their discount; with --apply it applies that
coupon and prints the updated cart.

Usage:
    python scripts/evaluate_cart.py --cart cart.json --coupons coupons.json [--apply COUPON_ID]
"""

import sys
import json
import argparse
from decimal import Decimal
from pathlib import Path

# add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from couponengine.core.config import settings
from couponengine.core.logging_config import get_logger, setup_logging
from couponengine.schemas.cart import Cart
from couponengine.schemas.coupon import Coupon
from couponengine.services.coupons import apply_coupon, list_applicable, summarize_cart

logger = get_logger(__name__)


def load_json(path: str):
    with open(path, "r", encoding="utf-8") as fh:
        return json.load(fh, parse_float=Decimal)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Evaluate coupons for a cart")
    parser.add_argument("--cart", required=True, help="path to the cart JSON file")
    parser.add_argument("--coupons", required=True, help="path to the coupons JSON file")
    parser.add_argument("--apply", metavar="COUPON_ID", help="apply this coupon and print the updated cart")
    parser.add_argument("--log-level", default=None, help="override LOG_LEVEL")
    args = parser.parse_args(argv)

    setup_logging(args.log_level)

    cart = Cart.model_validate(load_json(args.cart))
    coupons = [Coupon.model_validate(raw) for raw in load_json(args.coupons)]
    logger.info(f"[{settings.APP_ENV}] Loaded cart with {len(cart.items)} items and {len(coupons)} coupons")

    if args.apply:
        coupon = next((c for c in coupons if c.id == args.apply), None)
        if coupon is None:
            logger.error(f"Coupon {args.apply} not found")
            return 1
        summary = summarize_cart(apply_coupon(coupon, cart))
        print(json.dumps({"updated_cart": summary.model_dump(mode="json", by_alias=True)}, indent=2))
        return 0

    rows = [row.dict() for row in list_applicable(coupons, cart)]
    print(json.dumps({"applicable_coupons": rows}, indent=2, default=str))
    return 0


if __name__ == "__main__":
    sys.exit(main())
