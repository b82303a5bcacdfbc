"""
Command-line entry point.

Generates one review invitation link from command-line customer data and
key material taken from the environment (see review_links.app.config).

    TRUSTPILOT_ENCRYPTION_KEY=... TRUSTPILOT_AUTHENTICATION_KEY=... \\
        review-link --email rosie@cotton.com --name "Rosie Cotton" \\
                    --ref ORDER123 --sku SKU1 --sku SKU2 --tag category1

stdout carries the link only. Diagnostics go to stderr via logging.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, Dict, List, Optional

from review_links.app.config import get_settings
from review_links.app.errors import LinkGenerationError
from review_links.app.links.encoder import generate_review_link

logger = logging.getLogger("review_links.main")


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="review-link",
        description="Generate a signed, encrypted Trustpilot review invitation link.",
    )
    ap.add_argument("--email", default=None, help="Customer email address")
    ap.add_argument("--name", default=None, help="Customer display name")
    ap.add_argument("--ref", default=None, help="Unique order or transaction reference")
    ap.add_argument("--sku", action="append", default=[], help="Product SKU (repeatable)")
    ap.add_argument("--tag", dest="tags", action="append", default=[], help="Invitation tag (repeatable)")
    return ap


def _record_from_args(args: argparse.Namespace) -> Dict[str, Any]:
    record: Dict[str, Any] = {
        "email": args.email,
        "name": args.name,
        "ref": args.ref,
    }
    if args.sku:
        record["sku"] = args.sku
    if args.tags:
        record["tags"] = args.tags
    return record


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    config = settings.to_key_configuration()
    if config.is_placeholder_account:
        logger.warning(
            "TRUSTPILOT_ACCOUNT_ID is not set; using placeholder %s",
            config.account_id,
        )

    try:
        link = generate_review_link(_record_from_args(args), config)
    except LinkGenerationError as exc:
        logger.error("review link generation failed: %s", exc)
        return 1

    print(link)
    return 0


if __name__ == "__main__":
    sys.exit(main())
