#!/usr/bin/env python3
"""
Evaluate eligibility for one or more JSON payload files.

Prints the pretty-printed result for each file, in the same form the audit
log records. Exits non-zero if any payload fails validation.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from service_eligibility.app.service import EligibilityService
from shared.config import get_settings
from shared.errors import EligibilityError
from shared.logging import configure_logging


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("payloads", nargs="+", type=Path, help="JSON payload files")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail when no rule matches instead of applying the default outcome",
    )
    parser.add_argument(
        "--reference-data",
        type=Path,
        default=None,
        help="YAML file overriding the reference lists",
    )
    parser.add_argument("--log-level", default="warning", help="Log level for structured logs")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Evaluate every payload file and print its result."""
    args = parse_args(argv)

    overrides = {"log_level": args.log_level}
    if args.strict:
        overrides["strict_matching"] = True
    if args.reference_data is not None:
        overrides["reference_data_file"] = str(args.reference_data)

    settings = get_settings(**overrides)
    configure_logging(settings.service_name, settings.log_level)

    try:
        service = EligibilityService(settings)
    except EligibilityError as e:
        print(f"❌ {e.code}: {e.message}", file=sys.stderr)
        return 2

    failures = 0
    for path in args.payloads:
        try:
            result = service.evaluate_json(path.read_bytes())
        except OSError as e:
            print(f"❌ {path}: {e}", file=sys.stderr)
            failures += 1
            continue
        except EligibilityError as e:
            print(f"❌ {path}: {e.code}", file=sys.stderr)
            print(e.to_response().model_dump_json(indent=2), file=sys.stderr)
            failures += 1
            continue

        print(f"{path}:")
        print(result.to_json())

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
