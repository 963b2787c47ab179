# shopping_test_runner.py
# Command line entry point - runs storefront scenarios outside pytest

import json
import sys
from contextlib import redirect_stdout
from typing import List, Optional

from shop_config import load_config
from shop_logging import setup_logging
from shopping_scenarios import SCENARIOS, ScenarioResult, run_scenarios


def format_summary(results: List[ScenarioResult]) -> str:
    passed = sum(1 for r in results if r.passed)
    lines = [f"{'='*70}", f"RESULTS: {passed}/{len(results)} passed", f"{'='*70}"]
    for r in results:
        mark = "PASS" if r.passed else "FAIL"
        line = f"  [{mark}] {r.name} ({r.duration:.1f}s)"
        if not r.passed and r.message:
            line += f"\n         {r.message}"
        lines.append(line)
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point with command-line interface"""
    import argparse

    parser = argparse.ArgumentParser(
        description="Run saucedemo storefront regression scenarios with Selenium"
    )

    parser.add_argument(
        'scenarios',
        nargs='*',
        help='Scenario names to run (default: all)'
    )

    parser.add_argument(
        '--list',
        action='store_true',
        help='List scenario names and exit'
    )

    parser.add_argument(
        '--headless',
        action='store_true',
        default=None,
        help='Run browser in headless mode (or set SHOP_HEADLESS)'
    )

    parser.add_argument(
        '--artifacts-dir',
        help='Folder for logs and failure screenshots (or set SHOP_ARTIFACTS_DIR)',
        default=None
    )

    parser.add_argument(
        '--json',
        action='store_true',
        help='Print results as JSON'
    )

    args = parser.parse_args(argv)

    if args.list:
        for name in SCENARIOS:
            print(name)
        return 0

    unknown = [name for name in args.scenarios if name not in SCENARIOS]
    if unknown:
        print(f"ERROR: Unknown scenario(s): {', '.join(unknown)}")
        print("Use --list to see the available scenarios")
        return 2

    try:
        config = load_config(artifacts_dir=args.artifacts_dir, headless=args.headless)
    except ValueError as e:
        print(f"ERROR: {e}")
        return 2

    setup_logging(config.logs_path)
    if args.json:
        # Keep stdout for the JSON document only
        with redirect_stdout(sys.stderr):
            results = run_scenarios(args.scenarios or None, config=config)
    else:
        results = run_scenarios(args.scenarios or None, config=config)

    if args.json:
        print(json.dumps([r.to_dict() for r in results], indent=2))
    else:
        print(format_summary(results))

    return 0 if all(r.passed for r in results) else 1


if __name__ == "__main__":
    sys.exit(main())
