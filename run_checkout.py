#!/usr/bin/env python3
"""
Lab Asset Checkout batch runner.

Seeds the registry, runs a batch of checkout requests and reports the
outcome of each one.

Usage:
    python run_checkout.py [--seed FILE] [--requests FILE] [--report | --no-report]

Examples:
    # Run the built-in demo lab and requests
    python run_checkout.py

    # Use your own seed and request files
    python run_checkout.py --seed lab.json --requests requests.json

    # Verbose logging, no report files
    python run_checkout.py --log-level DEBUG --no-report
"""

import sys
import argparse
import logging
from pathlib import Path
from datetime import datetime

from lab_checkout.models.checkout import CheckoutSummary
from lab_checkout.notification.notifier import CompositeNotifier, MemoryNotifier, Notifier
from lab_checkout.registry.asset_registry import AssetRegistry
from lab_checkout.seed import build_registry, parse_requests
from lab_checkout.services.batch import process_batch
from lab_checkout.services.checkout_service import CheckoutService
from lab_checkout.utils.config import config
from lab_checkout.utils.di_container import DIContainer, configure_default_services
from lab_checkout.utils.file_utils import load_json, save_csv, save_json


# Console label per error category
CATEGORY_LABELS = {
    "malformed-input": "Input Error",
    "missing-entity": "Data Missing",
    "clearance-required": "Authorization Failure",
    "policy-violation": "Policy Violation",
    "unavailable": "Policy Violation",
    "unexpected-error": "System Error",
}


def parse_arguments(argv=None):
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        description="Process lab asset checkout requests",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    parser.add_argument(
        "--seed",
        type=Path,
        help="JSON file with requesters and assets (default: built-in demo lab)"
    )

    parser.add_argument(
        "--requests",
        type=Path,
        help="JSON file with a list of checkout requests (default: built-in demo requests)"
    )

    parser.add_argument(
        "--report",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Write JSON/CSV report files (default: on)"
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: LAB_CHECKOUT_LOG_LEVEL or INFO)"
    )

    return parser.parse_args(argv)


def load_input(path, description):
    """
    Load a JSON input file.

    Returns:
        Parsed data, or None when no path was given

    Raises:
        ValueError: If the file cannot be read
    """
    if path is None:
        return None

    data = load_json(path)
    if data is None:
        raise ValueError(f"Could not read {description} file: {path}")
    return data


def display_summary(summary: CheckoutSummary):
    """Print one line per request and the batch totals."""
    print("\n" + "=" * 60)
    print("CHECKOUT RESULTS")
    print("=" * 60)

    for outcome in summary.results:
        if outcome.is_success:
            print(f"TRANSACTION SUCCESSFUL → {outcome.receipt}")
        else:
            label = CATEGORY_LABELS.get(outcome.category, "Error")
            print(f"{label}: {outcome.message}")

    print("-" * 60)
    print(f"Processed: {summary.processed}")
    print(f"Succeeded: {summary.succeeded}")
    print(f"Failed:    {summary.failed}")
    print("=" * 60)


def save_execution_report(summary: CheckoutSummary, notices: MemoryNotifier, output_dir: Path):
    """
    Save the batch report.

    Args:
        summary: Batch summary
        notices: Notifier holding the notices raised during the batch
        output_dir: Directory for report files
    """
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    report_dir = output_dir / "checkout_reports"

    report = summary.to_dict()
    report["notices"] = notices.messages
    report["failures"] = [
        {"category": category, "message": message}
        for category, message in notices.failures
    ]

    json_path = report_dir / f"checkout_report_{timestamp}.json"
    if save_json(report, json_path):
        print(f"\nReport saved to: {json_path}")

    if summary.results:
        csv_path = report_dir / f"checkout_outcomes_{timestamp}.csv"
        if save_csv([outcome.to_dict() for outcome in summary.results], csv_path):
            print(f"Outcomes saved to: {csv_path}")


def main(argv=None):
    """Main execution function."""
    args = parse_arguments(argv)

    container = DIContainer()
    configure_default_services(container)

    logger = container.resolve(logging.Logger)
    if args.log_level:
        logger.setLevel(getattr(logging, args.log_level))

    try:
        config.validate()

        seed = load_input(args.seed, "seed")
        items = load_input(args.requests, "requests")

        registry = build_registry(seed, policy=config.policy)
        container.register_instance(AssetRegistry, registry)

        notices = MemoryNotifier()
        audit = container.resolve(Notifier)
        container.register_instance(Notifier, CompositeNotifier([audit, notices]))

        service = container.resolve(CheckoutService)
        requests = parse_requests(items)
        logger.info(f"Processing {len(requests)} checkout requests")

        summary = process_batch(service, requests)
        display_summary(summary)

        if args.report:
            save_execution_report(summary, notices, config.output_dir)

        return 0 if summary.failed == 0 else 1

    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        logger.info("Interrupted by user")
        return 130

    except ValueError as e:
        logger.error(f"Invalid input: {e}")
        print(f"\nERROR: {e}")
        return 1

    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        print(f"\nERROR: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
