"""
MAIN ORCHESTRATOR
QBLUE Osmotic Energy Dashboard

Generates a fresh batch of synthetic reservoir readings and renders the
energy output analytics page:
1. Sample series → 2. KPI engine → 3. Dashboard

Usage:
    python main.py
    python main.py --config custom_config.yaml
    python main.py --seed 42        # Reproducible batch
    python main.py --watch          # Regenerate whenever the config changes
"""

import sys
import os
import logging
import argparse
import time
from datetime import datetime
import yaml
import webbrowser
import io

# Fix Windows console encoding for Unicode
if sys.platform == "win32":
    sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding="utf-8", errors="replace")
    sys.stderr = io.TextIOWrapper(sys.stderr.buffer, encoding="utf-8", errors="replace")

from osmotic_dashboard.dashboard_app import run_dashboard_app
from osmotic_dashboard.auto_update import watch_config


def setup_logging(log_file: str = None, verbose: bool = True):
    """Setup logging configuration"""
    log_level = logging.INFO if verbose else logging.WARNING

    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    handlers = [logging.StreamHandler(sys.stdout)]

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(level=log_level, format=log_format, handlers=handlers, force=True)


def load_config(config_path: str) -> dict:
    """Load dashboard configuration"""
    with open(config_path, "r") as f:
        return yaml.safe_load(f) or {}


def print_banner():
    """Print dashboard banner"""
    banner = """
===============================================================

        QBLUE OSMOTIC ENERGY DASHBOARD
        Energy Output Analytics - Synthetic Sensor Data

===============================================================
    """
    print(banner)


def open_dashboard(index_path: str):
    """Open the generated page in the default browser"""
    print(f"\n  🎯 MAIN DASHBOARD: {index_path}")
    print(f"     Opening in your default browser...")
    try:
        abs_path = os.path.abspath(index_path)
        webbrowser.open(f"file:///{abs_path}".replace("\\", "/"))
    except webbrowser.Error as e:
        print(f"     ⚠️  Could not open browser automatically: {e}")
        print(f"     Please open manually: {index_path}")


def run_pipeline(config_path: str = "config.yaml", seed: int = None, open_browser: bool = True):
    """
    Generate the dashboard once

    Args:
        config_path: Path to configuration file
        seed: Optional random seed overriding the configured one
        open_browser: Open the page after generating it

    Returns:
        True on success, False if generation failed and errors are tolerated
    """
    logger = logging.getLogger(__name__)

    config = load_config(config_path)
    pipeline_config = config.get("pipeline") or {}

    pipeline_start = time.time()

    try:
        viz_files = run_dashboard_app(config_path, seed=seed)
        pipeline_time = time.time() - pipeline_start

        print("\n" + "=" * 70)
        print("  DASHBOARD SUMMARY")
        print("=" * 70)
        print(f"\n✓ Dashboard generated in {pipeline_time:.2f}s")
        for path in viz_files:
            print(f"    {path}")

        if open_browser and pipeline_config.get("open_browser", True):
            open_dashboard(viz_files[0])

        print("\n" + "=" * 70)
        print(f"  Completed at: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
        print("=" * 70 + "\n")

        return True

    except Exception as e:
        logger.error(f"\n❌ Dashboard generation failed: {e}")
        logger.exception("Full error traceback:")

        if not pipeline_config.get("continue_on_error", False):
            raise

        return False


def main(argv=None):
    """Main entry point"""
    parser = argparse.ArgumentParser(
        description="QBLUE Osmotic Energy Dashboard",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py                          # Generate and open the dashboard
  python main.py --config my_config.yaml  # Use custom config
  python main.py --seed 7 --no-browser    # Reproducible batch, no browser
  python main.py --watch                  # Regenerate on config changes
        """,
    )

    parser.add_argument(
        "--config",
        type=str,
        default="config.yaml",
        help="Path to configuration file (default: config.yaml)",
    )

    parser.add_argument(
        "--seed", type=int, default=None, help="Random seed for a reproducible batch"
    )

    parser.add_argument(
        "--no-browser", action="store_true", help="Do not open the generated page"
    )

    parser.add_argument(
        "--watch",
        action="store_true",
        help="Keep running and regenerate when the config file changes",
    )

    parser.add_argument("--quiet", action="store_true", help="Reduce logging verbosity")

    args = parser.parse_args(argv)

    # Check config file exists
    if not os.path.exists(args.config):
        print(f"❌ Error: Config file not found: {args.config}")
        return 1

    try:
        config = load_config(args.config)
    except yaml.YAMLError as e:
        print(f"❌ Error: Could not parse config file {args.config}: {e}")
        return 1

    log_file = (config.get("paths") or {}).get("log_file")
    setup_logging(log_file=log_file, verbose=not args.quiet)

    print_banner()
    print(f"Configuration: {args.config}")
    if args.seed is not None:
        print(f"Seed: {args.seed}")
    print()

    try:
        success = run_pipeline(
            config_path=args.config, seed=args.seed, open_browser=not args.no_browser
        )
    except Exception:
        return 1

    if args.watch:
        watch_config(args.config)

    return 0 if success else 1


if __name__ == "__main__":
    sys.exit(main())
