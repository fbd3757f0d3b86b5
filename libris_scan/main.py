"""CLI entry point and orchestrator."""

import argparse
import logging
import sys

from .catalogs import ALL_CATALOGS, get_catalog_class
from .config import AppConfig, load_config
from .crawler import Crawler
from .errors import ConfigurationMissing
from .fetcher import Fetcher
from .ledger import CompletionLedger
from .logger import setup_logger
from .models import RunState
from .scanner import list_candidate_files
from .store import LocalStore

logger = logging.getLogger("libris_scan")


def build_stores(config: AppConfig):
    return (
        LocalStore(config.storage.metadata_dir, ".json"),
        LocalStore(config.storage.covers_dir, ".jpg"),
    )


def run_crawl(config: AppConfig, catalog_name: str = None) -> RunState:
    """Validate config, then crawl the eBook directory. Raises ConfigurationMissing."""
    catalog_cls = get_catalog_class(catalog_name or config.catalog.name)
    config.require_api_key()
    source_dir = config.require_source_dir()
    config.ensure_dirs()

    ledger = CompletionLedger(config.ledger_path)
    ledger.load()
    metadata_store, cover_store = build_stores(config)

    catalog = catalog_cls(config.catalog, Fetcher(config.download))
    crawler = Crawler(
        catalog, ledger, metadata_store, cover_store,
        search_filters=config.search_filters,
        request_delay=config.catalog.request_delay,
    )

    state = RunState()
    try:
        paths = list_candidate_files(source_dir, config.extensions)
        logger.info(f"Found {len(paths)} files under {source_dir} "
                    f"({len(ledger)} already in ledger)")
        crawler.run(paths, state)
    except Exception:
        logger.exception("Fatal error during crawl")
    finally:
        state.finish()
        catalog.close()
    return state


def show_summary(state: RunState):
    status = "STOPPED (Quota)" if state.quota_exhausted else "COMPLETED"
    hours, rem = divmod(int(state.elapsed), 3600)
    minutes, seconds = divmod(rem, 60)

    print("\n" + "=" * 45)
    print(f"  LIBRISSCAN FINAL SUMMARY  [{status}]")
    if state.quota_exhausted:
        print("   *** DAILY QUOTA EXHAUSTED ***")
    print("=" * 45)
    print(f"{'Time Elapsed:':<24}{hours:02d}:{minutes:02d}:{seconds:02d}")
    print(f"{'Total Files Found:':<24}{state.total}")
    print(f"{'Skipped (By Log):':<24}{state.skipped_by_ledger}")
    print(f"{'Skipped (ISBN Exists):':<24}{state.skipped_existing}")
    print(f"{'Newly Downloaded:':<24}{state.saved}")
    print(f"{'Covers Downloaded:':<24}{state.covers_saved}")
    print(f"{'Not Found:':<24}{state.not_found}")
    print(f"{'Errors:':<24}{state.failed}")
    print("=" * 45)


def show_stats(config: AppConfig):
    """Display what is already on disk, without contacting the catalog."""
    ledger = CompletionLedger(config.ledger_path)
    ledger.load()
    metadata_store, cover_store = build_stores(config)

    print("\n" + "=" * 45)
    print("  LIBRISSCAN STORAGE")
    print("=" * 45)
    print(f"{'Processed files:':<24}{len(ledger)}")
    print(f"{'Metadata records:':<24}{metadata_store.count()}")
    print(f"{'Covers:':<24}{cover_store.count()}")
    print()


def main():
    parser = argparse.ArgumentParser(description="LibrisScan: eBook metadata crawler")
    parser.add_argument("--config", type=str, default="config.yaml",
                        help="Path to config file (created with defaults if missing)")
    parser.add_argument("--catalog", type=str, default=None,
                        choices=list(ALL_CATALOGS.keys()),
                        help="Catalog to query instead of the configured one")
    parser.add_argument("--source-dir", type=str, default=None,
                        help="Override storage.ebook_source_dir")
    parser.add_argument("--stats", action="store_true",
                        help="Show ledger and storage counts, then exit")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Debug output on the console")
    args = parser.parse_args()

    config = load_config(args.config)
    if args.source_dir:
        config.storage.ebook_source_dir = args.source_dir
    setup_logger(config.log_dir, verbose=args.verbose)

    if args.stats:
        show_stats(config)
        return

    print("LibrisScan: Metadata Crawler")
    print(f"Source directory: {config.storage.ebook_source_dir}")
    print(f"Metadata: {config.storage.metadata_dir}")
    print(f"Covers: {config.storage.covers_dir}")

    try:
        state = run_crawl(config, args.catalog)
    except ConfigurationMissing as e:
        logger.error(f"[FATAL] {e}")
        sys.exit(1)

    show_summary(state)


if __name__ == "__main__":
    main()
