"""
Main entry point for the plugin modernizer stats data build
"""
import sys
import argparse

from clients import GitHubClient
from models import FetchSummary
from exporters import export_metadata
from aggregators import parse_summary, build_summary
from importers import write_bundles
from utils import logger
from config import OUTPUT_DIR


def run_build(github_client: GitHubClient, output_dir: str = OUTPUT_DIR) -> dict:
    """
    Fetch, aggregate and write the three bundles

    Args:
        github_client: Initialized GitHub client
        output_dir: Directory receiving the bundles

    Returns:
        dict with 'summary' (SummaryStats), 'fetch_summary' (FetchSummary) and 'written' paths
    """
    fetch_summary = FetchSummary()

    # Export from the metadata repository
    logger.info(f"\n{'='*60}")
    logger.info("PHASE 1: FETCH FROM METADATA REPOSITORY")
    logger.info(f"{'='*60}")
    exported = export_metadata(github_client, fetch_summary)

    # Aggregate
    logger.info(f"\n{'='*60}")
    logger.info("PHASE 2: AGGREGATE")
    logger.info(f"{'='*60}")
    parsed = parse_summary(exported['summary_text']) if exported['summary_text'] else {}
    if exported['summary_text']:
        logger.info(f"   ✓ Summary parsed ({len(parsed)} fields found)")
    summary = build_summary(exported['plugins'], exported['recipes'], parsed)
    logger.info(f"   ✓ {summary.total_migrations} migrations, success rate {summary.success_rate}%")

    # Write bundles
    logger.info(f"\n{'='*60}")
    logger.info("PHASE 3: WRITE BUNDLES")
    logger.info(f"{'='*60}")
    written = write_bundles(exported['plugins'], exported['recipes'], summary, output_dir=output_dir)

    fetch_summary.print_summary()
    return {'summary': summary, 'fetch_summary': fetch_summary, 'written': written}


def main(argv=None) -> int:
    """Main execution function"""
    parser = argparse.ArgumentParser(
        description='Fetch plugin modernizer reports and write the dashboard data bundles',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Set GITHUB_TOKEN (environment or .env file) to raise the GitHub API rate limit.
Bundles are written to public/data/ under the current directory.
        """
    )
    parser.parse_args(argv)

    logger.info("\n" + "="*60)
    logger.info("🚀 PLUGIN MODERNIZER STATS - DATA FETCHER")
    logger.info("="*60 + "\n")

    try:
        github_client = GitHubClient()
        run_build(github_client)
    except Exception as e:
        logger.error(f"❌ Fatal error: {e}")
        return 1

    logger.info("\n✅ Data fetching complete!")
    logger.info(f"   Output directory: {OUTPUT_DIR}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
