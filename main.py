"""
Blog Syndicator Application

This is the main entry point for the Blog Syndicator.
It harvests new articles from the configured blog sites, rewords them,
illustrates them and republishes them on the Webflow blog, then writes
a log of the processed posts.
"""

import sys
import argparse
import logging
from dataclasses import dataclass, asdict
from typing import Optional, Sequence

from config import settings
from config.sites import load_sites
from config.validators import validate_settings, get_config_summary
from data.models import SiteConfig
from data.run_log import RunBuffer, write_run_log
from utils.logger import get_logger, setup_file_logging
from utils.exceptions import SyndicatorError, ArticleError, PlatformError, ConfigurationError
from services.article_service import ArticleService
from services.ai_service import AIService
from services.webflow_service import WebflowService
from services.protocols import ArticleServiceProtocol, AIServiceProtocol, PublishingPlatformProtocol

# Set up logging
logger = get_logger(__name__)


@dataclass
class RunStats:
    """Counters reported at the end of a run."""
    sites_processed: int = 0
    sites_failed: int = 0
    links_found: int = 0
    new_links: int = 0
    posts_processed: int = 0
    posts_failed: int = 0
    posts_published: int = 0


class BlogSyndicator:
    """
    Main application class for the Blog Syndicator.

    This class orchestrates the pipeline: for each site, harvest links,
    drop the known ones, then extract, reformulate, illustrate and publish
    each new post, one post at a time.
    """

    def __init__(
        self,
        article_service: Optional[ArticleServiceProtocol] = None,
        ai_service: Optional[AIServiceProtocol] = None,
        platform: Optional[PublishingPlatformProtocol] = None,
        run_log_dir: Optional[str] = None,
    ):
        """Initialize the syndicator, building the default services when none are given."""
        self.article_service = article_service or ArticleService()
        self.ai_service = ai_service or AIService()
        self.platform = platform or WebflowService()
        self.run_log_dir = run_log_dir or settings.RUN_LOG_DIR
        self.buffer = RunBuffer()
        self.stats = RunStats()
        self.log_path: Optional[str] = None

    def run(self, sites: Sequence[SiteConfig], test_mode: bool = False, dry_run: bool = False) -> bool:
        """
        Run the pipeline over every site, then write the run log.

        Args:
            sites: The configured sites, processed in order.
            test_mode: Only process the first site and its first new post.
            dry_run: Run every stage but never create items on the platform.

        Returns:
            bool: False if every site failed or no attempted post went through.
        """
        if test_mode:
            sites = sites[:1]
            logger.info("TEST MODE: processing only the first site and its first new post")

        try:
            for site in sites:
                logger.info(f"Stealing posts from {site.name} ({site.id})")
                try:
                    self.process_site(site, test_mode=test_mode, dry_run=dry_run)
                    self.stats.sites_processed += 1
                except ArticleError as e:
                    logger.error(f"[{site.id}] Source site error, skipping site: {e}")
                    self.stats.sites_failed += 1
                except PlatformError as e:
                    logger.error(f"[{site.id}] Webflow error, skipping site: {e}")
                    self.stats.sites_failed += 1
                except SyndicatorError as e:
                    logger.error(f"[{site.id}] Syndicator error, skipping site: {e}", exc_info=True)
                    self.stats.sites_failed += 1
                except Exception as e:
                    logger.error(f"[{site.id}] Unexpected error, skipping site: {e}", exc_info=True)
                    self.stats.sites_failed += 1
        finally:
            self.log_path = write_run_log(self.buffer, self.run_log_dir)

        logger.info(f"Run summary: {asdict(self.stats)}")

        if sites and self.stats.sites_failed == len(sites):
            return False
        if self.stats.posts_failed and not self.stats.posts_processed:
            return False
        return True

    def process_site(self, site: SiteConfig, test_mode: bool = False, dry_run: bool = False) -> None:
        """
        Harvest, deduplicate and process the posts of one site.

        Raises:
            ArticleFetchError: If the listing page cannot be fetched.
            PlatformError: If the stored items cannot be listed.
        """
        links = self.article_service.harvest_links(site)
        self.stats.links_found += len(links)

        new_links = self.platform.filter_new_links(links)
        if test_mode:
            new_links = new_links[:1]
        self.stats.new_links += len(new_links)

        if not new_links:
            logger.info(f"[{site.id}] No new post to process")
            return

        for link in new_links:
            try:
                processed = self.process_post(site, link, dry_run=dry_run)
            except Exception as e:
                logger.error(f"[{site.id}] Unexpected error processing {link}, skipping post: {e}",
                             exc_info=True)
                processed = False

            if processed:
                self.stats.posts_processed += 1
            else:
                self.stats.posts_failed += 1

    def process_post(self, site: SiteConfig, link: str, dry_run: bool = False) -> bool:
        """
        Take one article through extraction, reformulation, thumbnail and publishing.

        Returns:
            bool: True if the post was reformulated and recorded, False if it was dropped.
        """
        original_post = self.article_service.fetch_post(link, site)
        if not original_post:
            logger.warning(f"[{site.id}] Post details not extracted, skipping {link}")
            return False

        reformulated_post = self.ai_service.reformulate_post(site, original_post)
        if not reformulated_post:
            logger.warning(f"[{site.id}] Post not reformulated, skipping {link}")
            return False

        thumbnail_url = self.ai_service.generate_thumbnail(reformulated_post.title)
        if thumbnail_url:
            reformulated_post.thumbnail_url = thumbnail_url

        self.buffer.add(site.id, original_post, reformulated_post)

        if dry_run:
            logger.info(f"DRY RUN: Would create post '{reformulated_post.title}' on Webflow")
            return True

        if self.platform.publish_post(original_post.original_link, reformulated_post):
            self.stats.posts_published += 1
        return True


def parse_arguments(argv: Optional[Sequence[str]] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description='Blog Syndicator')
    parser.add_argument('--sites', type=str, default=None,
                        help='Path of the JSON sites file (defaults to SITES_FILE)')
    parser.add_argument('--test', action='store_true',
                        help='Only process the first site and its first new post')
    parser.add_argument('--dry-run', action='store_true', help='Run without creating Webflow items')
    parser.add_argument('--log-file', type=str, default='syndicator.log', help='Log file path')
    parser.add_argument('--log-level', type=str, choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        default='INFO', help='Logging level')
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None):
    """Main entry point for the application."""
    # Parse command line arguments
    args = parse_arguments(argv)

    # Set up logging
    log_level = getattr(logging, args.log_level)
    setup_file_logging(args.log_file, log_level)

    logger.info("Starting Blog Syndicator")

    try:
        sites = load_sites(args.sites or settings.SITES_FILE)
        validate_settings(sites)
        logger.info(f"Configuration: {get_config_summary(sites)}")

        syndicator = BlogSyndicator()
        success = syndicator.run(sites, test_mode=args.test, dry_run=args.dry_run)

        # Report status
        if success:
            logger.info("Blog Syndicator completed successfully")
            exit_code = 0
        else:
            logger.warning("Blog Syndicator completed with warnings or errors")
            exit_code = 1

    except ConfigurationError as e:
        logger.critical(str(e))
        exit_code = 2
    except Exception as e:
        logger.error(f"Unhandled exception in Blog Syndicator: {e}", exc_info=True)
        exit_code = 2

    # Log application end
    logger.info(f"Blog Syndicator finished with exit code {exit_code}")
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
