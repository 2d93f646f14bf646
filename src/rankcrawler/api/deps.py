"""
API Dependencies

Dependency injection for FastAPI routes.
"""

from rankcrawler.workers.manager import CrawlManager, crawl_manager


def get_crawl_manager() -> CrawlManager:
    """Get the crawl manager instance"""
    return crawl_manager
