"""
Crawler services: page fetching and result export.
"""

from rankcrawler.services.fetcher import HttpPageFetcher, PageFetcher
from rankcrawler.services.results import ResultExporter

__all__ = ["HttpPageFetcher", "PageFetcher", "ResultExporter"]
