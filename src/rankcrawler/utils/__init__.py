"""
Utilities package initialization
"""

from rankcrawler.utils.parser import extract_links

__all__ = ["extract_links"]
