"""
Test package for docs-crawler.

Present so that test modules can import shared utilities from tests.helpers.
"""
