"""
Configuration module for Elasticsearch Document Library.

Handles loading connection settings from the environment and index
schemas from JSON files.
"""

from elasticsearch_doc_lib.config.loader import ConfigLoader, setup_logging

__all__ = ["ConfigLoader", "setup_logging"]
