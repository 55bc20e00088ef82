"""Data acquisition, caching and storage."""
