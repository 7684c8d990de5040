"""Data models for figure records, queries, and API responses."""
