"""Figure search — query normalization, mode selection, and the two search backends."""

from figurevault.search.service import SearchService

__all__ = ["SearchService"]
