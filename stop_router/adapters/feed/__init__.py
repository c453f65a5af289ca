"""Feed adapters - Implementations of the feed repository port.

Available implementations:
- CSVFeedRepository: Loads stops, stop times and transfers from CSV files
"""

from .csv_repository import CSVFeedRepository

__all__ = ["CSVFeedRepository"]
