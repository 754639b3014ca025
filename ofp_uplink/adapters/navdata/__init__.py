"""Navigation data adapters - Implementations of NavDatabasePort.

Available implementations:
- CSVNavDatabase: Fixes, airways and procedures loaded from CSV files
- CachingNavDatabase: Decorator caching lookups of another database
"""

from .cached_navdata import CachingNavDatabase
from .csv_navdata import CSVNavDatabase

__all__ = ["CSVNavDatabase", "CachingNavDatabase"]
