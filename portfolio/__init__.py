"""
Portfolio catalog toolkit.

This package turns a published spreadsheet of artworks into an in-memory
catalog and provides the pieces a portfolio site needs around it:
- CSV parsing and row-to-artwork transformation
- Series grouping and a reloadable catalog store
- Image resolution across naming and extension variants
- Masonry layout for series galleries
- Works-page browsing, home carousel selection and page navigation
"""

__version__ = "0.1.0"
