"""
Daybook - Source Package

A small daily bookkeeping tool for a shop or a freelancer:
record what came in and what went out each day, then look at
the day, the month and the year.

DESIGN PRINCIPLES:
1. One aggregation core, shared by every storage backend
2. The core is pure - callers own the transaction list
3. Validate at the storage boundary, not inside the math
4. Reads degrade to empty views, writes fail loudly
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Daybook Team"
