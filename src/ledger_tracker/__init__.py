"""
Personal ledger: record income and expenses, keep a running balance,
and move the ledger in and out of Excel workbooks.
"""

__version__ = "0.1.0"
