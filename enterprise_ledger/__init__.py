"""
Enterprise ledger: the in-process operations core behind the enterprise dashboard.
"""
