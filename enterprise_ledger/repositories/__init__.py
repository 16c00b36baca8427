"""
Repository layer for state access.

Each repository wraps one domain of the enterprise store. Every operation runs
inside a single store transaction and hands back deep copies.
"""
