"""
API route modules, one per domain.

Routers are included from enterprise_ledger.api.main (under the /api/v1 prefix).
"""
