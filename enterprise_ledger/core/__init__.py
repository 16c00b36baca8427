"""
Core application utilities.

This package provides:
- Application-level settings
- Logging configuration with request correlation ids
- Domain error types and identity helpers
- FastAPI dependency providers for repositories
"""
