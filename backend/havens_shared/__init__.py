"""
Shared modules for the Havens POS backend: configuration, logging,
database infrastructure, security and common schemas.
"""
