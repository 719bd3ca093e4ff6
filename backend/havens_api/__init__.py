"""
Havens POS REST API package.
"""
