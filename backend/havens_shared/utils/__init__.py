"""
Utilities: exceptions and shared schemas.
"""
