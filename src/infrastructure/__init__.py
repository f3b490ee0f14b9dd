"""
Infrastructure helpers shared across the library.
"""
