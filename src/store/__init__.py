"""Dataset storage layer.

This module holds the immutable dataset snapshot and its lock.
It powers keyed lookup and filtering for the data manager.
"""
