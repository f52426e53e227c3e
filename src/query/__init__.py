"""Typed predicate evaluation.

This module coerces JSON values, evaluates typed conditions,
and matches records against ANDed condition lists.
"""
