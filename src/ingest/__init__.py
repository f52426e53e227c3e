"""NDJSON ingestion strategies.

This module reads newline-delimited JSON sources under a memory budget.
It provides the materializing and streaming passes used by the store.
"""
