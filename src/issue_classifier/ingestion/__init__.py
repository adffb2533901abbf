"""
Data ingestion layer.

Loads labeled issue tables with schema validation at the boundary.
"""
