"""
Data ingestion layer for loading raw tables with schema validation.

All source files are read through this module so that validation
happens once, at the system boundary.
"""
