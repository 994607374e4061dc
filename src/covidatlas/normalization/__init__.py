"""
Data normalization layer for standardizing source tables.

Handles column naming, entity name canonicalization and date-header
parsing so every dataset reaches aggregation in the same shape.
"""
