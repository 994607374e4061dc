"""
Analysis layer: magnitude classification, rankings and comparisons.
"""
