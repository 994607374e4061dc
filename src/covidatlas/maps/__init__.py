"""
Map models: 2D categorical bubble maps and the layered 3D globe.
"""
