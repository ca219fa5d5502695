"""
gcemodel: Compute Engine machine type models and wire mapping.
"""
__version__ = "0.3.0"
