"""
Print Pricing Package

Turns published costing-sheet CSV exports (paper materials and finishing)
into structured price tables and prices quote lines against them.
"""

__version__ = "1.0.0"
