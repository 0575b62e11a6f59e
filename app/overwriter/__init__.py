"""overwriter - merge dropped files into an existing tree.

Resolves same-path conflicts by replacing, skipping, or keeping both files.
"""

__version__ = "0.1.0"
