"""backpick - Interactive selective project backup.

Browse a project tree, pick files and folders, and copy them to a
destination folder with optional structure preservation.
"""

__version__ = "0.1.0"
