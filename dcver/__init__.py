"""Convert comma-separated data files into packed or raw binary files, with a getopt-style option parser."""

__version__ = "1.0.0"