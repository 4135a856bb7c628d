"""
TubeFetch

Resolve YouTube links to video IDs and list their download options.
"""

__version__ = "1.0.0"
