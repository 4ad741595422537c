"""Debug Buddy: heuristic review of single GitHub files.

Resolves a GitHub blob URL to its raw content, scores it with a handful of
line-based checks, and keeps per-user account stats and analysis history.
"""

__version__ = "0.1.0"
