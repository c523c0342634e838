"""
ci-status: report the combined state of CI checks for a commit.
"""

__version__ = "1.0.0"
