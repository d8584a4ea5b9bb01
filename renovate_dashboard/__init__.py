"""Renovate PR dashboard engine.

Discovers open dependency-update pull requests across an organization,
enriches them with CI status, groups them by title, and drives bulk
approve/merge and close actions.
"""

__version__ = "0.1.0"
