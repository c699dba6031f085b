"""
trackbridge - One canonical issue model over heterogeneous issue trackers.

Read, search, update and comment on issues by URL without knowing which
tracker backend owns them.
"""

__version__ = "0.3.0"
