"""
turfbook core.

Slot availability, venue search and role access resolution for the
turf booking marketplace.
"""

__version__ = "0.1.0"
