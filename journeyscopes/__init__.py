"""
JourneyScopes - Local Record Store

The local data layer behind a travel-companion app: trips, packing and
task checklists, expenses, emergency contacts, a travel journal and
app settings, all kept as JSON blobs in a key-value substrate.

DESIGN PRINCIPLES:
1. One collection = one JSON blob under one key
2. Every write persists the whole collection in one call
3. Failures are reported as results, never raised to callers
4. Every mutation and failure is logged
5. Storage substrate is swappable
"""

__version__ = "1.0.0"
__author__ = "JourneyScopes Team"
