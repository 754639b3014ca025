"""Top-level package for the OFP route uplink project.

This package turns the navlog of an operational flight plan (OFP) into
typed route instructions and replays them into a flight plan, resolving
fixes, airways and procedures against a navigation database.
"""

__version__ = "0.1.0"
