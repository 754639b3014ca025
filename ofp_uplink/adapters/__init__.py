"""Adapters layer - Concrete implementations of ports.

Adapters implement the port protocols defined in ports/ and wrap
external services:

- navdata/: CSV navigation database and caching decorator
- flight_plan/: In-memory flight plan
- simbrief/: SimBrief OFP download and parsing
- display/: Uplink progress reporting
- cache/: Caching implementations
"""
