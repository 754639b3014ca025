"""Services layer - Application orchestration.

Available services:
- classify: Navlog to route chunks
- extract_route: OFP to route summary
- RouteSynthesizer: Route chunks to flight plan mutations
- UplinkService: Main service for uplinking OFPs
"""

from .navlog_classifier import classify
from .route_extractor import extract_route
from .route_synthesizer import RouteSynthesizer, SynthesisState
from .uplink_service import UplinkService

__all__ = ["classify", "extract_route", "RouteSynthesizer", "SynthesisState", "UplinkService"]
