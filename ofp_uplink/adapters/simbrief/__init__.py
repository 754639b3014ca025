"""SimBrief adapters - Implementation of OfpSourcePort.

Available implementations:
- SimBriefOfpSource: Downloads OFPs from the SimBrief API
"""

from .parser import parse_ofp
from .simbrief_client import SimBriefOfpSource

__all__ = ["SimBriefOfpSource", "parse_ofp"]
