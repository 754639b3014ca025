"""SimBrief OFP parser.

Maps the JSON flavour of a SimBrief OFP to an OfpDocument. Only the
fields needed by the uplink are read:

- origin / destination: icao_code, plan_rwy, trans_alt / trans_level
- alternate: icao_code (a single object or a list of alternates)
- general: costindex, initial_altitude, avg_tropopause
- atc: callsign
- navlog.fix: ident, type, pos_lat, pos_long, via_airway, is_sid_star

Airport identifiers are required. Numeric header fields that cannot be
parsed fall back to zero; cost index and tropopause are kept as text
and interpreted by the route extractor.
"""

from __future__ import annotations

import logging
from typing import Any, List, Mapping

from ...domain.errors import OfpParseError
from ...domain.models import FixType, NavlogFix, OfpDocument

logger = logging.getLogger(__name__)


def _section(data: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    section = data.get(name)
    if isinstance(section, list):
        section = section[0] if section else {}
    return section if isinstance(section, Mapping) else {}


def _text(section: Mapping[str, Any], key: str) -> str:
    value = section.get(key)
    if value is None or isinstance(value, (Mapping, list)):
        return ""
    return str(value).strip()


def _required_text(data: Mapping[str, Any], section_name: str, key: str) -> str:
    value = _text(_section(data, section_name), key)
    if not value:
        raise OfpParseError(
            f"OFP is missing {section_name}.{key}",
            field_name=f"{section_name}.{key}",
        )
    return value


def _int(section: Mapping[str, Any], key: str) -> int:
    text = _text(section, key)
    try:
        return int(float(text))
    except (OverflowError, ValueError):
        if text:
            logger.warning("Unparseable numeric OFP field", extra={"field": key, "value": text})
        return 0


def _navlog(data: Mapping[str, Any]) -> List[NavlogFix]:
    fixes = _section(data, "navlog").get("fix", [])
    if isinstance(fixes, Mapping):
        fixes = [fixes]

    return [
        NavlogFix(
            ident=_text(fix, "ident"),
            fix_type=FixType.from_tag(_text(fix, "type")),
            pos_lat=_text(fix, "pos_lat"),
            pos_long=_text(fix, "pos_long"),
            via_airway=_text(fix, "via_airway"),
            is_sid_star=_text(fix, "is_sid_star") == "1",
        )
        for fix in fixes
        if isinstance(fix, Mapping)
    ]


def parse_ofp(data: Mapping[str, Any]) -> OfpDocument:
    """Parse a SimBrief OFP JSON document.

    Args:
        data: The decoded JSON document.

    Returns:
        The OFP document.

    Raises:
        OfpParseError: If an airport identifier is missing.
    """
    origin = _section(data, "origin")
    destination = _section(data, "destination")
    general = _section(data, "general")

    return OfpDocument(
        origin_ident=_required_text(data, "origin", "icao_code"),
        origin_runway=_text(origin, "plan_rwy"),
        origin_transition_altitude=_int(origin, "trans_alt"),
        destination_ident=_required_text(data, "destination", "icao_code"),
        destination_runway=_text(destination, "plan_rwy"),
        destination_transition_level=_int(destination, "trans_level"),
        alternate_ident=_text(_section(data, "alternate"), "icao_code"),
        cost_index=_text(general, "costindex"),
        cruise_altitude=_int(general, "initial_altitude"),
        average_tropopause=_text(general, "avg_tropopause"),
        callsign=_text(_section(data, "atc"), "callsign"),
        navlog=tuple(_navlog(data)),
    )
