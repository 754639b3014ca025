"""SimBrief OFP source adapter.

Downloads the latest OFP of a SimBrief user through the xml.fetcher
API (JSON flavour) and parses it into an OfpDocument.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import requests

from ...config import SimBriefConfig, get_config
from ...domain.errors import OfpFetchError, OfpParseError
from ...domain.models import OfpDocument
from .parser import parse_ofp


@dataclass
class SimBriefOfpSource:
    """OFP source backed by the SimBrief API.

    This adapter implements OfpSourcePort.

    Attributes:
        config: SimBrief configuration (endpoint, timeout)
        session: HTTP session used for requests
    """

    config: SimBriefConfig = field(default_factory=lambda: get_config().simbrief)
    session: requests.Session = field(default_factory=requests.Session, repr=False)

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def fetch(self, username: str, user_id: Optional[str] = None) -> OfpDocument:
        """Fetch and parse the latest OFP of a user.

        Args:
            username: SimBrief username, used when no user id is given.
            user_id: SimBrief numeric user id.

        Returns:
            The parsed OFP document.

        Raises:
            OfpFetchError: If the request fails or SimBrief reports an error.
            OfpParseError: If the document is malformed.
        """
        params = {"userid": user_id} if user_id else {"username": username}
        account = user_id or username

        self._logger.info("Fetching SimBrief OFP", extra={"account": account})

        try:
            response = self.session.get(
                self.config.api_url,
                params=params,
                timeout=self.config.timeout_seconds,
            )
            response.raise_for_status()
            payload: Dict[str, Any] = response.json()
        except requests.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else None
            self._logger.error(
                "SimBrief OFP download failed",
                extra={"account": account, "status_code": status_code},
            )
            raise OfpFetchError(
                "SimBrief OFP download failed",
                username=account,
                status_code=status_code,
                cause=e,
            )
        except (requests.RequestException, ValueError) as e:
            self._logger.error(
                "SimBrief OFP download failed",
                extra={"account": account, "error": str(e)},
            )
            raise OfpFetchError(
                "SimBrief OFP download failed",
                username=account,
                cause=e,
            )

        if not isinstance(payload, dict):
            raise OfpParseError("SimBrief response is not a JSON object", field_name="$")

        fetch_info = payload.get("fetch")
        status = fetch_info.get("status") if isinstance(fetch_info, dict) else None
        if status is not None and status != "Success":
            raise OfpFetchError(f"SimBrief reported: {status}", username=account)

        return parse_ofp(payload)
