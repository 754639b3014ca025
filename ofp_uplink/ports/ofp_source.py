"""OFP source port - Abstraction for downloading flight plans.

This protocol defines the contract for OFP providers, allowing the
SimBrief API to be replaced by a file or a test double.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol

if TYPE_CHECKING:
    from ..domain.models import OfpDocument


class OfpSourcePort(Protocol):
    """Port for OFP retrieval.

    Implementation: adapters/simbrief/simbrief_client.py
    """

    def fetch(self, username: str, user_id: Optional[str] = None) -> OfpDocument:
        """Fetch the latest OFP of a user.

        Args:
            username: Account username, used when no user id is given.
            user_id: Numeric account id, takes precedence over username.

        Returns:
            The parsed OFP document.

        Raises:
            OfpFetchError: If the download fails.
            OfpParseError: If the document is malformed.
        """
        ...
