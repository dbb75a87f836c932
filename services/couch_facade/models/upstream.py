"""
UpstreamRequest model.

The translated call to the upstream database, built once per inbound request.
"""

from dataclasses import dataclass, field
from typing import AsyncIterable, Dict, Optional

import httpx


@dataclass
class UpstreamRequest:
    """
    A single upstream call.

    `path` is already escaped and relative to the upstream base address.
    At most one of `content` (buffered) and `stream` (streamed) is set.
    """

    method: str
    path: str
    params: Dict[str, str] = field(default_factory=dict)
    content: Optional[bytes] = None
    stream: Optional[AsyncIterable[bytes]] = None
    content_type: Optional[str] = None
    content_length: Optional[int] = None
    timeout: Optional[httpx.Timeout] = None

    def __post_init__(self):
        if self.content is not None and self.stream is not None:
            raise ValueError("UpstreamRequest takes either content or stream, not both")

    @property
    def headers(self) -> Dict[str, str]:
        headers: Dict[str, str] = {}
        if self.content_type:
            headers["Content-Type"] = self.content_type
        if self.content_length is not None:
            headers["Content-Length"] = str(self.content_length)
        return headers
