"""Response model - result of a single platform request"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict


def _content_type(headers: Dict[str, str]) -> str:
    for name, value in headers.items():
        if name.lower() == "content-type":
            return value.lower()
    return ""


@dataclass
class RestResponse:
    """Represents a platform response

    A processed response has its body decoded into ``data`` according to its
    Content-Type (JSON, text, or raw bytes otherwise); an unprocessed one only
    carries the status and raw bytes.
    """

    code: int  # HTTP status code
    uri: str = ""
    headers: Dict[str, str] = field(default_factory=dict)
    content: bytes = b""
    processed: bool = True
    data: Any = None  # JSON, text or bytes by Content-Type (processed responses only)

    @classmethod
    def build(
        cls,
        code: int,
        uri: str,
        headers: Dict[str, str],
        content: bytes,
        process: bool = True,
    ) -> "RestResponse":
        """Build a response, decoding the body when ``process`` is set"""
        data = None
        if process and content:
            content_type = _content_type(headers)
            if "json" in content_type:
                data = json.loads(content.decode("utf-8"))
            elif content_type.startswith("text/"):
                data = content.decode("utf-8", errors="replace")
            else:
                # Binary payloads (exports, archives) stay as bytes
                data = content
        return cls(
            code=code,
            uri=uri,
            headers=dict(headers),
            content=content,
            processed=process,
            data=data,
        )

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")

    def json(self) -> Any:
        """Decode the body regardless of processing mode"""
        if self.processed and isinstance(self.data, (dict, list)):
            return self.data
        return json.loads(self.text) if self.content else None
