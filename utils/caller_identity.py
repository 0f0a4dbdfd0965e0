"""Resolve the authenticated caller for a request.

Authentication happens in the proxy in front of the service, which forwards
the verified user id in a trusted header.
"""

from typing import Optional

from fastapi import Request


def resolve_caller_identity(request: Request, header_name: str) -> Optional[str]:
    """Return the caller id from the identity header, or None when absent or blank."""
    value = request.headers.get(header_name)
    if value is None:
        return None
    value = value.strip()
    return value or None
