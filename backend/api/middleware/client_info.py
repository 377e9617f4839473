"""
Requester details captured as opt-in evidence.
"""

from typing import Optional
from fastapi import Request


def client_ip(request: Request) -> Optional[str]:
    """
    Requester IP address.

    Prefers the first ``X-Forwarded-For`` entry, then ``X-Real-IP``, then
    the socket peer.
    """
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()

    return request.client.host if request.client else None


def user_agent(request: Request) -> Optional[str]:
    return request.headers.get("user-agent")
