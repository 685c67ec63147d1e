"""
Rate limiting utilities for sign-in.
Uses slowapi to slow down password guessing.

Clients are keyed by the socket peer address. Behind a reverse proxy, run uvicorn
with --proxy-headers and --forwarded-allow-ips so that address is the real client.
"""
from slowapi import Limiter
from slowapi.util import get_remote_address


limiter = Limiter(
    key_func=get_remote_address,
    storage_uri="memory://"
)


RATE_LIMITS = {
    "login": "5/minute",  # Sign-in attempts per minute per IP
}
