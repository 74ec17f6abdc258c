"""
Request throttling for the public booking endpoints
"""

import time
from collections import defaultdict

from fastapi import Request

from app.core.config import settings
from app.utils.responses import rate_limit_error

# Simple in-memory rate limiter
rate_limiter = defaultdict(list)

def rate_limit_check(client_ip: str, limit: int = None) -> bool:
    """Simple rate limiting by IP address"""
    if limit is None:
        limit = settings.RATE_LIMIT_PER_MINUTE

    current_time = time.time()
    minute_ago = current_time - 60

    # Clean old requests and forget idle clients
    for ip in [ip for ip, times in rate_limiter.items() if not times or times[-1] <= minute_ago]:
        del rate_limiter[ip]
    recent = [
        req_time for req_time in rate_limiter.get(client_ip, [])
        if req_time > minute_ago
    ]

    # Check limit
    if len(recent) >= limit:
        rate_limiter[client_ip] = recent
        return False

    # Add current request
    recent.append(current_time)
    rate_limiter[client_ip] = recent
    return True

def get_client_ip(request) -> str:
    """Extract client IP from request"""
    # Check for forwarded IP first (for reverse proxy setups)
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    # Check for real IP header
    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip

    # Fall back to direct client IP
    return request.client.host if request.client else "unknown"

def enforce_rate_limit(request: Request) -> None:
    """FastAPI dependency rejecting clients over the per-minute limit"""
    if not rate_limit_check(get_client_ip(request)):
        rate_limit_error()
