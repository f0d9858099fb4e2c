"""Dependency injection for FastAPI endpoints"""

import threading
from datetime import datetime
from typing import Callable

from fastapi import Request

# Serializes read-modify-write sequences on the single stored profile
profile_lock = threading.Lock()


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_clock() -> Callable[[], datetime]:
    """Provide local wall-clock time"""
    return datetime.now
