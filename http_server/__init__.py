"""
Minimal asyncio HTTP/1.1 server with JSON helpers.
"""

from .request import Request
from .response import Response, error, response
from .server import HTTPServer

__all__ = ["HTTPServer", "Request", "Response", "error", "response"]
