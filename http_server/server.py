import asyncio
import json
import logging
import time
from typing import Callable, Dict, List, Optional, Tuple
from urllib.parse import parse_qs, urlparse

from .request import Request
from .response import Response

logger = logging.getLogger(__name__)

STATUS_MESSAGES = {
    200: 'OK',
    201: 'Created',
    204: 'No Content',
    400: 'Bad Request',
    404: 'Not Found',
    405: 'Method Not Allowed',
    413: 'Payload Too Large',
    500: 'Internal Server Error',
}


class HTTPServer:
    # Default upper bound on request bodies (1MB)
    DEFAULT_MAX_BODY_BYTES = 1024 * 1024

    def __init__(
        self,
        host: str = '0.0.0.0',
        port: int = 8080,
        read_timeout_s: float = 5.0,
        max_body_bytes: int = DEFAULT_MAX_BODY_BYTES,
    ):
        if not 0 <= port <= 65535:
            raise ValueError(f"port must be within 0-65535, got {port}")
        if read_timeout_s <= 0:
            raise ValueError(f"read_timeout_s must be positive, got {read_timeout_s}")
        if max_body_bytes <= 0:
            raise ValueError(f"max_body_bytes must be positive, got {max_body_bytes}")

        self.host = host
        self.port = port
        self.read_timeout_s = read_timeout_s
        self.max_body_bytes = max_body_bytes
        self.routes: Dict[Tuple[str, str], Callable] = {}

    def route(self, path: str, methods: Optional[List] = None):
        """Decorator for registering route handlers"""
        if methods is None:
            methods = ['GET']

        def decorator(handler):
            for method in methods:
                self.routes[(method.upper(), path)] = handler
            return handler
        return decorator

    async def parse_request(self, reader: asyncio.StreamReader) -> Optional[Request]:
        """Parse one HTTP request, None on EOF, timeout or malformed input"""
        try:
            request_line = await asyncio.wait_for(reader.readline(), timeout=self.read_timeout_s)
            if not request_line:
                return None

            method, full_path, version = request_line.decode('utf-8').strip().split(' ', 2)

            parsed_url = urlparse(full_path)

            headers = {}
            while True:
                line = await asyncio.wait_for(reader.readline(), timeout=self.read_timeout_s)
                if line in (b'\r\n', b'\n', b''):
                    break

                header_line = line.decode('utf-8').strip()
                if ':' in header_line:
                    name, value = header_line.split(':', 1)
                    headers[name.strip().lower()] = value.strip()

            body = b''
            content_length = int(headers.get('content-length', 0))
            if content_length > 0:
                if content_length > self.max_body_bytes:
                    raise ValueError(
                        f"Request body of {content_length} bytes exceeds {self.max_body_bytes}"
                    )

                body = await asyncio.wait_for(
                    reader.readexactly(content_length),
                    timeout=self.read_timeout_s
                )

            return Request(
                method=method.upper(),
                path=parsed_url.path,
                headers=headers,
                query_params=parse_qs(parsed_url.query),
                body=body,
                version=version
            )

        except asyncio.TimeoutError:
            return None
        except (ValueError, UnicodeDecodeError, asyncio.IncompleteReadError) as e:
            logger.error(f"Error parsing request: {e}")
            return None

    def build_response(self, response: Response) -> bytes:
        """Serialize a Response to HTTP/1.1 bytes"""
        status_text = STATUS_MESSAGES.get(response.status, 'Unknown')

        headers = dict(response.headers)
        headers.setdefault('content-type', 'text/plain')
        headers['content-length'] = str(len(response.body))
        headers['connection'] = 'keep-alive'
        headers['server'] = 'BidTreeHttp/1.0'

        response_line = f"HTTP/1.1 {response.status} {status_text}\r\n"
        header_lines = ''.join(f"{name}: {value}\r\n" for name, value in headers.items())

        return response_line.encode() + header_lines.encode() + b'\r\n' + response.body

    async def handle_request(self, request: Request) -> Response:
        """Route request to its handler and coerce the result to a Response"""
        handler = self.routes.get((request.method, request.path))

        if handler is None:
            known_path = any(path == request.path for _, path in self.routes)
            if known_path:
                return Response(status=405, body=b'Method Not Allowed')
            return Response(status=404, body=b'Route Not Found')

        try:
            result = await handler(request)
        except Exception as e:
            logger.error(f"Handler error on {request.method} {request.path}: {e}")
            return Response(status=500, body=b'Internal Server Error')

        if isinstance(result, Response):
            return result
        if isinstance(result, dict):
            return Response(
                status=200,
                headers={'content-type': 'application/json'},
                body=json.dumps(result).encode()
            )
        if isinstance(result, str):
            return Response(status=200, body=result.encode())
        if isinstance(result, bytes):
            return Response(status=200, body=result)

        logger.error(f"Handler for {request.path} returned {type(result).__name__}")
        return Response(status=500, body=b'Internal Server Error')

    async def handle_client(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter):
        """Serve requests from one connection until it closes"""
        peer = writer.get_extra_info('peername')

        try:
            # Keep-alive loop
            while True:
                request = await self.parse_request(reader)
                if request is None:
                    break

                start_time = time.perf_counter()
                logger.debug(f"--> {request.method} {request.path}")

                response = await self.handle_request(request)
                writer.write(self.build_response(response))
                await writer.drain()

                elapsed_ms = (time.perf_counter() - start_time) * 1000
                logger.debug(
                    f"<-- {response.status} - {len(response.body)} bytes - {elapsed_ms:.2f}ms"
                )

                if request.headers.get('connection', '').lower() == 'close':
                    break

        except ConnectionResetError:
            pass
        except OSError as e:
            logger.error(f"Connection error from {peer}: {e}")
        finally:
            writer.close()
            try:
                await writer.wait_closed()
            except (ConnectionResetError, BrokenPipeError):
                pass

    async def start(self):
        """Start the HTTP server and serve until cancelled"""
        server = await asyncio.start_server(self.handle_client, self.host, self.port)

        addr = server.sockets[0].getsockname()
        logger.info(f'Record store HTTP server running on http://{addr[0]}:{addr[1]}')

        try:
            async with server:
                await server.serve_forever()
        except asyncio.CancelledError:
            logger.info("Server shutdown requested")
        finally:
            await self.shutdown(server)

    async def shutdown(self, server):
        """Gracefully shutdown the server"""
        logger.info("Shutting down server...")
        server.close()
        await server.wait_closed()
        logger.info("Server shutdown complete")
