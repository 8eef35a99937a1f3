import asyncio
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from bidtree.engine import RecordStore
from bidtree.interfaces import TraversalOrder
from bidtree.models import Record, RecordLoadError
from http_server.request import Request
from http_server.response import Response, error, response
from http_server.server import HTTPServer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"
    bids_csv: str | None = None
    amount_strip: str = "$"
    data_dir: str = "data"

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """Read HOST, PORT, LOG_LEVEL, BIDS_CSV, AMOUNT_STRIP and DATA_DIR."""
        port = os.environ.get("PORT", "8080")
        try:
            port_number = int(port)
        except ValueError as e:
            raise ValueError(f"PORT must be an integer, got {port!r}") from e

        return cls(
            host=os.environ.get("HOST", "0.0.0.0"),
            port=port_number,
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
            bids_csv=os.environ.get("BIDS_CSV") or None,
            amount_strip=os.environ.get("AMOUNT_STRIP", "$"),
            data_dir=os.environ.get("DATA_DIR") or "data",
        )


async def main():
    config = ServerConfig.from_env()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    store = RecordStore(amount_strip=config.amount_strip)
    if config.bids_csv:
        store.load_csv(config.bids_csv)

    server = HTTPServer(host=config.host, port=config.port)
    await register_routes(server, store, config.data_dir)
    logger.debug(f"Registered routes: {sorted(server.routes)}")
    await server.start()


async def register_routes(server: HTTPServer, store: RecordStore, data_dir: str = "data"):
    data_root = Path(data_dir).resolve()

    def require_key(request: Request) -> str | None:
        key = request.get("key")
        if isinstance(key, str) and key:
            return key
        return None

    @server.route('/records', ['PUT'])
    async def insert(request: Request) -> Response:
        try:
            record = Record.from_dict(request.json)
        except ValueError as e:
            return error(400, str(e))

        store.insert(record)
        return response(status_code=200).json({"success": True, "size": store.size()})

    @server.route('/records', ['GET'])
    async def find(request: Request) -> Response:
        key = require_key(request)
        if key is None:
            return error(400, "'key' must be a non-empty string")

        record = store.find(key)
        if record is None:
            return error(404, f"Record {key} not found")
        return response(status_code=200).json({"record": record.to_dict()})

    @server.route('/records', ['DELETE'])
    async def remove(request: Request) -> Response:
        key = require_key(request)
        if key is None:
            return error(400, "'key' must be a non-empty string")

        success = store.remove(key)
        return response(status_code=200).json({"success": success})

    @server.route('/records/traverse', ['GET'])
    async def traverse(request: Request) -> Response:
        order_name = request.get("order", "in")
        try:
            order = TraversalOrder.parse(order_name)
        except ValueError as e:
            return error(400, str(e))

        records = [record.to_dict() for record in store.records(order)]
        return response(status_code=200).json({"order": order.name.lower(), "records": records})

    @server.route('/records/load', ['POST'])
    async def load(request: Request) -> Response:
        path = request.get("path")
        if not isinstance(path, str) or not path:
            return error(400, "Missing 'path' in request body")

        # Relative paths resolve against the data directory
        csv_path = (data_root / path).resolve()
        if not csv_path.is_relative_to(data_root):
            return error(400, f"Path {path} is outside the data directory")

        loop = asyncio.get_running_loop()
        try:
            records = await loop.run_in_executor(None, store.read_csv, csv_path)
        except RecordLoadError as e:
            return error(400, str(e))

        count = store.replace(records)
        logger.info(f"Loaded {count} records from {csv_path}")
        return response(status_code=200).json({"count": count})

    @server.route('/records/sort', ['POST'])
    async def sort(request: Request) -> Response:
        algorithm = request.get("algorithm", "quick")
        try:
            count = store.sort(algorithm)
        except ValueError as e:
            return error(400, str(e))

        records = [record.to_dict() for record in store.sequence()]
        return response(status_code=200).json({"count": count, "records": records})


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
