import json
from dataclasses import dataclass, field
from typing import Any


@dataclass
class Request:
    method: str
    path: str
    headers: dict[str, str]
    query_params: dict[str, list]
    body: bytes
    version: str
    _json: dict[str, Any] | None = field(init=False, repr=False, default=None)

    def __post_init__(self):
        if not self.body:
            return
        try:
            decoded = json.loads(self.body)
        except (json.JSONDecodeError, UnicodeDecodeError):
            return
        # Only object bodies carry named fields
        if isinstance(decoded, dict):
            self._json = decoded

    @property
    def json(self) -> dict[str, Any]:
        """Decoded JSON object body, empty when absent or malformed."""
        return dict(self._json) if self._json else {}

    def has(self, name: str) -> bool:
        self._check_name(name)
        if name in self.query_params:
            return True
        return bool(self._json) and name in self._json

    def get(self, name: str, default: Any = None) -> Any:
        """Look a field up in the query string first, then the JSON body."""
        self._check_name(name)

        if self.query_params.get(name):
            return self.query_params[name][0]

        if self._json and name in self._json:
            return self._json[name]

        return default

    @staticmethod
    def _check_name(name: str) -> None:
        if name is None:
            raise ValueError("Field cannot be None")

        if len(name) == 0:
            raise ValueError("Field cannot be empty")
