"""Client and product records exchanged with the database and the model."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Mapping, Sequence


def _text_field(data: Mapping[str, Any], key: str) -> str:
    """Fetch a string field, matching the key case-insensitively like the decoder."""
    value = data.get(key)
    if value is None:
        value = next((v for k, v in data.items() if str(k).casefold() == key.casefold()), None)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"field {key!r} must be a string, got {type(value).__name__}")
    return value


@dataclass
class Company:
    """A company offering one product, as stored in the products file."""

    id: str = ""
    ad_budget: str = ""
    product_price: str = ""
    product: str = ""

    _KEYS = {"id": "id", "ad_budget": "ad budget", "product_price": "product Price", "product": "product"}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Company":
        """Build a company from a decoded JSON object."""
        if not isinstance(data, Mapping):
            raise ValueError(f"expected a JSON object, got {type(data).__name__}")
        return cls(**{name: _text_field(data, key) for name, key in cls._KEYS.items()})

    def to_dict(self) -> dict[str, str]:
        """Return the JSON object form of this company."""
        return {key: getattr(self, name) for name, key in self._KEYS.items()}


@dataclass
class Client:
    """A client row from the MOCK_DATA table."""

    id: int = 0
    first_name: str = ""
    last_name: str = ""
    location: str = ""
    income: str = ""
    shoping_for: str = ""

    @classmethod
    def from_row(cls, row: Sequence[Any]) -> "Client":
        """Build a client from a database row of six columns."""
        if len(row) != 6:
            raise ValueError(f"expected 6 columns, got {len(row)}")
        values = [bytes(v).decode("utf-8") if isinstance(v, (bytes, bytearray)) else v for v in row]
        if any(v is None for v in values) or isinstance(values[0], bool):
            raise ValueError(f"row holds an invalid value: {row!r}")
        try:
            client_id = int(values[0])
        except (TypeError, ValueError) as exc:
            raise ValueError(f"column 'id' holds an invalid value: {values[0]!r}") from exc
        return cls(client_id, *(str(v) for v in values[1:]))

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON object form of this client."""
        return {
            "id": self.id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "location": self.location,
            "income": self.income,
            "shopingFor": self.shoping_for,
        }


def load_companies(path: str | Path) -> list[Company]:
    """Read a JSON array of companies from a file."""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"error parsing products JSON: {exc}") from exc
    if data is None:
        return []
    if not isinstance(data, list):
        raise ValueError("products JSON must be an array")
    return [Company() if item is None else Company.from_dict(item) for item in data]


def clients_to_json(clients: Iterable[Client]) -> str:
    """Serialise clients as an indented JSON array."""
    return json.dumps([client.to_dict() for client in clients], indent=2, ensure_ascii=False)