"""A minimal client for the Claude files and messages endpoints."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Iterable, Mapping

import httpx

DEFAULT_BASE_URL = os.environ.get("ANTHROPIC_BASE_URL", "https://api.anthropic.com")
API_VERSION = "2023-06-01"
FILES_API_BETA = "files-api-2025-04-14"
MODEL_NAME = "claude-sonnet-4-20250514"
DEFAULT_MAX_TOKENS = 16000

PROMPT = """
You have two JSON files:
  1. clients.json - Contains client data with fields: id, firstName, lastName, location, income, shopingFor
  2. products.json - Contains product data with fields: id (company name), product, product Price, ad budget

TASK: Create a SQL file that matches each client with products they can afford based on their income.

For each client, find all products where the "product Price" is less than or equal to the client's income.

Output format should be SQL INSERT statements in this format:
INSERT INTO client_products (client_id, client_name, affordable_products) 
VALUES (1, 'Betta July', 'Devpulse: Bamboo Utensil Holder ($93.18), Feednation: Cranberry Almond Granola ($28.27)');

Requirements:
  - Parse the income field (remove $ sign and convert to number for comparison)
  - Parse the product Price field (remove $ sign and convert to number for comparison)
  - For each client, list ALL products they can economically afford (consider cost of living, income, location), in a comma-separated format
  - Include company name and product name with price
  - Create the table schema at the top of the SQL file
  - Make sure the SQL is valid and can be executed directly

Please generate a complete SQL file with:
  1. DROP TABLE IF EXISTS statement
  2. CREATE TABLE statement with appropriate columns
  3. INSERT statements for all clients with their affordable products
"""


class ApiError(Exception):
    """A request to the API failed."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ClaudeClient:
    """Uploads files and sends messages that refer to them."""

    def __init__(
        self,
        api_key: str,
        model: str = MODEL_NAME,
        base_url: str = DEFAULT_BASE_URL,
        http_client: httpx.Client | None = None,
    ) -> None:
        if not api_key:
            raise ValueError("an API key is required")
        self.model = model
        self.base_url = base_url.rstrip("/")
        self._owns_http = http_client is None
        self._http = http_client if http_client is not None else httpx.Client(timeout=600.0)
        self._headers = {
            "x-api-key": api_key,
            "anthropic-version": API_VERSION,
            "anthropic-beta": FILES_API_BETA,
        }

    def __enter__(self) -> "ClaudeClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _post(self, path: str, **kwargs: Any) -> dict[str, Any]:
        try:
            response = self._http.post(f"{self.base_url}{path}", headers=self._headers, **kwargs)
        except httpx.HTTPError as exc:
            raise ApiError(f"request to {path} failed: {exc}") from exc
        try:
            body = response.json()
        except ValueError:
            body = None
        if response.status_code >= 400:
            message = response.text
            if isinstance(body, dict) and isinstance(body.get("error"), dict):
                message = body["error"].get("message", message)
            raise ApiError(f"{response.status_code}: {message}", response.status_code)
        if not isinstance(body, dict):
            raise ApiError(f"unexpected response from {path}", response.status_code)
        return body

    def upload_file(self, path: str | Path, filename: str | None = None) -> str:
        """Upload a plain-text file and return its file ID."""
        name = filename or Path(path).name
        with open(path, "rb") as handle:
            body = self._post("/v1/files", files={"file": (name, handle, "text/plain")})
        file_id = body.get("id")
        if not isinstance(file_id, str) or not file_id:
            raise ApiError("upload response carries no file id")
        return file_id

    def create_message(
        self, prompt: str, file_ids: Iterable[str], max_tokens: int = DEFAULT_MAX_TOKENS
    ) -> dict[str, Any]:
        """Send the prompt with the given files attached as documents."""
        content: list[dict[str, Any]] = [{"type": "text", "text": prompt}]
        content.extend(
            {"type": "document", "source": {"type": "file", "file_id": file_id}}
            for file_id in file_ids
        )
        payload = {
            "model": self.model,
            "max_tokens": max_tokens,
            "messages": [{"role": "user", "content": content}],
        }
        return self._post("/v1/messages", json=payload)

    def close(self) -> None:
        """Release the underlying HTTP client if this object created it."""
        if self._owns_http:
            self._http.close()


def response_text(message: Mapping[str, Any]) -> str:
    """Concatenate the text of every content block in a message."""
    blocks = message.get("content") or []
    return "".join(
        block.get("text") or "" for block in blocks if isinstance(block, Mapping)
    )