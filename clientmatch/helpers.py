"""Small file and input helpers used by the matching run."""

from __future__ import annotations

import json
import os
import re
from pathlib import Path
from typing import Callable

DEFAULT_BIN_DIR = "./bin"
INPUT_PROMPT = "\nEnter Client ID to process (or press Enter to process all clients): "

_INTEGER = re.compile(r"[+-]?[0-9]+")


def extract_sql(response: str) -> str:
    """Strip markdown code fences from a response, leaving the SQL."""
    sql = response.replace("```sql", "").replace("```", "")
    return sql.strip()


def create_bin_directory(bin_dir: str | Path = DEFAULT_BIN_DIR) -> Path:
    """Create the scratch directory if it does not exist."""
    path = Path(bin_dir)
    path.mkdir(parents=True, exist_ok=True)
    return path


def cleanup_bin_directory(bin_dir: str | Path = DEFAULT_BIN_DIR) -> list[Path]:
    """Remove every entry in the scratch directory; return what was removed."""
    try:
        entries = sorted(Path(bin_dir).iterdir())
    except FileNotFoundError:
        return []
    removed = []
    for entry in entries:
        try:
            if entry.is_dir() and not entry.is_symlink():
                entry.rmdir()
            else:
                os.remove(entry)
        except OSError as exc:
            print(f"Warning: could not remove file {entry}: {exc}")
        else:
            removed.append(entry)
    return removed


def convert_json_to_text(
    json_data: str | bytes, filename: str, bin_dir: str | Path = DEFAULT_BIN_DIR
) -> Path:
    """Pretty-print JSON data into <bin_dir>/<filename>.txt and return its path."""
    directory = create_bin_directory(bin_dir)
    try:
        data = json.loads(json_data)
    except json.JSONDecodeError as exc:
        raise ValueError(f"error parsing JSON: {exc}") from exc
    formatted = json.dumps(data, indent=2, sort_keys=True, ensure_ascii=False)
    path = directory / f"{filename}.txt"
    path.write_text(formatted, encoding="utf-8")
    return path


def parse_client_id(text: str) -> int | None:
    """Parse a client ID typed by the user; empty input means every client."""
    tokens = text.split()
    if not tokens:
        return None
    token = tokens[0]
    if not _INTEGER.fullmatch(token):
        raise ValueError(f"invalid client ID: {token!r}")
    return int(token)


def get_user_input(prompt_func: Callable[[str], str] = input) -> int | None:
    """Ask for a client ID; None selects every client."""
    try:
        answer = prompt_func(INPUT_PROMPT)
    except EOFError:
        answer = ""
    return parse_client_id(answer)