"""Match clients with affordable products by asking Claude to write SQL."""

from __future__ import annotations

import argparse
import os
from pathlib import Path
from typing import Any, Sequence

import pymysql

from .api import DEFAULT_MAX_TOKENS, PROMPT, ApiError, ClaudeClient, response_text
from .helpers import DEFAULT_BIN_DIR, cleanup_bin_directory, convert_json_to_text, extract_sql, get_user_input
from .models import Client, clients_to_json, load_companies

DEFAULT_PRODUCTS_PATH = "./JSONS/MOCK_DATA.json"
DEFAULT_OUTPUT_DIR = "./output"

_SELECT_CLIENTS = "SELECT id, firstName, LastName, location, income, shopingFor FROM MOCK_DATA"


def fetch_clients(connection: Any, client_id: int | None = None) -> list[Client]:
    """Load one client, or every client when client_id is None."""
    cursor = connection.cursor()
    try:
        if client_id is None:
            cursor.execute(_SELECT_CLIENTS)
        else:
            cursor.execute(f"{_SELECT_CLIENTS} WHERE id = %s", (client_id,))
        rows = cursor.fetchall()
    finally:
        cursor.close()
    clients = []
    for row in rows:
        try:
            clients.append(Client.from_row(row))
        except (TypeError, ValueError) as exc:
            print(f"Error scanning row: {exc}")
    return clients


def output_path(client_id: int | None, output_dir: str | Path = DEFAULT_OUTPUT_DIR) -> Path:
    """Return where the SQL for the given selection is written."""
    name = "all_clients" if client_id is None else f"client_{client_id}"
    return Path(output_dir) / f"{name}_affordable_products.sql"


def preview(text: str, limit: int = 500) -> str:
    """Return the start of a response followed by an ellipsis."""
    return text[:limit] + "..."


def run(
    connection: Any,
    claude: Any,
    client_id: int | None = None,
    products_path: str | Path = DEFAULT_PRODUCTS_PATH,
    bin_dir: str | Path = DEFAULT_BIN_DIR,
    output_dir: str | Path = DEFAULT_OUTPUT_DIR,
) -> Path:
    """Produce the SQL file for the selected clients and return its path."""
    print("Processing all clients..." if client_id is None else f"Processing client ID: {client_id}...")
    clients = fetch_clients(connection, client_id)
    if not clients:
        what = "No clients found" if client_id is None else f"Client with ID {client_id} not found"
        raise LookupError(f"{what} in database")
    print(f"Loaded {len(clients)} client(s) from database")

    print("Reading products JSON file...")
    companies = load_companies(products_path)
    print(f"Loaded {len(companies)} products")

    print("Converting JSON files to plaintext...")
    clients_txt = convert_json_to_text(clients_to_json(clients), "clients", bin_dir)
    products_txt = convert_json_to_text(Path(products_path).read_text(encoding="utf-8"), "products", bin_dir)
    print(f"Created: {clients_txt}\nCreated: {products_txt}")

    file_ids = [claude.upload_file(clients_txt, "clients.txt"), claude.upload_file(products_txt, "products.txt")]
    print(f"\n[User prompt to Claude]:\n{PROMPT}\n\nSending request to Claude...")
    text = response_text(claude.create_message(PROMPT, file_ids, DEFAULT_MAX_TOKENS))
    print(f"\n[Claude's Response]:\n{preview(text)}")

    target = output_path(client_id, output_dir)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(extract_sql(text), encoding="utf-8")
    print(f"\n✓ Success! SQL file saved to: {target}")
    print(f"Processed {len(clients)} client(s) and {len(companies)} products")
    return target


def main(argv: Sequence[str] | None = None) -> int:
    """Command entry point; returns the exit status."""
    parser = argparse.ArgumentParser(description="Match clients with products they can afford, as SQL.")
    parser.add_argument("--products", default=DEFAULT_PRODUCTS_PATH)
    parser.add_argument("--bin-dir", default=DEFAULT_BIN_DIR)
    parser.add_argument("--output-dir", default=DEFAULT_OUTPUT_DIR)
    args = parser.parse_args(argv)

    api_key = os.environ.get("ANTHROPIC_API_KEY", "")
    if not api_key:
        print("Error: ANTHROPIC_API_KEY environment variable not set")
        return 1

    status = 1
    try:
        print("Connecting to MySQL database...")
        password = os.environ.get("MYSQL_PASSWORD", "")
        connection = pymysql.connect(
            host="127.0.0.1", port=3306, user="aval", password=password, database="mysqlDB", charset="utf8mb4"
        )
        try:
            print("Successfully connected to database!")
            client_id = get_user_input()
            with ClaudeClient(api_key) as claude:
                run(connection, claude, client_id, args.products, args.bin_dir, args.output_dir)
            status = 0
        finally:
            connection.close()
    except (LookupError, ValueError, OSError, ApiError, pymysql.MySQLError) as exc:
        print(f"Error: {exc}")
    finally:
        print(f"\nCleaning up temporary files in {args.bin_dir}...")
        try:
            cleanup_bin_directory(args.bin_dir)
            print("Cleanup completed successfully!")
        except OSError as exc:
            print(f"Warning: error during cleanup: {exc}")
    return status