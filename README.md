# clientmatch

`clientmatch` reads client records from a MySQL table, combines them with a
JSON catalogue of products, and asks Claude to work out which products each
client can afford. The reply is saved as a SQL file which, as the prompt
requests, drops and creates a `client_products` table and fills it with one
`INSERT` per client.

## Installation

```
pip install .
```

For running the test suite:

```
pip install ".[test]"
pytest
```

## What you need

- A MySQL server on `127.0.0.1:3306` with a database `mysqlDB`, reachable as
  user `aval`. The password is taken from the `MYSQL_PASSWORD` environment
  variable (empty if unset).
- A `MOCK_DATA` table in that database with the columns `id`, `firstName`,
  `LastName`, `location`, `income` and `shopingFor`.
- A products file, by default `./JSONS/MOCK_DATA.json`: a JSON array of
  objects with the keys `id` (the company name), `product`, `product Price`
  and `ad budget`.
- An Anthropic API key in the `ANTHROPIC_API_KEY` environment variable.
  `ANTHROPIC_BASE_URL` may be set to send requests to a different endpoint.

## Running

```
clientmatch
```

Options:

- `--products PATH` — the products file (default `./JSONS/MOCK_DATA.json`)
- `--bin-dir PATH` — scratch directory for the uploaded text files
  (default `./bin`)
- `--output-dir PATH` — where the SQL file is written (default `./output`)

The command connects to the database, then asks for a client ID. Enter a
number to process that single client, or press Enter to process every
client in the table.

While it runs it:

1. loads the chosen client rows and the product catalogue,
2. writes pretty-printed copies of both to the scratch directory as
   `clients.txt` and `products.txt`,
3. uploads those files to Claude and sends the matching instructions,
   printing the prompt and the first 500 characters of the reply,
4. strips any Markdown code fences from the reply,
5. saves the SQL to the output directory, as
   `all_clients_affordable_products.sql` or
   `client_<id>_affordable_products.sql`,
6. removes everything from the scratch directory, whether or not the run
   succeeded.

The command exits with status 0 on success and 1 on any error: a missing API
key, a database or API failure, an unknown client ID, non-numeric input, or
an unreadable products file. Errors are printed as `Error: ...`.

## Using it as a library

```python
from clientmatch.helpers import extract_sql, parse_client_id, convert_json_to_text
from clientmatch.models import Client, Company, load_companies, clients_to_json
from clientmatch.api import ClaudeClient, ApiError, response_text
from clientmatch.app import fetch_clients, output_path, preview, run
```

- `extract_sql(response)` removes ```` ```sql ```` and ```` ``` ```` markers
  and surrounding whitespace from a model reply.
- `parse_client_id(text)` turns user input into a client ID; blank input
  gives `None` (all clients) and non-numeric input raises `ValueError`.
  `get_user_input(prompt_func)` asks for the ID interactively.
- `convert_json_to_text(json_data, filename, bin_dir)` writes the JSON,
  indented with sorted keys, to `<bin_dir>/<filename>.txt`.
  `cleanup_bin_directory(bin_dir)` empties that directory.
- `load_companies(path)` reads the product catalogue into `Company` objects.
- `Client.from_row(row)` builds a client from a six-column database row, and
  `clients_to_json(clients)` serialises a list of clients.
- `ClaudeClient(api_key)` uploads files (`upload_file`) and sends a prompt
  with files attached (`create_message`); it can be used as a context
  manager. `response_text(message)` joins the text blocks of a reply.
  Failed API calls raise `ApiError`, which carries the HTTP `status_code`.
- `fetch_clients(connection, client_id)` queries one client or all of them
  through any DB-API connection; `run(connection, claude, ...)` carries out
  the whole job and returns the path of the SQL file, raising `LookupError`
  when no matching client exists.

## What it does not do

- It does not create or populate the `MOCK_DATA` table.
- It does not execute the generated SQL; it only writes it to a file.
- It does not check the affordability matching itself: the contents of the
  SQL file are whatever Claude returns.
- The database host, port, user and database name are fixed; only the
  password is configurable.