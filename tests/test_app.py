import json

import pymysql
import pytest

from clientmatch.api import PROMPT
from clientmatch.app import fetch_clients, main, output_path, preview, run


class _FakeCursor:
    def __init__(self, connection):
        self.connection = connection

    def execute(self, query, params=None):
        self.connection.queries.append((query, params))

    def fetchall(self):
        return list(self.connection.rows)

    def close(self):
        self.connection.closed_cursors += 1


class _FakeConnection:
    def __init__(self, rows):
        self.rows = rows
        self.queries = []
        self.closed_cursors = 0

    def cursor(self):
        return _FakeCursor(self)


class _FakeClaude:
    def __init__(self, reply):
        self.reply = reply
        self.uploads = []
        self.messages = []

    def upload_file(self, path, filename):
        self.uploads.append((filename, path.read_text(encoding="utf-8")))
        return f"file_{len(self.uploads)}"

    def create_message(self, prompt, file_ids, max_tokens):
        self.messages.append((prompt, list(file_ids), max_tokens))
        return {"content": [{"type": "text", "text": self.reply}]}


ROW = (3, "Betta", "July", "Paris", "$50000", "shoes")
PRODUCTS = [{"id": "Devpulse", "ad budget": "$10", "product Price": "$93.18", "product": "Holder"}]


@pytest.fixture
def products_file(tmp_path):
    path = tmp_path / "products.json"
    path.write_text(json.dumps(PRODUCTS), encoding="utf-8")
    return path


def test_fetch_clients_all():
    connection = _FakeConnection([ROW])
    clients = fetch_clients(connection)
    assert [c.id for c in clients] == [3]
    query, params = connection.queries[0]
    assert "WHERE" not in query
    assert params is None
    assert connection.closed_cursors == 1


def test_fetch_clients_one_uses_parameter():
    connection = _FakeConnection([ROW])
    fetch_clients(connection, 3)
    query, params = connection.queries[0]
    assert query.endswith("WHERE id = %s")
    assert params == (3,)


def test_fetch_clients_skips_bad_rows(capsys):
    connection = _FakeConnection([ROW, (4, None, "x", "y", "z", "w")])
    clients = fetch_clients(connection)
    assert len(clients) == 1
    assert "Error scanning row" in capsys.readouterr().out


def test_output_path_names(tmp_path):
    assert output_path(None, tmp_path) == tmp_path / "all_clients_affordable_products.sql"
    assert output_path(3, tmp_path).name == "client_3_affordable_products.sql"


def test_preview_limits_length():
    assert preview("abc") == "abc..."
    assert preview("x" * 900) == "x" * 500 + "..."


def test_run_writes_sql(tmp_path, products_file):
    claude = _FakeClaude("```sql\nDROP TABLE IF EXISTS client_products;\n```")
    target = run(
        _FakeConnection([ROW]), claude, 3, products_file, tmp_path / "bin", tmp_path / "out"
    )
    assert target == tmp_path / "out" / "client_3_affordable_products.sql"
    assert target.read_text(encoding="utf-8") == "DROP TABLE IF EXISTS client_products;"
    names = [name for name, _ in claude.uploads]
    assert names == ["clients.txt", "products.txt"]
    assert json.loads(claude.uploads[0][1])[0]["firstName"] == "Betta"
    assert json.loads(claude.uploads[1][1]) == PRODUCTS
    assert claude.messages == [(PROMPT, ["file_1", "file_2"], 16000)]


def test_run_client_not_found(tmp_path, products_file):
    with pytest.raises(LookupError) as info:
        run(_FakeConnection([]), _FakeClaude(""), 9, products_file, tmp_path / "bin", tmp_path / "out")
    assert "9" in str(info.value)
    assert not (tmp_path / "out").exists()


def test_main_without_api_key(monkeypatch, capsys):
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
    assert main([]) == 1
    assert "ANTHROPIC_API_KEY" in capsys.readouterr().out


def test_main_connection_failure_cleans_up(monkeypatch, capsys, tmp_path):
    monkeypatch.setenv("ANTHROPIC_API_KEY", "placeholder")
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    (bin_dir / "stale.txt").write_text("old")

    def refuse(**kwargs):
        raise pymysql.err.OperationalError(2003, "refused")

    monkeypatch.setattr(pymysql, "connect", refuse)
    assert main(["--bin-dir", str(bin_dir)]) == 1
    out = capsys.readouterr().out
    assert "Error connecting to database" in out
    assert "Cleanup completed successfully!" in out
    assert list(bin_dir.iterdir()) == []