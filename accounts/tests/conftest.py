import os
import sys
import sqlite3
import pytest
from pathlib import Path

# Ensure project root on sys.path
_THIS_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _THIS_DIR.parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

TEST_TOKEN_KEY = "test-refresh-token-key-0123456789"


@pytest.fixture(scope="session")
def tmp_db_path(tmp_path_factory):
    path = tmp_path_factory.mktemp("db") / "accounts_test.db"
    # Point accounts.db to this temp DB
    os.environ["ACCOUNTS_DB_PATH"] = str(path)
    os.environ["ACCOUNTS_TOKEN_KEY"] = TEST_TOKEN_KEY
    schema = Path(_PROJECT_ROOT / "accounts" / "schema.sql").read_text(encoding="utf-8")
    conn = sqlite3.connect(str(path))
    try:
        conn.executescript(schema)
        conn.commit()
    finally:
        conn.close()
    return str(path)


@pytest.fixture()
def repo(tmp_db_path):
    from accounts.crypto import TokenCipher
    from accounts.services.user_svc import UserRepository
    return UserRepository(cipher=TokenCipher(TEST_TOKEN_KEY))


@pytest.fixture()
def pages(tmp_db_path):
    rows = [
        (1, "/dashboard", "Dashboard", "Overview", "home"),
        (2, "/users", "Users", "User admin", "people"),
        (3, "/reports", "Reports", "Reports", "chart"),
        (11, "/settings", "Settings", "Settings", "gear"),
    ]
    conn = sqlite3.connect(tmp_db_path)
    try:
        conn.executemany(
            "INSERT INTO web_pages(page_id, path, component_name, description, icon_name) VALUES(?,?,?,?,?)",
            rows,
        )
        conn.commit()
    finally:
        conn.close()
    return rows


@pytest.fixture(autouse=True)
def _clean_db(tmp_db_path):
    # Clean tables before each test for isolation
    # Safety: ensure we only ever wipe the temp DB, never a real one
    assert os.environ.get("ACCOUNTS_DB_PATH") == tmp_db_path, "Refusing to clean non-temp DB"
    tables = ["web_refresh_tokens", "web_users", "web_pages"]
    conn = sqlite3.connect(tmp_db_path)
    try:
        for t in tables:
            conn.execute(f"DELETE FROM {t}")
        conn.commit()
    finally:
        conn.close()
    yield
