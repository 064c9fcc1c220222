from __future__ import annotations

from sqlite3 import Connection

# refresh_token 参数均为已加密的密文；加解密由调用方负责


def insert_refresh_token(conn: Connection, user_id: int, refresh_token: str) -> int:
    cur = conn.execute(
        "INSERT INTO web_refresh_tokens(user_id, refresh_token) VALUES(?, ?)",
        (user_id, refresh_token),
    )
    return cur.rowcount


def remove_refresh_token(conn: Connection, user_id: int, refresh_token: str) -> int:
    cur = conn.execute(
        "DELETE FROM web_refresh_tokens WHERE user_id=? AND refresh_token=?",
        (user_id, refresh_token),
    )
    return cur.rowcount


def remove_refresh_tokens(conn: Connection, user_id: int) -> int:
    """删除该用户的全部会话"""
    return conn.execute("DELETE FROM web_refresh_tokens WHERE user_id=?", (user_id,)).rowcount


def contains_refresh_token(conn: Connection, user_id: int, refresh_token: str) -> int:
    row = conn.execute(
        "SELECT COUNT(t.refresh_token) AS c FROM web_users u "
        "JOIN web_refresh_tokens t ON t.user_id = u.user_id "
        "WHERE u.user_id=? AND t.refresh_token=?",
        (user_id, refresh_token),
    ).fetchone()
    return int(row["c"])
