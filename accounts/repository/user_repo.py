"""
用户数据访问层
每个函数只执行一条 SQL；查无结果返回 None / 空列表，数据库异常原样抛出
"""
from __future__ import annotations

from sqlite3 import Connection
from typing import Any, Dict, List, Optional

_PUBLIC_COLUMNS = (
    "user_id, email, first_name, last_name, activated, permitted_pages_id, avatar"
)


def _one(row) -> Optional[Dict[str, Any]]:
    return dict(row) if row is not None else None


def get_user_by_email(conn: Connection, email: str) -> Optional[Dict[str, Any]]:
    row = conn.execute("SELECT * FROM web_users WHERE email=?", (email,)).fetchone()
    return _one(row)


def get_user_by_id(conn: Connection, user_id: int) -> Optional[Dict[str, Any]]:
    row = conn.execute("SELECT * FROM web_users WHERE user_id=?", (user_id,)).fetchone()
    return _one(row)


def get_activated_user_by_email(conn: Connection, email: str) -> Optional[Dict[str, Any]]:
    """登录用：只返回已激活的账户"""
    row = conn.execute(
        "SELECT * FROM web_users WHERE email=? AND activated=1", (email,)
    ).fetchone()
    return _one(row)


def get_user_by_email_except_id(conn: Connection, email: str, user_id: int) -> Optional[Dict[str, Any]]:
    """修改资料时检查邮箱是否被其他账户占用"""
    row = conn.execute(
        "SELECT * FROM web_users WHERE email=? AND user_id != ?", (email, user_id)
    ).fetchone()
    return _one(row)


def get_users(conn: Connection) -> List[Dict[str, Any]]:
    rows = conn.execute(
        f"SELECT {_PUBLIC_COLUMNS} FROM web_users ORDER BY user_id"
    ).fetchall()
    return [dict(r) for r in rows]


def add_user(
    conn: Connection,
    email: str,
    first_name: str | None,
    last_name: str | None,
    password: str | None,
    confirmation_token: str | None,
    permitted_pages_id: str,
) -> int:
    cur = conn.execute(
        "INSERT INTO web_users(email, first_name, last_name, password, confirmation_token, permitted_pages_id) "
        "VALUES(?,?,?,?,?,?)",
        (email, first_name, last_name, password, confirmation_token, permitted_pages_id),
    )
    return int(cur.lastrowid)


def update_user(
    conn: Connection,
    user_id: int,
    email: str | None = None,
    first_name: str | None = None,
    last_name: str | None = None,
    permitted_pages_id: str | None = None,
) -> int:
    """部分更新：传 None 的字段保持原值；清空权限传空字符串"""
    cur = conn.execute(
        "UPDATE web_users SET email=COALESCE(?, email), first_name=COALESCE(?, first_name), "
        "last_name=COALESCE(?, last_name), permitted_pages_id=COALESCE(?, permitted_pages_id) "
        "WHERE user_id=?",
        (email, first_name, last_name, permitted_pages_id, user_id),
    )
    return cur.rowcount


def remove_user(conn: Connection, user_id: int) -> int:
    return conn.execute("DELETE FROM web_users WHERE user_id=?", (user_id,)).rowcount


def activate_user(conn: Connection, password: str, confirmation_token: str) -> int:
    """
    条件更新：令牌匹配且尚未激活时设置密码并激活。

    Returns:
        受影响行数。0 表示没有待激活的匹配账户（不视为错误）
    """
    cur = conn.execute(
        "UPDATE web_users SET password=?, activated=1 WHERE confirmation_token=? AND activated=0",
        (password, confirmation_token),
    )
    return cur.rowcount


def reset_account(conn: Connection, email: str, confirmation_token: str) -> int:
    """重置账户：清空密码、取消激活并写入新的确认令牌"""
    cur = conn.execute(
        "UPDATE web_users SET password=NULL, activated=0, confirmation_token=? WHERE email=?",
        (confirmation_token, email),
    )
    return cur.rowcount


def upload_image_source(conn: Connection, user_id: int, avatar: str | None) -> int:
    cur = conn.execute("UPDATE web_users SET avatar=? WHERE user_id=?", (avatar, user_id))
    return cur.rowcount


def change_password(conn: Connection, user_id: int, password: str) -> int:
    cur = conn.execute("UPDATE web_users SET password=? WHERE user_id=?", (password, user_id))
    return cur.rowcount
