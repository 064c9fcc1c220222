from __future__ import annotations

from sqlite3 import Connection
from typing import Any, Dict, List


def get_permitted_pages(conn: Connection, user_id: int) -> List[Dict[str, Any]]:
    """
    返回用户 permitted_pages_id 中列出的页面（去重）。

    两侧加逗号后做整段匹配，'1' 不会命中 '11'。
    """
    sql = """
    SELECT DISTINCT p.page_id, p.path, p.component_name, p.description, p.icon_name
    FROM web_users u
    INNER JOIN web_pages p
        ON instr(',' || replace(u.permitted_pages_id, ' ', '') || ',', ',' || p.page_id || ',') > 0
    WHERE u.user_id = ?
    ORDER BY p.page_id
    """
    rows = conn.execute(sql, (user_id,)).fetchall()
    return [dict(r) for r in rows]
