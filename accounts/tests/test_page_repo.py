"""
权限页面查询测试
"""

from accounts.db import get_conn
from accounts.repository import page_repo, user_repo

def _user_with_pages(conn, email, pages):
    # raw insert so non-canonical strings reach the column untouched
    cur = conn.execute(
        "INSERT INTO web_users(email, permitted_pages_id) VALUES(?, ?)", (email, pages)
    )
    return int(cur.lastrowid)

def test_permitted_pages_exact_membership(pages):
    with get_conn() as conn:
        uid = _user_with_pages(conn, "a@x.com", "1,2")
        got = page_repo.get_permitted_pages(conn, uid)
        assert [p["page_id"] for p in got] == [1, 2]
        assert got[0] == {
            "page_id": 1,
            "path": "/dashboard",
            "component_name": "Dashboard",
            "description": "Overview",
            "icon_name": "home",
        }

def test_permitted_pages_token_match_not_substring(pages):
    with get_conn() as conn:
        uid = _user_with_pages(conn, "a@x.com", "11")
        assert [p["page_id"] for p in page_repo.get_permitted_pages(conn, uid)] == [11]

        uid2 = _user_with_pages(conn, "b@x.com", "1")
        assert [p["page_id"] for p in page_repo.get_permitted_pages(conn, uid2)] == [1]

def test_permitted_pages_distinct_and_spacing(pages):
    with get_conn() as conn:
        uid = _user_with_pages(conn, "a@x.com", "3, 1,3,1")
        ids = [p["page_id"] for p in page_repo.get_permitted_pages(conn, uid)]
        assert ids == [1, 3]

def test_permitted_pages_empty(pages):
    with get_conn() as conn:
        uid = _user_with_pages(conn, "a@x.com", "")
        assert page_repo.get_permitted_pages(conn, uid) == []
        # unknown page ids and unknown users yield nothing
        uid2 = _user_with_pages(conn, "b@x.com", "99")
        assert page_repo.get_permitted_pages(conn, uid2) == []
        assert page_repo.get_permitted_pages(conn, 424242) == []

def test_permitted_pages_follow_update(pages):
    with get_conn() as conn:
        uid = _user_with_pages(conn, "a@x.com", "1")
        user_repo.update_user(conn, uid, "a@x.com", None, None, "2,3")
        assert [p["page_id"] for p in page_repo.get_permitted_pages(conn, uid)] == [2, 3]


def test_permitted_pages_agree_with_model_parsing(pages):
    from accounts.models import parse_permitted_pages

    with get_conn() as conn:
        for i, raw in enumerate(("1,\t2", "1,02", "3,²", "11, 2")):
            uid = _user_with_pages(conn, f"u{i}@x.com", raw)
            ids = {p["page_id"] for p in page_repo.get_permitted_pages(conn, uid)}
            assert ids == parse_permitted_pages(raw), raw
