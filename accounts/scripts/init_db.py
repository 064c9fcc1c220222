"""
初始化账户表，可选从 YAML 导入页面目录

页面文件为 YAML 列表：

  - page_id: 1
    path: /dashboard
    component_name: Dashboard
    description: Overview
    icon_name: home

Usage:
  python -m accounts.scripts.init_db [--db path/to/accounts.db] [--pages seeds/pages.yaml]
"""
from __future__ import annotations

import argparse
import logging
from typing import Any, Dict, List

import yaml

from accounts.db import ensure_schema, get_conn

logger = logging.getLogger(__name__)


def load_pages(path: str) -> List[Dict[str, Any]]:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or []
    if not isinstance(data, list):
        raise ValueError(f"{path}: 页面文件应为列表")
    return data


def seed_pages(conn, pages: List[Dict[str, Any]]) -> int:
    n = 0
    for p in pages:
        conn.execute(
            "INSERT OR REPLACE INTO web_pages(page_id, path, component_name, description, icon_name) "
            "VALUES(?,?,?,?,?)",
            (
                int(p["page_id"]),
                p["path"],
                p.get("component_name"),
                p.get("description"),
                p.get("icon_name"),
            ),
        )
        n += 1
    conn.commit()
    return n


def main(argv=None):
    ap = argparse.ArgumentParser()
    ap.add_argument("--db", default=None, help="数据库文件，默认使用配置的路径")
    ap.add_argument("--pages", default=None, help="页面目录 YAML 文件")
    args = ap.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    with get_conn(args.db) as conn:
        ensure_schema(conn)
        logger.info("schema ready")
        seeded = 0
        if args.pages:
            seeded = seed_pages(conn, load_pages(args.pages))
            logger.info("seeded %d pages from %s", seeded, args.pages)
    return {"message": "ok", "pages": seeded}


if __name__ == "__main__":
    main()
