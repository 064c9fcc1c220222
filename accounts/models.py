"""
账户数据模型：查询结果记录与写入参数。

只做字段类型转换，不做业务校验；非法输入在数据库层报错。
"""
from __future__ import annotations

import re
from typing import Iterable, Optional, Set, Union

from pydantic import BaseModel, field_validator

PermittedPages = Union[str, Iterable[int], None]

# 与 SQL 侧一致：只去掉空格，只认不带前导零的 ASCII 数字
_PAGE_ID_RE = re.compile(r"0|[1-9][0-9]*")


def parse_permitted_pages(raw: Optional[str]) -> Set[int]:
    """'1,2, 5' -> {1, 2, 5}；空值或非数字片段（含制表符、全角或上标数字）忽略"""
    out: Set[int] = set()
    if not raw:
        return out
    for part in str(raw).split(","):
        part = part.replace(" ", "")
        if _PAGE_ID_RE.fullmatch(part):
            out.add(int(part))
    return out


def format_permitted_pages(pages: PermittedPages) -> str:
    """字符串或 id 集合 -> 规范存储格式（升序、去重、逗号分隔）"""
    if pages is None:
        return ""
    if isinstance(pages, str):
        ids = parse_permitted_pages(pages)
    else:
        ids = {int(p) for p in pages}
    return ",".join(str(i) for i in sorted(ids))


class UserSummary(BaseModel):
    """用户列表中的一行，不含密码和确认令牌"""
    user_id: int
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    activated: bool = False
    permitted_pages_id: str = ""
    avatar: Optional[str] = None

    @field_validator("permitted_pages_id", mode="before")
    @classmethod
    def _none_to_empty(cls, v):
        return v if v is not None else ""

    @property
    def permitted_pages(self) -> Set[int]:
        return parse_permitted_pages(self.permitted_pages_id)


class User(UserSummary):
    password: Optional[str] = None
    confirmation_token: Optional[str] = None


class Page(BaseModel):
    page_id: int
    path: str
    component_name: Optional[str] = None
    description: Optional[str] = None
    icon_name: Optional[str] = None


class NewUser(BaseModel):
    """注册时写入的字段；password 在激活前通常为空"""
    email: str
    name: Optional[str] = None
    lastname: Optional[str] = None
    password: Optional[str] = None
    confirmation_token: Optional[str] = None
    permitted_pages: str = ""

    @field_validator("permitted_pages", mode="before")
    @classmethod
    def _canonical_pages(cls, v):
        return format_permitted_pages(v)


class UserUpdate(BaseModel):
    """修改资料；None 表示不修改该字段，清空权限传空字符串或空集合"""
    user_id: int
    email: Optional[str] = None
    name: Optional[str] = None
    lastname: Optional[str] = None
    permitted_pages: Optional[str] = None

    @field_validator("permitted_pages", mode="before")
    @classmethod
    def _canonical_pages(cls, v):
        return format_permitted_pages(v) if v is not None else None
