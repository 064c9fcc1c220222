"""
用户账户服务：对 repository 函数的一层薄封装。

UserRepository 在构造时注入连接提供者与令牌加密器（未注入时首次使用再创建），每个方法：
打开连接 -> 执行一条语句 -> 提交 -> 以 Result 返回成功值或数据库原始异常。
"""
from __future__ import annotations

import logging
import sqlite3
from contextlib import AbstractContextManager
from typing import Callable, List, Optional, TypeVar

from ..crypto import TokenCipher
from ..db import get_conn
from ..models import NewUser, Page, User, UserSummary, UserUpdate
from ..repository import page_repo, token_repo, user_repo
from .result import Result

logger = logging.getLogger(__name__)

T = TypeVar("T")
ConnectionProvider = Callable[[], AbstractContextManager[sqlite3.Connection]]


class UserRepository:
    def __init__(self, connect: Optional[ConnectionProvider] = None, cipher: Optional[TokenCipher] = None):
        self._connect = connect or get_conn
        self._cipher = cipher

    @property
    def cipher(self) -> TokenCipher:
        # 首次用到 refresh token 时才读取密钥，只做用户查询时不要求配置
        if self._cipher is None:
            self._cipher = TokenCipher()
        return self._cipher

    def _run(self, op: str, fn: Callable[[sqlite3.Connection], T]) -> Result[T]:
        try:
            with self._connect() as conn:
                value = fn(conn)
                conn.commit()
        except sqlite3.Error as e:
            logger.warning("%s failed: %s: %s", op, type(e).__name__, e)
            return Result.failure(e)
        logger.debug("%s ok", op)
        return Result.success(value)

    # ---------- 查询 ----------

    def get_user_by_email(self, email: str) -> Result[User]:
        return self._run("get_user_by_email", lambda c: _user(user_repo.get_user_by_email(c, email)))

    def get_user_by_id(self, user_id: int) -> Result[User]:
        return self._run("get_user_by_id", lambda c: _user(user_repo.get_user_by_id(c, user_id)))

    def get_activated_user_by_email(self, email: str) -> Result[User]:
        return self._run(
            "get_activated_user_by_email",
            lambda c: _user(user_repo.get_activated_user_by_email(c, email)),
        )

    def get_user_by_email_except_id(self, email: str, user_id: int) -> Result[User]:
        return self._run(
            "get_user_by_email_except_id",
            lambda c: _user(user_repo.get_user_by_email_except_id(c, email, user_id)),
        )

    def get_users(self) -> Result[List[UserSummary]]:
        return self._run("get_users", lambda c: [UserSummary(**r) for r in user_repo.get_users(c)])

    def get_permitted_pages(self, user_id: int) -> Result[List[Page]]:
        return self._run(
            "get_permitted_pages",
            lambda c: [Page(**r) for r in page_repo.get_permitted_pages(c, user_id)],
        )

    # ---------- 写入：返回受影响行数（add_user 返回新 user_id） ----------

    def add_user(self, data: NewUser) -> Result[int]:
        return self._run(
            "add_user",
            lambda c: user_repo.add_user(
                c,
                email=data.email,
                first_name=data.name,
                last_name=data.lastname,
                password=data.password,
                confirmation_token=data.confirmation_token,
                permitted_pages_id=data.permitted_pages,
            ),
        )

    def update_user(self, data: UserUpdate) -> Result[int]:
        return self._run(
            "update_user",
            lambda c: user_repo.update_user(
                c,
                user_id=data.user_id,
                email=data.email,
                first_name=data.name,
                last_name=data.lastname,
                permitted_pages_id=data.permitted_pages,
            ),
        )

    def remove_user(self, user_id: int) -> Result[int]:
        return self._run("remove_user", lambda c: user_repo.remove_user(c, user_id))

    def activate_user(self, password: str, token: str) -> Result[int]:
        """0 行表示没有待激活的匹配账户，仍然是成功结果；调用方按行数区分"""
        return self._run("activate_user", lambda c: user_repo.activate_user(c, password, token))

    def reset_account(self, email: str, token: str) -> Result[int]:
        return self._run("reset_account", lambda c: user_repo.reset_account(c, email, token))

    def upload_image_source(self, user_id: int, avatar: Optional[str]) -> Result[int]:
        return self._run("upload_image_source", lambda c: user_repo.upload_image_source(c, user_id, avatar))

    def change_password(self, user_id: int, password: str) -> Result[int]:
        return self._run("change_password", lambda c: user_repo.change_password(c, user_id, password))

    # ---------- refresh token：存储和比较前先加密 ----------

    def insert_refresh_token(self, user_id: int, token: str) -> Result[int]:
        enc = self.cipher.encrypt(token)
        return self._run("insert_refresh_token", lambda c: token_repo.insert_refresh_token(c, user_id, enc))

    def remove_refresh_token(self, user_id: int, token: str) -> Result[int]:
        enc = self.cipher.encrypt(token)
        return self._run("remove_refresh_token", lambda c: token_repo.remove_refresh_token(c, user_id, enc))

    def remove_refresh_tokens(self, user_id: int) -> Result[int]:
        return self._run("remove_refresh_tokens", lambda c: token_repo.remove_refresh_tokens(c, user_id))

    def contains_refresh_token(self, user_id: int, token: str) -> Result[int]:
        """返回匹配的令牌条数，>0 即会话有效"""
        enc = self.cipher.encrypt(token)
        return self._run("contains_refresh_token", lambda c: token_repo.contains_refresh_token(c, user_id, enc))


def _user(row) -> Optional[User]:
    return User(**row) if row is not None else None
