"""
调用结果：成功值或数据库原始异常（不包装、不重试）
"""
from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    NONE = "none"
    INTEGRITY = "integrity"
    OPERATIONAL = "operational"
    PROGRAMMING = "programming"
    DATABASE = "database"


def classify(err: Optional[BaseException]) -> ErrorKind:
    if err is None:
        return ErrorKind.NONE
    if isinstance(err, sqlite3.IntegrityError):
        return ErrorKind.INTEGRITY
    if isinstance(err, sqlite3.OperationalError):
        return ErrorKind.OPERATIONAL
    if isinstance(err, sqlite3.ProgrammingError):
        return ErrorKind.PROGRAMMING
    return ErrorKind.DATABASE


@dataclass(frozen=True)
class Result(Generic[T]):
    value: Optional[T] = None
    error: Optional[sqlite3.Error] = None

    @classmethod
    def success(cls, value: Optional[T] = None) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: sqlite3.Error) -> "Result[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def error_kind(self) -> ErrorKind:
        return classify(self.error)

    def unwrap(self) -> Optional[T]:
        """成功返回值，失败则重新抛出原始异常"""
        if self.error is not None:
            raise self.error
        return self.value
