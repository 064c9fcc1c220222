"""
refresh token 加密器

refresh token 以密文存储，查询时按密文相等比较，因此变换必须是确定性的：
同一密钥下同一令牌总是得到同一密文。AES-SIV（RFC 5297）满足这一点，解密时同时校验密文完整性。

密钥可以是任意字符串，经 HKDF-SHA256 扩展为 64 字节的 AES-SIV 密钥。
"""
from __future__ import annotations

from typing import Optional

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers.aead import AESSIV
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

from .config import get_token_key

_KDF_INFO = b"web_refresh_tokens"
MIN_SECRET_LEN = 16


class TokenCipher:
    """存储或比较前对 refresh token 做的确定性、可逆变换"""

    def __init__(self, secret: Optional[str] = None):
        secret = secret or get_token_key()
        if not secret:
            raise ValueError(
                "refresh token key is not configured. "
                "Set ACCOUNTS_TOKEN_KEY or token_key in config.yaml"
            )
        if len(secret) < MIN_SECRET_LEN:
            raise ValueError(
                f"refresh token key is too short ({len(secret)} chars), "
                f"use at least {MIN_SECRET_LEN}"
            )
        key = HKDF(algorithm=hashes.SHA256(), length=64, salt=None, info=_KDF_INFO).derive(
            secret.encode("utf-8")
        )
        self._siv = AESSIV(key)

    def encrypt(self, token: str) -> str:
        return self._siv.encrypt(token.encode("utf-8"), None).hex()

    def decrypt(self, ciphertext: str) -> str:
        """
        encrypt() 的逆变换

        Raises:
            cryptography.exceptions.InvalidTag: 密文不是用该密钥生成的
            ValueError: 密文不是十六进制字符串
        """
        return self._siv.decrypt(bytes.fromhex(ciphertext), None).decode("utf-8")
