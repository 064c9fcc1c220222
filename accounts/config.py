from __future__ import annotations

# accounts/config.py
import os
from typing import Optional

import yaml

_PROJECT_ROOT = os.path.dirname(os.path.dirname(__file__))
_CONFIG_KEYS = ("db_path", "test_db_path", "token_key")


def read_config_yaml(path: Optional[str] = None) -> dict:
    """读取项目根目录的 config.yaml，只保留认识的非空字符串键。文件缺失或格式错误时返回空 dict。"""
    cfg_path = path or os.path.join(_PROJECT_ROOT, "config.yaml")
    if not os.path.exists(cfg_path):
        return {}
    try:
        with open(cfg_path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError):
        return {}
    if not isinstance(cfg, dict):
        return {}
    out = {}
    for k in _CONFIG_KEYS:
        v = cfg.get(k)
        if isinstance(v, str) and v.strip():
            out[k] = v.strip()
    return out


def is_test_env() -> bool:
    return (os.environ.get("APP_ENV") == "test") or (os.environ.get("PYTEST_CURRENT_TEST") is not None)


def get_token_key() -> Optional[str]:
    # 1) 环境变量 ACCOUNTS_TOKEN_KEY
    # 2) config.yaml 的 token_key
    env_key = os.environ.get("ACCOUNTS_TOKEN_KEY")
    if env_key:
        return env_key
    return read_config_yaml().get("token_key")
