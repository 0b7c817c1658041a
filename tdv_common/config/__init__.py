"""Configuration helpers for tdv_common."""

from .env import parse_bool_env, parse_int_env, parse_int_list_env

__all__ = [
    "parse_bool_env",
    "parse_int_env",
    "parse_int_list_env",
]
