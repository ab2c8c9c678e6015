from __future__ import annotations

from dataclasses import dataclass
import os


def _env_int(name: str, default: int) -> int:
    try:
        return int(str(os.environ.get(name, str(default)) or str(default)).strip())
    except Exception:
        return int(default)


def _env_str(name: str, default: str) -> str:
    val = str(os.environ.get(name, default) or "").strip()
    return val or default


@dataclass(frozen=True)
class ResultsSettings:
    cache_alias: str = "default"
    cache_key_prefix: str = "student:"
    cache_ttl_s: int = 300
    wait_timeout_s: int = 30
    max_workers: int = 4


def get_results_settings() -> ResultsSettings:
    return ResultsSettings(
        cache_alias=_env_str("RESULTS_CACHE_ALIAS", "default"),
        cache_key_prefix=_env_str("RESULTS_CACHE_KEY_PREFIX", "student:"),
        cache_ttl_s=max(_env_int("RESULTS_CACHE_TTL_S", 300), 1),
        wait_timeout_s=max(_env_int("RESULTS_WAIT_TIMEOUT_S", 30), 1),
        max_workers=max(min(_env_int("RESULTS_MAX_WORKERS", 4), 32), 1),
    )
