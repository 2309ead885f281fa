# rsattack/config.py
# Runtime settings, read from the environment once per process.

from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Mapping, Optional


def _env_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = (env.get(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw, 10)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    redis_url: str = "redis://localhost:6379/0"
    queue_name: str = "attacks"
    job_timeout_s: int = 60 * 60
    brute_force_sync_max_n: int = 10_000_000
    brute_force_job_max_n: int = 10_000_000_000
    factoring_sync_max_bits: int = 48
    factoring_job_max_bits: int = 72
    log_level: str = "INFO"
    bench_log: str = "bench.log"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if env is None else env
        return cls(
            redis_url=env.get("REDIS_URL", cls.redis_url),
            queue_name=env.get("ATTACK_QUEUE", cls.queue_name),
            job_timeout_s=_env_int(env, "JOB_TIMEOUT_S", cls.job_timeout_s),
            brute_force_sync_max_n=_env_int(env, "BRUTE_FORCE_SYNC_MAX_N", cls.brute_force_sync_max_n),
            brute_force_job_max_n=_env_int(env, "BRUTE_FORCE_JOB_MAX_N", cls.brute_force_job_max_n),
            factoring_sync_max_bits=_env_int(env, "FACTORING_SYNC_MAX_BITS", cls.factoring_sync_max_bits),
            factoring_job_max_bits=_env_int(env, "FACTORING_JOB_MAX_BITS", cls.factoring_job_max_bits),
            log_level=env.get("LOG_LEVEL", cls.log_level).upper(),
            bench_log=env.get("BENCH_LOG", cls.bench_log),
        )
