import os
from dataclasses import dataclass
from pathlib import Path

ENV_PREFIX = "TASKBOARD"

ID_STRATEGIES = ("uuid", "timestamp")


def _k(suffix: str) -> str:
    return f"{ENV_PREFIX}_{suffix}"


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    host: str = "0.0.0.0"
    port: int = 3001
    db_dir: Path = Path("db")
    log_level: str = "INFO"
    hash_passwords: bool = True
    # True: storage errors answer 500; False: empty reads, dropped writes
    strict_persistence: bool = False
    id_strategy: str = "uuid"


def load_settings() -> Settings:
    """Build settings from TASKBOARD_* environment variables (PORT is honoured too)."""
    defaults = Settings()
    port = _env_int("PORT", defaults.port)
    db_dir = os.environ.get(_k("DB_DIR"))
    id_strategy = os.environ.get(_k("ID_STRATEGY"), defaults.id_strategy).strip().lower()
    if id_strategy not in ID_STRATEGIES:
        id_strategy = defaults.id_strategy
    return Settings(
        host=os.environ.get(_k("HOST"), defaults.host),
        port=_env_int(_k("PORT"), port),
        db_dir=Path(db_dir).expanduser() if db_dir else defaults.db_dir,
        log_level=os.environ.get(_k("LOG_LEVEL"), defaults.log_level).upper(),
        hash_passwords=_env_bool(_k("HASH_PASSWORDS"), defaults.hash_passwords),
        strict_persistence=_env_bool(_k("STRICT_PERSISTENCE"), defaults.strict_persistence),
        id_strategy=id_strategy,
    )
