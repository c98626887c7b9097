import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv
from sqlalchemy.engine import URL, make_url
from sqlalchemy.exc import ArgumentError, NoSuchModuleError

from todoapp.errors import ConfigurationError

# bare schemes are pinned to their async driver
ASYNC_DRIVERS = {
    "postgres": "postgresql+asyncpg",
    "postgresql": "postgresql+asyncpg",
    "sqlite": "sqlite+aiosqlite",
    "mysql": "mysql+aiomysql",
}


@dataclass(frozen=True)
class Settings:
    database_url: str
    pool_size: int = 10
    max_overflow: int = 10
    pool_timeout: float = 30.0
    operation_timeout: float = 10.0
    log_level: str = "INFO"
    log_format: str = "console"
    host: str = "0.0.0.0"
    api_port: int = 8080
    ws_port: int = 8081
    web_port: int = 3000


def normalize_database_url(raw: str) -> URL:
    """Parse a connection string, pin it to an async driver and check the dialect loads."""
    try:
        url = make_url(raw)
    except ArgumentError as exc:
        raise ConfigurationError(f"DATABASE_URL is not a valid connection string: {exc}") from exc
    driver = ASYNC_DRIVERS.get(url.drivername)
    if driver:
        url = url.set(drivername=driver)
    try:
        dialect = url.get_dialect()
    except NoSuchModuleError:
        raise ConfigurationError(f"DATABASE_URL uses an unknown database scheme {url.drivername!r}") from None
    if not getattr(dialect, "is_async", False):
        raise ConfigurationError(
            f"DATABASE_URL driver {url.drivername!r} is not async; use e.g. postgresql+asyncpg or sqlite+aiosqlite"
        )
    return url


def _number(name: str, default, cast):
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = cast(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from None
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {raw!r}")
    return value


def load_settings() -> Settings:
    """Resolve settings from the process environment.

    A ``.env`` file in the working directory is loaded first without
    overriding variables that are already set. ``DATABASE_URL`` is required;
    a missing or malformed value raises ``ConfigurationError`` here so the
    process stops before serving anything.
    """
    # only the working directory; parent directories are never searched
    env_file = Path.cwd() / ".env"
    if env_file.is_file():
        load_dotenv(env_file)

    raw_url = (os.getenv("DATABASE_URL") or "").strip()
    if not raw_url:
        raise ConfigurationError("DATABASE_URL is not set; export it or add it to .env")
    url = normalize_database_url(raw_url)

    log_format = os.getenv("LOG_FORMAT", "console").lower()
    if log_format not in ("console", "json"):
        raise ConfigurationError(f"LOG_FORMAT must be 'console' or 'json', got {log_format!r}")

    return Settings(
        database_url=url.render_as_string(hide_password=False),
        pool_size=_number("DB_POOL_SIZE", 10, int),
        max_overflow=_number("DB_MAX_OVERFLOW", 10, int),
        pool_timeout=_number("DB_POOL_TIMEOUT", 30.0, float),
        operation_timeout=_number("DB_OPERATION_TIMEOUT", 10.0, float),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        log_format=log_format,
        host=os.getenv("HOST", "0.0.0.0"),
        api_port=_number("API_PORT", 8080, int),
        ws_port=_number("WS_PORT", 8081, int),
        web_port=_number("WEB_PORT", 3000, int),
    )
