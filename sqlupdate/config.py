from __future__ import annotations
import os
import pathlib
import typing as t
import yaml

DEFAULT_PATH = pathlib.Path("sqlupdate.config.yml")

_REQUIRED = ("host", "database", "user", "password")


class ConfigError(RuntimeError):
    """Raised for any user‑visible configuration problem."""


class PoolConfig:
    """
    Settings of one named entry under ``pools:``, used to open connections
    from that pool.  Nothing here talks to the database.
    """

    def __init__(self, name: str, d: dict[str, t.Any]) -> None:
        missing = [k for k in _REQUIRED if k not in d]
        if missing:
            raise ConfigError(f"Pool {name!r} is missing required key(s): {', '.join(missing)}")

        self.name: str = name
        self.host: str = d["host"]
        self.port: int = int(d.get("port", 3306))
        self.database: str = d["database"]
        self.user: str = d["user"]

        # Allow `${ENV_VAR}` syntax for secrets
        raw_pwd: str = str(d["password"])
        if raw_pwd.startswith("${") and raw_pwd.endswith("}"):
            var = raw_pwd[2:-1]
            if var not in os.environ:
                raise ConfigError(f"Pool {name!r}: environment variable {var} is not set")
            self.password: str = os.environ[var]
        else:
            self.password = raw_pwd

        self.pool_size: int = int(d.get("pool_size", 1))
        # Each statement is committed on its own unless told otherwise
        self.autocommit: bool = bool(d.get("autocommit", True))

    def __repr__(self) -> str:
        return f"PoolConfig({self.name!r}, {self.user}@{self.host}:{self.port}/{self.database})"

    def dsn(self) -> dict[str, t.Any]:
        """Connection target and credentials, as keyword arguments for
        ``mysql.connector.connect``; pool options are added by the driver."""
        return {
            "host": self.host,
            "port": self.port,
            "user": self.user,
            "password": self.password,
            "database": self.database,
        }


def load(path: pathlib.Path | str | None = None, pool: str | None = None) -> PoolConfig:
    """
    Parse *path* (or the default YAML) and return the :class:`PoolConfig`
    named *pool*, falling back to ``default_pool`` when *pool* is None.
    """
    cfg_file = pathlib.Path(path) if path else DEFAULT_PATH
    if not cfg_file.exists():
        raise ConfigError(f"Config file {cfg_file} not found.")

    with cfg_file.open(encoding="utf-8") as fh:
        try:
            raw = yaml.safe_load(fh) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Config file {cfg_file} is not valid YAML: {exc}") from exc

    if pool == "":
        raise ConfigError("Please specify the name of a defined connection pool")
    pool_name = pool or raw.get("default_pool")
    if not pool_name:
        raise ConfigError("No pool specified and no default_pool in config")

    try:
        return PoolConfig(pool_name, raw["pools"][pool_name])
    except (KeyError, TypeError) as exc:
        raise ConfigError(f"Pool {pool_name!r} not found in {cfg_file}") from exc
