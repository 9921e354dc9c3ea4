from __future__ import annotations

import pathlib
import textwrap

import mysql.connector
import pytest


class FakeCursor:
    """Records executed SQL; raises for any statement listed in *failing*."""

    def __init__(self, conn: "FakeConnection") -> None:
        self.conn = conn
        self.closed = False

    def execute(self, sql: str) -> None:
        if sql in self.conn.failing:
            raise mysql.connector.Error(msg=f"cannot execute {sql!r}", errno=1064)
        self.conn.executed.append(sql)

    def close(self) -> None:
        self.closed = True


class FakeConnection:
    def __init__(self, failing: tuple[str, ...] = (), commit_error: Exception | None = None) -> None:
        self.failing = set(failing)
        self.commit_error = commit_error
        self.executed: list[str] = []
        self.cursors: list[FakeCursor] = []
        self.cursor_kwargs: list[dict] = []
        self.commits = 0
        self.close_calls = 0

    def cursor(self, **kwargs) -> FakeCursor:
        self.cursor_kwargs.append(kwargs)
        cur = FakeCursor(self)
        self.cursors.append(cur)
        return cur

    def commit(self) -> None:
        if self.commit_error is not None:
            raise self.commit_error
        self.commits += 1

    def close(self) -> None:
        self.close_calls += 1


@pytest.fixture()
def fake_pool(monkeypatch: pytest.MonkeyPatch):
    """
    Replace ``mysql.connector.connect`` with a factory handing out
    FakeConnection objects.  The returned dict exposes the connections made,
    the kwargs of every connect call, the statements that should fail and an
    optional error raised by commit().
    """
    state: dict = {"connections": [], "calls": [], "failing": (), "error": None, "commit_error": None}

    def _connect(**kwargs):
        state["calls"].append(kwargs)
        if state["error"] is not None:
            raise state["error"]
        conn = FakeConnection(state["failing"], state["commit_error"])
        state["connections"].append(conn)
        return conn

    monkeypatch.setattr(mysql.connector, "connect", _connect)
    return state


@pytest.fixture()
def config_file(tmp_path: pathlib.Path) -> pathlib.Path:
    path = tmp_path / "sqlupdate.config.yml"
    path.write_text(
        textwrap.dedent(
            """
            default_pool: local
            pools:
              local:
                host: 127.0.0.1
                port: 3307
                database: app
                user: app
                password: s3cret
                pool_size: 2
              batch:
                host: db.internal
                database: warehouse
                user: loader
                password: ${SQLUPDATE_TEST_PWD}
                autocommit: false
            """
        ),
        encoding="utf-8",
    )
    return path
