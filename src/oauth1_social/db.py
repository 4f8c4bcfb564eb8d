import sqlite3
import time
from logging import Logger
from sqlite3 import Connection
from typing import override

from flask import Flask, g

from .kv import Cache

SCHEMA = """
create table if not exists oauth1_cache (
    key text primary key,
    value text not null,
    expires_at integer not null
);
"""


class DBCache(Cache):
    db: Connection
    logger: Logger

    def __init__(self, app: Connection | Flask, logger: Logger):
        self.db = app if isinstance(app, Connection) else get_db(app)
        self.logger = logger

    @override
    def get(self, key: str) -> str | None:
        cursor = self.db.cursor()
        row: sqlite3.Row | None = cursor.execute(
            "select value from oauth1_cache where key = ? and expires_at > ?",
            (key, int(time.time())),
        ).fetchone()
        if row is not None:
            self.logger.debug(f"returning cached {key}")
            return row["value"]
        return None

    @override
    def put(self, key: str, value: str, ttl: int):
        self.logger.debug(f"caching {key} for {ttl}s")
        cursor = self.db.cursor()
        _ = cursor.execute(
            "insert or replace into oauth1_cache (key, value, expires_at) values (?, ?, ?)",
            (key, value, int(time.time()) + ttl),
        )
        self.db.commit()
        _ = self.purge_expired()

    @override
    def forget(self, key: str):
        cursor = self.db.cursor()
        _ = cursor.execute("delete from oauth1_cache where key = ?", (key,))
        self.db.commit()

    def purge_expired(self) -> int:
        cursor = self.db.cursor()
        _ = cursor.execute(
            "delete from oauth1_cache where expires_at <= ?",
            (int(time.time()),),
        )
        self.db.commit()
        return cursor.rowcount


def get_db(app: Flask) -> sqlite3.Connection:
    db: sqlite3.Connection | None = g.get("oauth1_db", None)
    if db is None:
        db_path: str = app.config.get("DATABASE_URL", "oauth1.db")
        db = g.oauth1_db = sqlite3.connect(db_path, check_same_thread=False)
        # return rows as dict-like objects
        db.row_factory = sqlite3.Row
    return db


def close_db_connection(_exception: BaseException | None):
    db: sqlite3.Connection | None = g.pop("oauth1_db", None)
    if db is not None:
        db.close()


def init_db(app: Flask):
    _ = app.teardown_appcontext(close_db_connection)
    with app.app_context():
        db = get_db(app)
        _ = db.cursor().executescript(SCHEMA)
        db.commit()
