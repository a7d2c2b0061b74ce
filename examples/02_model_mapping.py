"""
Example 02: Typed Records and Inserts

This example demonstrates tag-driven mapping to dataclasses and pydantic
models, record inserts, and the async engine.
"""

import asyncio
import tempfile
from dataclasses import dataclass
from typing import Annotated, Optional

from pydantic import BaseModel, Field

from rowbind import AsyncEngine, ConnectionConfig, Engine, Tag, column


@dataclass
class User:
    id: int = column("users.id", default=0)
    name: str = column("users.name", default="")
    email: Optional[str] = column("users.email", default=None)
    password: str = column("-", default="")


class UserSummary(BaseModel):
    id: Annotated[int, Tag("id")] = 0
    display_name: str = Field(default="", json_schema_extra={"db": "name"})


@dataclass
class NewUser:
    name: str = column("name")
    email: str = column("email")


def sync_demo(config):
    engine = Engine.from_config(config)
    engine.executor.execute(
        "CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT NOT NULL, email TEXT)"
    )

    engine.insert_record("users", NewUser(name="Alice", email="alice@example.com"))
    engine.insert_record("users", NewUser(name="Bob", email="bob@example.com"))

    print("=== fetch_records (dataclass) ===")
    for user in engine.fetch_records(User, "SELECT id, name, email FROM users"):
        print(user)

    print("\n=== query_records (pydantic) ===")
    summaries = []
    engine.query_records(summaries, UserSummary, "SELECT id, name FROM users WHERE id > $1", 1)
    print(summaries)

    engine.executor.close()


async def async_demo(config):
    engine = AsyncEngine.from_config(config)
    users = await engine.fetch_records(User, "SELECT id, name, email FROM users")
    print("\n=== AsyncEngine.fetch_records ===")
    print(users)
    await engine.executor.close()


def main():
    db_file = tempfile.NamedTemporaryFile(delete=False, suffix=".db")
    db_path = db_file.name
    db_file.close()

    config = ConnectionConfig(driver="sqlite", database=db_path)
    sync_demo(config)
    asyncio.run(async_demo(config))


if __name__ == "__main__":
    main()
