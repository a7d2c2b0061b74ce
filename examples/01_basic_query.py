"""
Example 01: Row Maps and JSON

This example demonstrates query_maps and query_json over SQLite.
"""

import tempfile

from rowbind import ConnectionConfig, Engine, configure_logging, get_logger


def main():
    db_file = tempfile.NamedTemporaryFile(delete=False, suffix=".db")
    db_path = db_file.name
    db_file.close()

    configure_logging(log_level="DEBUG")
    engine = Engine.from_config(
        ConnectionConfig.from_dsn(f"sqlite:///{db_path}"),
        logger=get_logger(example="01"),
    )

    # Set up the database through the executor
    engine.executor.execute("""
        CREATE TABLE users (
            id INTEGER PRIMARY KEY,
            name TEXT NOT NULL,
            email TEXT NOT NULL,
            avatar BLOB
        )
    """)
    engine.executor.execute(
        "INSERT INTO users (name, email, avatar) VALUES ($1, $2, $3)",
        ("Alice", "alice@example.com", b"\x89PNG"),
    )
    engine.executor.execute(
        "INSERT INTO users (name, email) VALUES ($1, $2)", ("Bob", "bob@example.com")
    )

    print("=== query_maps ===")
    for row in engine.query_maps("SELECT id, name, email FROM users ORDER BY id"):
        print(row)

    print("\n=== query_maps with arguments ===")
    print(engine.query_maps("SELECT name FROM users WHERE id = $1", 2))

    print("\n=== query_json (bytes are base64) ===")
    print(engine.query_json("SELECT id, avatar FROM users").decode())

    engine.executor.close()


if __name__ == "__main__":
    main()
