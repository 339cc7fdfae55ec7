#!/usr/bin/env python3
"""
Basic tablewright usage example.

This example demonstrates:
- Connecting to a database
- Registering a table
- Inserting a row
- Reading the row back
"""

import tablewright
from tablewright.models import Column, Table


def main():
    # In-memory SQLite; use tablewright.connect(backend="postgres", ...) for a server
    db = tablewright.connect()

    users = Table(
        columns={
            "id": Column.of("string", 255, primary_key=True),
            "username": Column.of("string", 255, not_null=True, unique=True),
            "password": Column.of("string", 255, not_null=True),
        }
    )

    print("Creating users table...")
    print(db.register_table("users", users))

    print("\nInserting a user...")
    print(db.insert_row("users", {"id": "2n1kj", "username": "John", "password": "1234"}))

    print("\nUsers:")
    for row in db.connection.query("SELECT id, username FROM users"):
        print(f"  {row['id']}: {row['username']}")

    db.close()


if __name__ == "__main__":
    main()
