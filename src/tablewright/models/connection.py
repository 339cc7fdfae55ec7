"""Connection settings model."""

from typing import Literal, Optional

from pydantic import Field

from .base import TablewrightBaseModel

Backend = Literal["sqlite", "postgres"]


class ConnectionSettings(TablewrightBaseModel):
    """Where and how to connect.

    ``path`` is used by the sqlite backend; ``address``, ``database_name``,
    ``user`` and ``password`` by the postgres backend.
    """

    backend: Backend = Field(default="sqlite", description="Database backend")
    path: str = Field(default=":memory:", description="SQLite database file")
    address: str = Field(default="localhost:5432", description="Server host[:port]")
    database_name: Optional[str] = Field(default=None, description="Database name")
    user: Optional[str] = Field(default=None, description="User name")
    password: Optional[str] = Field(default=None, description="Password")
