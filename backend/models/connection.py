"""Pydantic schema describing how to reach the backing relational store."""
from typing import Optional, Literal
from pydantic import BaseModel, Field

from config import Settings


class ConnectionRequest(BaseModel):
    db_type: Literal["sqlite", "postgresql", "mssql"] = Field(..., description="Database engine type")

    # SQLite only
    file_path: Optional[str] = Field(None, description="Path to .db file (SQLite only)")

    # Server databases
    host: Optional[str] = Field(None, description="Database host")
    port: Optional[int] = Field(None, description="Database port")
    database: Optional[str] = Field(None, description="Database name")
    username: Optional[str] = Field(None, description="Username")
    password: Optional[str] = Field(None, description="Password")

    @classmethod
    def from_settings(cls, s: Settings) -> "ConnectionRequest":
        return cls(
            db_type=s.DB_TYPE,
            file_path=s.DB_FILE_PATH,
            host=s.DB_HOST,
            port=s.DB_PORT,
            database=s.DB_NAME,
            username=s.DB_USER,
            password=s.DB_PASSWORD,
        )

    def get_sqlalchemy_url(self) -> str:
        """Async driver URL for the configured engine."""
        if self.db_type == "sqlite":
            return f"sqlite+aiosqlite:///{self.file_path}"
        if self.db_type == "postgresql":
            return (
                f"postgresql+asyncpg://{self.username}:{self.password}"
                f"@{self.host}:{self.port or 5432}/{self.database}"
            )
        return (
            f"mssql+aioodbc://{self.username}:{self.password}"
            f"@{self.host}:{self.port or 1433}/{self.database}"
            "?driver=ODBC+Driver+18+for+SQL+Server&TrustServerCertificate=yes"
        )
