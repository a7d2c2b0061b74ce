"""Unit tests for INSERT rendering."""

from __future__ import annotations

import pytest

from rowbind.core.exceptions import NoInsertableFieldsError
from rowbind.mapping.insert import InsertStatement, build_insert, placeholders


class TestPlaceholders:
    def test_numbered_from_one(self) -> None:
        assert placeholders(3) == ["$1", "$2", "$3"]

    def test_zero(self) -> None:
        assert placeholders(0) == []


class TestBuildInsert:
    def test_renders_statement(self) -> None:
        statement = build_insert("users", ["name", "email"], ["Test User", "test@example.com"])
        assert statement == InsertStatement(
            sql="INSERT INTO users (name, email) VALUES ($1, $2)",
            args=("Test User", "test@example.com"),
        )

    def test_single_column(self) -> None:
        statement = build_insert("audit", ["event"], ["login"])
        assert statement.sql == "INSERT INTO audit (event) VALUES ($1)"

    def test_no_columns_raises(self) -> None:
        with pytest.raises(NoInsertableFieldsError, match="users"):
            build_insert("users", [], [])

    def test_length_mismatch_raises(self) -> None:
        with pytest.raises(ValueError):
            build_insert("users", ["name"], [])
