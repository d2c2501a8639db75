# Shared fixtures for the warehouse pipeline tests.
# The fake warehouse stands in for SQL Server: it understands the statements
# rendered from dwh/sql/sqlserver and keeps committed and pending state apart,
# so transactional replace and rollback can be tested without a database.

import copy
import os
import re
import sys

import pandas as pd
import pymssql
import pytest

# Add plugins to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'airflow', 'plugins'))

import dwh.warehouse  # noqa: E402


TRUNCATE_RE = re.compile(r'^TRUNCATE TABLE \[(\w+)\]\.\[(\w+)\]$')
SELECT_RE = re.compile(r'^SELECT (.+)\s+FROM \[(\w+)\]\.\[(\w+)\]$', re.DOTALL)
INSERT_RE = re.compile(r'^INSERT INTO \[(\w+)\]\.\[(\w+)\] \(([^)]*)\)', re.DOTALL)


def _names(column_list):
    return [c.strip().strip('[]') for c in column_list.split(',')]


class FakeWarehouse:
    """In-memory warehouse: {(schema, table): [row dicts]}."""

    def __init__(self):
        self.tables = {}
        self.fail_on = set()
        self.statements = []
        self.commits = 0
        self.rollbacks = 0

    def load(self, schema, table, df):
        """Seed a table with committed rows."""
        rows = df.astype(object).where(df.notna(), None).to_dict('records')
        self.tables[(schema, table)] = rows

    def rows(self, schema, table):
        return self.tables.get((schema, table), [])

    def frame(self, schema, table):
        return pd.DataFrame(self.rows(schema, table))

    def connect(self):
        return FakeConnection(self)


class FakeConnection:

    def __init__(self, warehouse):
        self.warehouse = warehouse
        self.pending = copy.deepcopy(warehouse.tables)
        self.closed = False

    def cursor(self, as_dict=False):
        return FakeCursor(self, as_dict)

    def commit(self):
        self.warehouse.tables = copy.deepcopy(self.pending)
        self.warehouse.commits += 1

    def rollback(self):
        self.pending = copy.deepcopy(self.warehouse.tables)
        self.warehouse.rollbacks += 1

    def close(self):
        self.closed = True


class FakeCursor:

    def __init__(self, connection, as_dict):
        self.connection = connection
        self.as_dict = as_dict
        self._result = []

    def execute(self, sql, params=None):
        sql = sql.strip()
        self.connection.warehouse.statements.append(sql)

        match = TRUNCATE_RE.match(sql)
        if match:
            self.connection.pending[(match.group(1), match.group(2))] = []
            return

        match = SELECT_RE.match(sql)
        if match:
            columns = _names(match.group(1))
            rows = self.connection.pending.get((match.group(2), match.group(3)), [])
            if self.as_dict:
                self._result = [{c: row.get(c) for c in columns} for row in rows]
            else:
                self._result = [tuple(row.get(c) for c in columns) for row in rows]
            return

        raise AssertionError(f"Unexpected SQL: {sql}")

    def executemany(self, sql, rows):
        sql = sql.strip()
        self.connection.warehouse.statements.append(sql)

        match = INSERT_RE.match(sql)
        if not match:
            raise AssertionError(f"Unexpected SQL: {sql}")

        key = (match.group(1), match.group(2))
        if match.group(2) in self.connection.warehouse.fail_on:
            raise pymssql.OperationalError(8152, b'String or binary data would be truncated.')

        columns = _names(match.group(3))
        target = self.connection.pending.setdefault(key, [])
        for row in rows:
            assert len(row) == sql.count('%s'), "parameter count mismatch"
            target.append(dict(zip(columns, row)))

    def fetchall(self):
        return self._result

    def close(self):
        pass


@pytest.fixture
def warehouse(monkeypatch):
    """Fake warehouse patched over get_warehouse_connection."""
    fake = FakeWarehouse()
    monkeypatch.setattr(dwh.warehouse, 'get_warehouse_connection', fake.connect)
    return fake
