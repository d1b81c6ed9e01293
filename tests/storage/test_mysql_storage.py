from __future__ import annotations

from src.location_attendance.location_attendance.database.bootstrap import iter_sql_statements, schema_statements
from src.location_attendance.location_attendance.storage.mysql_storage import MySQLKeyValueStorage


class FakeCursor:
    def __init__(self, table: dict[str, str], log: list):
        self._table = table
        self._log = log
        self._row = None

    def execute(self, sql, params=()):
        self._log.append((" ".join(sql.split()), params))
        if sql.strip().upper().startswith("SELECT"):
            value = self._table.get(params[0])
            self._row = {"item_value": value} if value is not None else None
        else:
            key, value = params
            self._table[key] = value

    def fetchone(self):
        return self._row

    def close(self):
        pass


class FakeConnection:
    def __init__(self, table, log):
        self._table = table
        self._log = log
        self.committed = False
        self.closed = False

    def cursor(self, dictionary=False):
        return FakeCursor(self._table, self._log)

    def commit(self):
        self.committed = True

    def rollback(self):
        pass

    def close(self):
        self.closed = True


class FakeConnectionFactory:
    def __init__(self):
        self.table: dict[str, str] = {}
        self.log: list = []
        self.connections: list[FakeConnection] = []

    def connect(self):
        conn = FakeConnection(self.table, self.log)
        self.connections.append(conn)
        return conn


def test_set_then_get_uses_kv_table():
    factory = FakeConnectionFactory()
    storage = MySQLKeyValueStorage(factory)

    assert storage.get_item("attendanceRecords") is None
    storage.set_item("attendanceRecords", "[]")
    assert storage.get_item("attendanceRecords") == "[]"

    assert all(c.committed and c.closed for c in factory.connections)
    assert any("ON DUPLICATE KEY UPDATE" in sql for sql, _ in factory.log)


def test_schema_creates_only_the_kv_table():
    statements = schema_statements()

    assert len(statements) == 1
    assert statements[0].startswith("CREATE TABLE IF NOT EXISTS kv_store")


def test_sql_statements_split_on_semicolons():
    sql = "CREATE TABLE a (x INT);\n\n  CREATE TABLE b (y INT) ;\n"

    assert list(iter_sql_statements(sql)) == ["CREATE TABLE a (x INT)", "CREATE TABLE b (y INT)"]
