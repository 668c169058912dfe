import pytest

from pep_db.db import DRIVERS, open_connection
from pep_db.errors import MalformedInputError, StatementError


@pytest.fixture
def driver(db_path, driver_tag):
    conn = open_connection(db_path, [driver_tag])
    drv = conn.driver
    drv.execute("CREATE TABLE notes (id INTEGER PRIMARY KEY, body TEXT)")
    yield drv
    conn.close()


def test_driver_tag(driver, driver_tag):
    assert driver.tag == driver_tag
    assert isinstance(driver, DRIVERS[driver_tag])


@pytest.mark.parametrize(
    "value, expected",
    [
        ("bolt", "'bolt'"),
        ("it's", "'it''s'"),
        ("", "''"),
        (5, "5"),
    ],
)
def test_escape(driver, value, expected):
    assert driver.escape(value) == expected


@pytest.mark.parametrize(
    "text",
    [
        "O'Reilly",
        "''",
        "x'); DROP TABLE notes; --",
        'double "quotes" and \\ backslash',
        "colon :name and ? mark",
    ],
)
def test_escaped_text_is_stored_verbatim(driver, text):
    driver.execute(f"INSERT INTO notes (body) VALUES ({driver.escape(text)})")
    handle = driver.execute("SELECT body FROM notes")
    assert driver.fetch_rows(handle) == [{"body": text}]


def test_fetch_rows_empty_result(driver):
    handle = driver.execute("SELECT id, body FROM notes")
    assert driver.fetch_rows(handle) == []


def test_last_insert_id_and_rows_affected(driver):
    driver.execute("INSERT INTO notes (body) VALUES ('a')")
    driver.execute("INSERT INTO notes (body) VALUES ('b')")
    assert driver.last_insert_id() == 2

    driver.execute("UPDATE notes SET body = 'c'")
    assert driver.rows_affected() == 2


def test_failed_statement_sets_last_error(driver):
    with pytest.raises(StatementError) as excinfo:
        driver.execute("SELECT * FROM missing_table")

    assert "no such table" in driver.last_error
    assert excinfo.value.statement == "SELECT * FROM missing_table"
    assert excinfo.value.__cause__ is not None

    driver.execute("SELECT 1")
    assert driver.last_error is None


def test_failure_while_fetching_sets_last_error(driver):
    # The first row is read when the statement starts; the second fails.
    driver.execute("INSERT INTO notes (id, body) VALUES (1, '1')")
    driver.execute("INSERT INTO notes (id, body) VALUES (2, '-9223372036854775808')")

    statement = "SELECT abs(CAST(body AS INTEGER)) AS n FROM notes"
    handle = driver.execute(statement)
    with pytest.raises(StatementError) as excinfo:
        driver.fetch_rows(handle, statement)

    assert "integer overflow" in driver.last_error
    assert excinfo.value.statement == statement


def test_escape_rejects_unbindable_values(driver):
    with pytest.raises(MalformedInputError):
        driver.escape(["a"])


def test_sqlite3_escape_rejects_out_of_range_int(db_path):
    conn = open_connection(db_path, ["sqlite3"])
    try:
        with pytest.raises(MalformedInputError):
            conn.driver.escape(2 ** 64)
    finally:
        conn.close()


def test_driver_close_twice(db_path, driver_tag):
    conn = open_connection(db_path, [driver_tag])
    drv = conn.driver
    drv.close()
    drv.close()
