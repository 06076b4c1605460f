import pytest

from influx_db_client import statements
from influx_db_client.serialization import quote_ident, quote_literal


def test_quote_ident_escapes_quotes_backslashes_and_newlines() -> None:
    assert quote_ident("db") == '"db"'
    assert quote_ident('we"ird\\name\n') == '"we\\"ird\\\\name\\n"'


def test_quote_literal_escapes_single_quotes() -> None:
    assert quote_literal("pa'ss\\") == "'pa\\'ss\\\\'"


def test_user_statements() -> None:
    assert statements.create_user("bob", "pw") == "CREATE USER \"bob\" WITH PASSWORD 'pw'"
    assert statements.drop_user("bob") == 'DROP USER "bob"'
    assert statements.set_user_password("bob", "new") == "SET PASSWORD FOR \"bob\" = 'new'"
    assert statements.grant_admin_privileges("bob") == 'GRANT ALL PRIVILEGES TO "bob"'


def test_privilege_statements_normalize_case() -> None:
    assert statements.grant_privilege("bob", "db", "Write") == 'GRANT WRITE ON "db" TO "bob"'
    assert statements.revoke_privilege("bob", "db", "all") == 'REVOKE ALL ON "db" FROM "bob"'


def test_unknown_privilege_is_rejected() -> None:
    with pytest.raises(ValueError):
        statements.grant_privilege("bob", "db", "admin")


def test_retention_policy_statements() -> None:
    assert statements.create_retention_policy("rp", "INF", "1", "db") == (
        'CREATE RETENTION POLICY "rp" ON "db" DURATION INF REPLICATION 1'
    )
    assert statements.drop_retention_policy("rp", "db") == 'DROP RETENTION POLICY "rp" ON "db"'


@pytest.mark.parametrize(
    ("query", "expected"),
    [
        ("select * from cpu", "GET"),
        ("SHOW DATABASES", "GET"),
        ("", "GET"),
        ("-- comment", "GET"),
        ("select mean(v) into cpu_1h from cpu group by time(1h)", "POST"),
        ("DELETE FROM cpu", "POST"),
        ("ALTER RETENTION POLICY rp ON db DEFAULT", "POST"),
        ("KILL QUERY 36", "POST"),
    ],
)
def test_select_method(query: str, expected: str) -> None:
    assert statements.select_method(query) == expected
