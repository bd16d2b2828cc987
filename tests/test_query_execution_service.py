import pytest
from sqlalchemy import event

from taskactivity.core.exceptions import QueryExecutionError
from taskactivity.services import QueryExecutionService
from taskactivity.services.query_execution_service import (
    executable_statement,
    remove_comments,
    to_csv,
    validate_read_only_query,
)


class TestValidateReadOnlyQuery:

    @pytest.mark.parametrize("sql", ["", "   ", "\n\t"])
    def test_empty_query_rejected(self, sql):
        with pytest.raises(ValueError, match="Query cannot be empty"):
            validate_read_only_query(sql)

    @pytest.mark.parametrize("sql", [
        "UPDATE users SET role = 'ADMIN'",
        "DELETE FROM users",
        "WITH x AS (SELECT 1) SELECT * FROM x",
        "-- SELECT\nDROP TABLE users",
    ])
    def test_non_select_rejected(self, sql):
        with pytest.raises(ValueError, match="Only SELECT queries are allowed"):
            validate_read_only_query(sql)

    @pytest.mark.parametrize("sql", [
        "SELECT * FROM users; DROP TABLE users",
        "select * from users where id in (delete from x)",
        "SELECT 1 /* ok */ ; TRUNCATE users",
        "SELECT EXEC FROM t",
    ])
    def test_dangerous_keywords_rejected(self, sql):
        with pytest.raises(ValueError, match="Query contains disallowed keywords"):
            validate_read_only_query(sql)

    def test_keywords_inside_identifiers_are_allowed(self):
        assert validate_read_only_query("SELECT created_date, updated_by FROM users") == \
            "SELECT created_date, updated_by FROM users"

    def test_multiple_statements_rejected(self):
        with pytest.raises(ValueError, match="Multiple statements are not allowed"):
            validate_read_only_query("SELECT 1; SELECT 2")

    def test_trailing_semicolon_and_comments_removed(self):
        sql = "/* report */ SELECT id -- the key\nFROM users;"
        assert validate_read_only_query(sql) == "SELECT id \nFROM users"

    def test_semicolon_inside_string_literal_allowed(self):
        assert validate_read_only_query("SELECT 'a;b' AS v") == "SELECT 'a;b' AS v"


def test_remove_comments():
    assert remove_comments("SELECT 1 -- one\n/* two */") == "SELECT 1"


def test_remove_comments_keeps_string_literals():
    assert remove_comments("SELECT 'a--b', '/*x*/' -- note") == "SELECT 'a--b', '/*x*/'"


@pytest.mark.parametrize("sql,expected", [
    ("SELECT 1;", "SELECT 1"),
    ("SELECT 1 ;  \n", "SELECT 1"),
    ("/* keep */ SELECT 1", "/* keep */ SELECT 1"),
])
def test_executable_statement(sql, expected):
    assert executable_statement(sql) == expected


class TestToCsv:

    def test_header_and_rows(self):
        assert to_csv(["id", "name"], [(1, "alpha"), (2, "beta")]) == "id,name\n1,alpha\n2,beta\n"

    def test_special_values_are_quoted(self):
        csv_text = to_csv(["v", "n"], [("a,b", 1), ('say "hi"', 2), ("line\nbreak", 3), (None, 4)])
        assert csv_text == 'v,n\n"a,b",1\n"say ""hi""",2\n"line\nbreak",3\n,4\n'


class TestQueryExecutionService:

    def test_returns_csv_with_header(self, session, make_user):
        make_user("alice", firstname="Alice", lastname="Smith")
        service = QueryExecutionService(session)

        csv_text = service.execute_query_as_csv(
            "SELECT username, firstname, lastname FROM users ORDER BY username", "admin"
        )

        assert csv_text == "username,firstname,lastname\nalice,Alice,Smith\n"

    def test_empty_result_is_empty_string(self, session):
        service = QueryExecutionService(session)
        assert service.execute_query_as_csv("SELECT * FROM users", "admin") == ""

    def test_results_truncated_to_max_rows(self, session, make_user):
        for name in ("user1", "user2", "user3"):
            make_user(name)
        service = QueryExecutionService(session, max_rows=2)

        csv_text = service.execute_query_as_csv("SELECT username FROM users ORDER BY username", "admin")

        assert csv_text.splitlines() == ["username", "user1", "user2"]

    def test_database_error_wrapped(self, session):
        service = QueryExecutionService(session)
        with pytest.raises(QueryExecutionError, match="Failed to execute query"):
            service.execute_query_as_csv("SELECT * FROM no_such_table", "admin")

    def test_invalid_query_not_executed(self, session):
        service = QueryExecutionService(session)
        with pytest.raises(ValueError):
            service.execute_query_as_csv("DROP TABLE users", "admin")

    @pytest.mark.parametrize("sql,expected", [
        ("SELECT 'a--b' AS v", "v\na--b\n"),
        ("SELECT '/*x*/' AS v", "v\n/*x*/\n"),
        ("SELECT 'x' AS v -- trailing note", "v\nx\n"),
    ])
    def test_comment_markers_inside_literals_reach_database(self, session, sql, expected):
        service = QueryExecutionService(session)
        assert service.execute_query_as_csv(sql, "admin") == expected

    def test_percent_literal_runs_without_parameters(self, engine, session, make_user):
        make_user("alice")
        make_user("bob")
        seen = []

        def capture(conn, cursor, statement, parameters, context, executemany):
            seen.append(context.execution_options.get("no_parameters"))

        event.listen(engine, "before_cursor_execute", capture)
        try:
            csv_text = QueryExecutionService(session).execute_query_as_csv(
                "SELECT username FROM users WHERE username LIKE 'a%'", "admin"
            )
        finally:
            event.remove(engine, "before_cursor_execute", capture)

        assert csv_text == "username\nalice\n"
        assert seen[-1] is True

    def test_driver_errors_of_any_type_are_wrapped(self, session, monkeypatch):
        def broken_connection(*args, **kwargs):
            raise ValueError("unsupported format character")

        monkeypatch.setattr(session, "connection", broken_connection)
        service = QueryExecutionService(session)

        with pytest.raises(QueryExecutionError, match="unsupported format character"):
            service.execute_query_as_csv("SELECT 1", "admin")
