"""Unit tests for client views and the command line."""

from unittest.mock import Mock, patch

from client import views
from client.cli import build_parser, main, run
from client.messages import ApiError

STUDENT = {
    "id": 7,
    "name": "John Doe",
    "email": "john@x.com",
    "department": "CS",
    "createdAt": "2023-01-15T10:30:00",
    "updatedAt": "2023-01-16T08:00:00",
}


class TestViews:
    """Test cases for rendering."""

    def test_render_empty_list(self):
        assert views.render_list([]) == "No students found."

    def test_render_list(self):
        output = views.render_list([STUDENT])
        lines = output.splitlines()

        assert lines[0].split() == ["ID", "Name", "Email", "Department"]
        assert "john@x.com" in lines[2]
        assert len(lines) == 3

    def test_render_list_truncates_long_values(self):
        output = views.render_list([{**STUDENT, "name": "x" * 60}])

        assert "x" * 60 not in output
        assert "…" in output

    def test_render_detail(self):
        output = views.render_detail(STUDENT)

        assert "Name:       John Doe" in output
        assert "Created:    2023-01-15T10:30:00" in output
        assert "Updated:    2023-01-16T08:00:00" in output

    def test_merge_edit_carries_over_unset_fields(self):
        payload = views.merge_edit(STUDENT, {"name": "Johnny", "email": None})

        assert payload == {"name": "Johnny", "email": "john@x.com", "department": "CS"}

    def test_edit_form_sends_full_payload(self):
        client = Mock()
        client.get_one.return_value = STUDENT
        client.update.return_value = {**STUDENT, "department": "Math"}

        output = views.edit_form(client, 7, department="Math")

        client.update.assert_called_once_with(
            7, {"name": "John Doe", "email": "john@x.com", "department": "Math"}
        )
        assert "Math" in output


class TestCommandLine:
    """Test cases for command dispatch."""

    def test_list(self):
        client = Mock()
        client.list_all.return_value = [STUDENT]

        output = run(build_parser().parse_args(["list"]), client)

        assert "John Doe" in output
        client.list_by_department.assert_not_called()

    def test_list_by_department(self):
        client = Mock()
        client.list_by_department.return_value = []

        output = run(build_parser().parse_args(["list", "--department", "CS"]), client)

        assert output == "No students found."
        client.list_by_department.assert_called_once_with("CS")

    def test_create(self):
        client = Mock()
        client.create.return_value = STUDENT
        args = build_parser().parse_args(
            ["create", "--name", "John Doe", "--email", "john@x.com", "--department", "CS"]
        )

        run(args, client)

        client.create.assert_called_once_with(
            {"name": "John Doe", "email": "john@x.com", "department": "CS"}
        )

    def test_delete(self):
        client = Mock()

        output = run(build_parser().parse_args(["delete", "7"]), client)

        client.delete.assert_called_once_with(7)
        assert output == "Deleted student 7."

    def test_main_passes_token_and_reports_failure(self, capsys):
        with patch("client.cli.StudentApiClient") as client_cls:
            client_cls.return_value.get_one.side_effect = ApiError("Student not found.", 404)

            code = main(["--token", "abc", "show", "9"])

        assert code == 1
        assert client_cls.call_args.kwargs["storage"] == {"auth_token": "abc"}

    def test_main_success(self, capsys):
        with patch("client.cli.StudentApiClient") as client_cls:
            client_cls.return_value.get_one.return_value = STUDENT

            code = main(["show", "7"])

        assert code == 0
        assert "john@x.com" in capsys.readouterr().out
