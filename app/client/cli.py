"""
Command line front end for the students API.

    student-records list [--department DEPT]
    student-records show ID
    student-records create --name N --email E --department D
    student-records edit ID [--name N] [--email E] [--department D]
    student-records delete ID
"""

import argparse
import logging
import sys
from typing import List, Optional

from client.api import TOKEN_KEY, StudentApiClient
from client.messages import ApiError
from client import views


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="student-records", description="Manage student records."
    )
    parser.add_argument("--base-url", help="API base URL (default: API_BASE_URL)")
    parser.add_argument("--token", help="Bearer token sent with every request")
    commands = parser.add_subparsers(dest="command", required=True)

    list_cmd = commands.add_parser("list", help="List students")
    list_cmd.add_argument("--department", help="Only this department (exact match)")

    show_cmd = commands.add_parser("show", help="Show one student")
    show_cmd.add_argument("student_id", type=int)

    create_cmd = commands.add_parser("create", help="Create a student")
    create_cmd.add_argument("--name", required=True)
    create_cmd.add_argument("--email", required=True)
    create_cmd.add_argument("--department", required=True)

    edit_cmd = commands.add_parser("edit", help="Edit a student")
    edit_cmd.add_argument("student_id", type=int)
    edit_cmd.add_argument("--name")
    edit_cmd.add_argument("--email")
    edit_cmd.add_argument("--department")

    delete_cmd = commands.add_parser("delete", help="Delete a student")
    delete_cmd.add_argument("student_id", type=int)

    return parser


def _notify(message: str) -> None:
    print(f"Error: {message}", file=sys.stderr)


def run(args: argparse.Namespace, client: StudentApiClient) -> str:
    """Dispatch one parsed command and return the text to print."""
    if args.command == "list":
        if args.department is not None:
            return views.render_list(client.list_by_department(args.department))
        return views.render_list(client.list_all())
    if args.command == "show":
        return views.render_detail(client.get_one(args.student_id))
    if args.command == "create":
        return views.create_form(client, args.name, args.email, args.department)
    if args.command == "edit":
        return views.edit_form(
            client,
            args.student_id,
            name=args.name,
            email=args.email,
            department=args.department,
        )
    if args.command == "delete":
        client.delete(args.student_id)
        return f"Deleted student {args.student_id}."
    raise RuntimeError(f"Unexpected command: {args.command}")


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(level=logging.WARNING)
    args = build_parser().parse_args(argv)

    storage = {TOKEN_KEY: args.token} if args.token else {}
    client = StudentApiClient(base_url=args.base_url, storage=storage, notify=_notify)

    try:
        print(run(args, client))
    except ApiError:
        # already reported through _notify
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
