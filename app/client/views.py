"""Text views over the students API: list, detail, create and edit."""

from typing import Dict, Iterable, Optional

from client.api import StudentApiClient

EDITABLE_FIELDS = ("name", "email", "department")

# (key, title, width)
COLUMNS = (
    ("id", "ID", 6),
    ("name", "Name", 24),
    ("email", "Email", 30),
    ("department", "Department", 20),
)


def _cell(value, width: int) -> str:
    text = "" if value is None else str(value)
    if len(text) > width:
        text = text[: width - 1] + "…"
    return text.ljust(width)


def render_list(students: Iterable[dict]) -> str:
    """Render students as a fixed-width table."""
    students = list(students)
    if not students:
        return "No students found."

    header = " ".join(_cell(title, width) for _, title, width in COLUMNS)
    lines = [header, "-" * len(header)]
    for student in students:
        lines.append(" ".join(_cell(student.get(key), width) for key, _, width in COLUMNS))
    return "\n".join(line.rstrip() for line in lines)


def render_detail(student: dict) -> str:
    """Render one student with labelled fields."""
    rows = [
        ("ID", student.get("id")),
        ("Name", student.get("name")),
        ("Email", student.get("email")),
        ("Department", student.get("department")),
        ("Created", student.get("createdAt")),
        ("Updated", student.get("updatedAt")),
    ]
    return "\n".join(f"{label + ':':<12}{value}" for label, value in rows)


def merge_edit(current: dict, changes: Dict[str, Optional[str]]) -> Dict[str, str]:
    """Build a full replacement payload; unset fields keep their current value."""
    return {
        field: changes[field] if changes.get(field) is not None else current.get(field)
        for field in EDITABLE_FIELDS
    }


def create_form(client: StudentApiClient, name: str, email: str, department: str) -> str:
    student = client.create({"name": name, "email": email, "department": department})
    return render_detail(student)


def edit_form(client: StudentApiClient, student_id: int, **changes: Optional[str]) -> str:
    current = client.get_one(student_id)
    student = client.update(student_id, merge_edit(current, changes))
    return render_detail(student)
