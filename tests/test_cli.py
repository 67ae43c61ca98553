"""Smoke tests for the command-line entry point."""
import json
from pathlib import Path

from examroster.cli import main


def _write_inputs(tmp_path: Path):
    students = tmp_path / "students.csv"
    students.write_text(
        "RollNo,Name,Email,C1,C2\n"
        "1,Asha,a@uni.edu,CS101,MA101\n"
        "2,Ben,b@uni.edu,MA101,PH101\n"
    )
    courses = tmp_path / "courses.csv"
    courses.write_text("Course\nCS101\nMA101\nPH101\n")
    faculty = tmp_path / "faculty.csv"
    faculty.write_text(
        "Name,Email,9am-10am,10am-11am,11am-12pm,12pm-1pm,1pm-2pm,2pm-3pm,3pm-4pm,4pm-5pm\n"
        "Dr Rao,rao@uni.edu,yes,yes,yes,no,no,no,no,no\n"
    )
    dates = tmp_path / "dates.txt"
    dates.write_text("2026-12-01\n2026-12-02\n")
    return students, courses, faculty, dates


def test_cli_writes_outputs(tmp_path: Path, capsys) -> None:
    students, courses, faculty, dates = _write_inputs(tmp_path)
    out = tmp_path / "out"
    code = main([
        "--students", str(students), "--courses", str(courses),
        "--faculty", str(faculty), "--dates", str(dates), "--out-dir", str(out),
    ])
    assert code == 0
    assert "Student conflicts: 0" in capsys.readouterr().out
    data = json.loads((out / "schedule.json").read_text())
    placed = sorted(c for lst in data["timetable"].values() for c in lst)
    assert placed == ["CS101", "MA101", "PH101"]


def test_cli_generate_mode(capsys) -> None:
    code = main(["--generate", "30", "--n-courses", "8", "--n-faculty", "4",
                 "--days", "2", "--start-date", "2026-12-01"])
    assert code == 0
    assert "Courses: 8" in capsys.readouterr().out


def test_cli_reports_invalid_input(tmp_path: Path, capsys) -> None:
    students, _, _, _ = _write_inputs(tmp_path)
    code = main(["--students", str(students), "--days", "0"])
    assert code == 1
    assert "[ERROR]" in capsys.readouterr().err


def test_cli_missing_file(tmp_path: Path, capsys) -> None:
    code = main(["--stu", str(tmp_path / "missing.stu"), "--days", "1"])
    assert code == 1
    assert "not found" in capsys.readouterr().err
