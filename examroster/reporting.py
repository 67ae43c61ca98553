import json
import os
from typing import Mapping

import pandas as pd

from .models import ExamScheduleResult, ExamSlotRoster, ScheduleReport, roster_to_dict


def timetable_frame(result: ExamScheduleResult) -> pd.DataFrame:
    records = []
    by_label = {s.label: s for s in result.time_slots}
    for label, courses in result.timetable.items():
        slot = by_label.get(label)
        for course in courses:
            records.append({
                "exam_id": course,
                "slot_label": label,
                "day": slot.day if slot else None,
                "slot": slot.slot if slot else None,
                "start": slot.start if slot else None,
                "end": slot.end if slot else None,
                "overflow": course in result.overflow,
            })
    return pd.DataFrame(records, columns=["exam_id", "slot_label", "day", "slot", "start", "end", "overflow"])


def conflicts_frame(result: ExamScheduleResult) -> pd.DataFrame:
    records = [
        {"student": d.student, "slot": d.slot, "courses": " ".join(d.courses), "extra_exams": len(d.courses) - 1}
        for d in result.conflict_details
    ]
    return pd.DataFrame(records, columns=["student", "slot", "courses", "extra_exams"])


def roster_frame(roster: Mapping[str, ExamSlotRoster]) -> pd.DataFrame:
    records = []
    for label, entry in roster.items():
        for sub, assigned in entry.assignments.items():
            records.append({
                "slot_label": label,
                "date": entry.date,
                "subslot": sub,
                "faculty": assigned[0].faculty if assigned else "",
                "courses": " ".join(entry.courses),
            })
    return pd.DataFrame(records, columns=["slot_label", "date", "subslot", "faculty", "courses"])


def faculty_load_frame(roster: Mapping[str, ExamSlotRoster]) -> pd.DataFrame:
    """Sub-slots invigilated per faculty, busiest first."""
    df = roster_frame(roster)
    df = df[df["faculty"] != ""]
    if df.empty:
        return pd.DataFrame(columns=["faculty", "subslots"])
    return (
        df.groupby("faculty").size().rename("subslots").reset_index()
        .sort_values(["subslots", "faculty"], ascending=[False, True])
        .reset_index(drop=True)
    )


def report_to_dict(report: ScheduleReport) -> dict:
    out = report.exams.to_dict()
    out["facultySchedule"] = roster_to_dict(report.roster)
    out["uncoveredSubslots"] = report.uncovered_subslots
    return out


def save_report(out_dir: str, report: ScheduleReport) -> None:
    os.makedirs(out_dir, exist_ok=True)
    timetable_frame(report.exams).to_csv(os.path.join(out_dir, "timetable.csv"), index=False)
    conflicts_frame(report.exams).to_csv(os.path.join(out_dir, "conflicts.csv"), index=False)
    roster_frame(report.roster).to_csv(os.path.join(out_dir, "invigilation.csv"), index=False)
    faculty_load_frame(report.roster).to_csv(os.path.join(out_dir, "faculty_load.csv"), index=False)
    with open(os.path.join(out_dir, "schedule.json"), "w", encoding="utf-8") as f:
        json.dump(report_to_dict(report), f, indent=2)
