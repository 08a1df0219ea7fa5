# tests/test_export.py

from pathlib import Path

import pandas as pd

from services.export import (
    HEADER,
    export_tasks_to_csv,
    export_tasks_to_excel,
    import_task_drafts_from_csv,
)
from store.seed import demo_tasks


def test_csv_export_then_import_gives_drafts(tmp_path: Path) -> None:
    path = tmp_path / "tasks.csv"
    assert export_tasks_to_csv(demo_tasks(), path) == 3

    first_line = path.read_text(encoding="utf-8").splitlines()[0]
    assert first_line.split(",") == HEADER

    drafts = import_task_drafts_from_csv(path)
    assert [d["title"] for d in drafts] == ["Website Redesign", "Database Migration", "Prototype Testing"]
    assert "id" not in drafts[0]
    assert [s.title for s in drafts[0]["subtasks"]] == [
        "Create wireframes",
        "Design mockups",
        "Implement frontend",
    ]
    assert drafts[0]["subtasks"][0].completed is True
    assert drafts[2]["status"] == "Completed"
    assert drafts[1]["notes"] is None


def test_import_tolerates_bad_subtasks_column(tmp_path: Path) -> None:
    path = tmp_path / "bad.csv"
    path.write_text(
        "title,category,priority,due_date,subtasks\n"
        "Plan,Design,High,2025-05-01,{not json\n",
        encoding="utf-8",
    )
    drafts = import_task_drafts_from_csv(path)
    assert drafts[0]["title"] == "Plan"
    assert drafts[0]["subtasks"] == []


def test_imported_drafts_are_added_as_new_tasks(tmp_path: Path, session) -> None:
    path = tmp_path / "tasks.csv"
    export_tasks_to_csv(demo_tasks(), path)
    for draft in import_task_drafts_from_csv(path):
        session.add_task(draft)
    assert len(session.tasks) == 3
    assert {t.id for t in session.tasks.tasks}.isdisjoint({"1", "2", "3"})


def test_excel_export(tmp_path: Path) -> None:
    path = tmp_path / "tasks.xlsx"
    assert export_tasks_to_excel(demo_tasks(), path) == 3
    df = pd.read_excel(path)
    assert list(df.columns) == HEADER
    assert df["title"].tolist() == ["Website Redesign", "Database Migration", "Prototype Testing"]
