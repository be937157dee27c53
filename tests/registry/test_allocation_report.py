import json

from typetag.errors import ChangedIDWarning, DuplicateIDError
from typetag.registry.allocation_report import AllocationReport
from typetag.registry.registry import Assignment


def test_clean_report():
    report = AllocationReport(source="types.txt", assignments=[Assignment("A", 1)])
    assert report.is_valid()
    assert report.exit_code() == 0
    assert report.summary() == "types.txt: 1 type(s), 0 error(s), 0 warning(s)"


def test_report_with_error_and_warning():
    report = AllocationReport(
        source="types.txt",
        assignments=[Assignment("A", 7)],
        warnings=[ChangedIDWarning("A", 5, 7)],
        error=DuplicateIDError(7, "A", "B"),
    )
    assert not report.is_valid()
    assert report.exit_code() == 1

    data = json.loads(report.to_json())
    assert data["types"] == [{"name": "A", "id": 7}]
    assert data["summary"] == {"error": 1, "warn": 1}
    kinds = [i["kind"] for i in data["issues"]]
    assert kinds == ["DuplicateIDError", "ChangedIDWarning"]
    assert data["issues"][1]["old_id"] == 5

    text = report.render_text_report()
    assert "type id 7 duplicated: A and B" in text
    assert "type A updated: 5 -> 7" in text
