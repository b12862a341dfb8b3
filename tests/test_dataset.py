from decimal import Decimal

from culinary_jobs.dataset import DatasetSink
from culinary_jobs.models import Contact, Job


def test_push_appends_json_lines(tmp_path):
    sink = DatasetSink(tmp_path / "out" / "jobs.jsonl")
    job = Job(
        title="Pastry Chef",
        company="Luna Bistro",
        salary_min=Decimal("22.50"),
        contacts=[Contact(email="ana@luna.com", first_name="Ana")],
    )

    assert sink.push([job]) == 1
    assert sink.push([job, job]) == 2

    rows = sink.read()
    assert len(rows) == 3
    assert rows[0]["title"] == "Pastry Chef"
    assert rows[0]["salary_min"] == 22.5
    assert rows[0]["salary_period"] == "yearly"
    assert rows[0]["emails"] == [{
        "email": "ana@luna.com", "firstName": "Ana", "lastName": None,
        "position": None, "confidence": None, "company": None, "domain": None,
    }]


def test_push_nothing(tmp_path):
    sink = DatasetSink(tmp_path / "jobs.jsonl")
    assert sink.push([]) == 0
    assert sink.read() == []


def test_unwritable_path_returns_zero(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x")
    sink = DatasetSink(blocker / "jobs.jsonl")
    assert sink.push([Job(title="Cook")]) == 0
