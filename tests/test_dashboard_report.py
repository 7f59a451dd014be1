"""End-to-end tests for scripts/dashboard_report.py against a SQLite file."""

import json
from datetime import datetime, timezone
from decimal import Decimal
from uuid import uuid4

import pytest

from pulse_kernel.db.engine import create_tables, init_engine_from_url, reset_engine, session_scope
from pulse_modules.projects.orm import ProjectModel
from pulse_modules.resources.orm import ResourceAllocationModel, ResourceModel
from scripts.dashboard_report import main

ACTOR = uuid4()


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    monkeypatch.delenv("PULSE_DATABASE_URL", raising=False)
    monkeypatch.delenv("PULSE_LOG_LEVEL", raising=False)
    url = f"sqlite:///{tmp_path / 'pulse.db'}"

    init_engine_from_url(url)
    create_tables()
    with session_scope() as session:
        project = ProjectModel(name="Apollo", created_by_id=ACTOR)
        resource = ResourceModel(name="Grace", role="Engineer", created_by_id=ACTOR)
        session.add_all([project, resource])
        session.flush()
        session.add(ResourceAllocationModel(
            resource_id=resource.id,
            project_id=project.id,
            allocation_percentage=Decimal("40"),
            start_date=datetime(2000, 1, 1, tzinfo=timezone.utc),
            end_date=datetime(2100, 1, 1, tzinfo=timezone.utc),
            created_by_id=ACTOR,
        ))
    reset_engine()

    path = tmp_path / "pulse.yaml"
    path.write_text(f"database:\n  url: \"{url}\"\n")
    yield path
    reset_engine()


def test_resources_report(config_file, capsys):
    assert main(["--config", str(config_file), "resources"]) == 0

    report = json.loads(capsys.readouterr().out)
    (row,) = report["resources"]
    assert row["name"] == "Grace"
    assert row["utilization"] == "40.00"
    assert row["status"] == "PARTIALLY_ALLOCATED"
    assert row["activeProjectNames"] == ["Apollo"]
    assert report["stats"]["avgUtilization"] == 40


def test_team_stats_only(config_file, capsys):
    assert main(["--config", str(config_file), "resources", "--stats-only"]) == 0
    assert json.loads(capsys.readouterr().out)["totalResources"] == 1


def test_admin_dashboard(config_file, capsys):
    argv = ["--config", str(config_file), "dashboard", "--user-id", str(uuid4()), "--role", "admin"]
    assert main(argv) == 0

    snapshot = json.loads(capsys.readouterr().out)
    assert snapshot["projects"]["total"] == 1
    assert snapshot["filters"]["projects"][0]["name"] == "Apollo"


def test_unknown_project_reports_error(config_file, capsys):
    argv = [
        "--config", str(config_file),
        "project", "--user-id", str(uuid4()), "--project-id", str(uuid4()),
    ]
    assert main(argv) == 1
    assert "PROJECT_NOT_FOUND" in capsys.readouterr().err


def test_bad_config_reports_error(tmp_path, capsys):
    assert main(["--config", str(tmp_path / "absent.yaml"), "resources"]) == 1
    assert "ERROR" in capsys.readouterr().err


def test_naive_start_rejected(config_file):
    with pytest.raises(SystemExit):
        main([
            "--config", str(config_file),
            "dashboard", "--user-id", str(uuid4()), "--start", "2024-01-01T00:00:00",
        ])
