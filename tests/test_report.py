"""
Tests for report aggregation and entry export.
"""

# SPDX-License-Identifier: MIT

import csv
import io
import json

import pendulum
import pytest

from ticktrack.model.report import GroupBy
from ticktrack.repository.entry import compute_duration_seconds
from ticktrack.service import report as report_service
from ticktrack.service.date import parse_date
from ticktrack.service.entry import log_entry
from ticktrack.service.project import create_project
from ticktrack.service.timer import start_timer
from ticktrack.template.entry import get_entry_template
from ticktrack.template.project import get_project_template


def make_entry(
    id,
    start,
    minutes=None,
    tags=None,
    project_id=None,
    billable=True,
):
    entry = get_entry_template()
    entry["id"] = id
    entry["start_time"] = start
    entry["end_time"] = start.add(minutes=minutes) if minutes is not None else None
    entry["tags"] = tags if tags is not None else []
    entry["project_id"] = project_id
    entry["billable"] = billable
    entry["duration_seconds"] = compute_duration_seconds(entry)
    return entry


def make_project(id, name, rate=None, currency="USD"):
    project = get_project_template()
    project["id"] = id
    project["name"] = name
    project["rate"] = rate
    project["currency"] = currency
    return project


@pytest.fixture
def monday() -> pendulum.DateTime:
    return pendulum.datetime(2026, 2, 23, 9, 0, tz="UTC")


def test_tag_grouping_puts_entry_in_every_tag_group(monday):
    """
    One entry tagged a and b yields two groups of one entry each, and no
    money amounts outside project grouping.

    Parameters
    ----------
    monday : pendulum.DateTime
        Start of the sample week.
    """
    entry = make_entry("ent_1", monday, minutes=60, tags=["a", "b"])

    report = report_service.generate_report([entry], GroupBy.TAG, {})

    assert [group["key"] for group in report["groups"]] == ["a", "b"]
    for group in report["groups"]:
        assert group["entry_count"] == 1
        assert group["total_seconds"] == 3600
        assert group["billable_amount"] is None
        assert group["currency"] is None
    assert report["total_seconds"] == 3600


def test_untagged_entries_share_a_group(monday):
    entries = [
        make_entry("ent_1", monday, minutes=30),
        make_entry("ent_2", monday.add(hours=1), minutes=30, tags=["x"]),
        make_entry("ent_3", monday.add(hours=2), minutes=30),
    ]

    report = report_service.generate_report(entries, GroupBy.TAG, {})

    assert [(g["key"], g["entry_count"]) for g in report["groups"]] == [
        ("untagged", 2),
        ("x", 1),
    ]


def test_project_grouping_with_amounts(monday):
    """
    Project groups carry the project name, and an amount only when the
    project has a rate.

    Parameters
    ----------
    monday : pendulum.DateTime
        Start of the sample week.
    """
    projects = {
        "prj_a": make_project("prj_a", "Acme", rate=100.0, currency="EUR"),
        "prj_b": make_project("prj_b", "Internal"),
    }
    entries = [
        make_entry("ent_1", monday, minutes=60, project_id="prj_a"),
        make_entry("ent_2", monday.add(hours=1), minutes=30, project_id="prj_a"),
        make_entry(
            "ent_3", monday.add(hours=2), minutes=30, project_id="prj_a", billable=False
        ),
        make_entry("ent_4", monday.add(hours=3), minutes=45, project_id="prj_b"),
        make_entry("ent_5", monday.add(hours=4), minutes=15),
        make_entry("ent_6", monday.add(hours=5), minutes=10, project_id="prj_gone"),
    ]

    report = report_service.generate_report(entries, GroupBy.PROJECT, projects)
    groups = {group["key"]: group for group in report["groups"]}

    assert list(groups) == ["Acme", "Internal", "No Project", "Unknown Project"]
    assert groups["Acme"]["total_seconds"] == 7200
    assert groups["Acme"]["billable_seconds"] == 5400
    assert groups["Acme"]["billable_amount"] == 150.0
    assert groups["Acme"]["currency"] == "EUR"
    assert groups["Acme"]["entry_count"] == 3
    assert groups["Internal"]["billable_amount"] is None
    assert groups["Internal"]["currency"] is None
    assert groups["No Project"]["billable_amount"] is None
    assert groups["Unknown Project"]["total_seconds"] == 600


def test_project_group_totals_add_up_but_tag_totals_may_not(monday):
    entries = [
        make_entry("ent_1", monday, minutes=60, tags=["a", "b"], project_id="prj_a"),
        make_entry("ent_2", monday.add(hours=2), minutes=30, tags=["a"]),
    ]
    projects = {"prj_a": make_project("prj_a", "Acme")}

    by_project = report_service.generate_report(entries, GroupBy.PROJECT, projects)
    by_tag = report_service.generate_report(entries, GroupBy.TAG, projects)

    assert sum(g["total_seconds"] for g in by_project["groups"]) == by_project[
        "total_seconds"
    ]
    assert by_tag["total_seconds"] == by_project["total_seconds"] == 5400
    assert sum(g["total_seconds"] for g in by_tag["groups"]) == 9000


def test_running_entry_counts_as_zero(monday):
    entries = [
        make_entry("ent_1", monday, minutes=60),
        make_entry("ent_2", monday.add(hours=2)),
    ]

    report = report_service.generate_report(entries, GroupBy.PROJECT, {})

    assert report["total_seconds"] == 3600
    assert report["groups"][0]["entry_count"] == 2
    assert report["groups"][0]["total_seconds"] == 3600


def test_non_billable_time_is_excluded_from_billable_seconds(monday):
    entries = [
        make_entry("ent_1", monday, minutes=60, billable=False),
        make_entry("ent_2", monday.add(hours=2), minutes=30),
    ]

    report = report_service.generate_report(entries, GroupBy.DAY, {})

    assert report["total_seconds"] == 5400
    assert report["billable_seconds"] == 1800


def test_day_grouping_uses_utc_start_date(monday):
    entries = [
        make_entry("ent_1", monday, minutes=60),
        make_entry("ent_2", monday.add(hours=15, minutes=30), minutes=60),
        make_entry("ent_3", monday.add(days=1), minutes=60),
    ]

    report = report_service.generate_report(entries, GroupBy.DAY, {})

    assert [(g["key"], g["entry_count"]) for g in report["groups"]] == [
        ("2026-02-23", 1),
        ("2026-02-24", 2),
    ]


def test_week_grouping_keys_on_iso_week_monday(monday):
    entries = [
        make_entry("ent_1", monday.add(days=2), minutes=60),
        make_entry("ent_2", monday.add(days=6, hours=10), minutes=60),
        make_entry("ent_3", monday.add(days=7), minutes=60),
    ]

    report = report_service.generate_report(entries, GroupBy.WEEK, {})

    assert [(g["key"], g["entry_count"]) for g in report["groups"]] == [
        ("Week of 2026-02-23", 2),
        ("Week of 2026-03-02", 1),
    ]


def test_period_falls_back_to_entry_bounds(monday):
    entries = [
        make_entry("ent_1", monday, minutes=60),
        make_entry("ent_2", monday.add(hours=3), minutes=30),
    ]

    report = report_service.generate_report(entries, GroupBy.PROJECT, {})

    assert report["period"] == {
        "from": monday,
        "to": monday.add(hours=3, minutes=30),
    }


def test_period_prefers_explicit_bounds(monday):
    entries = [make_entry("ent_1", monday, minutes=60)]
    date_range = {"from": monday.start_of("month")}

    report = report_service.generate_report(entries, GroupBy.PROJECT, {}, date_range)

    assert report["period"] == {
        "from": monday.start_of("month"),
        "to": monday.add(minutes=60),
    }


def test_period_of_running_last_entry_ends_at_its_start(monday):
    entries = [
        make_entry("ent_1", monday, minutes=60),
        make_entry("ent_2", monday.add(hours=2)),
    ]

    report = report_service.generate_report(entries, GroupBy.PROJECT, {})

    assert report["period"]["to"] == monday.add(hours=2)


def test_empty_report():
    report = report_service.generate_report([], GroupBy.TAG, {})

    assert report == {
        "period": {"from": None, "to": None},
        "total_seconds": 0,
        "billable_seconds": 0,
        "groups": [],
    }


@pytest.mark.parametrize(
    ("billable_seconds", "rate", "expected"),
    [
        (5400, 100.0, 150.0),
        (1800, 0.01, 0.01),
        (1000, 33.33, 9.26),
        (3600, 0.0, 0.0),
    ],
)
def test_billable_amount_rounds_half_up_to_cents(billable_seconds, rate, expected):
    assert report_service.billable_amount(billable_seconds, rate) == expected


def test_build_report_from_repository(repo, reference):
    """
    The repository-backed report resolves project names and defaults to
    project grouping.

    Parameters
    ----------
    repo : YamlRepository
        Empty repository.
    reference : pendulum.DateTime
        Fixed reference instant.
    """
    create_project(repo, "Acme", rate=80.0)
    log_entry(repo, from_time=reference.subtract(hours=4), duration=3600, project="Acme")
    log_entry(repo, from_time=reference.subtract(hours=2), duration=1800)
    start_timer(repo, at=reference)

    report = report_service.build_report(repo)

    assert [group["key"] for group in report["groups"]] == ["Acme", "No Project"]
    assert report["groups"][0]["billable_amount"] == 80.0
    assert report["groups"][0]["currency"] == "USD"
    assert report["total_seconds"] == 5400
    assert report["period"]["from"] == reference.subtract(hours=4)


def test_build_report_applies_filters(repo, reference):
    log_entry(repo, from_time=reference.subtract(days=3), duration=600, tags=["old"])
    log_entry(repo, from_time=reference.subtract(hours=1), duration=600, tags=["new"])

    report = report_service.build_report(
        repo, {"from": reference.subtract(days=1), "group_by": GroupBy.TAG}
    )

    assert [group["key"] for group in report["groups"]] == ["new"]
    assert report["period"]["from"] == reference.subtract(days=1)


def test_export_csv(repo, reference):
    create_project(repo, "Acme, Inc")
    log_entry(
        repo,
        from_time=parse_date("2026-02-24T09:00:00Z"),
        duration=3600,
        description='Fix "login", again',
        project="Acme, Inc",
        tags=["bug", "urgent"],
    )
    log_entry(
        repo,
        from_time=parse_date("2026-02-24T11:00:00Z"),
        duration=600,
        billable=False,
    )

    result = report_service.export_entries(repo, {})

    assert result["format"] == "csv"
    assert result["entry_count"] == 2
    rows = list(csv.reader(io.StringIO(result["data"])))
    assert rows[0] == [
        "id",
        "description",
        "project",
        "start_time",
        "end_time",
        "duration_seconds",
        "tags",
        "billable",
    ]
    assert rows[1][1:] == [
        'Fix "login", again',
        "Acme, Inc",
        "2026-02-24T09:00:00.000Z",
        "2026-02-24T10:00:00.000Z",
        "3600",
        "bug; urgent",
        "true",
    ]
    assert rows[2][2] == ""
    assert rows[2][7] == "false"


def test_export_json(repo, reference):
    create_project(repo, "Acme")
    entry = log_entry(
        repo, from_time=reference.subtract(hours=1), duration=600, project="Acme"
    )
    log_entry(repo, from_time=reference.subtract(days=10), duration=600)

    result = report_service.export_entries(
        repo, {"format": "json", "from": reference.subtract(days=1)}
    )

    assert result["entry_count"] == 1
    assert json.loads(result["data"]) == [
        {
            "id": entry["id"],
            "description": "",
            "project": "Acme",
            "start_time": "2026-02-25T13:30:00.000Z",
            "end_time": "2026-02-25T13:40:00.000Z",
            "duration_seconds": 600,
            "tags": [],
            "billable": True,
        }
    ]
