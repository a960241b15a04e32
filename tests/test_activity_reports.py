"""
Test: admin dashboard helpers — metrics, charts, filtering, CSV export.
"""
import csv
import io
from datetime import date, datetime, timezone

import pytest

from app.services.activity_reports import (
    CSV_HEADERS,
    activities_to_csv,
    compute_activity_metrics,
    distinct_types,
    filter_activities,
    monthly_activity,
    status_distribution,
)


def _at(y, m, d, hh=12, mm=0):
    return datetime(y, m, d, hh, mm, tzinfo=timezone.utc)


class TestMetrics:
    def test_counts(self, make_activity):
        acts = [
            make_activity(status="approved"),
            make_activity(status="approved"),
            make_activity(status="pending"),
            make_activity(status="rejected"),
        ]
        assert compute_activity_metrics(acts) == {"total": 4, "approved": 2, "pending": 1, "rejected": 1}

    def test_empty(self):
        assert compute_activity_metrics([]) == {"total": 0, "approved": 0, "pending": 0, "rejected": 0}


class TestStatusDistribution:
    def test_empty_has_no_slices(self):
        assert status_distribution([]) == []

    def test_percentages(self, make_activity):
        acts = [make_activity(status="approved")] * 2 + [make_activity(status="pending")] * 1 + [
            make_activity(status="rejected")
        ]
        slices = {s["name"]: s["value"] for s in status_distribution(acts)}
        assert slices == {"Approved": 50, "Pending": 25, "Rejected": 25}


class TestMonthlyActivity:
    def test_six_months_oldest_first(self):
        months = [m["month"] for m in monthly_activity([], today=date(2026, 3, 15))]
        assert months == ["Oct", "Nov", "Dec", "Jan", "Feb", "Mar"]

    def test_counts_submissions_and_approvals(self, make_activity):
        acts = [
            make_activity(status="approved", submitted_at=_at(2026, 3, 2)),
            make_activity(status="pending", submitted_at=_at(2026, 3, 20)),
            make_activity(status="approved", submitted_at=_at(2026, 1, 5)),
            make_activity(status="rejected", submitted_at=_at(2025, 6, 5)),  # outside window
        ]
        series = {m["month"]: m for m in monthly_activity(acts, today=date(2026, 3, 31))}
        assert series["Mar"] == {"month": "Mar", "submissions": 2, "approvals": 1}
        assert series["Jan"] == {"month": "Jan", "submissions": 1, "approvals": 1}
        assert series["Feb"]["submissions"] == 0
        assert "Jun" not in series

    def test_iso_strings_are_accepted(self):
        acts = [{"status": "approved", "submitted_at": "2026-02-10T08:00:00Z"}]
        series = {m["month"]: m for m in monthly_activity(acts, today=date(2026, 2, 28))}
        assert series["Feb"]["approvals"] == 1


class TestDistinctTypes:
    def test_first_seen_order_without_blanks(self, make_activity):
        acts = [
            make_activity(type="workshop"),
            make_activity(type="project"),
            make_activity(type="workshop"),
            make_activity(type=""),
        ]
        assert distinct_types(acts) == ["workshop", "project"]


class TestFilterActivities:
    @pytest.fixture
    def acts(self, make_activity):
        return [
            make_activity(type="project", status="approved", submitted_at=_at(2026, 3, 1, 9)),
            make_activity(type="quiz", status="pending", submitted_at=_at(2026, 3, 10, 23, 30)),
            make_activity(type="project", status="rejected", submitted_at=_at(2026, 3, 11, 0, 5)),
        ]

    def test_all_means_no_filter(self, acts):
        assert filter_activities(acts, status="all", activity_type="all") == acts
        assert filter_activities(acts) == acts

    def test_status_and_type(self, acts):
        out = filter_activities(acts, status="approved", activity_type="project")
        assert [a["id"] for a in out] == [acts[0]["id"]]

    def test_type_filter_matches_stored_form(self, make_activity):
        acts = [make_activity(type="lab_work"), make_activity(type="project")]
        out = filter_activities(acts, activity_type="Lab Work")
        assert [a["id"] for a in out] == [acts[0]["id"]]

    def test_date_to_includes_whole_day(self, acts):
        out = filter_activities(acts, date_to=date(2026, 3, 10))
        assert [a["id"] for a in out] == [acts[0]["id"], acts[1]["id"]]

    def test_date_from_starts_at_midnight(self, acts):
        out = filter_activities(acts, date_from=date(2026, 3, 10))
        assert [a["id"] for a in out] == [acts[1]["id"], acts[2]["id"]]

    def test_date_range(self, acts):
        out = filter_activities(acts, date_from=date(2026, 3, 10), date_to=date(2026, 3, 10))
        assert [a["id"] for a in out] == [acts[1]["id"]]


class TestCsvExport:
    def test_header_only_for_empty_list(self):
        rows = list(csv.reader(io.StringIO(activities_to_csv([]))))
        assert rows == [CSV_HEADERS]

    def test_quotes_and_commas_survive(self, make_activity):
        act = make_activity(
            title='Won "Best Hack", Round 2',
            type="hackathon",
            status="approved",
            submitted_at=_at(2026, 3, 1, 9),
            reviewed_by="Dr. Rajesh Gupta",
            reviewed_at=_at(2026, 3, 2, 10),
        )
        rows = list(csv.reader(io.StringIO(activities_to_csv([act]))))
        assert rows[0] == CSV_HEADERS
        row = dict(zip(CSV_HEADERS, rows[1]))
        assert row["Title"] == 'Won "Best Hack", Round 2'
        assert row["Status"] == "approved"
        assert row["Submitted At"] == "2026-03-01T09:00:00+00:00"
        assert row["Reviewed By"] == "Dr. Rajesh Gupta"
        assert row["Reviewed At"] == "2026-03-02T10:00:00+00:00"

    def test_unreviewed_fields_are_blank(self, make_activity):
        rows = list(csv.reader(io.StringIO(activities_to_csv([make_activity(status="pending")]))))
        row = dict(zip(CSV_HEADERS, rows[1]))
        assert row["Reviewed By"] == ""
        assert row["Reviewed At"] == ""
