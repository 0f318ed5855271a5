"""Tests for roster week and staff stores."""

from datetime import date

import pytest

from rosterhelper.analysis.conflict_analyzer import ConflictAnalyzer
from rosterhelper.domain.models import (
    DayAvailability,
    Highlight,
    LeaveRequest,
    LeaveStatus,
    StaffMember,
)
from rosterhelper.roster.builder import (
    assign_staff,
    new_roster_week,
    set_leave_status,
    submit_leave_request,
)
from rosterhelper.storage import (
    InMemoryRosterStore,
    JsonRosterStore,
    StaffNotFoundError,
    StorageError,
    WeekNotFoundError,
)

START = date(2024, 1, 16)


def create_test_staff(id: str, ideal_shifts: int = 5) -> StaffMember:
    """Helper to create test staff."""
    return StaffMember(id=id, first_name=f"Staff {id}", ideal_shifts=ideal_shifts)


@pytest.fixture(params=["memory", "json"])
def store(request, tmp_path):
    """Each store type, flagging weeks on save."""
    if request.param == "memory":
        return InMemoryRosterStore(analyzer=ConflictAnalyzer())
    return JsonRosterStore(tmp_path / "roster.json", analyzer=ConflictAnalyzer())


class TestRosterWeekRepository:
    """Behaviour shared by every store."""

    def test_load_provisions_missing_week(self, store):
        week = store.load_roster_week(START)
        assert week.start_date == START
        assert len(week.days) == 7
        assert store.find_roster_week(START).id == week.id

    def test_load_returns_existing_week(self, store):
        first = store.load_roster_week(START)
        second = store.load_roster_week(START)
        assert first.id == second.id
        assert len(store.load_all_roster_weeks()) == 1

    def test_find_missing_week(self, store):
        with pytest.raises(WeekNotFoundError):
            store.find_roster_week(START)

    def test_load_by_offset(self, store):
        week = store.load_roster_week_by_offset(54)
        assert week.start_date == START
        assert week.week_offset == 54

    def test_weeks_listed_by_start_date(self, store):
        store.load_roster_week(date(2024, 1, 30))
        store.load_roster_week(START)
        starts = [w.start_date for w in store.load_all_roster_weeks()]
        assert starts == [START, date(2024, 1, 30)]

    def test_save_reflags_week(self, store):
        x = create_test_staff("X")
        store.save_staff_member(x)
        week = store.load_roster_week(START)
        assign_staff(week.days[0].rows[0].early, x)
        assign_staff(week.days[0].rows[1].mid, x)

        store.save_roster_week(week)

        saved = store.find_roster_week(START)
        assert saved.days[0].rows[0].early.flag == Highlight.DUPLICATE
        assert saved.days[0].rows[1].mid.flag == Highlight.DUPLICATE

    def test_save_uses_current_staff(self, store):
        x = create_test_staff("X")
        store.save_staff_member(x)
        week = store.load_roster_week(START)
        assign_staff(week.days[1].rows[0].mid, x)
        store.save_roster_week(week)
        assert store.find_roster_week(START).days[1].rows[0].mid.flag == Highlight.NONE

        x.availability[1] = DayAvailability(early=False, mid=False, late=False)
        store.save_staff_member(x)
        store.save_roster_week(store.find_roster_week(START))

        assert store.find_roster_week(START).days[1].rows[0].mid.flag == Highlight.PREF_REFUSE

    def test_save_all_roster_weeks(self, store):
        x = create_test_staff("X")
        store.save_staff_member(x)
        first = store.load_roster_week(START)
        second = store.load_roster_week(date(2024, 1, 23))
        assign_staff(first.days[0].rows[0].early, x)
        assign_staff(first.days[0].rows[1].late, x)
        second.is_live = True

        store.save_all_roster_weeks([second, first])

        weeks = store.load_all_roster_weeks()
        assert [w.start_date for w in weeks] == [START, date(2024, 1, 23)]
        assert weeks[0].days[0].rows[0].early.flag == Highlight.DUPLICATE
        assert weeks[1].is_live

    def test_save_all_adds_new_weeks(self, store):
        store.save_all_roster_weeks([new_roster_week(START)])
        assert store.find_roster_week(START).start_date == START

    def test_change_day_row_count(self, store):
        week = store.load_roster_week(START)
        day_id = week.days[3].id

        day, is_live = store.change_day_row_count(START, day_id, "+")

        assert len(day.rows) == 5
        assert is_live is False
        assert len(store.find_roster_week(START).days[3].rows) == 5


class TestStaffRepository:
    """Staff persistence shared by every store."""

    def test_get_staff_by_id(self, store):
        store.save_staff_member(create_test_staff("A"))
        assert store.get_staff_by_id("A").first_name == "Staff A"

    def test_unknown_staff(self, store):
        with pytest.raises(StaffNotFoundError) as exc_info:
            store.get_staff_by_id("missing")
        assert exc_info.value.staff_id == "missing"

    def test_deleted_staff_hidden(self, store):
        gone = create_test_staff("B")
        gone.is_deleted = True
        store.save_staff_member(create_test_staff("A"))
        store.save_staff_member(gone)

        assert [s.id for s in store.load_all_staff()] == ["A"]
        with pytest.raises(StaffNotFoundError):
            store.get_staff_by_id("B")

    def test_delete_staff_by_id(self, store):
        store.save_staff_member(create_test_staff("A"))
        store.save_staff_member(create_test_staff("B"))

        store.delete_staff_by_id("A")

        assert [s.id for s in store.load_all_staff()] == ["B"]
        with pytest.raises(StaffNotFoundError):
            store.get_staff_by_id("A")

    def test_delete_unknown_staff(self, store):
        with pytest.raises(StaffNotFoundError):
            store.delete_staff_by_id("missing")

    def test_deleted_staff_still_flagged_duplicate(self, store):
        x = create_test_staff("X")
        store.save_staff_member(x)
        week = store.load_roster_week(START)
        assign_staff(week.days[0].rows[0].early, x)
        assign_staff(week.days[0].rows[0].late, x)

        store.delete_staff_by_id("X")
        store.save_roster_week(week)

        # Duplicate detection works from assignments alone
        assert store.find_roster_week(START).days[0].rows[0].early.flag == Highlight.DUPLICATE
        assert store.load_all_staff() == []

    def test_get_staff_by_leave_request_id(self, store):
        x = create_test_staff("X")
        request = submit_leave_request(x, date(2024, 1, 17), date(2024, 1, 19))
        store.save_staff_member(x)
        store.save_staff_member(create_test_staff("Y"))

        owner = store.get_staff_by_leave_request_id(request.id)

        assert owner is not None
        assert owner.id == "X"
        assert store.get_staff_by_leave_request_id("missing") is None

    def test_leave_owner_lookup_skips_deleted_staff(self, store):
        x = create_test_staff("X")
        request = submit_leave_request(x, date(2024, 1, 17), date(2024, 1, 19))
        store.save_staff_member(x)
        store.delete_staff_by_id("X")

        assert store.get_staff_by_leave_request_id(request.id) is None

    def test_approved_leave_flags_on_save(self, store):
        x = create_test_staff("X")
        request = submit_leave_request(x, date(2024, 1, 17), date(2024, 1, 19))
        set_leave_status(x, request.id, LeaveStatus.APPROVED)
        store.save_staff_member(x)
        week = store.load_roster_week(START)
        assign_staff(week.days[1].rows[0].mid, x)

        store.save_roster_week(week)

        assert store.find_roster_week(START).days[1].rows[0].mid.flag == Highlight.LEAVE_CONFLICT

    def test_save_replaces_existing(self, store):
        staff = create_test_staff("A", ideal_shifts=2)
        store.save_staff_member(staff)
        staff.ideal_shifts = 4
        store.save_staff_member(staff)

        assert len(store.load_all_staff()) == 1
        assert store.get_staff_by_id("A").ideal_shifts == 4


class TestJsonRosterStore:
    """File-specific behaviour of the JSON store."""

    def test_survives_reopen(self, tmp_path):
        path = tmp_path / "roster.json"
        leave = LeaveRequest(
            start_date=date(2024, 1, 17),
            end_date=date(2024, 1, 18),
            status=LeaveStatus.APPROVED,
        )
        x = StaffMember(id="X", first_name="Xavier", ideal_shifts=3, leave_requests=[leave])
        store = JsonRosterStore(path, analyzer=ConflictAnalyzer())
        store.save_staff_member(x)
        week = store.load_roster_week(START)
        assign_staff(week.days[1].rows[0].early, x)
        week.days[4].amelia_open = True
        store.save_roster_week(week)

        reopened = JsonRosterStore(path)
        loaded = reopened.find_roster_week(START)

        assert loaded.to_dict() == week.to_dict()
        assert loaded.days[1].rows[0].early.flag == Highlight.LEAVE_CONFLICT
        assert reopened.get_staff_by_id("X") == x

    def test_missing_file_is_empty(self, tmp_path):
        store = JsonRosterStore(tmp_path / "absent.json")
        assert store.load_all_roster_weeks() == []
        assert store.load_all_staff() == []

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "roster.json"
        path.write_text("{not json")
        store = JsonRosterStore(path)

        with pytest.raises(StorageError):
            store.load_all_roster_weeks()

    @pytest.mark.parametrize(
        "content",
        [
            "[]",
            "42",
            '{"weeks": null, "staff": []}',
            '{"weeks": [], "staff": null}',
            '{"weeks": [1], "staff": []}',
            '{"weeks": [], "staff": ["A"]}',
        ],
    )
    def test_wrong_document_shape(self, tmp_path, content):
        path = tmp_path / "roster.json"
        path.write_text(content)
        store = JsonRosterStore(path)

        with pytest.raises(StorageError):
            store.load_all_roster_weeks()
        with pytest.raises(StorageError):
            store.save_roster_week(new_roster_week(START))
        with pytest.raises(StorageError):
            store.save_staff_member(create_test_staff("A"))

    def test_malformed_nested_week(self, tmp_path):
        path = tmp_path / "roster.json"
        path.write_text(
            '{"weeks": [{"id": "w", "start_date": "2024-01-16", '
            '"days": [{"id": "d", "rows": [{"id": "r", "slots": []}]}]}], "staff": []}'
        )
        store = JsonRosterStore(path)

        with pytest.raises(StorageError):
            store.find_roster_week(START)

    def test_malformed_week(self, tmp_path):
        path = tmp_path / "roster.json"
        path.write_text('{"weeks": [{"start_date": "2024-01-16"}], "staff": []}')
        store = JsonRosterStore(path)

        with pytest.raises(StorageError):
            store.find_roster_week(START)

    def test_without_analyzer_flags_untouched(self, tmp_path):
        store = JsonRosterStore(tmp_path / "roster.json")
        week = store.load_roster_week(START)
        week.days[0].rows[0].early.flag = Highlight.DUPLICATE
        store.save_roster_week(week)

        assert store.find_roster_week(START).days[0].rows[0].early.flag == Highlight.DUPLICATE
