"""
Tests for the lenient enum parsing used on request fields.
"""

from teamdash.core.enums import Priority, Role, TaskStatus, parse_enum_or_default


class TestParseEnumOrDefault:
    """Tests for parse_enum_or_default()."""

    def test_exact_name(self):
        assert parse_enum_or_default(TaskStatus, "IN_PROGRESS", None) is TaskStatus.IN_PROGRESS

    def test_name_is_case_insensitive(self):
        assert parse_enum_or_default(Priority, "high", Priority.MEDIUM) is Priority.HIGH
        assert parse_enum_or_default(Role, " Manager ", Role.EMPLOYEE) is Role.MANAGER

    def test_member_passes_through(self):
        assert parse_enum_or_default(Priority, Priority.LOW, Priority.MEDIUM) is Priority.LOW

    def test_missing_or_blank_returns_default(self):
        assert parse_enum_or_default(Priority, None, Priority.MEDIUM) is Priority.MEDIUM
        assert parse_enum_or_default(Priority, "   ", Priority.MEDIUM) is Priority.MEDIUM

    def test_unknown_returns_default(self):
        """Unknown values never raise."""
        assert parse_enum_or_default(Role, "ADMIN", Role.EMPLOYEE) is Role.EMPLOYEE
        assert parse_enum_or_default(TaskStatus, "DONE", None) is None
