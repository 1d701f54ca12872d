"""Tests for the audit logger."""

from homeschool_tracker.audit import AuditLogger
from homeschool_tracker.models import AuditEventBuilder, AuditEventType


def added(entity_id):
    return AuditEventBuilder.entity_changed(AuditEventType.STUDENT_ADDED, "student", entity_id)


class TestAuditLogger:
    """Tests for structured audit logging and history."""

    def test_log_returns_true(self):
        """Test a logged event reports success."""
        assert AuditLogger().log(added("s1")) is True

    def test_recent_events_newest_first(self):
        """Test history is returned newest first."""
        audit_logger = AuditLogger()
        for i in range(3):
            audit_logger.log(added(f"s{i}"))
        assert [e.entity_id for e in audit_logger.get_recent_events()] == ["s2", "s1", "s0"]
        assert len(audit_logger.get_recent_events(limit=2)) == 2

    def test_history_is_bounded(self):
        """Test only the newest events are kept."""
        audit_logger = AuditLogger(history_size=2)
        for i in range(5):
            audit_logger.log(added(f"s{i}"))
        assert [e.entity_id for e in audit_logger.get_recent_events()] == ["s4", "s3"]

    def test_events_by_entity(self):
        """Test filtering by entity type and id."""
        audit_logger = AuditLogger()
        audit_logger.log(added("s1"))
        audit_logger.log(added("s2"))
        audit_logger.log(AuditEventBuilder.state_save_failed("s1", OSError("disk full")))
        events = audit_logger.get_events_by_entity("student", "s1")
        assert len(events) == 1

    def test_clear(self):
        """Test clearing the history."""
        audit_logger = AuditLogger()
        audit_logger.log(added("s1"))
        audit_logger.clear()
        assert audit_logger.get_recent_events() == []
