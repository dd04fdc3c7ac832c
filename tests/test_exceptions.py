"""Tests for the exception hierarchy."""

from training_journal.exceptions import (
    DatabaseError,
    EntryNotFoundError,
    ErrorCode,
    InvalidDateError,
    RiskNotFoundError,
    RiskPersistenceError,
    TrainingJournalError,
    ValidationError,
)


class TestExceptions:
    """Tests for codes, status mapping and serialization."""

    def test_base_to_dict(self):
        error = TrainingJournalError("boom")

        assert error.status_code == 500
        assert error.to_dict() == {"error": {"code": "INTERNAL_ERROR", "message": "boom"}}

    def test_invalid_date(self):
        error = InvalidDateError("2024-02-30")

        assert isinstance(error, ValidationError)
        assert error.status_code == 400
        assert error.code == ErrorCode.INVALID_DATE
        assert error.details == {"value": "2024-02-30", "field": "date"}

    def test_not_found(self):
        entry = EntryNotFoundError("ana", "2024-03-01")
        risk = RiskNotFoundError("ana", "2024-03-01")

        assert entry.status_code == risk.status_code == 404
        assert entry.code == ErrorCode.ENTRY_NOT_FOUND
        assert risk.code == ErrorCode.RISK_NOT_FOUND
        assert entry.details["resource_id"] == "ana/2024-03-01"

    def test_risk_persistence_is_database_error(self):
        error = RiskPersistenceError(user_id="ana", date="2024-03-01")

        assert isinstance(error, DatabaseError)
        assert error.message == "Failed to persist risk scores"
        assert error.to_dict()["error"]["details"] == {
            "user_id": "ana",
            "date": "2024-03-01",
            "operation": "save_risk",
        }

    def test_repr(self):
        assert repr(DatabaseError("locked")) == "DatabaseError(code=DATABASE_ERROR, message='locked')"
