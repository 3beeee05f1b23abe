"""Unit tests for kidcare.services.logs: write-path normalisation and row mapping."""
from datetime import date

from kidcare.models.logs import DailyLogContent, Medication, TemperatureReading
from kidcare.services.logs import (
    is_empty_log,
    log_to_row,
    logs_by_date,
    normalize_log_content,
    row_to_log,
)

ROW = {
    "id": "row-1",
    "profile_id": "profile-1",
    "log_date": "2024-03-01",
    "symptoms": ["Fever"],
    "temperatures": [{"time": "09:00", "value": 38.5}],
    "medications": [{"name": "Ibuprofen", "dosage": "5ml"}],
    "notes": "Slept badly",
}


class TestNormalizeLogContent:
    def test_symptoms_trimmed_deduplicated_and_blank_dropped(self):
        content = DailyLogContent(symptoms=[" Fever", "Cough", "Fever ", "  ", ""])
        assert normalize_log_content(content).symptoms == ["Fever", "Cough"]

    def test_temperatures_sorted_by_time(self):
        content = DailyLogContent(
            temperatures=[
                TemperatureReading(time="18:00", value=38.9),
                TemperatureReading(time="07:15", value=37.9),
                TemperatureReading(time="12:30", value=38.2),
            ]
        )
        times = [t.time for t in normalize_log_content(content).temperatures]
        assert times == ["07:15", "12:30", "18:00"]

    def test_notes_stripped(self):
        assert normalize_log_content(DailyLogContent(notes="  tired \n")).notes == "tired"


class TestIsEmptyLog:
    def test_default_content_is_empty(self):
        assert is_empty_log(DailyLogContent()) is True

    def test_whitespace_notes_are_empty(self):
        assert is_empty_log(DailyLogContent(notes="   ")) is True

    def test_medications_alone_are_not_empty(self):
        content = DailyLogContent(medications=[Medication(name="Calpol", dosage="2.5ml")])
        assert is_empty_log(content) is False

    def test_notes_alone_are_not_empty(self):
        assert is_empty_log(DailyLogContent(notes="Check rash tomorrow")) is False


class TestRowMapping:
    def test_log_to_row_serialises_nested_models(self):
        content = DailyLogContent(
            symptoms=["Fever"],
            temperatures=[TemperatureReading(time="09:00", value=38.5)],
            medications=[Medication(name="Ibuprofen", dosage="5ml")],
            notes="Slept badly",
        )
        row = log_to_row("profile-1", date(2024, 3, 1), content)
        assert row == {k: v for k, v in ROW.items() if k != "id"}

    def test_row_to_log_round_trips_fields(self):
        log = row_to_log(ROW)
        assert log.date == date(2024, 3, 1)
        assert log.temperatures[0].value == 38.5
        assert log.medications[0].name == "Ibuprofen"

    def test_row_to_log_treats_null_columns_as_empty(self):
        log = row_to_log({"log_date": "2024-03-01", "symptoms": None, "notes": None})
        assert log.symptoms == []
        assert log.temperatures == []
        assert log.notes == ""


class TestLogsByDate:
    def test_keys_rows_by_iso_date(self):
        logs = logs_by_date([ROW, {**ROW, "id": "row-2", "log_date": "2024-03-02"}])
        assert list(logs) == ["2024-03-01", "2024-03-02"]

    def test_malformed_rows_are_skipped(self):
        bad = {**ROW, "id": "row-bad", "log_date": "not-a-date"}
        missing = {"id": "row-missing"}
        assert list(logs_by_date([bad, missing, ROW])) == ["2024-03-01"]

    def test_later_duplicate_wins(self):
        later = {**ROW, "id": "row-2", "symptoms": ["Cough"]}
        assert logs_by_date([ROW, later])["2024-03-01"].symptoms == ["Cough"]

    def test_unusual_temperature_value_is_kept(self):
        row = {**ROW, "temperatures": [{"time": "09:00", "value": 98.6}]}
        log = logs_by_date([row])["2024-03-01"]
        assert log.temperatures == [TemperatureReading(time="09:00", value=98.6)]
        assert log.symptoms == ROW["symptoms"]
