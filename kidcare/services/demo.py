"""Sample illness history for trying the app out."""
import calendar
from datetime import date, timedelta

from kidcare.models.logs import DailyLogContent, Medication, TemperatureReading


def _months_before(day: date, months: int) -> date:
    """Same day-of-month ``months`` earlier, clamped to the month's last day."""
    month_index = day.year * 12 + (day.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def _episode(start: date, days: int, symptoms: list[str]) -> dict[date, DailyLogContent]:
    logs: dict[date, DailyLogContent] = {}
    for offset in range(days):
        if offset == 0:
            temperatures = [
                TemperatureReading(time="09:00", value=38.5),
                TemperatureReading(time="14:00", value=39.1),
            ]
        elif offset == 1:
            temperatures = [TemperatureReading(time="10:00", value=37.8)]
        else:
            temperatures = []
        logs[start + timedelta(days=offset)] = DailyLogContent(
            symptoms=list(symptoms),
            temperatures=temperatures,
            medications=(
                [Medication(name="Ibuprofen", dosage="5ml")] if offset < 3 else []
            ),
        )
    return logs


def build_demo_logs(today: date) -> dict[date, DailyLogContent]:
    """Three illness episodes spread over the last four months.

    - 5 days of Fever and Cough starting four months ago
    - 3 days of Runny Nose starting two months ago
    - 4 days of Fever and Vomiting starting two weeks ago
    """
    logs: dict[date, DailyLogContent] = {}
    logs.update(_episode(_months_before(today, 4), 5, ["Fever", "Cough"]))
    logs.update(_episode(_months_before(today, 2), 3, ["Runny Nose"]))
    logs.update(_episode(today - timedelta(days=14), 4, ["Fever", "Vomiting"]))
    return logs
