"""Tests for sinks and serialization."""

import json
from datetime import date, datetime
from decimal import Decimal
from pathlib import Path
from unittest.mock import patch

import pytest

from paydone.engine.schedule import ScheduleGenerator
from paydone.exceptions import SinkError
from paydone.models.enums import InstallmentStatus
from paydone.sinks.console import ConsoleSink
from paydone.sinks.json_file import JsonFileSink
from paydone.sinks.serialization import dataclass_to_dict, serialize_value, to_dict


class TestSerialization:
    """Tests for serialization helpers."""

    def test_serialize_scalars(self) -> None:
        assert serialize_value(Decimal("1120000")) == "1120000"
        assert serialize_value(InstallmentStatus.OVERDUE) == "overdue"
        assert serialize_value(date(2025, 2, 10)) == "2025-02-10"
        assert serialize_value(datetime(2025, 2, 10, 8, 30)) == "2025-02-10T08:30:00"
        assert serialize_value(None) is None

    def test_serialize_nested(self) -> None:
        value = {"when": [date(2025, 1, 1)], "amounts": (Decimal("1"), 2)}
        assert serialize_value(value) == {"when": ["2025-01-01"], "amounts": ["1", 2]}

    def test_debt_to_dict(self, make_debt) -> None:
        """Private cache fields are skipped and step-up ranges are rendered."""
        debt = make_debt(
            interest_strategy="StepUp",
            step_up_schedule='[{"startMonth": 1, "endMonth": 6, "amount": 500000}]',
        )
        data = dataclass_to_dict(debt)

        assert "_start" not in data
        assert "_end" not in data
        assert data["loan_type"] == "KTA"
        assert data["interest_strategy"] == "STEPUP"
        assert data["start_date"] == "2025-01-10"
        assert data["step_up_schedule"] == [
            {"start_month": 1, "end_month": 6, "amount": "500000.0"}
        ]

    def test_installment_to_dict(self, make_debt, today) -> None:
        installment = ScheduleGenerator(today=today).generate(make_debt())[0]
        data = to_dict(installment)

        assert data["installment_id"] == "inst-debt-test-001-p1"
        assert data["due_date"] == "2025-02-10"
        assert data["amount"] == "1120000"
        assert data["status"] == "overdue"
        json.dumps(data)

    def test_to_dict_plain_values(self) -> None:
        assert to_dict({"d": date(2025, 1, 1)}) == {"d": "2025-01-01"}
        assert to_dict(42) == {"value": "42"}


class TestConsoleSink:
    """Tests for ConsoleSink."""

    def test_init_default(self) -> None:
        sink = ConsoleSink()

        assert sink.pretty is True
        assert sink.max_records is None
        assert sink._counts == {}

    def test_write_batch(self, make_debt, today, capsys: pytest.CaptureFixture) -> None:
        """Records are printed as JSON with a header."""
        sink = ConsoleSink(pretty=False)
        schedule = ScheduleGenerator(today=today).generate(make_debt())

        sink.write_batch("installments", schedule)
        captured = capsys.readouterr()

        assert "installments" in captured.out
        assert "12 records" in captured.out
        assert "inst-debt-test-001-p12" in captured.out
        assert sink._counts["installments"] == 12

    def test_max_records(self, capsys: pytest.CaptureFixture) -> None:
        sink = ConsoleSink(max_records=2)
        sink.write_batch("rows", [{"i": i} for i in range(5)])

        assert "... and 3 more records" in capsys.readouterr().out

    def test_close_prints_summary(self, capsys: pytest.CaptureFixture) -> None:
        sink = ConsoleSink()
        sink.write_batch("rows", [{"i": 1}])
        sink.write_batch("rows", [{"i": 2}])
        sink.close()

        out = capsys.readouterr().out
        assert "Console Sink Summary" in out
        assert "rows: 2 records" in out


class TestJsonFileSink:
    """Tests for JsonFileSink."""

    def test_write_batch(self, make_debt, tmp_path: Path) -> None:
        """One JSON array per entity type."""
        sink = JsonFileSink(tmp_path / "out")
        sink.write_batch("debts", [make_debt()])
        sink.close()

        data = json.loads((tmp_path / "out" / "debts.json").read_text(encoding="utf-8"))
        assert len(data) == 1
        assert data[0]["debt_id"] == "debt-test-001"
        assert data[0]["original_principal"] == "12000000"

    def test_pretty(self, tmp_path: Path) -> None:
        sink = JsonFileSink(tmp_path, pretty=True)
        sink.write_batch("rows", [{"a": 1}])

        assert "\n  " in (tmp_path / "rows.json").read_text(encoding="utf-8")

    def test_unwritable_directory(self, tmp_path: Path) -> None:
        """Directory creation failures surface as SinkError."""
        blocker = tmp_path / "file"
        blocker.write_text("x")

        with pytest.raises(SinkError):
            JsonFileSink(blocker / "sub")

    def test_write_failure(self, tmp_path: Path) -> None:
        sink = JsonFileSink(tmp_path)

        with patch("builtins.open", side_effect=PermissionError("denied")):
            with pytest.raises(SinkError, match="rows.json"):
                sink.write_batch("rows", [{"a": 1}])
