"""Tests for scenarios."""

import json
from pathlib import Path

import pytest

from paydone.config import PaydoneConfig, ProjectionConfig
from paydone.models.enums import DsrStatus, ProjectionMode
from paydone.scenarios import DebtPlanScenario
from paydone.sinks import JsonFileSink


class TestDebtPlanScenario:
    """Tests for DebtPlanScenario."""

    @pytest.fixture
    def scenario(self, seed: int, today) -> DebtPlanScenario:
        return DebtPlanScenario(num_debts=3, seed=seed, today=today)

    def test_generate_scenario(self, scenario, today) -> None:
        """Test debt plan generation."""
        plan = scenario.generate()

        assert len(plan.debts) == 3
        assert all(d.user_id == plan.user_id for d in plan.debts)
        for debt in plan.debts:
            assert len(plan.installments[debt.debt_id]) == debt.total_months
            history = plan.history[debt.debt_id]
            assert plan.installments[debt.debt_id][: len(history)] == history

    def test_projection(self, scenario, today) -> None:
        """The extra payment never finishes later than the minimums."""
        plan = scenario.generate()
        projection = plan.projection

        assert projection.series
        assert projection.series[0].month == today.replace(day=1)
        assert projection.finish_date_accelerated <= projection.finish_date_standard
        assert projection.months_saved >= 0

    def test_cash_flow(self, scenario) -> None:
        plan = scenario.generate()

        assert len(plan.expenses) == 2
        assert sum(e.amount for e in plan.expenses) == 8_000_000
        assert len(plan.crossing.points) == 25
        assert plan.dsr > 0
        assert isinstance(plan.dsr_status, DsrStatus)

    def test_reproducible(self, seed: int, today) -> None:
        """Same seed produces the same plan."""
        first = DebtPlanScenario(num_debts=2, seed=seed, today=today).generate()
        second = DebtPlanScenario(num_debts=2, seed=seed, today=today).generate()

        assert first.debts == second.debts
        assert first.all_installments == second.all_installments

    def test_cutoff_mode(self, seed: int, today) -> None:
        scenario = DebtPlanScenario(num_debts=2, mode="cutoff", seed=seed, today=today)
        plan = scenario.generate()

        assert all(p.savings_balance is not None for p in plan.projection.series)
        assert scenario.get_summary()["months_saved"] == plan.projection.months_saved

    def test_config_seed_and_projection(self, today) -> None:
        """Seed and projection bounds come from the config when not given."""
        config = PaydoneConfig(seed=7, projection=ProjectionConfig(month_limit=12))
        scenario = DebtPlanScenario(num_debts=1, today=today, config=config)
        plan = scenario.generate()

        assert scenario.seed == 7
        assert plan.projection.series[-1].index <= 12

    def test_get_summary(self, scenario) -> None:
        """Test summary statistics."""
        assert scenario.get_summary() == {}

        scenario.generate()
        summary = scenario.get_summary()

        assert summary["total_debts"] == 3
        assert summary["dsr_status"] in [s.value for s in DsrStatus]
        assert sum(summary["installment_status_distribution"].values()) == len(
            scenario.plan.all_installments
        )

    def test_export(self, scenario, tmp_path: Path) -> None:
        """Export writes one file per entity type."""
        sink = JsonFileSink(tmp_path)
        scenario.export([sink])

        for entity in ["debts", "installments", "expenses", "projection", "crossing"]:
            assert (tmp_path / f"{entity}.json").exists()

        debts = json.loads((tmp_path / "debts.json").read_text(encoding="utf-8"))
        assert len(debts) == 3

    def test_mode_enum_accepted(self, seed: int, today) -> None:
        scenario = DebtPlanScenario(num_debts=1, mode=ProjectionMode.LUMP_SUM, seed=seed, today=today)
        plan = scenario.generate()
        assert all(p.savings_balance is None for p in plan.projection.series)
