"""Debt plan scenario: one user's debts, schedules, payoff projection and cash flow."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any

from paydone.config import PaydoneConfig
from paydone.engine.cashflow import (
    calculate_dsr,
    classify_dsr,
    crossing_analysis,
    monthly_obligations,
)
from paydone.engine.projection import GlobalProjector
from paydone.engine.schedule import ScheduleGenerator
from paydone.generators.debt import DebtGenerator
from paydone.models.cashflow import CrossingAnalysis, ExpenseItem
from paydone.models.debt import DebtInstallment, DebtItem
from paydone.models.enums import (
    DsrStatus,
    ExpenseCategory,
    InstallmentStatus,
    PayoffStrategy,
    ProjectionMode,
)
from paydone.models.projection import ProjectionResult

logger = logging.getLogger(__name__)


@dataclass
class DebtPlan:
    """Everything the scenario produced for one user."""

    user_id: str
    debts: list[DebtItem] = field(default_factory=list)
    history: dict[str, list[DebtInstallment]] = field(default_factory=dict)
    installments: dict[str, list[DebtInstallment]] = field(default_factory=dict)
    expenses: list[ExpenseItem] = field(default_factory=list)
    projection: ProjectionResult | None = None
    crossing: CrossingAnalysis | None = None
    dsr: float = 0.0
    dsr_status: DsrStatus = DsrStatus.SAFE

    @property
    def all_installments(self) -> list[DebtInstallment]:
        return [i for rows in self.installments.values() for i in rows]


class DebtPlanScenario:
    """Generate a user's debts and run the full planning pipeline over them.

    This scenario creates:
    - Debts of mixed loan types, partway through their tenor
    - Persisted payment history for the periods already due
    - Regenerated schedules merging that history with fresh projections
    - A standard vs accelerated payoff projection
    - DSR and an income crossing analysis
    """

    def __init__(
        self,
        num_debts: int = 4,
        monthly_income: float = 25_000_000,
        living_cost: float = 8_000_000,
        extra_monthly_payment: float = 2_000_000,
        strategy: PayoffStrategy | str = PayoffStrategy.AVALANCHE,
        mode: ProjectionMode | str = ProjectionMode.LUMP_SUM,
        on_time_rate: float = 0.9,
        seed: int | None = None,
        today: date | None = None,
        *,
        config: PaydoneConfig | None = None,
    ) -> None:
        """Initialize debt plan scenario.

        Parameters
        ----------
        num_debts : int
            Number of debts to generate.
        monthly_income : float
            User's monthly income.
        living_cost : float
            Monthly non-debt spending, split into needs and wants.
        extra_monthly_payment : float
            Amount available on top of the minimum installments.
        strategy : PayoffStrategy | str
            Extra-payment order for the projection.
        mode : ProjectionMode | str
            Projection mode.
        on_time_rate : float
            Share of past installments recorded as paid.
        seed : int | None
            Random seed for reproducibility.
        today : date | None
            Reference day for the whole scenario.
        config : PaydoneConfig | None
            Optional configuration; its seed is used when ``seed`` is None.
        """
        self.config = config or PaydoneConfig()
        self.seed = seed if seed is not None else self.config.seed
        self.num_debts = num_debts
        self.monthly_income = monthly_income
        self.living_cost = living_cost
        self.extra_monthly_payment = extra_monthly_payment
        self.strategy = strategy
        self.mode = mode
        self.on_time_rate = on_time_rate
        self.today = today or date.today()

        self._debt_gen = DebtGenerator(seed=self.seed)
        self._schedules = ScheduleGenerator(today=self.today)
        self._projector = GlobalProjector(config=self.config.projection, today=self.today)
        self.plan: DebtPlan | None = None

    def generate(self) -> DebtPlan:
        """Generate all data for the scenario.

        Returns
        -------
        DebtPlan
            Debts, schedules, projection and cash-flow metrics.
        """
        user_id = self._debt_gen.fake.uuid4()
        logger.info("Starting debt plan scenario: %d debts for user %s", self.num_debts, user_id)

        plan = DebtPlan(user_id=user_id)
        for debt in self._debt_gen.generate_batch(user_id, self.num_debts, today=self.today):
            history = self._debt_gen.generate_payment_history(
                debt, on_time_rate=self.on_time_rate, today=self.today
            )
            plan.debts.append(debt)
            plan.history[debt.debt_id] = history
            plan.installments[debt.debt_id] = self._schedules.generate(debt, history)

        logger.info(
            "Generated %d debts with %d installments (%d overdue)",
            len(plan.debts),
            len(plan.all_installments),
            sum(1 for i in plan.all_installments if i.status == InstallmentStatus.OVERDUE),
        )

        plan.expenses = self._living_expenses(user_id)
        plan.projection = self._projector.project(
            plan.debts,
            extra_monthly_payment=self.extra_monthly_payment,
            strategy=self.strategy,
            mode=self.mode,
        )
        plan.crossing = crossing_analysis(
            self.monthly_income, plan.debts, plan.expenses, today=self.today
        )
        plan.dsr = calculate_dsr(monthly_obligations(plan.debts, self.today), self.monthly_income)
        plan.dsr_status = classify_dsr(plan.dsr, self.config.dsr)

        self.plan = plan
        return plan

    def _living_expenses(self, user_id: str) -> list[ExpenseItem]:
        needs = Decimal(round(self.living_cost * 0.6))
        wants = Decimal(round(self.living_cost)) - needs
        return [
            ExpenseItem(
                expense_id=self._debt_gen.fake.uuid4(),
                user_id=user_id,
                name="Kebutuhan pokok",
                amount=needs,
                category=ExpenseCategory.NEEDS,
            ),
            ExpenseItem(
                expense_id=self._debt_gen.fake.uuid4(),
                user_id=user_id,
                name="Gaya hidup",
                amount=wants,
                category=ExpenseCategory.WANTS,
            ),
        ]

    def export(self, sinks: list[Any]) -> None:
        """Export generated data to sinks.

        Parameters
        ----------
        sinks : list[Any]
            List of sink instances (ConsoleSink, JsonFileSink).
        """
        if self.plan is None:
            self.generate()
        plan = self.plan

        for sink in sinks:
            sink.write_batch("debts", plan.debts)
            sink.write_batch("installments", plan.all_installments)
            sink.write_batch("expenses", plan.expenses)
            sink.write_batch("projection", plan.projection.series)
            sink.write_batch("crossing", plan.crossing.points)

        logger.info("Exported debt plan to %d sinks", len(sinks))

    def get_summary(self) -> dict[str, Any]:
        """Get summary statistics for the plan.

        Returns
        -------
        dict[str, Any]
            Plan summary statistics; empty before ``generate``.
        """
        plan = self.plan
        if plan is None:
            return {}

        status_counts: dict[str, int] = {}
        for inst in plan.all_installments:
            status_counts[inst.status.value] = status_counts.get(inst.status.value, 0) + 1

        projection = plan.projection
        return {
            "total_debts": len(plan.debts),
            "total_remaining_principal": float(sum(d.remaining_principal for d in plan.debts)),
            "installment_status_distribution": status_counts,
            "months_saved": projection.months_saved,
            "money_saved": float(projection.money_saved),
            "finish_date_standard": projection.finish_date_standard,
            "finish_date_accelerated": projection.finish_date_accelerated,
            "dsr": round(plan.dsr, 2),
            "dsr_status": plan.dsr_status.value,
            "danger_month": plan.crossing.danger_month.month if plan.crossing.danger_month else None,
        }
