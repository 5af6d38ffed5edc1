"""Synthetic debt generator."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Iterator

from paydone.dates import add_months, month_diff
from paydone.engine.amortization import calculate_pmt, monthly_rate, to_money
from paydone.engine.schedule import ScheduleGenerator
from paydone.generators.base import BaseGenerator
from paydone.models.debt import DebtInstallment, DebtItem, StepUpRange, StructuredStepUp
from paydone.models.enums import InstallmentStatus, InterestStrategy, LoanType


class DebtGenerator(BaseGenerator):
    """Generate realistic debts, optionally with persisted payment history."""

    BANKS = ["BCA", "Mandiri", "BRI", "BNI", "BTN", "CIMB Niaga", "Danamon", "Permata"]

    # Principal range, tenor choices (months), annual rate range (%), strategies
    LOAN_PROFILES = {
        LoanType.KPR: {
            "principal": (300_000_000, 2_000_000_000),
            "tenors": [120, 180, 240, 300],
            "rate": (6.0, 11.0),
            "strategies": [InterestStrategy.ANNUITY, InterestStrategy.STEP_UP],
        },
        LoanType.KKB: {
            "principal": (100_000_000, 600_000_000),
            "tenors": [12, 24, 36, 48, 60],
            "rate": (3.0, 8.0),
            "strategies": [InterestStrategy.FIXED],
        },
        LoanType.KTA: {
            "principal": (10_000_000, 300_000_000),
            "tenors": [12, 24, 36, 48, 60],
            "rate": (9.0, 18.0),
            "strategies": [InterestStrategy.FIXED, InterestStrategy.ANNUITY],
        },
        LoanType.CC: {
            "principal": (2_000_000, 50_000_000),
            "tenors": [6, 12, 18, 24],
            "rate": (18.0, 30.0),
            "strategies": [InterestStrategy.ANNUITY],
        },
    }

    # Multipliers of the annuity payment for each third of a step-up tenor
    STEP_UP_FACTORS = (0.85, 1.0, 1.2)

    def generate(
        self,
        user_id: str,
        loan_type: LoanType | None = None,
        today: date | None = None,
    ) -> DebtItem:
        """Generate a debt that is already partway through its tenor.

        Parameters
        ----------
        user_id : str
            Owning user.
        loan_type : LoanType | None
            Loan category; random when omitted.
        today : date | None
            Reference day for the start date and remaining principal.

        Returns
        -------
        DebtItem
            A valid debt whose remaining principal matches its theoretical
            schedule as of ``today``.
        """
        today = today or date.today()
        loan_type = loan_type or self.random.choice(list(LoanType))
        profile = self.LOAN_PROFILES[loan_type]

        low, high = profile["principal"]
        principal = self.random.randint(low // 1_000_000, high // 1_000_000) * 1_000_000
        tenor = self.random.choice(profile["tenors"])
        annual_rate = round(self.random.uniform(*profile["rate"]), 2)
        strategy = self.random.choice(profile["strategies"])

        months_passed = self.random.randint(0, min(tenor - 1, 60))
        start = add_months(today.replace(day=1), -months_passed)
        end = add_months(start, tenor)

        rate = monthly_rate(annual_rate)
        if strategy is InterestStrategy.FIXED:
            payment = principal / tenor + principal * rate
        else:
            payment = calculate_pmt(rate, tenor, principal)

        step_up = StructuredStepUp()
        if strategy is InterestStrategy.STEP_UP:
            step_up = self._step_up_ranges(tenor, payment)

        debt = DebtItem(
            debt_id=self.fake.uuid4(),
            user_id=user_id,
            name=f"{loan_type.value} {self.random.choice(self.BANKS)}",
            loan_type=loan_type,
            original_principal=Decimal(principal),
            remaining_principal=Decimal(principal),
            interest_rate=annual_rate,
            start_date=start,
            end_date=end,
            due_day=self.random.randint(1, 28),
            monthly_payment=to_money(payment),
            interest_strategy=strategy,
            step_up_schedule=step_up,
        )
        debt.validate()
        debt.remaining_principal = self._remaining_after(debt, today)
        return debt

    def generate_batch(
        self, user_id: str, count: int, today: date | None = None
    ) -> Iterator[DebtItem]:
        """Generate ``count`` debts for one user."""
        for _ in range(count):
            yield self.generate(user_id, today=today)

    def generate_payment_history(
        self,
        debt: DebtItem,
        on_time_rate: float = 0.9,
        today: date | None = None,
    ) -> list[DebtInstallment]:
        """Persisted installments for the periods already due.

        Each past installment is marked paid with probability
        ``on_time_rate`` and left overdue otherwise; a paid installment
        occasionally carries a rounded-up amount and a note, as a user
        paying a little extra would record it.
        """
        today = today or date.today()
        history: list[DebtInstallment] = []
        for installment in ScheduleGenerator(today=today).generate(debt):
            if installment.due_date >= today:
                break
            if self.random.random() < on_time_rate:
                installment.status = InstallmentStatus.PAID
                if self.random.random() < 0.1:
                    installment.amount = (installment.amount // 1000 + 1) * 1000
                    installment.notes = self.fake.sentence(nb_words=4)
            history.append(installment)
        return history

    def _step_up_ranges(self, tenor: int, payment: float) -> StructuredStepUp:
        third = max(1, tenor // 3)
        ranges = []
        start = 1
        for index, factor in enumerate(self.STEP_UP_FACTORS):
            end = tenor if index == len(self.STEP_UP_FACTORS) - 1 else start + third - 1
            ranges.append(
                StepUpRange(start_month=start, end_month=end, amount=to_money(payment * factor))
            )
            start = end + 1
        return StructuredStepUp(ranges=tuple(ranges))

    def _remaining_after(self, debt: DebtItem, today: date) -> Decimal:
        periods_elapsed = month_diff(debt.start, today)
        if periods_elapsed == 0:
            return debt.original_principal
        schedule = ScheduleGenerator(today=today).generate(debt)
        index = min(periods_elapsed, len(schedule)) - 1
        return schedule[index].remaining_balance
