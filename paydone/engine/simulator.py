"""Single-loan what-if simulator."""

import logging

from paydone.config import FeeRules
from paydone.engine.amortization import calculate_pmt, monthly_rate, to_money
from paydone.models.simulation import (
    AmortizationRow,
    SimulationInput,
    SimulationResult,
    UpfrontCosts,
)

logger = logging.getLogger(__name__)


class LoanSimulator:
    """Price a hypothetical annuity loan and its upfront costs.

    Parameters
    ----------
    rules : FeeRules | None
        Provision, admin, insurance and notary fee parameters.
    """

    def __init__(self, rules: FeeRules | None = None) -> None:
        self.rules = rules or FeeRules()

    def simulate(self, simulation: SimulationInput) -> SimulationResult:
        """Compute loan amount, installment, upfront costs and amortization table.

        Parameters
        ----------
        simulation : SimulationInput
            Asset price, down payment, rate, tenor and loan type.

        Returns
        -------
        SimulationResult
            Money values are rounded to whole currency units; the schedule is
            empty when the tenor or the financed amount is not positive.
        """
        asset_price = max(0.0, float(simulation.asset_price or 0))
        down_payment = asset_price * (float(simulation.down_payment_percent or 0) / 100)
        loan_amount = asset_price - down_payment
        rate = monthly_rate(simulation.interest_rate)
        total_months = max(0, int(simulation.tenor_years or 0) * 12)
        payment = calculate_pmt(rate, total_months, loan_amount)

        loan_type = simulation.loan_type
        provision = loan_amount * (self.rules.provision_rate / 100)
        admin_fee = self.rules.admin_fee(loan_type)
        insurance = asset_price * (self.rules.insurance_rate(loan_type) / 100)
        notary = asset_price * (self.rules.notary_rate(loan_type) / 100)
        total_upfront = down_payment + provision + admin_fee + insurance + notary

        schedule: list[AmortizationRow] = []
        balance = loan_amount
        if payment > 0:
            for month in range(1, total_months + 1):
                interest = balance * rate
                principal = payment - interest
                balance = max(0.0, balance - principal)
                schedule.append(
                    AmortizationRow(
                        month=month,
                        principal=to_money(principal),
                        interest=to_money(interest),
                        balance=to_money(balance),
                    )
                )

        logger.debug(
            "Simulated %s loan of %.0f over %d months: payment %.0f",
            loan_type.value,
            loan_amount,
            total_months,
            payment,
        )

        return SimulationResult(
            loan_amount=to_money(loan_amount),
            monthly_payment=to_money(payment),
            upfront_costs=UpfrontCosts(
                down_payment=to_money(down_payment),
                provision=to_money(provision),
                admin_fee=to_money(admin_fee),
                insurance=to_money(insurance),
                notary=to_money(notary),
                total_upfront=to_money(total_upfront),
            ),
            schedule=schedule,
        )


def run_simulation(simulation: SimulationInput, rules: FeeRules | None = None) -> SimulationResult:
    """Simulate with a one-off LoanSimulator."""
    return LoanSimulator(rules).simulate(simulation)
