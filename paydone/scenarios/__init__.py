"""Scenarios that run the planning pipeline over generated debts."""

from paydone.scenarios.debt_plan import DebtPlan, DebtPlanScenario

__all__ = ["DebtPlan", "DebtPlanScenario"]
