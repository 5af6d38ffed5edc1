"""Synthetic data generators."""

from paydone.generators.base import BaseGenerator
from paydone.generators.debt import DebtGenerator

__all__ = ["BaseGenerator", "DebtGenerator"]
