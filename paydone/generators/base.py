"""Base generator class for synthetic data generators."""

from __future__ import annotations

import random
from abc import ABC

from faker import Faker


class BaseGenerator(ABC):
    """Base class for all data generators.

    Provides common initialization: Faker instance creation and seed-based
    reproducibility.

    Parameters
    ----------
    seed : int | None
        Random seed for reproducibility.
    locale : str
        Faker locale (default ``id_ID``).
    """

    def __init__(
        self,
        seed: int | None = None,
        locale: str = "id_ID",
    ) -> None:
        self.fake = Faker(locale)
        self.random = random.Random(seed)
        if seed is not None:
            self.fake.seed_instance(seed)
