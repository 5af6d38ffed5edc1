"""Configuration management for paydone."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from paydone.exceptions import ConfigurationError
from paydone.models.enums import LoanType


@dataclass
class FeeRules:
    """Upfront fee parameters for new-loan simulations.

    Percentages are expressed as whole numbers (``2.5`` means 2.5%).
    Mortgage (KPR) loans use the ``*_kpr`` values, every other loan type
    uses the ``*_non_kpr`` values.
    """

    provision_rate: float = 1.0
    admin_fee_kpr: float = 500_000.0
    admin_fee_non_kpr: float = 250_000.0
    insurance_rate_kpr: float = 2.5
    insurance_rate_non_kpr: float = 1.5
    notary_rate_kpr: float = 1.0
    notary_rate_non_kpr: float = 0.5

    def admin_fee(self, loan_type: LoanType) -> float:
        """Flat admin fee for the loan type."""
        return self.admin_fee_kpr if loan_type.is_mortgage else self.admin_fee_non_kpr

    def insurance_rate(self, loan_type: LoanType) -> float:
        """Insurance rate (percent of asset price) for the loan type."""
        return self.insurance_rate_kpr if loan_type.is_mortgage else self.insurance_rate_non_kpr

    def notary_rate(self, loan_type: LoanType) -> float:
        """Notary rate (percent of asset price) for the loan type."""
        return self.notary_rate_kpr if loan_type.is_mortgage else self.notary_rate_non_kpr


@dataclass
class DsrLimits:
    """Debt service ratio thresholds, in percent of monthly income."""

    safe_limit: float = 30.0
    warning_limit: float = 45.0


@dataclass
class ProjectionConfig:
    """Bounds and proxies used by the multi-debt projector."""

    month_limit: int = 360  # 30 years
    paid_threshold: float = 1000.0
    estimated_interest_rate: float = 0.12
    downsample_after: int = 60
    default_investment_return: float = 4.0


@dataclass
class OutputConfig:
    """Output configuration."""

    json_output_dir: Path = field(default_factory=lambda: Path("output"))
    pretty_json: bool = False


@dataclass
class PaydoneConfig:
    """Main configuration for paydone."""

    fees: FeeRules = field(default_factory=FeeRules)
    dsr: DsrLimits = field(default_factory=DsrLimits)
    projection: ProjectionConfig = field(default_factory=ProjectionConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    seed: int | None = None
    log_level: str = "INFO"

    def validate(self) -> None:
        """Check cross-field constraints.

        Raises
        ------
        ConfigurationError
            If a limit or threshold is out of range.
        """
        if self.projection.month_limit <= 0:
            raise ConfigurationError("projection.month_limit must be positive")
        if self.projection.paid_threshold < 0:
            raise ConfigurationError("projection.paid_threshold cannot be negative")
        if self.dsr.safe_limit > self.dsr.warning_limit:
            raise ConfigurationError(
                f"dsr.safe_limit ({self.dsr.safe_limit}) exceeds "
                f"dsr.warning_limit ({self.dsr.warning_limit})"
            )

    @classmethod
    def from_env(cls) -> "PaydoneConfig":
        """Create config from environment variables."""
        import os

        fees = FeeRules(
            provision_rate=_env_float("PAYDONE_PROVISION_RATE", 1.0),
            admin_fee_kpr=_env_float("PAYDONE_ADMIN_FEE_KPR", 500_000.0),
            admin_fee_non_kpr=_env_float("PAYDONE_ADMIN_FEE_NON_KPR", 250_000.0),
            insurance_rate_kpr=_env_float("PAYDONE_INSURANCE_RATE_KPR", 2.5),
            insurance_rate_non_kpr=_env_float("PAYDONE_INSURANCE_RATE_NON_KPR", 1.5),
            notary_rate_kpr=_env_float("PAYDONE_NOTARY_RATE_KPR", 1.0),
            notary_rate_non_kpr=_env_float("PAYDONE_NOTARY_RATE_NON_KPR", 0.5),
        )

        dsr = DsrLimits(
            safe_limit=_env_float("PAYDONE_DSR_SAFE_LIMIT", 30.0),
            warning_limit=_env_float("PAYDONE_DSR_WARNING_LIMIT", 45.0),
        )

        projection = ProjectionConfig(
            month_limit=_env_int("PAYDONE_MONTH_LIMIT", 360),
            paid_threshold=_env_float("PAYDONE_PAID_THRESHOLD", 1000.0),
            estimated_interest_rate=_env_float("PAYDONE_ESTIMATED_INTEREST_RATE", 0.12),
        )

        output = OutputConfig(
            json_output_dir=Path(os.getenv("OUTPUT_DIR", "output")),
            pretty_json=os.getenv("PRETTY_JSON", "false").lower() == "true",
        )

        config = cls(
            fees=fees,
            dsr=dsr,
            projection=projection,
            output=output,
            seed=_env_int("SEED", None),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )
        config.validate()
        return config


def _env_float(name: str, default: float) -> float:
    import os

    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from exc


def _env_int(name: str, default: Any) -> Any:
    import os

    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc
