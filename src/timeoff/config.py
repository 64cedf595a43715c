from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


@dataclass
class Config:

    ### DATA SOURCE ###

    # Tenant registry file (see timeoff.sources.tenancy)
    TENANTS_FILE: Path = Path("tenants.json")
    TENANT_CACHE_TTL_SEC: float = 5.0

    # Default reporting window (inclusive); None = unbounded
    DATE_FROM: Optional[str] = None
    DATE_TO: Optional[str] = None

    ### ANALYTICS ###

    # Share of the workforce off on one day that flags a coverage gap
    COVERAGE_THRESHOLD: float = 0.3

    # Number of days returned by busiest_days
    BUSIEST_DAY_LIMIT: int = 10

    # Per-event expansion cap in days (None = no cap)
    MAX_INTERVAL_DAYS: Optional[int] = 366 * 2

    ### REPORTING ###

    OUTPUT_DIR: Path = Path("outputs")
    NUM_PRINT_EXAMPLES: int = 10
    ENABLE_PLOTS: bool = True
    WRITE_PDF: bool = True
    WRITE_CSV: bool = True

    # Employee ids printed under each calendar day (0 = counts only)
    CALENDAR_NAMES_PER_DAY: int = 3

    # Detailed per-event listing for employees with these IDs
    INSPECT_EMPLOYEE_IDS: list[str] = field(default_factory=list)

    # RANDOM SEED for the mock data source
    SEED: Optional[int] = 7

    def __post_init__(self) -> None:
        self.TENANTS_FILE = Path(self.TENANTS_FILE)
        self.OUTPUT_DIR = Path(self.OUTPUT_DIR)

    def validate(self):
        """
        Validate the Config object has sensible values before reporting.
        """
        if not (0.0 <= self.COVERAGE_THRESHOLD <= 1.0):
            raise ValueError("COVERAGE_THRESHOLD must be in [0, 1].")
        if self.BUSIEST_DAY_LIMIT < 0:
            raise ValueError("BUSIEST_DAY_LIMIT must be >= 0.")
        if self.MAX_INTERVAL_DAYS is not None and self.MAX_INTERVAL_DAYS <= 0:
            raise ValueError("MAX_INTERVAL_DAYS must be > 0 or None.")
        if self.TENANT_CACHE_TTL_SEC < 0.0:
            raise ValueError("TENANT_CACHE_TTL_SEC must be non-negative.")
        if self.NUM_PRINT_EXAMPLES < 0:
            raise ValueError("NUM_PRINT_EXAMPLES must be non-negative.")
        if self.CALENDAR_NAMES_PER_DAY < 0:
            raise ValueError("CALENDAR_NAMES_PER_DAY must be non-negative.")
        if (
            self.DATE_FROM is not None
            and self.DATE_TO is not None
            and self.DATE_TO < self.DATE_FROM
        ):
            raise ValueError("DATE_TO must not be before DATE_FROM.")


cfg = Config()
