"""Job outcome models"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class JobResult:
    """Outcome of a single job."""

    name: str
    status: str
    error: Optional[BaseException] = None
    duration: float = 0.0


@dataclass
class JobSummary:
    """Aggregate of all job outcomes, results in submission order."""

    total: int = 0
    success: int = 0
    failed: int = 0
    skipped: int = 0
    results: List[JobResult] = field(default_factory=list)
