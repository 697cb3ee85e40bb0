"""Deletion outcome models"""
from dataclasses import dataclass
from typing import Optional, Tuple, List

from git_tidy.models.branch import Branch


@dataclass
class DeletionResult:
    """Outcome of processing one selected branch."""
    branch: Branch
    success: bool = True
    deleted_local: bool = False
    deleted_remote: bool = False
    error: Optional[str] = None

    def record_failure(self, side: str, message: str) -> None:
        """Mark the result failed and append a side-tagged message (e.g. "Local: ...")."""
        self.success = False
        entry = f"{side}: {message}"
        self.error = entry if not self.error else f"{self.error}; {entry}"


@dataclass(frozen=True)
class DeletionSummary:
    """Aggregate of a complete executor pass. Built once, never updated."""
    total: int
    successful: int
    failed: int
    skipped: int
    results: Tuple[DeletionResult, ...]

    @classmethod
    def from_results(cls, results: List[DeletionResult]) -> "DeletionSummary":
        successful = sum(1 for r in results if r.success)
        return cls(
            total=len(results),
            successful=successful,
            failed=len(results) - successful,
            skipped=0,  # Nothing in the current flow is skipped
            results=tuple(results),
        )

    @property
    def failures(self) -> List[DeletionResult]:
        return [r for r in self.results if not r.success]
