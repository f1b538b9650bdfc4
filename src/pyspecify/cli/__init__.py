"""CLI helpers exposed for other modules."""

from .ui import Step, StepStatus, StepTracker, select_with_arrows

__all__ = ["Step", "StepStatus", "StepTracker", "select_with_arrows"]
