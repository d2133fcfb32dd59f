from .cli import run
from .runtime import MergeReport, SourceResult, run_merge

__all__ = ["MergeReport", "SourceResult", "run", "run_merge"]
