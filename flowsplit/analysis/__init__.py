"""Analysis tools for checking and summarizing routers."""

from flowsplit.analysis.router_check import (
    BranchSummary,
    RouterInvariantError,
    RouterIssue,
    RouterSummary,
    assert_router_valid,
    check_router,
    summarize_router,
)

__all__ = [
    "BranchSummary",
    "RouterInvariantError",
    "RouterIssue",
    "RouterSummary",
    "assert_router_valid",
    "check_router",
    "summarize_router",
]
