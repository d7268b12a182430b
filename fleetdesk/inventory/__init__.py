"""Workshop inventory rules."""

from .stock import build_follow_up, consume_part, needs_follow_up, refresh_status, stock_status

__all__ = ["build_follow_up", "consume_part", "needs_follow_up", "refresh_status", "stock_status"]
