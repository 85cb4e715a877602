from .aggregate import get_first_order, get_total_spend, summarize

__all__ = ["get_first_order", "get_total_spend", "summarize"]
