"""Period aggregation helpers.

This package turns flat collections of dated monetary records into per-month
summaries and trends: records are bucketed by `YYYY-MM` period, summed per
category, assembled into `PeriodSummary` objects and compared pairwise. Every
function is pure and recomputes from the collection it is given.
"""
