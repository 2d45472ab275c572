"""bizops_pipeline package.

Contains modules for keeping business-operations collections (sales
transactions, fixed costs, payroll and contractor payments, KPI metrics),
validating them at the boundary, and deriving monthly/yearly summaries,
month-over-month trends and KPI progress for a reporting dashboard.

Architecture:
- Records are validated by Pydantic models before they reach any aggregate
- Aggregation is a chain of pure functions: bucket → categories → summary → trend
- Collections are persisted as JSON blobs (default) or MongoDB collections
- Dask is used for partitioned bulk imports
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
