"""
Insights analytics module.
Re-exports analytics functions.

Submodules:
    - revenue: Prorated revenue and occupancy statistics
    - occupancy: Desk status counts
"""

# Revenue analytics
from models.insights.revenue import (
    calculate_prorated_revenue,
    count_occupied_days,
    calculate_revenue_by_status,
    calculate_stats,
    calculate_monthly_stats,
    calculate_date_range_stats,
)

# Occupancy analytics
from models.insights.occupancy import (
    get_desk_stats,
)

__all__ = [
    # Revenue
    'calculate_prorated_revenue',
    'count_occupied_days',
    'calculate_revenue_by_status',
    'calculate_stats',
    'calculate_monthly_stats',
    'calculate_date_range_stats',
    # Occupancy
    'get_desk_stats',
]
