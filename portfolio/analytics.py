"""
Simulated site analytics for the admin dashboard demo.

Daily traffic is randomly generated; totals are aggregated with pandas.
Pass a seed for reproducible numbers.
"""
import random
from datetime import date
from typing import Optional

import pandas as pd

PERIODS = {
    "7d": 7,
    "30d": 30,
    "90d": 90,
    "12m": 365,
}
DEFAULT_PERIOD = "30d"

# (low, high) inclusive ranges per daily metric
DAILY_RANGES = {
    "visitors": (500, 1499),
    "pageViews": (1500, 4499),
    "sessions": (400, 1199),
    "bounceRate": (20, 49),
    "avgSessionDuration": (120, 419),
}

TOP_PAGES = [
    {"path": "/", "title": "Home", "views": 12500, "avgTime": "2:34"},
    {"path": "/ai-powered-ecommerce", "title": "AI E-Commerce", "views": 8200, "avgTime": "3:45"},
    {"path": "/saas-task-manager", "title": "Task Manager", "views": 6800, "avgTime": "4:12"},
    {"path": "/ai-resume-analyzer", "title": "Resume Analyzer", "views": 5400, "avgTime": "5:30"},
    {"path": "/admin-dashboard", "title": "Admin Dashboard", "views": 4200, "avgTime": "3:15"},
    {"path": "/cpp-dev-tools", "title": "C++ Tools", "views": 3800, "avgTime": "6:20"},
]

TRAFFIC_SOURCES = [
    {"source": "Organic Search", "visitors": 45000, "percentage": 35},
    {"source": "Direct", "visitors": 32000, "percentage": 25},
    {"source": "Social Media", "visitors": 25600, "percentage": 20},
    {"source": "Referral", "visitors": 15400, "percentage": 12},
    {"source": "Email", "visitors": 10200, "percentage": 8},
]

DEVICE_STATS = {"desktop": 58, "mobile": 35, "tablet": 7}

GEOGRAPHIC_DATA = [
    {"country": "United States", "visitors": 35000, "percentage": 28},
    {"country": "United Kingdom", "visitors": 15000, "percentage": 12},
    {"country": "Germany", "visitors": 12000, "percentage": 10},
    {"country": "Egypt", "visitors": 10000, "percentage": 8},
    {"country": "India", "visitors": 9000, "percentage": 7},
    {"country": "Other", "visitors": 44000, "percentage": 35},
]


def period_days(period: Optional[str]) -> int:
    return PERIODS.get(period or DEFAULT_PERIOD, PERIODS[DEFAULT_PERIOD])


def generate_time_series(period: str, rng: random.Random, end: Optional[date] = None) -> list[dict]:
    """
    Generate one row of traffic numbers per day, oldest first, ending today.

    Returns:
        List of {date, visitors, pageViews, sessions, bounceRate, avgSessionDuration}
    """
    days = period_days(period)
    dates = pd.date_range(end=pd.Timestamp(end or date.today()), periods=days, freq="D")

    rows = []
    for day in dates.strftime("%Y-%m-%d"):
        row = {"date": day}
        for metric, (low, high) in DAILY_RANGES.items():
            row[metric] = rng.randint(low, high)
        rows.append(row)
    return rows


def compute_totals(time_series: list[dict]) -> dict:
    """Sum traffic counts and average the per-day rates."""
    if not time_series:
        return {"visitors": 0, "pageViews": 0, "sessions": 0, "avgBounceRate": 0, "avgSessionDuration": 0}

    df = pd.DataFrame(time_series)
    return {
        "visitors": int(df["visitors"].sum()),
        "pageViews": int(df["pageViews"].sum()),
        "sessions": int(df["sessions"].sum()),
        "avgBounceRate": int(round(df["bounceRate"].mean())),
        "avgSessionDuration": int(round(df["avgSessionDuration"].mean())),
    }


def metric_view(metric: str, time_series: list[dict], totals: dict) -> Optional[dict]:
    """Single-metric payload, or None for an unknown metric."""
    if metric in ("visitors", "pageViews"):
        return {
            "total": totals[metric],
            "data": [{"date": row["date"], "value": row[metric]} for row in time_series],
        }
    if metric == "topPages":
        return {"pages": TOP_PAGES}
    if metric == "traffic":
        return {"sources": TRAFFIC_SOURCES}
    if metric == "devices":
        return {"devices": DEVICE_STATS}
    if metric == "geographic":
        return {"countries": GEOGRAPHIC_DATA}
    return None


def build_analytics(period: Optional[str] = None, metric: Optional[str] = None, seed: Optional[int] = None) -> dict:
    """
    Build the analytics payload for the admin dashboard.

    Args:
        period: 7d, 30d, 90d or 12m (unknown values fall back to 30 days)
        metric: Optional single metric to return instead of the dashboard
        seed: Optional RNG seed

    Returns:
        JSON-ready dict
    """
    period = period or DEFAULT_PERIOD
    rng = random.Random(seed)

    time_series = generate_time_series(period, rng)
    totals = compute_totals(time_series)

    if metric:
        view = metric_view(metric, time_series, totals)
        if view is not None:
            return view

    return {
        "period": period,
        "summary": {
            "totalVisitors": totals["visitors"],
            "totalPageViews": totals["pageViews"],
            "totalSessions": totals["sessions"],
            "avgBounceRate": totals["avgBounceRate"],
            "avgSessionDuration": totals["avgSessionDuration"],
            "visitorsChange": rng.randint(-5, 14),
            "pageViewsChange": rng.randint(-5, 19),
        },
        "timeSeries": time_series,
        "topPages": TOP_PAGES,
        "trafficSources": TRAFFIC_SOURCES,
        "devices": DEVICE_STATS,
        "geographic": GEOGRAPHIC_DATA,
    }
