from enum import IntEnum
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from datetime import datetime

POSITIVE_STATUSES = frozenset({"success", "completed"})


class TimeRange(IntEnum):
    """Lookback window for the time-series query"""
    LAST_7_DAYS = 7
    LAST_30_DAYS = 30
    LAST_90_DAYS = 90

    @property
    def label(self) -> str:
        return f"Last {self.value} days"


class AnalyticsSummary(BaseModel):
    """Aggregate counters, computed by the backend"""
    model_config = ConfigDict(extra="ignore")

    total_scrapes: int = Field(..., ge=0)
    successful_scrapes: int = Field(..., ge=0)
    failed_scrapes: int = Field(..., ge=0)
    success_rate: float = Field(..., description="0-100, not re-derived client-side")
    average_duration_seconds: float
    fastest_scrape_seconds: float
    slowest_scrape_seconds: float
    largest_scrape_bytes: float
    total_data_bytes: float
    average_scrape_bytes: float
    unique_urls: int
    total_versions: int
    urls_with_changes: int


class TimeSeriesDataPoint(BaseModel):
    model_config = ConfigDict(extra="ignore")

    date: str = Field(..., description="ISO calendar date")
    scrapes_count: int
    success_rate: float
    avg_duration_seconds: float
    total_data_bytes: float


class DomainStats(BaseModel):
    model_config = ConfigDict(extra="ignore")

    domain: str
    scrapes_count: int
    success_rate: float
    avg_duration_seconds: float
    total_size_bytes: float


class RecentScrape(BaseModel):
    model_config = ConfigDict(extra="ignore")

    url: str
    status: str
    duration_seconds: float
    size_bytes: float
    completed_at: datetime
    error: Optional[str] = None

    @property
    def is_success(self) -> bool:
        return self.status in POSITIVE_STATUSES


class AnalyticsSnapshot(BaseModel):
    """Result of one fetch cycle. Always complete: all four entities or nothing."""
    summary: AnalyticsSummary
    time_series: List[TimeSeriesDataPoint] = Field(default_factory=list)
    domains: List[DomainStats] = Field(default_factory=list)
    recent: List[RecentScrape] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)
