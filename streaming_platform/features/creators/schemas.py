from __future__ import annotations

from pydantic import BaseModel


class CreatorContentEarningsItem(BaseModel):
    content_id: int
    title: str
    sales: int
    amount_gross: int
    amount_creator: int


class CreatorDashboardResponse(BaseModel):
    creator: str
    total_sales: int
    total_amount_gross: int
    total_amount_creator: int
    content_count: int
    subscriber_count: int
    platform_fee_percent: int
    earnings_by_content: list[CreatorContentEarningsItem]
