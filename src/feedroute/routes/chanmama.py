"""Chanmama Douyin hot video daily ranking, top 10."""

from __future__ import annotations

import html
from datetime import datetime, timedelta
from typing import Any

from feedroute.models.feed import FeedDocument, NormalizedItem, RouteInfo
from feedroute.normalize.dates import CHINA_TZ
from feedroute.pipeline.assemble import assemble_feed
from feedroute.pipeline.extract import json_path
from feedroute.routes.base import BaseRoute

API_URL = (
    "https://api-service.chanmama.com/v1/home/rank/hotAweme"
    "?day_type=day&day={day}&star_category=&order_by=synthesize&page=1&size=50"
)
SITE_URL = "https://www.chanmama.com/awake"
TOP_N = 10


def report_day(now: datetime | None = None) -> str:
    """The ranking day: yesterday in China time, as ``YYYY-MM-DD``.

    Example:
        >>> report_day(datetime(2024, 3, 1, 8, tzinfo=CHINA_TZ))
        '2024-02-29'
    """
    now = now or datetime.now(CHINA_TZ)
    return (now.astimezone(CHINA_TZ) - timedelta(days=1)).strftime("%Y-%m-%d")


def strip_query(url: str) -> str:
    return url.split("?", 1)[0]


def render_ranking(videos: list[dict[str, Any]]) -> str:
    """One block per video: numbered title link, then its cover."""
    blocks = []
    for rank, video in enumerate(videos, start=1):
        title = html.escape(str(video.get("aweme_title") or ""))
        url = html.escape(strip_query(str(video.get("aweme_url") or "")))
        cover = html.escape(str(video.get("aweme_cover") or ""))
        blocks.append(
            f'<p><strong>{rank}. <a href="{url}" target="_blank">{title}</a></strong></p>\n'
            f'<p><img src="{cover}" alt="{title} 封面" /></p>'
        )
    return "\n".join(blocks)


class ChanmamaHotVideoRoute(BaseRoute):
    """Yesterday's top Douyin videos as a single digest item."""

    key = "chanmama"
    info = RouteInfo(
        path="/dy",
        name="抖音热点视频日榜 Top 10",
        url="https://www.chanmama.com",
        categories=("social-media",),
        example="/chanmama/dy",
        maintainers=("c71an",),
    )

    async def collect(self, params: dict[str, str]) -> FeedDocument:
        day = report_day()
        payload = await self.client.get_json(API_URL.format(day=day))
        videos = json_path(payload, "data")
        videos = videos[:TOP_N] if isinstance(videos, list) else []

        digest = NormalizedItem(
            title=f"抖音日榜 Top 10 视频 - {day}",
            link=SITE_URL,
            description=render_ranking(videos),
            pub_date=datetime.strptime(day, "%Y-%m-%d").replace(tzinfo=CHINA_TZ),
            guid=f"chanmama_hot_aweme_{day}",
        )
        self.metrics.record_items(self.key, count=len(videos))

        return assemble_feed(
            f"蝉妈妈 - 抖音热点视频日榜 Top 10 - {day}",
            SITE_URL,
            f"蝉妈妈提供的抖音热点视频日榜 Top 10，数据截止至 {day}",
            [digest],
        )
