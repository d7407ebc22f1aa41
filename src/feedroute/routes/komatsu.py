"""Komatsu city sewage surveillance (下水モニタリング).

A single report page that is updated in place, published as one item
keyed by its update notice.
"""

from __future__ import annotations

from datetime import timedelta, timezone

from feedroute.html.document import HtmlDocument
from feedroute.models.feed import FeedDocument, NormalizedItem, RouteInfo
from feedroute.normalize.dates import now_fallback, parse_date
from feedroute.pipeline.assemble import assemble_feed
from feedroute.routes.base import BaseRoute

PAGE_URL = "https://www.city.komatsu.lg.jp/soshiki/1042/surveillance/14588.html"
JAPAN_TZ = timezone(timedelta(hours=9), "Asia/Tokyo")


def parse_report(document: HtmlDocument) -> NormalizedItem:
    title = document.text("#contents > h1 > span > span")
    # e.g. "更新日 令和7年3月28日"
    updated = document.text("#social-update-area > p")
    body = (document.inner_html("#contents-in > div.free-layout-area > div") or "").strip()

    # the page has no date when the CMS timestamp is missing
    published = parse_date(document.attr('meta[name="nsls:timestamp"]', "content"), tz=JAPAN_TZ)

    return NormalizedItem(
        title=f"{title} - {updated}",
        link=PAGE_URL,
        description=body,
        pub_date=published or now_fallback(),
        guid=f"komatsu_sewer_monitoring_{updated}",
    )


class KomatsuSewageRoute(BaseRoute):
    key = "komatsu"
    info = RouteInfo(
        path="/week",
        name="小松市 下水モニタリング",
        url=PAGE_URL,
        categories=("health",),
        example="/komatsu/week",
        maintainers=("c71an",),
    )

    async def collect(self, params: dict[str, str]) -> FeedDocument:
        document = HtmlDocument(await self.client.get_text(PAGE_URL))
        title = document.text("#contents > h1 > span > span")
        return assemble_feed(
            f"{title}／小松市",
            PAGE_URL,
            "小松市的 COVID-19 下水监测数据更新",
            [parse_report(document)],
        )
