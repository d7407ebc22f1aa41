"""China CDC weekly sentinel surveillance of acute respiratory infections."""

from __future__ import annotations

from feedroute.html.document import HtmlDocument
from feedroute.models.feed import FeedDocument, ItemDescriptor, NormalizedItem, RouteInfo
from feedroute.normalize.dates import CHINA_TZ, parse_date
from feedroute.pipeline.assemble import assemble_feed
from feedroute.pipeline.listing import PipelineConfig
from feedroute.routes.base import BaseRoute

BASE_URL = "https://www.chinacdc.cn/jksj/jksj04_14275/"

CONFIG = PipelineConfig(
    list_url=BASE_URL,
    item_selector=".xw_list > li > dl > dd > a",
    limit=4,
)


def parse_report(document: HtmlDocument, descriptor: ItemDescriptor) -> NormalizedItem:
    return NormalizedItem(
        title=descriptor.title,
        link=descriptor.link,
        description=document.inner_html("#articleCon > div") or "",
        pub_date=parse_date(document.text("div.xqCon span.fb em"), tz=CHINA_TZ),
    )


class ChinaCdcWeeklyRoute(BaseRoute):
    key = "chinacdc"
    info = RouteInfo(
        path="/week",
        name="全国急性呼吸道传染病哨点监测情况",
        url=BASE_URL,
        categories=("health",),
        example="/chinacdc/week",
        maintainers=("c71an",),
    )

    async def collect(self, params: dict[str, str]) -> FeedDocument:
        result = await self.pipeline(CONFIG, parse_report).collect()
        return assemble_feed(
            "全国急性呼吸道传染病哨点监测情况 - 中国疾病预防控制中心",
            BASE_URL,
            "中国疾病预防控制中心发布的全国急性呼吸道传染病哨点监测情况报告。",
            result.items,
        )
