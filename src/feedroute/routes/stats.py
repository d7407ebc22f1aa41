"""National Bureau of Statistics latest releases (最新数据发布)."""

from __future__ import annotations

from feedroute.html.document import HtmlDocument
from feedroute.models.feed import FeedDocument, ItemDescriptor, NormalizedItem, RouteInfo
from feedroute.normalize.dates import CHINA_TZ, parse_date
from feedroute.pipeline.assemble import assemble_feed
from feedroute.pipeline.listing import PipelineConfig
from feedroute.routes.base import BaseRoute

BASE_URL = "https://www.stats.gov.cn/sj/zxfb/"

CONFIG = PipelineConfig(
    list_url=BASE_URL,
    item_selector="div.wrapper-list-right .list-content ul li a.fl.pc_1600",
    limit=10,
    title_attr="title",
)

# lxml closes <h2> when a <p> opens inside it, leaving the paragraphs as siblings
DATE_SELECTOR = ".detail-title-des h2 p, .detail-title-des h2 ~ p"


def parse_release(document: HtmlDocument, descriptor: ItemDescriptor) -> NormalizedItem:
    # first <p> reads "发布时间：2023年01月01日 10:00"
    return NormalizedItem(
        title=descriptor.title,
        link=descriptor.link,
        description=document.inner_html(".txt-content .trs_editor_view") or "",
        pub_date=parse_date(document.text(DATE_SELECTOR), tz=CHINA_TZ),
    )


class StatsReleaseRoute(BaseRoute):
    key = "stats"
    info = RouteInfo(
        path="/sjfb",
        name="最新数据发布",
        url=BASE_URL,
        categories=("government",),
        example="/stats/sjfb",
        maintainers=("c71an",),
    )

    async def collect(self, params: dict[str, str]) -> FeedDocument:
        result = await self.pipeline(CONFIG, parse_release).collect()
        return assemble_feed(
            "国家统计局 - 最新数据发布",
            BASE_URL,
            "中华人民共和国国家统计局官网最新数据发布栏目。",
            result.items,
        )
