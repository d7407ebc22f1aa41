"""gov.cn latest policies (最新政策)."""

from __future__ import annotations

from feedroute.html.document import HtmlDocument
from feedroute.models.feed import FeedDocument, ItemDescriptor, NormalizedItem, RouteInfo
from feedroute.normalize.dates import CHINA_TZ, parse_date
from feedroute.pipeline.assemble import assemble_feed
from feedroute.pipeline.listing import PipelineConfig
from feedroute.routes.base import BaseRoute

BASE_URL = "https://www.gov.cn/zhengce/zuixin/"

CONFIG = PipelineConfig(
    list_url=BASE_URL,
    item_selector="div.news_box .list.list_1.list_2 ul li h4 a",
    limit=10,
)

CONTENT_SELECTOR = "#UCAP-CONTENT > div.trs_editor_view.TRS_UEDITOR.trs_paper_default"
DATE_SELECTOR = 'meta[name="firstpublishedtime"]'


def parse_policy(document: HtmlDocument, descriptor: ItemDescriptor) -> NormalizedItem:
    # firstpublishedtime is "YYYY-MM-DD-HH:mm:ss"
    return NormalizedItem(
        title=descriptor.title,
        link=descriptor.link,
        description=document.inner_html(CONTENT_SELECTOR) or "",
        pub_date=parse_date(document.attr(DATE_SELECTOR, "content"), tz=CHINA_TZ),
    )


class GovPolicyRoute(BaseRoute):
    """Latest policy documents from the State Council portal."""

    key = "gov"
    info = RouteInfo(
        path="/zxzc",
        name="最新政策",
        url=BASE_URL,
        categories=("government",),
        example="/gov/zxzc",
        maintainers=("c71an",),
    )

    async def collect(self, params: dict[str, str]) -> FeedDocument:
        result = await self.pipeline(CONFIG, parse_policy).collect()
        return assemble_feed(
            "国务院办公厅 - 最新政策",
            BASE_URL,
            "中华人民共和国中央人民政府门户网站发布的最新政策信息。",
            result.items,
        )
