"""People's Bank of China data interpretation (数据解读)."""

from __future__ import annotations

from feedroute.html.document import HtmlDocument
from feedroute.models.feed import FeedDocument, ItemDescriptor, NormalizedItem, RouteInfo
from feedroute.normalize.dates import CHINA_TZ, parse_date
from feedroute.pipeline.assemble import assemble_feed
from feedroute.pipeline.listing import PipelineConfig
from feedroute.routes.base import BaseRoute

BASE_URL = "http://www.pbc.gov.cn/diaochatongjisi/116219/116225/index.html"

# Container ids start with a digit, so they are matched as attributes
CONFIG = PipelineConfig(
    list_url=BASE_URL,
    item_selector='[id="11871"] table table a',
    limit=10,
    title_attr="title",
    title_attr_only=True,
    default_title="无标题",
)

CONTENT_SELECTOR = '[id="11880"] > div:nth-child(2) > div table:nth-child(4) tr:nth-of-type(1) td'
DATE_FORMAT = "YYYY年MM月DD日 HH:mm"


def parse_interpretation(document: HtmlDocument, descriptor: ItemDescriptor) -> NormalizedItem:
    return NormalizedItem(
        title=descriptor.title,
        link=descriptor.link,
        description=document.inner_html(CONTENT_SELECTOR) or "",
        pub_date=parse_date(document.text("#shijian"), DATE_FORMAT, tz=CHINA_TZ),
    )


class PbcInterpretationRoute(BaseRoute):
    key = "pbc"
    info = RouteInfo(
        path="/sjjd",
        name="数据解读",
        url=BASE_URL,
        categories=("finance",),
        example="/pbc/sjjd",
        maintainers=("c71an",),
    )

    async def collect(self, params: dict[str, str]) -> FeedDocument:
        result = await self.pipeline(CONFIG, parse_interpretation).collect()
        return assemble_feed("中国人民银行 - 数据解读", BASE_URL, "中国人民银行调查统计司", result.items)
