"""Macao Health Bureau influenza-like illness and COVID-19 surveillance."""

from __future__ import annotations

from feedroute.html.document import HtmlDocument
from feedroute.models.feed import FeedDocument, NormalizedItem, RouteInfo
from feedroute.pipeline.assemble import assemble_feed
from feedroute.pipeline.extract import absolute_link
from feedroute.routes.base import BaseRoute

PAGE_URL = (
    "https://www.ssm.gov.mo/apps1/statistics/"
    "%E6%B5%81%E6%84%9F%E6%A8%A3%E7%96%BE%E7%97%85%E5%92%8C%E6%96%B0%E5%86%A0"
    "%E7%97%85%E6%AF%92%E6%84%9F%E6%9F%93%E7%9B%A3%E6%B8%AC"
)
REPORT_NAME = "流感樣疾病和新冠病毒感染監測"

# Newest report is the first data row of the first table
ROW_SELECTOR = (
    "body > div:nth-of-type(3) > div:nth-of-type(2) > div > div"
    " > table:nth-of-type(1) > tbody > tr:nth-of-type(2)"
)
DATE_SELECTOR = f"{ROW_SELECTOR} > td:nth-of-type(1)"
LINK_SELECTOR = f"{ROW_SELECTOR} > td:nth-of-type(2) > a"


def parse_latest(document: HtmlDocument) -> NormalizedItem:
    date_text = document.text(DATE_SELECTOR)
    href = document.attr(LINK_SELECTOR, "href")
    return NormalizedItem(
        title=f"{REPORT_NAME} {date_text}",
        link=absolute_link(href, PAGE_URL) if href else PAGE_URL,
        description=f"澳門特別行政區政府衛生局公佈的 {date_text} 監測報告，請點擊查看詳情。",
        guid=f"ssm_monitoring_{date_text}",
    )


class SsmSurveillanceRoute(BaseRoute):
    key = "ssm"
    info = RouteInfo(
        path="/week",
        name=REPORT_NAME,
        url=PAGE_URL,
        categories=("government", "health"),
        example="/ssm/week",
        maintainers=("c71an",),
    )

    async def collect(self, params: dict[str, str]) -> FeedDocument:
        document = HtmlDocument(await self.client.get_text(PAGE_URL))
        return assemble_feed(
            f"{REPORT_NAME} - 澳門特別行政區政府衛生局",
            PAGE_URL,
            f"澳門特別行政區政府衛生局 {REPORT_NAME}數據",
            [parse_latest(document)],
        )
