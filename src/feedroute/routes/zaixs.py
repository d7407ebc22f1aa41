"""Zaixs (萧内网) community board digest threads.

The digest list is read from the mobile site; each thread is then fetched
from the desktop forum, which serves GBK. Only the first post is kept,
stripped of attachment tips and with lazy-loaded images resolved.
"""

from __future__ import annotations

import re

from feedroute.html.document import HtmlDocument
from feedroute.models.feed import FeedDocument, ItemDescriptor, NormalizedItem, RouteInfo
from feedroute.normalize.dates import CHINA_TZ, parse_date
from feedroute.normalize.sanitize import sanitize
from feedroute.pipeline.assemble import assemble_feed
from feedroute.pipeline.listing import PipelineConfig
from feedroute.routes.base import BaseRoute

LIST_URL = "https://share.zaixs.com/wap/community/list?fid={fid}&digest=1"
THREAD_URL = "https://www.zaixs.com/thread-{tid}-1-1.html"

TIP_MARKERS = "div.tip, div.aimg_tip, .xs0, .tip_horn"
CHANNEL_TITLE_SELECTOR = "body > div:nth-of-type(2) > div > p:nth-of-type(1)"

_THREAD_ID_RE = re.compile(r"tid/(\d+)")


def pipeline_config(fid: str) -> PipelineConfig:
    return PipelineConfig(
        list_url=LIST_URL.format(fid=fid),
        item_selector="#news li",
        limit=10,
        title_selector="a div h6",
        link_selector="a",
        list_headers={"Host": "share.zaixs.com"},
        detail_headers={"Host": "www.zaixs.com"},
        detail_encoding="gbk",
        decode_entities=False,
        fallback_description=None,
    )


def desktop_link(descriptor: ItemDescriptor) -> str:
    """Map a mobile thread link (``.../tid/123``) to the desktop thread page.

    Example:
        >>> d = ItemDescriptor(raw_link="/wap/thread/view-thread/tid/42", link="https://share.zaixs.com/wap/thread/view-thread/tid/42")
        >>> desktop_link(d)
        'https://www.zaixs.com/thread-42-1-1.html'
    """
    match = _THREAD_ID_RE.search(descriptor.raw_link)
    if match:
        return THREAD_URL.format(tid=match.group(1))
    return descriptor.link


def parse_thread(document: HtmlDocument, descriptor: ItemDescriptor) -> NormalizedItem:
    # post time sits in the title attribute of the first author bar
    posted = document.attr('[id^="authorposton"] span[title]', "title")

    description = ""
    post = document.node("div.t_fsz table")
    if post is not None:
        sanitize(post, TIP_MARKERS)
        description = document.inner_html(post.tag) or ""

    return NormalizedItem(
        title=descriptor.title,
        link=descriptor.link,
        description=description,
        pub_date=parse_date(posted, tz=CHINA_TZ),
    )


class ZaixsDigestRoute(BaseRoute):
    """Digest threads of one board, identified by ``fid``."""

    key = "zaixs"
    info = RouteInfo(
        path="/:fid",
        name="社区板块精华帖",
        url="https://share.zaixs.com",
        categories=("bbs",),
        example="/zaixs/112",
        parameters={"fid": "板块 ID"},
        maintainers=("c71an",),
    )

    async def collect(self, params: dict[str, str]) -> FeedDocument:
        config = pipeline_config(params["fid"])
        result = await self.pipeline(config, parse_thread, rewrite_link=desktop_link).collect()
        channel = result.document.text(CHANNEL_TITLE_SELECTOR)
        return assemble_feed(
            f"萧内网 {channel}",
            config.list_url,
            f"萧内网 {channel} 精华列表",
            result.items,
        )
