"""7kid school CMS articles.

The listing is a JSON API returning article groups per category. Article
bodies come from a second API call as gzip streams encoded as arrays of
signed bytes.
"""

from __future__ import annotations

from typing import Any

from feedroute.core.exceptions import FetchError
from feedroute.models.feed import FeedDocument, ItemDescriptor, NormalizedItem, RouteInfo
from feedroute.normalize.dates import parse_date
from feedroute.normalize.encoding import decode_byte_payload, inflate_payload
from feedroute.pipeline.assemble import assemble_feed
from feedroute.pipeline.extract import describe_records, flatten_groups, json_path
from feedroute.pipeline.resolve import DetailResolver
from feedroute.routes.base import BaseRoute

API_BASE = "https://kidcms.7kid.com/api/javaphpcms/v1/no-auth"
SITE_URL = "https://kidcms.7kid.com"
DETAIL_LINK = "https://kidcms.7kid.com/#/detail?content_id={id}"

DEFAULT_DESCRIPTION = "点击标题查看详情"
EMPTY_CONTENT = "内容为空，无法解压。"


def article_link(record: dict[str, Any]) -> str:
    return DETAIL_LINK.format(id=record.get("id"))


def article_item(descriptor: ItemDescriptor, description: str) -> NormalizedItem:
    record = descriptor.inline_data or {}
    return NormalizedItem(
        title=descriptor.title,
        link=descriptor.link,
        description=description,
        pub_date=parse_date(record.get("publishTime")),
    )


def decode_article(content: Any) -> str:
    """Turn the ``content`` field of a detail response into HTML.

    An absent or empty byte array yields a notice instead of an error.
    """
    data = decode_byte_payload(content)
    if not data:
        return EMPTY_CONTENT
    return inflate_payload(data)


class SevenKidRoute(BaseRoute):
    """Published articles of one school, identified by ``schoolId``."""

    key = "7kid"
    info = RouteInfo(
        path="/:schoolId",
        name="文章列表",
        url=SITE_URL,
        categories=("education",),
        example="/7kid/718336990898551810",
        parameters={"schoolId": "学校 ID"},
        maintainers=("c71an",),
    )

    async def fetch_articles(self, school_id: str) -> list[ItemDescriptor]:
        url = f"{API_BASE}/home/category-list?schoolId={school_id}"
        payload = await self.client.post_json(url)
        groups = json_path(payload, "data")
        if not isinstance(groups, list):
            raise FetchError(f"Unexpected category list from {url}", url=url)
        return describe_records(flatten_groups(groups, "articleList"), article_link)

    async def fetch_detail(self, descriptor: ItemDescriptor) -> NormalizedItem:
        url = f"{API_BASE}/get-detail?articleId={descriptor.identifier}"
        payload = await self.client.post_json(url)
        return article_item(descriptor, decode_article(json_path(payload, "data.content")))

    async def collect(self, params: dict[str, str]) -> FeedDocument:
        school_id = params["schoolId"]
        descriptors = await self.fetch_articles(school_id)

        resolver = DetailResolver(
            cache=self.cache,
            metrics=self.metrics,
            route=self.key,
            ttl=self.settings.cache_ttl or None,
        )
        items = await resolver.resolve_all(
            descriptors,
            self.fetch_detail,
            lambda descriptor, error: article_item(descriptor, DEFAULT_DESCRIPTION),
        )

        return assemble_feed(
            f"7kid - School ID: {school_id}",
            SITE_URL,
            f"7kid CMS School ID {school_id} 最新文章",
            items,
        )
