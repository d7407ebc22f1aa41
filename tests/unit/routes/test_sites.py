"""End-to-end tests for the built-in routes against canned pages."""

import gzip
import json
from datetime import UTC, datetime, timedelta

import pytest

from feedroute.core.exceptions import RouteError
from feedroute.normalize.dates import CHINA_TZ
from feedroute.routes import (
    ChanmamaHotVideoRoute,
    ChinaCdcWeeklyRoute,
    GovPolicyRoute,
    KomatsuSewageRoute,
    PbcInterpretationRoute,
    SevenKidRoute,
    SsmSurveillanceRoute,
    StatsReleaseRoute,
    ZaixsDigestRoute,
)
from feedroute.routes import chanmama
from feedroute.routes.komatsu import JAPAN_TZ, PAGE_URL as KOMATSU_URL
from feedroute.routes.ssm import PAGE_URL as SSM_URL
from feedroute.routes.zaixs import desktop_link


def signed(data: bytes) -> list[int]:
    return [b - 256 if b > 127 else b for b in data]


# =============================================================================
# gov.cn
# =============================================================================

GOV_LIST = """
<div class="news_box"><div class="list list_1 list_2"><ul>
  <li><h4><a href="../content/202401/content_1.htm">关于促进经济发展的意见</a></h4></li>
  <li><h4><a href="https://www.gov.cn/zhengce/content/202401/content_2.htm">第二项政策</a></h4></li>
</ul></div></div>
"""


def gov_detail(text: str, published: str) -> str:
    return f"""
<html><head><meta name="firstpublishedtime" content="{published}"></head><body>
<div id="UCAP-CONTENT"><div class="trs_editor_view TRS_UEDITOR trs_paper_default"><p>{text}</p></div></div>
</body></html>
"""


class TestGovRoute:
    async def test_feed(self, web, route_kwargs):
        web.html("https://www.gov.cn/zhengce/zuixin/", GOV_LIST)
        web.html("https://www.gov.cn/zhengce/content/202401/content_1.htm", gov_detail("正文一", "2024-01-17-18:30:05"))
        web.html("https://www.gov.cn/zhengce/content/202401/content_2.htm", gov_detail("正文二", "2024-01-16-09:00:00"))

        feed = await GovPolicyRoute(**route_kwargs).run()

        assert feed.title == "国务院办公厅 - 最新政策"
        assert [i.title for i in feed.item] == ["关于促进经济发展的意见", "第二项政策"]
        assert feed.item[0].link == "https://www.gov.cn/zhengce/content/202401/content_1.htm"
        assert feed.item[0].description == "<p>正文一</p>"
        assert feed.item[0].pub_date == datetime(2024, 1, 17, 18, 30, 5, tzinfo=CHINA_TZ)

    async def test_failed_detail_keeps_entry(self, web, route_kwargs, metrics):
        web.html("https://www.gov.cn/zhengce/zuixin/", GOV_LIST)
        web.html("https://www.gov.cn/zhengce/content/202401/content_2.htm", gov_detail("正文二", "2024-01-16-09:00:00"))

        feed = await GovPolicyRoute(**route_kwargs).run()

        assert [i.description for i in feed.item] == ["", "<p>正文二</p>"]
        assert feed.item[0].pub_date is None
        assert metrics.summary().errors_by_route == {"gov": 1}

    async def test_warm_cache_skips_detail_fetch(self, web, route_kwargs):
        web.html("https://www.gov.cn/zhengce/zuixin/", GOV_LIST)
        web.html("https://www.gov.cn/zhengce/content/202401/content_1.htm", gov_detail("一", "2024-01-17-18:30:05"))
        web.html("https://www.gov.cn/zhengce/content/202401/content_2.htm", gov_detail("二", "2024-01-16-09:00:00"))
        route = GovPolicyRoute(**route_kwargs)

        await route.run()
        await route.run()

        assert web.requested("https://www.gov.cn/zhengce/content/202401/content_1.htm") == 1

    async def test_list_failure_raises_route_error(self, web, route_kwargs):
        web.html("https://www.gov.cn/zhengce/zuixin/", "down", status_code=502)

        with pytest.raises(RouteError) as exc_info:
            await GovPolicyRoute(**route_kwargs).run()

        assert exc_info.value.route == "gov"

    async def test_changed_layout_gives_empty_feed(self, web, route_kwargs):
        web.html("https://www.gov.cn/zhengce/zuixin/", "<html><body><p>new design</p></body></html>")

        feed = await GovPolicyRoute(**route_kwargs).run()

        assert feed.item == []


# =============================================================================
# zaixs (GBK detail pages, sanitization)
# =============================================================================

ZAIXS_LIST = """
<html><body>
<div>header</div>
<div><div><p>萧山生活</p><p>精华</p></div></div>
<ul id="news">
  <li><a href="/wap/thread/view-thread/tid/123"><div><h6>第一帖</h6></div></a></li>
  <li><a href="/wap/thread/view-thread/tid/456"><div><h6>第二帖</h6></div></a></li>
</ul>
</body></html>
"""

ZAIXS_THREAD = """
<html><head><meta charset="gbk"></head><body>
<div id="authorposton123">发表于 <span title="2024-1-5 08:30:00">3 天前</span></div>
<div class="t_fsz"><table><tr><td class="t_f">萧山正文 &amp; 图片
<div class="tip">下载附件</div>
<img zoomfile="https://img.zaixs.com/big.jpg" src="static/image/common/none.gif">
<img src="static/image/common/none.gif">
<span class="xs0">1.2 MB</span>
</td></tr></table></div>
<div class="t_fsz"><table><tr><td>回复</td></tr></table></div>
</body></html>
"""


class TestZaixsRoute:
    async def test_feed(self, web, route_kwargs):
        web.html("https://share.zaixs.com/wap/community/list?fid=112&digest=1", ZAIXS_LIST)
        web.raw("https://www.zaixs.com/thread-123-1-1.html", ZAIXS_THREAD.encode("gbk"))

        feed = await ZaixsDigestRoute(**route_kwargs).run({"fid": "112"})

        assert feed.title == "萧内网 萧山生活"
        assert feed.description == "萧内网 萧山生活 精华列表"
        assert feed.link == "https://share.zaixs.com/wap/community/list?fid=112&digest=1"

        # the second thread failed and is dropped
        assert len(feed.item) == 1
        item = feed.item[0]
        assert item.title == "第一帖"
        assert item.link == "https://www.zaixs.com/thread-123-1-1.html"
        assert item.pub_date == datetime(2024, 1, 5, 8, 30, tzinfo=CHINA_TZ)

        assert "萧山正文 &amp; 图片" in item.description
        assert 'src="https://img.zaixs.com/big.jpg"' in item.description
        assert "none.gif" not in item.description
        assert "下载附件" not in item.description
        assert "1.2 MB" not in item.description
        assert "回复" not in item.description

    async def test_requires_fid(self, route_kwargs):
        from feedroute.core.exceptions import ConfigurationError

        with pytest.raises(ConfigurationError):
            await ZaixsDigestRoute(**route_kwargs).run()

    def test_desktop_link_fallback(self):
        from feedroute.models.feed import ItemDescriptor

        d = ItemDescriptor(raw_link="/wap/other", link="https://share.zaixs.com/wap/other")

        assert desktop_link(d) == "https://share.zaixs.com/wap/other"


# =============================================================================
# 7kid (JSON API, gzip signed-byte content)
# =============================================================================

KID_API = "https://kidcms.7kid.com/api/javaphpcms/v1/no-auth"


class TestSevenKidRoute:
    async def test_feed(self, web, route_kwargs):
        web.json(
            f"{KID_API}/home/category-list?schoolId=718336990898551810",
            {
                "data": [
                    {"name": "通知", "articleList": [
                        {"id": 1, "title": "开学通知", "publishTime": 1700000000000},
                        {"id": 2, "title": "损坏内容", "publishTime": "2024-02-01 08:00:00"},
                    ]},
                    {"name": "空分类", "articleList": []},
                    {"name": "活动", "articleList": [{"id": 3, "title": "空内容", "publishTime": None}]},
                ]
            },
        )
        html = "<p>请家长按时送孩子入园。</p>"
        web.json(f"{KID_API}/get-detail?articleId=1", {"data": {"content": json.dumps(signed(gzip.compress(html.encode())))}})
        web.json(f"{KID_API}/get-detail?articleId=2", {"data": {"content": signed(b"not compressed")}})
        web.json(f"{KID_API}/get-detail?articleId=3", {"data": {"content": "[]"}})

        feed = await SevenKidRoute(**route_kwargs).run({"schoolId": "718336990898551810"})

        assert feed.title == "7kid - School ID: 718336990898551810"
        assert [i.title for i in feed.item] == ["开学通知", "损坏内容", "空内容"]
        assert [i.description for i in feed.item] == [html, "点击标题查看详情", "内容为空，无法解压。"]
        assert feed.item[0].link == "https://kidcms.7kid.com/#/detail?content_id=1"
        assert feed.item[0].pub_date == datetime(2023, 11, 14, 22, 13, 20, tzinfo=UTC)
        assert feed.item[1].pub_date == datetime(2024, 2, 1, 8, 0)
        assert feed.item[2].pub_date is None

    async def test_detail_requests_are_posts(self, web, route_kwargs):
        web.json(f"{KID_API}/home/category-list?schoolId=1", {"data": [{"articleList": [{"id": 9, "title": "t"}]}]})
        web.json(f"{KID_API}/get-detail?articleId=9", {"data": {"content": None}})

        await SevenKidRoute(**route_kwargs).run({"schoolId": "1"})

        assert {r.method for r in web.requests} == {"POST"}

    async def test_unexpected_listing(self, web, route_kwargs):
        web.json(f"{KID_API}/home/category-list?schoolId=1", {"code": 500, "data": {"msg": "error"}})

        with pytest.raises(RouteError):
            await SevenKidRoute(**route_kwargs).run({"schoolId": "1"})


# =============================================================================
# chanmama (single digest item)
# =============================================================================


class TestChanmamaRoute:
    async def test_feed(self, web, route_kwargs, monkeypatch):
        monkeypatch.setattr(chanmama, "report_day", lambda: "2024-01-16")
        videos = [
            {
                "aweme_title": f"视频{i}",
                "aweme_url": f"https://www.douyin.com/video/{i}?previous_page=app",
                "aweme_cover": f"https://p3.douyinpic.com/{i}.jpeg",
            }
            for i in range(1, 13)
        ]
        web.json(chanmama.API_URL.format(day="2024-01-16"), {"data": videos})

        feed = await ChanmamaHotVideoRoute(**route_kwargs).run()

        assert feed.title == "蝉妈妈 - 抖音热点视频日榜 Top 10 - 2024-01-16"
        assert len(feed.item) == 1
        digest = feed.item[0]
        assert digest.guid == "chanmama_hot_aweme_2024-01-16"
        assert digest.link == "https://www.chanmama.com/awake"
        assert digest.pub_date == datetime(2024, 1, 16, tzinfo=CHINA_TZ)
        assert '<a href="https://www.douyin.com/video/1" target="_blank">视频1</a>' in digest.description
        assert "10. " in digest.description
        assert "视频11" not in digest.description
        assert "previous_page" not in digest.description

    async def test_missing_data(self, web, route_kwargs, monkeypatch):
        monkeypatch.setattr(chanmama, "report_day", lambda: "2024-01-16")
        web.json(chanmama.API_URL.format(day="2024-01-16"), {"data": None})

        feed = await ChanmamaHotVideoRoute(**route_kwargs).run()

        assert feed.item[0].description == ""

    def test_report_day_is_yesterday_in_china(self):
        # 2024-03-01 01:00 in Shanghai is still February 29th in UTC
        now = datetime(2024, 2, 29, 17, 0, tzinfo=UTC)

        assert chanmama.report_day(now) == "2024-02-29"

    def test_render_escapes_titles(self):
        html = chanmama.render_ranking([{"aweme_title": "<b>", "aweme_url": "u", "aweme_cover": "c"}])

        assert "&lt;b&gt;" in html


# =============================================================================
# Single-page routes
# =============================================================================

KOMATSU_PAGE = """
<html><head>{meta}</head><body>
<div id="contents"><h1><span><span>下水モニタリング</span></span></h1>
<div id="social-update-area"><p>更新日 令和7年3月28日</p></div>
<div id="contents-in"><div class="free-layout-area"><div>
  <table><tr><td>3月第4週</td></tr></table>
</div></div></div></div>
</body></html>
"""


class TestKomatsuRoute:
    async def test_feed(self, web, route_kwargs):
        meta = '<meta name="nsls:timestamp" content="2025-03-28T10:00:00">'
        web.html(KOMATSU_URL, KOMATSU_PAGE.format(meta=meta))

        feed = await KomatsuSewageRoute(**route_kwargs).run()

        assert feed.title == "下水モニタリング／小松市"
        item = feed.item[0]
        assert item.title == "下水モニタリング - 更新日 令和7年3月28日"
        assert item.guid == "komatsu_sewer_monitoring_更新日 令和7年3月28日"
        assert item.description.startswith("<table>")
        assert item.pub_date == datetime(2025, 3, 28, 10, 0, tzinfo=JAPAN_TZ)

    async def test_missing_timestamp_uses_now(self, web, route_kwargs):
        web.html(KOMATSU_URL, KOMATSU_PAGE.format(meta=""))

        feed = await KomatsuSewageRoute(**route_kwargs).run()

        assert datetime.now(UTC) - feed.item[0].pub_date < timedelta(minutes=1)


SSM_PAGE = """
<html><body>
<div>nav</div><div>banner</div>
<div><div>menu</div><div><div><div>
  <table><tbody>
    <tr><th>日期</th><th>報告</th></tr>
    <tr><td>2024-01-15</td><td><a href="/apps1/report/2024-01-15.pdf">第2週</a></td></tr>
    <tr><td>2024-01-08</td><td><a href="/apps1/report/2024-01-08.pdf">第1週</a></td></tr>
  </tbody></table>
</div></div></div></div>
</body></html>
"""


class TestSsmRoute:
    async def test_feed(self, web, route_kwargs):
        web.html(SSM_URL, SSM_PAGE)

        feed = await SsmSurveillanceRoute(**route_kwargs).run()

        item = feed.item[0]
        assert len(feed.item) == 1
        assert item.title == "流感樣疾病和新冠病毒感染監測 2024-01-15"
        assert item.link == "https://www.ssm.gov.mo/apps1/report/2024-01-15.pdf"
        assert item.guid == "ssm_monitoring_2024-01-15"
        assert item.pub_date is None

    async def test_missing_row_links_to_page(self, web, route_kwargs):
        web.html(SSM_URL, "<html><body></body></html>")

        feed = await SsmSurveillanceRoute(**route_kwargs).run()

        assert feed.item[0].link == SSM_URL


# =============================================================================
# Other listing routes
# =============================================================================

PBC_LIST = """
<div id="11871"><table><tr><td><table><tr><td>
  <a href="/diaochatongjisi/116219/116225/5200001/index.html" title="2024年1月金融数据解读">2024年1月...</a>
  <a href="/diaochatongjisi/116219/116225/5200002/index.html">更多</a>
</td></tr></table></td></tr></table></div>
"""

PBC_DETAIL = """
<div id="11880"><div>导航</div><div><div>
  <table><tr><td>a</td></tr></table>
  <table><tr><td>b</td></tr></table>
  <table><tr><td>c</td></tr></table>
  <table><tr><td><p>解读正文</p></td></tr><tr><td>附件</td></tr></table>
</div></div></div>
<span id="shijian">2024年02月05日 16:30</span>
"""


class TestPbcRoute:
    async def test_feed(self, web, route_kwargs):
        web.html("http://www.pbc.gov.cn/diaochatongjisi/116219/116225/index.html", PBC_LIST)
        web.html("http://www.pbc.gov.cn/diaochatongjisi/116219/116225/5200001/index.html", PBC_DETAIL)

        feed = await PbcInterpretationRoute(**route_kwargs).run()

        assert [i.title for i in feed.item] == ["2024年1月金融数据解读", "无标题"]
        assert feed.item[0].description == "<p>解读正文</p>"
        assert feed.item[0].pub_date == datetime(2024, 2, 5, 16, 30, tzinfo=CHINA_TZ)
        assert feed.item[1].description == ""


STATS_LIST = """
<div class="wrapper-list-right"><div class="list-content"><ul>
  <li><a class="fl pc_1600" href="./202401/t20240117_1946624.html" title="2023年国民经济回升向好">2023年国民经济...</a></li>
  <li><a class="fl pc_1600" href="./202401/t20240112_1946500.html">2023年12月份居民消费价格</a></li>
  <li><a class="fl mobile" href="./202401/mobile.html">mobile only</a></li>
</ul></div></div>
"""


def stats_detail(text: str) -> str:
    return f"""
<div class="detail-title-des"><h2><p>发布时间：2024/01/17 10:00</p><p>来源：国家统计局</p></h2></div>
<div class="txt-content"><div class="trs_editor_view"><p>{text}</p></div></div>
"""


class TestStatsRoute:
    async def test_feed(self, web, route_kwargs):
        web.html("https://www.stats.gov.cn/sj/zxfb/", STATS_LIST)
        web.html("https://www.stats.gov.cn/sj/zxfb/202401/t20240117_1946624.html", stats_detail("国民经济"))
        web.html("https://www.stats.gov.cn/sj/zxfb/202401/t20240112_1946500.html", stats_detail("居民消费"))

        feed = await StatsReleaseRoute(**route_kwargs).run()

        assert [i.title for i in feed.item] == ["2023年国民经济回升向好", "2023年12月份居民消费价格"]
        assert feed.item[0].pub_date == datetime(2024, 1, 17, 10, 0, tzinfo=CHINA_TZ)
        assert feed.item[1].description == "<p>居民消费</p>"


CDC_LIST = "<ul class='xw_list'>" + "".join(
    f"<li><dl><dd><a href='./202401/t2024011{i}_1.html'>第{i}周监测</a></dd></dl></li>" for i in range(5)
) + "</ul>"


class TestChinaCdcRoute:
    async def test_feed_limited_to_four(self, web, route_kwargs):
        web.html("https://www.chinacdc.cn/jksj/jksj04_14275/", CDC_LIST)
        for i in range(5):
            web.html(
                f"https://www.chinacdc.cn/jksj/jksj04_14275/202401/t2024011{i}_1.html",
                f'<div class="xqCon"><span class="fb">日期：<em>2024-01-1{i}</em></span></div>'
                f'<div id="articleCon"><div><p>报告{i}</p></div></div>',
            )

        feed = await ChinaCdcWeeklyRoute(**route_kwargs).run()

        assert [i.title for i in feed.item] == ["第0周监测", "第1周监测", "第2周监测", "第3周监测"]
        assert feed.item[3].description == "<p>报告3</p>"
        assert feed.item[3].pub_date == datetime(2024, 1, 13, tzinfo=CHINA_TZ)
        assert web.requested("https://www.chinacdc.cn/jksj/jksj04_14275/202401/t20240114_1.html") == 0
