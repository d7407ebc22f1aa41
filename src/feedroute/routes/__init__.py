"""Site routes and the route registry."""

from feedroute.routes.base import BaseRoute
from feedroute.routes.chanmama import ChanmamaHotVideoRoute
from feedroute.routes.chinacdc import ChinaCdcWeeklyRoute
from feedroute.routes.gov import GovPolicyRoute
from feedroute.routes.komatsu import KomatsuSewageRoute
from feedroute.routes.pbc import PbcInterpretationRoute
from feedroute.routes.registry import (
    all_routes,
    clear_cache,
    discover_routes,
    get_route,
    list_routes,
    register_route,
    unregister_route,
)
from feedroute.routes.sevenkid import SevenKidRoute
from feedroute.routes.ssm import SsmSurveillanceRoute
from feedroute.routes.stats import StatsReleaseRoute
from feedroute.routes.zaixs import ZaixsDigestRoute

BUILTIN_ROUTES: tuple[type[BaseRoute], ...] = (
    SevenKidRoute,
    ChanmamaHotVideoRoute,
    ChinaCdcWeeklyRoute,
    GovPolicyRoute,
    KomatsuSewageRoute,
    PbcInterpretationRoute,
    SsmSurveillanceRoute,
    StatsReleaseRoute,
    ZaixsDigestRoute,
)

for _route in BUILTIN_ROUTES:
    register_route(_route)

__all__ = [
    # Base
    "BaseRoute",
    "BUILTIN_ROUTES",
    # Registry
    "all_routes",
    "clear_cache",
    "discover_routes",
    "get_route",
    "list_routes",
    "register_route",
    "unregister_route",
    # Routes
    "ChanmamaHotVideoRoute",
    "ChinaCdcWeeklyRoute",
    "GovPolicyRoute",
    "KomatsuSewageRoute",
    "PbcInterpretationRoute",
    "SevenKidRoute",
    "SsmSurveillanceRoute",
    "StatsReleaseRoute",
    "ZaixsDigestRoute",
]
