"""Feed extraction pipeline: extract, resolve, assemble."""

from feedroute.pipeline.assemble import assemble_feed
from feedroute.pipeline.extract import (
    absolute_link,
    describe_records,
    flatten_groups,
    json_path,
    select_links,
)
from feedroute.pipeline.listing import ListingPipeline, ListingResult, PipelineConfig
from feedroute.pipeline.resolve import DetailResolver, cache_key

__all__ = [
    # Extraction
    "absolute_link",
    "describe_records",
    "flatten_groups",
    "json_path",
    "select_links",
    # Resolution
    "DetailResolver",
    "cache_key",
    # Assembly
    "assemble_feed",
    # Generic listing pipeline
    "ListingPipeline",
    "ListingResult",
    "PipelineConfig",
]
