# coding: utf-8
"""The listing pipeline.

collector -> sorter -> estimator -> renderer, with the formatter
shared by the last two and listing_svc tying them together.
"""

from .listing_svc import ListingRequest, ListingResult, build_listing

__all__ = ["ListingRequest", "ListingResult", "build_listing"]
