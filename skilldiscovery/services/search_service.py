# skilldiscovery/services/search_service.py
"""
Search Service Layer
Runs one multi-criteria search across the catalog and member stores.
"""

import logging
from typing import Any, Mapping, Optional

from sqlalchemy.orm import Session

from skilldiscovery.crud import skill as skill_crud
from skilldiscovery.crud import user as user_crud
from skilldiscovery.schemas.search import CatalogMatch, ListingMatch, SearchQuery, SearchResponse
from skilldiscovery.services.catalog_search import search_catalog
from skilldiscovery.services.member_search import search_members
from skilldiscovery.services.pagination import paginate
from skilldiscovery.services.query_normalizer import normalize_search_query

logger = logging.getLogger(__name__)


def run_search(db: Session, query: SearchQuery) -> SearchResponse:
    """
    Execute an already normalized query.

    Both store reads must succeed; a StoreError from either one fails the
    whole search rather than returning a single channel.
    """
    skills = skill_crud.find_active_skills(
        db,
        category=query.category,
        min_rating=query.min_rating,
    )
    catalog_matches = search_catalog(skills, query)

    members = user_crud.find_active_members(db, min_rating=query.min_rating)
    listing_matches = search_members(members, query)

    skills_page = paginate(catalog_matches, query.page, query.page_size, CatalogMatch)
    listings_page = paginate(listing_matches, query.page, query.page_size, ListingMatch)

    logger.info(
        "Search query=%r sort=%s page=%s: %s skills, %s listings",
        query.query,
        query.sort_by,
        query.page,
        skills_page.total_count,
        listings_page.total_count,
    )
    return SearchResponse(
        skills=skills_page,
        user_skills=listings_page,
        current_page=query.page,
        has_more=skills_page.has_more or listings_page.has_more,
        filters=query,
    )


def search(db: Session, raw_filters: Optional[Mapping[str, Any]] = None) -> SearchResponse:
    """
    Normalize raw filters and search both channels.

    Raises:
        ValidationError: malformed filters
        StoreError: a store read failed
    """
    query = normalize_search_query(raw_filters)
    return run_search(db, query)
