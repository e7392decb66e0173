from __future__ import annotations

# PER_PAGE uses the API maximum (100) to keep round-trips, and so rate limit
# usage, low.
PER_PAGE = 100

# Each listing scans at most SEARCH_LIMIT items, whatever the repo holds.
SEARCH_LIMIT = 300

MAX_PAGES = SEARCH_LIMIT // PER_PAGE
