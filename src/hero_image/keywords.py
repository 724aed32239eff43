"""Named token sets used by the query builder and the candidate filters.

All matching is done on lower-cased text with plain substring checks, so the
tokens below are lower-case and may contain hyphens to catch slugged URLs.
"""

from __future__ import annotations

# Hosts that tend to 404 on hotlinking or require a login.
FORBIDDEN_DOMAINS = frozenset(
    {
        "wikimedia.org",
        "wikipedia.org",
        "facebook.com",
        "lookaside.fbsbx.com",
        "fineartamerica.com",
    }
)

# Vector, animated and icon formats are never hero photography.
FORBIDDEN_EXTENSIONS = frozenset({".svg", ".gif", ".ico"})

DIRECT_IMAGE_EXTENSIONS = frozenset(
    {".jpg", ".jpeg", ".png", ".webp", ".bmp", ".tif", ".tiff", ".gif", ".avif"}
)
VECTOR_EXTENSIONS = frozenset({".svg", ".svgz"})
VECTOR_CONTENT_TYPES = frozenset({"image/svg+xml"})
PAGE_CONTENT_TYPES = ("text/html", "application/")

UNWANTED_CONTENT_MARKERS = frozenset(
    {
        "logo",
        "crest",
        "seal",
        "map",
        "diagram",
        "clipart",
        "vector",
        "black-white",
        "vintage",
    }
)

PEOPLE_MARKERS = frozenset(
    {
        "person",
        "people",
        "crowd",
        "crowds",
        "pedestrian",
        "pedestrians",
        "tourist",
        "tourists",
        "visitor",
        "visitors",
        "student",
        "students",
        "group",
        "groups",
        "audience",
        "fans",
        "spectator",
        "spectators",
        "walking",
        "standing",
        "sitting",
        "gathering",
        "event",
        "festival",
        "portrait",
        "portraits",
        "face",
        "faces",
        "human",
        "humans",
    }
)

UNIVERSITY_UNWANTED_MARKERS = frozenset(
    {
        "stadium",
        "football",
        "basketball",
        "sport",
        "team",
        "roster",
        "coach",
        "mascot",
        "indoor",
        "classroom",
        "cafeteria",
    }
)

# Framed prints, merchandise, renders, mockups and artwork.
NON_PHOTOGRAPH_MARKERS = frozenset(
    {
        "picture-frame",
        "picture frame",
        "framed",
        "frame-",
        "-frame",
        "shirt",
        "t-shirt",
        "tshirt",
        "merchandise",
        "merch",
        "print-on",
        "on-shirt",
        "on-tshirt",
        "apparel",
        "clothing",
        "mug",
        "poster-print",
        "poster print",
        "canvas-print",
        "canvas print",
        "art-print",
        "art print",
        "rendered",
        "3d-render",
        "3d render",
        "cg-render",
        "cg render",
        "computer-generated",
        "artificial",
        "mockup",
        "mock-up",
        "template",
        "placeholder",
        "illustration",
        "drawing",
        "sketch",
        "painting",
        "artwork",
    }
)

CAMPUS_KEYWORDS = frozenset({"campus", "building", "architecture", "exterior", "university"})
GENERIC_STOCK_KEYWORDS = frozenset({"generic", "stock-photo", "stock photo", "placeholder"})

CITYSCAPE_KEYWORDS = frozenset(
    {
        "cityscape",
        "skyline",
        "urban-landscape",
        "many-buildings",
        "city-view",
        "buildings",
        "downtown",
        "waterfront",
        "landmark",
    }
)
SINGLE_BUILDING_KEYWORDS = frozenset({"single-building", "one-building", "individual-building"})

# Commonly confused countries for shared city names, keyed by the country the
# markers point at. Approximation only; see DESIGN.md.
WRONG_COUNTRY_MARKERS: dict[str, frozenset[str]] = {
    "japan": frozenset({"japan", "tokyo"}),
    "china": frozenset({"china", "beijing", "shanghai"}),
    "south korea": frozenset({"korea", "seoul"}),
}

COUNTRY_ALIASES: dict[str, frozenset[str]] = {
    "usa": frozenset({"usa", "united states", "united-states"}),
    "united states": frozenset({"usa", "united states", "united-states"}),
    "united states of america": frozenset({"usa", "united states", "united-states"}),
    "us": frozenset({"usa", "united states", "united-states"}),
    "uk": frozenset({"uk", "united kingdom", "united-kingdom", "england", "britain"}),
    "united kingdom": frozenset({"uk", "united kingdom", "united-kingdom", "england", "britain"}),
    "south korea": frozenset({"south korea", "south-korea", "korea"}),
    "korea": frozenset({"korea"}),
}

# Negative query terms, one tuple per concern so strategies can mix them.
QUERY_EXCLUDE_PEOPLE = ("person", "people", "crowd", "pedestrian")
QUERY_EXCLUDE_VISITORS = ("tourist", "visitor")
QUERY_EXCLUDE_NOT_PHOTO = (
    "frame",
    "framed",
    "shirt",
    "merchandise",
    "print",
    "rendered",
    "mockup",
    "template",
)
QUERY_EXCLUDE_SINGLE = ("single", "one")
QUERY_EXCLUDE_UNIVERSITY_GENERIC = ("logo", "generic")
