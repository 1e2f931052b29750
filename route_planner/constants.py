"""Configuration constants for Route Planner.

All configurable parameters are centralized here for easy tuning.

Classes:
    AppConfig: UI application settings
    AuthConfig: Sign-in provider
    MapConfig: Default map view parameters
    GeocodeConfig: Nominatim endpoint and search limits
    RoutingConfig: OSRM endpoint and request options
    ResolverConfig: Endpoint resolution behavior
    MarkerConfig: Map marker sizes
    ClickConfig: Click detection and picking
    StyleConfig: Visual colors and styling
"""

import os


class AppConfig:
    """UI application settings."""

    TITLE = "Route Planner"
    ICON = "🗺️"
    LAYOUT = "wide"


class AuthConfig:
    """Sign-in settings. Provider credentials live in .streamlit/secrets.toml under [auth]."""

    PROVIDER = "google"
    PROVIDER_LABEL = "Google"

    # Set ROUTE_PLANNER_REQUIRE_LOGIN=0 to open the planner without signing in (local development)
    REQUIRE_LOGIN = os.environ.get("ROUTE_PLANNER_REQUIRE_LOGIN", "1") != "0"


class MapConfig:
    """Default map view parameters."""

    # Initial center for program start: Mumbai, India
    START_CENTER_LAT = 19.076
    START_CENTER_LON = 72.8777

    DEFAULT_ZOOM = 13
    MAX_ZOOM = 19
    ROUTE_ZOOM = 11  # Overview after a route is drawn
    MAP_HEIGHT = 620

    # Standard OpenStreetMap raster tiles (no API key needed)
    OSM_TILES = "https://tile.openstreetmap.org/{z}/{x}/{y}.png"
    OSM_ATTRIBUTION = "© OpenStreetMap contributors"


class GeocodeConfig:
    """Nominatim geocoding service settings."""

    BASE_URL = os.environ.get("ROUTE_PLANNER_NOMINATIM_URL", "https://nominatim.openstreetmap.org")

    # Nominatim usage policy requires an identifying User-Agent
    USER_AGENT = "route-planner/1.0"
    TIMEOUT_S = 10

    SEARCH_LIMIT = 5  # Maximum suggestions per forward search
    MIN_QUERY_LENGTH = 3  # Shorter queries never reach the service


class RoutingConfig:
    """OSRM routing engine settings."""

    BASE_URL = os.environ.get("ROUTE_PLANNER_OSRM_URL", "https://router.project-osrm.org")
    PROFILE = "driving"
    TIMEOUT_S = 20

    # Only start and end - no intermediate waypoints, no drag rerouting
    WAYPOINT_COUNT = 2

    METERS_PER_KM = 1000.0
    SECONDS_PER_MINUTE = 60.0


class ResolverConfig:
    """Endpoint resolution behavior."""

    # When True, typing a new query drops the coordinates of the previous resolution.
    # Default keeps them until a new resolution completes.
    CLEAR_COORDINATES_ON_EDIT = False


class MarkerConfig:
    """Marker and route line sizes (pixels)."""

    WAYPOINT_RADIUS_PX = 9
    CLICK_MARKER_RADIUS_PX = 7
    ROUTE_WIDTH_PX = 5


class ClickConfig:
    """Click detection configuration."""

    # Object types embedded in layer data for picking
    TYPE_START = "start"
    TYPE_END = "end"
    TYPE_CLICK = "click"
    TYPE_ROUTE = "route"

    PICKING_RADIUS_PX = 6

    # Decimal places used for click de-duplication
    DEDUP_PRECISION = 5


class StyleConfig:
    """Visual colors and styling as RGBA lists [R, G, B, A] (0-255)."""

    ROUTE_RGBA = [37, 99, 235, 200]  # blue-600
    START_RGBA = [34, 197, 94, 255]  # green-500
    END_RGBA = [239, 68, 68, 255]  # red-500
    CLICK_RGBA = [245, 158, 11, 230]  # amber-500
    OUTLINE_RGBA = [255, 255, 255, 255]

    START_ICON = "🟢"
    END_ICON = "🔴"
    CURRENT_LOCATION_ICON = "📍"
    SELECT_FROM_MAP_ICON = "📌"
