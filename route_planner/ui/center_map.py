"""MapRenderer - Pydeck map for the route planner.

Layers (back to front):
- OpenStreetMap raster basemap (Mapbox GL style dict, no API key)
- Route line (PathLayer) from the live RouteResult
- Start/end waypoint markers (ScatterplotLayer) for resolved endpoints
- Click marker (ScatterplotLayer) at the last map click

Pydeck uses [lon, lat] order and RGBA colors. Every data row carries a `type`
(ClickConfig.TYPE_*) so st_deckgl click events identify what was picked.
"""

import logging

import pydeck as pdk

from route_planner.constants import ClickConfig, MapConfig, MarkerConfig, StyleConfig
from route_planner.core.context import SessionState
from route_planner.core.map_layer import MapLayer
from route_planner.model.endpoint import Endpoint, LatLon

logger = logging.getLogger(__name__)

# XYZ raster tiles must go through a style dict: pydeck's TileLayer cannot
# render tiles without a renderSubLayers callback.
OSM_STYLE: dict[str, object] = {
    "version": 8,
    "sources": {
        "osm": {
            "type": "raster",
            "tiles": [MapConfig.OSM_TILES],
            "tileSize": 256,
            "attribution": MapConfig.OSM_ATTRIBUTION,
        }
    },
    "layers": [
        {
            "id": "osm",
            "type": "raster",
            "source": "osm",
            "minzoom": 0,
            "maxzoom": MapConfig.MAX_ZOOM,
        }
    ],
}


class MapRenderer:
    """Builds the pydeck.Deck for the current session.

    Example:
        renderer = MapRenderer(state=session.state, map_layer=session.map_layer)
        click = render_pydeck_map(renderer.render(), key=renderer.component_key)
    """

    def __init__(self, state: SessionState, map_layer: MapLayer) -> None:
        self.state = state
        self.map_layer = map_layer

    @property
    def component_key(self) -> str:
        """Key of the map component. Changes whenever the map version is bumped."""
        return f"route_map_v{self.map_layer.version}"

    def get_view_state(self) -> pdk.ViewState:
        """Center on the route, else on the newest known point, else the default city."""
        route = self.map_layer.route_overlay
        if route is not None and route.waypoints:
            lats = [lat for lat, _ in route.waypoints]
            lons = [lon for _, lon in route.waypoints]
            return pdk.ViewState(
                latitude=(min(lats) + max(lats)) / 2,
                longitude=(min(lons) + max(lons)) / 2,
                zoom=MapConfig.ROUTE_ZOOM,
            )

        focus = self._focus_point()
        if focus is not None:
            return pdk.ViewState(latitude=focus[0], longitude=focus[1], zoom=MapConfig.DEFAULT_ZOOM)
        return pdk.ViewState(
            latitude=MapConfig.START_CENTER_LAT,
            longitude=MapConfig.START_CENTER_LON,
            zoom=MapConfig.DEFAULT_ZOOM,
        )

    def _focus_point(self) -> LatLon | None:
        if self.map_layer.click_marker is not None:
            return self.map_layer.click_marker
        for endpoint in (self.state.end, self.state.start):
            if endpoint.coordinates is not None:
                return endpoint.coordinates
        return None

    def render(self) -> pdk.Deck:
        """Render the complete map."""
        layers = []
        route_layer = self._create_route_layer()
        if route_layer is not None:
            layers.append(route_layer)
        layers.append(self._create_waypoint_layer())
        click_layer = self._create_click_marker_layer()
        if click_layer is not None:
            layers.append(click_layer)

        return pdk.Deck(
            map_style=OSM_STYLE,
            map_provider="mapbox",  # Required when map_style is a dict
            initial_view_state=self.get_view_state(),
            layers=layers,
            tooltip=self._create_tooltip_config(),
            parameters={"pickingRadius": ClickConfig.PICKING_RADIUS_PX},
        )

    # =========================================================================
    # LAYERS
    # =========================================================================

    def _create_route_layer(self) -> pdk.Layer | None:
        route = self.map_layer.route_overlay
        if route is None or not route.geometry:
            return None
        data = [
            {
                "type": ClickConfig.TYPE_ROUTE,
                "name": f"{route.details.distance} km, {route.details.time} mins",
                "path": route.geometry,
            }
        ]
        return pdk.Layer(
            "PathLayer",
            data,
            get_path="path",
            get_color=StyleConfig.ROUTE_RGBA,
            get_width=MarkerConfig.ROUTE_WIDTH_PX,
            width_units="pixels",
            joint_rounded=True,
            cap_rounded=True,
            pickable=True,
            id="route",
        )

    @staticmethod
    def _waypoint_row(endpoint: Endpoint, marker_type: str, color: list[int], icon: str) -> dict:
        lat, lon = endpoint.coordinates  # type: ignore[misc]
        return {
            "type": marker_type,
            "name": f"{icon} {endpoint.text or endpoint.role.label}",
            "position": [lon, lat],
            "color": color,
        }

    def _create_waypoint_layer(self) -> pdk.Layer:
        data = []
        if self.state.start.is_resolved:
            data.append(
                self._waypoint_row(self.state.start, ClickConfig.TYPE_START, StyleConfig.START_RGBA, StyleConfig.START_ICON)
            )
        if self.state.end.is_resolved:
            data.append(
                self._waypoint_row(self.state.end, ClickConfig.TYPE_END, StyleConfig.END_RGBA, StyleConfig.END_ICON)
            )
        return pdk.Layer(
            "ScatterplotLayer",
            data,
            get_position="position",
            get_fill_color="color",
            get_line_color=StyleConfig.OUTLINE_RGBA,
            get_radius=MarkerConfig.WAYPOINT_RADIUS_PX,
            radius_units="pixels",
            stroked=True,
            line_width_min_pixels=2,
            pickable=True,
            id="waypoints",
        )

    def _create_click_marker_layer(self) -> pdk.Layer | None:
        if self.map_layer.click_marker is None:
            return None
        lat, lon = self.map_layer.click_marker
        return pdk.Layer(
            "ScatterplotLayer",
            [{"type": ClickConfig.TYPE_CLICK, "name": "Clicked point", "position": [lon, lat]}],
            get_position="position",
            get_fill_color=StyleConfig.CLICK_RGBA,
            get_radius=MarkerConfig.CLICK_MARKER_RADIUS_PX,
            radius_units="pixels",
            pickable=True,
            id="click_marker",
        )

    def _create_tooltip_config(self) -> dict[str, str | dict[str, str]]:
        """Name only; details live in the controls panel."""
        return {
            "html": "<b>{name}</b>",
            "style": {
                "backgroundColor": "rgba(255, 255, 255, 0.95)",
                "color": "#333",
                "padding": "6px 10px",
                "borderRadius": "4px",
            },
        }
