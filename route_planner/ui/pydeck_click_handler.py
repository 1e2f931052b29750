"""Map rendering with click capture via streamlit-deckgl.

st.pydeck_chart only reports picked objects. st_deckgl returns the deck.gl
onClick event for every click, including clicks on the bare basemap, with a
`coordinate` field [lon, lat]. The planner needs exactly that: any point on
the map can become an endpoint.

streamlit-deckgl returns the last event on every rerun, so clicks are
de-duplicated per component key. A new key (map version bump) starts with
no remembered click.
"""

import logging
from dataclasses import dataclass
from typing import Any

import pydeck as pdk
import streamlit as st
from streamlit_deckgl import st_deckgl  # type: ignore[import-untyped]

from route_planner.constants import ClickConfig, MapConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MapClick:
    """One new click on the map.

    Attributes:
        lat: Latitude of the clicked point
        lon: Longitude of the clicked point
        object_type: ClickConfig.TYPE_* of a picked marker/route, None for basemap clicks
    """

    lat: float
    lon: float
    object_type: str | None = None

    @property
    def dedup_key(self) -> str:
        p = ClickConfig.DEDUP_PRECISION
        return f"{self.lat:.{p}f}_{self.lon:.{p}f}"


def parse_click_event(event: Any) -> MapClick | None:
    """Extract a MapClick from a st_deckgl event dict.

    st_deckgl spreads picked object properties into the event (no "object" key):
    - Basemap click: {coordinate: [lon, lat], eventType: "click"}
    - Object click: {type: "start", coordinate: [lon, lat], ...}
    """
    if not isinstance(event, dict):
        return None
    coord = event.get("coordinate")
    if not isinstance(coord, (list, tuple)) or len(coord) < 2:
        return None
    try:
        lon, lat = float(coord[0]), float(coord[1])
    except (TypeError, ValueError):
        logger.warning(f"[CLICK] Ignoring event with bad coordinate: {coord!r}")
        return None

    object_type = event.get("type")
    if object_type == "click":
        object_type = None
    return MapClick(lat=lat, lon=lon, object_type=object_type)


def render_pydeck_map(deck: pdk.Deck, key: str, height: int = MapConfig.MAP_HEIGHT) -> MapClick | None:
    """Render the deck and return a click not yet seen by this component key.

    Args:
        deck: Configured pydeck.Deck
        key: Component key (includes the map version)
        height: Height in pixels

    Returns:
        The new click, or None if there was no click or it was already handled.
    """
    last_click_key = f"_deckgl_last_click_{key}"
    if last_click_key not in st.session_state:
        st.session_state[last_click_key] = None

    # events=["click"] is required for st_deckgl to report clicks at all
    event = st_deckgl(deck, key=key, height=height, events=["click"])
    click = parse_click_event(event)
    if click is None:
        return None

    if click.dedup_key == st.session_state.get(last_click_key):
        return None
    st.session_state[last_click_key] = click.dedup_key

    logger.info(f"[CLICK] Map click at ({click.lat:.5f}, {click.lon:.5f}) object={click.object_type}")
    return click
