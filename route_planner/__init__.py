"""Route Planner - Plan a driving route between two places on a map.

Each endpoint can be set by typing with suggestions, by clicking the map or
from the device location. The route is computed by an OSRM server and drawn
on an OpenStreetMap basemap.

Modules:
    core: Planning logic (geocoding, routing, resolver, active field state machine)
    model: Data structures (Endpoint, PlaceCandidate, RouteResult, messages)
    ui: Streamlit interface (controls panel, pydeck map, actions, auth)

Example:
    from route_planner.core import PlanningSession
    session = PlanningSession.create()
"""
