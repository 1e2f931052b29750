"""Message - User-facing messages for the route planner UI.

Architecture:
- TOAST: Transient popups for rejected actions (map click without target,
  route without both endpoints, routing or geolocation failures)
- CONTROLS PANEL: Persistent blocks for guidance (active field banner) and
  results (route details)
- LOGIN PAGE: Sign-in failures

Design Principles:
- Messages are frozen dataclasses holding the data they display
- Messages know their own display level (info/warning/error)
- Caller controls when to display
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from route_planner.constants import StyleConfig


class MessageLevel(Enum):
    """Display level for UI messages."""

    INFO = "info"  # Blue - guidance/results
    WARNING = "warning"  # Yellow - action instructions
    ERROR = "error"  # Red - failures


@dataclass(frozen=True)
class Message(ABC):
    """Abstract base class for user-facing messages displayed inline.

    These messages are rendered as st.info/st.warning/st.error blocks that persist
    in the UI until replaced.
    """

    @property
    @abstractmethod
    def message(self) -> str:
        """Formatted message for display in Streamlit."""
        raise NotImplementedError

    @property
    @abstractmethod
    def level(self) -> MessageLevel:
        """Display level."""
        raise NotImplementedError

    def display(self) -> None:
        """Render this message using the appropriate Streamlit function."""
        import streamlit as st

        render_fn = {
            MessageLevel.INFO: st.info,
            MessageLevel.WARNING: st.warning,
            MessageLevel.ERROR: st.error,
        }[self.level]
        render_fn(self.message)


@dataclass(frozen=True)
class ToastMessage(ABC):
    """Abstract base class for transient popup notifications.

    Good for: rejected clicks, validation failures, service errors
    Bad for: persistent guidance, result displays
    """

    @property
    @abstractmethod
    def message(self) -> str:
        """Formatted message for the toast notification."""
        raise NotImplementedError

    @property
    @abstractmethod
    def icon(self) -> str:
        """Icon to show in toast. Override in subclasses."""
        raise NotImplementedError

    def display(self) -> None:
        """Show this message as a toast notification and log it."""
        import streamlit as st

        logger = logging.getLogger(__name__)
        logger.info(f"[TOAST] {self.icon} {self.message}")
        st.toast(f"{self.icon} {self.message}")


# =============================================================================
# TOAST MESSAGES
# =============================================================================


@dataclass(frozen=True)
class NoActiveFieldMessage(ToastMessage):
    """User clicked the map before choosing which endpoint to set."""

    @property
    def icon(self) -> str:
        return "⚠️"

    @property
    def message(self) -> str:
        return (
            f"Please click {StyleConfig.SELECT_FROM_MAP_ICON} Set Start from Map or "
            f"{StyleConfig.SELECT_FROM_MAP_ICON} Set End from Map first."
        )


@dataclass(frozen=True)
class IncompleteEndpointsMessage(ToastMessage):
    """User asked for a route before both endpoints were resolved."""

    missing: tuple[str, ...] = ()

    @property
    def icon(self) -> str:
        return "⚠️"

    @property
    def message(self) -> str:
        return "Select both start and end locations."


@dataclass(frozen=True)
class RouteNotFoundMessage(ToastMessage):
    """Routing engine returned no path between the endpoints."""

    reason: str = ""

    @property
    def icon(self) -> str:
        return "🚫"

    @property
    def message(self) -> str:
        if self.reason:
            return f"No route found: {self.reason}"
        return "No route found between the selected locations."


@dataclass(frozen=True)
class GeolocationUnavailableMessage(ToastMessage):
    """Device position could not be determined."""

    reason: str = "Geolocation not supported"

    @property
    def icon(self) -> str:
        return StyleConfig.CURRENT_LOCATION_ICON

    @property
    def message(self) -> str:
        return self.reason


# =============================================================================
# CONTROLS PANEL - Guidance (YELLOW) and results (BLUE)
# =============================================================================


@dataclass(frozen=True)
class ActiveFieldBannerMessage(Message):
    """Instruction banner shown while an endpoint accepts map clicks."""

    field_label: str  # "starting point" or "destination"

    @property
    def level(self) -> MessageLevel:
        return MessageLevel.WARNING

    @property
    def message(self) -> str:
        return f"💡 Click on the map to set your {self.field_label}"


@dataclass(frozen=True)
class RouteDetailsMessage(Message):
    """Route summary block under the action buttons."""

    distance_km: str
    time_min: str

    @property
    def level(self) -> MessageLevel:
        return MessageLevel.INFO

    @property
    def message(self) -> str:
        return f"📊 **Route Details**\n\n- 📏 Distance: **{self.distance_km} km**\n- ⏱️ Time: **{self.time_min} mins**"


# =============================================================================
# LOGIN PAGE
# =============================================================================


@dataclass(frozen=True)
class LoginFailedMessage(Message):
    """Sign-in did not complete."""

    @property
    def level(self) -> MessageLevel:
        return MessageLevel.ERROR

    @property
    def message(self) -> str:
        return "Failed to sign in. Please try again."
