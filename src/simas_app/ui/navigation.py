from __future__ import annotations

from simas_app.ui.components.collapsible_nav import NavigationItem


NAV_ITEMS: tuple[NavigationItem, ...] = (
    NavigationItem(
        key="daily",
        label="Daily attendance",
        icon_text="DA",
    ),
    NavigationItem(
        key="recap",
        label="Recap",
        icon_text="RC",
    ),
    NavigationItem(
        key="roster",
        label="Students",
        icon_text="ST",
    ),
    NavigationItem(
        key="settings",
        label="Settings",
        icon_text="SE",
        pinned_bottom=True,
    ),
)

DEFAULT_VIEW = "daily"
