from .collapsible_nav import CollapsibleNav, NavigationItem

__all__ = ["CollapsibleNav", "NavigationItem"]
