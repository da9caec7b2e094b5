"""Quick navigation - `go <page>` targets inside the host app."""
import re
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict


class NavigationTarget(BaseModel):
    model_config = ConfigDict(frozen=True)

    target: str
    path: str
    icon: str


NAV_TARGETS: Dict[str, Dict[str, str]] = {
    "notes": {"path": "/notes", "icon": "FileText"},
    "note": {"path": "/notes", "icon": "FileText"},
    "healthcare": {"path": "/tm-healthcare", "icon": "HeartPulse"},
    "health": {"path": "/tm-healthcare", "icon": "HeartPulse"},
    "lifestyle": {"path": "/lifestyle", "icon": "Coffee"},
    "kitchen": {"path": "/kitchen", "icon": "ChefHat"},
    "cook": {"path": "/kitchen", "icon": "ChefHat"},
    "fashion": {"path": "/fashion", "icon": "Shirt"},
    "shopping": {"path": "/shopping-list", "icon": "ShoppingCart"},
    "list": {"path": "/shopping-list", "icon": "ShoppingCart"},
    "calendar": {"path": "/calendar", "icon": "Calendar"},
    "cal": {"path": "/calendar", "icon": "Calendar"},
    "home": {"path": "/", "icon": "Home"},
}

GO_PATTERN = re.compile(r"^go\s+(?P<target>.+)$", re.IGNORECASE)


def find_target(raw: str) -> Optional[NavigationTarget]:
    """Exact key first, then the first key that contains or is contained by `raw`."""
    key = raw.strip().lower()
    if not key:
        return None
    if key in NAV_TARGETS:
        return NavigationTarget(target=key, **NAV_TARGETS[key])
    for name, entry in NAV_TARGETS.items():
        if name in key or key in name:
            return NavigationTarget(target=name, **entry)
    return None


def resolve_navigation(text: str) -> Optional[NavigationTarget]:
    """Parse "go <page>" ("go cal", "go shopping list")."""
    match = GO_PATTERN.match(text.strip())
    if not match:
        return None
    return find_target(match.group("target"))
