"""Export services."""

from .geojson import export_routes_to_easyterritory, save_easyterritory_json

__all__ = [
    "export_routes_to_easyterritory",
    "save_easyterritory_json",
]
