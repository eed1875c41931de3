"""English (United States) messages."""

from typing import Any


def _crud(noun: str, title: str) -> dict[str, Any]:
    return {
        "create": {
            "loading": f"Creating {noun}...",
            "success": f"{title} created successfully",
            "error": f"Failed to create {noun}",
        },
        "update": {
            "loading": f"Updating {noun}...",
            "success": f"{title} updated successfully",
            "error": f"Failed to update {noun}",
        },
        "delete": {
            "loading": f"Deleting {noun}...",
            "success": f"{title} deleted successfully",
            "error": f"Failed to delete {noun}",
        },
    }


def _namespace(noun: str, title: str, plural: str) -> dict[str, Any]:
    return {
        "messages": _crud(noun, title),
        "errors": {
            "notFound": {
                "title": f"{title} not found",
                "description": f"The {noun} you are looking for does not exist "
                "or was deleted.",
            },
            "load": "Could not load the data. Please try again.",
        },
        "actions": {"backToList": f"Back to {plural}"},
    }


MESSAGES: dict[str, dict[str, Any]] = {
    "common": {
        "states": {"loading": "Loading...", "empty": "No results"},
        "errors": {"unexpected": "An unexpected error occurred"},
        "actions": {"retry": "Retry", "back": "Back"},
    },
    "busModels": _namespace("bus model", "Bus model", "bus models"),
    "buses": _namespace("bus", "Bus", "buses"),
    "drivers": _namespace("driver", "Driver", "drivers"),
    "routes": _namespace("route", "Route", "routes"),
    "terminals": _namespace("terminal", "Terminal", "terminals"),
    "populations": _namespace("population", "Population", "populations"),
    "users": _namespace("user", "User", "users"),
}
