"""Category name translations.

Translations are keyed by category uuid, which is why router rebuilds
go to such lengths to keep those uuids stable.
"""

from typing import Any

from flowsplit.models.flow_definition import Router


def categories_to_localization_form(
    router: Router | None, localization: dict[str, Any]
) -> dict[str, Any]:
    """Map each category uuid to its original and translated name."""
    categories: dict[str, dict[str, str]] = {}
    for category in router.categories if router else []:
        translated = (localization.get(category.uuid) or {}).get("name")
        if isinstance(translated, list):
            translated = translated[0] if translated else ""
        categories[category.uuid] = {
            "original_name": category.name,
            "localized_name": translated or "",
        }
    return {"categories": categories}


def localization_form_to_categories(form_data: dict[str, Any]) -> dict[str, Any]:
    """Build the localization entries from the form.

    Blank translations and ones identical to the original name are dropped.
    """
    localization: dict[str, Any] = {}
    for category_uuid, entry in (form_data.get("categories") or {}).items():
        localized = (entry.get("localized_name") or "").strip()
        original = (entry.get("original_name") or "").strip()
        if localized and localized != original:
            localization[category_uuid] = {"name": [localized]}
    return localization


def prune_localization(localization: dict[str, Any], router: Router) -> dict[str, Any]:
    """Drop translations of categories that are no longer on the router."""
    live = {category.uuid for category in router.categories}
    return {key: value for key, value in localization.items() if key in live}
