"""Display names and URL slugs for catalog pages."""

import re

CATEGORY_DISPLAY_NAMES = {
    "Gaming Mice": "Gaming Mice",
    "Keyboards": "Gaming Keyboards",
    "Headsets": "Gaming Headsets",
    "Monitors": "Gaming Monitors",
    "Pre-built PCs": "Gaming PCs",
    "Components": "PC Components",
    "Consoles": "Gaming Consoles",
    "Chairs": "Gaming Chairs",
    "Controllers": "Game Controllers",
    "Software": "Gaming Software",
    "PS5 Games": "PlayStation 5 Games",
    "PS4 Games": "PlayStation 4 Games",
}


def category_display_name(category: str) -> str:
    """Get the storefront heading for a category, falling back to the raw value."""
    return CATEGORY_DISPLAY_NAMES.get(category, category)


def product_slug(name: str) -> str:
    """Build a URL slug from a product name."""
    slug = name.lower()
    slug = re.sub(r"[^a-z0-9\s-]", "", slug)
    slug = re.sub(r"\s+", "-", slug.strip())
    return re.sub(r"-+", "-", slug)
