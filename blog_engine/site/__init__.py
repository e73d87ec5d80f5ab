# Site Module
# Hugo site configuration (title, menu, params, pagination)

from .config import DEFAULT_PAGER_SIZE, MenuEntry, SiteConfig, SiteParams, SocialLink

__all__ = [
    "DEFAULT_PAGER_SIZE",
    "MenuEntry",
    "SiteConfig",
    "SiteParams",
    "SocialLink",
]
