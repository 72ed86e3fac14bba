from .site_settings import SETTINGS_ID, SiteSettings

__all__ = [
    "SETTINGS_ID",
    "SiteSettings",
]
