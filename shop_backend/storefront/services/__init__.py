from .settings_store import (
    current_spf,
    get_settings,
    set_bank_details,
    set_banner,
    set_delivery_time,
    set_spf,
    set_whatsapp_number,
    update_settings,
)

__all__ = [
    "get_settings",
    "update_settings",
    "current_spf",
    "set_spf",
    "set_delivery_time",
    "set_whatsapp_number",
    "set_banner",
    "set_bank_details",
]
