"""
Pydantic schemas for client settings.
"""
from pydantic import BaseModel


class PreferenceResponse(BaseModel):
    """Current theme mode and accent color."""
    theme: str
    accent_color: str


class ThemeUpdate(BaseModel):
    mode: str


class AccentColorUpdate(BaseModel):
    color: str
