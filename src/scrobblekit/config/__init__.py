"""Configuration module for scrobblekit."""

from .settings import LASTFM_API_URL, LastfmSettings, Settings, get_settings

__all__ = ["LASTFM_API_URL", "LastfmSettings", "Settings", "get_settings"]
