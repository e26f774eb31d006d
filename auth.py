import os
import logging

import streamlit as st
from supabase import ClientOptions, create_client

from infrastructure.supabase_backend import BackendConfigError, SupabaseBackend

log = logging.getLogger(__name__)

DEFAULT_PROFILES_TABLE = "profiles"
DEFAULT_RECEIPTS_BUCKET = "payment_receipts"

__all__ = [
    "BackendConfigError",
    "create_backend",
    "get_profiles_table",
    "get_receipts_bucket",
    "get_secret",
]


def get_secret(key):
    try:
        value = st.secrets.get(key)
    except FileNotFoundError:
        value = None
    return value or os.getenv(key)


def get_profiles_table():
    return get_secret("PROFILES_TABLE") or DEFAULT_PROFILES_TABLE


def get_receipts_bucket():
    return get_secret("RECEIPTS_BUCKET") or DEFAULT_RECEIPTS_BUCKET


def create_backend() -> SupabaseBackend:
    """
    One client per browser session: the Supabase client holds the signed-in
    session, so it must never be shared through st.cache_resource.

    Tokens are refreshed on the script thread through get_session(); the
    SDK's background refresh timer stays off.
    """
    url = get_secret("SUPABASE_URL")
    key = get_secret("SUPABASE_ANON_KEY")
    if not url or not key:
        raise BackendConfigError("SUPABASE_URL and SUPABASE_ANON_KEY must be set in secrets.toml or the environment.")
    log.info("Creating Supabase client for a new browser session")
    options = ClientOptions(auto_refresh_token=False)
    return SupabaseBackend(create_client(url, key, options=options))
