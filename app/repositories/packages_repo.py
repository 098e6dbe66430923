# app/repositories/packages_repo.py
import streamlit as st

from app.models.students import Package
from app.services.api_client import FywApiClient

KEY_PACKAGES_CACHE = "packages_cache"


def sort_packages(packages: list[Package]) -> list[Package]:
    return sorted(packages, key=lambda p: p.price)


def load_packages(client: FywApiClient, *, refresh: bool = False) -> list[Package]:
    """
    Fetched once per Streamlit session; the catalog does not change mid-event.
    """
    if not refresh and st.session_state.get(KEY_PACKAGES_CACHE):
        return st.session_state[KEY_PACKAGES_CACHE]

    packages = sort_packages(client.list_packages())
    st.session_state[KEY_PACKAGES_CACHE] = packages
    return packages
