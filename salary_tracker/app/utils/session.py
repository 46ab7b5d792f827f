"""
Per process and per browser session handles. The data service client lives as long as the Streamlit server, the
auth session and the record store live in ``st.session_state``.
"""
import atexit
import logging

import streamlit as st

from salary_tracker import DB_URL
from salary_tracker.app.data_access.data_service import DataServiceClient
from salary_tracker.app.services.auth_service import AuthService, AuthEvent, User
from salary_tracker.app.services.record_store import RecordStore

logger = logging.getLogger(__name__)


@st.cache_resource
def get_data_client() -> DataServiceClient:
    """
    Get the data service client shared by all sessions, starting it on first use and closing it when the server
    process exits.

    Returns
    -------
    DataServiceClient
        The started client
    """
    client = DataServiceClient.from_url(DB_URL).start()
    atexit.register(client.close)
    return client


def get_auth_service() -> AuthService:
    if 'auth' not in st.session_state:
        auth = AuthService(get_data_client())
        auth.on_auth_state_change(_reset_record_store)
        st.session_state['auth'] = auth
    return st.session_state['auth']


def _reset_record_store(event: AuthEvent, user: User | None) -> None:
    # results of requests still in flight for the previous user must not land in the next store
    store = st.session_state.pop('record_store', None)
    if store is not None:
        store.cancel_all()
        logger.debug("Discarded record store after %s", event)


def get_record_store() -> RecordStore | None:
    """
    Get the record store of the signed in user, loading it once per session.

    Returns
    -------
    RecordStore | None
        The store, or None if nobody is signed in
    """
    user = get_auth_service().get_user()
    if user is None:
        return None
    store = st.session_state.get('record_store')
    if store is None or store.owner != user.id:
        store = RecordStore(get_data_client(), user.id)
        store.load()
        st.session_state['record_store'] = store
    return store
