import streamlit as st

from salary_tracker.app.services.auth_service import AuthService, AuthError

MODE_KEY = 'auth_form_mode'
SIGN_IN = 'Sign In'
SIGN_UP = 'Sign Up'


def _switch_mode() -> None:
    st.session_state[MODE_KEY] = SIGN_UP if st.session_state.get(MODE_KEY, SIGN_IN) == SIGN_IN else SIGN_IN


def render_auth_form(auth: AuthService) -> None:
    """
    The sign in / sign up form shown to visitors without a session. A successful sign in reruns the app into the
    signed in pages, a successful sign up switches back to the sign in form.
    """
    mode = st.session_state.get(MODE_KEY, SIGN_IN)
    _, form_col, _ = st.columns([1, 2, 1])
    with form_col:
        st.title("Salary Tracker")
        st.caption("Track your salary, expenses and monthly bills.")
        notice = st.session_state.pop('auth_notice', None)
        if notice:
            st.success(notice)

        with st.form("auth_form"):
            st.subheader(mode)
            email = st.text_input("Email", key="auth_email")
            password = st.text_input("Password", type="password", key="auth_password")
            submitted = st.form_submit_button(mode, type="primary", width='stretch')

        if submitted:
            try:
                if mode == SIGN_IN:
                    auth.sign_in(email, password)
                    st.rerun()
                else:
                    auth.sign_up(email, password)
                    st.session_state[MODE_KEY] = SIGN_IN
                    st.session_state['auth_notice'] = "Account created, you can sign in now."
                    st.rerun()
            except AuthError as e:
                st.error(e.message)

        switch_label = "Don't have an account? Sign up" if mode == SIGN_IN else "Already have an account? Sign in"
        st.button(switch_label, key="auth_switch_mode", on_click=_switch_mode, type="tertiary")
