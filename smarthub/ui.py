import logging

import streamlit as st

from smarthub import auth
from smarthub.api_client import AuthenticationError, Err, Ok, call
from smarthub.app_state import end_session, flash, get_client, get_session, init_app, start_session
from smarthub.models import Role
from smarthub.session import AccessDenied, Session

logger = logging.getLogger(__name__)


def apply_global_styles():
    st.markdown(
        """
        <style>
        @import url('https://fonts.googleapis.com/css2?family=Space+Grotesk:wght@400;600;700&family=IBM+Plex+Sans:wght@400;600&display=swap');

        :root {
            --bg-0: #0b0f14;
            --bg-1: #0f141b;
            --fg-0: #e6edf3;
            --fg-1: #c6d1dc;
            --accent: #4cc9f0;
        }

        .stApp {
            background: radial-gradient(1200px 600px at 15% -10%, #1a2230 0%, var(--bg-0) 60%);
            color: var(--fg-0);
            font-family: "IBM Plex Sans", sans-serif;
        }

        h1, h2, h3, h4 {
            font-family: "Space Grotesk", sans-serif;
            letter-spacing: 0.3px;
        }

        .hero {
            padding: 1.5rem 1.75rem;
            background: linear-gradient(120deg, #141b24 0%, #0f141b 55%, #111925 100%);
            border: 1px solid #1f2a38;
            border-radius: 16px;
            box-shadow: 0 12px 40px rgba(0, 0, 0, 0.35);
            margin-bottom: 1.5rem;
        }

        .hero p {
            color: var(--fg-1);
            margin: 0;
        }

        .countdown {
            font-family: "Space Grotesk", sans-serif;
            font-size: 1.4rem;
            text-align: right;
        }

        .countdown.low {
            color: #ff6b6b;
        }

        [data-testid="stSidebarNav"] {
            display: none;
        }
        </style>
        """,
        unsafe_allow_html=True,
    )


def render_hero(title: str, subtitle: str):
    st.markdown(
        f"""
        <div class="hero">
            <h2>{title}</h2>
            <p>{subtitle}</p>
        </div>
        """,
        unsafe_allow_html=True,
    )


def render_flash():
    message = st.session_state.get("flash")
    if message:
        st.success(message)
        st.session_state.flash = None


def render_sidebar():
    with st.sidebar:
        st.header("Account")
        render_auth()

        st.divider()

        render_nav(get_session())


def render_auth():
    session = get_session()
    if session is not None:
        st.markdown(f"**Signed in as:** {session.user.display_name} ({session.user.role})")
        if st.button("Log out", key="logout_btn"):
            end_session()
            st.rerun()
        return

    auth_tab = st.selectbox("Account", ["Log in", "Register", "Forgot password"], key="auth_tab")
    if auth_tab == "Log in":
        username = st.text_input("Username", key="login_username")
        password = st.text_input("Password", type="password", key="login_password")
        if st.button("Log in", key="login_btn"):
            if not username.strip() or not password:
                st.error("Username and password are required.")
                return
            result = call(auth.login, get_client(), username.strip(), password)
            if isinstance(result, Ok):
                start_session(result.value)
                flash("Logged in.")
                st.rerun()
            elif isinstance(result, Err):
                st.error(result.message)
    elif auth_tab == "Forgot password":
        render_password_reset()
    else:
        reg_username = st.text_input("Username", key="reg_username")
        reg_email = st.text_input("Email", key="reg_email")
        reg_first = st.text_input("First name", key="reg_first")
        reg_last = st.text_input("Last name", key="reg_last")
        reg_password = st.text_input("Password", type="password", key="reg_password")
        role_choice = st.selectbox("Role", [Role.STUDENT.value, Role.TEACHER.value], key="reg_role")
        if st.button("Register", key="reg_btn"):
            if not reg_username.strip() or not reg_email.strip() or len(reg_password) < 6:
                st.error("Username, email and a password of at least 6 characters are required.")
                return
            result = call(
                auth.register,
                get_client(),
                reg_username.strip(),
                reg_email.strip(),
                reg_password,
                first_name=reg_first.strip() or None,
                last_name=reg_last.strip() or None,
                role=Role(role_choice),
            )
            if isinstance(result, Ok):
                start_session(result.value)
                flash("Registration successful.")
                st.rerun()
            elif isinstance(result, Err):
                st.error(result.message)


def render_password_reset():
    email = st.text_input("Email", key="forgot_email")
    if st.button("Send reset link", key="forgot_btn"):
        if "@" not in email:
            st.error("Enter the email address of your account.")
            return
        result = call(auth.forgot_password, get_client(), email.strip())
        if isinstance(result, Ok):
            st.success("If the address is registered, a reset token has been sent.")
        elif isinstance(result, Err):
            st.error(result.message)

    token = st.text_input("Reset token", key="reset_token")
    new_password = st.text_input("New password", type="password", key="reset_password")
    if st.button("Reset password", key="reset_btn"):
        if not token.strip() or len(new_password) < 6:
            st.error("A token and a password of at least 6 characters are required.")
            return
        result = call(auth.reset_password, get_client(), token.strip(), new_password)
        if isinstance(result, Ok):
            st.success("Password changed. You can log in now.")
        elif isinstance(result, Err):
            st.error(result.message)


def render_nav(session: Session | None):
    st.header("Menu")
    st.page_link("app.py", label="Dashboard", icon="🏠")
    if session is None:
        return
    st.page_link("pages/1_Courses.py", label="Courses", icon="📚")
    st.page_link("pages/2_Projects.py", label="Projects", icon="🧪")
    st.page_link("pages/3_Internships.py", label="Internships", icon="💼")
    st.page_link("pages/4_Announcements.py", label="Announcements", icon="📣")
    st.page_link("pages/5_Resources.py", label="Resources", icon="📄")
    st.page_link("pages/6_Quizzes.py", label="Quizzes", icon="📝")
    if session.is_student:
        st.page_link("pages/7_Take_Quiz.py", label="Take a quiz", icon="⏱️")
    st.page_link("pages/8_Quiz_Results.py", label="Quiz results", icon="📊")
    if session.can_author or session.is_student:
        st.page_link("pages/9_Quiz_Generation.py", label="AI quizzes", icon="🤖")
    if session.has_role(Role.ADMIN):
        st.page_link("pages/10_Users.py", label="Users", icon="👥")
    st.page_link("pages/11_Profile.py", label="Profile", icon="🙍")


def require_session(*roles: Role) -> Session:
    """Return the current session or stop the page with a login/denial view."""
    session = get_session()
    if session is None:
        st.info("Please log in from the sidebar to continue.")
        st.stop()
    try:
        session.require_role(*roles)
    except AccessDenied as exc:
        logger.info("Denied %s (%s) on a %s page", session.user.username, session.user.role, exc.required)
        st.error("Access denied")
        st.write("You do not have permission to view this page.")
        st.caption(str(exc))
        st.page_link("app.py", label="Back to dashboard", icon="🏠")
        st.stop()
    return session


def setup_page(title: str, icon: str):
    st.set_page_config(page_title=title, page_icon=icon, layout="wide")
    init_app()
    apply_global_styles()
    render_sidebar()
    render_flash()


def report(result: Err):
    """Inline error for a failed call; an expired token also ends the session."""
    st.error(result.message)
    if isinstance(result.error, AuthenticationError) and result.error.status == 401 and get_session() is not None:
        end_session()
        st.info("Please log in again from the sidebar.")
