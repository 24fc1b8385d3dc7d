import streamlit as st

from smarthub import auth, users
from smarthub.api_client import Err, Ok, call
from smarthub.app_state import flash, get_client
from smarthub.formatting import format_compact_time
from smarthub.models import ProfileUpdate
from smarthub.ui import render_hero, report, require_session, setup_page

setup_page("Profile", "🙍")
session = require_session()
client = get_client()

render_hero("Profile", "Your account details.")

refreshed = call(auth.refresh_profile, client, session)
if isinstance(refreshed, Err):
    report(refreshed)

user = session.user
cols = st.columns(3)
cols[0].metric("Username", user.username)
cols[1].metric("Role", user.role or "")
cols[2].metric("Member since", format_compact_time(user.created_at) or "-")

with st.form("profile"):
    col1, col2 = st.columns(2)
    first_name = col1.text_input("First name", value=user.first_name or "")
    last_name = col2.text_input("Last name", value=user.last_name or "")
    email = st.text_input("Email", value=user.email or "")
    phone = st.text_input("Phone number", value=user.phone_number or "")
    submitted = st.form_submit_button("Save", type="primary")

if submitted:
    if "@" not in email:
        st.error("Enter a valid email address.")
    else:
        update = ProfileUpdate(
            first_name=first_name.strip() or None,
            last_name=last_name.strip() or None,
            email=email.strip(),
            phone_number=phone.strip() or None,
        )
        result = call(users.update_profile, client, update)
        if isinstance(result, Ok):
            session.user = result.value
            flash("Profile updated.")
            st.rerun()
        report(result)
