import pandas as pd
import streamlit as st

from smarthub import users
from smarthub.api_client import Err, call
from smarthub.app_state import get_client
from smarthub.formatting import format_compact_time
from smarthub.models import Role
from smarthub.ui import render_hero, report, require_session, setup_page

setup_page("Users", "👥")
require_session(Role.ADMIN)
client = get_client()

render_hero("Users", "Accounts registered on the platform.")

role_filter = st.selectbox("Role", [None] + list(Role), format_func=lambda r: "All roles" if r is None else r.value.title())
query = st.text_input("Filter", placeholder="Name, username or email")

if role_filter is None:
    result = call(users.list_users, client)
else:
    result = call(users.get_users_by_role, client, role_filter)

if isinstance(result, Err):
    report(result)
    st.stop()

df = pd.DataFrame(
    [
        {
            "ID": u.id,
            "Username": u.username,
            "Name": u.display_name,
            "Email": u.email or "",
            "Role": u.role or "",
            "Active": "Yes" if u.active is not False else "No",
            "Last login": format_compact_time(u.last_login),
        }
        for u in result.value
    ]
)

if df.empty:
    st.info("No users found.")
    st.stop()

needle = query.strip().lower()
if needle:
    mask = (
        df["Username"].str.lower().str.contains(needle, regex=False)
        | df["Name"].str.lower().str.contains(needle, regex=False)
        | df["Email"].str.lower().str.contains(needle, regex=False)
    )
    df = df[mask]

cols = st.columns(3)
counts = df["Role"].value_counts()
cols[0].metric("Students", int(counts.get(Role.STUDENT.value, 0)))
cols[1].metric("Teachers", int(counts.get(Role.TEACHER.value, 0)))
cols[2].metric("Admins", int(counts.get(Role.ADMIN.value, 0)))

st.dataframe(df, use_container_width=True, hide_index=True)
