import httpx
import streamlit as st

from config import (
    LogoConfig,
    set_default_config,
    get_logo_config_from_widgets,
    make_logo,
)
from components import display_logo, render_form
from event_registration.client import AttendeeClient, ClientError
from event_registration.config import Settings
from event_registration.form import (
    REGISTRATION_FIELDS,
    submit_registration,
    validate_registration,
)

st.set_page_config(layout="centered", page_title="Event Registration")
st.markdown(
    """
    <style>
        header, footer, #MainMenu { visibility: hidden; }
        .stMainBlockContainer {
            padding-top: 1rem;
        }
    </style>
""",
    unsafe_allow_html=True,
)


# --------- Main App ---------

set_default_config()
settings: Settings = st.session_state["settings"]
client: AttendeeClient = st.session_state["client"]
tab_register, tab_logo, tab_attendees = st.tabs(["Register", "Logo", "Attendees"])


@st.fragment(run_every=settings.animation_delay)
def logo_fragment() -> None:
    display_logo(st.session_state["logo"], st.session_state["logo_scheduler"])


with tab_register:
    logo_fragment()

    server_available = client.health()
    lookup = client.lookup if server_available else None

    def handle_submit(values, action: str):
        try:
            return submit_registration(values, action, client)
        except ClientError as e:
            st.error(f"Saving failed: {e}")
            return None

    render_form(
        REGISTRATION_FIELDS,
        form_class="register",
        validate=lambda values: validate_registration(values, lookup),
        handle_submit=handle_submit,
        disabled_message=None
        if server_available
        else "Can't process your input, right now: No connection to database server",
    )

with tab_logo:
    config: LogoConfig = get_logo_config_from_widgets()
    if st.button("🔄 Apply logo", key="apply_logo_btn", use_container_width=True):
        st.session_state["logo_config"] = config
        make_logo(config)
        st.rerun()

with tab_attendees:
    try:
        records = client.list()
    except (ClientError, httpx.HTTPError) as e:
        st.error(f"Attendee list unavailable: {e}", icon="⚠️")
    else:
        st.metric("Registered", len(records))
        st.dataframe(
            [record.to_dict() for record in records], use_container_width=True
        )
