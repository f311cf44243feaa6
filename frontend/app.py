import streamlit as st
import pandas as pd
import pydeck as pdk
from typing import Any, Dict, List, Optional
from utils.api_client import api_client
from utils.display import displayable_image_url
from config import (
    PAGE_TITLE, PAGE_ICON, LAYOUT,
    ORIGIN_NAME, ORIGIN_LATITUDE, ORIGIN_LONGITUDE,
    ORIGIN_COLOR, DESTINATION_COLOR, ARC_COLOR,
    TIMELINE_OPTIONS, DEFAULT_TIMELINE, DEFAULT_BUDGET,
)

# Page configuration
st.set_page_config(
    page_title=PAGE_TITLE,
    page_icon=PAGE_ICON,
    layout=LAYOUT
)


def init_session_state():
    """Initialize session state variables."""
    if "show_form" not in st.session_state:
        st.session_state.show_form = False
    if "edit_destination" not in st.session_state:
        st.session_state.edit_destination = None


def close_form():
    st.session_state.show_form = False
    st.session_state.edit_destination = None


def check_api_response(response: Dict[str, Any]) -> bool:
    """Show the API error, if any, and report success."""
    if not response["success"]:
        st.error(f"API Error: {response['error']}")
    return response["success"]


def load_destinations() -> List[Dict[str, Any]]:
    response = api_client.get_destinations()
    if not check_api_response(response):
        return []
    return response["data"]


def timeline_label(timeline: str) -> str:
    return TIMELINE_OPTIONS.get(timeline, TIMELINE_OPTIONS[DEFAULT_TIMELINE])


def show_destination_form(destinations: List[Dict[str, Any]]):
    """Add/edit form. Coordinates are looked up before anything is saved."""
    editing: Optional[Dict[str, Any]] = st.session_state.edit_destination
    current = editing or {}

    st.subheader(f"✏️ Edit: {editing['destination']}" if editing else "➕ Add Destination")

    with st.form("destination_form"):
        col1, col2 = st.columns(2)

        with col1:
            destination = st.text_input("Destination*", value=current.get("destination", ""), placeholder="e.g., Kyoto")
            country = st.text_input("Country*", value=current.get("country", ""), placeholder="e.g., Japan")

        with col2:
            timeline_keys = list(TIMELINE_OPTIONS.keys())
            timeline = st.selectbox(
                "Timeline",
                options=timeline_keys,
                index=timeline_keys.index(current.get("timeline")) if current.get("timeline") in TIMELINE_OPTIONS else timeline_keys.index(DEFAULT_TIMELINE),
                format_func=timeline_label
            )
            image_url = st.text_input("Image URL", value=current.get("image_url") or "", placeholder="https://...")

        reason = st.text_area("Why go?", value=current.get("reason", ""), placeholder="What makes this place special...")

        col1, col2 = st.columns(2)
        with col1:
            submit = st.form_submit_button("💾 Save", type="primary")
        with col2:
            cancel = st.form_submit_button("Cancel")

    if cancel:
        close_form()
        st.rerun()

    if not submit:
        return

    if not destination.strip() or not country.strip():
        st.error("❌ Please fill in both destination and country.")
        return

    with st.spinner("📍 Looking up coordinates..."):
        location = api_client.geocode(destination.strip(), country.strip())

    if not location["success"]:
        if location.get("status_code") == 404:
            st.error("❌ Could not find coordinates for this location. Please check the destination and country names.")
        else:
            st.error(f"❌ Geocoding failed: {location['error']}")
        return

    payload = {
        "rank": editing["rank"] if editing else len(destinations) + 1,
        "destination": destination.strip(),
        "country": country.strip(),
        "latitude": location["data"]["latitude"],
        "longitude": location["data"]["longitude"],
        "reason": reason,
        "budget": DEFAULT_BUDGET,
        "timeline": timeline,
        "image_url": image_url.strip(),
    }

    with st.spinner("💾 Saving destination..."):
        if editing:
            response = api_client.update_destination(editing["id"], payload)
        else:
            response = api_client.create_destination(payload)

    if check_api_response(response):
        st.success(f"✅ Saved {location['data']['display_name']}")
        close_form()
        st.rerun()


def show_destinations_list(destinations: List[Dict[str, Any]]):
    """Ranked list with reorder, edit and delete actions."""
    st.subheader("Your Wishlist")

    if not destinations:
        st.info("No destinations yet. Add one to get started!")
        return

    for index, dest in enumerate(destinations):
        col_rank, col_info, col_up, col_down, col_edit, col_delete = st.columns([1, 8, 1, 1, 1, 1])

        with col_rank:
            st.markdown(f"### {dest['rank']}")
        with col_info:
            st.markdown(f"**{dest['destination']}**, {dest['country']} · {timeline_label(dest['timeline'])}")
            if dest.get("reason"):
                st.caption(dest["reason"])
            image = displayable_image_url(dest)
            if image:
                st.image(image, width=240)
        with col_up:
            if st.button("⬆️", key=f"up_{dest['id']}", disabled=index == 0, help="Move up"):
                if check_api_response(api_client.move_destination(destinations, index, -1)):
                    st.rerun()
        with col_down:
            if st.button("⬇️", key=f"down_{dest['id']}", disabled=index == len(destinations) - 1, help="Move down"):
                if check_api_response(api_client.move_destination(destinations, index, 1)):
                    st.rerun()
        with col_edit:
            if st.button("✏️", key=f"edit_{dest['id']}", help="Edit"):
                st.session_state.edit_destination = dest
                st.session_state.show_form = True
                st.rerun()
        with col_delete:
            if st.button("🗑️", key=f"delete_{dest['id']}", help="Delete"):
                if check_api_response(api_client.delete_destination(dest["id"])):
                    st.rerun()


def show_map(destinations: List[Dict[str, Any]]):
    """World map with a flight arc from the origin city to every destination."""
    df = pd.DataFrame([
        {
            "name": f"#{d['rank']} {d['destination']}, {d['country']}",
            "latitude": d["latitude"],
            "longitude": d["longitude"],
            "origin_latitude": ORIGIN_LATITUDE,
            "origin_longitude": ORIGIN_LONGITUDE,
        }
        for d in destinations
    ], columns=["name", "latitude", "longitude", "origin_latitude", "origin_longitude"])
    origin = pd.DataFrame([{
        "name": f"{ORIGIN_NAME} (Home)",
        "latitude": ORIGIN_LATITUDE,
        "longitude": ORIGIN_LONGITUDE,
    }])

    layers = [
        pdk.Layer(
            "ArcLayer",
            data=df,
            get_source_position=["origin_longitude", "origin_latitude"],
            get_target_position=["longitude", "latitude"],
            get_source_color=ORIGIN_COLOR,
            get_target_color=ARC_COLOR,
            get_width=2,
        ),
        pdk.Layer(
            "ScatterplotLayer",
            data=df,
            get_position=["longitude", "latitude"],
            get_fill_color=DESTINATION_COLOR,
            get_radius=60000,
            pickable=True,
        ),
        pdk.Layer(
            "ScatterplotLayer",
            data=origin,
            get_position=["longitude", "latitude"],
            get_fill_color=ORIGIN_COLOR,
            get_radius=90000,
            pickable=True,
        ),
    ]

    st.pydeck_chart(pdk.Deck(
        layers=layers,
        initial_view_state=pdk.ViewState(latitude=25, longitude=0, zoom=0.8),
        tooltip={"text": "{name}"},
    ))
    st.caption(f"✈️ Flights from {ORIGIN_NAME}")


init_session_state()

st.title(f"{PAGE_ICON} {PAGE_TITLE}")
st.markdown("Rank the places you want to visit and see them on the map.")

with st.sidebar:
    st.header("Actions")

    if st.button("➕ Add New Destination"):
        st.session_state.edit_destination = None
        st.session_state.show_form = True

    if st.button("🔄 Refresh"):
        st.rerun()

destinations = load_destinations()

show_map(destinations)

if st.session_state.show_form:
    show_destination_form(destinations)

show_destinations_list(destinations)
