"""
frontend/app.py
═══════════════
SkillSwap Match  |  Streamlit match browser
Run: streamlit run frontend/app.py

Dependencies
────────────
  pip install streamlit plotly requests
"""
from __future__ import annotations

import plotly.graph_objects as go
import requests
import streamlit as st

from config.settings import get_settings

# ─────────────────────────────────────────────────────────────────────────────
#  Config
# ─────────────────────────────────────────────────────────────────────────────
API = get_settings().api_url

st.set_page_config(
    page_title="SkillSwap Match",
    page_icon="🤝",
    layout="wide",
    initial_sidebar_state="expanded",
)

_DEFAULTS = {
    "user_id": "",
    "page":    1,
    "matches": None,
    "detail":  None,
}
for k, v in _DEFAULTS.items():
    if k not in st.session_state:
        st.session_state[k] = v

# ─────────────────────────────────────────────────────────────────────────────
#  API helpers
# ─────────────────────────────────────────────────────────────────────────────
def _api_ok() -> bool:
    try:
        return requests.get(f"{API}/health", timeout=3).status_code == 200
    except requests.RequestException:
        return False


def _fetch_matches(user_id: str, page: int, limit: int, location: str, availability: str) -> dict:
    params = {"page": page, "limit": limit}
    if location:
        params["location"] = location
    if availability:
        params["availability"] = availability
    try:
        r = requests.get(
            f"{API}/api/users/matches",
            params=params,
            headers={"X-User-Id": user_id},
            timeout=30,
        )
        r.raise_for_status()
        return r.json()
    except requests.RequestException as e:
        return {"error": str(e)}


def _fetch_detail(user_id: str, other_id: str) -> dict:
    try:
        r = requests.get(
            f"{API}/api/users/{other_id}/match-details",
            headers={"X-User-Id": user_id},
            timeout=30,
        )
        r.raise_for_status()
        return r.json()
    except requests.RequestException as e:
        return {"error": str(e)}

# ─────────────────────────────────────────────────────────────────────────────
#  Visualisation helpers
# ─────────────────────────────────────────────────────────────────────────────
FACTORS = {
    "skill_match":      ("Skill match",    20, "#c9a84c"),
    "mutual_benefit":   ("Mutual benefit", 25, "#7b9cc4"),
    "reputation_bonus": ("Reputation",     10, "#6aaa84"),
    "activity_bonus":   ("Activity",       10, "#b07b6a"),
    "location_bonus":   ("Location",       10, "#8a7aaa"),
}


def _breakdown_chart(breakdown: dict) -> go.Figure:
    """Horizontal bars: each factor as a share of its cap."""
    labels = [FACTORS[k][0] for k in FACTORS]
    pcts   = [100 * breakdown.get(k, 0) / FACTORS[k][1] for k in FACTORS]
    fig = go.Figure(go.Bar(
        x=pcts, y=labels, orientation="h",
        marker=dict(color=[FACTORS[k][2] for k in FACTORS]),
        text=[f"{breakdown.get(k, 0):g}/{FACTORS[k][1]}" for k in FACTORS],
        textposition="auto",
    ))
    fig.update_layout(
        xaxis=dict(range=[0, 100], ticksuffix="%"),
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        margin=dict(l=10, r=10, t=10, b=10),
        height=220,
    )
    return fig

# ─────────────────────────────────────────────────────────────────────────────
#  Sidebar
# ─────────────────────────────────────────────────────────────────────────────
with st.sidebar:
    st.markdown("## 🤝 SkillSwap Match")

    api_live = _api_ok()
    if api_live:
        st.success("🟢 Backend Online")
    else:
        st.error("🔴 Backend Offline")
        st.caption("Start: `uvicorn backend.main:app --reload`")

    st.divider()
    user_id      = st.text_input("Your user id", value=st.session_state["user_id"])
    location     = st.text_input("Location contains")
    availability = st.selectbox("Available", ["", "weekdays", "weekends", "evenings", "mornings"])
    limit        = st.slider("Matches per page", 5, 50, 10)

    if st.button("🔍 Find Matches", type="primary", use_container_width=True, disabled=not api_live):
        st.session_state["user_id"] = user_id
        st.session_state["page"]    = 1
        st.session_state["detail"]  = None
        with st.spinner("Scoring candidates…"):
            st.session_state["matches"] = _fetch_matches(user_id, 1, limit, location, availability)

# ─────────────────────────────────────────────────────────────────────────────
#  Main screen
# ─────────────────────────────────────────────────────────────────────────────
matches = st.session_state["matches"]

if matches is None:
    st.info("Enter your user id in the sidebar to see who you can swap skills with.")
elif "error" in matches:
    st.error(f"Could not fetch matches: {matches['error']}")
else:
    pag = matches["pagination"]
    st.markdown(
        f"### {pag['total_users']} potential partners · page {pag['current_page']}/{max(pag['total_pages'], 1)}"
    )

    for item in matches["data"]:
        user = item["user"]
        with st.container(border=True):
            left, right = st.columns([2, 3])
            with left:
                st.markdown(f"**{user['name'] or user['id']}**  ·  {user.get('location') or '—'}")
                st.metric("Compatibility", f"{item['compatibility_score']:.2f}")
                st.caption("Teaches: " + (", ".join(s["name"] for s in user["skills_offered"]) or "—"))
                if st.button("Details", key=f"detail_{user['id']}"):
                    st.session_state["detail"] = _fetch_detail(st.session_state["user_id"], user["id"])
            with right:
                st.plotly_chart(
                    _breakdown_chart(item["score_breakdown"]),
                    use_container_width=True,
                    key=f"chart_{user['id']}",
                )

    prev_col, next_col = st.columns(2)
    if pag["has_prev"] and prev_col.button("← Previous"):
        st.session_state["page"] -= 1
        st.session_state["matches"] = _fetch_matches(
            st.session_state["user_id"], st.session_state["page"], limit, location, availability
        )
        st.rerun()
    if pag["has_next"] and next_col.button("Next →"):
        st.session_state["page"] += 1
        st.session_state["matches"] = _fetch_matches(
            st.session_state["user_id"], st.session_state["page"], limit, location, availability
        )
        st.rerun()

detail = st.session_state["detail"]
if detail:
    st.divider()
    if "error" in detail:
        st.error(detail["error"])
    else:
        trace = detail["skill_matches"]
        st.markdown(f"### Match with {detail['user']['name'] or detail['user']['id']}")
        c1, c2, c3 = st.columns(3)
        with c1:
            st.markdown("**You can teach**")
            for s in trace["you_can_teach"]:
                st.write(f"{s['skill']} — you: {s['level']}, they want it: {s['priority']}")
        with c2:
            st.markdown("**They can teach**")
            for s in trace["they_can_teach"]:
                st.write(f"{s['skill']} — they: {s['level']}, you want it: {s['priority']}")
        with c3:
            st.markdown("**Both teach**")
            for s in trace["mutual_matches"]:
                st.write(f"{s['skill']} — you: {s['your_level']}, they: {s['their_level']}")
        with st.expander("Why this score?"):
            for factor, reasons in detail["reasons"].items():
                st.markdown(f"**{FACTORS[factor][0]}**")
                for reason in reasons:
                    st.caption(f"- {reason}")
