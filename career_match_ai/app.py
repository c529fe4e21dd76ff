"""
Career Match AI – Streamlit frontend.
No business logic in layout; orchestration lives in the Recommendation Agent.
"""

from typing import List, Optional

import streamlit as st

from career_match_ai.agents.recommendation_agent import RecommendationAgent, get_recommendations
from career_match_ai.config import COMPLETION_API_KEY, MISTRAL_API_KEY, SUPABASE_SERVICE_KEY, SUPABASE_URL
from career_match_ai.errors import CareerMatchError, PreconditionError
from career_match_ai.schemas.profile import CategorySelection, ProfileSnapshot
from career_match_ai.schemas.recommendation import RecommendationRecord
from career_match_ai.services.completion_service import CompletionService
from career_match_ai.services.recommendation_store import RecommendationStore
from career_match_ai.services.resume_storage import ResumeStorage

SOURCE_CAPTIONS = {
    "cached": "Showing your saved recommendations.",
    "generated": "Fresh recommendations generated from your profile.",
    "default": "Showing general recommendations. Complete discovery or upload a resume for personalized ones.",
}

DISCOVERY_OPTIONS = {
    "skills": ("Python", "SQL", "Data analysis", "Project management", "Writing", "Design", "Sales", "Teaching"),
    "interests": ("Technology", "Healthcare", "Finance", "Education", "Arts", "Environment", "Sports", "Travel"),
    "values": ("Autonomy", "Stability", "Impact", "Creativity", "Work-life balance", "Growth", "Teamwork"),
}


@st.cache_resource
def _store() -> RecommendationStore:
    return RecommendationStore.from_settings()


def _agent() -> RecommendationAgent:
    return RecommendationAgent(store=_store(), completion=CompletionService())


def _load(user_id: str, force_refresh: bool, resume_url: Optional[str] = None) -> None:
    with st.spinner("Analyzing your profile and generating recommendations…"):
        try:
            response = get_recommendations(
                user_id,
                force_refresh=force_refresh,
                resume_url=resume_url,
                agent=_agent(),
            )
            st.session_state["recommendations"] = response.recommendations
            st.session_state["source"] = response.source
            st.session_state["error"] = None
        except PreconditionError as e:
            st.session_state["error"] = str(e)


def _render_upload(user_id: str) -> None:
    uploaded = st.file_uploader("Upload Your Resume/CV (PDF or DOCX)", type=["pdf", "docx"], key="resume_file")
    if uploaded is None or not st.button("Upload and analyze", key="upload_btn"):
        return
    storage = ResumeStorage(_store().client, _store())
    try:
        resume_url = storage.upload_resume(user_id, uploaded.name, uploaded.getvalue(), uploaded.type)
    except CareerMatchError as e:
        st.error(f"Upload failed: {e}")
        return
    except Exception as e:
        st.error(f"There was an error uploading your resume: {e}")
        return
    st.success("Your resume has been uploaded and is being processed.")
    _load(user_id, force_refresh=True, resume_url=resume_url)


def _render_discovery(user_id: str) -> None:
    try:
        saved = ProfileSnapshot.from_discovery_data(_store().get_profile(user_id).discovery_data)
    except CareerMatchError as e:
        st.warning(f"Could not load your saved discovery answers: {e}")
        saved = ProfileSnapshot()

    answers = {}
    for category, label in (("skills", "Skills"), ("interests", "Interests"), ("values", "Values")):
        current: CategorySelection = getattr(saved, category)
        # tags saved earlier stay selectable even if they are not in the preset list
        options = list(DISCOVERY_OPTIONS[category])
        options += [tag for tag in current.selected if tag not in options]
        selected = st.multiselect(label, options, default=current.selected, key=f"discovery_{category}")
        notes = st.text_area(
            f"Anything else about your {category}?",
            value=current.additional_info,
            key=f"discovery_{category}_notes",
        )
        answers[category] = CategorySelection(selected=selected, additional_info=notes)

    if not st.button("Save discovery answers", key="discovery_btn"):
        return
    profile = ProfileSnapshot(**answers)
    if not profile.has_discovery_data:
        st.warning("Pick at least one skill, interest or value first.")
        return
    try:
        _store().save_discovery_data(user_id, profile.to_discovery_data())
    except CareerMatchError as e:
        st.error(f"Could not save your answers: {e}")
        return
    st.success("Discovery answers saved.")
    _load(user_id, force_refresh=True)


def _render_cards(user_id: str, recommendations: List[RecommendationRecord]) -> None:
    for index, rec in enumerate(recommendations):
        with st.container():
            st.markdown("---")
            col_a, col_b = st.columns([3, 1])
            with col_a:
                st.markdown(f"### {rec.role_title}")
                st.markdown(rec.description)
            with col_b:
                if st.button("Select role", key=f"select_{index}"):
                    try:
                        _store().select_role(user_id, rec.role_title)
                    except CareerMatchError as e:
                        st.error(f"There was a problem processing your selection: {e}")
                    else:
                        st.session_state["selected_role"] = rec.role_title
                        # banner above the cards was drawn before this click
                        st.rerun()
            with st.expander("Why it fits you professionally"):
                st.markdown(rec.why_it_fits_professionally)
            with st.expander("Why it fits you personally"):
                st.markdown(rec.why_it_fits_personally)


def render_layout() -> None:
    """Streamlit page layout."""
    st.set_page_config(page_title="Career Match AI", layout="wide")
    st.title("Career Match AI")
    st.markdown("*Career roles recommended from your discovery answers and resume.*")
    st.divider()

    for key, default in (("recommendations", []), ("source", None), ("error", None), ("selected_role", None)):
        if key not in st.session_state:
            st.session_state[key] = default

    if not SUPABASE_URL or not SUPABASE_SERVICE_KEY:
        st.error("SUPABASE_URL and SUPABASE_SERVICE_KEY are not set. Add them to your .env file.")
        return
    if not COMPLETION_API_KEY:
        st.warning("COMPLETION_API_KEY is not set; only saved or default recommendations will be shown.")
    if not MISTRAL_API_KEY:
        st.warning("MISTRAL_API_KEY is not set; resumes will not be analyzed.")

    user_id = st.text_input("User ID", key="user_id").strip()
    col1, col2 = st.columns(2)
    with col1:
        get_clicked = st.button("Get recommendations", type="primary", key="get_btn")
    with col2:
        refresh_clicked = st.button("Refresh recommendations", key="refresh_btn")

    if (get_clicked or refresh_clicked) and not user_id:
        st.session_state["error"] = "Please enter a user ID."
    elif get_clicked or refresh_clicked:
        _load(user_id, force_refresh=refresh_clicked)

    if user_id:
        with st.expander("Discovery"):
            _render_discovery(user_id)
        with st.expander("Resume"):
            _render_upload(user_id)

    if st.session_state.get("error"):
        st.error(st.session_state["error"])

    recommendations: List[RecommendationRecord] = st.session_state.get("recommendations") or []
    if not recommendations:
        st.info("Enter your user ID, then click **Get recommendations**.")
        return

    st.subheader("Recommended roles")
    caption = SOURCE_CAPTIONS.get(st.session_state.get("source") or "")
    if caption:
        st.caption(caption)
    if st.session_state.get("selected_role"):
        st.success(f"You've selected {st.session_state['selected_role']} as your career path.")
    _render_cards(user_id, recommendations)


if __name__ == "__main__":
    render_layout()
