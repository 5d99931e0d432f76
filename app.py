"""
EcoTracks - Gamified learning tracks

Streamlit application for working through tracks: read lessons, pass their
quizzes, and unlock guided mini-projects.

Usage:
    streamlit run app.py
"""

import logging
import time

import streamlit as st

from ecotracks.classroom import (
    MIN_RESPONSE_LENGTH,
    InvalidTransition,
    Navigator,
    NotFound,
    PersistenceError,
    ProgressStore,
    TrackRegistry,
    build_portfolio,
)
from ecotracks.config import configure_logging, load_settings
from ecotracks.schemas import SectionKind
from ecotracks.viewer import (
    get_quiz_css,
    render_answer_feedback,
    render_quiz_question,
    render_quiz_result,
)


# -----------------------------------------------------------------------------
# Configuration
# -----------------------------------------------------------------------------

settings = load_settings()
configure_logging(settings)
logger = logging.getLogger(__name__)

st.set_page_config(
    page_title="EcoTracks",
    page_icon="🌱",
    layout="wide",
    initial_sidebar_state="expanded",
)

LEVEL_LABELS = {
    "beginner": "Beginner",
    "low-intermediate": "Low Intermediate",
    "intermediate": "Intermediate",
}

LOAD_ERROR = "Couldn't load your progress, try again."
SAVE_ERROR = "Couldn't save your progress, try again."


# -----------------------------------------------------------------------------
# Session State Initialization
# -----------------------------------------------------------------------------

def init_session_state():
    """Initialize session state variables."""
    if "registry" not in st.session_state:
        st.session_state.registry = TrackRegistry.from_directory(settings.catalog_dir)

    if "store" not in st.session_state:
        st.session_state.store = ProgressStore.sqlite(settings.progress_db, settings.learner_id)

    if "navigator" not in st.session_state:
        st.session_state.navigator = Navigator(
            st.session_state.registry,
            st.session_state.store,
        )

    if "track_id" not in st.session_state:
        st.session_state.track_id = first_track_id()

    if "view_mode" not in st.session_state:
        st.session_state.view_mode = "track"  # track, lesson, quiz, project, portfolio

    if "notice" not in st.session_state:
        st.session_state.notice = None

    if "lesson" not in st.session_state:
        st.session_state.lesson = None
        st.session_state.lesson_id = None

    if "quiz" not in st.session_state:
        st.session_state.quiz = None
        st.session_state.quiz_lesson_id = None
        st.session_state.quiz_clock = None

    if "project_draft" not in st.session_state:
        st.session_state.project_draft = None


def first_track_id():
    track_ids = st.session_state.registry.track_ids()
    return track_ids[0] if track_ids else None


def show_track(notice=None):
    """Close any open lesson, quiz or project and return to the track page."""
    st.session_state.lesson = None
    st.session_state.lesson_id = None
    st.session_state.quiz = None
    st.session_state.quiz_lesson_id = None
    st.session_state.quiz_clock = None
    st.session_state.project_draft = None
    st.session_state.view_mode = "track"
    if notice:
        st.session_state.notice = notice


# -----------------------------------------------------------------------------
# Sidebar: Track List
# -----------------------------------------------------------------------------

def render_sidebar():
    """Render the sidebar with the track list."""
    st.sidebar.title("🌱 EcoTracks")

    registry = st.session_state.registry
    nav = st.session_state.navigator

    st.sidebar.subheader("Tracks")
    for track in registry.list_tracks():
        try:
            view = nav.get_track_view(track.id)
        except PersistenceError:
            st.sidebar.error(f"{track.title}: {LOAD_ERROR}")
            continue
        label = f"{track.title} ({view.progress_percent}%)"
        if st.sidebar.button(label, key=f"track_{track.id}", use_container_width=True):
            select_track(track.id)

    st.sidebar.divider()
    if st.sidebar.button("My Portfolio", key="portfolio", use_container_width=True):
        show_track()
        st.session_state.view_mode = "portfolio"
        st.rerun()


def select_track(track_id: str):
    show_track()
    st.session_state.track_id = track_id
    st.rerun()


# -----------------------------------------------------------------------------
# Main Content: Track View
# -----------------------------------------------------------------------------

def render_track_view():
    """Render lessons and projects of the selected track."""
    nav = st.session_state.navigator
    track_id = st.session_state.track_id

    if st.session_state.notice:
        st.success(st.session_state.notice)
        st.session_state.notice = None

    if track_id is None:
        st.info("No tracks are available yet.")
        return

    try:
        view = nav.get_track_view(track_id)
    except NotFound:
        st.error("Track not found")
        if st.button("Back to Tracks"):
            st.session_state.track_id = first_track_id()
            st.rerun()
        return
    except PersistenceError:
        st.error(LOAD_ERROR)
        return

    st.title(view.track.title)
    if view.track.description:
        st.caption(view.track.description)
    st.markdown(f"{view.completed_count} of {view.total_count} lessons completed")
    st.progress(view.progress_percent / 100)
    if view.progress.is_empty():
        st.info("Pick any lesson to get started. Lessons can be taken in any order.")

    col_lessons, col_projects = st.columns(2)

    with col_lessons:
        st.subheader("Learning Modules")
        for lesson, state in zip(view.track.lessons, view.lessons):
            with st.container(border=True):
                indicator = nav.get_status_indicator(state)
                st.markdown(f"{indicator} **{lesson.title}** · {LEVEL_LABELS[lesson.level.value]}")
                if lesson.description:
                    st.caption(lesson.description)
                unlocks = view.track.projects_for_lesson(lesson.id)
                if unlocks and state.has_quiz:
                    st.caption("Pass the quiz to unlock: " + ", ".join(p.title for p in unlocks))
                if state.quiz_score is not None:
                    st.caption(f"Quiz score: {state.quiz_score}%")

                cols = st.columns(2)
                with cols[0]:
                    label = "Review Lesson" if state.completed else "Start Lesson"
                    if st.button(label, key=f"lesson_{lesson.id}"):
                        begin_lesson(track_id, lesson.id)
                with cols[1]:
                    if state.has_quiz and state.quiz_action:
                        label = "Retake Quiz" if state.quiz_action == "retake" else "Take Quiz"
                        if st.button(label, key=f"quiz_{lesson.id}"):
                            begin_quiz(track_id, lesson.id)

    with col_projects:
        st.subheader("Mini Projects")
        for project, state in zip(view.track.projects, view.projects):
            with st.container(border=True):
                icon = "🔒" if not state.unlocked else ("🏆" if state.completed else "🚀")
                st.markdown(f"{icon} **{project.title}**")
                if project.description:
                    st.caption(project.description)
                if not state.unlocked:
                    st.caption("Pass the lesson quiz to unlock")
                    continue
                if state.completed:
                    st.caption(f"Score: {state.score}/100")
                label = "Improve" if state.action == "improve" else "Start Project"
                if st.button(label, key=f"project_{project.id}", disabled=not project.steps):
                    begin_project(track_id, project.id)


def run_action(action):
    """Run a progress action, surfacing recoverable failures."""
    try:
        action()
    except PersistenceError:
        st.error(SAVE_ERROR)
        return False
    except InvalidTransition as e:
        logger.warning(f"Rejected action: {e}")
        st.warning(str(e))
        return False
    return True


# -----------------------------------------------------------------------------
# Lesson View
# -----------------------------------------------------------------------------

def begin_lesson(track_id: str, lesson_id: str):
    try:
        walkthrough = st.session_state.navigator.start_lesson(track_id, lesson_id)
    except NotFound as e:
        st.warning(str(e))
        return
    st.session_state.lesson = walkthrough
    st.session_state.lesson_id = lesson_id
    st.session_state.view_mode = "lesson"
    st.rerun()


def render_lesson_view():
    walkthrough = st.session_state.lesson
    if walkthrough is None:
        st.info("No lesson open.")
        return

    lesson = st.session_state.registry.get_lesson(
        st.session_state.track_id, st.session_state.lesson_id
    )
    st.title(lesson.title)
    total = max(walkthrough.section_count, 1)
    st.progress((walkthrough.current_index + 1) / total)
    st.caption(f"Section {walkthrough.current_index + 1} of {total}")

    section = walkthrough.current_section
    if section is None:
        st.info("This lesson's content is being developed.")
    else:
        if section.title:
            st.subheader(section.title)
        if section.content:
            st.markdown(section.content)
        if section.image_url:
            st.image(section.image_url)
        if section.kind == SectionKind.CHECK:
            render_lesson_check(walkthrough, section.check)

    cols = st.columns(3)
    with cols[0]:
        if st.button("← Previous", key="lesson_previous", disabled=walkthrough.current_index == 0):
            walkthrough.previous()
            st.rerun()
    with cols[1]:
        if walkthrough.awaiting_answer():
            label = "Check Answer"
        elif walkthrough.is_last_section():
            label = "Complete Lesson"
        else:
            label = "Next →"
        if st.button(label, key="lesson_next", type="primary"):
            advance_lesson(walkthrough, lesson)
    with cols[2]:
        if st.button("Back to track", key="lesson_back"):
            show_track()
            st.rerun()


def render_lesson_check(walkthrough, question):
    if walkthrough.explanation_shown:
        st.markdown(get_quiz_css(), unsafe_allow_html=True)
        st.markdown(
            render_answer_feedback(question, walkthrough.selected_option_index),
            unsafe_allow_html=True,
        )
        return

    st.markdown(f"**{question.prompt}**")
    choice = st.radio(
        "Choose an answer",
        range(len(question.options)),
        format_func=lambda i: question.options[i],
        index=None,
        key=f"check_{st.session_state.lesson_id}_{walkthrough.current_index}",
    )
    if choice is not None:
        walkthrough.select_option(choice)


def advance_lesson(walkthrough, lesson):
    if not run_action(walkthrough.next):
        return
    if walkthrough.completed:
        show_track(f"Lesson completed: {lesson.title}")
    elif walkthrough.awaiting_answer() and walkthrough.selected_option_index is None:
        st.warning("Please select an answer")
        return
    st.rerun()


# -----------------------------------------------------------------------------
# Quiz View
# -----------------------------------------------------------------------------

def begin_quiz(track_id: str, lesson_id: str):
    try:
        session = st.session_state.navigator.start_quiz(track_id, lesson_id)
    except (NotFound, InvalidTransition) as e:
        st.warning(str(e))
        return
    except PersistenceError:
        st.error(LOAD_ERROR)
        return
    st.session_state.quiz = session
    st.session_state.quiz_lesson_id = lesson_id
    st.session_state.quiz_clock = time.monotonic()
    st.session_state.view_mode = "quiz"
    st.rerun()


def advance_clock():
    """Feed one tick per elapsed wall-clock second into the session."""
    session = st.session_state.quiz
    now = time.monotonic()
    elapsed = int(now - st.session_state.quiz_clock)
    for _ in range(elapsed):
        session.tick()
    st.session_state.quiz_clock += elapsed


@st.fragment(run_every=1)
def render_quiz_view():
    """Render the running quiz; reruns every second to drive the timer."""
    session = st.session_state.quiz
    if session is None:
        st.info("No quiz in progress.")
        return

    advance_clock()
    st.markdown(get_quiz_css(), unsafe_allow_html=True)

    if session.is_complete():
        render_quiz_complete(session)
        return

    st.markdown(render_quiz_question(session), unsafe_allow_html=True)
    question = session.current_question

    if session.selected_option_index is None:
        choice = st.radio(
            "Choose an answer",
            range(len(question.options)),
            format_func=lambda i: question.options[i],
            index=None,
            key=f"choice_{session.current_index}",
        )
        if st.button("Submit Answer", disabled=choice is None):
            session.select_option(choice)
            st.rerun()
    else:
        st.markdown("✓ Correct!" if session.answer_is_correct() else "✗ Not quite right")
        label = "See Results" if session.is_last_question() else "Next Question"
        if st.button(label):
            session.next()
            st.rerun()

    if st.button("Leave quiz"):
        show_track()
        st.rerun(scope="app")


def render_quiz_complete(session):
    st.markdown(render_quiz_result(session.result()), unsafe_allow_html=True)

    if not session.committed:
        st.error("Couldn't save your score, try again.")
        if st.button("Retry save"):
            try:
                session.commit()
            except PersistenceError:
                return
            st.rerun()
        return

    if st.button("Back to track"):
        show_track()
        st.rerun(scope="app")


# -----------------------------------------------------------------------------
# Project View
# -----------------------------------------------------------------------------

def begin_project(track_id: str, project_id: str):
    try:
        draft = st.session_state.navigator.start_project(track_id, project_id)
    except (NotFound, InvalidTransition) as e:
        st.warning(str(e))
        return
    except PersistenceError:
        st.error(LOAD_ERROR)
        return
    st.session_state.project_draft = draft
    st.session_state.view_mode = "project"
    st.rerun()


def render_project_view():
    draft = st.session_state.project_draft
    if draft is None:
        st.info("No project open.")
        return

    project = draft.project
    st.title(project.title)
    if project.objective:
        st.markdown(f"**Goal:** {project.objective}")
    st.progress((draft.current_index + 1) / draft.step_count)
    st.caption(f"Step {draft.current_index + 1} of {draft.step_count}")

    step = draft.current_step
    st.subheader(step.title)
    st.markdown(step.description)
    if step.hint:
        with st.expander("Hint"):
            st.markdown(step.hint)

    response = st.text_area(
        "Your response",
        value=draft.current_response,
        placeholder=step.template or "",
        height=200,
        key=f"response_{project.id}_{draft.current_index}",
    )
    draft.set_response(response)

    cols = st.columns(3)
    with cols[0]:
        if st.button("← Previous", key="project_previous", disabled=draft.current_index == 0):
            draft.previous()
            st.rerun()
    with cols[1]:
        if draft.is_last_step():
            if st.button("Submit Project", key="project_submit", type="primary"):
                submit_project(draft)
        elif st.button("Next Step →", key="project_next", type="primary"):
            if draft.next():
                st.rerun()
            st.error(f"Please provide a more detailed response (at least {MIN_RESPONSE_LENGTH} characters)")
    with cols[2]:
        if st.button("Back to track", key="project_back"):
            show_track()
            st.rerun()

    if project.extension_challenge:
        st.info(f"Extension challenge: {project.extension_challenge}")
    if project.scoring_criteria:
        st.caption("Scored on: " + ", ".join(project.scoring_criteria))


def submit_project(draft):
    if not draft.can_submit():
        st.error("Please complete the current step before submitting")
        return
    scored = {}

    def finish():
        scored["score"], _ = st.session_state.navigator.finish_project(
            st.session_state.track_id, draft
        )

    if run_action(finish):
        show_track(f"Project scored: {scored['score']}/100! Great work!")
        st.rerun()


# -----------------------------------------------------------------------------
# Portfolio View
# -----------------------------------------------------------------------------

def render_portfolio_view():
    st.title("My Portfolio")
    try:
        portfolio = build_portfolio(st.session_state.registry, st.session_state.store)
    except PersistenceError:
        st.error(LOAD_ERROR)
        return

    cols = st.columns(3)
    cols[0].metric("Lessons Completed", portfolio.total_lessons)
    cols[1].metric("Projects Completed", portfolio.total_projects)
    cols[2].metric("Highest Score", portfolio.highest_score)

    for summary in portfolio.tracks:
        with st.container(border=True):
            st.markdown(f"**{summary.title}** · {summary.skill_level}")
            st.caption(
                f"{summary.lessons_completed}/{summary.total_lessons} lessons · "
                f"{summary.projects_completed}/{summary.total_projects} projects · "
                f"average {summary.average_score}"
            )

    st.subheader("Badges")
    if not portfolio.badges:
        st.info("Complete lessons and projects to earn badges.")
    for badge in portfolio.badges:
        st.markdown(f"🏅 **{badge.title}** - {badge.description}")


# -----------------------------------------------------------------------------
# Main App
# -----------------------------------------------------------------------------

def main():
    """Main application entry point."""
    init_session_state()
    render_sidebar()

    view_mode = st.session_state.view_mode
    if view_mode == "lesson":
        render_lesson_view()
    elif view_mode == "quiz":
        render_quiz_view()
    elif view_mode == "project":
        render_project_view()
    elif view_mode == "portfolio":
        render_portfolio_view()
    else:
        render_track_view()


if __name__ == "__main__":
    main()
