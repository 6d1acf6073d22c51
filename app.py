"""
Workout Volume Planner

Build a weekly routine and get real-time feedback on training volume per
muscle: where each muscle sits relative to its volume landmarks
(MV / MEV / MAV / MRV), how fatiguing each session is, and whether the
volume matches the priority you gave each muscle.

Usage:
    streamlit run app.py
"""

import json
import logging

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from body_diagram import generate_combined_body_diagram, get_zone_legend_html
from config import APP_VERSION, YamlConfig, configure_logging
from constants import (
    ALL_MUSCLES,
    FREQUENCY_STATUS,
    MAX_SETS,
    MIN_SETS,
    PRIORITY_TIERS,
    TIER_INFO,
    TIER_TARGETS,
    ZONE_CONFIG,
)
from exercise_library import build_exercise_index, filter_exercises, get_catalog_muscles
from fatigue_analysis import analyze_fatigue
from priority_analysis import (
    PRIORITY_SORT_OPTIONS,
    analyze_priorities,
    build_priority_map,
    get_priority_verdict,
    has_priorities,
    sort_priority_analysis,
    summarize_priority_analysis,
)
from routine_editor import (
    DEFAULT_ROUTINE,
    add_day,
    add_exercise,
    apply_preset,
    copy_day,
    empty_priorities,
    get_unassigned_muscles,
    move_exercise,
    remove_day,
    remove_exercise,
    rename_day,
    rename_routine,
    update_exercise_sets,
)
from storage import (
    JsonStore,
    StorageError,
    clear_all_data,
    export_routine_to_json,
    import_routine_from_json,
    load_exercise_library,
    load_priorities,
    load_priority_presets,
    load_routine,
    load_sort_option,
    load_volume_landmarks,
    save_priorities,
    save_routine,
    save_sort_option,
)
from volume_calculator import (
    VOLUME_SORT_OPTIONS,
    calculate_movement_pattern_volumes,
    calculate_muscle_volumes,
    get_volume_zone,
    sort_muscle_volumes,
    summarize_volume_zones,
)

logger = logging.getLogger(__name__)

# Page configuration
st.set_page_config(
    page_title="Workout Volume Planner",
    page_icon="🏋️",
    layout="wide",
    initial_sidebar_state="expanded",
)

STATUS_ICONS = {
    "optimal": "✅",
    "good": "📈",
    "warning": "⚠️",
    "critical": "🛑",
}


@st.cache_data
def load_reference_data(data_dir):
    """Load exercise catalog, volume landmarks and priority presets."""
    return (
        load_exercise_library(data_dir),
        load_volume_landmarks(data_dir),
        load_priority_presets(data_dir),
    )


# =============================================================================
# Session State
# =============================================================================


def initialize_session_state(store):
    """Initialize session state from the store, falling back to defaults."""
    if "routine" not in st.session_state:
        st.session_state.routine = load_routine(store) or DEFAULT_ROUTINE
    if "priorities" not in st.session_state:
        st.session_state.priorities = load_priorities(store) or empty_priorities()
    if "revision" not in st.session_state:
        # Bumped on every edit so per-row widget keys never go stale
        st.session_state.revision = 0


def set_routine(store, routine):
    st.session_state.routine = routine
    st.session_state.revision += 1
    save_routine(store, routine)


def set_priorities(store, priorities):
    st.session_state.priorities = priorities
    save_priorities(store, priorities)


# =============================================================================
# Sidebar
# =============================================================================


def render_sidebar(store, presets):
    """Render routine name, import/export, presets and reset actions."""
    routine = st.session_state.routine

    st.sidebar.title("🏋️ Volume Planner")
    st.sidebar.markdown("Build your routine and check volume per muscle.")
    st.sidebar.caption(f"v{APP_VERSION}")

    view = st.sidebar.radio(
        "View",
        ["🏗️ Routine Builder", "🎯 Priorities", "📊 Analysis"],
    )

    st.sidebar.markdown("---")
    st.sidebar.subheader("📁 Routine Actions")

    new_name = st.sidebar.text_input("Routine Name", value=routine.name)
    renamed = rename_routine(routine, new_name)
    if renamed.name != routine.name:
        set_routine(store, renamed)

    export_data = export_routine_to_json(st.session_state.routine, st.session_state.priorities)
    st.sidebar.download_button(
        label="📥 Save Routine (JSON)",
        data=json.dumps(export_data, indent=2),
        file_name=f"{st.session_state.routine.name.replace(' ', '_').lower()}.json",
        mime="application/json",
        use_container_width=True,
    )

    uploaded_file = st.sidebar.file_uploader("📤 Import Routine", type=["json"])
    if uploaded_file is not None:
        st.sidebar.caption(f"File: {uploaded_file.name}")
        if st.sidebar.button("📂 Load Routine from File", use_container_width=True):
            try:
                uploaded_file.seek(0)
                imported_routine, imported_priorities = import_routine_from_json(
                    json.load(uploaded_file)
                )
            except (ValueError, StorageError) as e:
                logger.warning("Rejected import of %s: %s", uploaded_file.name, e)
                st.sidebar.error(f"Error loading: {e}")
            else:
                set_routine(store, imported_routine)
                if imported_priorities is not None:
                    set_priorities(store, imported_priorities)
                st.sidebar.success("Routine loaded successfully!")
                st.rerun()

    if presets:
        st.sidebar.markdown("---")
        st.sidebar.subheader("⚡ Priority Presets")
        preset_names = {p["id"]: p["name"] for p in presets}
        preset_id = st.sidebar.selectbox(
            "Preset",
            list(preset_names),
            format_func=lambda pid: preset_names[pid],
        )
        if st.sidebar.button("Apply Preset"):
            set_priorities(store, apply_preset(presets, preset_id))
            st.rerun()

    with st.sidebar.popover("🗑️ Reset Everything"):
        st.warning("⚠️ This will delete your routine and priorities!")
        if st.button("Yes, Reset", type="primary", key="confirm_reset"):
            clear_all_data(store)
            st.session_state.routine = DEFAULT_ROUTINE
            st.session_state.priorities = empty_priorities()
            st.session_state.revision += 1
            st.rerun()

    return view


# =============================================================================
# Routine Builder
# =============================================================================


def render_exercise_row(store, day, index, entry, exercise_index):
    """One exercise line: name, contribution, sets, reorder and remove."""
    routine = st.session_state.routine
    key = f"{day.id}_{index}_{st.session_state.revision}"
    exercise = exercise_index.get(entry.exercise_id)

    col1, col2, col3, col4, col5 = st.columns([4, 1.2, 0.5, 0.5, 0.5])

    with col1:
        if exercise is None:
            st.text(f"{entry.exercise_id} (not in library)")
        else:
            st.text(exercise.name)
            contrib = [
                f"{mw.muscle}: {entry.sets * mw.weighting:.1f}"
                for mw in exercise.muscle_weightings
            ]
            st.caption(f"   ↳ {' | '.join(contrib)}")

    with col2:
        new_sets = st.number_input(
            "Sets",
            min_value=MIN_SETS,
            max_value=MAX_SETS,
            value=max(MIN_SETS, min(MAX_SETS, entry.sets)),
            key=f"sets_{key}",
            label_visibility="collapsed",
        )
        if new_sets != entry.sets:
            set_routine(store, update_exercise_sets(routine, day.id, index, new_sets))
            st.rerun()

    with col3:
        if st.button("⬆️", key=f"up_{key}", help="Move up", disabled=index == 0):
            set_routine(store, move_exercise(routine, day.id, index, index - 1))
            st.rerun()
    with col4:
        if st.button(
            "⬇️",
            key=f"down_{key}",
            help="Move down",
            disabled=index == len(day.exercises) - 1,
        ):
            set_routine(store, move_exercise(routine, day.id, index, index + 1))
            st.rerun()
    with col5:
        if st.button("🗑️", key=f"remove_{key}", help="Remove exercise"):
            set_routine(store, remove_exercise(routine, day.id, index))
            st.rerun()


def render_add_exercise(store, day, exercises, muscles):
    """Search the library and add an exercise to a day."""
    with st.expander("➕ Add Exercise"):
        col1, col2 = st.columns(2)
        with col1:
            query = st.text_input("Search", key=f"search_{day.id}")
        with col2:
            muscle = st.selectbox("Target Muscle", ["All"] + muscles, key=f"muscle_{day.id}")

        matches = filter_exercises(exercises, query, None if muscle == "All" else muscle)
        if not matches:
            st.caption("No exercises match your filters")
            return

        names = {ex.id: ex.name for ex in matches}
        exercise_id = st.selectbox(
            "Exercise",
            list(names),
            format_func=lambda eid: names[eid],
            key=f"select_{day.id}",
        )
        if st.button("Add to Day", key=f"add_{day.id}"):
            set_routine(store, add_exercise(st.session_state.routine, day.id, exercise_id))
            st.rerun()


def render_routine_builder(store, exercises, exercise_index):
    """Render the day-by-day routine editor."""
    routine = st.session_state.routine
    muscles = get_catalog_muscles(exercises)

    st.header("🏗️ Routine Builder")
    st.caption("Each day is one session per week. Sets count toward every muscle an exercise trains.")

    if not routine.days:
        st.info("No training days yet. Add one below.")

    for day in routine.days:
        total_sets = sum(entry.sets for entry in day.exercises)
        with st.expander(f"**{day.name}** · {total_sets} sets", expanded=True):
            col1, col2, col3 = st.columns([3, 2, 1])
            with col1:
                new_name = st.text_input(
                    "Day name",
                    value=day.name,
                    key=f"name_{day.id}_{st.session_state.revision}",
                )
                renamed = rename_day(routine, day.id, new_name)
                if renamed is not routine and new_name.strip() != day.name:
                    set_routine(store, renamed)
                    st.rerun()
            with col2:
                other_days = {d.id: d.name for d in routine.days if d.id != day.id}
                if other_days:
                    source = st.selectbox(
                        "Copy from",
                        list(other_days),
                        format_func=lambda did: other_days[did],
                        key=f"copy_src_{day.id}",
                    )
                    if st.button("📋 Copy", key=f"copy_{day.id}"):
                        set_routine(store, copy_day(routine, source, day.id))
                        st.rerun()
            with col3:
                if st.button("🗑️ Remove Day", key=f"remove_day_{day.id}"):
                    set_routine(store, remove_day(routine, day.id))
                    st.rerun()

            if day.exercises:
                for i, entry in enumerate(day.exercises):
                    render_exercise_row(store, day, i, entry, exercise_index)
            else:
                st.caption("No exercises added yet")

            render_add_exercise(store, day, exercises, muscles)

    if st.button("➕ Add Day"):
        set_routine(store, add_day(routine))
        st.rerun()


# =============================================================================
# Priority Settings
# =============================================================================


def render_priority_settings(store):
    """Assign muscles to priority tiers."""
    priorities = st.session_state.priorities

    st.header("🎯 Muscle Priorities")
    st.caption("Rank muscles by how much you want them to grow. Each muscle belongs to one tier.")

    updated = {}
    for tier in PRIORITY_TIERS:
        taken_elsewhere = {
            m for t, muscles in priorities.items() if t != tier for m in muscles
        }
        options = [m for m in ALL_MUSCLES if m not in taken_elsewhere]
        current = [m for m in priorities.get(tier, []) if m in options]
        info = TIER_INFO[tier]
        updated[tier] = st.multiselect(
            f"{info['label']}: {info['description']}",
            options=options,
            default=current,
            help=TIER_TARGETS[tier]["description"],
        )

    if updated != {tier: priorities.get(tier, []) for tier in PRIORITY_TIERS}:
        set_priorities(store, updated)
        st.rerun()

    unassigned = get_unassigned_muscles(priorities, ALL_MUSCLES)
    if unassigned:
        st.caption(f"Unassigned: {', '.join(unassigned)}")


# =============================================================================
# Analysis Views
# =============================================================================


def build_volume_dataframe(muscle_volumes, landmarks):
    """Table of trained muscles with zone and landmarks."""
    rows = []
    for mv in muscle_volumes:
        landmark = landmarks.get(mv.muscle)
        if landmark is None or mv.total_sets == 0:
            continue
        zone = get_volume_zone(mv.total_sets, landmarks, mv.muscle)
        rows.append(
            {
                "Muscle": mv.muscle,
                "Sets": mv.total_sets,
                "Frequency": mv.frequency,
                "Zone": ZONE_CONFIG[zone]["label"],
                "MV": landmark.mv,
                "MEV": landmark.mev,
                "MAV": f"{landmark.mav_min:g}-{landmark.mav_max:g}",
                "MRV": landmark.mrv,
                "_color": ZONE_CONFIG[zone]["color"],
            }
        )
    return pd.DataFrame(rows)


def render_volume_chart(df):
    """Bar chart of weekly sets per muscle with MEV and MRV markers."""
    fig = go.Figure()
    fig.add_trace(
        go.Bar(
            x=df["Muscle"],
            y=df["Sets"],
            marker_color=df["_color"],
            name="Weekly sets",
            hovertext=df["Zone"],
        )
    )
    fig.add_trace(
        go.Scatter(
            x=df["Muscle"],
            y=df["MEV"],
            mode="markers",
            marker={"symbol": "line-ew", "size": 24, "line": {"width": 2, "color": "#4CAF50"}},
            name="MEV",
        )
    )
    fig.add_trace(
        go.Scatter(
            x=df["Muscle"],
            y=df["MRV"],
            mode="markers",
            marker={"symbol": "line-ew", "size": 24, "line": {"width": 2, "color": "#F44336"}},
            name="MRV",
        )
    )
    fig.update_layout(title="Weekly Sets vs Landmarks", xaxis_tickangle=-45)
    st.plotly_chart(fig, use_container_width=True)


def render_volume_analysis(store, routine, exercises, muscle_volumes, landmarks, priority_map):
    summary = summarize_volume_zones(muscle_volumes, landmarks)

    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Optimal", summary["optimal"], help="Muscles in the MAV sweet spot")
    with col2:
        st.metric("Growing", summary["growth"], help="Muscles receiving growth stimulus")
    with col3:
        st.metric(
            "Needs Attention",
            summary["needs_attention"],
            help="Muscles undertrained or overtrained",
        )

    options = dict(VOLUME_SORT_OPTIONS)
    if not priority_map:
        options.pop("priority")
    saved = load_sort_option(store)
    sort_by = st.selectbox(
        "Sort by",
        list(options),
        index=list(options).index(saved) if saved in options else 0,
        format_func=lambda o: options[o],
    )
    if sort_by != saved:
        save_sort_option(store, sort_by)

    ordered = sort_muscle_volumes(muscle_volumes, sort_by, priority_map)
    df = build_volume_dataframe(ordered, landmarks)

    if df.empty:
        st.info("Add exercises to your routine to see volume per muscle.")
        return

    st.dataframe(
        df.drop(columns=["_color"]),
        use_container_width=True,
        hide_index=True,
        column_config={"Sets": st.column_config.NumberColumn(format="%.1f")},
    )
    render_volume_chart(df)

    col1, col2 = st.columns(2)
    with col1:
        st.markdown("**Body Map**")
        volumes = {mv.muscle: mv.total_sets for mv in muscle_volumes}
        st.markdown(
            generate_combined_body_diagram(volumes, landmarks) + get_zone_legend_html(),
            unsafe_allow_html=True,
        )
    with col2:
        st.markdown("**Movement Patterns**")
        patterns = calculate_movement_pattern_volumes(routine, exercises)
        if patterns:
            st.dataframe(
                pd.DataFrame([{"Pattern": p.pattern, "Sets": p.sets} for p in patterns]),
                use_container_width=True,
                hide_index=True,
            )


def render_fatigue_analysis(report, settings):
    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("High Fatigue Sessions", report.summary["high_fatigue_sessions"])
        st.caption(f"Sessions over {settings.max_sets_per_session:g} sets")
    with col2:
        st.metric("Junk Volume Risks", report.summary["junk_volume_risks"])
        st.caption(f"Muscles over {settings.max_muscle_sets_per_session:g} sets per session")
    with col3:
        st.metric("Frequency Issues", report.summary["frequency_warnings"])
        st.caption("Muscles trained only 1x/week")

    st.subheader("⚡ Session Fatigue")
    for session in report.sessions:
        level = session.fatigue_level
        st.markdown(
            f"**{session.day_name}** · {session.total_sets} sets · "
            f'<span style="color: {level["color"]}; font-weight: bold;">{level["label"]}</span>',
            unsafe_allow_html=True,
        )
        st.caption(level["description"])
        if session.high_volume_muscles:
            flagged = ", ".join(f"{m} ({v:.1f})" for m, v in session.high_volume_muscles)
            st.error(
                f"Junk volume warning: high per-session volume for {flagged}. "
                f"Performance may decline after ~{settings.max_muscle_sets_per_session:g} "
                "sets for a single muscle."
            )

    st.subheader("🔁 Training Frequency")
    if report.frequency["suboptimal"]:
        st.warning(
            "Training a muscle only once per week is often less effective for growth. "
            "Consider splitting the volume for these muscles across 2 or more sessions."
        )
    for status, muscles in report.frequency.items():
        if not muscles:
            continue
        st.markdown(f"**{FREQUENCY_STATUS[status]['label']} ({len(muscles)})**")
        st.caption(", ".join(f"{mv.muscle} ({mv.frequency}x)" for mv in muscles))


def render_priority_analysis(muscle_volumes, landmarks):
    priorities = st.session_state.priorities

    if not has_priorities(priorities):
        st.info("🎯 Set your muscle priorities to see how your routine matches your goals.")
        return

    analysis = analyze_priorities(muscle_volumes, priorities, landmarks)
    summary = summarize_priority_analysis(analysis)
    verdict = get_priority_verdict(summary)

    if verdict == "critical":
        st.error(
            f"**Critical Alert:** {summary['critical']} critical issues where high-priority "
            "muscles are severely undertrained or a muscle is exceeding its MRV."
        )
    elif verdict == "suggestions":
        st.warning(
            f"**Suggestions for Improvement:** {summary['warning']} areas to adjust for "
            "better alignment with your goals."
        )
    else:
        st.success(
            f"**Great Work!** Your routine is well-aligned with your priorities. "
            f"{summary['optimal']} muscles are in their target zones."
        )

    sort_by = st.selectbox(
        "Sort analysis",
        list(PRIORITY_SORT_OPTIONS),
        format_func=lambda o: PRIORITY_SORT_OPTIONS[o],
    )

    for item in sort_priority_analysis(analysis, sort_by):
        col1, col2 = st.columns([3, 2])
        with col1:
            st.markdown(f"**{TIER_INFO[item.tier]['label']} · {item.muscle}**")
        with col2:
            st.caption(
                f"Current: {item.current_sets:.1f} | "
                f"Target: {item.target_min:g}-{item.target_max:g}"
            )
        st.progress(min(item.current_sets / item.display_max, 1.0) if item.display_max else 0.0)
        st.markdown(f"{STATUS_ICONS[item.status]} {item.recommendation}")


def render_analysis(store, settings, routine, exercises, landmarks):
    """Recompute every analysis from the current routine and render tabs."""
    muscle_volumes = calculate_muscle_volumes(routine, exercises)
    priority_map = build_priority_map(st.session_state.priorities)
    report = analyze_fatigue(
        routine,
        muscle_volumes,
        exercises,
        max_muscle_sets=settings.max_muscle_sets_per_session,
        thresholds=settings.fatigue_thresholds(),
    )

    st.header("📊 Routine Analysis")
    volume_tab, fatigue_tab, priority_tab = st.tabs(
        ["📈 Volume", "⚡ Fatigue", "🎯 Priorities"]
    )

    with volume_tab:
        render_volume_analysis(store, routine, exercises, muscle_volumes, landmarks, priority_map)
    with fatigue_tab:
        render_fatigue_analysis(report, settings)
    with priority_tab:
        render_priority_analysis(muscle_volumes, landmarks)


def main():
    """Main application entry point."""
    try:
        settings = YamlConfig().load()
    except (OSError, ValueError) as e:
        st.error(f"Error loading settings: {e}")
        return
    configure_logging(settings.log_level)

    exercises, landmarks, presets = load_reference_data(settings.data_dir)
    if not exercises:
        st.error("Exercise library not found. Please ensure data/exercises.json exists.")
        return
    if not landmarks:
        st.warning("Volume landmarks not found; zones will use the default for every muscle.")

    store = JsonStore(settings.storage_path)
    initialize_session_state(store)

    view = render_sidebar(store, presets)
    st.title(f"🏋️ {st.session_state.routine.name}")

    exercise_index = build_exercise_index(exercises)

    if view == "🏗️ Routine Builder":
        render_routine_builder(store, exercises, exercise_index)
    elif view == "🎯 Priorities":
        render_priority_settings(store)

    st.markdown("---")
    render_analysis(store, settings, st.session_state.routine, exercises, landmarks)


if __name__ == "__main__":
    main()
