import streamlit as st

from smarthub import agent, courses
from smarthub.api_client import Err, Ok, call
from smarthub.app_state import flash, get_client
from smarthub.formatting import format_compact_time, format_file_size, format_score, score_level
from smarthub.models import AgentStrategy, CourseRequest, QuestionType, Role
from smarthub.quiz_editor import TRUE_FALSE_OPTIONS
from smarthub.ui import render_hero, report, require_session, setup_page
from smarthub.validation import ValidationError, validate_course

setup_page("Courses", "📚")
session = require_session()
client = get_client()

render_hero("Courses", "Browse courses, enroll and share course material.")

if session.can_author:
    with st.expander("Create a course"):
        with st.form("create_course", clear_on_submit=True):
            title = st.text_input("Title")
            description = st.text_area("Description")
            files = st.file_uploader("Course files", accept_multiple_files=True)
            submitted = st.form_submit_button("Create", type="primary")
        if submitted:
            request = CourseRequest(title=title.strip(), description=description.strip(), teacher_id=session.user_id)
            try:
                validate_course(request)
            except ValidationError as exc:
                for problem in exc.problems:
                    st.error(problem)
            else:
                payload = [(f.name, f.getvalue(), f.type) for f in files or []]
                with st.spinner("Creating course..."):
                    result = call(courses.create_course, client, request, payload)
                if isinstance(result, Ok):
                    flash(f"Course created: {result.value.title}")
                    st.rerun()
                else:
                    report(result)

col_scope, col_search = st.columns([1, 2])
with col_scope:
    scope = st.radio("Show", ["All courses", "My courses"], horizontal=True)
with col_search:
    query = st.text_input("Search", placeholder="Course title")

if query.strip():
    result = call(courses.search_courses, client, query.strip())
elif scope == "My courses":
    result = call(courses.get_my_courses, client)
else:
    result = call(courses.list_courses, client)

if isinstance(result, Err):
    report(result)
    st.stop()

items = result.value
if not items:
    st.info("No courses found.")
    st.stop()


def render_files(course, owns: bool):
    files_result = call(courses.get_files, client, course.id)
    if isinstance(files_result, Err):
        report(files_result)
        return
    if not files_result.value:
        st.caption("No files yet.")
    for f in files_result.value:
        row = st.columns([5, 2, 1])
        row[0].write(f"📎 {f.file_name}")
        row[1].caption(" · ".join(p for p in (format_file_size(f.file_size), format_compact_time(f.uploaded_date)) if p))
        if owns and row[2].button("Delete", key=f"del_file_{f.id}"):
            deleted = call(courses.delete_file, client, f.id)
            if isinstance(deleted, Ok):
                flash("File deleted.")
                st.rerun()
            report(deleted)


def show_course_quiz_result(result):
    message = f"Last course quiz: {format_score(result.score)}, {'passed' if result.passed else 'not passed'}"
    if score_level(result.score) == "success":
        st.success(message)
    elif result.passed:
        st.info(message)
    else:
        st.warning(message)
    if result.timed_out:
        st.caption("Submitted after the time limit.")
    if result.certificate_eligible:
        st.info("🎓 This attempt qualifies for a certificate.")
    feedback = result.feedback
    if feedback is None:
        return
    if feedback.grade:
        st.caption(f"Grade {feedback.grade}")
    for title, lines in (("Strengths", feedback.strengths), ("To improve", feedback.weaknesses), ("Suggestions", feedback.suggestions)):
        if lines:
            st.markdown(f"**{title}**")
            for line in lines:
                st.write(f"- {line}")


def render_running_course_quiz(course, initiation):
    quiz = initiation.quiz
    st.markdown(f"#### {quiz.title}")
    if initiation.time_limit_minutes:
        ends = f", ends {format_compact_time(initiation.end_time)}" if initiation.end_time else ""
        st.caption(f"Time limit: {initiation.time_limit_minutes} minutes{ends}")
    for line in initiation.instructions or []:
        st.caption(line)
    for line in initiation.warnings or []:
        st.warning(line)

    picked = {}
    with st.form(f"course_quiz_{initiation.attempt_id}"):
        for index, question in enumerate(quiz.questions):
            st.markdown(f"**{index + 1}. {question.text}**")
            key = f"cq_{initiation.attempt_id}_{index}"
            if question.type == QuestionType.MULTIPLE_CHOICE:
                picked[index] = st.multiselect("Answers", question.options, key=key)
            elif question.type in (QuestionType.SINGLE_CHOICE, QuestionType.TRUE_FALSE):
                options = question.options or TRUE_FALSE_OPTIONS
                picked[index] = st.radio("Answer", options, index=None, key=key, label_visibility="collapsed")
            else:
                picked[index] = st.text_area("Answer", key=key, label_visibility="collapsed")
        col_submit, col_cancel = st.columns(2)
        submitted = col_submit.form_submit_button("Submit course quiz", type="primary")
        cancelled = col_cancel.form_submit_button("Leave")

    if cancelled:
        st.session_state.course_quizzes.pop(course.id, None)
        st.rerun()
    if submitted:
        answers = agent.course_quiz_answers(quiz, picked)
        with st.spinner("Submitting..."):
            result = call(agent.submit_course_quiz, client, initiation.attempt_id, answers)
        if isinstance(result, Ok):
            st.session_state.course_quizzes.pop(course.id, None)
            st.session_state.course_quiz_results[course.id] = result.value
            st.rerun()
        report(result)


def render_course_quiz(course):
    st.markdown("**Course quiz**")
    stats = call(agent.get_course_quiz_stats, client, session.user_id, course.id)
    if isinstance(stats, Ok) and stats.value.total_attempts:
        cols = st.columns(3)
        cols[0].metric("Attempts", stats.value.total_attempts)
        cols[1].metric("Best score", format_score(stats.value.best_score))
        cols[2].metric("Average score", format_score(stats.value.average_score))

    running = st.session_state.course_quizzes.get(course.id)
    if running is not None:
        render_running_course_quiz(course, running)
        return
    last = st.session_state.course_quiz_results.get(course.id)
    if last is not None:
        show_course_quiz_result(last)

    eligibility = call(agent.check_course_quiz_eligibility, client, session.user_id, course.id)
    if isinstance(eligibility, Err):
        report(eligibility)
        return
    status = eligibility.value
    if not status.eligible:
        when = f" Next attempt: {format_compact_time(status.next_available_time)}." if status.next_available_time else ""
        st.warning(f"{status.reason or 'The course quiz is not available right now.'}{when}")
        return
    st.info(f"{status.remaining_attempts_today} of {status.max_attempts_per_day} attempts left today.")
    if status.recommendation:
        st.caption(status.recommendation)

    col_start, col_strategy, col_adaptive = st.columns(3)
    if col_start.button("Start course quiz", key=f"cq_start_{course.id}", type="primary"):
        with st.spinner("Preparing the course quiz..."):
            started = call(agent.initiate_course_quiz, client, session.user_id, course.id)
        if isinstance(started, Ok):
            st.session_state.course_quizzes[course.id] = started.value
            st.session_state.course_quiz_results.pop(course.id, None)
            st.rerun()
        report(started)
    strategy = col_strategy.selectbox(
        "Strategy",
        [None, *AgentStrategy],
        format_func=lambda s: "Automatic" if s is None else s.value.title(),
        key=f"cq_strategy_{course.id}",
        label_visibility="collapsed",
    )
    if col_adaptive.button("Adaptive quiz", key=f"cq_adaptive_{course.id}"):
        with st.spinner("Generating an adaptive quiz..."):
            adaptive = call(agent.initiate_adaptive_quiz, client, session.user_id, course.id, strategy)
        if isinstance(adaptive, Err):
            report(adaptive)
        elif adaptive.value.quiz is None:
            st.warning(adaptive.value.message or "No quiz was generated.")
        else:
            st.session_state.take_quiz_id = adaptive.value.quiz.id
            st.switch_page("pages/7_Take_Quiz.py")


for course in items:
    owns = session.can_author and (course.teacher_id == session.user_id or session.has_role(Role.ADMIN))
    with st.expander(f"{course.title} · {course.teacher_name or 'No teacher'}"):
        st.write(course.description or "No description")
        st.caption(f"{course.student_count} students · {course.file_count} files")

        if session.is_student:
            enrolled = call(courses.is_enrolled, client, course.id)
            if isinstance(enrolled, Ok) and enrolled.value:
                st.success("You are enrolled in this course.")
                render_course_quiz(course)
            elif st.button("Enroll", key=f"enroll_{course.id}"):
                joined = call(courses.enroll, client, course.id)
                if isinstance(joined, Ok):
                    flash(f"Enrolled in {course.title}.")
                    st.rerun()
                report(joined)

        st.markdown("**Files**")
        render_files(course, owns)

        if not owns:
            continue

        uploads = st.file_uploader("Upload files", accept_multiple_files=True, key=f"upload_{course.id}")
        if uploads and st.button("Upload", key=f"upload_btn_{course.id}"):
            payload = [(u.name, u.getvalue(), u.type) for u in uploads]
            with st.spinner("Uploading..."):
                uploaded = call(courses.upload_files, client, course.id, payload)
            if isinstance(uploaded, Ok):
                flash(f"{len(payload)} file(s) uploaded.")
                st.rerun()
            report(uploaded)

        st.markdown("**Students**")
        students = call(courses.get_students, client, course.id)
        if isinstance(students, Ok):
            for student in students.value:
                row = st.columns([5, 1])
                row[0].write(f"{student.display_name} ({student.email or student.username})")
                if row[1].button("Remove", key=f"rm_{course.id}_{student.id}"):
                    removed = call(courses.remove_student, client, course.id, student.id)
                    if isinstance(removed, Ok):
                        st.rerun()
                    report(removed)
        else:
            report(students)

        with st.form(f"edit_course_{course.id}"):
            new_title = st.text_input("Title", value=course.title)
            new_description = st.text_area("Description", value=course.description or "")
            save = st.form_submit_button("Save changes")
        if save:
            request = CourseRequest(title=new_title.strip(), description=new_description.strip(), teacher_id=course.teacher_id or session.user_id)
            try:
                validate_course(request)
            except ValidationError as exc:
                st.error(str(exc))
            else:
                updated = call(courses.update_course, client, course.id, request)
                if isinstance(updated, Ok):
                    flash("Course updated.")
                    st.rerun()
                report(updated)

        if st.button("Delete course", key=f"del_course_{course.id}"):
            deleted = call(courses.delete_course, client, course.id)
            if isinstance(deleted, Ok):
                flash(f"Course deleted: {course.title}")
                st.rerun()
            report(deleted)
