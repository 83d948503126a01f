"""Workflow engine tests below the HTTP layer."""

from __future__ import annotations

import threading
from datetime import datetime, timedelta, timezone

import pytest

from campus_events.data_access import notifications_dao
from campus_events.errors import Conflict, Forbidden, InvalidTransition
from campus_events.models.entities import ADMIN_AUDIENCE, BookingStatus, EventStatus, NotificationKind
from campus_events.services import notifier, workflow

START = datetime(2030, 7, 1, 10, tzinfo=timezone.utc)


def test_transitions_return_outbox_without_storing(app, organizer_user, admin_user):
    with app.app_context():
        before = len(notifications_dao.list_notifications())
        transition = workflow.create_event(
            organizer_user,
            title="Quiz Night",
            description="Teams of four.",
            start_date=START,
            end_date=START + timedelta(hours=2),
        )
        assert transition.entity.status is EventStatus.DRAFT
        assert [draft.audience for draft in transition.notifications] == [ADMIN_AUDIENCE]
        assert len(notifications_dao.list_notifications()) == before

        stored = notifier.dispatch(transition.notifications)
        assert stored[0].kind is NotificationKind.EVENT_APPROVAL
        assert len(notifications_dao.list_notifications()) == before + 1

        decided = workflow.set_event_status(admin_user, transition.entity.event_id, EventStatus.APPROVED)
        assert len(decided.notifications) == 1
        assert decided.notifications[0].audience == organizer_user.user_id


def test_engine_enforces_moderator_role(app, organizer_user, student_user):
    with app.app_context():
        with pytest.raises(Forbidden):
            workflow.set_event_status(organizer_user, 2, EventStatus.APPROVED)
        with pytest.raises(Forbidden):
            workflow.set_booking_status(student_user, 1, BookingStatus.REJECTED)
        with pytest.raises(Forbidden):
            workflow.create_event(
                student_user,
                title="Nope",
                description="Participants cannot create events.",
                start_date=START,
                end_date=START,
            )


def test_non_rejected_bookings_never_overlap(app, student_user, admin_user):
    """Hammer one resource with staggered requests and check the invariant."""

    with app.app_context():
        for offset in range(0, 240, 20):
            start = START + timedelta(minutes=offset)
            try:
                transition = workflow.request_booking(
                    student_user, 3, start, start + timedelta(minutes=45), "Practice"
                )
            except Conflict:
                continue
            if offset % 60 == 0:
                workflow.set_booking_status(admin_user, transition.entity.booking_id, BookingStatus.REJECTED)

        live = [
            booking
            for booking in workflow.visible_bookings(admin_user)
            if booking.resource_id == 3 and booking.status is not BookingStatus.REJECTED
        ]
        assert live
        for index, first in enumerate(live):
            for second in live[index + 1:]:
                assert not first.overlaps(second.start_time, second.end_time)


def test_concurrent_approvals_decide_once(app, admin_user):
    """Racing admins: one approval wins, the rest see a decided booking."""

    barrier = threading.Barrier(4)
    outcomes = []

    def approve():
        with app.app_context():
            barrier.wait()
            try:
                transition = workflow.set_booking_status(admin_user, 2, BookingStatus.APPROVED)
            except InvalidTransition:
                outcomes.append("refused")
            else:
                outcomes.append(len(transition.notifications))

    threads = [threading.Thread(target=approve) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert sorted(outcomes, key=str) == [1, "refused", "refused", "refused"]
