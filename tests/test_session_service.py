"""
Tests for session listing and the player's subscription actions.

Key invariants tested:
- MySubscriptions is exactly the subscribed subset of AllAvailable
- Subscribe then unsubscribe leaves the subscription table as it was
- Completion is one-way and idempotent
- A stale view never writes
"""
import pytest

from courtside.core.exceptions import NotFoundError
from courtside.models import Subscription
from courtside.services.session_service import (
    CompletionOutcome,
    SessionFilter,
    ToggleOutcome,
    apply_filter,
)

from conftest import content_fields, make_service, session_fields


def subscription_rows(db_session):
    return sorted(
        (s.user_id, s.session_id, s.status, s.completed_at)
        for s in db_session.query(Subscription).all()
    )


class TestSessionFilter:

    def test_toggle(self):
        assert SessionFilter.ALL_AVAILABLE.toggle() is SessionFilter.MY_SUBSCRIPTIONS
        assert SessionFilter.MY_SUBSCRIPTIONS.toggle() is SessionFilter.ALL_AVAILABLE

    def test_labels(self):
        assert SessionFilter.MY_SUBSCRIPTIONS.label == "My Subscriptions"
        assert SessionFilter.ALL_AVAILABLE.label == "All Available"


class TestListing:

    def test_coach_sees_only_own_sessions(self, db_session, coach_service, other_coach):
        mine = coach_service.create_session(session_fields("Mine"))
        make_service(db_session, other_coach).create_session(session_fields("Theirs"))
        views = coach_service.list_views()
        assert [v.session_id for v in views] == [mine]
        assert all(v.subscription is None for v in views)

    def test_coach_ignores_filter(self, coach_service):
        coach_service.create_session(session_fields())
        assert len(coach_service.list_views(SessionFilter.MY_SUBSCRIPTIONS)) == 1

    def test_player_sees_all_sessions_annotated(self, db_session, coach, coach_service, player_service, other_coach):
        a = coach_service.create_session(session_fields("A"))
        b = make_service(db_session, other_coach).create_session(session_fields("B"))
        player_service.subscribe(a)

        views = {v.session_id: v for v in player_service.list_views(SessionFilter.ALL_AVAILABLE)}
        assert set(views) == {a, b}
        assert views[a].is_subscribed()
        assert views[a].status_label() == "Active"
        assert not views[b].is_subscribed()
        assert views[b].status_label() == "Not subscribed"

    def test_subscriptions_of_other_players_are_not_shown(self, db_session, coach_service, player_service, other_player):
        session_id = coach_service.create_session(session_fields())
        make_service(db_session, other_player).subscribe(session_id)
        (view,) = player_service.list_views()
        assert view.subscription is None

    @pytest.mark.parametrize("subscribed", [(), (0,), (1, 3), (0, 1, 2, 3)])
    def test_my_subscriptions_is_subset_of_all(self, coach_service, player_service, subscribed):
        ids = [coach_service.create_session(session_fields(f"Session {n}")) for n in range(4)]
        for n in subscribed:
            player_service.subscribe(ids[n])

        everything = player_service.list_views(SessionFilter.ALL_AVAILABLE)
        mine = player_service.list_views(SessionFilter.MY_SUBSCRIPTIONS)

        assert [v.session_id for v in mine] == [v.session_id for v in everything if v.subscription is not None]
        assert {v.session_id for v in mine} == {ids[n] for n in subscribed}

    def test_apply_filter_keeps_order(self, coach_service, player_service):
        ids = [coach_service.create_session(session_fields(f"S{n}")) for n in range(3)]
        player_service.subscribe(ids[0])
        player_service.subscribe(ids[2])
        views = player_service.list_views()
        filtered = apply_filter(views, SessionFilter.MY_SUBSCRIPTIONS)
        assert [v.session_id for v in filtered] == [v.session_id for v in views if v.is_subscribed()]

    def test_get_view_missing(self, player_service):
        with pytest.raises(NotFoundError):
            player_service.get_view(123)

    def test_load_detail(self, coach_service, content_service):
        session_id = coach_service.create_session(session_fields())
        content_service.create(session_id, content_fields("A", duration_minutes=10))
        content_service.create(session_id, content_fields("B", duration_minutes=None))
        content_service.create(session_id, content_fields("C", duration_minutes=25))
        detail = coach_service.load_detail(session_id)
        assert [c.title for c in detail.contents] == ["A", "B", "C"]
        assert detail.estimated_duration_minutes == 35


class TestCrud:

    def test_update_and_delete(self, coach_service):
        session_id = coach_service.create_session(session_fields())
        coach_service.update_session(session_id, session_fields("Serve Clinic II"))
        assert coach_service.get_view(session_id).session.title == "Serve Clinic II"
        coach_service.delete_session(session_id)
        assert coach_service.list_views() == []

    def test_delete_missing(self, coach_service):
        with pytest.raises(NotFoundError):
            coach_service.delete_session(5)


class TestSubscriptions:

    def test_subscribe_unsubscribe_round_trip(self, db_session, coach_service, player_service, other_player):
        session_id = coach_service.create_session(session_fields())
        make_service(db_session, other_player).subscribe(session_id)
        before = subscription_rows(db_session)

        player_service.subscribe(session_id)
        player_service.unsubscribe(session_id)

        assert subscription_rows(db_session) == before

    def test_subscribe_missing_session(self, player_service):
        with pytest.raises(NotFoundError):
            player_service.subscribe(404)

    def test_toggle_subscribes_then_unsubscribes(self, coach_service, player_service):
        session_id = coach_service.create_session(session_fields())
        (view,) = player_service.list_views()
        assert player_service.toggle_subscription(view) is ToggleOutcome.SUBSCRIBED

        (view,) = player_service.list_views()
        assert view.is_subscribed()
        assert player_service.toggle_subscription(view) is ToggleOutcome.UNSUBSCRIBED
        assert not player_service.get_view(session_id).is_subscribed()

    def test_stale_unsubscribed_view_does_not_write(self, db_session, coach_service, player_service):
        coach_service.create_session(session_fields())
        (stale,) = player_service.list_views()
        player_service.subscribe(stale.session_id)
        before = subscription_rows(db_session)

        assert player_service.toggle_subscription(stale) is ToggleOutcome.UNCHANGED
        assert subscription_rows(db_session) == before

    def test_stale_subscribed_view_does_not_write(self, db_session, coach_service, player_service):
        session_id = coach_service.create_session(session_fields())
        player_service.subscribe(session_id)
        (stale,) = player_service.list_views()
        player_service.unsubscribe(session_id)

        assert player_service.toggle_subscription(stale) is ToggleOutcome.UNCHANGED
        assert subscription_rows(db_session) == []


class TestCompletion:

    def test_requires_subscription(self, db_session, coach_service, player_service):
        session_id = coach_service.create_session(session_fields())
        assert player_service.mark_complete(session_id) is CompletionOutcome.NOT_SUBSCRIBED
        assert subscription_rows(db_session) == []

    def test_marking_twice_has_one_effect(self, db_session, coach_service, player_service):
        session_id = coach_service.create_session(session_fields())
        player_service.subscribe(session_id)

        assert player_service.mark_complete(session_id) is CompletionOutcome.COMPLETED
        db_session.expire_all()
        first = player_service.get_view(session_id).subscription.completed_at
        assert first is not None

        assert player_service.mark_complete(session_id) is CompletionOutcome.ALREADY_COMPLETE
        db_session.expire_all()
        view = player_service.get_view(session_id)
        assert view.subscription.completed_at == first
        assert view.is_completed()
        assert view.status_label() == "Completed"
