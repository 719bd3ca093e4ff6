"""
Property-based Testing with Hypothesis.

Covers the pure rules the services build on: per-hour rates, kitchen
status transitions, order numbers and role permissions.
"""

from hypothesis import given, settings, strategies as st

from havens_api.services.domain.order_service import order_number
from havens_api.services.domain.performance_service import per_hour
from havens_shared.config.constants import (
    ROLE_PERMISSIONS,
    KitchenStatus,
    Permissions,
    Roles,
    can_transition_kitchen,
    has_permission,
)


class TestPerHourProperties:
    """Property-based tests for per-hour rates."""

    @given(metric=st.integers(min_value=0, max_value=1_000_000))
    @settings(max_examples=50)
    def test_zero_shift_has_no_rate(self, metric):
        """Property: A zero-length shift never divides."""
        assert per_hour(metric, 0) is None
        assert per_hour(metric, None) is None

    @given(
        metric=st.integers(min_value=0, max_value=1_000_000),
        shift=st.integers(min_value=1, max_value=24 * 60),
    )
    @settings(max_examples=50)
    def test_rate_matches_definition(self, metric, shift):
        """Property: rate = metric / shift_minutes * 60, rounded to cents."""
        assert per_hour(metric, shift) == round(metric / shift * 60, 2)

    @given(metric=st.integers(min_value=0, max_value=100_000))
    @settings(max_examples=30)
    def test_one_hour_shift_is_identity(self, metric):
        """Property: Over exactly one hour, the rate equals the total."""
        assert per_hour(metric, 60) == metric


class TestKitchenTransitionProperties:
    """Property-based tests for the kitchen lifecycle."""

    @given(
        from_status=st.sampled_from(KitchenStatus.ORDER),
        to_status=st.sampled_from(KitchenStatus.ORDER),
    )
    @settings(max_examples=50)
    def test_forward_only(self, from_status, to_status):
        """Property: A transition is allowed exactly when it moves forward."""
        order = KitchenStatus.ORDER
        expected = order.index(to_status) > order.index(from_status)
        assert can_transition_kitchen(from_status, to_status) is expected

    @given(status=st.text(max_size=12))
    @settings(max_examples=30)
    def test_unknown_status_never_allowed(self, status):
        """Property: Unknown statuses never transition."""
        if status in KitchenStatus.ORDER:
            return
        assert can_transition_kitchen(status, KitchenStatus.COMPLETED) is False
        assert can_transition_kitchen(KitchenStatus.PENDING, status) is False


class TestOrderNumberProperties:
    """Property-based tests for display order numbers."""

    @given(order_id=st.integers(min_value=1, max_value=10_000_000))
    @settings(max_examples=50)
    def test_number_round_trips_id(self, order_id):
        """Property: ORD-nnn always parses back to the id."""
        number = order_number(order_id)
        assert number.startswith("ORD-")
        assert len(number) >= 7
        assert int(number[4:]) == order_id


class TestPermissionProperties:
    """Property-based tests for role permissions."""

    @given(role=st.text(max_size=20))
    @settings(max_examples=50)
    def test_unknown_roles_have_no_permissions(self, role):
        """Property: Roles outside the known set are denied everything."""
        if role in Roles.ALL:
            return
        for permission in (Permissions.MANAGE_STAFF, Permissions.POS, Permissions.KITCHEN):
            assert has_permission(role, permission) is False

    @given(role=st.sampled_from(Roles.ALL))
    @settings(max_examples=20)
    def test_known_roles_match_table(self, role):
        """Property: has_permission agrees with the role table."""
        for permission in ROLE_PERMISSIONS[role]:
            assert has_permission(role, permission) is True
