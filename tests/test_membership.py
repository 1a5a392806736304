"""Tests for the membership guard"""

import pytest

from remotezen.domain.teams.membership import MembershipGuard, require_role
from remotezen.errors import AuthorizationError, ValidationError
from remotezen.models import MANAGER_ROLES


def test_is_member_returns_membership_or_none(db_session, make_user, make_team):
    owner = make_user()
    stranger = make_user()
    team = make_team(owner)
    guard = MembershipGuard(db_session)

    membership = guard.is_member(team.id, owner.id)
    assert membership is not None
    assert membership.role == "ADMIN"
    assert guard.is_member(team.id, stranger.id) is None


def test_missing_team_and_missing_membership_are_distinguishable(db_session, make_user, make_team):
    owner = make_user()
    team = make_team(owner)
    guard = MembershipGuard(db_session)

    assert guard.team_exists(team.id) is True
    assert guard.team_exists("no-such-team") is False
    assert guard.is_member("no-such-team", owner.id) is None


@pytest.mark.parametrize("team_id, user_id", [("", "u"), ("t", ""), (None, "u"), ("t", "   ")])
def test_blank_identifiers_are_rejected(db_session, team_id, user_id):
    with pytest.raises(ValidationError):
        MembershipGuard(db_session).is_member(team_id, user_id)


def test_require_member_hides_team_existence(db_session, make_user, make_team):
    owner = make_user()
    stranger = make_user()
    team = make_team(owner)
    guard = MembershipGuard(db_session)

    with pytest.raises(AuthorizationError) as foreign:
        guard.require_member(team.id, stranger.id)
    with pytest.raises(AuthorizationError) as unknown:
        guard.require_member("no-such-team", stranger.id)
    assert foreign.value.message == unknown.value.message


def test_require_role(db_session, make_user, make_team, add_member):
    owner = make_user()
    member = make_user()
    team = make_team(owner)
    add_member(team, member, role="MEMBER")
    guard = MembershipGuard(db_session)

    assert require_role(guard.is_member(team.id, owner.id), MANAGER_ROLES) is True
    assert require_role(guard.is_member(team.id, member.id), MANAGER_ROLES) is False
    assert require_role(None, MANAGER_ROLES) is False


def test_require_manager_rejects_plain_members(db_session, make_user, make_team, add_member):
    owner = make_user()
    manager = make_user()
    member = make_user()
    team = make_team(owner)
    add_member(team, manager, role="MANAGER")
    add_member(team, member)
    guard = MembershipGuard(db_session)

    assert guard.require_manager(team.id, manager.id).role == "MANAGER"
    with pytest.raises(AuthorizationError, match="Only managers or admins can invite members"):
        guard.require_manager(team.id, member.id, action="invite members")


def test_team_ids_for(db_session, make_user, make_team):
    user = make_user()
    first = make_team(user, name="First")
    second = make_team(user, name="Second")

    assert set(MembershipGuard(db_session).team_ids_for(user.id)) == {first.id, second.id}
