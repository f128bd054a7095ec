import pytest

from app.core.permissions import Capability, Principal, Role, authorize

member = Principal(user_id="u1", role=Role.MEMBER)
admin = Principal(user_id="root", role=Role.ADMIN)


def test_role_values_match_stored_strings():
    assert Role("member") is Role.MEMBER
    assert Role("admin") is Role.ADMIN
    with pytest.raises(ValueError):
        Role("owner")


def test_only_admins_manage_users():
    assert authorize(admin, Capability.MANAGE_USERS)
    assert not authorize(member, Capability.MANAGE_USERS)


@pytest.mark.parametrize(
    "principal, owner_id, allowed",
    [
        (member, "u1", True),
        (member, "someone-else", False),
        (member, None, False),
        (admin, "someone-else", True),
        (admin, None, True),
    ],
)
def test_modify_content_is_admin_or_owner(principal, owner_id, allowed):
    assert authorize(principal, Capability.MODIFY_CONTENT, owner_id) is allowed
