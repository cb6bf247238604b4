import pytest

from pqr_core.common.errors import BusinessRuleError
from pqr_core.common.models import RecordStatus
from pqr_core.iam.models import Role, RoleFormPermission, UserProfile, UserRole
from pqr_core.iam.services.authorization import (
    PermissionAction,
    PermissionFlags,
    get_user_permissions,
    has_permission,
    resolve_permissions,
)
from pqr_core.iam.services.catalog import FormService, PermissionService, RoleService
from pqr_core.iam.services.rbac import RbacService
from pqr_core.tests.helpers import grant, make_member

pytestmark = pytest.mark.django_db

READ = PermissionFlags(can_read=True)


@pytest.fixture
def reader_role(tenant):
    return Role.objects.create(tenant=tenant, code="reader", name="Reader")


@pytest.fixture
def reader(tenant, reader_role):
    grant(reader_role, "APPOINTMENTS", READ)
    return make_member(tenant, "reader", reader_role)


def test_read_grant_allows_read_and_denies_create(reader):
    assert has_permission(reader.id, "APPOINTMENTS", "read") is True
    assert has_permission(reader.id, "APPOINTMENTS", "create") is False


def test_deactivating_role_removes_access_but_keeps_the_grant_row(tenant, reader, reader_role):
    RoleService.deactivate(tenant_id=tenant.id, role_id=reader_role.id)

    assert has_permission(reader.id, "APPOINTMENTS", "read") is False
    assert has_permission(reader.id, "APPOINTMENTS", "create") is False
    assert RoleFormPermission.objects.filter(role=reader_role, form__code="APPOINTMENTS").exists()

    RoleService.reactivate(tenant_id=tenant.id, role_id=reader_role.id)
    assert has_permission(reader.id, "APPOINTMENTS", "read") is True


def test_flags_are_ored_across_roles(tenant):
    r1 = Role.objects.create(tenant=tenant, code="r1", name="R1")
    r2 = Role.objects.create(tenant=tenant, code="r2", name="R2")
    grant(r1, "CLIENTS", PermissionFlags(can_read=True))
    grant(r2, "CLIENTS", PermissionFlags(can_create=True))
    u = make_member(tenant, "both", r1, r2)

    flags = resolve_permissions(u.id)["CLIENTS"]
    assert flags == PermissionFlags(can_read=True, can_create=True)
    assert has_permission(u.id, "CLIENTS", PermissionAction.READ)
    assert has_permission(u.id, "CLIENTS", PermissionAction.CREATE)
    assert not has_permission(u.id, "CLIENTS", PermissionAction.DELETE)


def test_update_role_form_permission_applies_new_flags(reader, reader_role):
    form_id = RoleFormPermission.objects.get(role=reader_role).form_id

    RbacService.update_role_form_permission(
        role_id=reader_role.id,
        form_id=form_id,
        flags=PermissionFlags(can_read=True, can_update=True),
    )

    assert has_permission(reader.id, "APPOINTMENTS", "update") is True
    assert has_permission(reader.id, "APPOINTMENTS", "delete") is False
    # one row per (role, form), re-pointed at the "read+update" bundle
    grants = RoleFormPermission.objects.filter(role=reader_role)
    assert grants.count() == 1
    assert grants.get().permission.name == "read+update"


def test_update_does_not_mutate_shared_bundles(tenant, reader, reader_role):
    other = Role.objects.create(tenant=tenant, code="other", name="Other")
    grant(other, "APPOINTMENTS", READ)
    other_user = make_member(tenant, "other-reader", other)

    form_id = RoleFormPermission.objects.get(role=reader_role).form_id
    RbacService.update_role_form_permission(
        role_id=reader_role.id, form_id=form_id, flags=PermissionFlags(can_read=True, can_delete=True)
    )

    assert has_permission(reader.id, "APPOINTMENTS", "delete") is True
    assert has_permission(other_user.id, "APPOINTMENTS", "delete") is False


def test_revoke_removes_access_and_is_idempotent(reader, reader_role):
    form_id = RoleFormPermission.objects.get(role=reader_role).form_id

    assert RbacService.revoke_permission(role_id=reader_role.id, form_id=form_id) is True
    assert RbacService.revoke_permission(role_id=reader_role.id, form_id=form_id) is False
    assert has_permission(reader.id, "APPOINTMENTS", "read") is False


def test_inactive_form_or_bundle_counts_as_absent(reader, reader_role):
    g = RoleFormPermission.objects.select_related("form", "permission").get(role=reader_role)

    FormService.deactivate(form_id=g.form_id)
    assert has_permission(reader.id, "APPOINTMENTS", "read") is False
    FormService.reactivate(form_id=g.form_id)
    assert has_permission(reader.id, "APPOINTMENTS", "read") is True

    PermissionService.deactivate(permission_id=g.permission_id)
    assert has_permission(reader.id, "APPOINTMENTS", "read") is False


def test_inactive_grant_row_counts_as_absent(reader, reader_role):
    g = RoleFormPermission.objects.get(role=reader_role)
    RbacService.set_grant_status(role_form_permission_id=g.id, active=False)

    assert resolve_permissions(reader.id) == {}


def test_missing_data_never_raises(reader):
    assert has_permission(reader.id, "NO_SUCH_FORM", "read") is False
    assert has_permission(reader.id, "APPOINTMENTS", "approve") is False
    assert has_permission(999999, "APPOINTMENTS", "read") is False
    assert resolve_permissions(999999) == {}


def test_form_code_lookup_is_case_insensitive(reader):
    assert has_permission(reader.id, "appointments", "READ") is True


def test_roles_of_another_tenant_do_not_count(tenant, other_tenant):
    foreign = Role.objects.create(tenant=other_tenant, code="foreign", name="Foreign")
    grant(foreign, "CLIENTS", READ)
    u = make_member(tenant, "local")
    UserRole.objects.create(user_profile=UserProfile.objects.get(user=u), role=foreign)

    assert has_permission(u.id, "CLIENTS", "read") is False


def test_inactive_profile_has_no_permissions(reader):
    UserProfile.objects.filter(user=reader).update(status=RecordStatus.INACTIVE)
    assert resolve_permissions(reader.id) == {}


def test_get_user_permissions_flattens_form_actions(tenant, reader):
    perms = get_user_permissions(reader.id)

    assert perms.tenant_id == tenant.id
    assert perms.roles == ["reader"]
    assert perms.permissions == ["APPOINTMENTS.read"]
    assert perms.as_dict()["forms"]["APPOINTMENTS"]["can_read"] is True


def test_deactivated_bundle_stays_off_when_another_grant_asks_for_it(tenant, forms, reader, reader_role):
    g = RoleFormPermission.objects.get(role=reader_role)
    PermissionService.deactivate(permission_id=g.permission_id)

    other = Role.objects.create(tenant=tenant, code="other", name="Other")
    grant(other, "CLIENTS", PermissionFlags(True, True, True, True))
    with pytest.raises(BusinessRuleError) as exc:
        RbacService.update_role_form_permission(role_id=other.id, form_id=forms["CLIENTS"].id, flags=READ)

    assert exc.value.code == "permission_inactive"
    assert has_permission(reader.id, "APPOINTMENTS", "read") is False

    PermissionService.reactivate(permission_id=g.permission_id)
    assert has_permission(reader.id, "APPOINTMENTS", "read") is True
