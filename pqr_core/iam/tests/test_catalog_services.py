import pytest
from rest_framework.exceptions import ValidationError as DRFValidationError

from pqr_core.common.errors import BusinessRuleError, NotFoundError
from pqr_core.iam.models import Permission, Role, UserProfile
from pqr_core.iam.selectors import role_form_assignments, role_permission_summary, roles_for_tenant
from pqr_core.iam.services.authorization import PermissionFlags
from pqr_core.iam.services.catalog import FormService, PermissionService, RoleService, RoleUpdate
from pqr_core.iam.services.rbac import RbacService
from pqr_core.tests.helpers import make_member

pytestmark = pytest.mark.django_db


def test_role_code_is_normalized_and_unique_per_tenant(tenant, other_tenant):
    role = RoleService.create(tenant_id=tenant.id, code="  Agente ", name="Agente")
    assert role.code == "agente"

    with pytest.raises(DRFValidationError):
        RoleService.create(tenant_id=tenant.id, code="AGENTE", name="Otro")

    # same code is fine in another tenant
    RoleService.create(tenant_id=other_tenant.id, code="agente", name="Agente")


def test_role_update_rejects_taken_code(tenant):
    RoleService.create(tenant_id=tenant.id, code="a", name="A")
    b = RoleService.create(tenant_id=tenant.id, code="b", name="B")

    with pytest.raises(DRFValidationError):
        RoleService.update(tenant_id=tenant.id, role_id=b.id, patch=RoleUpdate(code="A"))

    b = RoleService.update(tenant_id=tenant.id, role_id=b.id, patch=RoleUpdate(name="Bee"))
    assert b.name == "Bee"


def test_soft_deleted_role_leaves_active_listing_only(tenant):
    role = RoleService.create(tenant_id=tenant.id, code="temp", name="Temp")
    RoleService.deactivate(tenant_id=tenant.id, role_id=role.id)

    assert role not in roles_for_tenant(tenant_id=tenant.id)
    assert role in roles_for_tenant(tenant_id=tenant.id, active_only=False)
    assert Role.objects.filter(id=role.id).exists()


def test_form_code_is_uppercased_and_unique():
    form = FormService.create(code="pqr_reports", name="Reportes", module="reports")
    assert form.code == "PQR_REPORTS"
    assert form.module == "REPORTS"

    with pytest.raises(DRFValidationError):
        FormService.create(code="PQR_REPORTS", name="Again")


def test_permission_bundle_flags_and_name_are_unique(db):
    p = PermissionService.create(flags=PermissionFlags(can_read=True, can_update=True))
    assert p.name == "read+update"

    with pytest.raises(DRFValidationError):
        PermissionService.create(flags=PermissionFlags(can_read=True, can_update=True), name="editor")
    with pytest.raises(DRFValidationError):
        PermissionService.create(flags=PermissionFlags(can_read=True), name="read+update")


def test_get_or_create_bundle_reuses_but_never_reactivates(db):
    flags = PermissionFlags(can_read=True)
    first = PermissionService.get_or_create_bundle(flags=flags)
    assert PermissionService.get_or_create_bundle(flags=flags).id == first.id

    PermissionService.deactivate(permission_id=first.id)
    with pytest.raises(BusinessRuleError):
        PermissionService.get_or_create_bundle(flags=flags)

    assert not Permission.objects.get(id=first.id).is_active
    assert PermissionService.ensure_bundle(flags=flags).id == first.id
    assert Permission.objects.filter(can_read=True, can_create=False, can_update=False, can_delete=False).count() == 1


def test_flag_bundle_avoids_a_name_taken_by_another_bundle(tenant, forms):
    PermissionService.create(flags=PermissionFlags(can_read=True, can_delete=True), name="read+update")
    role = RoleService.create(tenant_id=tenant.id, code="x", name="X")
    read = PermissionService.get_or_create_bundle(flags=PermissionFlags(can_read=True))
    RbacService.assign_permission(role_id=role.id, form_id=forms["CLIENTS"].id, permission_id=read.id)

    g = RbacService.update_role_form_permission(
        role_id=role.id, form_id=forms["CLIENTS"].id, flags=PermissionFlags(can_read=True, can_update=True)
    )

    assert g.permission.name == "read+update (2)"
    assert (g.permission.can_update, g.permission.can_delete) == (True, False)


def test_rename_bundle(db):
    p = PermissionService.create(flags=PermissionFlags(can_read=True))
    p = PermissionService.rename(permission_id=p.id, name="Solo lectura")
    assert p.name == "Solo lectura"


def test_assign_permission_requires_active_parts(tenant, forms):
    role = RoleService.create(tenant_id=tenant.id, code="x", name="X")
    bundle = PermissionService.get_or_create_bundle(flags=PermissionFlags(can_read=True))
    RoleService.deactivate(tenant_id=tenant.id, role_id=role.id)

    with pytest.raises(NotFoundError):
        RbacService.assign_permission(role_id=role.id, form_id=forms["CLIENTS"].id, permission_id=bundle.id)


def test_assign_permission_twice_repoints_the_same_row(tenant, forms):
    role = RoleService.create(tenant_id=tenant.id, code="x", name="X")
    read = PermissionService.get_or_create_bundle(flags=PermissionFlags(can_read=True))
    full = PermissionService.get_or_create_bundle(flags=PermissionFlags(True, True, True, True))

    g1 = RbacService.assign_permission(role_id=role.id, form_id=forms["CLIENTS"].id, permission_id=read.id)
    g2 = RbacService.assign_permission(role_id=role.id, form_id=forms["CLIENTS"].id, permission_id=full.id)

    assert g1.id == g2.id
    assert list(role_form_assignments(tenant_id=tenant.id, role_id=role.id).values_list("permission_id", flat=True)) == [full.id]


def test_update_missing_grant_is_not_found(tenant, forms):
    role = RoleService.create(tenant_id=tenant.id, code="x", name="X")
    with pytest.raises(NotFoundError):
        RbacService.update_role_form_permission(
            role_id=role.id, form_id=forms["CLIENTS"].id, flags=PermissionFlags(can_read=True)
        )


def test_assign_roles_replaces_the_role_set(tenant, other_tenant):
    a = RoleService.create(tenant_id=tenant.id, code="a", name="A")
    b = RoleService.create(tenant_id=tenant.id, code="b", name="B")
    foreign = RoleService.create(tenant_id=other_tenant.id, code="f", name="F")
    u = make_member(tenant, "agent", a)
    profile = UserProfile.objects.get(user=u)

    RbacService.assign_roles_to_user(tenant_id=tenant.id, user_profile_id=profile.id, role_ids=[b.id])
    assert sorted(profile.roles.values_list("code", flat=True)) == ["b"]

    with pytest.raises(DRFValidationError):
        RbacService.assign_roles_to_user(tenant_id=tenant.id, user_profile_id=profile.id, role_ids=[foreign.id])


def test_role_permission_summary_lists_active_roles(tenant, admin_role, forms):
    RoleService.create(tenant_id=tenant.id, code="idle", name="Idle")

    summary = {row["role_code"]: row for row in role_permission_summary(tenant_id=tenant.id)}

    assert set(summary) == {"admin", "idle"}
    assert summary["idle"]["forms"] == []
    admin_forms = {f["form_code"]: f for f in summary["admin"]["forms"]}
    assert set(admin_forms) == set(forms)
    assert admin_forms["CLIENTS"]["can_delete"] is True
