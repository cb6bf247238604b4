import pytest
from rest_framework.exceptions import ValidationError as DRFValidationError

from pqr_core.branches.selectors import branches_for_tenant, main_branch
from pqr_core.branches.services import BranchService, BranchUpdate
from pqr_core.common.errors import ValidationError

pytestmark = pytest.mark.django_db


def _branch(tenant, code, **kwargs):
    data = {"name": f"Sede {code}", "code": code, "street": "Calle 8 # 4-15", "city": "Pitalito", "state": "Huila"}
    data.update(kwargs)
    return BranchService.create(tenant_id=tenant.id, **data)


def test_only_one_main_branch_per_tenant(tenant, branch):
    second = _branch(tenant, "pitalito", is_main=True)

    branch.refresh_from_db()
    assert branch.is_main is False
    assert main_branch(tenant_id=tenant.id) == second

    BranchService.update(tenant_id=tenant.id, branch_id=branch.id, patch=BranchUpdate(is_main=True))
    second.refresh_from_db()
    assert second.is_main is False
    assert main_branch(tenant_id=tenant.id).id == branch.id


def test_code_is_unique_within_tenant(tenant, other_tenant, branch):
    with pytest.raises(DRFValidationError):
        _branch(tenant, "NEIVA")
    _branch(other_tenant, "neiva")


def test_address_is_validated_as_a_unit(tenant, branch):
    with pytest.raises(ValidationError) as exc:
        _branch(tenant, "garzon", street="Cl 1")
    assert exc.value.field == "street"

    b = BranchService.update(tenant_id=tenant.id, branch_id=branch.id, patch=BranchUpdate(city="Garzón"))
    assert b.street == "Carrera 5 # 10-20"
    assert b.city == "Garzón"
    assert b.full_address == "Carrera 5 # 10-20, Garzón, Huila 410001"


def test_contact_data_goes_through_value_objects(tenant):
    b = _branch(tenant, "la-plata", phone="(608) 866-4600", email=" Sede@Electro.CO ")
    assert b.phone == "6088664600"
    assert b.email == "sede@electro.co"

    with pytest.raises(ValidationError):
        _branch(tenant, "campoalegre", email="not-an-email")


def test_soft_delete_hides_branch_from_default_listing(tenant, branch):
    BranchService.deactivate(tenant_id=tenant.id, branch_id=branch.id)
    assert list(branches_for_tenant(tenant_id=tenant.id)) == []
    assert main_branch(tenant_id=tenant.id) is None

    BranchService.reactivate(tenant_id=tenant.id, branch_id=branch.id)
    assert list(branches_for_tenant(tenant_id=tenant.id)) == [branch]


def test_branch_api(api_client, headers, branch):
    res = api_client.post(
        "/api/v1/branches/",
        {"name": "Sede Sur", "code": "sur", "street": "Avenida 26 # 1-50", "city": "Neiva", "state": "Huila"},
        format="json",
        **headers,
    )
    assert res.status_code == 201
    new_id = res.json()["id"]

    res = api_client.get("/api/v1/branches/", **headers)
    assert res.json()["count"] == 2
    assert res.json()["results"][0]["id"] == str(branch.id)

    res = api_client.patch(f"/api/v1/branches/{new_id}/", {"street": "X"}, format="json", **headers)
    assert res.status_code == 400
    assert res.json()["error"]["details"] == {"street": "Must be at least 5 characters."}

    res = api_client.delete(f"/api/v1/branches/{new_id}/", **headers)
    assert res.json()["status"] == "INACTIVE"
    res = api_client.post(f"/api/v1/branches/{new_id}/reactivate/", **headers)
    assert res.json()["status"] == "ACTIVE"
