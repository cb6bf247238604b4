from datetime import date, timedelta

import pytest

from pqr_core.branches.services import BranchService
from pqr_core.common.errors import NotFoundError, ValidationError
from pqr_core.holidays.models import HolidayType
from pqr_core.holidays.selectors import holidays_between, holidays_in_year, is_holiday
from pqr_core.holidays.services import HolidayService, HolidayUpdate

pytestmark = pytest.mark.django_db

SAN_PEDRO = date(2026, 6, 29)


@pytest.fixture
def other_branch(tenant):
    return BranchService.create(
        tenant_id=tenant.id, name="Sede Garzón", code="garzon", street="Calle 7 # 9-40", city="Garzón", state="Huila"
    )


def test_national_holiday_closes_every_branch(tenant, branch, other_branch):
    HolidayService.create(tenant_id=tenant.id, date=SAN_PEDRO, name="San Pedro y San Pablo")

    assert is_holiday(tenant_id=tenant.id, on=SAN_PEDRO)
    assert is_holiday(tenant_id=tenant.id, on=SAN_PEDRO, branch_id=branch.id)
    assert is_holiday(tenant_id=tenant.id, on=SAN_PEDRO, branch_id=other_branch.id)
    assert not is_holiday(tenant_id=tenant.id, on=SAN_PEDRO + timedelta(days=1))


def test_local_holiday_only_closes_its_branch(tenant, branch, other_branch):
    HolidayService.create(
        tenant_id=tenant.id,
        date=SAN_PEDRO,
        name="Festival del Bambuco",
        holiday_type=HolidayType.LOCAL,
        branch_id=branch.id,
    )

    assert is_holiday(tenant_id=tenant.id, on=SAN_PEDRO, branch_id=branch.id)
    assert not is_holiday(tenant_id=tenant.id, on=SAN_PEDRO, branch_id=other_branch.id)
    assert not is_holiday(tenant_id=tenant.id, on=SAN_PEDRO)


def test_branch_scope_rules(tenant, branch, other_tenant):
    with pytest.raises(ValidationError) as exc:
        HolidayService.create(tenant_id=tenant.id, date=SAN_PEDRO, name="Local", holiday_type=HolidayType.LOCAL)
    assert exc.value.field == "branch_id"

    with pytest.raises(ValidationError) as exc:
        HolidayService.create(tenant_id=tenant.id, date=SAN_PEDRO, name="Nacional", branch_id=branch.id)
    assert exc.value.field == "branch_id"

    # another tenant's branch is not visible
    with pytest.raises(NotFoundError):
        HolidayService.create(
            tenant_id=other_tenant.id,
            date=SAN_PEDRO,
            name="Ajeno",
            holiday_type=HolidayType.LOCAL,
            branch_id=branch.id,
        )


def test_duplicates_and_soft_delete(tenant):
    h = HolidayService.create(tenant_id=tenant.id, date=SAN_PEDRO, name="San Pedro")

    with pytest.raises(ValidationError) as exc:
        HolidayService.create(tenant_id=tenant.id, date=SAN_PEDRO, name="Otra vez")
    assert exc.value.field == "date"

    HolidayService.deactivate(tenant_id=tenant.id, holiday_id=h.id)
    assert not is_holiday(tenant_id=tenant.id, on=SAN_PEDRO)
    HolidayService.create(tenant_id=tenant.id, date=SAN_PEDRO, name="Otra vez")


def test_update_can_turn_a_local_holiday_national(tenant, branch):
    h = HolidayService.create(
        tenant_id=tenant.id, date=SAN_PEDRO, name="Local", holiday_type=HolidayType.LOCAL, branch_id=branch.id
    )
    h = HolidayService.update(
        tenant_id=tenant.id,
        holiday_id=h.id,
        patch=HolidayUpdate(holiday_type=HolidayType.NATIONAL, branch_id=None),
    )
    assert h.branch_id is None
    assert h.applies_to_all_branches

    with pytest.raises(ValidationError):
        HolidayService.update(tenant_id=tenant.id, holiday_id=h.id, patch=HolidayUpdate(holiday_type=HolidayType.LOCAL))


def test_range_selectors(tenant):
    HolidayService.create(tenant_id=tenant.id, date=date(2026, 1, 1), name="Año nuevo")
    HolidayService.create(tenant_id=tenant.id, date=date(2026, 12, 25), name="Navidad")
    HolidayService.create(tenant_id=tenant.id, date=date(2027, 1, 1), name="Año nuevo")

    assert [h.name for h in holidays_in_year(tenant_id=tenant.id, year=2026)] == ["Año nuevo", "Navidad"]
    assert holidays_between(tenant_id=tenant.id, start=date(2026, 12, 1), end=date(2027, 1, 31)).count() == 2


def test_holiday_blocks_scheduling_through_the_api(api_client, headers, client_record, branch, appointment_type, workday):
    res = api_client.post(
        "/api/v1/holidays/", {"date": workday.isoformat(), "name": "Festivo"}, format="json", **headers
    )
    assert res.status_code == 201

    res = api_client.get(f"/api/v1/holidays/check/?date={workday.isoformat()}&branch_id={branch.id}", **headers)
    assert res.json()["is_holiday"] is True

    res = api_client.post(
        "/api/v1/appointments/",
        {
            "client_id": str(client_record.id),
            "branch_id": str(branch.id),
            "appointment_type_id": str(appointment_type.id),
            "appointment_date": workday.isoformat(),
            "appointment_time": "09:00",
        },
        format="json",
        **headers,
    )
    assert res.status_code == 409
    assert "holiday" in res.json()["error"]["message"]
