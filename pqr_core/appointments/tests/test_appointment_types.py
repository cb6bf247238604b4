import pytest

from pqr_core.appointments.selectors import active_appointment_type, appointment_types_for_tenant
from pqr_core.appointments.services import AppointmentTypeService, AppointmentTypeUpdate
from pqr_core.common.errors import NotFoundError, ValidationError

pytestmark = pytest.mark.django_db


def test_code_is_uppercased_and_unique_per_tenant(tenant, other_tenant):
    t = AppointmentTypeService.create(tenant_id=tenant.id, code="nueva_conexion", name="Nueva conexión")
    assert t.code == "NUEVA_CONEXION"

    with pytest.raises(ValidationError):
        AppointmentTypeService.create(tenant_id=tenant.id, code="NUEVA_CONEXION", name="Otra")

    AppointmentTypeService.create(tenant_id=other_tenant.id, code="nueva_conexion", name="Nueva conexión")


@pytest.mark.parametrize("minutes", [0, -15])
def test_estimated_minutes_must_be_positive(tenant, minutes):
    with pytest.raises(ValidationError) as exc:
        AppointmentTypeService.create(tenant_id=tenant.id, code="x", name="X", estimated_minutes=minutes)
    assert exc.value.field == "estimated_minutes"


def test_update_and_ordering(tenant):
    a = AppointmentTypeService.create(tenant_id=tenant.id, code="a", name="A", display_order=2)
    b = AppointmentTypeService.create(tenant_id=tenant.id, code="b", name="B", display_order=1)
    assert list(appointment_types_for_tenant(tenant_id=tenant.id)) == [b, a]

    a = AppointmentTypeService.update(
        tenant_id=tenant.id,
        appointment_type_id=a.id,
        patch=AppointmentTypeUpdate(display_order=0, estimated_minutes=45, requires_documentation=True),
    )
    assert a.estimated_minutes == 45
    assert a.requires_documentation is True
    assert list(appointment_types_for_tenant(tenant_id=tenant.id)) == [a, b]

    with pytest.raises(ValidationError):
        AppointmentTypeService.update(
            tenant_id=tenant.id, appointment_type_id=a.id, patch=AppointmentTypeUpdate(estimated_minutes=0)
        )


def test_deactivated_type_is_not_bookable(tenant, appointment_type):
    AppointmentTypeService.deactivate(tenant_id=tenant.id, appointment_type_id=appointment_type.id)

    assert appointment_type not in appointment_types_for_tenant(tenant_id=tenant.id)
    assert appointment_type in appointment_types_for_tenant(tenant_id=tenant.id, active_only=False)
    with pytest.raises(NotFoundError):
        active_appointment_type(tenant_id=tenant.id, appointment_type_id=appointment_type.id)
