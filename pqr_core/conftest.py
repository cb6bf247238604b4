# pqr_core/conftest.py
import pytest
from rest_framework.test import APIClient

from pqr_core.iam.catalog_defaults import DEFAULT_FORMS, FULL_ACCESS
from pqr_core.iam.models import Form, Role
from pqr_core.tenants.models import Tenant
from pqr_core.tests.helpers import grant, make_member, next_workday, scope_headers


@pytest.fixture
def tenant(db):
    return Tenant.objects.create(code="electro-test", name="Electro Test")


@pytest.fixture
def other_tenant(db):
    return Tenant.objects.create(code="other-tenant", name="Other Tenant")


@pytest.fixture
def forms(db):
    return {
        code: Form.objects.get_or_create(code=code, defaults={"name": name, "module": module})[0]
        for code, name, module in DEFAULT_FORMS
    }


@pytest.fixture
def admin_role(db, tenant, forms):
    role = Role.objects.create(tenant=tenant, code="admin", name="Administrador")
    for code in forms:
        grant(role, code, FULL_ACCESS)
    return role


@pytest.fixture
def user(db, tenant, admin_role):
    """
    Tenant member with the admin role (full access on every default form).
    Graph: auth_user -> UserProfile -> UserRole -> Role -> RoleFormPermission
    """
    return make_member(tenant, "testuser", admin_role)


@pytest.fixture
def api_client(user):
    c = APIClient()
    c.force_authenticate(user=user)
    return c


@pytest.fixture
def headers(tenant):
    return scope_headers(tenant)


@pytest.fixture
def branch(db, tenant):
    from pqr_core.branches.services import BranchService

    return BranchService.create(
        tenant_id=tenant.id,
        name="Sede Principal",
        code="neiva",
        street="Carrera 5 # 10-20",
        city="Neiva",
        state="Huila",
        postal_code="410001",
        phone="6088664600",
        is_main=True,
    )


@pytest.fixture
def client_record(db, tenant):
    from pqr_core.clients.services import ClientService

    return ClientService.create(
        tenant_id=tenant.id,
        document_type="CC",
        document_number="1075123456",
        full_name="Ana María Pérez",
        email="ana.perez@example.com",
        mobile="3001234567",
    )


@pytest.fixture
def appointment_type(db, tenant):
    from pqr_core.appointments.services import AppointmentTypeService

    return AppointmentTypeService.create(
        tenant_id=tenant.id,
        code="reclamo",
        name="Reclamo de facturación",
        estimated_minutes=30,
    )


@pytest.fixture
def workday():
    return next_workday()


@pytest.fixture
def appointment(db, tenant, client_record, branch, appointment_type, user, workday):
    from pqr_core.appointments.services import AppointmentService

    return AppointmentService.schedule(
        tenant_id=tenant.id,
        client_id=client_record.id,
        branch_id=branch.id,
        appointment_type_id=appointment_type.id,
        appointment_date=workday,
        appointment_time="09:00",
        actor_user_id=user.id,
    )
