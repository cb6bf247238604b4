# pqr_core/iam/management/commands/seed_rbac.py

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from pqr_core.common.models import RecordStatus
from pqr_core.iam.catalog_defaults import DEFAULT_BUNDLES, DEFAULT_FORMS, FULL_ACCESS
from pqr_core.iam.models import Form, Role
from pqr_core.iam.services.catalog import PermissionService, RoleService
from pqr_core.iam.services.rbac import RbacService
from pqr_core.tenants.selectors import tenant_by_code


class Command(BaseCommand):
    help = "Ensure the default forms and permission bundles exist (idempotent). Optionally seed an admin role."

    def add_arguments(self, parser):
        parser.add_argument("--tenant", help="Tenant code; creates/refreshes its 'admin' role with full access.")

    @transaction.atomic
    def handle(self, *args, **options):
        created = 0
        for code, name, module in DEFAULT_FORMS:
            _, was_created = Form.objects.get_or_create(code=code, defaults={"name": name, "module": module})
            created += 1 if was_created else 0

        for flags in DEFAULT_BUNDLES:
            PermissionService.ensure_bundle(flags=flags)

        self.stdout.write(self.style.SUCCESS(f"Forms ensured. Newly created: {created}"))

        tenant_code = options.get("tenant")
        if not tenant_code:
            return

        tenant = tenant_by_code(code=tenant_code)
        if tenant is None:
            raise CommandError(f"Tenant '{tenant_code}' not found.")

        role = Role.objects.filter(tenant=tenant, code="admin").first()
        if role is None:
            role = RoleService.create(tenant_id=tenant.id, code="admin", name="Administrador")

        bundle = PermissionService.get_or_create_bundle(flags=FULL_ACCESS)
        for form in Form.objects.filter(status=RecordStatus.ACTIVE):
            RbacService.assign_permission(role_id=role.id, form_id=form.id, permission_id=bundle.id)

        self.stdout.write(self.style.SUCCESS(f"Admin role ensured for tenant {tenant.code}."))
