# pqr_core/tenants/services.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from django.db import transaction

from pqr_core.common.errors import ValidationError
from pqr_core.tenants.models import Tenant, TenantStatus
from pqr_core.values import DocumentNumber, DocumentType, Email, PhoneNumber

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TenantProfileUpdate:
    name: Optional[str] = None
    nit: Optional[str] = None
    contact_email: Optional[str] = None
    support_phone: Optional[str] = None
    metadata: Optional[dict] = None


def _nit(raw: str) -> str:
    if not (raw or "").strip():
        return ""
    return DocumentNumber.create(raw, DocumentType.NIT).value


def _contact_email(raw: str) -> str:
    return Email.create(raw).value if (raw or "").strip() else ""


def _support_phone(raw: str) -> str:
    return PhoneNumber.create(raw).value if (raw or "").strip() else ""


def _status(raw: str) -> str:
    value = (raw or "").strip().upper()
    if value not in TenantStatus.values:
        raise ValidationError("status", f"Must be one of {', '.join(TenantStatus.values)}.")
    return value


class TenantService:
    @staticmethod
    @transaction.atomic
    def create(
        *,
        name: str,
        code: str,
        nit: str = "",
        contact_email: str = "",
        support_phone: str = "",
        metadata: Optional[dict] = None,
        status: str = TenantStatus.ACTIVE,
    ) -> Tenant:
        code = (code or "").strip().lower()
        name = (name or "").strip()
        if not code:
            raise ValidationError("code", "Code is required.")
        if not name:
            raise ValidationError("name", "Name is required.")
        if Tenant.objects.filter(code=code).exists():
            raise ValidationError("code", f"Tenant {code} already exists.")

        tenant = Tenant.objects.create(
            name=name,
            code=code,
            nit=_nit(nit),
            contact_email=_contact_email(contact_email),
            support_phone=_support_phone(support_phone),
            status=_status(status),
            metadata=metadata or {},
        )
        logger.info("Tenant %s created (%s)", tenant.code, tenant.id)
        return tenant

    @staticmethod
    @transaction.atomic
    def update_profile(*, tenant_id: UUID, patch: TenantProfileUpdate) -> Tenant:
        t = Tenant.objects.select_for_update().get(id=tenant_id)

        if patch.name is not None:
            if not patch.name.strip():
                raise ValidationError("name", "Name is required.")
            t.name = patch.name.strip()
        if patch.nit is not None:
            t.nit = _nit(patch.nit)
        if patch.contact_email is not None:
            t.contact_email = _contact_email(patch.contact_email)
        if patch.support_phone is not None:
            t.support_phone = _support_phone(patch.support_phone)
        if patch.metadata is not None:
            if not isinstance(patch.metadata, dict):
                raise ValidationError("metadata", "Must be a JSON object.")
            t.metadata = patch.metadata

        t.save()
        return t

    @staticmethod
    @transaction.atomic
    def set_status(*, tenant_id: UUID, status: str) -> Tenant:
        """
        Suspended and inactive tenants keep their data; their members simply
        stop passing the scope check.
        """
        status = _status(status)
        t = Tenant.objects.select_for_update().get(id=tenant_id)
        if t.status == status:
            return t

        logger.warning("Tenant %s status %s -> %s", t.code, t.status, status)
        t.status = status
        t.save(update_fields=["status", "updated_at"])
        return t

    @staticmethod
    def suspend(*, tenant_id: UUID) -> Tenant:
        return TenantService.set_status(tenant_id=tenant_id, status=TenantStatus.SUSPENDED)

    @staticmethod
    def deactivate(*, tenant_id: UUID) -> Tenant:
        return TenantService.set_status(tenant_id=tenant_id, status=TenantStatus.INACTIVE)

    @staticmethod
    def reactivate(*, tenant_id: UUID) -> Tenant:
        return TenantService.set_status(tenant_id=tenant_id, status=TenantStatus.ACTIVE)
