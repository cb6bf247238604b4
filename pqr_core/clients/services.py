# pqr_core/clients/services.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from django.db import transaction

from pqr_core.audit.services import AuditService
from pqr_core.clients.models import Client
from pqr_core.common.errors import ValidationError
from pqr_core.values import Address, ClientNumber, DocumentNumber, Email, PhoneNumber

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClientUpdate:
    full_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    mobile: Optional[str] = None
    address: Optional[str] = None


def _optional(raw: Optional[str], factory) -> str:
    if not (raw or "").strip():
        return ""
    return factory(raw).value


def _mobile(raw: str) -> PhoneNumber:
    return PhoneNumber.create(raw, validate_as_mobile=True)


def _full_name(raw: Optional[str]) -> str:
    name = (raw or "").strip()
    if len(name) < 3:
        raise ValidationError("full_name", "Full name must have at least 3 characters.")
    return name


class ClientService:
    @staticmethod
    @transaction.atomic
    def create(
        *,
        tenant_id: UUID,
        document_type: str,
        document_number: str,
        full_name: str,
        email: str = "",
        phone: str = "",
        mobile: str = "",
        address: str = "",
        actor_user_id: int | None = None,
    ) -> Client:
        doc = DocumentNumber.create(document_number, document_type)
        name = _full_name(full_name)

        if Client.objects.filter(
            tenant_id=tenant_id,
            document_type=doc.document_type.name,
            document_number=doc.value,
        ).exists():
            raise ValidationError("document_number", f"A client with document {doc} already exists.")

        client = Client.objects.create(
            tenant_id=tenant_id,
            client_number=ClientNumber.generate().value,
            document_type=doc.document_type.name,
            document_number=doc.value,
            full_name=name,
            email=_optional(email, Email.create),
            phone=_optional(phone, PhoneNumber.create),
            mobile=_optional(mobile, _mobile),
            address=_optional(address, Address.parse),
        )

        logger.info("Client %s created in tenant %s", client.client_number, tenant_id)
        AuditService.record(client, "client.created", actor_user_id=actor_user_id, client_number=client.client_number)
        return client

    @staticmethod
    @transaction.atomic
    def update(
        *,
        tenant_id: UUID,
        client_id: UUID,
        patch: ClientUpdate,
        actor_user_id: int | None = None,
    ) -> Client:
        client = Client.objects.select_for_update().get(id=client_id, tenant_id=tenant_id)

        changed: list[str] = []
        if patch.full_name is not None:
            client.full_name = _full_name(patch.full_name)
            changed.append("full_name")
        if patch.email is not None:
            client.email = _optional(patch.email, Email.create)
            changed.append("email")
        if patch.phone is not None:
            client.phone = _optional(patch.phone, PhoneNumber.create)
            changed.append("phone")
        if patch.mobile is not None:
            client.mobile = _optional(patch.mobile, _mobile)
            changed.append("mobile")
        if patch.address is not None:
            client.address = _optional(patch.address, Address.parse)
            changed.append("address")

        client.save()

        AuditService.record(client, "client.updated", actor_user_id=actor_user_id, fields=changed)
        return client

    @staticmethod
    @transaction.atomic
    def deactivate(*, tenant_id: UUID, client_id: UUID, actor_user_id: int | None = None) -> Client:
        client = Client.objects.select_for_update().get(id=client_id, tenant_id=tenant_id)
        if client.deactivate():
            client.save(update_fields=["status", "deactivated_at", "updated_at"])
            AuditService.record(client, "client.deactivated", actor_user_id=actor_user_id)
        return client

    @staticmethod
    @transaction.atomic
    def reactivate(*, tenant_id: UUID, client_id: UUID) -> Client:
        client = Client.objects.select_for_update().get(id=client_id, tenant_id=tenant_id)
        if client.reactivate():
            client.save(update_fields=["status", "deactivated_at", "updated_at"])
        return client
