# pqr_core/clients/selectors.py
from __future__ import annotations

from uuid import UUID

from django.db.models import Q, QuerySet

from pqr_core.clients.models import Client
from pqr_core.common.errors import NotFoundError
from pqr_core.common.models import RecordStatus
from pqr_core.values import ClientNumber, DocumentNumber


def clients_for_tenant(*, tenant_id: UUID, active_only: bool = True) -> QuerySet[Client]:
    qs = Client.objects.filter(tenant_id=tenant_id)
    if active_only:
        qs = qs.filter(status=RecordStatus.ACTIVE)
    return qs.order_by("full_name")


def get_client(*, tenant_id: UUID, client_id: UUID) -> Client:
    """Any status; soft-deleted clients are still found here."""
    return Client.objects.get(id=client_id, tenant_id=tenant_id)


def active_client(*, tenant_id: UUID, client_id: UUID) -> Client:
    c = Client.objects.filter(id=client_id, tenant_id=tenant_id, status=RecordStatus.ACTIVE).first()
    if c is None:
        raise NotFoundError("Client", client_id)
    return c


def client_by_document(*, tenant_id: UUID, document_type: str, document_number: str) -> Client | None:
    doc = DocumentNumber.create(document_number, document_type)
    return Client.objects.filter(
        tenant_id=tenant_id,
        document_type=doc.document_type.name,
        document_number=doc.value,
    ).first()


def client_by_number(*, tenant_id: UUID, client_number: str) -> Client | None:
    number = ClientNumber.create(client_number)
    return Client.objects.filter(tenant_id=tenant_id, client_number=number.value).first()


def search_clients(*, tenant_id: UUID, q: str | None = None, active_only: bool = True) -> QuerySet[Client]:
    qs = clients_for_tenant(tenant_id=tenant_id, active_only=active_only)

    qv = (q or "").strip()
    if qv:
        qs = qs.filter(
            Q(full_name__icontains=qv)
            | Q(document_number__icontains=qv)
            | Q(client_number__icontains=qv)
            | Q(email__icontains=qv)
            | Q(mobile__icontains=qv)
        )
    return qs
