# pqr_core/clients/models.py
from django.db import models

from pqr_core.common.models import TenantScopedModel
from pqr_core.values import DocumentType


class Client(TenantScopedModel):
    """
    Utility customer who books appointments and files PQRs.
    Identity is the (document type, document number) pair within a tenant.
    """
    client_number = models.CharField(max_length=48, unique=True)

    document_type = models.CharField(max_length=8, choices=DocumentType.choices())
    document_number = models.CharField(max_length=20)

    full_name = models.CharField(max_length=255)
    email = models.EmailField(blank=True, default="")
    phone = models.CharField(max_length=16, blank=True, default="")
    mobile = models.CharField(max_length=16, blank=True, default="")
    address = models.CharField(max_length=500, blank=True, default="")

    class Meta:
        db_table = "clients_client"
        constraints = [
            models.UniqueConstraint(
                fields=["tenant_id", "document_type", "document_number"],
                name="uq_client_tenant_document",
            ),
        ]
        indexes = [
            models.Index(fields=["tenant_id", "full_name"]),
            models.Index(fields=["tenant_id", "status"]),
        ]

    def __str__(self) -> str:
        return f"{self.full_name} ({self.document_type}: {self.document_number})"
