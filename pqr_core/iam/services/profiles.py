# pqr_core/iam/services/profiles.py
from __future__ import annotations

import logging
from typing import Optional
from uuid import UUID

from django.contrib.auth import get_user_model
from django.db import transaction
from rest_framework.exceptions import ValidationError

from pqr_core.common.errors import NotFoundError
from pqr_core.iam.models import UserProfile
from pqr_core.tenants.models import Tenant
from pqr_core.values import DocumentNumber, PhoneNumber

logger = logging.getLogger(__name__)


class UserProfileService:
    @staticmethod
    @transaction.atomic
    def create(
        *,
        user_id: int,
        tenant_id: UUID,
        document_type: Optional[str] = None,
        document_number: Optional[str] = None,
        phone: Optional[str] = None,
    ) -> UserProfile:
        if not get_user_model().objects.filter(id=user_id).exists():
            raise NotFoundError("User", user_id)
        if not Tenant.objects.filter(id=tenant_id).exists():
            raise NotFoundError("Tenant", tenant_id)
        if UserProfile.objects.filter(user_id=user_id).exists():
            raise ValidationError({"user_id": "This user already has a profile."})

        doc_type, doc_number = "", ""
        if document_number:
            doc = DocumentNumber.create(document_number, document_type or "")
            doc_type, doc_number = doc.document_type.name, doc.value

        profile = UserProfile.objects.create(
            user_id=user_id,
            tenant_id=tenant_id,
            document_type=doc_type,
            document_number=doc_number,
            phone=PhoneNumber.create(phone).value if phone else "",
        )
        logger.info("Profile created for user %s in tenant %s", user_id, tenant_id)
        return profile

    @staticmethod
    @transaction.atomic
    def deactivate(*, tenant_id: UUID, user_profile_id: UUID) -> UserProfile:
        profile = UserProfile.objects.select_for_update().get(id=user_profile_id, tenant_id=tenant_id)
        if profile.deactivate():
            profile.save(update_fields=["status", "deactivated_at", "updated_at"])
        return profile
