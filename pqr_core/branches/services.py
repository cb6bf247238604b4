# pqr_core/branches/services.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from django.db import transaction
from rest_framework.exceptions import ValidationError

from pqr_core.branches.models import Branch
from pqr_core.values import Address, Email, PhoneNumber

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BranchUpdate:
    name: Optional[str] = None
    code: Optional[str] = None

    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    postal_code: Optional[str] = None

    phone: Optional[str] = None
    email: Optional[str] = None

    is_main: Optional[bool] = None
    color_primary: Optional[str] = None


def _clean_phone(raw: str) -> str:
    return PhoneNumber.create(raw).value if (raw or "").strip() else ""


def _clean_email(raw: str) -> str:
    return Email.create(raw).value if (raw or "").strip() else ""


def _clear_main(*, tenant_id: UUID, keep_id: UUID | None = None) -> None:
    qs = Branch.objects.filter(tenant_id=tenant_id, is_main=True)
    if keep_id:
        qs = qs.exclude(id=keep_id)
    qs.update(is_main=False)


class BranchService:
    @staticmethod
    @transaction.atomic
    def create(
        *,
        tenant_id: UUID,
        name: str,
        code: str,
        street: str,
        city: str,
        state: str,
        postal_code: str | None = None,
        phone: str = "",
        email: str = "",
        is_main: bool = False,
        color_primary: str = "",
    ) -> Branch:
        name = (name or "").strip()
        code = (code or "").strip().lower()
        if not name:
            raise ValidationError({"name": "This field is required."})
        if not code:
            raise ValidationError({"code": "This field is required."})
        if Branch.objects.filter(tenant_id=tenant_id, code=code).exists():
            raise ValidationError({"code": "A branch with this code already exists in this tenant."})

        address = Address.create(street, city, state, postal_code)

        if is_main:
            _clear_main(tenant_id=tenant_id)

        b = Branch.objects.create(
            tenant_id=tenant_id,
            name=name,
            code=code,
            street=address.street,
            city=address.city,
            state=address.state,
            postal_code=address.postal_code or "",
            phone=_clean_phone(phone),
            email=_clean_email(email),
            is_main=is_main,
            color_primary=color_primary or "",
        )
        logger.info("Branch %s created in tenant %s", b.code, tenant_id)
        return b

    @staticmethod
    @transaction.atomic
    def update(*, tenant_id: UUID, branch_id: UUID, patch: BranchUpdate) -> Branch:
        b = Branch.objects.select_for_update().get(id=branch_id, tenant_id=tenant_id)

        if patch.code is not None:
            code = patch.code.strip().lower()
            if Branch.objects.filter(tenant_id=tenant_id, code=code).exclude(id=b.id).exists():
                raise ValidationError({"code": "A branch with this code already exists in this tenant."})
            b.code = code

        if patch.name is not None:
            if not patch.name.strip():
                raise ValidationError({"name": "This field cannot be blank."})
            b.name = patch.name.strip()

        # address is validated as a unit, merging the patch over the current values
        if any(v is not None for v in (patch.street, patch.city, patch.state, patch.postal_code)):
            address = Address.create(
                patch.street if patch.street is not None else b.street,
                patch.city if patch.city is not None else b.city,
                patch.state if patch.state is not None else b.state,
                patch.postal_code if patch.postal_code is not None else b.postal_code,
            )
            b.street, b.city, b.state = address.street, address.city, address.state
            b.postal_code = address.postal_code or ""

        if patch.phone is not None:
            b.phone = _clean_phone(patch.phone)
        if patch.email is not None:
            b.email = _clean_email(patch.email)
        if patch.color_primary is not None:
            b.color_primary = patch.color_primary

        if patch.is_main is not None:
            if patch.is_main:
                _clear_main(tenant_id=tenant_id, keep_id=b.id)
            b.is_main = patch.is_main

        b.save()
        return b

    @staticmethod
    @transaction.atomic
    def deactivate(*, tenant_id: UUID, branch_id: UUID) -> Branch:
        b = Branch.objects.select_for_update().get(id=branch_id, tenant_id=tenant_id)
        if b.deactivate():
            b.save(update_fields=["status", "deactivated_at", "updated_at"])
            logger.info("Branch %s deactivated", b.code)
        return b

    @staticmethod
    @transaction.atomic
    def reactivate(*, tenant_id: UUID, branch_id: UUID) -> Branch:
        b = Branch.objects.select_for_update().get(id=branch_id, tenant_id=tenant_id)
        if b.reactivate():
            b.save(update_fields=["status", "deactivated_at", "updated_at"])
        return b
