# pqr_core/values/documents.py
from __future__ import annotations

import enum
import re
from dataclasses import dataclass

from pqr_core.common.errors import ValidationError


class DocumentType(enum.Enum):
    """
    Closed set of Colombian identity documents.
    Each member carries its own compiled pattern and length bounds.
    """

    CC = ("Cédula de ciudadanía", r"\d", 6, 10)
    CE = ("Cédula de extranjería", r"\d", 6, 12)
    TI = ("Tarjeta de identidad", r"\d", 8, 11)
    PAS = ("Pasaporte", r"[A-Z0-9]", 6, 12)
    NIT = ("Número de identificación tributaria", r"\d", 8, 15)

    def __init__(self, label: str, char_class: str, min_length: int, max_length: int):
        self.label = label
        self.min_length = min_length
        self.max_length = max_length
        self.pattern = re.compile(rf"^{char_class}{{{min_length},{max_length}}}$")

    @classmethod
    def parse(cls, raw: str | DocumentType) -> DocumentType:
        if isinstance(raw, DocumentType):
            return raw
        code = (raw or "").strip().upper()
        try:
            return cls[code]
        except KeyError:
            raise ValidationError("document_type", f"Unsupported document type: {raw!r}.")

    @classmethod
    def choices(cls) -> list[tuple[str, str]]:
        return [(m.name, m.label) for m in cls]


@dataclass(frozen=True)
class DocumentNumber:
    number: str
    document_type: DocumentType

    @classmethod
    def create(cls, number: str, document_type: str | DocumentType) -> DocumentNumber:
        value = (number or "").strip().upper()
        if not value:
            raise ValidationError("document_number", "Document number is required.")

        doc_type = DocumentType.parse(document_type)
        if not doc_type.pattern.match(value):
            raise ValidationError(
                "document_number",
                f"Invalid {doc_type.name} number: expected {doc_type.min_length}-{doc_type.max_length} characters.",
            )
        return cls(number=value, document_type=doc_type)

    @property
    def value(self) -> str:
        return self.number

    def __str__(self) -> str:
        return f"{self.document_type.name}: {self.number}"
