# pqr_core/iam/catalog_defaults.py
"""
Forms and bundles every installation starts with.
"""
from pqr_core.iam.services.authorization import PermissionFlags

DEFAULT_FORMS = [
    # (code, name, module)
    ("ROLES", "Roles y permisos", "SECURITY"),
    ("FORMS", "Formularios", "SECURITY"),
    ("PERMISSIONS", "Permisos", "SECURITY"),
    ("USERS", "Usuarios", "SECURITY"),
    ("BRANCHES", "Sedes", "CONFIGURATION"),
    ("HOLIDAYS", "Festivos", "CONFIGURATION"),
    ("SETTINGS", "Parámetros del sistema", "CONFIGURATION"),
    ("APPOINTMENT_TYPES", "Tipos de cita", "CONFIGURATION"),
    ("CLIENTS", "Clientes", "OPERATIONS"),
    ("APPOINTMENTS", "Citas", "OPERATIONS"),
    ("NOTIFICATIONS", "Notificaciones", "OPERATIONS"),
    ("AUDIT", "Auditoría", "SECURITY"),
]

READ_ONLY = PermissionFlags(can_read=True)
READ_WRITE = PermissionFlags(can_read=True, can_create=True, can_update=True)
FULL_ACCESS = PermissionFlags(can_read=True, can_create=True, can_update=True, can_delete=True)

DEFAULT_BUNDLES = [READ_ONLY, READ_WRITE, FULL_ACCESS]
