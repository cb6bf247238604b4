# pqr_core/system_settings/keys.py
MAX_APPOINTMENTS_PER_DAY = "MAX_APPOINTMENTS_PER_DAY"
DEFAULT_MAX_APPOINTMENTS_PER_DAY = 50
