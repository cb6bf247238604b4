import pytest

from pqr_core.common.errors import ValidationError
from pqr_core.system_settings.models import SettingValueType, SystemSetting
from pqr_core.system_settings.selectors import get_bool, get_int, get_json, get_str, get_value
from pqr_core.system_settings.services import SystemSettingService

pytestmark = pytest.mark.django_db


def test_upsert_creates_then_replaces(tenant):
    SystemSettingService.upsert(tenant_id=tenant.id, key="max_appointments_per_day", value="40", value_type="NUMBER")
    SystemSettingService.upsert(tenant_id=tenant.id, key="MAX_APPOINTMENTS_PER_DAY", value="35", value_type="NUMBER")

    assert SystemSetting.objects.filter(tenant_id=tenant.id).count() == 1
    assert get_int(tenant_id=tenant.id, key="MAX_APPOINTMENTS_PER_DAY") == 35


def test_typed_getters_fall_back_to_defaults(tenant):
    assert get_value(tenant_id=tenant.id, key="MISSING") is None
    assert get_int(tenant_id=tenant.id, key="MISSING", default=50) == 50
    assert get_str(tenant_id=tenant.id, key="MISSING", default="x") == "x"

    SystemSettingService.upsert(tenant_id=tenant.id, key="SEND_SMS", value="Yes", value_type=SettingValueType.BOOLEAN)
    SystemSettingService.upsert(
        tenant_id=tenant.id, key="BRAND", value='{"color": "#00A"}', value_type=SettingValueType.JSON
    )
    SystemSettingService.upsert(tenant_id=tenant.id, key="LABEL", value="Citas PQR")

    assert get_bool(tenant_id=tenant.id, key="send_sms") is True
    assert get_json(tenant_id=tenant.id, key="BRAND") == {"color": "#00A"}
    assert get_int(tenant_id=tenant.id, key="LABEL", default=7) == 7


@pytest.mark.parametrize(
    "value, value_type",
    [("many", "NUMBER"), ("maybe", "BOOLEAN"), ("{broken", "JSON"), ("1", "DATE")],
)
def test_values_must_parse_as_their_type(tenant, value, value_type):
    with pytest.raises(ValidationError):
        SystemSettingService.upsert(tenant_id=tenant.id, key="K", value=value, value_type=value_type)


def test_deactivated_setting_is_ignored_until_upserted_again(tenant):
    SystemSettingService.upsert(tenant_id=tenant.id, key="LIMIT", value="3", value_type="NUMBER")
    SystemSettingService.deactivate(tenant_id=tenant.id, key="limit")
    assert get_int(tenant_id=tenant.id, key="LIMIT", default=9) == 9

    SystemSettingService.upsert(tenant_id=tenant.id, key="LIMIT", value="4", value_type="NUMBER")
    assert get_int(tenant_id=tenant.id, key="LIMIT", default=9) == 4


def test_settings_api_masks_encrypted_values(api_client, headers):
    res = api_client.post(
        "/api/v1/settings/",
        {"key": "sms_api_key", "value": "s3cr3t", "is_encrypted": True},
        format="json",
        **headers,
    )
    assert res.status_code == 200
    assert res.json()["key"] == "SMS_API_KEY"
    assert res.json()["value"] == "***"

    res = api_client.get("/api/v1/settings/SMS_API_KEY/", **headers)
    assert res.json()["value"] == "***"

    res = api_client.post("/api/v1/settings/", {"key": "X", "value": "abc", "value_type": "NUMBER"}, format="json", **headers)
    assert res.status_code == 400

    res = api_client.delete("/api/v1/settings/sms_api_key/", **headers)
    assert res.json()["status"] == "INACTIVE"
