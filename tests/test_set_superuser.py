from types import SimpleNamespace

import pytest

from app.config import settings
from app.scripts import set_superuser as script


def fake_admin_client(found=True):
    updates = []

    def update_user_by_id(user_id, attributes):
        updates.append((user_id, attributes))
        if not found:
            return SimpleNamespace(user=None)
        return SimpleNamespace(user=SimpleNamespace(id=user_id, app_metadata=attributes["app_metadata"]))

    client = SimpleNamespace(auth=SimpleNamespace(admin=SimpleNamespace(update_user_by_id=update_user_by_id)))
    return client, updates


def test_grant_and_revoke():
    client, updates = fake_admin_client()
    assert script.set_superuser(client, "user-b", True) is True
    assert script.set_superuser(client, "user-b", False) is False
    assert updates == [
        ("user-b", {"app_metadata": {"is_superuser": True}}),
        ("user-b", {"app_metadata": {"is_superuser": False}}),
    ]


def test_unknown_user():
    client, _ = fake_admin_client(found=False)
    with pytest.raises(ValueError):
        script.set_superuser(client, "ghost", True)


def test_main_requires_service_role_key(monkeypatch):
    monkeypatch.setattr(settings, "supabase_service_role_key", None)
    assert script.main(["user-b"]) == 1


def test_main_revoke(monkeypatch):
    client, updates = fake_admin_client()
    monkeypatch.setattr(settings, "supabase_service_role_key", "service-key")
    monkeypatch.setattr(script.SupabaseClient, "get_service_client", classmethod(lambda cls: client))
    assert script.main(["user-b", "--revoke"]) == 0
    assert updates == [("user-b", {"app_metadata": {"is_superuser": False}})]
