"""
Unit tests for project role resolution and the method authorizer.
"""

import pytest

from app.config.permissions_config import ROLE_METHODS, get_role_capabilities
from app.core.access import (
    ProjectRole, ResourceKind, ResourceRef, RoleSource, is_method_allowed, resolve_role
)
from app.core.exceptions import NotMember, ResolutionFailed, ResourceNotFound, Unauthenticated


def project_ref(project_id="proj-1"):
    return ResourceRef(kind=ResourceKind.PROJECT, id=project_id)


def model_ref(model_id="model-1"):
    return ResourceRef(kind=ResourceKind.DATA_MODEL, id=model_id)


def entity_ref(entity_id="entity-1"):
    return ResourceRef(kind=ResourceKind.ENTITY, id=entity_id)


# ---------------------------------------------------------------------------
# Role resolution
# ---------------------------------------------------------------------------


class TestResolveRole:

    def test_creator_is_admin_without_membership_row(self, db, users):
        assert not db.rows("project_members", project_id="proj-1", user_id="user-a")
        resolved = resolve_role(users["user-a"], project_ref(), db)
        assert resolved.role == ProjectRole.ADMIN
        assert resolved.source == RoleSource.CREATOR
        assert resolved.project_id == "proj-1"

    def test_membership_roles_are_returned(self, db, users):
        assert resolve_role(users["user-b"], project_ref(), db).role == ProjectRole.EDITOR
        viewer = resolve_role(users["user-c"], project_ref(), db)
        assert viewer.role == ProjectRole.VIEWER
        assert viewer.source == RoleSource.MEMBERSHIP

    def test_non_member_is_rejected(self, db, users):
        with pytest.raises(NotMember) as exc_info:
            resolve_role(users["user-d"], project_ref(), db)
        assert exc_info.value.project_id == "proj-1"
        assert exc_info.value.user_id == "user-d"

    def test_superuser_is_admin_on_every_project(self, db, users):
        for project_id in ("proj-1", "proj-2"):
            resolved = resolve_role(users["user-e"], project_ref(project_id), db)
            assert resolved.role == ProjectRole.ADMIN
            assert resolved.source == RoleSource.SUPERUSER

    def test_superuser_overrides_a_lower_membership(self, db, users):
        db.seed("project_members", project_id="proj-1", user_id="user-e", role="viewer")
        assert resolve_role(users["user-e"], project_ref(), db).role == ProjectRole.ADMIN

    def test_creator_overrides_a_lower_membership(self, db, users):
        db.seed("project_members", project_id="proj-2", user_id="user-d", role="viewer")
        assert resolve_role(users["user-d"], project_ref("proj-2"), db).role == ProjectRole.ADMIN

    def test_superuser_skips_membership_lookup(self, db, users):
        resolve_role(users["user-e"], project_ref(), db)
        assert ("project_members", "select") not in db.calls

    def test_missing_identity_is_unauthenticated(self, db):
        with pytest.raises(Unauthenticated):
            resolve_role(None, project_ref(), db)
        assert db.calls == []

    @pytest.mark.parametrize("user_id", ["user-a", "user-b", "user-c", "user-e"])
    def test_entity_and_model_resolve_like_their_project(self, db, users, user_id):
        user = users[user_id]
        direct = resolve_role(user, project_ref(), db)
        assert resolve_role(user, model_ref(), db) == direct
        assert resolve_role(user, entity_ref(), db) == direct

    def test_non_member_rejected_through_entity(self, db, users):
        with pytest.raises(NotMember):
            resolve_role(users["user-d"], entity_ref(), db)

    def test_missing_project(self, db, users):
        with pytest.raises(ResourceNotFound) as exc_info:
            resolve_role(users["user-a"], project_ref("nope"), db)
        assert exc_info.value.kind == "project"
        assert exc_info.value.detail == "Project not found"

    def test_missing_data_model(self, db, users):
        with pytest.raises(ResourceNotFound) as exc_info:
            resolve_role(users["user-a"], model_ref("nope"), db)
        assert exc_info.value.kind == "data_model"
        assert exc_info.value.detail == "Data model not found"

    def test_missing_entity(self, db, users):
        with pytest.raises(ResourceNotFound) as exc_info:
            resolve_role(users["user-a"], entity_ref("nope"), db)
        assert exc_info.value.kind == "entity"

    def test_dangling_chain_is_not_found(self, db, users):
        db.seed("entities", id="orphan", data_model_id="deleted-model", name="Orphan")
        db.seed("data_models", id="orphan-model", project_id="deleted-project", name="Orphan model")
        with pytest.raises(ResourceNotFound) as exc_info:
            resolve_role(users["user-a"], entity_ref("orphan"), db)
        assert exc_info.value.kind == "data_model"
        with pytest.raises(ResourceNotFound) as exc_info:
            resolve_role(users["user-a"], model_ref("orphan-model"), db)
        assert exc_info.value.kind == "project"

    def test_superuser_still_gets_not_found_for_missing_resource(self, db, users):
        with pytest.raises(ResourceNotFound):
            resolve_role(users["user-e"], entity_ref("nope"), db)

    def test_unrecognized_stored_role_is_returned_as_is(self, db, users):
        db.seed("project_members", project_id="proj-1", user_id="user-d", role="owner")
        resolved = resolve_role(users["user-d"], project_ref(), db)
        assert resolved.role == "owner"
        assert resolved.role_name == "owner"
        assert resolved.source == RoleSource.MEMBERSHIP
        assert not is_method_allowed("GET", resolved.role)

    def test_data_layer_failure_is_resolution_failed(self, db, users):
        db.fail_tables.add("project_members")
        with pytest.raises(ResolutionFailed) as exc_info:
            resolve_role(users["user-b"], project_ref(), db)
        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert exc_info.value.status_code == 500

    def test_resolution_is_repeatable_and_read_only(self, db, users):
        first = resolve_role(users["user-b"], entity_ref(), db)
        second = resolve_role(users["user-b"], entity_ref(), db)
        assert first == second
        assert all(op == "select" for _, op in db.calls)


# ---------------------------------------------------------------------------
# Method authorizer
# ---------------------------------------------------------------------------


EXPECTED = {
    "admin": {"GET": True, "POST": True, "PUT": True, "PATCH": True, "DELETE": True},
    "editor": {"GET": True, "POST": True, "PUT": True, "PATCH": True, "DELETE": False},
    "viewer": {"GET": True, "POST": False, "PUT": False, "PATCH": False, "DELETE": False},
}


class TestIsMethodAllowed:

    @pytest.mark.parametrize("role", ["admin", "editor", "viewer"])
    def test_capability_table(self, role):
        for method, allowed in EXPECTED[role].items():
            assert is_method_allowed(method, role) is allowed, f"{method} for {role}"

    def test_enum_roles_match_strings(self):
        assert is_method_allowed("DELETE", ProjectRole.ADMIN)
        assert not is_method_allowed("DELETE", ProjectRole.EDITOR)
        assert is_method_allowed("GET", ProjectRole.VIEWER)

    @pytest.mark.parametrize("role", [None, "", "owner", "superuser", "ADMIN", 3])
    def test_missing_or_unknown_role_is_denied(self, role):
        for method in ("GET", "POST", "PUT", "PATCH", "DELETE"):
            assert not is_method_allowed(method, role)

    def test_method_is_case_insensitive(self):
        assert is_method_allowed("patch", "editor")
        assert not is_method_allowed("delete", "editor")

    @pytest.mark.parametrize("method", [None, "", "OPTIONS", "HEAD", "TRACE"])
    def test_unknown_methods_are_denied(self, method):
        assert not is_method_allowed(method, "admin")

    def test_role_methods_cover_known_roles_only(self):
        assert set(ROLE_METHODS) == {"admin", "editor", "viewer"}


class TestRoleCapabilities:

    def test_editor(self):
        assert get_role_capabilities(ProjectRole.EDITOR) == {
            "can_read": True, "can_create": True, "can_update": True, "can_delete": False
        }

    def test_unknown_role_has_nothing(self):
        assert not any(get_role_capabilities("owner").values())
        assert not any(get_role_capabilities(None).values())
