import pytest

from ciam.core.client import Ciam
from ciam.core.exceptions import InvalidArgument, PermissionDenied
from ciam.core.result import ABSENT, Found

USER_ID = "0123456789abcdef01234567"
ROLE_ID = "abcdefabcdefabcdefabcdef"


class TestUsers:
    def test_get_user(self, ciam, http):
        http.queue(200, json_body={"_id": USER_ID, "name": "alice"})

        result = ciam.get_user(USER_ID)

        assert result == Found({"_id": USER_ID, "name": "alice"})
        assert http.calls[0].url == f"http://ciam.test/user/{USER_ID}"

    def test_missing_user_is_absent(self, ciam, http):
        http.queue(404, text="User not found")

        result = ciam.get_user("000000000000000000000000")

        assert result is ABSENT
        assert not result
        assert result.unwrap_or(None) is None

    def test_missing_permissions_on_get_user(self, ciam, http):
        http.queue(401, text="Missing permissions: [ciam.user.get]")
        with pytest.raises(PermissionDenied) as exc:
            ciam.get_user(USER_ID)
        assert exc.value.missing == ["ciam.user.get"]

    def test_invalid_id_sends_nothing(self, ciam, http):
        with pytest.raises(InvalidArgument, match="object id"):
            ciam.get_user("not-an-id")
        assert http.calls == []

    def test_get_self(self, ciam, http):
        http.queue(200, json_body={"_id": USER_ID})
        ciam.users.get_self()
        assert http.calls[0].url == "http://ciam.test/user"

    def test_create_user(self, ciam, http):
        http.queue(200, json_body={"_id": USER_ID})

        ciam.create_user("alice", roles=[ROLE_ID], permissions=["ciam.user.*"], discord_id="81440962496172032")

        assert http.calls[0].url.endswith("/user/create")
        assert http.calls[0].json == {
            "name": "alice",
            "roles": [ROLE_ID],
            "permissions": ["ciam.user.*"],
            "discordId": "81440962496172032",
        }

    def test_create_user_without_discord_id_omits_key(self, ciam, http):
        http.queue(200, json_body={"_id": USER_ID})
        ciam.create_user("alice")
        assert http.calls[0].json == {"name": "alice", "roles": [], "permissions": []}

    @pytest.mark.parametrize(
        "kwargs, field",
        [
            ({"name": ""}, "name"),
            ({"name": "alice", "roles": ["nope"]}, "roles"),
            ({"name": "alice", "permissions": ["bad flag"]}, "permissions"),
            ({"name": "alice", "discord_id": "abc"}, "discordId"),
        ],
    )
    def test_create_user_validation(self, ciam, http, kwargs, field):
        with pytest.raises(InvalidArgument) as exc:
            ciam.create_user(**kwargs)
        assert exc.value.field == field
        assert http.calls == []

    def test_update_user(self, ciam, http):
        user = {"_id": USER_ID, "name": "bob", "permissions": ["ciam.role.get"]}
        http.queue(200, json_body=user)

        ciam.users.update_user(user)

        assert http.calls[0].url.endswith("/user/update")
        assert http.calls[0].json == user

    def test_update_user_requires_id(self, ciam, http):
        with pytest.raises(InvalidArgument) as exc:
            ciam.users.update_user({"name": "bob"})
        assert exc.value.field == "_id"

    def test_delete_user_targets_user_endpoint(self, ciam, http):
        http.queue(204)
        ciam.delete_user(USER_ID)
        assert (http.calls[0].method, http.calls[0].url) == ("DELETE", f"http://ciam.test/user/{USER_ID}")

    def test_list_users_defaults(self, ciam, http):
        http.queue(200, json_body=[])
        assert ciam.list_users() == Found([])
        assert http.calls[0].params == {"skip": 0, "limit": 100}

    @pytest.mark.parametrize(
        "skip, limit, field",
        [(-1, 10, "skip"), (0, 0, "limit"), (0, 101, "limit"), (0, float("nan"), "limit")],
    )
    def test_list_users_bounds(self, ciam, http, skip, limit, field):
        with pytest.raises(InvalidArgument) as exc:
            ciam.list_users(skip, limit)
        assert exc.value.field == field
        assert http.calls == []


class TestRoles:
    def test_create_role(self, ciam, http):
        http.queue(200, json_body={"_id": ROLE_ID})

        result = ciam.create_role("admins", "Administrators", ["ciam.*"])

        assert result.unwrap() == {"_id": ROLE_ID}
        assert http.calls[0].json == {"name": "admins", "description": "Administrators", "permissions": ["ciam.*"]}

    def test_create_role_requires_description(self, ciam, http):
        with pytest.raises(InvalidArgument) as exc:
            ciam.create_role("admins", "")
        assert exc.value.field == "description"
        assert http.calls == []

    def test_get_update_delete_list(self, ciam, http):
        for _ in range(4):
            http.queue(200, json_body={"_id": ROLE_ID})

        ciam.get_role(ROLE_ID)
        ciam.roles.update_role({"_id": ROLE_ID, "permissions": ["ciam.role.get"]})
        ciam.delete_role(ROLE_ID)
        ciam.roles.list_roles(skip=5, limit=20)

        assert [(c.method, c.url.replace("http://ciam.test", "")) for c in http.calls] == [
            ("GET", f"/role/{ROLE_ID}"),
            ("POST", "/role/update"),
            ("DELETE", f"/role/{ROLE_ID}"),
            ("GET", "/role/list"),
        ]
        assert http.calls[3].params == {"skip": 5, "limit": 20}


class TestFacade:
    def test_reconfigure_returns_new_instance(self, ciam, http):
        other = ciam.reconfigure(token="second-token")

        assert other is not ciam
        assert ciam.client.token == "test-token"
        assert other.users.client is other.client

        http.queue(200, json_body={"_id": USER_ID})
        other.get_user(USER_ID)
        assert http.calls[0].headers["Authorization"] == "Bearer second-token"

    def test_from_settings(self):
        from ciam.config import CiamConfig

        instance = Ciam.from_settings(CiamConfig(token="t", base_url="https://ciam.example", timeout=3))

        assert instance.client.base_url == "https://ciam.example"
        assert instance.client.timeout == 3

    def test_validate_token(self, ciam, http):
        http.queue(200, text="OK")
        assert ciam.validate_token() is True

    def test_list_users_uses_default_page_size(self, ciam, http):
        from ciam.core.client.users import DEFAULT_PAGE_SIZE

        http.queue(200, json_body=[])
        ciam.list_users()
        assert http.calls[0].params["limit"] == DEFAULT_PAGE_SIZE
